"""
Pydantic schemas for domain objects and API request/response validation
"""
from eventfinder.schemas.common import ApiResponse
from eventfinder.schemas.event import (
    ALL_CATEGORIES,
    ALL_CITIES,
    Availability,
    AvailabilityLevel,
    Event,
    EventCategory,
    EventCreate,
    EventFormValidation,
    EventResponse,
    EventStatus,
    EventUpdate,
    Organizer,
    ScheduleItem,
)
from eventfinder.schemas.filters import CatalogFilterOptions, EventFilters, PriceRange, SortKey
from eventfinder.schemas.booking import (
    BookingCreate,
    BookingStatus,
    PaymentOrder,
    PaymentOrderRequest,
    PaymentStatus,
    PaymentVerifyRequest,
    Registration,
    RegistrationCheck,
)
from eventfinder.schemas.user import LoginRequest, LoginResponse, User, UserCreate, UserRecord, UserUpdate

__all__ = [
    "ApiResponse",
    # Events
    "ALL_CATEGORIES",
    "ALL_CITIES",
    "Availability",
    "AvailabilityLevel",
    "Event",
    "EventCategory",
    "EventCreate",
    "EventFormValidation",
    "EventResponse",
    "EventStatus",
    "EventUpdate",
    "Organizer",
    "ScheduleItem",
    # Filters
    "CatalogFilterOptions",
    "EventFilters",
    "PriceRange",
    "SortKey",
    # Bookings
    "BookingCreate",
    "BookingStatus",
    "PaymentOrder",
    "PaymentOrderRequest",
    "PaymentStatus",
    "PaymentVerifyRequest",
    "Registration",
    "RegistrationCheck",
    # Users
    "LoginRequest",
    "LoginResponse",
    "User",
    "UserCreate",
    "UserRecord",
    "UserUpdate",
]
