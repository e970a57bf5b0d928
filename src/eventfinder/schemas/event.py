"""
Pydantic schemas for Event resources
"""
import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

# Sentinels meaning "no restriction" in catalog filters
ALL_CATEGORIES = "All Events"
ALL_CITIES = "All Cities"


class EventCategory(str, Enum):
    """Fixed set of event categories"""
    TECHNOLOGY = "Technology"
    BUSINESS = "Business"
    MUSIC = "Music"
    ARTS_CULTURE = "Arts & Culture"
    SPORTS = "Sports"
    HEALTH_WELLNESS = "Health & Wellness"
    FOOD_DRINK = "Food & Drink"
    ENTERTAINMENT = "Entertainment"
    EDUCATION = "Education"


class EventStatus(str, Enum):
    """Lifecycle status derived from the event dates and the current time"""
    UPCOMING = "upcoming"
    TODAY = "today"
    COMPLETED = "completed"


class AvailabilityLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Organizer(BaseModel):
    name: str = "Event Organizer"
    email: str = "organizer@example.com"
    verified: bool = False


class ScheduleItem(BaseModel):
    day: str
    title: str
    time: str = ""


class Availability(BaseModel):
    available: int
    percentage: float
    status: AvailabilityLevel


class Event(BaseModel):
    """Catalog event as held by the stores"""
    id: str
    title: str
    short_description: str = ""
    description: str = ""
    category: EventCategory
    date: dt.date = Field(..., description="Start date")
    time: str = Field("", description="Start time, HH:MM")
    end_date: dt.date
    end_time: str = ""
    venue: str
    address: str = ""
    city: str
    country: str = "India"
    image: str = ""
    price: float = Field(0, ge=0, description="Ticket price, 0 for free events")
    currency: str = "INR"
    capacity: int = Field(..., ge=1)
    registered: int = Field(0, ge=0)
    organizer: Organizer = Field(default_factory=Organizer)
    tags: List[str] = Field(default_factory=list)
    featured: bool = False
    highlights: List[str] = Field(default_factory=list)
    schedule: List[ScheduleItem] = Field(default_factory=list)
    created_at: dt.datetime = Field(default_factory=dt.datetime.utcnow)

    class Config:
        from_attributes = True

    @model_validator(mode="after")
    def check_registered_within_capacity(self):
        if self.registered > self.capacity:
            raise ValueError("registered cannot exceed capacity")
        return self

    @property
    def is_free(self) -> bool:
        return self.price == 0


class EventCreate(BaseModel):
    """
    Organizer submission from the multi-step create form.

    Fields are deliberately loose here; the form rules in
    services/event_form.py decide what is acceptable and report
    per-field messages.
    """
    title: str = ""
    short_description: str = ""
    description: str = ""
    category: Optional[str] = None
    date: Optional[dt.date] = None
    time: str = ""
    end_date: Optional[dt.date] = None
    end_time: str = ""
    venue: str = ""
    address: str = ""
    city: str = ""
    country: Optional[str] = None
    image: Optional[str] = None
    price: float = 0
    currency: Optional[str] = None
    capacity: Optional[int] = None
    organizer: Optional[Organizer] = None
    tags: List[str] = Field(default_factory=list)
    featured: bool = False
    highlights: List[str] = Field(default_factory=list)
    schedule: List[ScheduleItem] = Field(default_factory=list)

    @field_validator('tags', mode='before')
    @classmethod
    def split_tags(cls, v):
        # The form sends tags as one comma-separated string
        if isinstance(v, str):
            return [t.strip() for t in v.split(',') if t.strip()]
        return v

    @field_validator('highlights')
    @classmethod
    def drop_blank_highlights(cls, v: List[str]) -> List[str]:
        return [h for h in v if h.strip()]


class EventUpdate(BaseModel):
    """Partial update; `registered` is owned by the booking workflow"""
    title: Optional[str] = None
    short_description: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    end_date: Optional[dt.date] = None
    end_time: Optional[str] = None
    venue: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = None
    currency: Optional[str] = None
    capacity: Optional[int] = None
    organizer: Optional[Organizer] = None
    tags: Optional[List[str]] = None
    featured: Optional[bool] = None
    highlights: Optional[List[str]] = None
    schedule: Optional[List[ScheduleItem]] = None

    @field_validator('tags', mode='before')
    @classmethod
    def split_tags(cls, v):
        if isinstance(v, str):
            return [t.strip() for t in v.split(',') if t.strip()]
        return v


class EventResponse(Event):
    """Event plus the values derived at read time"""
    availability: Availability
    status: EventStatus
    days_until: str
    price_label: str

    @classmethod
    def from_event(cls, event: Event, now: Optional[dt.datetime] = None) -> "EventResponse":
        from eventfinder.services.event_filters import (
            days_until_label,
            format_currency,
            get_availability,
            get_event_status,
        )

        now = now or dt.datetime.now()
        return cls(
            **event.model_dump(),
            availability=get_availability(event),
            status=get_event_status(event, now),
            days_until=days_until_label(event.date, now),
            price_label=format_currency(event.price),
        )


class EventFormValidation(BaseModel):
    step: int
    valid: bool
    errors: dict = Field(default_factory=dict)
