"""Pydantic schemas for Booking (registration) resources"""
import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class BookingStatus(str, Enum):
    """Enum for booking status"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class Registration(BaseModel):
    """A user's claim on tickets for one event, with an event snapshot"""
    id: str
    event_id: str
    user_id: str
    event_title: str = ""
    event_date: Optional[dt.date] = None
    event_image: str = ""
    event_venue: str = ""
    event_city: str = ""
    tickets: int = Field(1, ge=1)
    total_amount: float = Field(0, ge=0)
    payment_method: str = "card"
    attendee_names: List[str] = Field(default_factory=list)
    email: str = ""
    phone: str = ""
    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: dt.datetime = Field(default_factory=dt.datetime.utcnow)
    ticket_code: str
    order_id: Optional[str] = None
    payment_id: Optional[str] = None

    class Config:
        from_attributes = True

    @property
    def is_confirmed(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    @property
    def is_pending(self) -> bool:
        return self.status == BookingStatus.PENDING

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.CANCELLED


class BookingCreate(BaseModel):
    event_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    tickets: int = Field(..., ge=1)
    total_amount: Optional[float] = Field(None, ge=0, description="Overrides price x tickets when positive")
    payment_method: str = Field("card", max_length=50)
    attendee_names: List[str] = Field(default_factory=list)
    email: str = ""
    phone: str = ""


class PaymentOrderRequest(BaseModel):
    booking_id: str = Field(..., min_length=1)
    amount: Optional[float] = Field(None, gt=0, description="Defaults to the booking total")


class PaymentOrder(BaseModel):
    """Simulated gateway order"""
    order_id: str
    amount: int = Field(..., description="Amount in minor units (paise)")
    currency: str
    booking_id: str
    key_id: str
    status: str = "created"
    created_at: dt.datetime = Field(default_factory=dt.datetime.utcnow)


class PaymentVerifyRequest(BaseModel):
    booking_id: str = Field(..., min_length=1)
    payment_id: str = Field(..., min_length=1, max_length=255)
    order_id: Optional[str] = None
    signature: Optional[str] = None


class RegistrationCheck(BaseModel):
    event_id: str
    user_id: str
    registered: bool
