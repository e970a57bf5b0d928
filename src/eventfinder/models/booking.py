"""
Booking table - registrations with a snapshot of the event display fields
"""
from datetime import datetime

from sqlalchemy import JSON, Column, Date, DateTime, Enum, Float, Integer, String

from eventfinder.core.database import Base
from eventfinder.schemas.booking import BookingStatus, PaymentStatus


class BookingRow(Base):
    __tablename__ = "bookings"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), unique=True, nullable=False, index=True)
    # Plain references: bookings outlive deleted events, as in the catalog
    event_id = Column(String(64), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    event_title = Column(String(500), nullable=False, default="")
    event_date = Column(Date, nullable=True)
    event_image = Column(String(1000), nullable=False, default="")
    event_venue = Column(String(500), nullable=False, default="")
    event_city = Column(String(100), nullable=False, default="")
    tickets = Column(Integer, nullable=False)
    total_amount = Column(Float, nullable=False)
    payment_method = Column(String(50), nullable=False, default="card")
    attendee_names = Column(JSON, nullable=False, default=list)
    email = Column(String(255), nullable=False, default="")
    phone = Column(String(32), nullable=False, default="")
    status = Column(Enum(BookingStatus), nullable=False, default=BookingStatus.PENDING, index=True)
    payment_status = Column(Enum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    ticket_code = Column(String(32), nullable=False)
    order_id = Column(String(64), nullable=True)
    payment_id = Column(String(255), nullable=True)

    def __repr__(self):
        return (f"<BookingRow(id={self.id}, event_id={self.event_id}, user_id={self.user_id}, "
                f"status='{self.status.value}', tickets={self.tickets})>")
