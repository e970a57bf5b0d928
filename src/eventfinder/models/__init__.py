"""
SQLAlchemy models for the SQL storage backend

Import all models here to register them with Base.metadata.
"""
from eventfinder.core.database import Base
from eventfinder.models.event import EventRow
from eventfinder.models.booking import BookingRow
from eventfinder.models.user import UserRow

__all__ = [
    "Base",
    "EventRow",
    "BookingRow",
    "UserRow",
]
