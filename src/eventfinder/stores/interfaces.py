"""Store interfaces (repository pattern).

Stores must be swappable and return domain schemas. Services depend only
on these interfaces; the app factory decides which implementation to inject.
"""
import datetime as dt
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from eventfinder.schemas.booking import Registration
from eventfinder.schemas.event import Event
from eventfinder.schemas.user import UserRecord


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    async def list_events(self) -> List[Event]:
        """Return all events in insertion order."""
        ...

    @abstractmethod
    async def get_event(self, event_id: str) -> Optional[Event]:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    async def list_by_category(self, category: str) -> List[Event]:
        """Return events of one category; "All Events" returns everything."""
        ...

    @abstractmethod
    async def list_featured(self) -> List[Event]:
        ...

    @abstractmethod
    async def add_event(self, event: Event) -> Event:
        ...

    @abstractmethod
    async def update_event(self, event_id: str, changes: Dict[str, Any]) -> Optional[Event]:
        """Apply field changes; None if the event does not exist."""
        ...

    @abstractmethod
    async def delete_event(self, event_id: str) -> bool:
        """Return True if an event was removed."""
        ...

    @abstractmethod
    async def increment_registered(self, event_id: str, count: int) -> Optional[Event]:
        """Add `count` to registered.

        Returns None (and changes nothing) if the event is missing or the
        increment would push registered past capacity.
        """
        ...

    @abstractmethod
    async def decrement_registered(self, event_id: str, count: int) -> Optional[Event]:
        """Subtract `count` from registered, floored at zero."""
        ...


class BookingStore(ABC):
    """Interface for registration persistence operations."""

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[Registration]:
        ...

    @abstractmethod
    async def list_by_event(self, event_id: str) -> List[Registration]:
        ...

    @abstractmethod
    async def get_booking(self, booking_id: str) -> Optional[Registration]:
        ...

    @abstractmethod
    async def add_booking(self, booking: Registration) -> Registration:
        ...

    @abstractmethod
    async def update_booking(self, booking_id: str, changes: Dict[str, Any]) -> Optional[Registration]:
        ...

    @abstractmethod
    async def delete_booking(self, booking_id: str) -> bool:
        ...

    @abstractmethod
    async def list_pending_before(self, cutoff: dt.datetime) -> List[Registration]:
        """Return pending bookings created before `cutoff`."""
        ...


class UserStore(ABC):
    """Interface for user persistence operations."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        """Case-insensitive email lookup."""
        ...

    @abstractmethod
    async def add_user(self, user: UserRecord) -> UserRecord:
        ...

    @abstractmethod
    async def update_user(self, user_id: str, changes: Dict[str, Any]) -> Optional[UserRecord]:
        ...


class SessionStore(ABC):
    """Maps opaque session tokens to user IDs (the "current user")."""

    @abstractmethod
    async def create_session(self, user_id: str) -> str:
        ...

    @abstractmethod
    async def get_user_id(self, token: str) -> Optional[str]:
        ...

    @abstractmethod
    async def delete_session(self, token: str) -> bool:
        ...
