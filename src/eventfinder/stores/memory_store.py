"""In-memory store implementations.

Backed by plain lists with linear lookups. Every read and write goes
through a deep copy so callers never hold a reference into the store.
"""
import datetime as dt
import secrets
from typing import Any, Dict, Iterable, List, Optional

from eventfinder.schemas.booking import BookingStatus, Registration
from eventfinder.schemas.event import ALL_CATEGORIES, Event
from eventfinder.schemas.user import UserRecord
from eventfinder.stores.interfaces import BookingStore, EventStore, SessionStore, UserStore


class InMemoryEventStore(EventStore):
    """Event store holding events in a list."""

    def __init__(self, events: Optional[Iterable[Event]] = None) -> None:
        self._events: List[Event] = [e.model_copy(deep=True) for e in events or []]

    def _find(self, event_id: str) -> Optional[int]:
        for index, event in enumerate(self._events):
            if event.id == event_id:
                return index
        return None

    async def list_events(self) -> List[Event]:
        return [e.model_copy(deep=True) for e in self._events]

    async def get_event(self, event_id: str) -> Optional[Event]:
        index = self._find(event_id)
        if index is None:
            return None
        return self._events[index].model_copy(deep=True)

    async def list_by_category(self, category: str) -> List[Event]:
        if category == ALL_CATEGORIES:
            return await self.list_events()
        return [e.model_copy(deep=True) for e in self._events if e.category.value == category]

    async def list_featured(self) -> List[Event]:
        return [e.model_copy(deep=True) for e in self._events if e.featured]

    async def add_event(self, event: Event) -> Event:
        self._events.append(event.model_copy(deep=True))
        return event.model_copy(deep=True)

    async def update_event(self, event_id: str, changes: Dict[str, Any]) -> Optional[Event]:
        index = self._find(event_id)
        if index is None:
            return None
        # Re-validate so nested dicts become models and invariants hold
        updated = Event.model_validate({**self._events[index].model_dump(), **changes})
        self._events[index] = updated
        return updated.model_copy(deep=True)

    async def delete_event(self, event_id: str) -> bool:
        index = self._find(event_id)
        if index is None:
            return False
        del self._events[index]
        return True

    async def increment_registered(self, event_id: str, count: int) -> Optional[Event]:
        index = self._find(event_id)
        if index is None:
            return None
        event = self._events[index]
        if event.registered + count > event.capacity:
            return None
        self._events[index] = event.model_copy(update={"registered": event.registered + count})
        return self._events[index].model_copy(deep=True)

    async def decrement_registered(self, event_id: str, count: int) -> Optional[Event]:
        index = self._find(event_id)
        if index is None:
            return None
        event = self._events[index]
        self._events[index] = event.model_copy(update={"registered": max(0, event.registered - count)})
        return self._events[index].model_copy(deep=True)


class InMemoryBookingStore(BookingStore):
    """Registration store holding bookings in a list."""

    def __init__(self, bookings: Optional[Iterable[Registration]] = None) -> None:
        self._bookings: List[Registration] = [b.model_copy(deep=True) for b in bookings or []]

    def _find(self, booking_id: str) -> Optional[int]:
        for index, booking in enumerate(self._bookings):
            if booking.id == booking_id:
                return index
        return None

    async def list_by_user(self, user_id: str) -> List[Registration]:
        return [b.model_copy(deep=True) for b in self._bookings if b.user_id == user_id]

    async def list_by_event(self, event_id: str) -> List[Registration]:
        return [b.model_copy(deep=True) for b in self._bookings if b.event_id == event_id]

    async def get_booking(self, booking_id: str) -> Optional[Registration]:
        index = self._find(booking_id)
        if index is None:
            return None
        return self._bookings[index].model_copy(deep=True)

    async def add_booking(self, booking: Registration) -> Registration:
        self._bookings.append(booking.model_copy(deep=True))
        return booking.model_copy(deep=True)

    async def update_booking(self, booking_id: str, changes: Dict[str, Any]) -> Optional[Registration]:
        index = self._find(booking_id)
        if index is None:
            return None
        updated = Registration.model_validate({**self._bookings[index].model_dump(), **changes})
        self._bookings[index] = updated
        return updated.model_copy(deep=True)

    async def delete_booking(self, booking_id: str) -> bool:
        index = self._find(booking_id)
        if index is None:
            return False
        del self._bookings[index]
        return True

    async def list_pending_before(self, cutoff: dt.datetime) -> List[Registration]:
        return [
            b.model_copy(deep=True)
            for b in self._bookings
            if b.status == BookingStatus.PENDING and b.created_at < cutoff
        ]


class InMemoryUserStore(UserStore):

    def __init__(self, users: Optional[Iterable[UserRecord]] = None) -> None:
        self._users: List[UserRecord] = [u.model_copy(deep=True) for u in users or []]

    def _find(self, user_id: str) -> Optional[int]:
        for index, user in enumerate(self._users):
            if user.id == user_id:
                return index
        return None

    async def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        index = self._find(user_id)
        if index is None:
            return None
        return self._users[index].model_copy(deep=True)

    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        wanted = email.strip().lower()
        for user in self._users:
            if user.email.lower() == wanted:
                return user.model_copy(deep=True)
        return None

    async def add_user(self, user: UserRecord) -> UserRecord:
        self._users.append(user.model_copy(deep=True))
        return user.model_copy(deep=True)

    async def update_user(self, user_id: str, changes: Dict[str, Any]) -> Optional[UserRecord]:
        index = self._find(user_id)
        if index is None:
            return None
        updated = UserRecord.model_validate({**self._users[index].model_dump(), **changes})
        self._users[index] = updated
        return updated.model_copy(deep=True)


class InMemorySessionStore(SessionStore):

    def __init__(self) -> None:
        self._sessions: Dict[str, str] = {}

    async def create_session(self, user_id: str) -> str:
        token = secrets.token_urlsafe(32)
        self._sessions[token] = user_id
        return token

    async def get_user_id(self, token: str) -> Optional[str]:
        return self._sessions.get(token)

    async def delete_session(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None
