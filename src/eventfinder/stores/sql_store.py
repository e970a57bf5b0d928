"""SQLAlchemy implementations of the store interfaces.

Each call opens its own session from the injected session factory and
converts ORM rows to domain schemas before returning.
"""
import datetime as dt
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel
from sqlalchemy import case, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker

from eventfinder.core.exceptions import DuplicateEmailError
from eventfinder.models import BookingRow, EventRow, UserRow
from eventfinder.schemas.booking import BookingStatus, Registration
from eventfinder.schemas.event import ALL_CATEGORIES, Event
from eventfinder.schemas.user import UserRecord
from eventfinder.stores.interfaces import BookingStore, EventStore, UserStore


def _from_row(row, schema: Type[BaseModel]):
    return schema.model_validate({name: getattr(row, name) for name in schema.model_fields})


def _event_values(event: Event) -> Dict[str, Any]:
    values = event.model_dump()
    values["category"] = event.category.value
    return values


def _user_values(user: UserRecord) -> Dict[str, Any]:
    values = user.model_dump()
    values["email"] = user.email.strip().lower()
    return values


class SqlEventStore(EventStore):
    """Event store on the `events` table."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def _select(self, *criteria) -> List[Event]:
        async with self._session_factory() as session:
            query = select(EventRow).where(*criteria).order_by(EventRow.pk)
            result = await session.execute(query)
            return [_from_row(row, Event) for row in result.scalars().all()]

    async def list_events(self) -> List[Event]:
        return await self._select()

    async def get_event(self, event_id: str) -> Optional[Event]:
        async with self._session_factory() as session:
            result = await session.execute(select(EventRow).where(EventRow.id == event_id))
            row = result.scalar_one_or_none()
            return _from_row(row, Event) if row else None

    async def list_by_category(self, category: str) -> List[Event]:
        if category == ALL_CATEGORIES:
            return await self.list_events()
        return await self._select(EventRow.category == category)

    async def list_featured(self) -> List[Event]:
        return await self._select(EventRow.featured.is_(True))

    async def add_event(self, event: Event) -> Event:
        async with self._session_factory() as session:
            async with session.begin():
                session.add(EventRow(**_event_values(event)))
        return event

    async def update_event(self, event_id: str, changes: Dict[str, Any]) -> Optional[Event]:
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    select(EventRow).where(EventRow.id == event_id).with_for_update()
                )
                row = result.scalar_one_or_none()
                if row is None:
                    return None
                updated = Event.model_validate({**_from_row(row, Event).model_dump(), **changes})
                for name, value in _event_values(updated).items():
                    setattr(row, name, value)
        return updated

    async def delete_event(self, event_id: str) -> bool:
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(delete(EventRow).where(EventRow.id == event_id))
        return result.rowcount > 0

    async def increment_registered(self, event_id: str, count: int) -> Optional[Event]:
        # Conditional UPDATE keeps registered <= capacity without a read-modify-write
        stmt = (
            update(EventRow)
            .where(EventRow.id == event_id, EventRow.registered + count <= EventRow.capacity)
            .values(registered=EventRow.registered + count)
        )
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_event(event_id)

    async def decrement_registered(self, event_id: str, count: int) -> Optional[Event]:
        remaining = EventRow.registered - count
        stmt = (
            update(EventRow)
            .where(EventRow.id == event_id)
            .values(registered=case((remaining < 0, 0), else_=remaining))
        )
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_event(event_id)


class SqlBookingStore(BookingStore):
    """Registration store on the `bookings` table."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def _select(self, *criteria) -> List[Registration]:
        async with self._session_factory() as session:
            query = select(BookingRow).where(*criteria).order_by(BookingRow.pk)
            result = await session.execute(query)
            return [_from_row(row, Registration) for row in result.scalars().all()]

    async def list_by_user(self, user_id: str) -> List[Registration]:
        return await self._select(BookingRow.user_id == user_id)

    async def list_by_event(self, event_id: str) -> List[Registration]:
        return await self._select(BookingRow.event_id == event_id)

    async def get_booking(self, booking_id: str) -> Optional[Registration]:
        bookings = await self._select(BookingRow.id == booking_id)
        return bookings[0] if bookings else None

    async def add_booking(self, booking: Registration) -> Registration:
        async with self._session_factory() as session:
            async with session.begin():
                session.add(BookingRow(**booking.model_dump()))
        return booking

    async def update_booking(self, booking_id: str, changes: Dict[str, Any]) -> Optional[Registration]:
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    select(BookingRow).where(BookingRow.id == booking_id).with_for_update()
                )
                row = result.scalar_one_or_none()
                if row is None:
                    return None
                updated = Registration.model_validate({**_from_row(row, Registration).model_dump(), **changes})
                for name, value in updated.model_dump().items():
                    setattr(row, name, value)
        return updated

    async def delete_booking(self, booking_id: str) -> bool:
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(delete(BookingRow).where(BookingRow.id == booking_id))
        return result.rowcount > 0

    async def list_pending_before(self, cutoff: dt.datetime) -> List[Registration]:
        return await self._select(
            BookingRow.status == BookingStatus.PENDING,
            BookingRow.created_at < cutoff,
        )


class SqlUserStore(UserStore):
    """User store on the `users` table."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def _get(self, *criteria) -> Optional[UserRecord]:
        async with self._session_factory() as session:
            result = await session.execute(select(UserRow).where(*criteria))
            row = result.scalar_one_or_none()
            return _from_row(row, UserRecord) if row else None

    async def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        return await self._get(UserRow.id == user_id)

    async def get_by_email(self, email: str) -> Optional[UserRecord]:
        return await self._get(UserRow.email == email.strip().lower())

    async def add_user(self, user: UserRecord) -> UserRecord:
        values = _user_values(user)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(UserRow(**values))
        except IntegrityError as e:
            # Unique email index; a concurrent registration won the race
            raise DuplicateEmailError(values["email"]) from e
        return UserRecord.model_validate(values)

    async def update_user(self, user_id: str, changes: Dict[str, Any]) -> Optional[UserRecord]:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(select(UserRow).where(UserRow.id == user_id))
                    row = result.scalar_one_or_none()
                    if row is None:
                        return None
                    updated = UserRecord.model_validate({**_from_row(row, UserRecord).model_dump(), **changes})
                    values = _user_values(updated)
                    for name, value in values.items():
                        setattr(row, name, value)
        except IntegrityError as e:
            raise DuplicateEmailError(values["email"]) from e
        return UserRecord.model_validate(values)
