"""
Store wiring

Services receive stores through their constructors; this module only
decides which implementation backs them.
"""
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import async_sessionmaker

from eventfinder.data.seed_events import demo_user, sample_events
from eventfinder.stores.interfaces import BookingStore, EventStore, SessionStore, UserStore
from eventfinder.stores.memory_store import (
    InMemoryBookingStore,
    InMemoryEventStore,
    InMemorySessionStore,
    InMemoryUserStore,
)
from eventfinder.stores.sql_store import SqlBookingStore, SqlEventStore, SqlUserStore


@dataclass
class Stores:
    events: EventStore
    bookings: BookingStore
    users: UserStore
    sessions: SessionStore


def build_memory_stores(seed: bool = False) -> Stores:
    """In-memory stores, optionally preloaded with the sample catalog"""
    return Stores(
        events=InMemoryEventStore(sample_events() if seed else None),
        bookings=InMemoryBookingStore(),
        users=InMemoryUserStore([demo_user()] if seed else None),
        sessions=InMemorySessionStore(),
    )


def build_sql_stores(session_factory: async_sessionmaker) -> Stores:
    # Sessions are short-lived and stay in process memory for both backends
    return Stores(
        events=SqlEventStore(session_factory),
        bookings=SqlBookingStore(session_factory),
        users=SqlUserStore(session_factory),
        sessions=InMemorySessionStore(),
    )


__all__ = [
    "Stores",
    "build_memory_stores",
    "build_sql_stores",
    "EventStore",
    "BookingStore",
    "UserStore",
    "SessionStore",
]
