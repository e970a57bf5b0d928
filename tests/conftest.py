import datetime as dt
import os

# Settings are read at import time; pin them before eventfinder is imported
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BOOKING_EXPIRY_ENABLED"] = "false"
os.environ["LOG_JSON"] = "false"
os.environ.pop("PAYMENT_KEY_SECRET", None)

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from eventfinder.main import create_app
from eventfinder.middleware.rate_limiter import limiter
from eventfinder.schemas import Event, EventCategory
from eventfinder.services import AuthService, BookingService, PaymentGateway
from eventfinder.stores import build_memory_stores
from eventfinder.stores.memory_store import (
    InMemoryBookingStore,
    InMemoryEventStore,
    InMemorySessionStore,
    InMemoryUserStore,
)


def make_event(**overrides) -> Event:
    """Event with sensible defaults, starting two weeks from today"""
    start = dt.date.today() + dt.timedelta(days=14)
    values = dict(
        id="evt-test",
        title="Test Event",
        short_description="Short",
        description="A test event",
        category=EventCategory.TECHNOLOGY,
        date=start,
        time="10:00",
        end_date=start,
        end_time="18:00",
        venue="Test Venue",
        city="Mumbai",
        price=500,
        capacity=100,
        registered=0,
        tags=["Testing"],
    )
    values.update(overrides)
    return Event(**values)


@pytest.fixture
def nearly_full_event():
    """capacity 100, registered 95"""
    return make_event(id="evt-full", title="Nearly Full", capacity=100, registered=95)


@pytest.fixture
def free_event():
    return make_event(id="evt-free", title="Free Meetup", price=0, capacity=50, registered=0)


@pytest_asyncio.fixture
async def event_store(nearly_full_event, free_event):
    return InMemoryEventStore([nearly_full_event, free_event])


@pytest_asyncio.fixture
async def booking_store():
    return InMemoryBookingStore()


@pytest_asyncio.fixture
async def booking_service(event_store, booking_store):
    return BookingService(event_store, booking_store, PaymentGateway(key_secret=""))


@pytest_asyncio.fixture
async def auth_service():
    return AuthService(InMemoryUserStore(), InMemorySessionStore())


@pytest.fixture
def client():
    """TestClient over a fresh app with the seeded in-memory catalog"""
    limiter.enabled = False
    app = create_app(build_memory_stores(seed=True))
    with TestClient(app) as test_client:
        yield test_client
