"""
Expiry worker tests
"""
import asyncio
import datetime as dt

import pytest

from eventfinder.schemas import BookingCreate, BookingStatus
from eventfinder.services import ExpiryWorker


@pytest.mark.asyncio
async def test_run_once_expires_stale_bookings(booking_service, booking_store):
    booking = await booking_service.create_booking(BookingCreate(event_id="evt-full", user_id="u", tickets=1))
    await booking_store.update_booking(booking.id, {"created_at": dt.datetime.utcnow() - dt.timedelta(days=1)})

    worker = ExpiryWorker(booking_service, interval_seconds=60)
    assert await worker.run_once() == 1
    assert (await booking_service.get_booking(booking.id)).status == BookingStatus.CANCELLED


@pytest.mark.asyncio
async def test_start_and_stop(booking_service, booking_store):
    booking = await booking_service.create_booking(BookingCreate(event_id="evt-full", user_id="u", tickets=1))
    await booking_store.update_booking(booking.id, {"created_at": dt.datetime.utcnow() - dt.timedelta(days=1)})

    worker = ExpiryWorker(booking_service, interval_seconds=0.01)
    await worker.start()
    assert worker.running
    await asyncio.sleep(0.05)
    await worker.stop()

    assert not worker.running
    assert (await booking_service.get_booking(booking.id)).status == BookingStatus.CANCELLED


@pytest.mark.asyncio
async def test_stop_without_start_is_noop(booking_service):
    worker = ExpiryWorker(booking_service)
    await worker.stop()
    assert worker.task is None
