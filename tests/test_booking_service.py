"""
Registration workflow tests

Covers the capacity invariant (0 <= registered <= capacity) through
create, pay, verify, fail, cancel and expiry.
"""
import asyncio
import datetime as dt

import pytest

from eventfinder.core.config import settings
from eventfinder.core.exceptions import (
    BookingNotFoundError,
    EventNotFoundError,
    InsufficientAvailabilityError,
    InvalidBookingStateError,
    PaymentVerificationError,
    ValidationError,
)
from eventfinder.schemas import BookingCreate, BookingStatus, PaymentStatus
from eventfinder.services import BookingService, PaymentGateway


def request(event_id="evt-full", tickets=1, user_id="user-1", **extra) -> BookingCreate:
    return BookingCreate(event_id=event_id, user_id=user_id, tickets=tickets, **extra)


async def registered_count(event_store, event_id="evt-full") -> int:
    return (await event_store.get_event(event_id)).registered


# ============================================================================
# CREATE
# ============================================================================
class TestCreateBooking:
    """Test create_booking"""

    @pytest.mark.asyncio
    async def test_creates_pending_booking_with_snapshot(self, booking_service, event_store):
        booking = await booking_service.create_booking(request(tickets=2))

        assert booking.id.startswith("reg-")
        assert booking.status == BookingStatus.PENDING
        assert booking.payment_status == PaymentStatus.PENDING
        assert booking.event_title == "Nearly Full"
        assert booking.total_amount == 1000
        assert booking.ticket_code.startswith("TKT") and len(booking.ticket_code) == 11
        # Pending bookings do not take capacity
        assert await registered_count(event_store) == 95

    @pytest.mark.asyncio
    async def test_total_amount_override(self, booking_service):
        booking = await booking_service.create_booking(request(tickets=2, total_amount=750))
        assert booking.total_amount == 750

    @pytest.mark.asyncio
    async def test_missing_event(self, booking_service):
        with pytest.raises(EventNotFoundError):
            await booking_service.create_booking(request(event_id="evt-missing"))

    @pytest.mark.asyncio
    async def test_exactly_available_succeeds(self, booking_service):
        booking = await booking_service.create_booking(request(tickets=5))
        assert booking.tickets == 5

    @pytest.mark.asyncio
    async def test_one_more_than_available_is_rejected(self, booking_service, event_store):
        with pytest.raises(InsufficientAvailabilityError) as exc_info:
            await booking_service.create_booking(request(tickets=6))

        assert exc_info.value.message == "Only 5 tickets available"
        assert await registered_count(event_store) == 95
        assert await booking_service.get_user_bookings("user-1") == []

    @pytest.mark.asyncio
    async def test_ticket_limit_per_booking(self, booking_service):
        with pytest.raises(ValidationError):
            await booking_service.create_booking(
                request(event_id="evt-free", tickets=settings.MAX_TICKETS_PER_BOOKING + 1)
            )


# ============================================================================
# FREE AND PAID REGISTRATION
# ============================================================================
class TestRegisterForEvent:
    """Test register_for_event"""

    @pytest.mark.asyncio
    async def test_free_event_confirms_without_payment(self, booking_service, event_store):
        booking = await booking_service.register_for_event(request(event_id="evt-free", tickets=3))

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.payment_status == PaymentStatus.PAID
        assert booking.payment_id == "FREE_EVENT"
        assert await registered_count(event_store, "evt-free") == 3

    @pytest.mark.asyncio
    async def test_paid_event_stays_pending(self, booking_service, event_store):
        booking = await booking_service.register_for_event(request(tickets=2))
        assert booking.is_pending
        assert await registered_count(event_store) == 95

    @pytest.mark.asyncio
    async def test_paid_flow_order_then_verify(self, booking_service, event_store):
        booking = await booking_service.register_for_event(request(tickets=2))

        order = await booking_service.create_payment_order(booking.id)
        assert order.amount == 100000
        assert order.currency == "INR"
        assert order.order_id.startswith("order_")

        confirmed = await booking_service.verify_payment(booking.id, "pay_123", order_id=order.order_id)
        assert confirmed.is_confirmed
        assert confirmed.payment_status == PaymentStatus.PAID
        assert confirmed.order_id == order.order_id
        assert await registered_count(event_store) == 97

    @pytest.mark.asyncio
    async def test_verify_twice_does_not_double_count(self, booking_service, event_store):
        booking = await booking_service.create_booking(request(tickets=2))
        await booking_service.verify_payment(booking.id, "pay_1")
        again = await booking_service.verify_payment(booking.id, "pay_1")

        assert again.is_confirmed
        assert await registered_count(event_store) == 97

    @pytest.mark.asyncio
    async def test_verify_rechecks_capacity(self, booking_service, event_store):
        first = await booking_service.create_booking(request(tickets=5, user_id="a"))
        second = await booking_service.create_booking(request(tickets=5, user_id="b"))
        await booking_service.verify_payment(first.id, "pay_a")

        with pytest.raises(InsufficientAvailabilityError):
            await booking_service.verify_payment(second.id, "pay_b")

        failed = await booking_service.get_booking(second.id)
        assert failed.status == BookingStatus.CANCELLED
        assert failed.payment_status == PaymentStatus.FAILED
        assert await registered_count(event_store) == 100

    @pytest.mark.asyncio
    async def test_payment_order_requires_pending_booking(self, booking_service):
        booking = await booking_service.register_for_event(request(event_id="evt-free"))
        with pytest.raises(InvalidBookingStateError):
            await booking_service.create_payment_order(booking.id)


class TestPaymentSignature:
    """Test signature checks when a key secret is configured"""

    @pytest.mark.asyncio
    async def test_signed_payment(self, event_store, booking_store):
        gateway = PaymentGateway(key_secret="s3cret")
        service = BookingService(event_store, booking_store, gateway)
        booking = await service.create_booking(request())
        order = await service.create_payment_order(booking.id)

        with pytest.raises(PaymentVerificationError):
            await service.verify_payment(booking.id, "pay_1", order_id=order.order_id, signature="bad")
        assert (await service.get_booking(booking.id)).is_pending

        signature = gateway.sign(order.order_id, "pay_1")
        confirmed = await service.verify_payment(booking.id, "pay_1", order_id=order.order_id, signature=signature)
        assert confirmed.is_confirmed

    @pytest.mark.asyncio
    async def test_free_event_id_cannot_confirm_paid_booking(self, event_store, booking_store):
        service = BookingService(event_store, booking_store, PaymentGateway(key_secret="s3cret"))
        booking = await service.create_booking(request(tickets=2))
        assert booking.total_amount == 1000

        with pytest.raises(PaymentVerificationError):
            await service.verify_payment(booking.id, "FREE_EVENT")

        assert (await service.get_booking(booking.id)).is_pending
        assert await registered_count(event_store) == 95

    @pytest.mark.asyncio
    async def test_free_event_id_rejected_without_secret(self, booking_service, event_store):
        booking = await booking_service.create_booking(request())

        with pytest.raises(PaymentVerificationError):
            await booking_service.verify_payment(booking.id, "FREE_EVENT")
        assert await registered_count(event_store) == 95

    @pytest.mark.asyncio
    async def test_free_booking_skips_signature(self, event_store, booking_store):
        service = BookingService(event_store, booking_store, PaymentGateway(key_secret="s3cret"))
        booking = await service.register_for_event(request(event_id="evt-free", tickets=2))

        assert booking.is_confirmed
        assert booking.payment_id == "FREE_EVENT"
        assert await registered_count(event_store, "evt-free") == 2


# ============================================================================
# FAIL AND CANCEL
# ============================================================================
class TestFailAndCancel:
    """Test fail_payment and cancel_booking"""

    @pytest.mark.asyncio
    async def test_fail_payment_leaves_capacity(self, booking_service, event_store):
        booking = await booking_service.create_booking(request(tickets=2))
        failed = await booking_service.fail_payment(booking.id)

        assert failed.status == BookingStatus.CANCELLED
        assert failed.payment_status == PaymentStatus.FAILED
        assert await registered_count(event_store) == 95

        with pytest.raises(InvalidBookingStateError):
            await booking_service.verify_payment(booking.id, "pay_late")

    @pytest.mark.asyncio
    async def test_cancel_confirmed_restores_capacity(self, booking_service, event_store):
        booking = await booking_service.register_for_event(request(event_id="evt-free", tickets=4))
        assert await registered_count(event_store, "evt-free") == 4

        await booking_service.cancel_booking(booking.id)
        assert await registered_count(event_store, "evt-free") == 0

        with pytest.raises(BookingNotFoundError):
            await booking_service.cancel_booking(booking.id)
        assert await registered_count(event_store, "evt-free") == 0

    @pytest.mark.asyncio
    async def test_cancel_pending_does_not_touch_capacity(self, booking_service, event_store):
        booking = await booking_service.create_booking(request(tickets=3))
        await booking_service.cancel_booking(booking.id)
        assert await registered_count(event_store) == 95

    @pytest.mark.asyncio
    async def test_cancel_checks_owner(self, booking_service):
        booking = await booking_service.create_booking(request(user_id="owner"))
        with pytest.raises(BookingNotFoundError):
            await booking_service.cancel_booking(booking.id, user_id="someone-else")
        await booking_service.cancel_booking(booking.id, user_id="owner")

    @pytest.mark.asyncio
    async def test_cancel_never_goes_below_zero(self, booking_service, event_store):
        booking = await booking_service.register_for_event(request(event_id="evt-free", tickets=2))
        # Organizer-side correction already released the seats
        await event_store.decrement_registered("evt-free", 2)

        await booking_service.cancel_booking(booking.id)
        assert await registered_count(event_store, "evt-free") == 0


# ============================================================================
# QUERIES, EXPIRY, INVARIANT
# ============================================================================
class TestQueriesAndExpiry:

    @pytest.mark.asyncio
    async def test_is_user_registered_ignores_cancelled(self, booking_service):
        booking = await booking_service.create_booking(request(user_id="u"))
        assert await booking_service.is_user_registered("evt-full", "u") is True

        await booking_service.fail_payment(booking.id)
        assert await booking_service.is_user_registered("evt-full", "u") is False
        assert await booking_service.is_user_registered("evt-free", "u") is False

    @pytest.mark.asyncio
    async def test_event_bookings_for_missing_event(self, booking_service):
        with pytest.raises(EventNotFoundError):
            await booking_service.get_event_bookings("evt-missing")

    @pytest.mark.asyncio
    async def test_expire_pending_bookings(self, booking_service):
        stale = await booking_service.create_booking(request(user_id="stale"))
        paid = await booking_service.register_for_event(request(event_id="evt-free", user_id="paid"))

        later = dt.datetime.utcnow() + dt.timedelta(minutes=settings.PENDING_BOOKING_TTL_MINUTES + 1)
        assert await booking_service.expire_pending_bookings(later) == 1

        expired = await booking_service.get_booking(stale.id)
        assert expired.status == BookingStatus.CANCELLED
        assert expired.payment_status == PaymentStatus.FAILED
        assert (await booking_service.get_booking(paid.id)).is_confirmed

    @pytest.mark.asyncio
    async def test_recent_pending_bookings_are_kept(self, booking_service):
        await booking_service.create_booking(request())
        assert await booking_service.expire_pending_bookings() == 0

    @pytest.mark.asyncio
    async def test_concurrent_registrations_never_oversell(self, booking_service, event_store):
        attempts = [
            booking_service.register_for_event(request(event_id="evt-free", tickets=10, user_id=f"u{i}"))
            for i in range(8)
        ]
        results = await asyncio.gather(*attempts, return_exceptions=True)

        confirmed = [r for r in results if not isinstance(r, Exception)]
        rejected = [r for r in results if isinstance(r, InsufficientAvailabilityError)]
        assert len(confirmed) == 5
        assert len(rejected) == 3
        assert await registered_count(event_store, "evt-free") == 50
