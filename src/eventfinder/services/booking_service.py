"""
Booking Service - the registration workflow

create -> (free: confirm immediately) | (paid: order -> verify | fail)
and cancel. Every mutation runs behind one asyncio.Lock so the
read-check-write on an event's registered count cannot interleave.
"""
import asyncio
import datetime as dt
import logging
from typing import List, Optional

from eventfinder.core import metrics
from eventfinder.core.config import settings
from eventfinder.core.exceptions import (
    BookingNotFoundError,
    EventNotFoundError,
    InsufficientAvailabilityError,
    InvalidBookingStateError,
    PaymentVerificationError,
    ValidationError,
)
from eventfinder.core.security import new_id, new_ticket_code
from eventfinder.schemas.booking import (
    BookingCreate,
    BookingStatus,
    PaymentOrder,
    PaymentStatus,
    Registration,
)
from eventfinder.services.event_filters import get_availability
from eventfinder.services.payment_gateway import FREE_EVENT_PAYMENT_ID, PaymentGateway
from eventfinder.stores.interfaces import BookingStore, EventStore

logger = logging.getLogger(__name__)


class BookingService:
    """Service for creating, paying for and cancelling registrations"""

    def __init__(
        self,
        event_store: EventStore,
        booking_store: BookingStore,
        payment_gateway: Optional[PaymentGateway] = None,
    ):
        self.events = event_store
        self.bookings = booking_store
        self.gateway = payment_gateway or PaymentGateway()
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Workflow
    # ------------------------------------------------------------------

    async def create_booking(self, data: BookingCreate) -> Registration:
        """Create a pending registration; capacity is not taken until payment"""
        async with self._lock:
            return await self._create_booking(data)

    async def register_for_event(self, data: BookingCreate) -> Registration:
        """
        Create a registration and, for a free booking, confirm it at once.

        Paid bookings are returned pending and wait for verify_payment.
        """
        async with self._lock:
            booking = await self._create_booking(data)
            if booking.total_amount == 0:
                booking = await self._verify_payment(booking.id, FREE_EVENT_PAYMENT_ID)
            return booking

    async def create_payment_order(self, booking_id: str, amount: Optional[float] = None) -> PaymentOrder:
        async with self._lock:
            booking = await self._get_booking(booking_id)
            if not booking.is_pending or booking.payment_status != PaymentStatus.PENDING:
                raise InvalidBookingStateError(f"Booking is {booking.status.value}, not awaiting payment")

            amount = amount or booking.total_amount
            if amount <= 0:
                raise ValidationError("Free bookings do not need a payment order")

            order = self.gateway.create_order(booking.id, amount)
            await self.bookings.update_booking(booking.id, {"order_id": order.order_id})
            return order

    async def verify_payment(
        self,
        booking_id: str,
        payment_id: str,
        order_id: Optional[str] = None,
        signature: Optional[str] = None,
    ) -> Registration:
        async with self._lock:
            return await self._verify_payment(booking_id, payment_id, order_id, signature)

    async def fail_payment(self, booking_id: str) -> Registration:
        """Record a failed or abandoned payment; capacity is untouched"""
        async with self._lock:
            booking = await self._get_booking(booking_id)
            if booking.payment_status == PaymentStatus.PAID:
                raise InvalidBookingStateError("Booking is already paid")
            if booking.payment_status == PaymentStatus.FAILED:
                return booking

            failed = await self._mark_failed(booking)
            metrics.bookings_failed_total.labels(reason="payment_failed").inc()
            logger.info(
                "❌ Payment failed",
                extra={"booking_id": booking.id, "event_id": booking.event_id},
            )
            return failed

    async def cancel_booking(self, booking_id: str, user_id: Optional[str] = None) -> Registration:
        """
        Remove a registration and release its tickets if they were counted.

        With `user_id`, bookings owned by someone else are reported as
        missing.
        """
        async with self._lock:
            booking = await self.bookings.get_booking(booking_id)
            if booking is None or (user_id and booking.user_id != user_id):
                raise BookingNotFoundError(booking_id)

            await self.bookings.delete_booking(booking_id)
            metrics.bookings_cancelled_total.inc()
            if booking.is_confirmed:
                await self.events.decrement_registered(booking.event_id, booking.tickets)

            logger.info(
                "🗑️ Booking cancelled",
                extra={
                    "booking_id": booking.id,
                    "event_id": booking.event_id,
                    "user_id": booking.user_id,
                    "tickets": booking.tickets,
                },
            )
            return booking

    async def expire_pending_bookings(self, now: Optional[dt.datetime] = None) -> int:
        """Fail pending bookings older than the configured TTL; returns how many"""
        now = now or dt.datetime.utcnow()
        cutoff = now - dt.timedelta(minutes=settings.PENDING_BOOKING_TTL_MINUTES)

        async with self._lock:
            stale = await self.bookings.list_pending_before(cutoff)
            for booking in stale:
                await self._mark_failed(booking)
                logger.info(f"  ⏰ Expired booking {booking.id}", extra={"booking_id": booking.id})
                metrics.bookings_failed_total.labels(reason="expired").inc()

        if stale:
            logger.info(f"⏰ Expired {len(stale)} pending bookings")
        return len(stale)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_booking(self, booking_id: str) -> Registration:
        return await self._get_booking(booking_id)

    async def get_user_bookings(self, user_id: str) -> List[Registration]:
        return await self.bookings.list_by_user(user_id)

    async def get_event_bookings(self, event_id: str) -> List[Registration]:
        if await self.events.get_event(event_id) is None:
            raise EventNotFoundError(event_id)
        return await self.bookings.list_by_event(event_id)

    async def is_user_registered(self, event_id: str, user_id: str) -> bool:
        """True if the user holds any booking for the event that is not cancelled"""
        bookings = await self.bookings.list_by_user(user_id)
        return any(b.event_id == event_id and b.is_active for b in bookings)

    # ------------------------------------------------------------------
    # Unlocked steps; callers hold self._lock
    # ------------------------------------------------------------------

    async def _get_booking(self, booking_id: str) -> Registration:
        booking = await self.bookings.get_booking(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    async def _create_booking(self, data: BookingCreate) -> Registration:
        event = await self.events.get_event(data.event_id)
        if event is None:
            raise EventNotFoundError(data.event_id)

        if data.tickets < 1:
            raise ValidationError("At least one ticket is required", errors={"tickets": "Must be at least 1"})
        if data.tickets > settings.MAX_TICKETS_PER_BOOKING:
            raise ValidationError(
                f"Cannot book more than {settings.MAX_TICKETS_PER_BOOKING} tickets at once",
                errors={"tickets": f"Maximum {settings.MAX_TICKETS_PER_BOOKING} tickets per booking"},
            )

        available = get_availability(event).available
        if data.tickets > available:
            raise InsufficientAvailabilityError(available)

        if data.total_amount:
            total_amount = data.total_amount
        else:
            total_amount = event.price * data.tickets

        booking = Registration(
            id=new_id("reg"),
            event_id=event.id,
            user_id=data.user_id,
            event_title=event.title,
            event_date=event.date,
            event_image=event.image,
            event_venue=event.venue,
            event_city=event.city,
            tickets=data.tickets,
            total_amount=total_amount,
            payment_method=data.payment_method,
            attendee_names=data.attendee_names,
            email=data.email,
            phone=data.phone,
            ticket_code=new_ticket_code(),
        )
        created = await self.bookings.add_booking(booking)
        metrics.bookings_created_total.inc()
        logger.info(
            f"🎫 Created booking for {event.title}",
            extra={
                "booking_id": created.id,
                "event_id": event.id,
                "user_id": data.user_id,
                "tickets": data.tickets,
            },
        )
        return created

    async def _verify_payment(
        self,
        booking_id: str,
        payment_id: str,
        order_id: Optional[str] = None,
        signature: Optional[str] = None,
    ) -> Registration:
        booking = await self._get_booking(booking_id)

        if booking.payment_status == PaymentStatus.PAID:
            # Repeat verification of a confirmed booking; nothing to count again
            return booking
        if not booking.is_pending or booking.payment_status == PaymentStatus.FAILED:
            raise InvalidBookingStateError(f"Booking is {booking.status.value} and cannot be paid")

        if order_id and booking.order_id and order_id != booking.order_id:
            raise PaymentVerificationError("Order does not belong to this booking")
        order_id = order_id or booking.order_id
        self.gateway.verify_signature(order_id, payment_id, signature, free=booking.total_amount == 0)

        # The store refuses an increment past capacity
        event = await self.events.increment_registered(booking.event_id, booking.tickets)
        if event is None:
            await self._mark_failed(booking)
            metrics.bookings_failed_total.labels(reason="sold_out").inc()
            current = await self.events.get_event(booking.event_id)
            if current is None:
                raise EventNotFoundError(booking.event_id)
            raise InsufficientAvailabilityError(get_availability(current).available)

        confirmed = await self.bookings.update_booking(
            booking.id,
            {
                "status": BookingStatus.CONFIRMED,
                "payment_status": PaymentStatus.PAID,
                "payment_id": payment_id,
                "order_id": order_id,
            },
        )
        kind = "free" if payment_id == FREE_EVENT_PAYMENT_ID else "paid"
        metrics.bookings_confirmed_total.labels(kind=kind).inc()
        metrics.tickets_registered_total.inc(booking.tickets)
        logger.info(
            "✅ Booking confirmed",
            extra={
                "booking_id": booking.id,
                "event_id": booking.event_id,
                "user_id": booking.user_id,
                "tickets": booking.tickets,
            },
        )
        return confirmed

    async def _mark_failed(self, booking: Registration) -> Registration:
        return await self.bookings.update_booking(
            booking.id,
            {"status": BookingStatus.CANCELLED, "payment_status": PaymentStatus.FAILED},
        )
