"""
Simulated payment gateway

Orders are created locally in the shape a checkout widget expects. When a
key secret is configured, verification requires the HMAC-SHA256 signature
of "order_id|payment_id"; without one any payment id is accepted.
The free-event payment id confirms zero-amount bookings only.
"""
import hashlib
import hmac
import logging
import uuid
from typing import Optional

from eventfinder.core.config import settings
from eventfinder.core.exceptions import PaymentVerificationError
from eventfinder.schemas.booking import PaymentOrder

logger = logging.getLogger(__name__)

FREE_EVENT_PAYMENT_ID = "FREE_EVENT"


class PaymentGateway:
    """Creates simulated orders and checks payment signatures"""

    def __init__(
        self,
        key_id: Optional[str] = None,
        key_secret: Optional[str] = None,
        currency: Optional[str] = None,
    ):
        self.key_id = key_id or settings.PAYMENT_KEY_ID
        self.key_secret = key_secret if key_secret is not None else settings.PAYMENT_KEY_SECRET
        self.currency = currency or settings.DEFAULT_CURRENCY

    def create_order(self, booking_id: str, amount: float) -> PaymentOrder:
        order = PaymentOrder(
            order_id=f"order_{uuid.uuid4().hex[:14]}",
            # minor units (paise)
            amount=int(round(amount * 100)),
            currency=self.currency,
            booking_id=booking_id,
            key_id=self.key_id,
        )
        logger.info(
            f"💳 Created payment order {order.order_id}",
            extra={"booking_id": booking_id},
        )
        return order

    def sign(self, order_id: str, payment_id: str) -> str:
        message = f"{order_id}|{payment_id}".encode()
        return hmac.new(self.key_secret.encode(), message, hashlib.sha256).hexdigest()

    def verify_signature(
        self,
        order_id: Optional[str],
        payment_id: str,
        signature: Optional[str],
        free: bool = False,
    ) -> None:
        """
        Raise PaymentVerificationError when the signature does not match.

        Zero-amount confirmations and unsigned deployments skip the check.
        A paid booking may never use the free-event payment id.
        """
        if payment_id == FREE_EVENT_PAYMENT_ID and not free:
            raise PaymentVerificationError("Free-event confirmation is only valid for free bookings")
        if not self.key_secret or free:
            return
        if not order_id or not signature:
            raise PaymentVerificationError("Payment signature is required")
        expected = self.sign(order_id, payment_id)
        if not hmac.compare_digest(expected, signature):
            raise PaymentVerificationError("Payment signature mismatch")
