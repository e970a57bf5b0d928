"""
Services package
"""
from eventfinder.services.auth_service import AuthService
from eventfinder.services.booking_service import BookingService
from eventfinder.services.event_service import EventService
from eventfinder.services.expiry_worker import ExpiryWorker
from eventfinder.services.payment_gateway import PaymentGateway

__all__ = [
    "AuthService",
    "BookingService",
    "EventService",
    "ExpiryWorker",
    "PaymentGateway",
]
