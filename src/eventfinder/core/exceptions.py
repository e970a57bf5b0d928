"""
Domain errors raised by services and mapped to HTTP responses in main.py
"""
from enum import Enum
from typing import Dict, Optional


class ErrorCode(str, Enum):
    """Domain error codes"""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INSUFFICIENT_AVAILABILITY = "INSUFFICIENT_AVAILABILITY"
    INVALID_BOOKING_STATE = "INVALID_BOOKING_STATE"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    PAYMENT_VERIFICATION_FAILED = "PAYMENT_VERIFICATION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainError(Exception):
    """Base domain error with code and user-safe message"""

    status_code = 500
    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, code: Optional[ErrorCode] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Missing or invalid input; carries per-field messages when available"""

    status_code = 400
    default_code = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str = "Validation failed", errors: Optional[Dict[str, str]] = None) -> None:
        super().__init__(message)
        self.errors = errors or {}


class NotFoundError(DomainError):
    status_code = 404


class EventNotFoundError(NotFoundError):
    """Raised when an event doesn't exist"""

    default_code = ErrorCode.EVENT_NOT_FOUND

    def __init__(self, event_id: str) -> None:
        super().__init__("Event not found")
        self.event_id = event_id


class BookingNotFoundError(NotFoundError):
    """Raised when a booking doesn't exist (or belongs to someone else)"""

    default_code = ErrorCode.BOOKING_NOT_FOUND

    def __init__(self, booking_id: str) -> None:
        super().__init__("Booking not found")
        self.booking_id = booking_id


class UserNotFoundError(NotFoundError):
    default_code = ErrorCode.USER_NOT_FOUND

    def __init__(self, user_id: str) -> None:
        super().__init__("User not found")
        self.user_id = user_id


class ConflictError(DomainError):
    status_code = 409


class DuplicateEmailError(ConflictError):
    """Raised when registering an email that is already taken"""

    default_code = ErrorCode.DUPLICATE_EMAIL

    def __init__(self, email: str) -> None:
        super().__init__("An account with this email already exists")
        self.email = email


class InsufficientAvailabilityError(ConflictError):
    """Raised when more tickets are requested than remain"""

    # Reported as a bad request, the same as the checkout form does
    status_code = 400
    default_code = ErrorCode.INSUFFICIENT_AVAILABILITY

    def __init__(self, available: int) -> None:
        super().__init__(f"Only {available} tickets available")
        self.available = available


class InvalidBookingStateError(DomainError):
    """Raised when a booking transition is not allowed from its current state"""

    status_code = 400
    default_code = ErrorCode.INVALID_BOOKING_STATE


class AuthenticationError(DomainError):
    status_code = 401
    default_code = ErrorCode.INVALID_CREDENTIALS


class PaymentVerificationError(DomainError):
    status_code = 400
    default_code = ErrorCode.PAYMENT_VERIFICATION_FAILED
