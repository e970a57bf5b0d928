"""
Account registration, login sessions and profile updates
"""
import logging
import re
from typing import Dict, Optional

from eventfinder.core.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    ErrorCode,
    UserNotFoundError,
    ValidationError,
)
from eventfinder.core.security import hash_password, new_id, verify_password
from eventfinder.schemas.user import LoginResponse, User, UserCreate, UserRecord, UserUpdate
from eventfinder.stores.interfaces import SessionStore, UserStore

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# Indian mobile numbers: ten digits starting 6-9
PHONE_PATTERN = re.compile(r"^[6-9]\d{9}$")
MIN_PASSWORD_LENGTH = 6


def _validate_email(email: str, errors: Dict[str, str]) -> None:
    if not email:
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.match(email):
        errors["email"] = "Please enter a valid email"


def _validate_phone(phone: Optional[str], errors: Dict[str, str]) -> None:
    if phone and not PHONE_PATTERN.match(phone):
        errors["phone"] = "Please enter a valid 10-digit mobile number"


class AuthService:

    def __init__(self, users: UserStore, sessions: SessionStore):
        self.users = users
        self.sessions = sessions

    async def register(self, data: UserCreate) -> LoginResponse:
        """Create an account and log it in"""
        name = data.name.strip()
        email = data.email.strip().lower()
        phone = (data.phone or "").strip() or None

        errors: Dict[str, str] = {}
        if not name:
            errors["name"] = "Name is required"
        _validate_email(email, errors)
        _validate_phone(phone, errors)
        if not data.password:
            errors["password"] = "Password is required"
        elif len(data.password) < MIN_PASSWORD_LENGTH:
            errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        if errors:
            raise ValidationError("Please fix the highlighted fields", errors=errors)

        if await self.users.get_by_email(email) is not None:
            raise DuplicateEmailError(email)

        user = await self.users.add_user(UserRecord(
            id=new_id("usr"),
            email=email,
            name=name,
            phone=phone,
            password_hash=hash_password(data.password),
        ))
        logger.info("👤 Registered new user", extra={"user_id": user.id})
        return await self._start_session(user)

    async def login(self, email: str, password: str) -> LoginResponse:
        errors: Dict[str, str] = {}
        if not email:
            errors["email"] = "Email is required"
        if not password:
            errors["password"] = "Password is required"
        if errors:
            raise ValidationError("Email and password are required", errors=errors)

        user = await self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("🔒 Failed login attempt")
            raise AuthenticationError("Invalid email or password")
        return await self._start_session(user)

    async def logout(self, token: Optional[str]) -> bool:
        if not token:
            return False
        return await self.sessions.delete_session(token)

    async def get_current_user(self, token: Optional[str]) -> User:
        """Resolve a session token to its user, or raise AuthenticationError"""
        if not token:
            raise AuthenticationError("Not authenticated", code=ErrorCode.NOT_AUTHENTICATED)
        user_id = await self.sessions.get_user_id(token)
        user = await self.users.get_by_id(user_id) if user_id else None
        if user is None:
            raise AuthenticationError("Session expired or invalid", code=ErrorCode.NOT_AUTHENTICATED)
        return user.to_public()

    async def update_profile(self, token: Optional[str], changes: UserUpdate) -> User:
        current = await self.get_current_user(token)
        values = changes.model_dump(exclude_unset=True, exclude_none=True)

        errors: Dict[str, str] = {}
        if "name" in values:
            values["name"] = values["name"].strip()
            if not values["name"]:
                errors["name"] = "Name is required"
        if "email" in values:
            values["email"] = values["email"].strip().lower()
            _validate_email(values["email"], errors)
        if "phone" in values:
            values["phone"] = values["phone"].strip() or None
            _validate_phone(values["phone"], errors)
        if errors:
            raise ValidationError("Please fix the highlighted fields", errors=errors)

        if values.get("email") and values["email"] != current.email:
            if await self.users.get_by_email(values["email"]) is not None:
                raise DuplicateEmailError(values["email"])

        updated = await self.users.update_user(current.id, values)
        if updated is None:
            raise UserNotFoundError(current.id)
        logger.info("👤 Profile updated", extra={"user_id": current.id})
        return updated.to_public()

    async def _start_session(self, user: UserRecord) -> LoginResponse:
        token = await self.sessions.create_session(user.id)
        logger.info("🔑 Session started", extra={"user_id": user.id})
        return LoginResponse(user=user.to_public(), token=token)
