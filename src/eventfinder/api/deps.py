"""
Request dependencies

Services are built once per app in main.create_app and kept on app.state.
"""
from typing import Optional

from fastapi import Header, Request

from eventfinder.schemas.user import User
from eventfinder.services import AuthService, BookingService, EventService

SESSION_HEADER = "X-Session-Token"


def get_event_service(request: Request) -> EventService:
    return request.app.state.event_service


def get_booking_service(request: Request) -> BookingService:
    return request.app.state.booking_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


async def get_session_token(
    token: Optional[str] = Header(None, alias=SESSION_HEADER),
) -> Optional[str]:
    return token


async def get_current_user(request: Request, token: Optional[str] = Header(None, alias=SESSION_HEADER)) -> User:
    """Resolve the session header to a user; raises AuthenticationError (401)"""
    return await get_auth_service(request).get_current_user(token)
