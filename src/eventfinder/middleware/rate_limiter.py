"""
Rate limiting using SlowAPI

Applied per-route to login, registration and booking creation.
"""
import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from eventfinder.core.config import settings

logger = logging.getLogger(__name__)


def get_identifier(request: Request) -> str:
    """
    Get identifier for rate limiting

    Keyed by user_id when the request carries one, otherwise by client IP.
    """
    user_id = request.query_params.get('user_id')
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_identifier,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)
