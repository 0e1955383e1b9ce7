"""Rate limiting utilities"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from ..config import settings
from .auth import decode_token_or_none


def get_user_rate_limit_key(request: Request) -> str:
    """
    Get rate limit key based on authenticated user

    Falls back to IP address if user is not authenticated.
    """
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        payload = decode_token_or_none(auth_header.split(" ", 1)[1])
        if payload and payload.get("sub"):
            return f"user:{payload['sub']}"

    return get_remote_address(request)


limiter = Limiter(
    key_func=get_user_rate_limit_key,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window"
)
