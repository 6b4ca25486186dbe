"""
Rate limiting middleware
Protects the public search endpoints from abuse
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request, Response
from fastapi.responses import JSONResponse

from property_search.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def search_rate_limit() -> str:
    """Limit string for the search endpoints, read from settings at request time."""
    return get_settings().search_rate_limit


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """
    Custom handler for rate limit errors.
    """
    return JSONResponse(
        status_code=429,
        content={
            "error": "too_many_requests",
            "message": "Too many requests. Please wait a moment and try again.",
            "retry_after": exc.detail,
        },
        headers={"Retry-After": str(exc.detail)},
    )
