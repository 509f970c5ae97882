"""
Rate limiting for the Employee Directory API.
Uses SlowAPI; Redis backs the counters when REDIS_URL is configured.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from app.core.config import settings

logger = logging.getLogger("employee_directory.rate_limiter")


def get_real_client_ip(request: Request) -> str:
    """
    Get the real client IP, accounting for reverse proxies.
    Checks X-Forwarded-For header first, then falls back to direct IP.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # Take the first IP in the chain (original client)
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


if settings.REDIS_URL:
    # Mask password in logs
    logged_url = settings.REDIS_URL.split('@')[-1]
    logger.info(f"Rate limiter using Redis backend: {logged_url}")
elif settings.IS_PRODUCTION:
    logger.warning(
        "PRODUCTION WARNING: Rate limiting is using in-memory storage. "
        "Limits won't sync across instances. Configure REDIS_URL for distributed rate limiting."
    )


limiter = Limiter(
    key_func=get_real_client_ip,
    default_limits=["1000/hour", "100/minute"],
    storage_uri=settings.REDIS_URL,
    strategy="fixed-window",
    headers_enabled=True,
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Handler for rate limit exceeded errors.
    Returns a JSON response with retry information.
    """
    logger.warning(
        f"Rate limit exceeded for {get_real_client_ip(request)} "
        f"on {request.method} {request.url.path}"
    )

    retry_after = getattr(exc, "retry_after", 60)

    return JSONResponse(
        status_code=429,
        content={
            "error": "Rate limit exceeded",
            "detail": f"Too many requests. Please retry after {retry_after} seconds.",
            "retry_after": retry_after,
        },
        headers={"Retry-After": str(retry_after)},
    )
