"""
Per-endpoint rate limits.

Limits are grouped by scope (``auth``, ``users``, ``moods``). ``RATE_LIMIT_CONFIG``
can override single entries; anything it leaves out keeps the built-in value.
Limiting is switched off when ``RATE_LIMITING_ENABLED`` is false and always in
the test environment.
"""
from typing import Callable, Dict

from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from moodflow.core.config import settings
from moodflow.core.logging_config import log_warning
from moodflow.middleware.request_logging import request_id_ctx

FALLBACK_LIMIT = "100/hour"
RETRY_AFTER_SECONDS = 60

BUILTIN_LIMITS: Dict[str, Dict[str, str]] = {
    # Credential endpoints are the usual brute force target
    "auth": {
        "login": "5/minute",
        "register": "3/minute",
    },
    "users": {
        "profile": "100/hour",
        "update": "20/hour",
        "list": "100/hour",
    },
    "moods": {
        "create": "100/hour",
        "list": "200/hour",
        "update": "100/hour",
        "delete": "50/hour",
        "analytics": "100/hour",
    },
}


def _merge_limits(overrides) -> Dict[str, Dict[str, str]]:
    merged = {scope: dict(limits) for scope, limits in BUILTIN_LIMITS.items()}
    for scope, limits in (overrides or {}).items():
        merged.setdefault(scope, {}).update(limits)
    return merged


RATE_LIMITS = _merge_limits(settings.rate_limit_config)


def rate_limiting_active() -> bool:
    return settings.rate_limiting_enabled and settings.environment != "test"


limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.rate_limit_storage_uri,
    default_limits=settings.rate_limit_default_limits if rate_limiting_active() else [],
    enabled=rate_limiting_active(),
)


def get_rate_limit(scope: str, endpoint: str) -> str:
    """Configured limit for ``scope.endpoint``, or ``FALLBACK_LIMIT``."""
    limit = RATE_LIMITS.get(scope, {}).get(endpoint)
    if limit is None:
        log_warning(f"No rate limit configured for {scope}.{endpoint}, using {FALLBACK_LIMIT}")
        return FALLBACK_LIMIT
    return limit


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Answer 429 with the limit that was hit and a Retry-After header."""
    request_id = request_id_ctx.get()
    limit = getattr(exc, "detail", None) or "unknown"
    client = request.client.host if request.client else "unknown"
    log_warning(
        "Rate limit exceeded",
        request_id=request_id,
        client_ip=client,
        path=request.url.path,
        limit=limit,
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "detail": f"Too many requests. Limit: {limit}",
            "retry_after": RETRY_AFTER_SECONDS,
            "request_id": request_id,
        },
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


def _scoped_limit(scope: str) -> Callable[[str], Callable]:
    def decorator_for(endpoint: str) -> Callable:
        if not rate_limiting_active():
            return lambda func: func
        return limiter.limit(get_rate_limit(scope, endpoint))
    return decorator_for


auth_rate_limit = _scoped_limit("auth")
user_rate_limit = _scoped_limit("users")
mood_rate_limit = _scoped_limit("moods")
