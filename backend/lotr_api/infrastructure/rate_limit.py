"""Rate Limiting — slowapi limiter keyed by client address, plus the 429 envelope.

Invariants:
    - Key is the first X-Forwarded-For entry, else X-Real-IP, else the peer address
    - General limit applies to every route via SlowAPIMiddleware (default_limits)
    - Mutating review routes additionally carry the strict limit (@limiter.limit)
    - Exceeding any limit → 429 with code RATE_LIMIT_EXCEEDED

Design Decisions:
    - In-memory storage: limits are per process
    - Limit strings read from settings at import so the decorators can reference them
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from lotr_api.config import get_settings
from lotr_api.core.errors import rate_limit_error

_settings = get_settings()

GENERAL_LIMIT = _settings.rate_limit_general
STRICT_LIMIT = _settings.rate_limit_strict


def client_address_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return get_remote_address(request) or "unknown"


limiter = Limiter(
    key_func=client_address_key,
    default_limits=[GENERAL_LIMIT],
    enabled=_settings.rate_limit_enabled,
)


def _retry_window(limit_text: str) -> str:
    """'10 per 15 minutes' → '15 minutes'."""
    _, _, window = limit_text.partition(" per ")
    return window or limit_text


def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded,
) -> JSONResponse:
    """Must stay sync: SlowAPIMiddleware invokes the registered handler without awaiting it."""
    limit_text = str(exc.limit.limit) if exc.limit else exc.detail
    error = rate_limit_error(limit=limit_text, retry_after=_retry_window(limit_text))
    return JSONResponse(status_code=error.http_status, content=error.to_response())
