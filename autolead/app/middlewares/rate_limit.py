# autolead/app/middlewares/rate_limit.py
from threading import Lock
from time import time
from typing import Dict, List

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from autolead.app.core.settings import get_settings

EXEMPT_PATHS = {"/health"}
CLEANUP_INTERVAL_SECONDS = 300

_requests: Dict[str, List[float]] = {}
_lock = Lock()
_last_cleanup = time()


def reset_rate_limits() -> None:
    global _last_cleanup
    with _lock:
        _requests.clear()
        _last_cleanup = time()


def sweep_stale_clients(now: float, window: int) -> int:
    """Drop every client IP with no request inside the window. Caller holds the lock."""
    cutoff = now - window
    stale = [ip for ip, timestamps in _requests.items() if not timestamps or timestamps[-1] <= cutoff]
    for ip in stale:
        del _requests[ip]
    return len(stale)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window request limit per client IP, kept in process memory."""

    async def dispatch(self, request: Request, call_next):
        global _last_cleanup
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        settings = get_settings()
        window = settings.rate_limit_window_seconds
        client_ip = request.client.host if request.client else "testclient"
        now = time()

        with _lock:
            if now - _last_cleanup >= CLEANUP_INTERVAL_SECONDS:
                sweep_stale_clients(now, window)
                _last_cleanup = now

            cutoff = now - window
            timestamps = [ts for ts in _requests.get(client_ip, []) if ts > cutoff]
            if len(timestamps) >= settings.rate_limit_max_requests:
                retry_after = int(timestamps[0] + window - now) + 1
                _requests[client_ip] = timestamps
                return JSONResponse(
                    status_code=429,
                    content={"detail": "Too many requests, please try again later."},
                    headers={"Retry-After": str(retry_after)},
                )
            timestamps.append(now)
            _requests[client_ip] = timestamps

        return await call_next(request)
