"""
Rate limiting for credential endpoints
Uses in-memory storage with sliding window algorithm
"""
import time
from collections import defaultdict
from typing import Dict, Tuple

from fastapi import HTTPException, Request, status

from .config import settings


class RateLimiter:
    """
    In-memory rate limiter using sliding window algorithm.

    State is per process; with several workers each one counts separately.
    """

    def __init__(self, cleanup_interval: int = 60):
        # {identifier: [timestamp, ...]}
        self._requests: Dict[str, list] = defaultdict(list)
        self._last_cleanup = time.time()
        self._cleanup_interval = cleanup_interval

    def _cleanup_old_entries(self, window_seconds: int):
        """Remove entries older than the window"""
        now = time.time()

        if now - self._last_cleanup < self._cleanup_interval:
            return

        cutoff = now - window_seconds
        for identifier in list(self._requests.keys()):
            self._requests[identifier] = [ts for ts in self._requests[identifier] if ts > cutoff]
            if not self._requests[identifier]:
                del self._requests[identifier]

        self._last_cleanup = now

    def is_allowed(
        self,
        identifier: str,
        max_requests: int,
        window_seconds: int = 60
    ) -> Tuple[bool, int, int]:
        """
        Check if a request is allowed under the rate limit.

        Returns:
            Tuple of (is_allowed, remaining_requests, retry_after_seconds)
        """
        self._cleanup_old_entries(window_seconds)

        now = time.time()
        window_start = now - window_seconds

        in_window = [ts for ts in self._requests[identifier] if ts > window_start]
        self._requests[identifier] = in_window

        if len(in_window) >= max_requests:
            retry_after = int(min(in_window) + window_seconds - now) + 1
            return False, 0, retry_after

        in_window.append(now)
        return True, max_requests - len(in_window), 0

    def reset(self):
        self._requests.clear()


# Global rate limiter instance
rate_limiter = RateLimiter()


def _get_client_ip(request: Request) -> str:
    """Get the client IP, considering proxies"""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # First IP in the chain is the original client
        return forwarded_for.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


async def auth_rate_limit(request: Request):
    """
    Dependency limiting login/register attempts per client IP.

    Usage:
        @router.post("/login", dependencies=[Depends(auth_rate_limit)])
        async def login(...):
            ...
    """
    identifier = f"endpoint:{request.url.path}:ip:{_get_client_ip(request)}"

    is_allowed, _, retry_after = rate_limiter.is_allowed(
        identifier=identifier,
        max_requests=settings.AUTH_RATE_LIMIT,
        window_seconds=60
    )

    if not is_allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Too many attempts. Try again in {retry_after} seconds.",
            headers={"Retry-After": str(retry_after)},
        )
