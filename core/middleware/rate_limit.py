"""
Rate limiting middleware.

Implements fixed-window rate limiting per client IP and path, with
limits taken from the RATE_LIMITS setting.
"""

import hashlib
import logging
import time
from typing import Callable, Optional, Tuple

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.metrics import errors_total

logger = logging.getLogger(__name__)


class RateLimitMiddleware:
    """
    Rate limiting middleware per client IP.

    RATE_LIMITS maps a request path to ``(limit, window_seconds)``.
    Paths without an entry are not limited.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def _get_client_ip(self, request: HttpRequest) -> str:
        """
        Extract client IP from request.

        The socket address is used unless TRUSTED_PROXY_COUNT is set, in
        which case the X-Forwarded-For entry appended by the outermost
        trusted proxy is taken. Entries left of it are client-controlled.
        """
        remote_addr = request.META.get("REMOTE_ADDR") or "unknown"
        proxy_count = int(getattr(settings, "TRUSTED_PROXY_COUNT", 0) or 0)
        if proxy_count <= 0:
            return remote_addr

        hops = [
            hop.strip()
            for hop in request.META.get("HTTP_X_FORWARDED_FOR", "").split(",")
            if hop.strip()
        ]
        if len(hops) < proxy_count:
            return remote_addr
        return hops[-proxy_count]

    def _get_limit(self, path: str) -> Optional[Tuple[int, int]]:
        rate_limits = getattr(settings, "RATE_LIMITS", {}) or {}
        limit = rate_limits.get(path.rstrip("/")) or rate_limits.get(path)
        if not limit:
            return None
        return int(limit[0]), int(limit[1])

    def _get_rate_limit_key(self, client_ip: str, path: str, window: int) -> str:
        """
        Generate cache key for rate limiting.

        Args:
            client_ip: Client IP address
            path: Request path
            window: Window length in seconds

        Returns:
            Cache key string
        """
        ip_hash = hashlib.sha256(client_ip.encode()).hexdigest()[:16]
        window_start = int(time.time() / window)
        return f"rate_limit:{path.rstrip('/')}:{ip_hash}:{window_start}"

    def _check_rate_limit(
        self, client_ip: str, path: str, limit: int, window: int
    ) -> Tuple[bool, int, int]:
        """
        Check if request is within rate limit.

        Returns:
            Tuple of (is_allowed, remaining, reset_time)
        """
        full_key = self._get_rate_limit_key(client_ip, path, window)
        reset_time = (int(time.time() / window) + 1) * window

        current_count = cache.get(full_key, 0)
        if current_count >= limit:
            return False, 0, reset_time

        try:
            new_count = cache.incr(full_key, 1)
        except ValueError:
            cache.set(full_key, 1, timeout=window)
            new_count = 1

        return True, max(0, limit - new_count), reset_time

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request with rate limiting.

        Args:
            request: HTTP request

        Returns:
            HTTP response with rate limit headers
        """
        configured = self._get_limit(request.path)
        if not configured:
            return self.get_response(request)

        limit, window = configured
        client_ip = self._get_client_ip(request)
        is_allowed, remaining, reset_time = self._check_rate_limit(
            client_ip, request.path, limit, window
        )

        if not is_allowed:
            errors_total.labels(error_type="rate_limit_exceeded", endpoint=request.path).inc()
            logger.warning(
                "Rate limit exceeded",
                extra={"path": request.path, "limit": limit, "window_seconds": window},
            )
            response = JsonResponse(
                {
                    "success": False,
                    "error": {
                        "code": "RATE_LIMIT_EXCEEDED",
                        "message": "Too many requests. Please try again later.",
                    },
                },
                status=429,
            )
        else:
            response = self.get_response(request)

        # Add rate limit headers (RFC 6585)
        response["X-RateLimit-Limit"] = str(limit)
        response["X-RateLimit-Remaining"] = str(remaining)
        response["X-RateLimit-Reset"] = str(reset_time)
        if not is_allowed:
            response["Retry-After"] = str(max(0, reset_time - int(time.time())))

        return response
