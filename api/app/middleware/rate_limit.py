"""Rate limiting for write endpoints using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Keyed on client IP; the service has no authenticated identity to key on
limiter = Limiter(key_func=get_remote_address)


def reset_limiter() -> None:
    """Clear all rate limit counters. Used in tests for isolation."""
    limiter.reset()
