"""
Rate limiting configuration.

Uses slowapi, keyed on the client address. Endpoints opt in with
``@limiter.limit(...)``; exceeded limits raise RateLimitExceeded,
which the shared error handler renders as a 429 envelope.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from server.core.config import settings

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit_default])
