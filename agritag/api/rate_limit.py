"""
Request rate limiting.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from agritag.config import settings

# Applied to every route by SlowAPIMiddleware
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_requests}/minute"],
)
