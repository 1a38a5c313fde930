"""Global rate limiter instance for SlowAPI."""

from slowapi import Limiter
from slowapi.util import get_remote_address
from common.core.config import settings

# Request-rate protection, separate from plan quotas: a burst of requests is
# throttled here before it ever reaches the admission gate.
# Redis storage in deployed environments so limits hold across API pods.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=settings.rate_limit_default,
    storage_uri=settings.rate_limit_storage_uri,
)
