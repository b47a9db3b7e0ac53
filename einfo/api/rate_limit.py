"""Rate Limiter: per-IP default limit applied by SlowAPIMiddleware to every route.

Invariants:
    - Keyed by client address (get_remote_address)
    - Health probes opt out with @limiter.exempt
    - RATE_LIMIT_ENABLED=false turns every check into a no-op (tests, local dev)
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from einfo.config import get_settings

_settings = get_settings()

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[_settings.rate_limit_default],
    enabled=_settings.rate_limit_enabled,
)
