"""Rate limiter instance for SlowAPI.

Shared so main (app.state.limiter) and route modules use the same instance
without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

AUTH_LIMIT = "10/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"

limit_auth = limiter.limit(AUTH_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
