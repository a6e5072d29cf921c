from slowapi import Limiter
from slowapi.util import get_remote_address

from posapp.core.config import settings

limiter = Limiter(key_func=get_remote_address)

# Applied per endpoint with @limiter.limit(SIMULATION_LIMIT)
SIMULATION_LIMIT = f"{settings.rate_limit_per_minute}/minute"
