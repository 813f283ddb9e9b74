"""
Shared slowapi limiter.
Lives outside main.py so endpoint modules can decorate routes without a circular import.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from clientdesk.core.config import settings


limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.RATE_LIMIT_ENABLED,
)

MUTATION_LIMIT = f"{settings.RATE_LIMIT_PER_MINUTE}/minute"
