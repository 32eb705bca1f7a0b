"""Redis connection shared by the lock store and housekeeping jobs."""

import logging
from functools import lru_cache

from redis.asyncio import Redis

from jobrunner.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_redis_connection() -> Redis:
    """Get the async Redis client. Connections are opened lazily on first command."""
    settings = get_settings()
    logger.debug("Creating Redis client")
    return Redis.from_url(settings.REDIS_URL, decode_responses=True)
