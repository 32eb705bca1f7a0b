"""Housekeeping jobs for the dispatcher itself.

Business jobs register alongside these in ``build_default_registry``.
"""

import logging
from datetime import UTC, datetime

from jobrunner.config import get_settings
from jobrunner.jobs.job import create_job
from jobrunner.jobs.registry import JobRegistry
from jobrunner.metrics import held_job_locks
from jobrunner.redis_client import get_redis_connection

logger = logging.getLogger(__name__)


async def record_heartbeat():
    """Store the time of the latest dispatch so a stalled trigger is visible."""
    settings = get_settings()
    r = get_redis_connection()
    await r.set(settings.HEARTBEAT_KEY, datetime.now(UTC).isoformat())


async def record_lock_stats():
    settings = get_settings()
    r = get_redis_connection()
    held = 0
    async for _ in r.scan_iter(match=f"{settings.JOB_LOCK_PREFIX}*"):
        held += 1
    held_job_locks.set(float(held))
    logger.debug(f"record_lock_stats: {held} job locks held")


def build_default_registry() -> JobRegistry:
    settings = get_settings()
    return JobRegistry(
        [
            create_job("record-heartbeat", "* * * * *", record_heartbeat, should_wait=True, lock_expiration=60),
            create_job(
                "record-lock-stats",
                "*/5 * * * *",
                record_lock_stats,
                lock_expiration=settings.DEFAULT_LOCK_EXPIRATION,
            ),
        ]
    )
