"""Webhook endpoint the external scheduler calls once a minute."""

import logging
from functools import lru_cache

from fastapi import APIRouter, BackgroundTasks, Depends, Query

from jobrunner.auth import require_webhook_token
from jobrunner.config import get_settings
from jobrunner.jobs.dispatcher import Dispatcher
from jobrunner.jobs.lock import JobLock, RedisLockStore
from jobrunner.jobs.tasks import build_default_registry
from jobrunner.redis_client import get_redis_connection
from jobrunner.schemas import RunReport

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/webhooks", tags=["jobs"])


@lru_cache
def get_dispatcher() -> Dispatcher:
    """Dispatcher over the default registry with Redis-backed locks."""
    settings = get_settings()
    lock = JobLock(
        RedisLockStore(get_redis_connection()),
        enabled=settings.is_production,
        prefix=settings.JOB_LOCK_PREFIX,
    )
    return Dispatcher(build_default_registry(), lock)


@router.api_route(
    "/run-jobs",
    methods=["GET", "POST"],
    response_model=RunReport,
    dependencies=[Depends(require_webhook_token)],
)
async def run_jobs(
    background_tasks: BackgroundTasks,
    run: str | None = Query(default=None, max_length=128),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Run the jobs due this minute, or only the job named by ``run``.

    Jobs marked ``should_wait`` finish before this returns; the others start
    after the response has been sent.
    """
    result = await dispatcher.dispatch(run=run)
    background_tasks.add_task(result.deferred)
    logger.info(
        f"Dispatched jobs: ran={result.report.ran} toRun={result.report.to_run} "
        f"alreadyRunning={result.report.already_running}"
    )
    return result.report
