"""In-process trigger for deployments without an external cron caller.

Dispatches once at the start of every minute, the way the webhook would be
hit by an outside scheduler.
"""

import asyncio
import logging
from datetime import datetime, timedelta

from jobrunner.jobs.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


def seconds_until_next_minute(now: datetime) -> float:
    next_minute = now.replace(second=0, microsecond=0) + timedelta(minutes=1)
    return (next_minute - now).total_seconds()


async def tick(dispatcher: Dispatcher, pending: set[asyncio.Task]) -> None:
    """Dispatch once and start the deferred jobs in the background."""
    result = await dispatcher.dispatch()
    report = result.report
    logger.info(f"Tick: ran={report.ran} toRun={report.to_run} alreadyRunning={report.already_running}")
    if report.to_run:
        task = asyncio.create_task(result.deferred())
        pending.add(task)
        task.add_done_callback(pending.discard)


async def run_forever(dispatcher: Dispatcher) -> None:
    pending: set[asyncio.Task] = set()
    logger.info(f"Starting job scheduler for {len(dispatcher.registry)} jobs")
    while True:
        await asyncio.sleep(seconds_until_next_minute(dispatcher.clock()))
        await tick(dispatcher, pending)


if __name__ == "__main__":
    from jobrunner.config import get_settings
    from jobrunner.jobs.api import get_dispatcher

    logging.basicConfig(level=get_settings().LOG_LEVEL)
    asyncio.run(run_forever(get_dispatcher()))
