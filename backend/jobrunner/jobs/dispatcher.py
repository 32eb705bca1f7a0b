"""Decide which jobs run now, run them under a lock, and report back.

One dispatch walks the registry in order. A job is eligible when its cron
expression matches the current minute, or, when a job name is given
explicitly, when it is that job (its schedule is then ignored). Eligible jobs
whose lock is held are reported as already running. The rest either run
before the report is returned (``should_wait``) or are handed back as
deferred work for the caller to start once the response has gone out.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Awaitable, Callable
from zoneinfo import ZoneInfo

from jobrunner.config import get_settings
from jobrunner.jobs.cron import matches
from jobrunner.jobs.job import Job
from jobrunner.jobs.lock import JobLock
from jobrunner.jobs.registry import JobRegistry
from jobrunner.metrics import job_duration, job_runs, jobs_skipped
from jobrunner.schemas import RunReport

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def default_clock() -> datetime:
    return datetime.now(ZoneInfo(get_settings().CRON_TIMEZONE))


@dataclass
class DispatchResult:
    report: RunReport
    deferred: Callable[[], Awaitable[None]]


class Dispatcher:
    """Run the jobs of a registry that are due at a given instant."""

    def __init__(self, registry: JobRegistry, lock: JobLock, clock: Clock | None = None):
        self.registry = registry
        self.lock = lock
        self.clock = clock or default_clock

    def _is_eligible(self, job: Job, now: datetime, run: str | None) -> bool:
        if run:
            return job.name == run
        return matches(job.cron, now)

    async def _execute(self, job: Job) -> None:
        started = time.monotonic()
        try:
            logger.info(f"{job.name} starting")
            await self.lock.acquire(job.name, job.options.lock_expiration)
            await job()
            elapsed = time.monotonic() - started
            logger.info(f"{job.name} successful: {elapsed:.2f}s")
            job_runs.labels(job=job.name, outcome="success").inc()
        except Exception as e:
            elapsed = time.monotonic() - started
            logger.error(f"{job.name} failed: {elapsed:.2f}s: {e}", exc_info=True)
            job_runs.labels(job=job.name, outcome="failure").inc()
        finally:
            job_duration.labels(job=job.name).observe(max(0.0, time.monotonic() - started))
            await self.lock.release(job.name)

    async def dispatch(self, now: datetime | None = None, run: str | None = None) -> DispatchResult:
        """Run one dispatch cycle.

        Args:
            now: Instant to match schedules against. Defaults to the clock.
            run: Name of a single job to force, ignoring every schedule.

        Returns:
            The report and an async callable that runs the deferred jobs
            concurrently and returns once all of them have settled.
        """
        if now is None:
            now = self.clock()
        if run and run not in self.registry:
            logger.warning(f"Requested job {run!r} is not registered")

        report = RunReport()
        after_response: list[Job] = []

        for job in self.registry:
            if not self._is_eligible(job, now, run):
                continue

            if await self.lock.is_locked(job.name):
                logger.info(f"{job.name} already running")
                jobs_skipped.labels(job=job.name).inc()
                report.already_running.append(job.name)
                continue

            if job.options.should_wait:
                await self._execute(job)
                report.ran.append(job.name)
            else:
                after_response.append(job)
                report.to_run.append(job.name)

        async def deferred() -> None:
            if not after_response:
                return
            await asyncio.gather(*(self._execute(job) for job in after_response), return_exceptions=True)

        return DispatchResult(report=report, deferred=deferred)
