"""Cron-driven job dispatch for jobrunner.

Jobs are plain async (or sync) functions registered with a cron expression.
The dispatcher is triggered once a minute, either by the webhook in
``jobrunner.jobs.api`` or by the tick loop in ``jobrunner.jobs.scheduler``.
"""

from jobrunner.jobs.cron import CRON_SCOPES, is_valid_cron, matches
from jobrunner.jobs.dispatcher import DispatchResult, Dispatcher
from jobrunner.jobs.job import Job, JobOptions, create_job
from jobrunner.jobs.lock import JobLock, LockStore, RedisLockStore
from jobrunner.jobs.registry import DuplicateJobError, JobRegistry

__all__ = [
    "CRON_SCOPES",
    "DispatchResult",
    "Dispatcher",
    "DuplicateJobError",
    "Job",
    "JobLock",
    "JobOptions",
    "JobRegistry",
    "LockStore",
    "RedisLockStore",
    "create_job",
    "is_valid_cron",
    "matches",
]
