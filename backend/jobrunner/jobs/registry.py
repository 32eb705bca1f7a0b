"""Static, ordered registry of jobs."""

import logging
from typing import Iterable, Iterator

from jobrunner.jobs.cron import is_valid_cron
from jobrunner.jobs.job import Job

logger = logging.getLogger(__name__)


class DuplicateJobError(ValueError):
    """Raised when two registered jobs share a name."""


class JobRegistry:
    """Jobs in dispatch order, looked up by unique name.

    Cron expressions are validated once here; an invalid one is logged and
    the job stays registered, it just never matches a schedule.
    """

    def __init__(self, jobs: Iterable[Job]):
        self._jobs = tuple(jobs)
        self._by_name: dict[str, Job] = {}

        for job in self._jobs:
            if job.name in self._by_name:
                raise DuplicateJobError(f"Job name registered twice: {job.name}")
            self._by_name[job.name] = job
            if not is_valid_cron(job.cron):
                logger.warning(f"{job.name} has an invalid cron expression {job.cron!r} and will never run on schedule")

    def __iter__(self) -> Iterator[Job]:
        return iter(self._jobs)

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Job | None:
        return self._by_name.get(name)

    def names(self) -> list[str]:
        return [job.name for job in self._jobs]
