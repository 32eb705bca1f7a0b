import asyncio
import inspect
from dataclasses import dataclass, field
from typing import Any, Callable

DEFAULT_LOCK_EXPIRATION = 60 * 14 + 50

JobFunction = Callable[[], Any]


@dataclass(frozen=True)
class JobOptions:
    should_wait: bool = False
    lock_expiration: int = DEFAULT_LOCK_EXPIRATION


@dataclass(frozen=True)
class Job:
    """A named unit of work and the cron schedule it runs on."""

    name: str
    cron: str
    run: JobFunction
    options: JobOptions = field(default_factory=JobOptions)

    async def __call__(self) -> None:
        # Plain functions go to a worker thread so they don't block the loop
        if inspect.iscoroutinefunction(self.run):
            await self.run()
        else:
            result = await asyncio.to_thread(self.run)
            if inspect.isawaitable(result):
                await result


def create_job(
    name: str,
    cron: str,
    run: JobFunction,
    *,
    should_wait: bool = False,
    lock_expiration: int = DEFAULT_LOCK_EXPIRATION,
) -> Job:
    """Build a Job with the default options filled in."""
    return Job(
        name=name,
        cron=cron,
        run=run,
        options=JobOptions(should_wait=should_wait, lock_expiration=lock_expiration),
    )
