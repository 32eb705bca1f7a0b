"""Run-once locks for jobs, kept in Redis.

A lock is a ``job:<name>`` key holding ``"true"`` with a TTL. The TTL is what
frees the lock if a process dies mid-run; normal completion deletes the key.
"""

import logging
from typing import Protocol

logger = logging.getLogger(__name__)

ACTIVE = "true"


class LockStore(Protocol):
    """Minimal key-value interface the lock needs."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ex: int | None = None) -> None: ...

    async def delete(self, key: str) -> None: ...


class RedisLockStore:
    """LockStore backed by a ``redis.asyncio`` client."""

    def __init__(self, client):
        self.client = client

    async def get(self, key: str) -> str | None:
        value = await self.client.get(key)
        if isinstance(value, bytes):
            return value.decode()
        return value

    async def set(self, key: str, value: str, ex: int | None = None) -> None:
        await self.client.set(key, value, ex=ex)

    async def delete(self, key: str) -> None:
        await self.client.delete(key)


class JobLock:
    """Acquire and release per-job locks.

    When ``enabled`` is False (anything but production) every job looks
    unlocked and acquire/release do nothing. Store failures are logged and
    treated as "not locked" so an unreachable or misbehaving store never
    stops the sweep.
    """

    def __init__(self, store: LockStore, enabled: bool = True, prefix: str = "job:"):
        self.store = store
        self.enabled = enabled
        self.prefix = prefix

    def key(self, name: str) -> str:
        return f"{self.prefix}{name}"

    async def is_locked(self, name: str) -> bool:
        if not self.enabled:
            return False
        try:
            return await self.store.get(self.key(name)) == ACTIVE
        except Exception as e:
            logger.warning(f"{name} lock read failed, treating as unlocked: {e}")
            return False

    async def acquire(self, name: str, ttl_seconds: int) -> None:
        if not self.enabled:
            return
        try:
            await self.store.set(self.key(name), ACTIVE, ex=ttl_seconds)
        except Exception as e:
            logger.warning(f"{name} lock acquire failed: {e}")

    async def release(self, name: str) -> None:
        if not self.enabled:
            return
        try:
            await self.store.delete(self.key(name))
        except Exception as e:
            logger.warning(f"{name} lock release failed: {e}")
