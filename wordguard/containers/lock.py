# wordguard/containers/lock.py
"""
Блокировка экземпляра: счётчики нарушений живут в памяти процесса,
поэтому одновременно может работать только один экземпляр бота.
"""
import asyncio
import uuid
from typing import Optional

from loguru import logger
from redis.asyncio import Redis

RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""


class InstanceLockManager:
    """
    Распределённая блокировка в Redis с продлением TTL в фоне.
    Освобождение атомарное и только своей блокировки.
    """

    def __init__(self, redis: Redis, lock_key: str = "wordguard:instance_lock", ttl: int = 30):
        self.redis = redis
        self.lock_key = lock_key
        self.ttl = ttl
        self._instance_id = uuid.uuid4().hex
        self._refresh_task: Optional[asyncio.Task] = None

    @property
    def is_acquired(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    async def acquire_lock(self) -> bool:
        acquired = await self.redis.set(self.lock_key, self._instance_id, nx=True, ex=self.ttl)
        if not acquired:
            logger.warning("⚠️ Instance lock is held by another process")
            return False

        self._refresh_task = asyncio.create_task(self._refresh_loop(), name="instance_lock_refresh")
        logger.info(f"✅ Instance lock acquired: {self.lock_key}")
        return True

    async def _refresh_loop(self) -> None:
        interval = self.ttl / 3
        while True:
            await asyncio.sleep(interval)
            current = await self.redis.get(self.lock_key)
            if current != self._instance_id:
                logger.error(f"⚠️ Instance lock was taken by another process: {current}")
                return
            await self.redis.expire(self.lock_key, self.ttl)

    async def release_lock(self) -> None:
        if self._refresh_task is not None:
            self._refresh_task.cancel()
            try:
                await self._refresh_task
            except asyncio.CancelledError:
                pass
            self._refresh_task = None

        released = await self.redis.eval(RELEASE_SCRIPT, 1, self.lock_key, self._instance_id)
        if released == 1:
            logger.info(f"✅ Instance lock released: {self.lock_key}")
