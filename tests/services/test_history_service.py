from datetime import datetime, timedelta, timezone

import pytest
from redis.exceptions import RedisError

from wordguard.config.models import HistoryConfig
from wordguard.services.history_service import MessageHistoryStore


class DateClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class BrokenPipeline:
    def zadd(self, *args, **kwargs):
        pass

    def zremrangebyrank(self, *args, **kwargs):
        pass

    def sadd(self, *args, **kwargs):
        pass

    async def execute(self):
        raise RedisError("down")


class BrokenRedis:
    def pipeline(self):
        return BrokenPipeline()

    async def zrevrange(self, *args, **kwargs):
        raise RedisError("down")


@pytest.mark.asyncio
async def test_recent_returns_chronological_order(redis):
    clock = DateClock()
    store = MessageHistoryStore(redis, HistoryConfig(), clock=clock)

    for text in ("one", "two", "three"):
        await store.append(-100, 5, text)
        clock.advance(seconds=1)

    recent = await store.recent(-100, 5, limit=2)
    assert [m.content for m in recent] == ["two", "three"]

    everything = await store.recent(-100, 5, limit=10)
    assert [m.content for m in everything] == ["one", "two", "three"]

    assert await store.recent(-100, 6, limit=3) == []
    assert await store.recent(-100, 5, limit=0) == []


@pytest.mark.asyncio
async def test_history_is_capped_per_user(redis):
    clock = DateClock()
    store = MessageHistoryStore(redis, HistoryConfig(max_per_user=2), clock=clock)

    for text in ("one", "two", "three"):
        await store.append(-100, 5, text, message_id=len(text))
        clock.advance(seconds=1)

    recent = await store.recent(-100, 5, limit=10)
    assert [m.content for m in recent] == ["two", "three"]


@pytest.mark.asyncio
async def test_sweep_removes_old_entries(redis):
    clock = DateClock()
    store = MessageHistoryStore(redis, HistoryConfig(retention_minutes=30), clock=clock)

    await store.append(-100, 5, "old")
    await store.append(-100, 6, "old too")
    clock.advance(minutes=20)
    await store.append(-100, 5, "fresh")
    clock.advance(minutes=15)

    removed = await store.sweep()

    assert removed == 2
    assert [m.content for m in await store.recent(-100, 5, limit=10)] == ["fresh"]
    assert await store.recent(-100, 6, limit=10) == []
    assert await store.sweep() == 0


@pytest.mark.asyncio
async def test_storage_errors_do_not_propagate():
    store = MessageHistoryStore(BrokenRedis(), HistoryConfig())

    await store.append(-100, 5, "text")
    assert await store.recent(-100, 5, limit=3) == []
