import os
import sys
from pathlib import Path

import fakeredis.aioredis
import pytest
import pytest_asyncio

# Minimal env variables so importing settings does not fail
os.environ.setdefault("BOT_TOKEN", "42:test")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")
os.environ.setdefault("ADMIN_IDS", "1")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wordguard.config.models import EffectivePolicy  # noqa: E402


@pytest_asyncio.fixture
async def redis():
    r = fakeredis.aioredis.FakeRedis(decode_responses=True)
    await r.flushall()
    yield r
    await r.flushall()
    await r.aclose()


class FakeClock:
    """Управляемые часы для тестов окон и интервалов."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def build_policy(**overrides) -> EffectivePolicy:
    values = dict(
        group_id=-100,
        methods=("local",),
        smart_verification=False,
        context_msg_count=3,
        ai_threshold=0.6,
        check_probability=1.0,
        show_censored_word=True,
        trigger_threshold=3,
        window_seconds=300,
        mute_minutes=10,
    )
    values.update(overrides)
    return EffectivePolicy(**values)


@pytest.fixture
def make_policy():
    return build_policy
