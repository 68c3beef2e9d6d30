import asyncio

import pytest

from wordguard.config.models import HistoryConfig
from wordguard.services.detection.models import CheckOptions, DetectionResult
from wordguard.services.detection.orchestrator import DetectionOrchestrator
from wordguard.services.detection.providers.base import DetectionProvider
from wordguard.services.history_service import MessageHistoryStore
from wordguard.services.ignored_words import IgnoredWordFilter


class StubProvider(DetectionProvider):
    def __init__(self, name, result=None, delay=0.0, error=None, configured=True):
        self.name = name
        self.result = result or DetectionResult.clean()
        self.delay = delay
        self.error = error
        self.configured = configured
        self.calls = []

    def is_configured(self):
        return self.configured

    async def _check(self, content, options: CheckOptions):
        self.calls.append(content)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.result


def hit(provider, *words, censored=None):
    return DetectionResult(
        detected=True, detected_words=list(words), censored_text=censored, provider=provider
    )


@pytest.fixture
def history(redis):
    return MessageHistoryStore(redis, HistoryConfig())


@pytest.fixture
def ignored(redis):
    return IgnoredWordFilter(redis)


def build(providers, ignored, history, timeout=1.0):
    return DetectionOrchestrator(
        {p.name: p for p in providers}, ignored, history, timeout_seconds=timeout
    )


@pytest.mark.asyncio
async def test_first_hit_short_circuits(ignored, history, make_policy):
    local = StubProvider("local", hit("local", "foo"))
    api = StubProvider("api", hit("api", "bar"))
    orchestrator = build([local, api], ignored, history)

    result = await orchestrator.check("foo", -100, 5, make_policy(methods=("api", "local")))

    assert result.detected_words == ["foo"]
    assert result.provider == "local"
    assert local.calls == ["foo"]
    assert api.calls == []


@pytest.mark.asyncio
async def test_falls_through_to_next_provider(ignored, history, make_policy):
    local = StubProvider("local")
    api = StubProvider("api", hit("api", "bar", censored="***"))
    orchestrator = build([local, api], ignored, history)

    result = await orchestrator.check("bar", -100, 5, make_policy(methods=("local", "api")))

    assert result.provider == "api"
    assert result.censored_text == "***"
    assert len(local.calls) == 1


@pytest.mark.asyncio
async def test_only_first_listed_cloud_provider_runs(ignored, history, make_policy):
    baidu = StubProvider("baidu", hit("baidu", "x"))
    tencent = StubProvider("tencent")
    orchestrator = build([baidu, tencent], ignored, history)

    result = await orchestrator.check("text", -100, 5, make_policy(methods=("tencent", "baidu")))

    assert result.detected is False
    assert len(tencent.calls) == 1
    assert baidu.calls == []


def test_plan_orders_by_priority():
    providers = [StubProvider(n) for n in ("local", "api", "aliyun", "tencent", "ai")]
    orchestrator = build(providers, ignored=None, history=None)

    chain = orchestrator.plan(["ai", "tencent", "aliyun", "api", "local", "baidu"])
    assert [p.name for p in chain] == ["local", "api", "tencent", "ai"]


def test_plan_skips_unregistered_methods():
    orchestrator = build([StubProvider("local")], ignored=None, history=None)
    assert [p.name for p in orchestrator.plan(["local", "baidu", "ai"])] == ["local"]


@pytest.mark.asyncio
async def test_no_methods_means_clean(ignored, history, make_policy):
    orchestrator = build([StubProvider("local", hit("local", "foo"))], ignored, history)
    result = await orchestrator.check("foo", -100, 5, make_policy(methods=()))
    assert result.detected is False


@pytest.mark.asyncio
async def test_smart_verification_overturns_hit(ignored, history, make_policy):
    await history.append(-100, 5, "earlier message")
    local = StubProvider("local", hit("local", "foo"))
    ai = StubProvider("ai")
    orchestrator = build([local, ai], ignored, history)
    policy = make_policy(methods=("local", "ai"), smart_verification=True)

    result = await orchestrator.check("foo", -100, 5, policy)

    assert result.detected is False
    assert len(ai.calls) == 1
    prompt = ai.calls[0]
    assert "earlier message" in prompt
    assert "[CURRENT]" in prompt
    assert prompt.rstrip().endswith("foo")


@pytest.mark.asyncio
async def test_smart_verification_confirms_with_ai_result(ignored, history, make_policy):
    local = StubProvider("local", hit("local", "foo", censored="***"))
    ai = StubProvider("ai", hit("ai", "insult", censored="you ***"))
    orchestrator = build([local, ai], ignored, history)
    policy = make_policy(methods=("local", "ai"), smart_verification=True)

    result = await orchestrator.check("foo", -100, 5, policy)

    assert result.detected is True
    assert result.provider == "ai"
    assert result.detected_words == ["insult"]
    assert result.censored_text == "you ***"


@pytest.mark.asyncio
async def test_smart_verification_requires_ai_method(ignored, history, make_policy):
    local = StubProvider("local", hit("local", "foo"))
    ai = StubProvider("ai")
    orchestrator = build([local, ai], ignored, history)
    policy = make_policy(methods=("local",), smart_verification=True)

    result = await orchestrator.check("foo", -100, 5, policy)

    assert result.detected is True
    assert ai.calls == []


@pytest.mark.asyncio
async def test_ai_hit_is_not_verified_again(ignored, history, make_policy):
    ai = StubProvider("ai", hit("ai", "insult"))
    orchestrator = build([ai], ignored, history)
    policy = make_policy(methods=("ai",), smart_verification=True)

    result = await orchestrator.check("text", -100, 5, policy)

    assert result.detected is True
    assert len(ai.calls) == 1


@pytest.mark.asyncio
async def test_unavailable_ai_overturns_hit_during_verification(ignored, history, make_policy):
    local = StubProvider("local", hit("local", "foo"))
    ai = StubProvider("ai", hit("ai", "insult"), configured=False)
    orchestrator = build([local, ai], ignored, history)
    policy = make_policy(methods=("local", "ai"), smart_verification=True)

    result = await orchestrator.check("foo", -100, 5, policy)

    assert result.detected is False
    assert ai.calls == []


@pytest.mark.asyncio
async def test_ignored_words_suppress_detection(ignored, history, make_policy):
    await ignored.add(-100, "foo")
    local = StubProvider("local", hit("local", "foo", censored="***"))
    orchestrator = build([local], ignored, history)

    result = await orchestrator.check("foo", -100, 5, make_policy())

    assert result.detected is False


@pytest.mark.asyncio
async def test_ignored_words_are_removed_from_partial_hit(ignored, history, make_policy):
    await ignored.add(-100, "foo")
    local = StubProvider("local", hit("local", "foo", "bar", censored="*** ***"))
    orchestrator = build([local], ignored, history)

    result = await orchestrator.check("foo bar", -100, 5, make_policy())

    assert result.detected is True
    assert result.detected_words == ["bar"]
    assert result.censored_text == "*** ***"


@pytest.mark.asyncio
async def test_slow_provider_times_out_and_chain_continues(ignored, history, make_policy):
    slow = StubProvider("local", hit("local", "foo"), delay=1.0)
    api = StubProvider("api", hit("api", "bar"))
    orchestrator = build([slow, api], ignored, history, timeout=0.05)

    result = await orchestrator.check("foo bar", -100, 5, make_policy(methods=("local", "api")))

    assert result.provider == "api"


@pytest.mark.asyncio
async def test_provider_errors_count_as_clean(ignored, history, make_policy):
    broken = StubProvider("local", error=RuntimeError("boom"))
    orchestrator = build([broken], ignored, history)

    result = await orchestrator.check("foo", -100, 5, make_policy())

    assert result.detected is False
    assert broken.calls == ["foo"]
