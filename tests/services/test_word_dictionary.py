from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import RedisError

from wordguard.config.models import GroupPolicy
from wordguard.services.errors import StoreError
from wordguard.services.ignored_words import IgnoredWordFilter
from wordguard.services.word_dictionary import WordDictionary
from wordguard.services.word_store import GroupWordStore


@pytest.mark.asyncio
async def test_add_is_idempotent(redis):
    dictionary = WordDictionary(redis)

    assert await dictionary.add(-100, "foo") is True
    assert await dictionary.add(-100, "foo") is False
    assert dictionary.list(-100) == ["foo"]
    assert dictionary.list(-200) == []


@pytest.mark.asyncio
async def test_duplicate_add_does_not_consume_ids(redis):
    dictionary = WordDictionary(redis)

    await dictionary.add(-100, "foo")
    await dictionary.add(-100, "foo")
    await dictionary.add(-100, "bar")

    ids = dict((word, entry_id) for entry_id, word in dictionary.items(-100))
    assert ids["bar"] == ids["foo"] + 1


@pytest.mark.asyncio
async def test_import_skips_existing_words_without_consuming_ids(redis):
    dictionary = WordDictionary(redis)
    await dictionary.add(-100, "foo")

    assert await dictionary.import_words(-100, ["foo", "bar", "bar", " "]) == 1
    assert await dictionary.import_words(-100, ["foo", "bar"]) == 0
    await dictionary.add(-100, "baz")

    ids = dict((word, entry_id) for entry_id, word in dictionary.items(-100))
    assert ids == {"foo": 1, "bar": 2, "baz": 3}


def test_base_store_cannot_be_instantiated():
    with pytest.raises(TypeError):
        GroupWordStore(SimpleNamespace())


@pytest.mark.asyncio
async def test_add_rejects_empty_word(redis):
    dictionary = WordDictionary(redis)
    assert await dictionary.add(-100, "   ") is False
    assert dictionary.list(-100) == []


@pytest.mark.asyncio
async def test_remove(redis):
    dictionary = WordDictionary(redis)
    await dictionary.add(-100, "foo")

    assert await dictionary.remove(-100, "bar") is False
    assert await dictionary.remove(-100, "foo") is True
    assert dictionary.list(-100) == []


@pytest.mark.asyncio
async def test_load_restores_cache_from_redis(redis):
    await WordDictionary(redis).add(-100, "foo")
    await WordDictionary(redis).add(-100, "bar")

    fresh = WordDictionary(redis)
    await fresh.load()

    assert sorted(fresh.list(-100)) == ["bar", "foo"]
    assert fresh.groups() == [-100]
    entry_ids = [entry.id for entry in fresh.entries(-100)]
    assert len(set(entry_ids)) == 2


@pytest.mark.asyncio
async def test_match_masks_every_occurrence(redis):
    dictionary = WordDictionary(redis)
    await dictionary.add(-100, "foo")
    await dictionary.add(-100, "bar")

    result = dictionary.match("foo bar foo baz", -100)

    assert result.detected is True
    assert sorted(result.detected_words) == ["bar", "foo"]
    assert result.censored_text == "*** *** *** baz"
    assert result.provider == "local"


@pytest.mark.asyncio
async def test_match_is_substring_based(redis):
    dictionary = WordDictionary(redis)
    await dictionary.add(-100, "foo")

    result = dictionary.match("xfoox", -100)
    assert result.detected is True
    assert result.censored_text == "x***x"


@pytest.mark.asyncio
async def test_match_without_hits(redis):
    dictionary = WordDictionary(redis)
    await dictionary.add(-100, "foo")

    assert dictionary.match("all good", -100).detected is False
    assert dictionary.match("foo", -200).detected is False


@pytest.mark.asyncio
async def test_migrate_legacy_only_for_empty_groups(redis):
    dictionary = WordDictionary(redis)
    await dictionary.add(-200, "existing")

    groups = [
        GroupPolicy(group_id=-100, local_bad_word_dict="(1.foo)(2.bar baz)"),
        GroupPolicy(group_id=-200, local_bad_word_dict="(1.ignored)"),
        GroupPolicy(group_id=-300),
    ]
    imported = await dictionary.migrate_legacy(groups)

    assert imported == 2
    assert sorted(dictionary.list(-100)) == ["bar baz", "foo"]
    assert dictionary.list(-200) == ["existing"]

    fresh = WordDictionary(redis)
    await fresh.load()
    assert await fresh.migrate_legacy(groups) == 0


@pytest.mark.asyncio
async def test_add_raises_store_error_when_redis_fails():
    broken = SimpleNamespace(
        hexists=AsyncMock(return_value=False),
        incr=AsyncMock(side_effect=RedisError("down")),
    )
    dictionary = WordDictionary(broken)

    with pytest.raises(StoreError):
        await dictionary.add(-100, "foo")
    assert dictionary.list(-100) == []


@pytest.mark.asyncio
async def test_ignored_words_exact_match(redis):
    ignored = IgnoredWordFilter(redis)
    await ignored.add(-100, "foo")

    assert ignored.is_ignored(-100, "foo") is True
    assert ignored.is_ignored(-100, "foobar") is False
    assert ignored.is_ignored(-200, "foo") is False
    assert ignored.filter_words(-100, ["foo", "bar"]) == ["bar"]


@pytest.mark.asyncio
async def test_ignored_words_stored_separately(redis):
    dictionary = WordDictionary(redis)
    ignored = IgnoredWordFilter(redis)
    await dictionary.add(-100, "foo")
    await ignored.add(-100, "bar")

    fresh = IgnoredWordFilter(redis)
    await fresh.load()
    assert fresh.list(-100) == ["bar"]
    assert [e.word for e in fresh.entries(-100)] == ["bar"]
