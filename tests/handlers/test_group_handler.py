from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from aiogram.types import Chat, Message, User

from wordguard.filters.not_command_filter import NotCommandFilter
from wordguard.handlers.group_handler import handle_group_message, to_platform_message
from wordguard.services.pipeline import ModerationOutcome


def group_message(text=None, caption=None, is_bot=False):
    return Message(
        message_id=42,
        date=datetime.now(),
        chat=Chat(id=-100, type="supergroup", title="chat"),
        from_user=User(id=5, is_bot=is_bot, first_name="Alice", last_name="Smith"),
        text=text,
        caption=caption,
    )


def test_to_platform_message():
    pm = to_platform_message(group_message("hello <world>"))

    assert pm.group_id == -100
    assert pm.user_id == 5
    assert pm.message_id == 42
    assert pm.content == "hello <world>"
    assert pm.is_group_message is True
    assert pm.nickname == "Alice Smith"
    assert "tg://user?id=5" in pm.mention


def test_caption_is_used_as_content():
    assert to_platform_message(group_message(caption="photo caption")).content == "photo caption"


@pytest.mark.asyncio
async def test_group_message_goes_to_pipeline():
    deps = SimpleNamespace(
        pipeline=SimpleNamespace(handle=AsyncMock(return_value=ModerationOutcome(status="clean")))
    )

    await handle_group_message(group_message("hello"), deps)

    sent = deps.pipeline.handle.await_args.args[0]
    assert sent.content == "hello"


@pytest.mark.asyncio
async def test_bot_messages_are_ignored():
    deps = SimpleNamespace(pipeline=SimpleNamespace(handle=AsyncMock()))

    await handle_group_message(group_message("hello", is_bot=True), deps)

    deps.pipeline.handle.assert_not_awaited()


@pytest.mark.asyncio
async def test_not_command_filter():
    flt = NotCommandFilter()
    assert await flt(group_message("/tb_list")) is False
    assert await flt(group_message("just text")) is True
    assert await flt(group_message(caption="/cmd in caption")) is False
