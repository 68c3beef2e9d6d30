# wordguard/handlers/admin/members_handler.py
"""
Белый список, статистика нарушителей, сброс счётчиков и история сообщений.
"""
import logging

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from wordguard.filters.access_filters import AdminFilter
from wordguard.handlers.admin.common import command_args, ensure_group, target_user_id
from wordguard.services.errors import StoreError
from wordguard.texts import messages
from wordguard.utils.dependencies import Deps
from wordguard.utils.text_utils import clip_text, escape_html

members_router = Router(name="members_admin")
logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 10
MAX_HISTORY_LIMIT = 50


@members_router.message(Command("tb_wl_add"), AdminFilter())
async def cmd_whitelist_add(message: Message, deps: Deps) -> None:
    """Добавляет пользователя в белый список: /tb_wl_add <user_id> или ответом на сообщение."""
    if not await ensure_group(message):
        return
    user_id = target_user_id(message, command_args(message))
    if user_id is None:
        await message.reply(messages.SPECIFY_USER_ID)
        return

    try:
        added = await deps.whitelist_service.add(message.chat.id, user_id)
    except StoreError:
        await message.reply(messages.STORE_ERROR)
        return

    await message.reply(
        messages.USER_ADDED_WHITELIST.format(user_id) if added else messages.ALREADY_WHITELISTED
    )


@members_router.message(Command("tb_wl_remove"), AdminFilter())
async def cmd_whitelist_remove(message: Message, deps: Deps) -> None:
    if not await ensure_group(message):
        return
    user_id = target_user_id(message, command_args(message))
    if user_id is None:
        await message.reply(messages.SPECIFY_USER_ID)
        return

    try:
        removed = await deps.whitelist_service.remove(message.chat.id, user_id)
    except StoreError:
        await message.reply(messages.STORE_ERROR)
        return

    await message.reply(
        messages.USER_REMOVED_WHITELIST.format(user_id) if removed else messages.NOT_IN_WHITELIST
    )


@members_router.message(Command("tb_wl_list"), AdminFilter())
async def cmd_whitelist_list(message: Message, deps: Deps) -> None:
    if not await ensure_group(message):
        return
    users = await deps.whitelist_service.list(message.chat.id)
    if not users:
        await message.reply(messages.NO_WHITELIST_USERS)
        return
    lines = "\n".join(f"• <code>{user_id}</code>" for user_id in users)
    await message.reply(messages.WHITELIST_USERS_LIST.format(len(users), lines))


@members_router.message(Command("tb_stats"), AdminFilter())
async def cmd_stats(message: Message, deps: Deps) -> None:
    """Показывает пользователей с активным окном нарушений в этой группе."""
    if not await ensure_group(message):
        return
    violators = deps.violation_tracker.violators(message.chat.id)
    text = messages.STATS_HEADER.format(len(violators))
    if violators:
        text += "\n" + "\n".join(
            f"• <code>{user_id}</code>: {count}"
            for user_id, count in sorted(violators, key=lambda item: -item[1])
        )
    await message.reply(text)


@members_router.message(Command("tb_clean"), AdminFilter())
async def cmd_clean(message: Message, deps: Deps) -> None:
    """Сбрасывает счётчик: /tb_clean <user_id> | ответом на сообщение | /tb_clean all"""
    if not await ensure_group(message):
        return
    args = command_args(message)

    if args and args[0].lower() in ("all", "-a"):
        cleared = await deps.violation_tracker.clear_group(message.chat.id)
        await message.reply(messages.ALL_RECORDS_CLEARED.format(cleared))
        return

    user_id = target_user_id(message, args)
    if user_id is None:
        await message.reply(messages.SPECIFY_USER_ID)
        return

    if await deps.violation_tracker.clear(message.chat.id, user_id):
        await message.reply(messages.RECORDS_CLEARED.format(user_id))
    else:
        await message.reply(messages.NO_ACTIVE_RECORDS.format(user_id))


@members_router.message(Command("tb_history"), AdminFilter())
async def cmd_history(message: Message, deps: Deps) -> None:
    """Последние сообщения пользователя: /tb_history <user_id> [limit]"""
    if not await ensure_group(message):
        return
    args = command_args(message)
    user_id = target_user_id(message, args)
    if user_id is None:
        await message.reply(messages.SPECIFY_USER_ID)
        return

    limit = DEFAULT_HISTORY_LIMIT
    if len(args) > 1 and args[1].isdigit():
        limit = min(max(int(args[1]), 1), MAX_HISTORY_LIMIT)

    history = await deps.history_store.recent(message.chat.id, user_id, limit)
    if not history:
        await message.reply(messages.NO_HISTORY.format(user_id))
        return

    lines = "\n".join(
        f"[{item.timestamp:%H:%M:%S}] {escape_html(clip_text(item.content, 200))}"
        for item in history
    )
    await message.reply(messages.HISTORY_LIST.format(user_id, lines))
