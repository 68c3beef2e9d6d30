# wordguard/handlers/admin/dictionary_handler.py
"""
Управление словарём запрещённых слов и словами-исключениями группы.
"""
import logging

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from wordguard.filters.access_filters import AdminFilter
from wordguard.handlers.admin.common import command_tail, ensure_group
from wordguard.services.errors import StoreError
from wordguard.texts import messages
from wordguard.utils.dependencies import Deps
from wordguard.utils.text_utils import escape_html

dictionary_router = Router(name="dictionary_admin")
logger = logging.getLogger(__name__)


def _format_words(words) -> str:
    return "\n".join(f"• {escape_html(word)}" for word in sorted(words))


@dictionary_router.message(Command("tb_add"), AdminFilter())
async def cmd_add_word(message: Message, deps: Deps) -> None:
    """Добавляет запрещённое слово. Пример: /tb_add слово"""
    if not await ensure_group(message):
        return
    word = command_tail(message)
    if not word:
        await message.reply(messages.SPECIFY_WORD)
        return

    try:
        added = await deps.word_dictionary.add(message.chat.id, word)
    except StoreError:
        await message.reply(messages.STORE_ERROR)
        return

    if added:
        await message.reply(messages.WORD_ADDED.format(escape_html(word)))
    else:
        await message.reply(messages.WORD_EXISTS)


@dictionary_router.message(Command("tb_remove"), AdminFilter())
async def cmd_remove_word(message: Message, deps: Deps) -> None:
    if not await ensure_group(message):
        return
    word = command_tail(message)
    if not word:
        await message.reply(messages.SPECIFY_WORD)
        return

    try:
        removed = await deps.word_dictionary.remove(message.chat.id, word)
    except StoreError:
        await message.reply(messages.STORE_ERROR)
        return

    if removed:
        await message.reply(messages.WORD_REMOVED.format(escape_html(word)))
    else:
        await message.reply(messages.WORD_NOT_FOUND)


@dictionary_router.message(Command("tb_list"), AdminFilter())
async def cmd_list_words(message: Message, deps: Deps) -> None:
    if not await ensure_group(message):
        return
    words = deps.word_dictionary.list(message.chat.id)
    if not words:
        await message.reply(messages.NO_FORBIDDEN_WORDS)
        return
    await message.reply(messages.FORBIDDEN_WORDS_LIST.format(len(words), _format_words(words)))


@dictionary_router.message(Command("tb_ignore_add"), AdminFilter())
async def cmd_add_ignored_word(message: Message, deps: Deps) -> None:
    """Добавляет слово-исключение. Пример: /tb_ignore_add слово"""
    if not await ensure_group(message):
        return
    word = command_tail(message)
    if not word:
        await message.reply(messages.SPECIFY_WORD)
        return

    try:
        added = await deps.ignored_words.add(message.chat.id, word)
    except StoreError:
        await message.reply(messages.STORE_ERROR)
        return

    if added:
        await message.reply(messages.IGNORED_WORD_ADDED.format(escape_html(word)))
    else:
        await message.reply(messages.WORD_EXISTS)


@dictionary_router.message(Command("tb_ignore_remove"), AdminFilter())
async def cmd_remove_ignored_word(message: Message, deps: Deps) -> None:
    if not await ensure_group(message):
        return
    word = command_tail(message)
    if not word:
        await message.reply(messages.SPECIFY_WORD)
        return

    try:
        removed = await deps.ignored_words.remove(message.chat.id, word)
    except StoreError:
        await message.reply(messages.STORE_ERROR)
        return

    if removed:
        await message.reply(messages.IGNORED_WORD_REMOVED.format(escape_html(word)))
    else:
        await message.reply(messages.WORD_NOT_FOUND)


@dictionary_router.message(Command("tb_ignore_list"), AdminFilter())
async def cmd_list_ignored_words(message: Message, deps: Deps) -> None:
    if not await ensure_group(message):
        return
    words = deps.ignored_words.list(message.chat.id)
    if not words:
        await message.reply(messages.NO_IGNORED_WORDS)
        return
    await message.reply(messages.IGNORED_WORDS_LIST.format(len(words), _format_words(words)))
