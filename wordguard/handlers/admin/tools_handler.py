# wordguard/handlers/admin/tools_handler.py
"""
Проверка текста, сведения о политике группы, отчёты и очистка.
"""
import logging

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from wordguard.filters.access_filters import AdminFilter
from wordguard.handlers.admin.common import command_tail, ensure_group
from wordguard.texts import messages
from wordguard.utils.dependencies import Deps
from wordguard.utils.text_utils import escape_html

tools_router = Router(name="tools_admin")
logger = logging.getLogger(__name__)

REPORT_HOURS = 24


@tools_router.message(Command("tb_check"), AdminFilter())
async def cmd_check(message: Message, deps: Deps) -> None:
    """Пробная проверка текста без учёта нарушений: /tb_check <текст>"""
    if not await ensure_group(message):
        return
    text = command_tail(message)
    if not text:
        await message.reply(messages.SPECIFY_TEXT)
        return

    policy = deps.settings.moderation.resolve(message.chat.id)
    if policy is None:
        await message.reply(messages.GROUP_NOT_CONFIGURED)
        return

    result = await deps.orchestrator.check(text, message.chat.id, message.from_user.id, policy)
    if not result.detected:
        await message.reply(messages.CHECK_SAFE)
        return

    await message.reply(messages.CHECK_DETECTED.format(escape_html(", ".join(result.detected_words))))


@tools_router.message(Command("tb_info"), AdminFilter())
async def cmd_info(message: Message, deps: Deps) -> None:
    if not await ensure_group(message):
        return
    policy = deps.settings.moderation.resolve(message.chat.id)
    if policy is None:
        await message.reply(messages.GROUP_NOT_CONFIGURED)
        return

    whitelist = await deps.whitelist_service.list(message.chat.id)
    await message.reply(
        messages.GROUP_INFO.format(
            message.chat.id,
            "enabled" if policy.enabled else "disabled",
            ", ".join(policy.methods) or "-",
            "on" if policy.smart_verification else "off",
            policy.trigger_threshold,
            f"{policy.window_seconds / 60:g}",
            f"{policy.mute_minutes:g}",
            len(whitelist),
        )
    )


@tools_router.message(Command("tb_report"), AdminFilter(global_only=True))
async def cmd_report(message: Message, deps: Deps) -> None:
    """Отправляет сводку нарушений за последние сутки на почту."""
    result = await deps.mailer_service.send_summary(hours=REPORT_HOURS)

    if result.error == "smtp_not_configured":
        await message.reply(messages.SMTP_NOT_CONFIGURED)
    elif not result.success:
        await message.reply(messages.REPORT_FAILED.format(escape_html(result.error or "unknown")))
    elif result.count == 0:
        await message.reply(messages.NO_VIOLATIONS)
    else:
        await message.reply(messages.REPORT_SENT.format(result.receivers, result.count))


@tools_router.message(Command("tb_cleancache"), AdminFilter(global_only=True))
async def cmd_clean_cache(message: Message, deps: Deps) -> None:
    """Немедленно запускает очистку истории и троттлинга."""
    removed = await deps.history_store.sweep()
    dropped = deps.throttle.sweep()
    logger.info("Ручная очистка: история=%s, троттлинг=%s", removed, dropped)
    await message.reply(messages.CACHE_CLEANED.format(removed, dropped))
