# wordguard/handlers/group_handler.py
import logging

from aiogram import F, Router
from aiogram.types import Message

from wordguard.filters.not_command_filter import NotCommandFilter
from wordguard.utils.dependencies import Deps
from wordguard.utils.models import PlatformMessage

group_router = Router(name="group_moderation")
logger = logging.getLogger(__name__)


def to_platform_message(message: Message) -> PlatformMessage:
    """Приводит сообщение Telegram к независимому от платформы виду."""
    user = message.from_user
    return PlatformMessage(
        group_id=message.chat.id,
        user_id=user.id,
        content=message.text or message.caption or "",
        message_id=message.message_id,
        is_group_message=message.chat.type in ("group", "supergroup"),
        nickname=user.full_name,
        mention=user.mention_html(),
    )


@group_router.message(
    F.chat.type.in_({"group", "supergroup"}),
    F.from_user,
    F.text | F.caption,
    NotCommandFilter(),
)
async def handle_group_message(message: Message, deps: Deps) -> None:
    """Передаёт каждое текстовое сообщение группы в конвейер модерации."""
    if message.from_user.is_bot:
        return

    outcome = await deps.pipeline.handle(to_platform_message(message))
    if outcome.status == "violation":
        logger.info(
            "Нарушение в чате %s от %s: %s",
            message.chat.id,
            message.from_user.id,
            outcome.detection.detected_words,
        )
