# =================================================================================
# Файл: wordguard/filters/access_filters.py
# Описание: Фильтр прав доступа для команд управления модерацией.
#           Доступ: глобальные администраторы (ADMIN_IDS) или
#           администраторы/владелец чата.
# =================================================================================

import logging
from typing import Any, Optional

from aiogram import Bot
from aiogram.enums import ChatMemberStatus
from aiogram.exceptions import TelegramAPIError
from aiogram.filters import BaseFilter
from aiogram.types import Message

from wordguard.utils.dependencies import Deps

logger = logging.getLogger(__name__)

CHAT_ADMIN_STATUSES = (ChatMemberStatus.ADMINISTRATOR, ChatMemberStatus.CREATOR)


class AdminFilter(BaseFilter):
    """
    Пропускает сообщения от администраторов.

    global_only=True: только глобальные администраторы из настроек.
    """

    def __init__(self, global_only: bool = False):
        self.global_only = global_only

    async def __call__(self, message: Message, **data: Any) -> bool:
        deps: Optional[Deps] = data.get("deps")
        if not deps:
            logger.error("Критическая ошибка: 'deps' не был передан в AdminFilter.")
            return False

        if not message.from_user:
            return False

        user_id = message.from_user.id
        if user_id in deps.settings.admin_ids:
            return True
        if self.global_only:
            return False

        bot: Optional[Bot] = data.get("bot") or message.bot
        if bot is None or message.chat.type not in ("group", "supergroup"):
            return False

        try:
            member = await bot.get_chat_member(chat_id=message.chat.id, user_id=user_id)
        except TelegramAPIError as e:
            logger.warning("Не удалось проверить роль %s в чате %s: %s", user_id, message.chat.id, e)
            return False

        return member.status in CHAT_ADMIN_STATUSES
