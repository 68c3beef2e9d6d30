# wordguard/services/moderation_service.py
# Описание: Применение наказаний и отправка предупреждений в Telegram.

from datetime import datetime, timedelta, timezone

from aiogram import Bot
from aiogram.enums import ChatMemberStatus
from aiogram.exceptions import TelegramAPIError, TelegramBadRequest
from aiogram.types import ChatPermissions
from loguru import logger

from wordguard.utils.models import EnforcementRequest, WarningMessage


class TelegramModerationGateway:
    """
    Управляет мутами, удалением сообщений и предупреждениями в чатах.

    Методы возвращают True/False и не выбрасывают ошибки Telegram API.
    """

    def __init__(self, bot: Bot, check_admin: bool = True):
        self.bot = bot
        self.check_admin = check_admin
        logger.info("Сервис TelegramModerationGateway инициализирован.")

    async def can_restrict(self, chat_id: int) -> bool:
        """Проверяет, может ли бот ограничивать участников чата."""
        try:
            member = await self.bot.get_chat_member(chat_id=chat_id, user_id=self.bot.id)
        except TelegramAPIError as e:
            logger.error(f"Не удалось получить права бота в чате {chat_id}: {e}")
            return False

        if member.status == ChatMemberStatus.CREATOR:
            return True
        return member.status == ChatMemberStatus.ADMINISTRATOR and bool(
            getattr(member, "can_restrict_members", False)
        )

    async def enforce(self, request: EnforcementRequest) -> bool:
        if request.action == "mute":
            return await self.mute(request.group_id, request.user_id, request.duration_seconds or 0)
        if request.action == "delete_message" and request.message_id is not None:
            return await self.delete_message(request.group_id, request.message_id)
        logger.warning(f"Неизвестное или неполное действие модерации: {request}")
        return False

    async def mute(self, chat_id: int, user_id: int, duration_seconds: int) -> bool:
        """Применяет мут к пользователю в чате."""
        if self.check_admin and not await self.can_restrict(chat_id):
            logger.warning(f"У бота нет прав ограничивать участников в чате {chat_id}, мут пропущен.")
            return False

        try:
            until_date = datetime.now(timezone.utc) + timedelta(seconds=duration_seconds)
            await self.bot.restrict_chat_member(
                chat_id=chat_id,
                user_id=user_id,
                permissions=ChatPermissions(can_send_messages=False),
                until_date=until_date,
            )
            logger.success(f"Пользователь {user_id} заглушен в чате {chat_id} на {duration_seconds}s.")
            return True
        except TelegramBadRequest as e:
            logger.error(f"Не удалось заглушить пользователя {user_id} в чате {chat_id}: {e.message}")
        except TelegramAPIError as e:
            logger.exception(f"Непредвиденная ошибка при муте пользователя {user_id}: {e}")
        return False

    async def delete_message(self, chat_id: int, message_id: int) -> bool:
        try:
            await self.bot.delete_message(chat_id=chat_id, message_id=message_id)
            return True
        except TelegramAPIError as e:
            logger.error(f"Не удалось удалить сообщение {message_id} в чате {chat_id}: {e}")
            return False

    async def send_warning(self, warning: WarningMessage) -> bool:
        try:
            await self.bot.send_message(chat_id=warning.group_id, text=warning.text)
            return True
        except TelegramAPIError as e:
            logger.error(f"Не удалось отправить предупреждение в чат {warning.group_id}: {e}")
            return False
