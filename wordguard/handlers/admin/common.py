# wordguard/handlers/admin/common.py
"""
Общие помощники для команд администраторов.
"""
from typing import List, Optional

from aiogram.types import Message

from wordguard.texts import messages


def command_args(message: Message) -> List[str]:
    """Аргументы команды без самой команды."""
    parts = (message.text or "").split(maxsplit=1)
    return parts[1].split() if len(parts) > 1 else []


def command_tail(message: Message) -> str:
    """Весь текст после команды одной строкой."""
    parts = (message.text or "").split(maxsplit=1)
    return parts[1].strip() if len(parts) > 1 else ""


def target_user_id(message: Message, args: List[str]) -> Optional[int]:
    """ID пользователя из первого аргумента или из сообщения, на которое ответили."""
    if args:
        try:
            return int(args[0])
        except ValueError:
            return None
    reply = message.reply_to_message
    if reply and reply.from_user:
        return reply.from_user.id
    return None


async def ensure_group(message: Message) -> bool:
    """Отвечает подсказкой и возвращает False, если команда вызвана не в группе."""
    if message.chat.type in ("group", "supergroup"):
        return True
    await message.reply(messages.GROUP_ONLY)
    return False
