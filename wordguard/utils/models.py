# wordguard/utils/models.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BadWordEntry(BaseModel):
    """Запрещённое слово группы. Пара (group_id, word) уникальна."""
    id: int
    group_id: int
    word: str


class IgnoredWordEntry(BaseModel):
    """Слово-исключение группы, которое не считается нарушением."""
    id: int
    group_id: int
    word: str


class HistoryMessage(BaseModel):
    """Сообщение из недавней истории пользователя."""
    group_id: int
    user_id: int
    content: str
    timestamp: datetime = Field(default_factory=utcnow)
    message_id: Optional[int] = None


class ViolationAuditEntry(BaseModel):
    """Запись журнала нарушений для отчётов."""
    user_id: int
    group_id: int
    words: List[str] = Field(default_factory=list)
    content: str
    timestamp: datetime = Field(default_factory=utcnow)


class PlatformMessage(BaseModel):
    """Входящее сообщение, приведённое к независимому от платформы виду."""
    model_config = ConfigDict(frozen=True)

    group_id: int
    user_id: int
    content: str
    message_id: Optional[int] = None
    is_group_message: bool = True
    nickname: Optional[str] = None
    mention: Optional[str] = None


class EnforcementRequest(BaseModel):
    """Действие, которое платформа должна применить к нарушителю."""
    group_id: int
    user_id: int
    action: Literal["mute", "delete_message"]
    duration_seconds: Optional[int] = None
    message_id: Optional[int] = None


class WarningMessage(BaseModel):
    """Предупреждение нарушителю, отправляемое в группу."""
    group_id: int
    user_id: int
    text: str


class ReportResult(BaseModel):
    """Результат отправки отчёта по почте."""
    success: bool
    count: int = 0
    receivers: int = 0
    error: Optional[str] = None
