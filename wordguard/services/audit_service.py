# wordguard/services/audit_service.py
import json
from datetime import datetime
from typing import List

from loguru import logger
from pydantic import ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from wordguard.utils.keys import KeyFactory
from wordguard.utils.models import ViolationAuditEntry


class ViolationAuditLog:
    """Журнал нарушений для почтовых отчётов. ZSET, score = время нарушения."""

    def __init__(self, redis: Redis):
        self.redis = redis
        self.keys = KeyFactory

    async def append(self, entry: ViolationAuditEntry) -> None:
        """Сохраняет запись. Ошибки хранилища только логируются."""
        try:
            await self.redis.zadd(
                self.keys.violation_log(),
                {entry.model_dump_json(): entry.timestamp.timestamp()},
            )
        except RedisError as e:
            logger.error(f"❌ Не удалось записать нарушение в журнал: {e}")

    async def since(self, cutoff: datetime) -> List[ViolationAuditEntry]:
        """Возвращает записи не старше cutoff в хронологическом порядке."""
        rows = await self.redis.zrangebyscore(self.keys.violation_log(), cutoff.timestamp(), "+inf")
        entries: List[ViolationAuditEntry] = []
        for raw in rows:
            try:
                entries.append(ViolationAuditEntry.model_validate_json(raw))
            except (ValidationError, json.JSONDecodeError) as e:
                logger.warning(f"⚠️ Повреждённая запись журнала нарушений: {e}")
        return entries

    async def prune(self, before: datetime) -> int:
        removed = await self.redis.zremrangebyscore(
            self.keys.violation_log(), "-inf", f"({before.timestamp()}"
        )
        if removed:
            logger.info(f"🧹 Из журнала нарушений удалено {removed} старых записей")
        return removed
