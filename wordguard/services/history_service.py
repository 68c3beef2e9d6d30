# wordguard/services/history_service.py
import json
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from loguru import logger
from pydantic import ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from wordguard.config.models import HistoryConfig
from wordguard.utils.keys import KeyFactory
from wordguard.utils.models import HistoryMessage, utcnow


class MessageHistoryStore:
    """
    Недавняя история сообщений пользователя в группе.

    Используется как контекст для повторной проверки через AI.
    Каждая пара (группа, пользователь) хранится в отдельном ZSET,
    где score это время сообщения. Записи не удаляются при чтении,
    устаревшие записи убирает фоновая очистка.
    """

    def __init__(
        self,
        redis: Redis,
        config: HistoryConfig,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.redis = redis
        self.config = config
        self.keys = KeyFactory
        self._clock = clock

    async def append(
        self,
        group_id: int,
        user_id: int,
        content: str,
        message_id: Optional[int] = None,
    ) -> None:
        """
        Добавляет сообщение в историю.

        Ошибки хранилища логируются и не передаются вызывающему коду.
        """
        message = HistoryMessage(
            group_id=group_id,
            user_id=user_id,
            content=content,
            timestamp=self._clock(),
            message_id=message_id,
        )
        key = self.keys.message_history(group_id, user_id)

        try:
            pipe = self.redis.pipeline()
            pipe.zadd(key, {message.model_dump_json(): message.timestamp.timestamp()})
            # оставляем только последние max_per_user записей
            pipe.zremrangebyrank(key, 0, -(self.config.max_per_user + 1))
            pipe.sadd(self.keys.message_history_index(), key)
            await pipe.execute()
        except RedisError as e:
            logger.error(f"❌ Не удалось сохранить историю {group_id}/{user_id}: {e}")

    async def recent(self, group_id: int, user_id: int, limit: int) -> List[HistoryMessage]:
        """
        Возвращает последние сообщения пользователя в хронологическом порядке.

        Args:
            group_id: ID группы
            user_id: ID пользователя
            limit: Максимальное количество сообщений

        Returns:
            Список HistoryMessage от старых к новым (не больше limit)
        """
        if limit <= 0:
            return []

        key = self.keys.message_history(group_id, user_id)
        try:
            rows = await self.redis.zrevrange(key, 0, limit - 1)
        except RedisError as e:
            logger.error(f"❌ Не удалось прочитать историю {group_id}/{user_id}: {e}")
            return []

        messages: List[HistoryMessage] = []
        for raw in reversed(rows):
            try:
                messages.append(HistoryMessage.model_validate_json(raw))
            except (ValidationError, json.JSONDecodeError) as e:
                logger.warning(f"⚠️ Повреждённая запись истории в {key}: {e}")

        return messages

    async def sweep(self) -> int:
        """
        Удаляет записи старше окна хранения.

        Returns:
            Количество удалённых записей
        """
        cutoff = self._clock() - timedelta(minutes=self.config.retention_minutes)
        index_key = self.keys.message_history_index()
        removed = 0

        keys = await self.redis.smembers(index_key)
        for raw_key in keys:
            key = raw_key.decode("utf-8") if isinstance(raw_key, bytes) else raw_key
            removed += await self.redis.zremrangebyscore(key, "-inf", cutoff.timestamp())
            if not await self.redis.zcard(key):
                await self.redis.srem(index_key, key)

        if removed:
            logger.info(f"🧹 Очистка истории: удалено {removed} записей")
        return removed
