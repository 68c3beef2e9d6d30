# wordguard/services/whitelist_service.py
from typing import Iterable, List

from loguru import logger
from redis.asyncio import Redis
from redis.exceptions import RedisError

from wordguard.config.models import GroupPolicy
from wordguard.services.errors import StoreError
from wordguard.utils.keys import KeyFactory


class WhitelistService:
    """
    Пользователи, освобождённые от проверки в группе.

    Хранилище является единственным источником истины. Список из конфигурации
    переносится в хранилище один раз и больше не читается.
    """

    def __init__(self, redis: Redis):
        self.redis = redis
        self.keys = KeyFactory

    async def seed(self, groups: Iterable[GroupPolicy]) -> None:
        for group in groups:
            if not group.whitelist:
                continue
            marked = await self.redis.set(self.keys.whitelist_seeded(group.group_id), 1, nx=True)
            if not marked:
                continue
            await self.redis.sadd(self.keys.whitelist(group.group_id), *group.whitelist)
            logger.info(
                f"📥 Группа {group.group_id}: белый список заполнен из конфигурации "
                f"({len(group.whitelist)} пользователей)"
            )

    async def add(self, group_id: int, user_id: int) -> bool:
        try:
            added = await self.redis.sadd(self.keys.whitelist(group_id), user_id)
        except RedisError as e:
            logger.error(f"❌ Ошибка добавления {user_id} в белый список группы {group_id}: {e}")
            raise StoreError("whitelist add failed") from e
        return bool(added)

    async def remove(self, group_id: int, user_id: int) -> bool:
        try:
            removed = await self.redis.srem(self.keys.whitelist(group_id), user_id)
        except RedisError as e:
            logger.error(f"❌ Ошибка удаления {user_id} из белого списка группы {group_id}: {e}")
            raise StoreError("whitelist remove failed") from e
        return bool(removed)

    async def list(self, group_id: int) -> List[int]:
        members = await self.redis.smembers(self.keys.whitelist(group_id))
        return sorted(int(m) for m in members)

    async def is_whitelisted(self, group_id: int, user_id: int) -> bool:
        try:
            return bool(await self.redis.sismember(self.keys.whitelist(group_id), user_id))
        except RedisError as e:
            logger.error(f"❌ Ошибка проверки белого списка группы {group_id}: {e}")
            return False
