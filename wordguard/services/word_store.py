# wordguard/services/word_store.py
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Tuple

from loguru import logger
from redis.asyncio import Redis
from redis.exceptions import RedisError

from wordguard.services.errors import StoreError


def _decode(value) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


class GroupWordStore(ABC):
    """
    Базовое хранилище слов, привязанных к группе.

    Архитектура:
    - Redis (HASH слово -> id на каждую группу) как источник истины
    - In-memory кэш на экземпляре сервиса, без глобального состояния
    - Сервис является единственным писателем своих записей

    Наследники задают ключи через `_group_key`, `_sequence_key`, `_groups_key`.
    """

    kind = "words"

    def __init__(self, redis: Redis):
        self.redis = redis
        self._cache: Dict[int, Dict[str, int]] = {}

    # --- ключи ---
    @abstractmethod
    def _group_key(self, group_id: int) -> str:
        pass

    @abstractmethod
    def _sequence_key(self) -> str:
        pass

    @abstractmethod
    def _groups_key(self) -> str:
        pass

    # --- загрузка ---
    async def load(self) -> None:
        """
        Загружает все записи из Redis в кэш.

        Ошибка Redis при старте пробрасывается: без словаря работать нельзя.
        """
        cache: Dict[int, Dict[str, int]] = {}
        group_ids = await self.redis.smembers(self._groups_key())

        for raw_group_id in group_ids:
            group_id = int(_decode(raw_group_id))
            rows = await self.redis.hgetall(self._group_key(group_id))
            if rows:
                cache[group_id] = {
                    _decode(word): int(_decode(entry_id)) for word, entry_id in rows.items()
                }

        self._cache = cache
        logger.info(f"✅ Загружены {self.kind} для {len(cache)} групп из Redis")

    # --- валидация ---
    def _normalize_word(self, word: str) -> str:
        return (word or "").strip()

    def _validate_word(self, word: str) -> bool:
        if not self._normalize_word(word):
            logger.warning(f"⚠️ Попытка операции с пустым словом ({self.kind})")
            return False
        return True

    # --- изменения ---
    async def add(self, group_id: int, word: str) -> bool:
        """
        Добавляет слово в группу.

        Returns:
            True если слово добавлено, False если уже существует или пустое

        Raises:
            StoreError: если Redis не смог сохранить запись
        """
        if not self._validate_word(word):
            return False

        word = self._normalize_word(word)

        try:
            if await self.redis.hexists(self._group_key(group_id), word):
                logger.info(f"ℹ️ '{word}' уже есть в группе {group_id} ({self.kind})")
                return False
            entry_id = await self.redis.incr(self._sequence_key())
            created = await self.redis.hsetnx(self._group_key(group_id), word, entry_id)
            if created:
                await self.redis.sadd(self._groups_key(), group_id)
        except RedisError as e:
            logger.error(f"❌ Ошибка добавления '{word}' в группу {group_id} ({self.kind}): {e}")
            raise StoreError(f"failed to add '{word}'") from e

        if not created:
            logger.info(f"ℹ️ '{word}' уже есть в группе {group_id} ({self.kind})")
            return False

        self._cache.setdefault(group_id, {})[word] = int(entry_id)
        logger.success(f"✅ '{word}' добавлено в группу {group_id} ({self.kind})")
        return True

    async def remove(self, group_id: int, word: str) -> bool:
        """
        Удаляет слово из группы.

        Returns:
            True если слово удалено, False если не найдено

        Raises:
            StoreError: если Redis не смог удалить запись
        """
        if not self._validate_word(word):
            return False

        word = self._normalize_word(word)

        try:
            removed = await self.redis.hdel(self._group_key(group_id), word)
        except RedisError as e:
            logger.error(f"❌ Ошибка удаления '{word}' из группы {group_id} ({self.kind}): {e}")
            raise StoreError(f"failed to remove '{word}'") from e

        if not removed:
            logger.warning(f"⚠️ '{word}' не найдено в группе {group_id} ({self.kind})")
            return False

        self._cache.get(group_id, {}).pop(word, None)
        logger.success(f"✅ '{word}' удалено из группы {group_id} ({self.kind})")
        return True

    async def import_words(self, group_id: int, words: Iterable[str]) -> int:
        """
        Массово импортирует слова, пропуская уже существующие.

        Returns:
            Количество добавленных слов
        """
        unique: List[str] = []
        for word in words:
            word = self._normalize_word(word)
            if word and word not in unique:
                unique.append(word)

        if not unique:
            return 0

        try:
            existing = await self.redis.hmget(self._group_key(group_id), unique)
            unique = [word for word, entry_id in zip(unique, existing) if entry_id is None]
            if not unique:
                return 0

            last_id = await self.redis.incrby(self._sequence_key(), len(unique))
            first_id = last_id - len(unique) + 1

            pipe = self.redis.pipeline()
            for offset, word in enumerate(unique):
                pipe.hsetnx(self._group_key(group_id), word, first_id + offset)
            pipe.sadd(self._groups_key(), group_id)
            results = await pipe.execute()
        except RedisError as e:
            logger.error(f"❌ Ошибка массового импорта в группу {group_id} ({self.kind}): {e}")
            raise StoreError("bulk import failed") from e

        cached = self._cache.setdefault(group_id, {})
        added = 0
        for offset, (word, created) in enumerate(zip(unique, results)):
            if created:
                cached[word] = first_id + offset
                added += 1

        return added

    # --- чтение из кэша ---
    def list(self, group_id: int) -> List[str]:
        """Возвращает слова группы из кэша."""
        return list(self._cache.get(group_id, {}))

    def items(self, group_id: int) -> List[Tuple[int, str]]:
        """Возвращает пары (id, слово) из кэша."""
        return [(entry_id, word) for word, entry_id in self._cache.get(group_id, {}).items()]

    def contains(self, group_id: int, word: str) -> bool:
        return word in self._cache.get(group_id, {})

    def groups(self) -> List[int]:
        return [group_id for group_id, words in self._cache.items() if words]
