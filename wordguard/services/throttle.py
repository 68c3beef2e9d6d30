# wordguard/services/throttle.py
import time
from typing import Callable, Dict, Tuple

from loguru import logger

from wordguard.config.models import ThrottlingConfig


class MessageThrottle:
    """
    Отбрасывает повторные сообщения пользователя, пришедшие быстрее интервала.

    Защищает от повторной доставки одного и того же события, а не ограничивает
    частоту обращений к провайдерам.
    """

    def __init__(self, config: ThrottlingConfig, clock: Callable[[], float] = time.monotonic):
        self.interval = config.duplicate_interval_ms / 1000
        self._clock = clock
        self._last_seen: Dict[Tuple[int, int], float] = {}

    def allow(self, group_id: int, user_id: int) -> bool:
        now = self._clock()
        key = (group_id, user_id)
        last = self._last_seen.get(key)
        if last is not None and now - last < self.interval:
            logger.debug(f"⏳ Повтор от {user_id} в группе {group_id} отброшен")
            return False
        self._last_seen[key] = now
        return True

    def sweep(self) -> int:
        """Удаляет записи старше интервала. Возвращает количество удалённых."""
        now = self._clock()
        stale = [key for key, seen in self._last_seen.items() if now - seen >= self.interval]
        for key in stale:
            del self._last_seen[key]
        return len(stale)
