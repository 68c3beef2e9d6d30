# wordguard/services/violation_tracker.py
"""
Счётчик нарушений со скользящим окном.
"""
import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from loguru import logger

ViolationKey = Tuple[int, int]


@dataclass
class ViolationRecord:
    count: int
    window_start: float


@dataclass(frozen=True)
class ViolationOutcome:
    """Результат учёта одного нарушения."""

    count: int
    threshold: int
    triggered: bool

    @property
    def remaining(self) -> int:
        return max(self.threshold - self.count, 0)


class ViolationTracker:
    """
    Компонент для отслеживания нарушений пользователей.

    Для каждой пары (группа, пользователь) хранит счётчик и начало окна:
    - первое нарушение создаёт запись {1, now};
    - нарушение внутри окна увеличивает счётчик;
    - нарушение после окна сбрасывает запись в {1, now};
      окно отсчитывается от первого нарушения серии и не продлевается;
    - при достижении порога запись удаляется, вызывающий код применяет наказание.

    Состояние хранится только в памяти: перезапуск процесса обнуляет все счётчики.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._records: Dict[ViolationKey, ViolationRecord] = {}
        self._lock = asyncio.Lock()

    async def record(
        self,
        group_id: int,
        user_id: int,
        threshold: int,
        window_seconds: float,
    ) -> ViolationOutcome:
        """
        Учитывает нарушение и сообщает, достигнут ли порог.

        Чтение, изменение и удаление записи выполняются под одной блокировкой.

        Args:
            group_id: ID группы
            user_id: ID пользователя
            threshold: Порог срабатывания наказания
            window_seconds: Длительность окна

        Returns:
            ViolationOutcome с текущим счётчиком и флагом срабатывания
        """
        key = (group_id, user_id)
        async with self._lock:
            now = self._clock()
            record = self._records.get(key)

            if record is None or now - record.window_start > window_seconds:
                record = ViolationRecord(count=1, window_start=now)
                self._records[key] = record
            else:
                record.count += 1

            count = record.count
            triggered = count >= threshold
            if triggered:
                del self._records[key]

        if triggered:
            logger.warning(
                f"🚫 Порог нарушений достигнут: user={user_id} group={group_id} "
                f"({count}/{threshold})"
            )
        else:
            logger.info(f"⚠️ Нарушение #{count}/{threshold}: user={user_id} group={group_id}")

        return ViolationOutcome(count=count, threshold=threshold, triggered=triggered)

    def get(self, group_id: int, user_id: int) -> int:
        record = self._records.get((group_id, user_id))
        return record.count if record else 0

    async def clear(self, group_id: int, user_id: int) -> bool:
        async with self._lock:
            removed = self._records.pop((group_id, user_id), None) is not None
        if removed:
            logger.info(f"✅ Нарушения сброшены: user={user_id} group={group_id}")
        return removed

    async def clear_group(self, group_id: int) -> int:
        async with self._lock:
            keys = [key for key in self._records if key[0] == group_id]
            for key in keys:
                del self._records[key]
        logger.info(f"✅ Сброшены нарушения {len(keys)} пользователей в группе {group_id}")
        return len(keys)

    def violators(self, group_id: int) -> List[Tuple[int, int]]:
        """Возвращает пары (user_id, count) активных нарушителей группы."""
        return [
            (user_id, record.count)
            for (gid, user_id), record in self._records.items()
            if gid == group_id
        ]
