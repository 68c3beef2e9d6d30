# wordguard/services/word_dictionary.py
from typing import Iterable, List

from loguru import logger

from wordguard.config.models import GroupPolicy
from wordguard.services.detection.models import DetectionResult
from wordguard.services.word_store import GroupWordStore
from wordguard.utils.keys import KeyFactory
from wordguard.utils.models import BadWordEntry
from wordguard.utils.text_utils import mask_occurrences, parse_legacy_dict


class WordDictionary(GroupWordStore):
    """
    Словарь запрещённых слов для каждой группы.

    Пара (group_id, word) уникальна. Совпадение ищется как подстрока,
    найденные слова маскируются в тексте символами `*` той же длины.
    """

    kind = "запрещённые слова"

    def _group_key(self, group_id: int) -> str:
        return KeyFactory.bad_words(group_id)

    def _sequence_key(self) -> str:
        return KeyFactory.bad_words_sequence()

    def _groups_key(self) -> str:
        return KeyFactory.bad_words_groups()

    def entries(self, group_id: int) -> List[BadWordEntry]:
        return [
            BadWordEntry(id=entry_id, group_id=group_id, word=word)
            for entry_id, word in self.items(group_id)
        ]

    async def migrate_legacy(self, groups: Iterable[GroupPolicy]) -> int:
        """
        Однократно импортирует словари из устаревшего формата конфигурации.

        Импорт выполняется только для групп, у которых в хранилище нет ни одного слова.

        Args:
            groups: Политики групп из конфигурации

        Returns:
            Общее количество импортированных слов
        """
        total = 0
        for group in groups:
            if not group.local_bad_word_dict or self.list(group.group_id):
                continue

            pairs = parse_legacy_dict(group.local_bad_word_dict)
            added = await self.import_words(group.group_id, (word for _, word in pairs))
            total += added
            logger.info(
                f"📥 Группа {group.group_id}: импортировано {added} слов из устаревшего словаря"
            )

        return total

    def match(self, content: str, group_id: int) -> DetectionResult:
        """
        Ищет слова словаря в тексте.

        Каждое найденное слово заменяется во всех вхождениях маской той же длины.
        Маскирование накопительное: все слова применяются к одной копии текста.

        Args:
            content: Текст сообщения
            group_id: ID группы

        Returns:
            DetectionResult с найденными словами и замаскированным текстом
        """
        words = self.list(group_id)
        if not content or not words:
            return DetectionResult.clean()

        matched: List[str] = []
        censored = content
        for word in words:
            if word in content:
                matched.append(word)
                censored = mask_occurrences(censored, word)

        if not matched:
            return DetectionResult.clean()

        return DetectionResult(
            detected=True,
            detected_words=matched,
            censored_text=censored,
            provider="local",
        )
