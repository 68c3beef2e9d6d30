# wordguard/services/ignored_words.py
from typing import List

from wordguard.services.word_store import GroupWordStore
from wordguard.utils.keys import KeyFactory
from wordguard.utils.models import IgnoredWordEntry


class IgnoredWordFilter(GroupWordStore):
    """Слова-исключения группы. Проверка точная, не по подстроке."""

    kind = "игнорируемые слова"

    def _group_key(self, group_id: int) -> str:
        return KeyFactory.ignored_words(group_id)

    def _sequence_key(self) -> str:
        return KeyFactory.ignored_words_sequence()

    def _groups_key(self) -> str:
        return KeyFactory.ignored_words_groups()

    def entries(self, group_id: int) -> List[IgnoredWordEntry]:
        return [
            IgnoredWordEntry(id=entry_id, group_id=group_id, word=word)
            for entry_id, word in self.items(group_id)
        ]

    def is_ignored(self, group_id: int, word: str) -> bool:
        return self.contains(group_id, word)

    def filter_words(self, group_id: int, words: List[str]) -> List[str]:
        """Возвращает только слова, которых нет в списке исключений."""
        return [word for word in words if not self.is_ignored(group_id, word)]
