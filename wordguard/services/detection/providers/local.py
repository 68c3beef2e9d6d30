# wordguard/services/detection/providers/local.py
from wordguard.services.detection.models import CheckOptions, DetectionResult
from wordguard.services.detection.providers.base import DetectionProvider
from wordguard.services.word_dictionary import WordDictionary


class LocalDictionaryProvider(DetectionProvider):
    """Проверка по локальному словарю группы."""

    name = "local"

    def __init__(self, dictionary: WordDictionary):
        self.dictionary = dictionary

    async def _check(self, content: str, options: CheckOptions) -> DetectionResult:
        return self.dictionary.match(content, options.group_id)
