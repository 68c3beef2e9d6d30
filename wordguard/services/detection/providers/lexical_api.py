# wordguard/services/detection/providers/lexical_api.py
from typing import Any, List

from loguru import logger

from wordguard.config.models import LexicalApiConfig
from wordguard.services.detection.models import CheckOptions, DetectionResult
from wordguard.services.detection.providers.base import DetectionProvider
from wordguard.services.errors import ProviderError
from wordguard.utils.http_client import HTTPClient


def parse_lexical_response(response: Any) -> DetectionResult:
    """
    Разбирает ответ лексического API.

    Нарушение: code == 200 и jcstatus == 1. Найденные слова приходят в `mgcwords`
    строкой через запятую или списком, текст с заменой в `replacewords`.

    Raises:
        ProviderError: если сервис вернул код ошибки
    """
    if not isinstance(response, dict) or response.get("code") != 200:
        raise ProviderError(f"lexical API error: {response}")

    if response.get("jcstatus") != 1:
        return DetectionResult.clean()

    raw_words = response.get("mgcwords")
    words: List[str]
    if isinstance(raw_words, str):
        words = [w for w in raw_words.split(",") if w]
    elif isinstance(raw_words, list):
        words = [str(w) for w in raw_words]
    elif raw_words:
        words = [str(raw_words)]
    else:
        words = []

    return DetectionResult(
        detected=True,
        detected_words=words,
        censored_text=response.get("replacewords"),
        provider="api",
    )


class LexicalApiProvider(DetectionProvider):
    """Удалённый словарный API: один POST с id, ключом и текстом."""

    name = "api"

    def __init__(self, config: LexicalApiConfig, http_client: HTTPClient):
        self.config = config
        self.http_client = http_client

    def is_configured(self) -> bool:
        return bool(self.config.api_id and self.config.api_key)

    async def _check(self, content: str, options: CheckOptions) -> DetectionResult:
        form = {
            "id": self.config.api_id,
            "key": self.config.api_key.get_secret_value(),
            "words": content,
            "replacetype": "1",
            "mgctype": "1",
        }
        response = await self.http_client.post(self.config.api_url, data=form)
        logger.debug(f"[lexical API] ответ: {response}")
        return parse_lexical_response(response)
