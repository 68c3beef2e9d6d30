# wordguard/services/detection/providers/baidu.py
import time
from typing import Any, Callable, List, Optional

from loguru import logger

from wordguard.config.models import BaiduConfig
from wordguard.services.detection.models import CheckOptions, DetectionResult
from wordguard.services.detection.providers.base import DetectionProvider
from wordguard.services.errors import ProviderError
from wordguard.utils.http_client import HTTPClient

# conclusionType: 1 соответствует, 2 не соответствует, 3 подозрительно, 4 ошибка
BAIDU_NON_COMPLIANT = 2
TOKEN_REFRESH_MARGIN_SECONDS = 60


def parse_baidu_response(response: Any) -> DetectionResult:
    """Нарушение: conclusionType == 2. Слова из data[].hits[].words, иначе data[].msg."""
    if not isinstance(response, dict):
        raise ProviderError(f"Baidu: unexpected response {response!r}")
    if "error_code" in response:
        raise ProviderError(f"Baidu error {response['error_code']}: {response.get('error_msg')}")

    if response.get("conclusionType") != BAIDU_NON_COMPLIANT:
        return DetectionResult.clean()

    words: List[str] = []
    for item in response.get("data") or []:
        hit_words = [w for hit in item.get("hits") or [] for w in hit.get("words") or []]
        if hit_words:
            words.extend(hit_words)
        elif item.get("msg"):
            words.append(item["msg"])

    return DetectionResult(
        detected=True,
        detected_words=words or [response.get("conclusion", "Baidu")],
        provider="baidu",
    )


class BaiduProvider(DetectionProvider):
    """Baidu text_censor: обмен ключей на access_token, затем проверка текста."""

    name = "baidu"

    def __init__(self, config: BaiduConfig, http_client: HTTPClient, clock: Callable[[], float] = time.time):
        self.config = config
        self.http_client = http_client
        self._clock = clock
        self._token: Optional[str] = None
        self._token_expires_at = 0.0

    def is_configured(self) -> bool:
        return bool(self.config.api_key and self.config.secret_key)

    async def _get_token(self) -> str:
        if self._token and self._clock() < self._token_expires_at:
            return self._token

        response = await self.http_client.post(
            self.config.token_url,
            params={
                "grant_type": "client_credentials",
                "client_id": self.config.api_key,
                "client_secret": self.config.secret_key.get_secret_value(),
            },
        )
        token = response.get("access_token") if isinstance(response, dict) else None
        if not token:
            raise ProviderError(f"Baidu token exchange failed: {response}")

        expires_in = int(response.get("expires_in", 0))
        self._token = token
        self._token_expires_at = self._clock() + max(expires_in - TOKEN_REFRESH_MARGIN_SECONDS, 0)
        logger.info("🔑 Baidu: получен новый access_token")
        return token

    async def _check(self, content: str, options: CheckOptions) -> DetectionResult:
        token = await self._get_token()
        response = await self.http_client.post(
            self.config.censor_url,
            params={"access_token": token},
            data={"text": content},
        )
        return parse_baidu_response(response)
