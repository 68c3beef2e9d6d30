# wordguard/services/detection/providers/tencent.py
import base64
import json
import time
from typing import Any, Callable

from wordguard.config.models import TencentConfig
from wordguard.services.detection.models import CheckOptions, DetectionResult
from wordguard.services.detection.providers.base import DetectionProvider
from wordguard.services.detection.providers.signing import tc3_headers
from wordguard.services.errors import ProviderError
from wordguard.utils.http_client import HTTPClient

TENCENT_SERVICE = "tms"
TENCENT_ACTION = "TextModeration"
TENCENT_VERSION = "2020-12-29"


def parse_tencent_response(response: Any) -> DetectionResult:
    """Нарушение: Suggestion == "Block". Слова из Keywords, иначе Label."""
    body = response.get("Response") if isinstance(response, dict) else None
    if not isinstance(body, dict):
        raise ProviderError(f"Tencent: unexpected response {response!r}")
    if "Error" in body:
        error = body["Error"]
        raise ProviderError(f"Tencent error {error.get('Code')}: {error.get('Message')}")

    if body.get("Suggestion") != "Block":
        return DetectionResult.clean()

    words = list(body.get("Keywords") or []) or [body.get("Label") or "Tencent"]
    return DetectionResult(detected=True, detected_words=words, provider="tencent")


class TencentProvider(DetectionProvider):
    """Tencent Cloud TMS TextModeration с подписью TC3-HMAC-SHA256."""

    name = "tencent"

    def __init__(self, config: TencentConfig, http_client: HTTPClient, clock: Callable[[], float] = time.time):
        self.config = config
        self.http_client = http_client
        self._clock = clock

    def is_configured(self) -> bool:
        return bool(self.config.secret_id and self.config.secret_key)

    async def _check(self, content: str, options: CheckOptions) -> DetectionResult:
        payload = json.dumps(
            {"Content": base64.b64encode(content.encode("utf-8")).decode("ascii")}
        )
        headers = tc3_headers(
            secret_id=self.config.secret_id,
            secret_key=self.config.secret_key.get_secret_value(),
            service=TENCENT_SERVICE,
            host=self.config.endpoint,
            action=TENCENT_ACTION,
            version=TENCENT_VERSION,
            region=self.config.region,
            payload=payload,
            timestamp=int(self._clock()),
        )
        response = await self.http_client.post(
            f"https://{self.config.endpoint}/", data=payload, headers=headers
        )
        return parse_tencent_response(response)
