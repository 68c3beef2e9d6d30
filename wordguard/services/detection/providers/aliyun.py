# wordguard/services/detection/providers/aliyun.py
import json
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict

from wordguard.config.models import AliyunConfig
from wordguard.services.detection.models import CheckOptions, DetectionResult
from wordguard.services.detection.providers.base import DetectionProvider
from wordguard.services.detection.providers.signing import aliyun_signature
from wordguard.services.errors import ProviderError
from wordguard.utils.http_client import HTTPClient

ALIYUN_ACTION = "TextModeration"
ALIYUN_VERSION = "2022-03-02"


def parse_aliyun_response(response: Any) -> DetectionResult:
    """Нарушение: непустой Data.labels. Метки через запятую становятся словами."""
    if not isinstance(response, dict) or response.get("Code") != 200:
        raise ProviderError(f"Aliyun error: {response}")

    data = response.get("Data") or {}
    labels = [label for label in (data.get("labels") or "").split(",") if label]
    if not labels:
        return DetectionResult.clean()

    return DetectionResult(detected=True, detected_words=labels, provider="aliyun")


class AliyunProvider(DetectionProvider):
    """Aliyun Green TextModeration с подписью RPC (HMAC-SHA1)."""

    name = "aliyun"

    def __init__(self, config: AliyunConfig, http_client: HTTPClient, clock: Callable[[], float] = time.time):
        self.config = config
        self.http_client = http_client
        self._clock = clock

    def is_configured(self) -> bool:
        return bool(self.config.access_key_id and self.config.access_key_secret)

    def build_params(self, content: str, nonce: str) -> Dict[str, str]:
        timestamp = datetime.fromtimestamp(self._clock(), tz=timezone.utc)
        params = {
            "Format": "JSON",
            "Version": ALIYUN_VERSION,
            "AccessKeyId": self.config.access_key_id,
            "SignatureMethod": "HMAC-SHA1",
            "SignatureVersion": "1.0",
            "SignatureNonce": nonce,
            "Timestamp": timestamp.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "Action": ALIYUN_ACTION,
            "Service": self.config.service,
            "ServiceParameters": json.dumps({"content": content}, ensure_ascii=False),
        }
        params["Signature"] = aliyun_signature(
            params, self.config.access_key_secret.get_secret_value()
        )
        return params

    async def _check(self, content: str, options: CheckOptions) -> DetectionResult:
        params = self.build_params(content, nonce=uuid.uuid4().hex)
        response = await self.http_client.post(f"https://{self.config.endpoint}/", data=params)
        return parse_aliyun_response(response)
