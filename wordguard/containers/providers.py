# wordguard/containers/providers.py
from typing import Dict, Optional

from wordguard.config.models import OpenAIConfig
from wordguard.config.settings import settings
from wordguard.services.ai.openai_provider import OpenAIProvider
from wordguard.services.detection.providers import (
    AIClassifierProvider,
    AliyunProvider,
    BaiduProvider,
    DetectionProvider,
    LexicalApiProvider,
    LocalDictionaryProvider,
    TencentProvider,
)
from wordguard.services.word_dictionary import WordDictionary
from wordguard.utils.http_client import HTTPClient


def create_ai_provider(
    config: OpenAIConfig, max_timeout: Optional[float] = None
) -> OpenAIProvider:
    """HTTP-таймаут клиента не превышает общий таймаут провайдера."""
    api_key = config.api_key.get_secret_value() if config.api_key else None
    timeout = config.request_timeout
    if max_timeout is not None:
        timeout = min(timeout, max_timeout)
    return OpenAIProvider(
        api_key=api_key,
        model=config.model,
        base_url=config.base_url,
        timeout=timeout,
    )


def create_detection_providers(
    dictionary: WordDictionary,
    http_client: HTTPClient,
    ai_provider: OpenAIProvider,
) -> Dict[str, DetectionProvider]:
    """Все провайдеры по идентификатору метода. Порядок вызова задаёт оркестратор."""
    return {
        "local": LocalDictionaryProvider(dictionary),
        "api": LexicalApiProvider(settings.lexical_api, http_client),
        "baidu": BaiduProvider(settings.baidu, http_client),
        "aliyun": AliyunProvider(settings.aliyun, http_client),
        "tencent": TencentProvider(settings.tencent, http_client),
        "ai": AIClassifierProvider(ai_provider, temperature=settings.openai.temperature),
    }
