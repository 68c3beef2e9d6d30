# wordguard/services/detection/providers/__init__.py
from wordguard.services.detection.providers.ai import AIClassifierProvider
from wordguard.services.detection.providers.aliyun import AliyunProvider
from wordguard.services.detection.providers.baidu import BaiduProvider
from wordguard.services.detection.providers.base import DetectionProvider
from wordguard.services.detection.providers.lexical_api import LexicalApiProvider
from wordguard.services.detection.providers.local import LocalDictionaryProvider
from wordguard.services.detection.providers.tencent import TencentProvider

__all__ = [
    "AIClassifierProvider",
    "AliyunProvider",
    "BaiduProvider",
    "DetectionProvider",
    "LexicalApiProvider",
    "LocalDictionaryProvider",
    "TencentProvider",
]
