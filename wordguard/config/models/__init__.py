from wordguard.config.models.core import (
    HistoryConfig,
    LoggingConfig,
    ThrottlingConfig,
)
from wordguard.config.models.moderation import (
    DetectionMethod,
    EffectivePolicy,
    GroupPolicy,
    ModerationConfig,
)
from wordguard.config.models.providers import (
    AliyunConfig,
    BaiduConfig,
    LexicalApiConfig,
    OpenAIConfig,
    TencentConfig,
)
from wordguard.config.models.smtp import SmtpConfig

__all__ = [
    "HistoryConfig",
    "LoggingConfig",
    "ThrottlingConfig",
    "DetectionMethod",
    "EffectivePolicy",
    "GroupPolicy",
    "ModerationConfig",
    "AliyunConfig",
    "BaiduConfig",
    "LexicalApiConfig",
    "OpenAIConfig",
    "TencentConfig",
    "SmtpConfig",
]
