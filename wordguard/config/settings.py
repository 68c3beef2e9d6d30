# wordguard/config/settings.py
import logging
from typing import Any, List, Optional

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wordguard.config.models import (
    AliyunConfig,
    BaiduConfig,
    HistoryConfig,
    LexicalApiConfig,
    LoggingConfig,
    ModerationConfig,
    OpenAIConfig,
    SmtpConfig,
    TencentConfig,
    ThrottlingConfig,
)


class Settings(BaseSettings):
    BOT_TOKEN: SecretStr
    REDIS_URL: str

    admin_ids: Any = Field(default_factory=list, alias="ADMIN_IDS")

    log_level: str = "INFO"
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    moderation: ModerationConfig = Field(default_factory=ModerationConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    throttling: ThrottlingConfig = Field(default_factory=ThrottlingConfig)

    lexical_api: LexicalApiConfig = Field(default_factory=LexicalApiConfig)
    baidu: BaiduConfig = Field(default_factory=BaiduConfig)
    aliyun: AliyunConfig = Field(default_factory=AliyunConfig)
    tencent: TencentConfig = Field(default_factory=TencentConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)

    smtp: Optional[SmtpConfig] = None

    @field_validator("REDIS_URL", mode="before")
    @classmethod
    def assemble_redis_dsn(cls, v: Any) -> str:
        if isinstance(v, str) and not v.startswith(("redis://", "rediss://", "unix://")):
            return f"redis://{v}"
        return v

    @field_validator("admin_ids", mode="before")
    @classmethod
    def parse_admin_ids(cls, v: Any) -> List[int]:
        if v is None:
            return []
        if isinstance(v, int):
            return [v]
        if isinstance(v, list):
            try:
                return [int(x) for x in v]
            except Exception:
                raise TypeError("ADMIN_IDS: список должен содержать целые числа.")
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return []
            return [int(item.strip()) for item in s.split(",") if item.strip()]
        raise TypeError("ADMIN_IDS должен быть строкой с ID через запятую или списком.")

    @property
    def bot_token(self) -> str:
        return self.BOT_TOKEN.get_secret_value()

    @property
    def redis_url(self) -> str:
        return self.REDIS_URL

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
        populate_by_name=True,
    )


try:
    settings = Settings()
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
    logging.info("✅ Конфигурация успешно загружена и валидирована.")
except ValidationError as e:
    logging.critical(
        "❌ КРИТИЧЕСКАЯ ОШИБКА ВАЛИДАЦИИ НАСТРОЕК. Проверьте .env и переменные окружения.\n%s",
        e,
    )
    raise SystemExit("Ошибки валидации конфигурации.")
