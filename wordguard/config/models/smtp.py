# wordguard/config/models/smtp.py
from typing import List

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class SmtpConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    host: str = "smtp.example.com"
    port: int = 465
    secure: bool = True
    user: str = ""
    password: SecretStr = SecretStr("")
    sender_name: str = "wordguard"
    sender_email: str = "bot@example.com"
    receivers: List[str] = Field(default_factory=list)

    # 0: отправлять письмо сразу на каждое нарушение
    summary_interval_days: int = Field(default=1, ge=0)
    audit_retention_days: int = Field(default=7, ge=1)

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.receivers)
