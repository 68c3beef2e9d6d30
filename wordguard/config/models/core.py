# wordguard/config/models/core.py
from typing import List

from pydantic import BaseModel, ConfigDict


class ThrottlingConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    duplicate_interval_ms: int = 500
    sweep_interval_seconds: int = 60


class HistoryConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    retention_minutes: int = 30
    sweep_interval_minutes: int = 10
    max_per_user: int = 50


class LoggingConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    json_enabled: bool = False
    service_name: str = "wordguard"
    debug_loggers: List[str] = []
