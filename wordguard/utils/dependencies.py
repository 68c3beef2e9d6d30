# wordguard/utils/dependencies.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from redis.asyncio import Redis

from wordguard.config.settings import Settings
from wordguard.utils.keys import KeyFactory


@dataclass
class Deps:
    """
    Легковесный контейнер зависимостей для хэндлеров.
    Сервисы передаются как опциональные, чтобы хэндлеры можно было тестировать по отдельности.
    """
    settings: Settings
    redis: Redis
    keys: type[KeyFactory]
    word_dictionary: Optional[Any] = None
    ignored_words: Optional[Any] = None
    whitelist_service: Optional[Any] = None
    history_store: Optional[Any] = None
    violation_tracker: Optional[Any] = None
    orchestrator: Optional[Any] = None
    pipeline: Optional[Any] = None
    mailer_service: Optional[Any] = None
    throttle: Optional[Any] = None
