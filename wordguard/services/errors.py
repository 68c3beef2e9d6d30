# wordguard/services/errors.py
"""
Типизированные ошибки сервисов.
"""


class WordguardError(Exception):
    """Базовая ошибка приложения."""


class StoreError(WordguardError):
    """Хранилище не смогло выполнить изменение (add/remove не произошло)."""


class ProviderError(WordguardError):
    """Ошибка внешнего сервиса проверки. Не выходит за границу провайдера."""
