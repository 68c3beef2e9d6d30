# wordguard/services/detection/providers/base.py
"""
Базовый класс для всех провайдеров проверки.
"""
from abc import ABC, abstractmethod

from loguru import logger

from wordguard.services.detection.models import CheckOptions, DetectionResult


class DetectionProvider(ABC):
    """
    Провайдер проверки текста.

    Публичный метод `check` никогда не выбрасывает исключений:
    отсутствие учётных данных и любые ошибки сервиса приводят
    к результату "нарушение не найдено".
    """

    name: str = "base"

    def is_configured(self) -> bool:
        return True

    async def check(self, content: str, options: CheckOptions) -> DetectionResult:
        """
        Проверяет текст.

        Args:
            content: Текст для проверки
            options: Параметры проверки (группа, порог AI)

        Returns:
            DetectionResult
        """
        if not self.is_configured():
            logger.warning(f"⚠️ Провайдер '{self.name}' не настроен (нет учётных данных), пропуск")
            return DetectionResult.clean()

        try:
            return await self._check(content, options)
        except Exception as e:
            logger.error(f"❌ Провайдер '{self.name}' завершился с ошибкой: {e}")
            return DetectionResult.clean()

    @abstractmethod
    async def _check(self, content: str, options: CheckOptions) -> DetectionResult:
        pass
