# wordguard/services/detection/__init__.py
"""
Проверка сообщений: результаты, провайдеры и оркестратор.

Оркестратор импортируется напрямую из
`wordguard.services.detection.orchestrator`.
"""

from wordguard.services.detection.models import CheckOptions, DetectionResult

__all__ = [
    "CheckOptions",
    "DetectionResult",
]
