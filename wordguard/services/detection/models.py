# wordguard/services/detection/models.py
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class DetectionResult:
    """Итог одной проверки. Не сохраняется, создаётся заново на каждую проверку."""

    detected: bool
    detected_words: List[str] = field(default_factory=list)
    censored_text: Optional[str] = None
    provider: Optional[str] = None

    @classmethod
    def clean(cls) -> "DetectionResult":
        return cls(detected=False)


@dataclass(frozen=True)
class CheckOptions:
    """Параметры, которые провайдер получает вместе с текстом."""

    group_id: int
    user_id: Optional[int] = None
    ai_threshold: float = 0.6
