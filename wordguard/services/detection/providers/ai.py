# wordguard/services/detection/providers/ai.py
from typing import Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wordguard.services.ai.base import AIProvider
from wordguard.services.detection.models import CheckOptions, DetectionResult
from wordguard.services.detection.providers.base import DetectionProvider
from wordguard.texts.ai_prompts import get_abuse_classifier_prompt
from wordguard.utils.text_utils import clean_json_string


class AbuseVerdict(BaseModel):
    """Структурированный ответ модели."""

    model_config = ConfigDict(populate_by_name=True)

    is_abuse: bool = Field(alias="isAbuse")
    level: float = Field(ge=0.0, le=1.0)
    type: str = ""
    sentence: str = ""


def parse_verdict(raw: str) -> Optional[AbuseVerdict]:
    """Разбирает JSON-вердикт модели. Возвращает None, если ответ некорректен."""
    try:
        return AbuseVerdict.model_validate_json(clean_json_string(raw))
    except ValidationError as e:
        logger.warning(f"⚠️ AI: не удалось разобрать вердикт ({e.error_count()} ошибок): {raw[:200]!r}")
        return None


class AIClassifierProvider(DetectionProvider):
    """
    Классификатор на генеративной модели.

    Нарушение засчитывается, если isAbuse == true и level >= порога группы.
    """

    name = "ai"

    def __init__(self, ai: AIProvider, temperature: float = 0.1):
        self.ai = ai
        self.temperature = temperature

    def is_configured(self) -> bool:
        return self.ai.is_available()

    async def _check(self, content: str, options: CheckOptions) -> DetectionResult:
        raw = await self.ai.generate_json(
            content,
            system_prompt=get_abuse_classifier_prompt(),
            temperature=self.temperature,
        )
        verdict = parse_verdict(raw)
        if verdict is None:
            return DetectionResult.clean()

        logger.debug(
            f"🤖 AI вердикт: abuse={verdict.is_abuse} level={verdict.level:.2f} "
            f"type={verdict.type!r} (порог {options.ai_threshold})"
        )

        if not verdict.is_abuse or verdict.level < options.ai_threshold:
            return DetectionResult.clean()

        return DetectionResult(
            detected=True,
            detected_words=[verdict.type or "AI"],
            censored_text=verdict.sentence or None,
            provider="ai",
        )
