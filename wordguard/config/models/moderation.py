# wordguard/config/models/moderation.py
from dataclasses import dataclass
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DetectionMethod = Literal["local", "api", "baidu", "aliyun", "tencent", "ai"]


class GroupPolicy(BaseModel):
    """Настройки модерации одного группового чата."""

    model_config = ConfigDict(protected_namespaces=())

    group_id: int
    enable: bool = True

    detection_methods: List[DetectionMethod] = Field(default_factory=lambda: ["local"])

    smart_verification: bool = False
    context_msg_count: Optional[int] = Field(default=None, ge=1, le=10)

    ai_threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    check_probability: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    show_censored_word: Optional[bool] = None

    # Устаревший формат словаря: "(1.слово)(2.слово)" или список через запятую
    local_bad_word_dict: str = ""
    whitelist: List[int] = Field(default_factory=list)

    warning_template: Optional[str] = None

    trigger_threshold: Optional[int] = Field(default=None, ge=1)
    trigger_window_minutes: Optional[float] = Field(default=None, gt=0)
    mute_minutes: Optional[float] = Field(default=None, gt=0)

    detailed_log: bool = False

    @field_validator("detection_methods", mode="after")
    @classmethod
    def dedupe_methods(cls, v: List[str]) -> List[str]:
        seen: List[str] = []
        for method in v:
            if method not in seen:
                seen.append(method)
        return seen


@dataclass(frozen=True)
class EffectivePolicy:
    """Политика группы, объединённая с глобальными значениями по умолчанию."""

    group_id: int
    methods: Tuple[str, ...]
    smart_verification: bool
    context_msg_count: int
    ai_threshold: float
    check_probability: float
    show_censored_word: bool
    trigger_threshold: int
    window_seconds: float
    mute_minutes: float
    warning_template: Optional[str] = None
    detailed_log: bool = False
    enabled: bool = True

    @property
    def mute_seconds(self) -> int:
        return int(self.mute_minutes * 60)


class ModerationConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    default_mute_minutes: float = Field(default=10, gt=0)
    default_trigger_threshold: int = Field(default=3, ge=1)
    default_window_minutes: float = Field(default=5, gt=0)
    default_ai_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    default_check_probability: float = Field(default=1.0, ge=0.0, le=1.0)
    default_show_censored_word: bool = True
    default_context_msg_count: int = Field(default=3, ge=1, le=10)

    check_admin: bool = True
    provider_timeout_seconds: float = Field(default=10, gt=0)

    groups: List[GroupPolicy] = Field(default_factory=list)

    def get_group(self, group_id: int) -> Optional[GroupPolicy]:
        for group in self.groups:
            if group.group_id == group_id:
                return group
        return None

    def resolve(self, group_id: int) -> Optional[EffectivePolicy]:
        """
        Возвращает эффективную политику группы.

        Args:
            group_id: ID группового чата

        Returns:
            EffectivePolicy или None, если группа не настроена
        """
        group = self.get_group(group_id)
        if group is None:
            return None

        def pick(value, default):
            return default if value is None else value

        return EffectivePolicy(
            group_id=group.group_id,
            methods=tuple(group.detection_methods),
            smart_verification=group.smart_verification,
            context_msg_count=pick(group.context_msg_count, self.default_context_msg_count),
            ai_threshold=pick(group.ai_threshold, self.default_ai_threshold),
            check_probability=pick(group.check_probability, self.default_check_probability),
            show_censored_word=pick(group.show_censored_word, self.default_show_censored_word),
            trigger_threshold=pick(group.trigger_threshold, self.default_trigger_threshold),
            window_seconds=pick(group.trigger_window_minutes, self.default_window_minutes) * 60,
            mute_minutes=pick(group.mute_minutes, self.default_mute_minutes),
            warning_template=group.warning_template,
            detailed_log=group.detailed_log,
            enabled=group.enable,
        )
