# wordguard/services/pipeline.py
"""
Обработка входящего сообщения группы: проверка, учёт нарушений, наказание.
"""
import asyncio
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Set

from loguru import logger

from wordguard.config.models import EffectivePolicy, ModerationConfig
from wordguard.services.audit_service import ViolationAuditLog
from wordguard.services.detection.models import DetectionResult
from wordguard.services.detection.orchestrator import DetectionOrchestrator
from wordguard.services.history_service import MessageHistoryStore
from wordguard.services.mailer_service import MailerService
from wordguard.services.throttle import MessageThrottle
from wordguard.services.violation_tracker import ViolationOutcome, ViolationTracker
from wordguard.services.whitelist_service import WhitelistService
from wordguard.texts import messages
from wordguard.utils.models import (
    EnforcementRequest,
    PlatformMessage,
    ViolationAuditEntry,
    WarningMessage,
)
from wordguard.utils.text_utils import escape_html, mask_word


class ChatGateway(Protocol):
    async def enforce(self, request: EnforcementRequest) -> bool: ...

    async def send_warning(self, warning: WarningMessage) -> bool: ...


@dataclass
class ModerationOutcome:
    """Что произошло с сообщением."""

    status: str
    detection: Optional[DetectionResult] = None
    violation: Optional[ViolationOutcome] = None
    warning: Optional[WarningMessage] = None
    enforcements: List[EnforcementRequest] = field(default_factory=list)


def format_minutes(minutes: float) -> str:
    return f"{minutes:g}"


def render_warning(
    template: str,
    *,
    at: str,
    user_id: int,
    nick: str,
    words: str,
    count: int,
    max_count: int,
    remaining: int,
    mute_minutes: float,
) -> str:
    """
    Подставляет переменные в шаблон предупреждения.

    Поддерживаются {at} {userId} {nick} {words} {count} {maxCount}
    {remaining} {muteMinutes}. Остальные фигурные скобки остаются как есть.
    """
    values = {
        "at": at,
        "userId": str(user_id),
        "nick": nick,
        "words": words,
        "count": str(count),
        "maxCount": str(max_count),
        "remaining": str(remaining),
        "muteMinutes": format_minutes(mute_minutes),
    }
    text = template
    for name, value in values.items():
        text = text.replace("{" + name + "}", value)
    return text


class ModerationPipeline:
    """
    Полный путь сообщения через модерацию.

    1. пропуск не-групповых и пустых сообщений, групп без включённой политики;
    2. отбрасывание повторов (троттлинг);
    3. белый список;
    4. выборочная проверка с вероятностью check_probability;
    5. проверка оркестратором;
    6. запись в историю (всегда, после проверки);
    7. при нарушении: журнал, счётчик, предупреждение, удаление, мут при пороге.
    """

    def __init__(
        self,
        config: ModerationConfig,
        orchestrator: DetectionOrchestrator,
        tracker: ViolationTracker,
        history: MessageHistoryStore,
        whitelist: WhitelistService,
        throttle: MessageThrottle,
        audit_log: ViolationAuditLog,
        gateway: ChatGateway,
        mailer: Optional[MailerService] = None,
        rng: Callable[[], float] = random.random,
    ):
        self.config = config
        self.orchestrator = orchestrator
        self.tracker = tracker
        self.history = history
        self.whitelist = whitelist
        self.throttle = throttle
        self.audit_log = audit_log
        self.gateway = gateway
        self.mailer = mailer
        self._rng = rng
        self._background: Set[asyncio.Task] = set()

    async def handle(self, message: PlatformMessage) -> ModerationOutcome:
        if not message.is_group_message or not message.content.strip():
            return ModerationOutcome(status="skipped")

        policy = self.config.resolve(message.group_id)
        if policy is None or not policy.enabled:
            return ModerationOutcome(status="skipped")

        if not self.throttle.allow(message.group_id, message.user_id):
            return ModerationOutcome(status="throttled")

        if await self.whitelist.is_whitelisted(message.group_id, message.user_id):
            return ModerationOutcome(status="whitelisted")

        detection = None
        if self._rng() < policy.check_probability:
            detection = await self.orchestrator.check(
                message.content, message.group_id, message.user_id, policy
            )

        # история пишется и для непроверенных сообщений
        await self.history.append(
            message.group_id, message.user_id, message.content, message.message_id
        )

        if detection is None:
            return ModerationOutcome(status="sampled_out")

        if not detection.detected:
            return ModerationOutcome(status="clean", detection=detection)

        return await self._punish(message, policy, detection)

    async def _punish(
        self,
        message: PlatformMessage,
        policy: EffectivePolicy,
        detection: DetectionResult,
    ) -> ModerationOutcome:
        entry = ViolationAuditEntry(
            user_id=message.user_id,
            group_id=message.group_id,
            words=detection.detected_words,
            content=message.content,
        )
        await self.audit_log.append(entry)
        if self.mailer is not None and self.mailer.immediate:
            self._spawn(self.mailer.notify_violation(entry))

        violation = await self.tracker.record(
            message.group_id,
            message.user_id,
            threshold=policy.trigger_threshold,
            window_seconds=policy.window_seconds,
        )

        warning = self.build_warning(message, policy, detection, violation)

        enforcements: List[EnforcementRequest] = []
        if message.message_id is not None:
            enforcements.append(
                EnforcementRequest(
                    group_id=message.group_id,
                    user_id=message.user_id,
                    action="delete_message",
                    message_id=message.message_id,
                )
            )
        if violation.triggered:
            enforcements.append(
                EnforcementRequest(
                    group_id=message.group_id,
                    user_id=message.user_id,
                    action="mute",
                    duration_seconds=policy.mute_seconds,
                )
            )

        for request in enforcements:
            await self._enforce(request)
        await self._warn(warning)

        return ModerationOutcome(
            status="violation",
            detection=detection,
            violation=violation,
            warning=warning,
            enforcements=enforcements,
        )

    def build_warning(
        self,
        message: PlatformMessage,
        policy: EffectivePolicy,
        detection: DetectionResult,
        violation: ViolationOutcome,
    ) -> WarningMessage:
        if policy.show_censored_word:
            shown = detection.detected_words
        else:
            shown = [mask_word(word) for word in detection.detected_words]

        nick = message.nickname or str(message.user_id)
        text = render_warning(
            policy.warning_template or messages.DEFAULT_WARNING_TEMPLATE,
            at=message.mention or escape_html(nick),
            user_id=message.user_id,
            nick=escape_html(nick),
            words=escape_html(", ".join(shown)),
            count=violation.count,
            max_count=violation.threshold,
            remaining=violation.remaining,
            mute_minutes=policy.mute_minutes,
        )
        if violation.triggered:
            text += "\n" + messages.MUTE_NOTICE.format(
                at=message.mention or escape_html(nick),
                muteMinutes=format_minutes(policy.mute_minutes),
            )

        return WarningMessage(group_id=message.group_id, user_id=message.user_id, text=text)

    async def _enforce(self, request: EnforcementRequest) -> None:
        try:
            applied = await self.gateway.enforce(request)
        except Exception as e:
            logger.error(f"❌ Ошибка применения '{request.action}' к {request.user_id}: {e}")
            return
        if not applied:
            logger.error(
                f"❌ Действие '{request.action}' не применено: user={request.user_id} "
                f"group={request.group_id}"
            )

    async def _warn(self, warning: WarningMessage) -> None:
        try:
            await self.gateway.send_warning(warning)
        except Exception as e:
            logger.error(f"❌ Ошибка отправки предупреждения в группу {warning.group_id}: {e}")

    def _spawn(self, coro) -> None:
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
