# wordguard/services/detection/orchestrator.py
"""
Цепочка проверки сообщения провайдерами.
"""
import asyncio
from dataclasses import replace
from typing import Iterable, List, Mapping

from loguru import logger

from wordguard.config.models import EffectivePolicy
from wordguard.services.detection.models import CheckOptions, DetectionResult
from wordguard.services.detection.providers.base import DetectionProvider
from wordguard.services.history_service import MessageHistoryStore
from wordguard.services.ignored_words import IgnoredWordFilter
from wordguard.texts.ai_prompts import build_context_prompt

CLOUD_METHODS = ("baidu", "aliyun", "tencent")


class DetectionOrchestrator:
    """
    Запускает провайдеров в фиксированном порядке приоритета:
    local → api → первый включённый из baidu/aliyun/tencent → ai.

    Алгоритм:
    1. Провайдеры вызываются по очереди до первого срабатывания.
    2. Умная проверка: срабатывание не-AI провайдера повторно проверяется AI
       с учётом недавней истории пользователя. Если AI подтверждает, результат
       заменяется ответом AI, если отклоняет, срабатывание отменяется.
    3. Из найденных слов убираются игнорируемые слова группы. Если слов
       не осталось, нарушения нет. Замаскированный текст не пересчитывается.
    """

    def __init__(
        self,
        providers: Mapping[str, DetectionProvider],
        ignored_words: IgnoredWordFilter,
        history: MessageHistoryStore,
        timeout_seconds: float = 10,
    ):
        self.providers = dict(providers)
        self.ignored_words = ignored_words
        self.history = history
        self.timeout_seconds = timeout_seconds

    def plan(self, methods: Iterable[str]) -> List[DetectionProvider]:
        """Возвращает провайдеров для включённых методов в порядке приоритета."""
        methods = list(methods)
        ordered: List[str] = [m for m in ("local", "api") if m in methods]

        cloud = next((m for m in methods if m in CLOUD_METHODS), None)
        if cloud:
            ordered.append(cloud)
        if "ai" in methods:
            ordered.append("ai")

        chain: List[DetectionProvider] = []
        for method in ordered:
            provider = self.providers.get(method)
            if provider is None:
                logger.warning(f"⚠️ Метод '{method}' включён, но провайдер не зарегистрирован")
                continue
            chain.append(provider)
        return chain

    async def check(
        self,
        content: str,
        group_id: int,
        user_id: int,
        policy: EffectivePolicy,
    ) -> DetectionResult:
        """
        Проверяет сообщение. Никогда не выбрасывает исключений.

        Args:
            content: Текст сообщения
            group_id: ID группы
            user_id: ID автора
            policy: Эффективная политика группы

        Returns:
            Итоговый DetectionResult
        """
        try:
            return await self._check(content, group_id, user_id, policy)
        except Exception as e:
            logger.exception(f"❌ Ошибка проверки сообщения в группе {group_id}: {e}")
            return DetectionResult.clean()

    async def _check(
        self,
        content: str,
        group_id: int,
        user_id: int,
        policy: EffectivePolicy,
    ) -> DetectionResult:
        options = CheckOptions(group_id=group_id, user_id=user_id, ai_threshold=policy.ai_threshold)

        result = DetectionResult.clean()
        for provider in self.plan(policy.methods):
            result = await self._run(provider, content, options)
            if result.detected:
                if policy.detailed_log:
                    logger.info(
                        f"🔎 '{provider.name}' сработал в группе {group_id}: {result.detected_words}"
                    )
                break

        if not result.detected:
            return result

        if self._needs_verification(result, policy):
            result = await self._verify(content, group_id, user_id, policy, options)
            if not result.detected:
                return result

        return self._drop_ignored(result, group_id)

    def _needs_verification(self, result: DetectionResult, policy: EffectivePolicy) -> bool:
        return (
            result.provider != "ai"
            and policy.smart_verification
            and "ai" in policy.methods
        )

    async def _verify(
        self,
        content: str,
        group_id: int,
        user_id: int,
        policy: EffectivePolicy,
        options: CheckOptions,
    ) -> DetectionResult:
        ai = self.providers.get("ai")
        if ai is None:
            logger.warning("⚠️ Умная проверка включена, но AI-провайдер не зарегистрирован")
            return DetectionResult.clean()

        history = await self.history.recent(group_id, user_id, policy.context_msg_count)
        composite = build_context_prompt(history, content)
        verdict = await self._run(ai, composite, options)

        if verdict.detected:
            logger.info(f"🤖 AI подтвердил нарушение user={user_id} group={group_id}")
        else:
            logger.info(f"🤖 AI отклонил срабатывание user={user_id} group={group_id}")
        return verdict

    def _drop_ignored(self, result: DetectionResult, group_id: int) -> DetectionResult:
        if not result.detected_words:
            return result

        remaining = self.ignored_words.filter_words(group_id, result.detected_words)
        if not remaining:
            logger.debug(f"ℹ️ Все найденные слова игнорируются в группе {group_id}")
            return DetectionResult.clean()

        return replace(result, detected_words=remaining)

    async def _run(
        self,
        provider: DetectionProvider,
        content: str,
        options: CheckOptions,
    ) -> DetectionResult:
        try:
            return await asyncio.wait_for(
                provider.check(content, options), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.error(
                f"⏱️ Провайдер '{provider.name}' не ответил за {self.timeout_seconds}s"
            )
            return DetectionResult.clean()
