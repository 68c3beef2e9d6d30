# wordguard/middlewares/dependencies.py
from typing import Any, Awaitable, Callable, Dict, Optional

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject
from loguru import logger

from wordguard.containers import Container
from wordguard.utils.dependencies import Deps
from wordguard.utils.keys import KeyFactory


class DependenciesMiddleware(BaseMiddleware):
    """
    Легковесный middleware для внедрения зависимостей в обработчики.

    Все сервисы создаются как singleton в контейнере, Deps собирается один раз
    и переиспользуется для всех событий.
    """

    def __init__(self, container: Container):
        super().__init__()
        self.container = container
        self._deps: Optional[Deps] = None
        logger.info("✅ DependenciesMiddleware initialized")

    def _build_deps(self) -> Deps:
        c = self.container
        return Deps(
            settings=c.settings(),
            redis=c.redis_client(),
            keys=KeyFactory,
            word_dictionary=c.word_dictionary(),
            ignored_words=c.ignored_words(),
            whitelist_service=c.whitelist_service(),
            history_store=c.history_store(),
            violation_tracker=c.violation_tracker(),
            orchestrator=c.orchestrator(),
            pipeline=c.pipeline(),
            mailer_service=c.mailer_service(),
            throttle=c.throttle(),
        )

    @property
    def deps(self) -> Deps:
        if self._deps is None:
            self._deps = self._build_deps()
        return self._deps

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        """
        Внедряет зависимости в контекст обработчика.

        Args:
            handler: Следующий обработчик в цепочке
            event: Событие от Telegram
            data: Контекст данных

        Returns:
            Результат выполнения обработчика
        """
        data["container"] = self.container
        data["deps"] = self.deps
        return await handler(event, data)
