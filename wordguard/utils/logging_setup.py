# =============================================================================
# Файл: wordguard/utils/logging_setup.py
# Описание:
#   • Настройка логирования через loguru
#   • Поддержка JSON-формата для structured logging
#   • Перехват стандартного logging и фильтрация шумных библиотек
# =============================================================================

import logging
import sys
from typing import Iterable, Literal

from loguru import logger

NOISY_LOGGERS = (
    "aiogram",
    "aiohttp",
    "asyncio",
    "apscheduler",
    "httpx",
    "httpcore",
    "openai",
)


class InterceptHandler(logging.Handler):
    """
    Перехватчик стандартных логов Python и перенаправление в loguru.
    Нужен для библиотек, которые пишут через стандартный logging.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Ищем кадр, из которого пришёл вызов logging
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    level: str = "INFO",
    format: Literal["text", "json"] = "text",
    debug_loggers: Iterable[str] = (),
    service_name: str = "wordguard",
) -> None:
    """
    Настраивает систему логирования для всего приложения.

    Args:
        level: Уровень логирования ("DEBUG", "INFO", "WARNING", "ERROR")
        format: Формат вывода ("text" или "json")
        debug_loggers: Имена логгеров, которым оставить уровень DEBUG
        service_name: Имя сервиса, добавляется в каждую запись (поле extra.service)
    """
    logger.remove()
    logger.configure(extra={"service": service_name})

    if format == "json":
        logger.add(
            sys.stdout,
            level=level.upper(),
            serialize=True,
            backtrace=True,
            diagnose=False,
        )
    else:
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        )
        logger.add(
            sys.stdout,
            format=log_format,
            level=level.upper(),
            colorize=True,
            backtrace=True,
            diagnose=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    for logger_name in debug_loggers:
        logging.getLogger(logger_name).setLevel(logging.DEBUG)

    logger.info(
        f"✅ Logging configured: level={level.upper()}, format={format}"
    )
