# ======================================================================================
# Файл: wordguard/jobs/scheduled_tasks.py
# Описание:
#   Планировщик фоновых задач на APScheduler (AsyncIOScheduler):
#     • sweep_history_job    : удаляет сообщения истории старше окна хранения
#     • sweep_throttle_job   : очищает устаревшие записи троттлинга
#     • summary_report_job   : отправляет сводку нарушений на почту
#   Задачи не разделяют состояние с обработкой сообщений, кроме очищаемых структур.
# ======================================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from redis.exceptions import RedisError

if TYPE_CHECKING:
    from wordguard.utils.dependencies import Deps

logger = logging.getLogger(__name__)


# --------------------------------- jobs ---------------------------------------

async def sweep_history_job(deps: "Deps") -> None:
    try:
        removed = await deps.history_store.sweep()
    except RedisError as e:
        logger.error("Ошибка очистки истории сообщений: %s", e)
        return
    logger.debug("Очистка истории: удалено %s записей", removed)


async def sweep_throttle_job(deps: "Deps") -> None:
    dropped = deps.throttle.sweep()
    logger.debug("Очистка троттлинга: удалено %s записей", dropped)


async def summary_report_job(deps: "Deps") -> None:
    """Сводка за интервал расписания. Ошибки отправки логирует сам сервис."""
    try:
        result = await deps.mailer_service.send_scheduled_summary()
    except RedisError as e:
        logger.error("Ошибка очистки журнала нарушений: %s", e)
        return
    logger.info("Сводка нарушений: success=%s count=%s", result.success, result.count)


# --------------------------- scheduler bootstrap -------------------------------

def setup_scheduler(deps: "Deps") -> AsyncIOScheduler:
    """
    Регистрирует и запускает планировщик. Вызывается при старте бота.
    Интервалы берутся из Settings.
    """
    settings = deps.settings
    scheduler = AsyncIOScheduler(timezone="UTC")

    scheduler.add_job(
        sweep_history_job,
        "interval",
        minutes=max(1, settings.history.sweep_interval_minutes),
        args=[deps],
        id="history_sweep",
        replace_existing=True,
    )
    scheduler.add_job(
        sweep_throttle_job,
        "interval",
        seconds=max(1, settings.throttling.sweep_interval_seconds),
        args=[deps],
        id="throttle_sweep",
        replace_existing=True,
    )

    smtp = settings.smtp
    if smtp is not None and smtp.is_configured and smtp.summary_interval_days > 0:
        scheduler.add_job(
            summary_report_job,
            "interval",
            days=smtp.summary_interval_days,
            args=[deps],
            id="summary_report",
            replace_existing=True,
        )

    scheduler.start()
    logger.info(
        "Планировщик запущен. Задачи: %s",
        [job.id for job in scheduler.get_jobs()],
    )
    return scheduler
