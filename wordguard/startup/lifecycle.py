# wordguard/startup/lifecycle.py
from typing import Optional

from aiogram import Bot
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger

from wordguard.containers import Container
from wordguard.jobs.scheduled_tasks import setup_scheduler
from wordguard.middlewares.dependencies import DependenciesMiddleware
from wordguard.startup.setup import load_moderation_data, shutdown_resources

_scheduler: Optional[AsyncIOScheduler] = None


async def on_startup(bot: Bot, container: Container, deps_middleware: DependenciesMiddleware) -> None:
    global _scheduler
    logger.info("🚀 Starting bot...")

    await load_moderation_data(container)

    try:
        await bot.delete_webhook(drop_pending_updates=True)
        logger.info("✅ Webhook deleted, pending updates dropped")
    except Exception as e:
        logger.warning(f"⚠️ Failed to delete webhook: {e}")

    bot_info = await bot.get_me()
    logger.info(f"✅ Bot started: @{bot_info.username} (ID: {bot_info.id})")

    _scheduler = setup_scheduler(deps_middleware.deps)


async def on_shutdown(bot: Bot, container: Container) -> None:
    global _scheduler
    logger.info("🛑 Shutting down bot...")

    if _scheduler is not None and _scheduler.running:
        _scheduler.shutdown(wait=False)
        _scheduler = None
        logger.info("✅ Scheduler stopped")

    await shutdown_resources(container)

    logger.info("✅ Bot stopped gracefully")
