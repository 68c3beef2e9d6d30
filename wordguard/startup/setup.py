# wordguard/startup/setup.py
from aiogram import Bot, Dispatcher
from loguru import logger

from wordguard.config.settings import settings
from wordguard.containers import Container


async def init_resources(container: Container) -> None:
    logger.info("🔧 Initializing container resources...")

    redis = container.redis_client()
    await redis.ping()
    logger.info("✅ Redis connected")

    if not await container.instance_lock_manager().acquire_lock():
        raise RuntimeError(
            "Another bot instance is already running. "
            "Please stop it before starting a new one."
        )


async def shutdown_resources(container: Container) -> None:
    logger.info("🛑 Shutting down container resources...")

    try:
        await container.instance_lock_manager().release_lock()
    except Exception as e:
        logger.error(f"Error releasing lock: {e}")

    try:
        await container.http_client().close()
        logger.info("✅ HTTP client closed")
    except Exception as e:
        logger.error(f"Error closing HTTP client: {e}")

    try:
        await container.bot().session.close()
        logger.info("✅ Bot session closed")
    except Exception as e:
        logger.error(f"Error closing bot session: {e}")

    try:
        await container.redis_client().aclose()
        logger.info("✅ Redis client closed")
    except Exception as e:
        logger.error(f"Error closing Redis: {e}")


async def load_moderation_data(container: Container) -> None:
    """Загружает словари в кэш, переносит устаревшие словари и белые списки из конфигурации."""
    logger.info("📚 Loading moderation data...")

    groups = settings.moderation.groups

    dictionary = container.word_dictionary()
    await dictionary.load()
    migrated = await dictionary.migrate_legacy(groups)
    if migrated:
        logger.info(f"✅ Migrated {migrated} legacy dictionary words")

    await container.ignored_words().load()
    await container.whitelist_service().seed(groups)

    logger.info(f"✅ Moderation data loaded for {len(groups)} configured groups")


def setup_bot(container: Container) -> tuple[Bot, Dispatcher]:
    logger.info("🤖 Setting up bot and dispatcher...")

    bot = container.bot()
    dispatcher = Dispatcher()

    logger.info("✅ Bot and dispatcher configured")
    return bot, dispatcher
