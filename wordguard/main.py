# wordguard/main.py
import asyncio

from loguru import logger

from wordguard import __version__
from wordguard.config.settings import settings
from wordguard.containers import Container
from wordguard.startup import start_polling
from wordguard.startup.handlers import register_handlers
from wordguard.startup.middlewares import register_middlewares
from wordguard.startup.setup import init_resources, setup_bot, shutdown_resources
from wordguard.utils.logging_setup import setup_logging


async def run_bot() -> None:
    container = Container()

    try:
        await init_resources(container)
    except RuntimeError as e:
        logger.error(f"❌ Cannot start: {e}")
        await shutdown_resources(container)
        return

    bot, dp = setup_bot(container)
    register_handlers(dp)
    deps_middleware = register_middlewares(dp, container)

    await start_polling(bot, dp, container, deps_middleware)


def main() -> None:
    setup_logging(
        level=settings.log_level,
        format="json" if settings.logging.json_enabled else "text",
        debug_loggers=settings.logging.debug_loggers,
        service_name=settings.logging.service_name,
    )
    logger.info("=" * 60)
    logger.info(f"🛡 wordguard v{__version__}")
    logger.info("=" * 60)

    try:
        asyncio.run(run_bot())
    except KeyboardInterrupt:
        logger.info("👋 Stopped by user")


if __name__ == "__main__":
    main()
