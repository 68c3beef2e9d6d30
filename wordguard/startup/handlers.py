# wordguard/startup/handlers.py
from aiogram import Dispatcher
from loguru import logger

from wordguard.handlers import main_router


def register_handlers(dp: Dispatcher) -> None:
    logger.info("📝 Registering handlers...")
    dp.include_router(main_router)
    logger.info("✅ main_router registered")
