# wordguard/startup/middlewares.py
from aiogram import Dispatcher
from loguru import logger

from wordguard.containers import Container
from wordguard.middlewares.dependencies import DependenciesMiddleware


def register_middlewares(dp: Dispatcher, container: Container) -> DependenciesMiddleware:
    logger.info("🔌 Registering middlewares...")
    middleware = DependenciesMiddleware(container)
    dp.update.middleware(middleware)
    logger.info("✅ Dependencies middleware registered")
    return middleware
