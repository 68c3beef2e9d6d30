# =============================================================================
# Файл: wordguard/handlers/__init__.py
# Описание: Главный агрегатор роутеров.
#           Команды администраторов регистрируются раньше обработчика
#           обычных сообщений группы.
# =============================================================================

from aiogram import Router

from .admin import admin_router
from .group_handler import group_router

main_router = Router(name="main_router")

main_router.include_router(admin_router)
main_router.include_router(group_router)
