# wordguard/handlers/admin/__init__.py
from aiogram import Router

from .dictionary_handler import dictionary_router
from .members_handler import members_router
from .tools_handler import tools_router

admin_router = Router(name="admin_router")

admin_router.include_router(dictionary_router)
admin_router.include_router(members_router)
admin_router.include_router(tools_router)

__all__ = ["admin_router"]
