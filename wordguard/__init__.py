# wordguard/__init__.py
"""
wordguard: модерация групповых чатов Telegram.

Многоуровневая проверка сообщений (словарь, внешние API, AI),
умная перепроверка с учётом контекста и эскалация наказаний
по скользящему окну нарушений.
"""

__version__ = "1.0.0"
