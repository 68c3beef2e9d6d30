# wordguard/startup/__init__.py
from wordguard.startup.polling import start_polling

__all__ = ["start_polling"]
