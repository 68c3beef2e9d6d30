# wordguard/containers/container.py
from aiogram import Bot
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from dependency_injector import containers, providers
from redis.asyncio import Redis

from wordguard.config.settings import settings as app_settings
from wordguard.containers.lock import InstanceLockManager
from wordguard.containers.providers import create_ai_provider, create_detection_providers
from wordguard.services.audit_service import ViolationAuditLog
from wordguard.services.detection.orchestrator import DetectionOrchestrator
from wordguard.services.history_service import MessageHistoryStore
from wordguard.services.ignored_words import IgnoredWordFilter
from wordguard.services.mailer_service import MailerService
from wordguard.services.moderation_service import TelegramModerationGateway
from wordguard.services.pipeline import ModerationPipeline
from wordguard.services.throttle import MessageThrottle
from wordguard.services.violation_tracker import ViolationTracker
from wordguard.services.whitelist_service import WhitelistService
from wordguard.services.word_dictionary import WordDictionary
from wordguard.utils.http_client import HTTPClient


class Container(containers.DeclarativeContainer):
    settings = providers.Object(app_settings)

    redis_client = providers.Singleton(
        Redis.from_url,
        url=app_settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_keepalive=True,
        health_check_interval=30,
    )

    http_client = providers.Singleton(HTTPClient)

    instance_lock_manager = providers.Singleton(
        InstanceLockManager,
        redis=redis_client,
        lock_key="wordguard:instance_lock",
        ttl=30,
    )

    bot = providers.Singleton(
        Bot,
        token=app_settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )

    # --- хранилища ---
    word_dictionary = providers.Singleton(WordDictionary, redis=redis_client)
    ignored_words = providers.Singleton(IgnoredWordFilter, redis=redis_client)
    whitelist_service = providers.Singleton(WhitelistService, redis=redis_client)
    history_store = providers.Singleton(
        MessageHistoryStore, redis=redis_client, config=app_settings.history
    )
    audit_log = providers.Singleton(ViolationAuditLog, redis=redis_client)

    # --- состояние в памяти ---
    violation_tracker = providers.Singleton(ViolationTracker)
    throttle = providers.Singleton(MessageThrottle, config=app_settings.throttling)

    # --- проверка ---
    ai_provider = providers.Singleton(
        create_ai_provider,
        config=app_settings.openai,
        max_timeout=app_settings.moderation.provider_timeout_seconds,
    )
    detection_providers = providers.Singleton(
        create_detection_providers,
        dictionary=word_dictionary,
        http_client=http_client,
        ai_provider=ai_provider,
    )
    orchestrator = providers.Singleton(
        DetectionOrchestrator,
        providers=detection_providers,
        ignored_words=ignored_words,
        history=history_store,
        timeout_seconds=app_settings.moderation.provider_timeout_seconds,
    )

    # --- наказания и уведомления ---
    moderation_gateway = providers.Singleton(
        TelegramModerationGateway,
        bot=bot,
        check_admin=app_settings.moderation.check_admin,
    )
    mailer_service = providers.Singleton(MailerService, config=app_settings.smtp, audit_log=audit_log)

    pipeline = providers.Singleton(
        ModerationPipeline,
        config=app_settings.moderation,
        orchestrator=orchestrator,
        tracker=violation_tracker,
        history=history_store,
        whitelist=whitelist_service,
        throttle=throttle,
        audit_log=audit_log,
        gateway=moderation_gateway,
        mailer=mailer_service,
    )
