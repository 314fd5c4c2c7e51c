"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for settings, stores and the
webhook notification service.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from modules.webhooks.activity import ActivityRecorder
from modules.webhooks.delivery import WebhookDeliveryEngine
from modules.webhooks.dispatcher import WebhookDispatcher
from modules.webhooks.service import WebhookNotificationService
from modules.webhooks.stores import (
    InMemoryActivityLogStore,
    InMemoryDestinationStore,
    InMemoryUserStore,
)


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Infrastructure packages should use this directly:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_destination_store() -> InMemoryDestinationStore:
    """Get application-scoped webhook destination store."""
    return InMemoryDestinationStore()


@lru_cache
def get_user_store() -> InMemoryUserStore:
    """Get application-scoped app user store."""
    return InMemoryUserStore()


@lru_cache
def get_activity_log_store() -> InMemoryActivityLogStore:
    """Get application-scoped activity log store."""
    return InMemoryActivityLogStore()


@lru_cache
def get_delivery_engine() -> WebhookDeliveryEngine:
    """
    Get application-scoped webhook delivery engine.

    The engine owns one httpx.AsyncClient shared by every delivery; it is
    closed by the application lifespan on shutdown.

    Returns:
        WebhookDeliveryEngine: Cached engine configured from settings.webhooks
    """
    return WebhookDeliveryEngine(settings=get_settings().webhooks)


@lru_cache
def get_notification_service() -> WebhookNotificationService:
    """
    Get application-scoped notification service.

    Wires the activity recorder and the fan-out dispatcher to the shared
    stores and delivery engine.

    Returns:
        WebhookNotificationService: Cached service instance

    Usage:
        @router.post("/login")
        async def login(service: NotificationServiceDep):
            await service.notify(actor_id, application_id, "user_login", user)
    """
    recorder = ActivityRecorder(
        activity_store=get_activity_log_store(),
        user_store=get_user_store(),
    )
    dispatcher = WebhookDispatcher(
        destination_store=get_destination_store(),
        delivery_engine=get_delivery_engine(),
    )
    return WebhookNotificationService(recorder=recorder, dispatcher=dispatcher)
