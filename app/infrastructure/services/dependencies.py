"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated
from fastapi import Depends
from infrastructure.configuration import Settings
from infrastructure.services.providers import (
    get_settings,
    get_activity_log_store,
    get_delivery_engine,
    get_notification_service,
    get_user_store,
)
from modules.webhooks.delivery import WebhookDeliveryEngine
from modules.webhooks.service import WebhookNotificationService
from modules.webhooks.stores import ActivityLogStore, UserStore

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Store dependencies
ActivityLogStoreDep = Annotated[ActivityLogStore, Depends(get_activity_log_store)]
UserStoreDep = Annotated[UserStore, Depends(get_user_store)]

# Delivery engine - its HTTP client is also used for connectivity tests
DeliveryEngineDep = Annotated[WebhookDeliveryEngine, Depends(get_delivery_engine)]

# Notification facade
NotificationServiceDep = Annotated[
    WebhookNotificationService, Depends(get_notification_service)
]

__all__ = [
    "SettingsDep",
    "ActivityLogStoreDep",
    "UserStoreDep",
    "DeliveryEngineDep",
    "NotificationServiceDep",
]
