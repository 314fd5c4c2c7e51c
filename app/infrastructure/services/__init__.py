"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    ActivityLogStoreDep,
    UserStoreDep,
    DeliveryEngineDep,
    NotificationServiceDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_destination_store,
    get_user_store,
    get_activity_log_store,
    get_delivery_engine,
    get_notification_service,
)

__all__ = [
    "SettingsDep",
    "ActivityLogStoreDep",
    "UserStoreDep",
    "DeliveryEngineDep",
    "NotificationServiceDep",
    "get_settings",
    "get_destination_store",
    "get_user_store",
    "get_activity_log_store",
    "get_delivery_engine",
    "get_notification_service",
]
