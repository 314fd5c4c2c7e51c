"""Webhook notifications for application user activity.

Records every authentication event in the activity log and fans it out to
the account's registered webhook destinations: Discord destinations as rich
embeds, everything else as a signed JSON document.
"""

from modules.webhooks.events import WebhookEvent
from modules.webhooks.models import (
    ActivityLogEntry,
    DeliveryOutcome,
    DeliveryResult,
    Destination,
    NotificationOutcome,
    NotificationPayload,
    NotifyOptions,
    UserContext,
)
from modules.webhooks.service import WebhookNotificationService

__all__ = [
    "WebhookEvent",
    "ActivityLogEntry",
    "DeliveryOutcome",
    "DeliveryResult",
    "Destination",
    "NotificationOutcome",
    "NotificationPayload",
    "NotifyOptions",
    "UserContext",
    "WebhookNotificationService",
]
