"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.webhooks import WebhookDeliverySettings

__all__ = [
    "WebhookDeliverySettings",
]
