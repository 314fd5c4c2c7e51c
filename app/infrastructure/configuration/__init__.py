"""Infrastructure configuration module - public API.

Centralized configuration for the webhook notifier using Pydantic
BaseSettings, organized by section.

Exports:
    Settings: Main settings class
    WebhookDeliverySettings: Delivery settings class (for testing/overrides)
    ServerSettings: Server settings class (for testing/overrides)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()
    timeout = settings.webhooks.timeout_seconds
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.features.webhooks import WebhookDeliverySettings
from infrastructure.configuration.infrastructure.server import ServerSettings

__all__ = ["Settings", "WebhookDeliverySettings", "ServerSettings"]
