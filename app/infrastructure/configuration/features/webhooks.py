"""Webhook delivery settings."""

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class WebhookDeliverySettings(FeatureSettings):
    """Outbound webhook delivery configuration.

    Environment Variables:
        WEBHOOK_TIMEOUT_SECONDS: Per-attempt request timeout (default: 20)
        WEBHOOK_MAX_RETRIES: Retries after the first attempt (default: 3)
        WEBHOOK_BACKOFF_BASE_SECONDS: Base delay for exponential backoff (default: 1)
        WEBHOOK_USER_AGENT: User-Agent sent with every delivery
        WEBHOOK_DIAGNOSTICS_TIMEOUT_SECONDS: Timeout for connectivity tests (default: 15)
        WEBHOOK_DIAGNOSTICS_USER_AGENT: User-Agent sent by connectivity tests
        WEBHOOK_DEPLOYMENT_REGION: Region reported in connectivity test bodies

    Exponential Backoff:
        Delay before retry n (n starting at 0) is base * 2 ** n.

        With the defaults (base=1s, max_retries=3):
            Attempt 0 fails -> wait 1s
            Attempt 1 fails -> wait 2s
            Attempt 2 fails -> wait 4s
            Attempt 3 fails -> delivery exhausted

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        timeout = settings.webhooks.timeout_seconds
        ```
    """

    timeout_seconds: float = Field(
        default=20.0,
        alias="WEBHOOK_TIMEOUT_SECONDS",
        description="Per-attempt timeout for webhook deliveries (seconds)",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        alias="WEBHOOK_MAX_RETRIES",
        description="Retries after the first attempt on transient failures",
    )
    backoff_base_seconds: float = Field(
        default=1.0,
        ge=0,
        alias="WEBHOOK_BACKOFF_BASE_SECONDS",
        description="Base delay for exponential backoff (seconds)",
    )
    user_agent: str = Field(
        default="WebhookNotifier/1.0",
        alias="WEBHOOK_USER_AGENT",
        description="User-Agent header sent with deliveries",
    )
    diagnostics_timeout_seconds: float = Field(
        default=15.0,
        alias="WEBHOOK_DIAGNOSTICS_TIMEOUT_SECONDS",
        description="Timeout for webhook connectivity tests (seconds)",
    )
    diagnostics_user_agent: str = Field(
        default="WebhookNotifier-Diagnostics/1.0",
        alias="WEBHOOK_DIAGNOSTICS_USER_AGENT",
        description="User-Agent header sent by connectivity tests",
    )
    deployment_region: str = Field(
        default="unknown",
        alias="WEBHOOK_DEPLOYMENT_REGION",
        description="Deployment region reported in connectivity test bodies",
    )

    def backoff_delay(self, attempt: int) -> float:
        """Delay to wait after a failed attempt before the next one."""
        return self.backoff_base_seconds * (2**attempt)
