"""Structlog processors used by the logging pipeline.

Webhook deliveries carry shared secrets, signatures and, for Discord,
credentials embedded in the destination URL itself. These processors keep
that material out of log output.

Usage:
    from infrastructure.logging.formatters import mask_sensitive_data

Dependencies:
    - structlog processors
"""

import re
from typing import Any

# Sensitive field patterns that should be masked in logs
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "signature",
        "token",
        "api_key",
        "apikey",
        "authorization",
        "credential",
        "cookie",
        "session_id",
    }
)

# Discord webhook URLs end with /<webhook id>/<webhook token>
_WEBHOOK_TOKEN_RE = re.compile(
    r"(https?://(?:[\w-]+\.)?discord(?:app)?\.com/api/webhooks/\d+/)[\w-]+"
)


def add_app_info(app_name: str, app_version: str = "unknown"):
    """Create a processor that adds application name and version.

    Args:
        app_name: Name of the application.
        app_version: Version string, usually the git SHA.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor


def add_environment_info(environment: str):
    """Create a processor that tags entries with the environment name."""

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["environment"] = environment
        return event_dict

    return processor


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that masks values stored under sensitive keys.

    Matching is a case-insensitive substring test on the key, so
    ``destination_secret`` and ``X-Webhook-Signature`` are both masked.

    Args:
        mask_value: Replacement for sensitive values.
        additional_patterns: Extra key fragments to treat as sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def _is_sensitive(key: str) -> bool:
        key_lower = key.lower()
        return any(pattern in key_lower for pattern in patterns)

    def _mask(value: Any) -> Any:
        if isinstance(value, dict):
            return {
                k: (mask_value if _is_sensitive(str(k)) and v is not None else _mask(v))
                for k, v in value.items()
            }
        return value

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        masked = {}
        for key, value in event_dict.items():
            if _is_sensitive(key) and value is not None:
                masked[key] = mask_value
            else:
                masked[key] = _mask(value)
        return masked

    return processor


def redact_webhook_urls(replacement: str = "***"):
    """Create a processor that strips the token segment of Discord webhook URLs.

    Any string value containing a Discord webhook URL is rewritten so that
    only the webhook id remains visible.

    Args:
        replacement: Text that replaces the token segment.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and "/api/webhooks/" in value:
                event_dict[key] = _WEBHOOK_TOKEN_RE.sub(
                    lambda m: m.group(1) + replacement, value
                )
        return event_dict

    return processor


def truncate_large_values(max_length: int = 500):
    """Create a processor that truncates overly large string values.

    Response bodies from misbehaving endpoints can be arbitrarily large.

    Args:
        max_length: Maximum string length before truncation.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
