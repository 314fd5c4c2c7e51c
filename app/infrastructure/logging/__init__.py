"""Structured logging infrastructure.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_request_context(): Context manager for request-scoped logging
    - get_correlation_id() / set_correlation_id() / clear_request_context()

Formatters:
    - add_app_info(), add_environment_info()
    - mask_sensitive_data(), redact_webhook_urls(), truncate_large_values()
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)

from infrastructure.logging.context import (
    bind_request_context,
    get_correlation_id,
    set_correlation_id,
    clear_request_context,
)

from infrastructure.logging.formatters import (
    add_app_info,
    add_environment_info,
    mask_sensitive_data,
    redact_webhook_urls,
    truncate_large_values,
    SENSITIVE_PATTERNS,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_request_context",
    "get_correlation_id",
    "set_correlation_id",
    "clear_request_context",
    "add_app_info",
    "add_environment_info",
    "mask_sensitive_data",
    "redact_webhook_urls",
    "truncate_large_values",
    "SENSITIVE_PATTERNS",
]
