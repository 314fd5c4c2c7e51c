"""Structlog configuration and logger setup.

Configures structlog with callsite context, exception formatting, secret
redaction and environment-aware rendering (console in development, JSON in
production).

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging(settings=settings)

    logger = get_module_logger()
    logger.info("event_name", key="value")

Dependencies:
    - infrastructure.configuration.Settings
"""

import inspect
import logging
import sys
from typing import Optional, TYPE_CHECKING

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.logging.formatters import (
    add_app_info,
    add_environment_info,
    mask_sensitive_data,
    redact_webhook_urls,
    truncate_large_values,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

APP_NAME = "webhook-notifier"


def _is_test_environment() -> bool:
    """Detect if running in a test environment.

    Returns:
        True if pytest is in sys.modules, False otherwise
    """
    return "pytest" in sys.modules


def configure_logging(
    settings: Optional["Settings"] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging.

    Args:
        settings: Application settings. Loaded from the environment when
            omitted.
        log_level: Optional override for settings.LOG_LEVEL.
        is_production: Optional override for settings.is_production.
            Controls JSON vs console output.

    Returns:
        Configured logger instance

    Example:
        logger = configure_logging(log_level="DEBUG", is_production=False)
    """
    # Suppress all logging during tests
    if _is_test_environment():
        logging.root.setLevel(logging.CRITICAL + 1)
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            level=logging.CRITICAL + 1,
            force=True,
        )
        return structlog.stdlib.get_logger()

    if settings is None:
        from infrastructure.configuration import Settings

        settings = Settings()

    prod_mode = is_production if is_production is not None else settings.is_production

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        add_app_info(APP_NAME, settings.GIT_SHA),
        add_environment_info(settings.environment),
        mask_sensitive_data(),
        redact_webhook_urls(),
        truncate_large_values(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if not prod_mode:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    effective_log_level = log_level or settings.LOG_LEVEL
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, effective_log_level.upper(), logging.INFO),
    )

    return structlog.stdlib.get_logger()


# Silences output under pytest before any module logger is first used
if _is_test_environment():
    configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module.

    Binds ``component`` (last dotted segment) and ``module_path`` so log
    lines can be filtered per module.

    Returns:
        Logger instance with module context

    Example:
        # In modules/webhooks/delivery.py
        logger = get_module_logger()
        # context: {"component": "delivery", "module_path": "modules.webhooks.delivery"}
    """
    current_frame = inspect.currentframe()
    frame = current_frame.f_back if current_frame is not None else None
    module = inspect.getmodule(frame) if frame is not None else None
    if module is None:
        return structlog.stdlib.get_logger(component="unknown")

    module_name = module.__name__
    # Lazy proxy: processors are resolved on first use, after configure_logging
    return structlog.stdlib.get_logger(
        component=module_name.split(".")[-1],
        module_path=module_name,
    )
