"""Request context binding for structured logging.

Binds request-scoped fields (correlation id, acting account, application)
to structlog's context variables so that every log line emitted while a
request or notification is processed carries them.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(actor_id="acct-1", application_id=42):
        logger.info("processing_request")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator
import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    actor_id: Optional[str] = None,
    application_id: Optional[int] = None,
    request_path: Optional[str] = None,
    request_method: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind request-scoped context to all logs within the block.

    Args:
        correlation_id: Request identifier. Generated when not provided.
        actor_id: Account on whose behalf the request runs.
        application_id: Application the request concerns.
        request_path: HTTP request path.
        request_method: HTTP method.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation id in effect for the block.

    Example:
        @app.middleware("http")
        async def logging_middleware(request: Request, call_next):
            with bind_request_context(
                correlation_id=request.headers.get("X-Correlation-ID"),
                request_path=request.url.path,
                request_method=request.method,
            ) as correlation_id:
                response = await call_next(request)
                response.headers["X-Correlation-ID"] = correlation_id
                return response
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if actor_id is not None:
        context["actor_id"] = actor_id
    if application_id is not None:
        context["application_id"] = application_id
    if request_path is not None:
        context["request_path"] = request_path
    if request_method is not None:
        context["request_method"] = request_method

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context."""
    return structlog.contextvars.get_contextvars().get("correlation_id")


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID in the current logging context."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_request_context() -> None:
    """Clear all request-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
