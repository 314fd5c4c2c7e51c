"""Error classifiers for outbound HTTP calls.

Converts httpx responses and exceptions into OperationResult objects so the
retry loop only has to look at OperationStatus.

Key Functions:
- classify_http_status(): final response status code → OperationResult
- classify_transport_error(): exception raised by the client → OperationResult

Usage:
    from infrastructure.operations.classifiers import (
        classify_http_status,
        classify_transport_error,
    )

    try:
        response = await client.post(url, content=body)
    except Exception as exc:
        return classify_transport_error(exc)
    return classify_http_status(response.status_code)
"""

import asyncio

import httpx

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus


def classify_http_status(status_code: int) -> OperationResult:
    """Classify a final HTTP status code.

    Status Code Mapping:
    - 200-399: SUCCESS (redirects have already been followed)
    - 429: Rate limiting → TRANSIENT_ERROR
    - 5xx: Server error → TRANSIENT_ERROR
    - 404: Not found → NOT_FOUND (not retried)
    - Other: PERMANENT_ERROR

    Args:
        status_code: HTTP status of the last response

    Returns:
        OperationResult carrying the status code
    """
    if 200 <= status_code < 400:
        return OperationResult.success(
            message=f"HTTP {status_code}", status_code=status_code
        )

    if status_code == 429:
        return OperationResult.transient_error(
            "Destination rate limited the request",
            error_code="RATE_LIMITED",
            status_code=status_code,
        )

    if 500 <= status_code < 600:
        return OperationResult.transient_error(
            f"Destination server error: HTTP {status_code}",
            error_code="SERVER_ERROR",
            status_code=status_code,
        )

    if status_code == 404:
        return OperationResult.error(
            OperationStatus.NOT_FOUND,
            "Destination endpoint not found",
            error_code="NOT_FOUND",
            status_code=status_code,
        )

    return OperationResult.permanent_error(
        f"Destination rejected the request: HTTP {status_code}",
        error_code="CLIENT_ERROR",
        status_code=status_code,
    )


def classify_transport_error(exc: Exception) -> OperationResult:
    """Classify an exception raised while sending a request.

    Mapping:
    - httpx.TimeoutException, asyncio.TimeoutError → TRANSIENT_ERROR (TIMEOUT)
    - httpx.TransportError (connect, read, protocol errors) → TRANSIENT_ERROR
    - httpx.InvalidURL, httpx.UnsupportedProtocol → PERMANENT_ERROR
    - anything else → PERMANENT_ERROR (UNEXPECTED_ERROR)

    Args:
        exc: Exception raised by httpx or by request preparation

    Returns:
        OperationResult with error status and message
    """
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
        return OperationResult.transient_error(
            f"Request timed out: {type(exc).__name__}",
            error_code="TIMEOUT",
        )

    # UnsupportedProtocol is a TransportError subclass but will never succeed
    if isinstance(exc, (httpx.UnsupportedProtocol, httpx.InvalidURL)):
        return OperationResult.permanent_error(
            f"Invalid destination URL: {exc}",
            error_code="INVALID_URL",
        )

    if isinstance(exc, httpx.TransportError):
        return OperationResult.transient_error(
            f"Connection error: {type(exc).__name__}: {exc}",
            error_code="CONNECTION_ERROR",
        )

    return OperationResult.permanent_error(
        f"Unexpected error: {type(exc).__name__}: {exc}",
        error_code="UNEXPECTED_ERROR",
    )
