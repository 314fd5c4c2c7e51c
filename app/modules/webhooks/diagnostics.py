"""Connectivity diagnostics for webhook URLs.

Posts a small test document to a URL and reports what came back, so an
account owner can tell a misconfigured endpoint from a network problem.
"""

import platform
import time
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, Field

from infrastructure.configuration import WebhookDeliverySettings
from infrastructure.logging import get_module_logger
from modules.webhooks.delivery import serialize_body
from modules.webhooks.models import utc_timestamp

logger = get_module_logger()


class ConnectivityTest(BaseModel):
    """Outcome of one connectivity probe.

    ``status_code`` is 0 when no response was received.
    """

    success: bool
    status_code: int
    response_time_ms: int
    response_headers: Dict[str, str] = Field(default_factory=dict)
    error: Optional[str] = None


class DiagnosticsReport(BaseModel):
    server_info: Dict[str, Any]
    request_info: Dict[str, Any] = Field(default_factory=dict)
    connectivity_test: ConnectivityTest


def server_info(settings: WebhookDeliverySettings) -> Dict[str, Any]:
    return {
        "region": settings.deployment_region,
        "timestamp": utc_timestamp(),
        "python_version": platform.python_version(),
    }


async def probe_webhook_url(
    url: str,
    client: httpx.AsyncClient,
    settings: WebhookDeliverySettings,
    info: Optional[Dict[str, Any]] = None,
) -> ConnectivityTest:
    """POST a test document to url and measure the response.

    Never raises. Non-2xx responses report the response body as the error.

    Args:
        url: Webhook URL to test
        client: HTTP client to send with
        settings: Supplies timeout and User-Agent
        info: Server details to embed in the test document

    Returns:
        ConnectivityTest describing the response or the failure
    """
    document = {
        "test": True,
        "message": "Connectivity test from webhook notifier",
        "timestamp": utc_timestamp(),
        "diagnostics": info or server_info(settings),
    }
    headers = {
        "Content-Type": "application/json",
        "User-Agent": settings.diagnostics_user_agent,
    }

    started = time.monotonic()
    try:
        response = await client.post(
            url,
            content=serialize_body(document),
            headers=headers,
            timeout=settings.diagnostics_timeout_seconds,
            follow_redirects=True,
        )
    except Exception as e:  # pylint: disable=broad-except
        elapsed = round((time.monotonic() - started) * 1000)
        logger.warning(
            "webhook_connectivity_test_failed",
            url=url,
            error=str(e),
            error_type=type(e).__name__,
        )
        return ConnectivityTest(
            success=False,
            status_code=0,
            response_time_ms=elapsed,
            error=str(e) or type(e).__name__,
        )

    elapsed = round((time.monotonic() - started) * 1000)
    ok = response.is_success
    logger.info(
        "webhook_connectivity_test_completed",
        url=url,
        status_code=response.status_code,
        response_time_ms=elapsed,
    )
    return ConnectivityTest(
        success=ok,
        status_code=response.status_code,
        response_time_ms=elapsed,
        response_headers=dict(response.headers),
        error=None if ok else response.text,
    )


async def run_diagnostics(
    url: str,
    client: httpx.AsyncClient,
    settings: WebhookDeliverySettings,
    request_info: Optional[Dict[str, Any]] = None,
) -> DiagnosticsReport:
    """Collect server details and run a connectivity probe against url."""
    info = server_info(settings)
    test = await probe_webhook_url(url, client, settings, info)
    return DiagnosticsReport(
        server_info=info,
        request_info=request_info or {},
        connectivity_test=test,
    )
