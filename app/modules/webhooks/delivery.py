"""Webhook delivery engine.

Sends one payload to one destination over HTTP with a bounded timeout,
redirect following and exponential-backoff retries on transient failures.

Usage Example:
    from modules.webhooks.delivery import WebhookDeliveryEngine

    engine = WebhookDeliveryEngine(settings=settings.webhooks)
    result = await engine.deliver(destination, payload)
    if not result.delivered:
        logger.warning("delivery_failed", outcome=result.outcome.value)

    await engine.aclose()
"""

import asyncio
import json
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx

from infrastructure.configuration import WebhookDeliverySettings
from infrastructure.logging import get_module_logger
from infrastructure.operations import (
    OperationResult,
    classify_http_status,
    classify_transport_error,
)
from modules.webhooks.formatters import format_payload
from modules.webhooks.models import (
    DeliveryOutcome,
    DeliveryResult,
    Destination,
    NotificationPayload,
)
from modules.webhooks.signing import signature_header

logger = get_module_logger()

SleepFunc = Callable[[float], Awaitable[Any]]


def serialize_body(document: Dict[str, Any]) -> bytes:
    """Compact UTF-8 JSON encoding of a wire document."""
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode(
        "utf-8"
    )


class WebhookDeliveryEngine:
    """Delivers payloads to individual destinations.

    The request body is formatted and serialized once per delivery; the
    same bytes are signed and sent on every attempt. Retries happen in an
    explicit loop with ``base * 2 ** attempt`` seconds between attempts.

    Attributes:
        settings: Timeout, retry and User-Agent configuration
        client: Shared httpx.AsyncClient (connection pooling)

    Example:
        engine = WebhookDeliveryEngine(
            settings=WebhookDeliverySettings(),
            client=httpx.AsyncClient(transport=transport),
        )
    """

    def __init__(
        self,
        settings: Optional[WebhookDeliverySettings] = None,
        client: Optional[httpx.AsyncClient] = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """Initialize the delivery engine.

        Args:
            settings: Delivery settings. Loaded from the environment when
                omitted.
            client: HTTP client to use. A dedicated client is created (and
                owned) when omitted.
            sleep: Coroutine used to wait between attempts
        """
        self.settings = settings or WebhookDeliverySettings()
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=self.settings.timeout_seconds,
            follow_redirects=True,
        )
        self._sleep = sleep

    def build_headers(
        self,
        destination: Destination,
        payload: NotificationPayload,
        body: bytes,
        attempt: int,
    ) -> Dict[str, str]:
        """Headers for one attempt.

        Discord destinations get the standard headers only. Generic
        destinations also get event, timestamp and attempt headers plus a
        signature when a secret is configured.
        """
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate, br",
            "Connection": "keep-alive",
        }
        if destination.is_discord:
            return headers

        headers["X-Webhook-Timestamp"] = payload.timestamp
        headers["X-Webhook-Event"] = payload.event
        headers["X-Webhook-Retry-Count"] = str(attempt)
        signature = signature_header(body, destination.secret)
        if signature is not None:
            headers["X-Webhook-Signature"] = signature
        return headers

    async def deliver(
        self,
        destination: Destination,
        payload: NotificationPayload,
        attempt: int = 0,
    ) -> DeliveryResult:
        """Deliver a payload to one destination.

        Never raises; every failure resolves to a DeliveryResult whose
        ``delivered`` is False.

        Args:
            destination: Target destination
            payload: Event payload
            attempt: Attempt number to start counting from. One request is
                always sent; retries stop once max_retries is reached.

        Returns:
            DeliveryResult with the terminal outcome and attempt count
        """
        log = logger.bind(
            destination_id=destination.id,
            webhook_event=payload.event,
            application_id=payload.application_id,
        )

        try:
            body = serialize_body(format_payload(payload, destination))
        except Exception as e:  # pylint: disable=broad-except
            log.error("webhook_payload_serialization_failed", error=str(e))
            return DeliveryResult(
                destination_id=destination.id,
                outcome=DeliveryOutcome.FAILED,
                message=f"Could not serialize payload: {e}",
            )

        delays: List[float] = []
        attempts_made = 0
        current = attempt

        # The first request is always sent; only retries are bounded
        while True:
            result = await self._attempt(destination, payload, body, current, log)
            attempts_made += 1

            if result.is_success:
                log.info(
                    "webhook_delivered",
                    attempts=attempts_made,
                    status_code=result.status_code,
                )
                return DeliveryResult(
                    destination_id=destination.id,
                    outcome=DeliveryOutcome.DELIVERED,
                    attempts=attempts_made,
                    status_code=result.status_code,
                    message=result.message,
                    delays=delays,
                )

            if not result.is_transient:
                log.warning(
                    "webhook_delivery_failed",
                    attempts=attempts_made,
                    status_code=result.status_code,
                    error=result.message,
                    error_code=result.error_code,
                )
                return DeliveryResult(
                    destination_id=destination.id,
                    outcome=DeliveryOutcome.FAILED,
                    attempts=attempts_made,
                    status_code=result.status_code,
                    message=result.message,
                    delays=delays,
                )

            if current >= self.settings.max_retries:
                break

            delay = self.settings.backoff_delay(current)
            log.info(
                "webhook_delivery_retry_scheduled",
                attempt=current,
                delay_seconds=delay,
                error_code=result.error_code,
            )
            delays.append(delay)
            await self._sleep(delay)
            current += 1

        log.error(
            "webhook_delivery_exhausted",
            attempts=attempts_made,
            status_code=result.status_code,
            error=result.message,
        )
        return DeliveryResult(
            destination_id=destination.id,
            outcome=DeliveryOutcome.EXHAUSTED,
            attempts=attempts_made,
            status_code=result.status_code,
            message=result.message,
            delays=delays,
        )

    async def _attempt(
        self,
        destination: Destination,
        payload: NotificationPayload,
        body: bytes,
        attempt: int,
        log,
    ) -> OperationResult:
        """Send a single HTTP request and classify its outcome."""
        headers = self.build_headers(destination, payload, body, attempt)
        started = time.monotonic()
        log.debug(
            "webhook_delivery_attempt",
            attempt=attempt,
            max_retries=self.settings.max_retries,
        )

        try:
            response = await asyncio.wait_for(
                self.client.post(
                    destination.url,
                    content=body,
                    headers=headers,
                    timeout=self.settings.timeout_seconds,
                    follow_redirects=True,
                ),
                timeout=self.settings.timeout_seconds,
            )
        except Exception as e:  # pylint: disable=broad-except
            result = classify_transport_error(e)
            log.warning(
                "webhook_delivery_attempt_error",
                attempt=attempt,
                duration_ms=round((time.monotonic() - started) * 1000),
                error=result.message,
                error_code=result.error_code,
            )
            return result

        result = classify_http_status(response.status_code)
        log.info(
            "webhook_delivery_attempt_completed",
            attempt=attempt,
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - started) * 1000),
        )
        if not result.is_success:
            log.debug("webhook_error_response", content=response.text[:200])
        return result

    async def aclose(self) -> None:
        """Close the HTTP client if this engine created it."""
        if self._owns_client:
            await self.client.aclose()
            logger.debug("webhook_delivery_client_closed")
