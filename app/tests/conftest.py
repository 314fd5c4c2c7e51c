"""Shared fixtures for the whole test suite."""

from typing import Callable, List, Union

import httpx
import pytest
import structlog

from infrastructure.configuration import WebhookDeliverySettings
from tests.factories import (
    make_destination,
    make_options,
    make_payload,
    make_user_context,
)


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Keep structlog context variables from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def delivery_settings():
    """Delivery settings with the production defaults."""
    return WebhookDeliverySettings()


@pytest.fixture
def destination_factory():
    """Factory for Destination instances (see tests.factories.webhooks)."""
    return make_destination


@pytest.fixture
def payload_factory():
    """Factory for NotificationPayload instances."""
    return make_payload


@pytest.fixture
def user_context_factory():
    """Factory for UserContext instances."""
    return make_user_context


@pytest.fixture
def options_factory():
    """Factory for NotifyOptions instances."""
    return make_options


class RecordingTransport(httpx.AsyncBaseTransport):
    """httpx transport that replays scripted outcomes and records requests.

    Each outcome is either an int (status code), an httpx.Response or an
    exception instance to raise. The last outcome repeats once the script
    runs out.
    """

    def __init__(self, outcomes: List[Union[int, httpx.Response, Exception]]):
        self.outcomes = list(outcomes)
        self.requests: List[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        await request.aread()
        self.requests.append(request)
        index = min(len(self.requests) - 1, len(self.outcomes) - 1)
        outcome = self.outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        return httpx.Response(outcome, request=request)


@pytest.fixture
def recording_transport() -> Callable[..., RecordingTransport]:
    """Factory for RecordingTransport.

    Example:
        transport = recording_transport(503, 503, 200)
        client = httpx.AsyncClient(transport=transport)
    """

    def _factory(*outcomes) -> RecordingTransport:
        return RecordingTransport(list(outcomes) or [200])

    return _factory


@pytest.fixture
def no_sleep():
    """Replacement for asyncio.sleep that records requested delays."""
    delays: List[float] = []

    async def _sleep(delay: float) -> None:
        delays.append(delay)

    _sleep.delays = delays  # type: ignore[attr-defined]
    return _sleep
