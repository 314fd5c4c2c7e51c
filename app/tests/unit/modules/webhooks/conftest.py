"""Fixtures for webhook module tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from modules.webhooks.delivery import WebhookDeliveryEngine
from modules.webhooks.models import DeliveryOutcome, DeliveryResult
from modules.webhooks.stores import (
    InMemoryActivityLogStore,
    InMemoryDestinationStore,
    InMemoryUserStore,
)


@pytest.fixture
def destination_store():
    return InMemoryDestinationStore()


@pytest.fixture
def user_store():
    store = InMemoryUserStore()
    store.add(7, username="alice", application_id=42)
    return store


@pytest.fixture
def activity_store():
    return InMemoryActivityLogStore()


@pytest.fixture
def mock_delivery_engine():
    """Delivery engine double that reports every delivery as delivered.

    Set ``side_effect`` on ``deliver`` to script per-destination behaviour.
    """
    engine = MagicMock(spec=WebhookDeliveryEngine)

    async def _deliver(destination, payload, attempt=0):
        return DeliveryResult(
            destination_id=destination.id,
            outcome=DeliveryOutcome.DELIVERED,
            attempts=1,
            status_code=200,
        )

    engine.deliver = AsyncMock(side_effect=_deliver)
    return engine
