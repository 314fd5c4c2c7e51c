"""Fan-out of one event to every subscribed destination.

Deliveries to different destinations run concurrently and are joined with
settle-all semantics: a failing or crashing delivery never cancels or
affects the others.

Usage Example:
    dispatcher = WebhookDispatcher(
        destination_store=store,
        delivery_engine=engine,
    )
    results = await dispatcher.dispatch("acct-1", "user_login", payload)
"""

import asyncio
from typing import List

from infrastructure.logging import get_module_logger
from modules.webhooks.delivery import WebhookDeliveryEngine
from modules.webhooks.events import event_value
from modules.webhooks.models import (
    DeliveryOutcome,
    DeliveryResult,
    Destination,
    NotificationPayload,
)
from modules.webhooks.stores import DestinationStore

logger = get_module_logger()


class WebhookDispatcher:
    """Routes a payload to the actor's eligible destinations.

    Attributes:
        destination_store: Source of the actor's destinations
        delivery_engine: Engine used for each individual delivery
    """

    def __init__(
        self,
        destination_store: DestinationStore,
        delivery_engine: WebhookDeliveryEngine,
    ):
        self.destination_store = destination_store
        self.delivery_engine = delivery_engine

    async def eligible_destinations(self, actor_id: str, event) -> List[Destination]:
        """Active destinations of the actor subscribed to the event."""
        destinations = await self.destination_store.list_for_owner(actor_id)
        return [d for d in destinations if d.accepts(event)]

    async def dispatch(
        self, actor_id: str, event, payload: NotificationPayload
    ) -> List[DeliveryResult]:
        """Deliver a payload to every eligible destination concurrently.

        Never raises. A failure to load destinations is logged and results
        in no deliveries.

        Args:
            actor_id: Account whose destinations are notified
            event: Event tag used for subscription filtering
            payload: Payload to deliver

        Returns:
            One DeliveryResult per eligible destination, in store order
        """
        event_name = event_value(event)
        log = logger.bind(actor_id=actor_id, webhook_event=event_name)

        try:
            targets = await self.eligible_destinations(actor_id, event_name)
        except Exception as e:  # pylint: disable=broad-except
            log.error("webhook_destinations_load_failed", error=str(e), exc_info=True)
            return []

        if not targets:
            log.debug("webhook_fanout_skipped", reason="no_eligible_destinations")
            return []

        log.info("webhook_fanout_started", destination_count=len(targets))

        settled = await asyncio.gather(
            *(self.delivery_engine.deliver(d, payload) for d in targets),
            return_exceptions=True,
        )

        results: List[DeliveryResult] = []
        for destination, outcome in zip(targets, settled):
            if isinstance(outcome, BaseException):
                log.error(
                    "webhook_delivery_crashed",
                    destination_id=destination.id,
                    error=str(outcome),
                )
                outcome = DeliveryResult(
                    destination_id=destination.id,
                    outcome=DeliveryOutcome.FAILED,
                    message=f"Delivery raised {type(outcome).__name__}: {outcome}",
                )
            results.append(outcome)

        log.info(
            "webhook_fanout_completed",
            destination_count=len(targets),
            delivered_count=sum(1 for r in results if r.delivered),
        )
        return results
