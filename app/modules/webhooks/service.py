"""Notification facade used by the authentication flows.

One call records the activity, builds the canonical payload and fans it
out to the account's destinations, in that order.

Usage Example:
    service = get_notification_service()
    await service.notify(
        actor_id="acct-1",
        application_id=42,
        event=WebhookEvent.LOGIN_FAILED,
        user_context=UserContext(id=7, username="alice"),
        options=NotifyOptions(success=False, error_message="Invalid password"),
    )
"""

from datetime import datetime
from typing import Callable, Optional

from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult
from modules.webhooks.activity import ActivityRecorder
from modules.webhooks.dispatcher import WebhookDispatcher
from modules.webhooks.events import event_value
from modules.webhooks.models import (
    ActivityLogEntry,
    NotificationOutcome,
    NotificationPayload,
    NotifyOptions,
    UserContext,
    utc_now,
    utc_timestamp,
)

logger = get_module_logger()


class WebhookNotificationService:
    """Records user activity and notifies webhook destinations.

    Built once per process and handed to callers through dependency
    injection.

    Attributes:
        recorder: Activity log writer
        dispatcher: Fan-out dispatcher
    """

    def __init__(
        self,
        recorder: ActivityRecorder,
        dispatcher: WebhookDispatcher,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.recorder = recorder
        self.dispatcher = dispatcher
        self._clock = clock

    def build_payload(
        self,
        application_id: int,
        event: str,
        user_context: Optional[UserContext],
        options: NotifyOptions,
    ) -> NotificationPayload:
        """Assemble the payload stamped with the current UTC time.

        HWID falls back from the user context to the options; IP address and
        user agent always come from the options.
        """
        user_data = None
        if user_context is not None:
            user_data = UserContext(
                id=user_context.id,
                username=user_context.username,
                email=user_context.email,
                hwid=user_context.hwid or options.hwid,
                ip_address=options.ip_address,
                user_agent=options.user_agent,
                location=user_context.location,
            )

        return NotificationPayload(
            event=event,
            timestamp=utc_timestamp(self._clock()),
            application_id=application_id,
            success=options.success,
            error_message=options.error_message,
            metadata=options.metadata,
            user_data=user_data,
        )

    async def notify(
        self,
        actor_id: str,
        application_id: int,
        event,
        user_context: Optional[UserContext] = None,
        options: Optional[NotifyOptions] = None,
    ) -> NotificationOutcome:
        """Record an activity and notify the actor's destinations.

        Steps run strictly in order: record activity, build payload,
        dispatch. A failed activity write does not stop delivery. Never
        raises.

        Args:
            actor_id: Account that owns the application and its destinations
            application_id: Application the event belongs to
            event: Event tag (WebhookEvent member or string)
            user_context: App user the event is about, if known
            options: Success flag, error message, metadata and client details

        Returns:
            NotificationOutcome with the activity result and per-destination
            delivery results
        """
        options = options or NotifyOptions()
        event_name = event_value(event)
        log = logger.bind(
            actor_id=actor_id,
            application_id=application_id,
            webhook_event=event_name,
        )

        entry = ActivityLogEntry(
            application_id=application_id,
            app_user_id=user_context.id if user_context else None,
            event=event_name,
            success=options.success,
            error_message=options.error_message,
            ip_address=options.ip_address,
            hwid=options.hwid,
            user_agent=options.user_agent,
            metadata=options.metadata,
        )
        try:
            activity = await self.recorder.record(entry)
        except Exception as e:  # pylint: disable=broad-except
            log.error("activity_record_crashed", error=str(e), exc_info=True)
            activity = OperationResult.transient_error(
                f"Activity recording raised: {e}", error_code="ACTIVITY_RECORD_CRASHED"
            )

        payload = self.build_payload(application_id, event_name, user_context, options)

        try:
            deliveries = await self.dispatcher.dispatch(actor_id, event_name, payload)
        except Exception as e:  # pylint: disable=broad-except
            log.error("webhook_dispatch_crashed", error=str(e), exc_info=True)
            deliveries = []

        outcome = NotificationOutcome(
            activity=activity, payload=payload, deliveries=deliveries
        )
        log.info(
            "notification_processed",
            activity_logged=activity.is_success,
            destination_count=len(deliveries),
            delivered_count=outcome.delivered_count,
        )
        return outcome
