"""Best-effort activity log recording.

Writing the activity log must never block the notification that follows
it, so every failure here is reported as an OperationResult instead of
raised.
"""

from typing import Optional

from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult
from modules.webhooks.models import ActivityLogEntry
from modules.webhooks.stores import ActivityLogStore, UserStore

logger = get_module_logger()


class ActivityRecorder:
    """Appends activity log entries after validating the app user reference.

    Attributes:
        activity_store: Append-only activity log
        user_store: Used to check that a referenced app user exists
    """

    def __init__(self, activity_store: ActivityLogStore, user_store: UserStore):
        self.activity_store = activity_store
        self.user_store = user_store

    async def resolve_app_user_id(self, app_user_id: Optional[int]) -> Optional[int]:
        """Return the id if it references an existing app user, else None.

        Missing, non-positive and unknown ids resolve to None. A failing
        lookup is logged and also resolves to None.
        """
        if app_user_id is None or app_user_id <= 0:
            return None

        try:
            user = await self.user_store.get_user(app_user_id)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning(
                "activity_app_user_lookup_failed",
                app_user_id=app_user_id,
                error=str(e),
            )
            return None

        if user is None:
            logger.debug("activity_app_user_not_found", app_user_id=app_user_id)
            return None
        return app_user_id

    async def record(self, entry: ActivityLogEntry) -> OperationResult:
        """Validate and append an activity log entry.

        Args:
            entry: Entry to persist. ``app_user_id`` is dropped when it does
                not resolve to an existing app user.

        Returns:
            OperationResult with the stored entry as data, or a transient
            error when the store rejected the write
        """
        app_user_id = await self.resolve_app_user_id(entry.app_user_id)
        if app_user_id != entry.app_user_id:
            entry = entry.model_copy(update={"app_user_id": app_user_id})

        try:
            stored = await self.activity_store.append(entry)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "activity_log_write_failed",
                application_id=entry.application_id,
                activity_event=entry.event,
                error=str(e),
            )
            return OperationResult.transient_error(
                f"Failed to write activity log: {e}",
                error_code="ACTIVITY_LOG_WRITE_FAILED",
            )

        logger.debug(
            "activity_logged",
            application_id=entry.application_id,
            activity_event=entry.event,
            app_user_id=app_user_id,
        )
        return OperationResult.success(data=stored, message="Activity logged")
