"""Sample notifications for testing webhook configurations.

Account owners can fire a realistic event at their own destinations to
check formatting and connectivity before real traffic arrives.
"""

from typing import Dict, NamedTuple, Optional

from modules.webhooks.events import WebhookEvent, event_value
from modules.webhooks.models import NotificationOutcome, NotifyOptions, UserContext
from modules.webhooks.service import WebhookNotificationService


class SampleEvent(NamedTuple):
    user_context: UserContext
    success: bool = True
    error_message: Optional[str] = None
    hwid: Optional[str] = None


_TEST_USER = UserContext(id=1, username="test_user", email="test@example.com")

SAMPLE_EVENTS: Dict[str, SampleEvent] = {
    WebhookEvent.USER_LOGIN.value: SampleEvent(_TEST_USER, hwid="TEST-HWID"),
    WebhookEvent.LOGIN_FAILED.value: SampleEvent(
        _TEST_USER, success=False, error_message="Invalid password"
    ),
    WebhookEvent.USER_REGISTER.value: SampleEvent(
        UserContext(id=2, username="new_user", email="new@example.com")
    ),
    WebhookEvent.ACCOUNT_DISABLED.value: SampleEvent(
        UserContext(id=1, username="disabled_user", email="disabled@example.com"),
        success=False,
        error_message="Account is disabled",
    ),
    WebhookEvent.ACCOUNT_EXPIRED.value: SampleEvent(
        UserContext(id=1, username="expired_user", email="expired@example.com"),
        success=False,
        error_message="Account has expired",
    ),
    WebhookEvent.VERSION_MISMATCH.value: SampleEvent(
        _TEST_USER, success=False, error_message="Version mismatch detected"
    ),
    WebhookEvent.HWID_MISMATCH.value: SampleEvent(
        _TEST_USER, success=False, error_message="Hardware ID mismatch"
    ),
    # Blacklist checks run before the user is resolved, so no id
    WebhookEvent.LOGIN_BLOCKED_IP.value: SampleEvent(
        UserContext(username="test_user"),
        success=False,
        error_message="IP address is blacklisted",
    ),
    WebhookEvent.LOGIN_BLOCKED_USERNAME.value: SampleEvent(
        UserContext(username="blocked_user"),
        success=False,
        error_message="Username is blacklisted",
    ),
    WebhookEvent.LOGIN_BLOCKED_HWID.value: SampleEvent(
        UserContext(username="test_user"),
        success=False,
        error_message="Hardware ID is blacklisted",
        hwid="BLOCKED-HWID",
    ),
}


def sample_for(event) -> SampleEvent:
    """Sample data for an event; events without a sample reuse user_login's."""
    return SAMPLE_EVENTS.get(
        event_value(event), SAMPLE_EVENTS[WebhookEvent.USER_LOGIN.value]
    )


async def send_test_notification(
    service: WebhookNotificationService,
    actor_id: str,
    application_id: int,
    event=WebhookEvent.USER_LOGIN,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> NotificationOutcome:
    """Run a full notification with sample data for the given event.

    The requested event tag is kept even when the sample data falls back to
    the user_login sample.

    Args:
        service: Notification service to run through
        actor_id: Account whose destinations receive the test
        application_id: Application to attribute the event to
        event: Event tag to simulate
        ip_address: Client IP to report
        user_agent: Client User-Agent to report

    Returns:
        NotificationOutcome of the underlying notify() call
    """
    sample = sample_for(event)
    options = NotifyOptions(
        success=sample.success,
        error_message=sample.error_message,
        ip_address=ip_address,
        user_agent=user_agent,
        hwid=sample.hwid,
    )
    return await service.notify(
        actor_id=actor_id,
        application_id=application_id,
        event=event_value(event),
        user_context=sample.user_context,
        options=options,
    )
