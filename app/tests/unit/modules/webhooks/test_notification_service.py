"""Unit tests for WebhookNotificationService.

Tests cover:
- Payload assembly and field fallbacks
- Ordering of record, build and dispatch
- Delivery proceeding when the activity log is unavailable
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.operations import OperationResult
from modules.webhooks.activity import ActivityRecorder
from modules.webhooks.dispatcher import WebhookDispatcher
from modules.webhooks.events import WebhookEvent
from modules.webhooks.service import WebhookNotificationService
from tests.factories import (
    FIXED_TIMESTAMP,
    make_destination,
    make_options,
    make_user_context,
)


def _fixed_clock():
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(activity_store, user_store, destination_store, mock_delivery_engine):
    return WebhookNotificationService(
        recorder=ActivityRecorder(activity_store, user_store),
        dispatcher=WebhookDispatcher(destination_store, mock_delivery_engine),
        clock=_fixed_clock,
    )


@pytest.mark.unit
class TestBuildPayload:
    """Tests for build_payload."""

    def test_payload_fields(self, service):
        payload = service.build_payload(
            42,
            "login_failed",
            make_user_context(hwid="HW-CTX"),
            make_options(
                success=False,
                error_message="Invalid password",
                metadata={"attempt": 2},
                ip_address="10.0.0.1",
                user_agent="Loader/2.0",
                hwid="HW-OPT",
            ),
        )

        assert payload.event == "login_failed"
        assert payload.timestamp == FIXED_TIMESTAMP
        assert payload.application_id == 42
        assert payload.success is False
        assert payload.error_message == "Invalid password"
        assert payload.metadata == {"attempt": 2}
        assert payload.user_data.hwid == "HW-CTX"
        assert payload.user_data.ip_address == "10.0.0.1"
        assert payload.user_data.user_agent == "Loader/2.0"

    def test_hwid_falls_back_to_options(self, service):
        payload = service.build_payload(
            42, "user_login", make_user_context(hwid=None), make_options(hwid="HW-OPT")
        )

        assert payload.user_data.hwid == "HW-OPT"

    def test_client_details_come_from_options_only(self, service):
        payload = service.build_payload(
            42,
            "user_login",
            make_user_context(ip_address="1.1.1.1", user_agent="Stale/1.0"),
            make_options(),
        )

        assert payload.user_data.ip_address is None
        assert payload.user_data.user_agent is None

    def test_without_user_context(self, service):
        payload = service.build_payload(42, "user_login", None, make_options())

        assert payload.user_data is None
        assert "user_data" not in payload.to_wire()


@pytest.mark.unit
class TestNotify:
    """Tests for notify."""

    @pytest.mark.asyncio
    async def test_records_then_dispatches(
        self, service, activity_store, destination_store, mock_delivery_engine
    ):
        destination_store.add(make_destination(id=1, events=["login_failed"]))
        destination_store.add(make_destination(id=2, events=["user_login"]))

        outcome = await service.notify(
            actor_id="acct-1",
            application_id=42,
            event=WebhookEvent.LOGIN_FAILED,
            user_context=make_user_context(id=7),
            options=make_options(success=False, error_message="Invalid password"),
        )

        assert outcome.activity.is_success
        assert [d.destination_id for d in outcome.deliveries] == [1]
        assert outcome.delivered_count == 1
        entry = activity_store.entries[0]
        assert entry.event == "login_failed"
        assert entry.app_user_id == 7
        assert entry.success is False
        delivered_payload = mock_delivery_engine.deliver.await_args.args[1]
        assert delivered_payload == outcome.payload
        assert delivered_payload.event == "login_failed"

    @pytest.mark.asyncio
    async def test_steps_run_in_order(self):
        calls = []
        recorder = MagicMock()
        dispatcher = MagicMock()

        async def _record(entry):
            calls.append("record")
            return OperationResult.success(data=entry)

        async def _dispatch(actor_id, event, payload):
            calls.append("dispatch")
            return []

        recorder.record = AsyncMock(side_effect=_record)
        dispatcher.dispatch = AsyncMock(side_effect=_dispatch)
        service = WebhookNotificationService(recorder, dispatcher, clock=_fixed_clock)
        original_build = service.build_payload

        def _build(*args, **kwargs):
            calls.append("build")
            return original_build(*args, **kwargs)

        service.build_payload = _build

        await service.notify("acct-1", 42, "user_login")

        assert calls == ["record", "build", "dispatch"]

    @pytest.mark.asyncio
    async def test_delivery_proceeds_when_activity_write_fails(
        self, user_store, destination_store, mock_delivery_engine
    ):
        activity_store = MagicMock()
        activity_store.append = AsyncMock(side_effect=ConnectionError("db down"))
        service = WebhookNotificationService(
            recorder=ActivityRecorder(activity_store, user_store),
            dispatcher=WebhookDispatcher(destination_store, mock_delivery_engine),
            clock=_fixed_clock,
        )
        destination_store.add(make_destination(id=1))

        outcome = await service.notify("acct-1", 42, "user_login")

        assert outcome.activity.is_success is False
        assert outcome.activity.error_code == "ACTIVITY_LOG_WRITE_FAILED"
        assert outcome.delivered_count == 1

    @pytest.mark.asyncio
    async def test_crashing_collaborators_do_not_raise(self):
        recorder = MagicMock()
        recorder.record = AsyncMock(side_effect=RuntimeError("recorder bug"))
        dispatcher = MagicMock()
        dispatcher.dispatch = AsyncMock(side_effect=RuntimeError("dispatcher bug"))
        service = WebhookNotificationService(recorder, dispatcher, clock=_fixed_clock)

        outcome = await service.notify("acct-1", 42, "user_login")

        assert outcome.activity.error_code == "ACTIVITY_RECORD_CRASHED"
        assert outcome.deliveries == []
        assert outcome.payload.event == "user_login"

    @pytest.mark.asyncio
    async def test_unknown_app_user_is_not_referenced(
        self, service, activity_store, destination_store
    ):
        destination_store.add(make_destination(id=1))

        outcome = await service.notify(
            "acct-1", 42, "user_login", user_context=make_user_context(id=999)
        )

        assert activity_store.entries[0].app_user_id is None
        assert outcome.payload.user_data.id == 999

    @pytest.mark.asyncio
    async def test_no_destinations(self, service, activity_store):
        outcome = await service.notify("acct-1", 42, "user_login")

        assert outcome.deliveries == []
        assert len(activity_store.entries) == 1
