"""Unit tests for the event vocabulary helpers."""

import pytest

from modules.webhooks.events import (
    DEFAULT_EMOJI,
    WebhookEvent,
    emoji_for,
    event_title,
    event_value,
)


@pytest.mark.unit
class TestEventHelpers:
    """Tests for event_value, emoji_for and event_title."""

    def test_event_value_accepts_enum_and_string(self):
        assert event_value(WebhookEvent.USER_LOGIN) == "user_login"
        assert event_value("custom_event") == "custom_event"

    @pytest.mark.parametrize(
        "event,emoji",
        [
            ("user_login", "🔐"),
            ("login_failed", "❌"),
            ("user_register", "👤"),
            ("account_expired", "⏰"),
            ("hwid_mismatch", "🔒"),
            ("version_mismatch", "🔄"),
            ("account_disabled", "🚫"),
            ("login_blocked_ip", "🚫"),
            ("login_blocked_username", "🚫"),
            ("login_blocked_hwid", "🚫"),
        ],
    )
    def test_known_event_emoji(self, event, emoji):
        assert emoji_for(event) == emoji

    def test_unknown_event_uses_fallback_emoji(self):
        assert emoji_for("session_start") == DEFAULT_EMOJI
        assert emoji_for("something_else") == "📊"

    def test_title_replaces_every_underscore(self):
        assert event_title("login_blocked_username") == "LOGIN BLOCKED USERNAME"
        assert event_title(WebhookEvent.USER_LOGIN) == "USER LOGIN"
        assert event_title(WebhookEvent.LOGIN_BLOCKED_IP) == "LOGIN BLOCKED IP"
        assert "_" not in event_title("login_blocked_hwid")
