"""Event vocabulary for application user activity."""

from enum import Enum
from typing import Dict


class WebhookEvent(str, Enum):
    """Events emitted by the authentication backend.

    Events travel through the pipeline as plain strings, so tags outside
    this enum are still recorded and delivered.
    """

    USER_LOGIN = "user_login"
    LOGIN_FAILED = "login_failed"
    USER_REGISTER = "user_register"
    ACCOUNT_EXPIRED = "account_expired"
    HWID_MISMATCH = "hwid_mismatch"
    VERSION_MISMATCH = "version_mismatch"
    ACCOUNT_DISABLED = "account_disabled"
    LOGIN_BLOCKED_IP = "login_blocked_ip"
    LOGIN_BLOCKED_USERNAME = "login_blocked_username"
    LOGIN_BLOCKED_HWID = "login_blocked_hwid"
    SESSION_START = "session_start"
    SESSION_END = "session_end"


DEFAULT_EMOJI = "📊"

EVENT_EMOJI: Dict[str, str] = {
    WebhookEvent.USER_LOGIN.value: "🔐",
    WebhookEvent.LOGIN_FAILED.value: "❌",
    WebhookEvent.USER_REGISTER.value: "👤",
    WebhookEvent.ACCOUNT_EXPIRED.value: "⏰",
    WebhookEvent.HWID_MISMATCH.value: "🔒",
    WebhookEvent.VERSION_MISMATCH.value: "🔄",
    WebhookEvent.ACCOUNT_DISABLED.value: "🚫",
    WebhookEvent.LOGIN_BLOCKED_IP.value: "🚫",
    WebhookEvent.LOGIN_BLOCKED_USERNAME.value: "🚫",
    WebhookEvent.LOGIN_BLOCKED_HWID.value: "🚫",
}


def event_value(event) -> str:
    """Return the wire tag for an event given as enum member or string."""
    if isinstance(event, WebhookEvent):
        return event.value
    return str(event)


def emoji_for(event) -> str:
    """Emoji shown in front of the event title; 📊 for unmapped events."""
    return EVENT_EMOJI.get(event_value(event), DEFAULT_EMOJI)


def event_title(event) -> str:
    """Human title: every underscore becomes a space, then uppercased.

    ``login_blocked_ip`` becomes ``LOGIN BLOCKED IP``, never a mix of
    spaces and underscores.
    """
    return event_value(event).replace("_", " ").upper()
