"""Destination-specific payload formatting.

Discord incoming webhooks only render their own message schema, so events
sent there are converted into a single rich embed. Every other destination
receives the payload document unchanged.
"""

from typing import Any, Dict, List

from modules.webhooks.events import emoji_for, event_title
from modules.webhooks.models import (
    Destination,
    Metadata,
    NotificationPayload,
    UserContext,
)

SUCCESS_COLOR = 0x00FF00
FAILURE_COLOR = 0xFF0000


def _user_field(user: UserContext) -> Dict[str, Any]:
    lines = [f"**Username:** {user.username}"]
    if user.email:
        lines.append(f"**Email:** {user.email}")
    if user.ip_address:
        lines.append(f"**IP:** {user.ip_address}")
    if user.hwid:
        lines.append(f"**HWID:** {user.hwid}")
    return {"name": "User Information", "value": "\n".join(lines), "inline": True}


def _metadata_field(metadata: Metadata) -> Dict[str, Any]:
    lines = [f"**{key}:** {_render_value(value)}" for key, value in metadata.items()]
    return {
        "name": "Additional Information",
        "value": "\n".join(lines),
        "inline": False,
    }


def _render_value(value) -> str:
    # Booleans and nulls read the way they would in the JSON body
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    if isinstance(value, dict):
        return ", ".join(f"{k}: {_render_value(v)}" for k, v in value.items())
    return str(value)


def format_discord_embed(payload: NotificationPayload) -> Dict[str, Any]:
    """Build the Discord embed for a payload.

    Fields appear in a fixed order: user information, error details,
    additional information. Each is only present when its source data is.

    Args:
        payload: Event payload

    Returns:
        Embed dict (title, color, timestamp, footer, fields)
    """
    fields: List[Dict[str, Any]] = []

    if payload.user_data:
        fields.append(_user_field(payload.user_data))

    if payload.error_message:
        fields.append(
            {
                "name": "Error Details",
                "value": payload.error_message,
                "inline": False,
            }
        )

    if payload.metadata:
        fields.append(_metadata_field(payload.metadata))

    return {
        "title": f"{emoji_for(payload.event)} {event_title(payload.event)}",
        "color": SUCCESS_COLOR if payload.success else FAILURE_COLOR,
        "timestamp": payload.timestamp,
        "footer": {"text": f"Application ID: {payload.application_id}"},
        "fields": fields,
    }


def format_payload(
    payload: NotificationPayload, destination: Destination
) -> Dict[str, Any]:
    """Produce the JSON document to send to one destination.

    Args:
        payload: Event payload
        destination: Target destination

    Returns:
        ``{"embeds": [embed]}`` for Discord, the payload document otherwise
    """
    if destination.is_discord:
        return {"embeds": [format_discord_embed(payload)]}
    return payload.to_wire()
