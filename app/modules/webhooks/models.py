"""Webhook notification models.

Destinations, activity log entries and the payload that is delivered to
every subscribed destination.

Uses Pydantic BaseModel for:
- Runtime validation of store records and API input
- A closed metadata type (strings, numbers, booleans and nested mappings)
- JSON-ready serialization of the delivered payload
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypeAliasType

from infrastructure.operations import OperationResult
from modules.webhooks.events import event_value

DISCORD_WEBHOOK_MARKER = "discord.com/api/webhooks"

MetadataValue = TypeAliasType(
    "MetadataValue",
    Union[str, int, float, bool, None, Dict[str, "MetadataValue"]],
)
Metadata = Dict[str, MetadataValue]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    moment = moment or utc_now()
    return (
        moment.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class Destination(BaseModel):
    """A registered webhook endpoint owned by one account.

    Attributes:
        id: Store identifier
        owner_id: Account that registered the destination
        url: Endpoint receiving POST requests
        secret: Shared secret for HMAC signatures (generic endpoints only)
        events: Event tags the destination is subscribed to
        is_active: Inactive destinations never receive deliveries
        name: Optional display name
    """

    id: int
    owner_id: str
    url: str
    secret: Optional[str] = None
    events: List[str] = Field(default_factory=list)
    is_active: bool = True
    name: Optional[str] = None

    @property
    def is_discord(self) -> bool:
        """True when the URL points at a Discord incoming webhook."""
        return DISCORD_WEBHOOK_MARKER in self.url

    def accepts(self, event) -> bool:
        """True when the destination is active and subscribed to the event."""
        return self.is_active and event_value(event) in self.events


class UserContext(BaseModel):
    """Application user the event is about.

    ``id`` is absent for events raised before a user could be resolved,
    such as blacklist blocks.
    """

    id: Optional[int] = None
    username: str
    email: Optional[str] = None
    hwid: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    location: Optional[str] = None


class NotifyOptions(BaseModel):
    """Caller supplied details for a single notification."""

    success: bool = True
    error_message: Optional[str] = None
    metadata: Optional[Metadata] = None
    ip_address: Optional[str] = None
    hwid: Optional[str] = None
    user_agent: Optional[str] = None


class NotificationPayload(BaseModel):
    """Event document delivered to destinations.

    Immutable once built; the same payload is formatted for every
    destination of a fan-out.
    """

    model_config = ConfigDict(frozen=True)

    event: str
    timestamp: str
    application_id: int
    success: bool = True
    error_message: Optional[str] = None
    metadata: Optional[Metadata] = None
    user_data: Optional[UserContext] = None

    def to_wire(self) -> dict:
        """JSON-ready dict with unset optional fields left out."""
        return self.model_dump(exclude_none=True)


class ActivityLogEntry(BaseModel):
    """Append-only record of one user activity event."""

    id: Optional[int] = None
    application_id: int
    app_user_id: Optional[int] = None
    event: str
    success: bool = True
    error_message: Optional[str] = None
    ip_address: Optional[str] = None
    hwid: Optional[str] = None
    user_agent: Optional[str] = None
    metadata: Optional[Metadata] = None
    created_at: datetime = Field(default_factory=utc_now)


class DeliveryOutcome(Enum):
    """Terminal state of a delivery to one destination.

    DELIVERED: a 2xx/3xx response was received
    EXHAUSTED: every attempt failed with a retryable error
    FAILED: a non-retryable error stopped delivery
    """

    DELIVERED = "delivered"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class DeliveryResult(BaseModel):
    """Result of delivering one payload to one destination.

    Attributes:
        destination_id: Destination the payload was sent to
        outcome: Terminal DeliveryOutcome
        attempts: Number of HTTP attempts made
        status_code: Status of the last response, if any response arrived
        message: Description of the last attempt
        delays: Backoff delays waited between attempts (seconds)
    """

    destination_id: int
    outcome: DeliveryOutcome
    attempts: int = 0
    status_code: Optional[int] = None
    message: str = ""
    delays: List[float] = Field(default_factory=list)

    @property
    def delivered(self) -> bool:
        return self.outcome == DeliveryOutcome.DELIVERED


@dataclass
class NotificationOutcome:
    """What happened to one notify() call.

    Attributes:
        activity: Result of writing the activity log entry
        payload: Payload built for delivery
        deliveries: One DeliveryResult per eligible destination
    """

    activity: OperationResult
    payload: NotificationPayload
    deliveries: List[DeliveryResult] = field(default_factory=list)

    @property
    def delivered_count(self) -> int:
        return sum(1 for d in self.deliveries if d.delivered)
