"""Test data factories for deterministic test data generation."""

from tests.factories.webhooks import (
    DISCORD_URL,
    FIXED_TIMESTAMP,
    GENERIC_URL,
    make_activity_entry,
    make_destination,
    make_options,
    make_payload,
    make_user_context,
)

__all__ = [
    "DISCORD_URL",
    "FIXED_TIMESTAMP",
    "GENERIC_URL",
    "make_activity_entry",
    "make_destination",
    "make_options",
    "make_payload",
    "make_user_context",
]
