"""Storage collaborators for the webhook subsystem.

The notification pipeline only depends on the three protocols below. The
in-memory implementations back the default process wiring and the tests;
a database-backed implementation only needs to provide the same coroutines.
"""

import itertools
from typing import Any, Dict, Iterable, List, Optional, Protocol

from modules.webhooks.models import ActivityLogEntry, Destination


class DestinationStore(Protocol):
    async def list_for_owner(self, owner_id: str) -> List[Destination]: ...


class UserStore(Protocol):
    async def get_user(self, user_id: int) -> Optional[Dict[str, Any]]: ...


class ActivityLogStore(Protocol):
    async def append(self, entry: ActivityLogEntry) -> ActivityLogEntry: ...

    async def list_for_application(
        self, application_id: int, limit: int = 100
    ) -> List[ActivityLogEntry]: ...

    async def list_for_app_user(
        self, app_user_id: int, limit: int = 100
    ) -> List[ActivityLogEntry]: ...


class InMemoryDestinationStore:
    """Destinations kept in a dict keyed by id."""

    def __init__(self, destinations: Optional[Iterable[Destination]] = None):
        self._destinations: Dict[int, Destination] = {}
        self._ids = itertools.count(1)
        for destination in destinations or []:
            self._destinations[destination.id] = destination

    def add(self, destination: Destination) -> Destination:
        self._destinations[destination.id] = destination
        return destination

    def create(self, **fields: Any) -> Destination:
        """Create a destination with the next free id."""
        next_id = next(self._ids)
        while next_id in self._destinations:
            next_id = next(self._ids)
        return self.add(Destination(id=next_id, **fields))

    async def list_for_owner(self, owner_id: str) -> List[Destination]:
        return [d for d in self._destinations.values() if d.owner_id == owner_id]


class InMemoryUserStore:
    """App users kept in a dict keyed by id."""

    def __init__(self, users: Optional[Dict[int, Dict[str, Any]]] = None):
        self._users: Dict[int, Dict[str, Any]] = dict(users or {})

    def add(self, user_id: int, **fields: Any) -> Dict[str, Any]:
        user = {"id": user_id, **fields}
        self._users[user_id] = user
        return user

    async def get_user(self, user_id: int) -> Optional[Dict[str, Any]]:
        return self._users.get(user_id)


class InMemoryActivityLogStore:
    """Append-only activity log kept in a list.

    Entries are assigned increasing ids on append. Listings return the
    newest entries first.
    """

    def __init__(self):
        self._entries: List[ActivityLogEntry] = []
        self._ids = itertools.count(1)

    @property
    def entries(self) -> List[ActivityLogEntry]:
        return list(self._entries)

    async def append(self, entry: ActivityLogEntry) -> ActivityLogEntry:
        stored = entry.model_copy(update={"id": next(self._ids)})
        self._entries.append(stored)
        return stored

    async def list_for_application(
        self, application_id: int, limit: int = 100
    ) -> List[ActivityLogEntry]:
        matches = [e for e in self._entries if e.application_id == application_id]
        return _newest_first(matches, limit)

    async def list_for_app_user(
        self, app_user_id: int, limit: int = 100
    ) -> List[ActivityLogEntry]:
        matches = [e for e in self._entries if e.app_user_id == app_user_id]
        return _newest_first(matches, limit)


def _newest_first(entries: List[ActivityLogEntry], limit: int) -> List[ActivityLogEntry]:
    ordered = sorted(entries, key=lambda e: (e.created_at, e.id or 0), reverse=True)
    return ordered[:limit]
