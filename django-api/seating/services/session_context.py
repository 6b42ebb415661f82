"""Per-buyer flow state.

Everything the selection and checkout flow remembers between requests
goes through one SessionContext, backed by a mutable mapping (the Django
session over HTTP, a plain dict in tests). It is started when a buyer
opens an event's seat map and cleared when they leave or finish.
"""

from collections.abc import MutableMapping
from typing import Any

from seating.services.selection_engine import Pick

NAMESPACE = "seating"


class SessionContext:
    def __init__(self, storage: MutableMapping[str, Any], namespace: str = NAMESPACE) -> None:
        self._storage = storage
        self._namespace = namespace

    @property
    def _state(self) -> dict[str, Any]:
        return self._storage.get(self._namespace) or {}

    def _write(self, **changes: Any) -> None:
        # Reassign rather than mutate so Django notices the session changed.
        state = dict(self._state)
        state.update(changes)
        self._storage[self._namespace] = state

    def start(self, event_id: int) -> None:
        """Begin (or continue) a flow for event_id; switching events starts clean."""
        if self.event_id != event_id:
            self._storage[self._namespace] = {"event_id": event_id, "picks": []}

    @property
    def event_id(self) -> int | None:
        return self._state.get("event_id")

    @property
    def picks(self) -> list[Pick]:
        return [Pick(zone_id=z, row=r, col=c) for z, r, c in self._state.get("picks", [])]

    def save_picks(self, picks: tuple[Pick, ...] | list[Pick]) -> None:
        self._write(picks=[[p.zone_id, p.row, p.col] for p in picks])

    def record_reservation(self, reservation_id: int | str) -> None:
        self._write(last_reservation_id=reservation_id, picks=[])

    @property
    def last_reservation_id(self) -> int | str | None:
        return self._state.get("last_reservation_id")

    def clear(self) -> None:
        self._storage.pop(self._namespace, None)
