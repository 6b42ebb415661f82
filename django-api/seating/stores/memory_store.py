"""In-process stores for local development and tests."""

import copy
import itertools
from typing import Any

from seating.domain import EventId
from seating.domain.errors import GatewayError
from seating.stores.interfaces import ReservationGateway, ZoneConfigStore


class InMemoryZoneConfigStore(ZoneConfigStore):
    """Keeps payloads in a dict; mirrors the service's POST/PUT rules."""

    def __init__(self) -> None:
        self._configs: dict[int, dict[str, Any]] = {}

    def get_config(self, event_id: EventId) -> dict[str, Any] | None:
        config = self._configs.get(event_id.value)
        return copy.deepcopy(config) if config is not None else None

    def create_config(self, event_id: EventId, payload: dict[str, Any]) -> dict[str, Any]:
        if event_id.value in self._configs:
            raise GatewayError("Ticket setup already exists", status=409)
        self._configs[event_id.value] = copy.deepcopy(payload)
        return {"status": "ok", "eventId": event_id.value, "message": "Ticket setup saved"}

    def update_config(self, event_id: EventId, payload: dict[str, Any]) -> dict[str, Any]:
        if event_id.value not in self._configs:
            raise GatewayError(f"EVENT_NOT_FOUND: {event_id}", status=404)
        self._configs[event_id.value] = copy.deepcopy(payload)
        return {"status": "ok", "eventId": event_id.value, "message": "Ticket setup saved"}

    def mark_occupied(self, event_id: EventId, zone_id: object, row: int, col: int) -> None:
        """Record a taken seat the way the service reports it (0-based, per zone)."""
        for zone in self._configs[event_id.value].get("zones", []):
            if str(zone.get("id")) == str(zone_id):
                zone.setdefault("occupiedSeats", []).append({"r": row, "c": col})
                return
        raise KeyError(zone_id)


class InMemoryReservationGateway(ReservationGateway):
    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.submitted: list[dict[str, Any]] = []

    def submit(self, payload: dict[str, Any]) -> int | str:
        self.submitted.append(copy.deepcopy(payload))
        return next(self._ids)
