"""Store interfaces (repository pattern).

Stores must be swappable. They speak wire payloads; turning those into
domain models is the job of stores/mapping.py.
"""

from abc import ABC, abstractmethod
from typing import Any

from seating.domain import EventId


class ZoneConfigStore(ABC):
    """Interface for the persistence service's seating configuration resource."""

    @abstractmethod
    def get_config(self, event_id: EventId) -> dict[str, Any] | None:
        """Return the stored configuration payload, or None if there is none yet.

        Raises:
            GatewayError: On any other failure.
        """
        ...

    @abstractmethod
    def create_config(self, event_id: EventId, payload: dict[str, Any]) -> dict[str, Any]:
        """Store a first configuration for the event (POST)."""
        ...

    @abstractmethod
    def update_config(self, event_id: EventId, payload: dict[str, Any]) -> dict[str, Any]:
        """Replace the event's existing configuration (PUT)."""
        ...


class ReservationGateway(ABC):
    """Interface for submitting reservations to the persistence service."""

    @abstractmethod
    def submit(self, payload: dict[str, Any]) -> int | str:
        """Submit one reservation request and return its external identifier.

        Not retried and not assumed idempotent.

        Raises:
            GatewayError: With the server's message, unchanged.
        """
        ...
