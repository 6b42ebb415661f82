"""Catalog service - orchestration between handlers, validator and store.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models, result values, or raise domain errors
"""

import logging
from typing import Any

from seating.domain import EventId, ZoneCatalog
from seating.domain.errors import ConfigurationNotFoundError, InvalidEventIdError
from seating.services.ticket_setup_validator import (
    TicketSetupDraft,
    TicketSetupValidator,
    ValidationResult,
)
from seating.stores.interfaces import ZoneConfigStore
from seating.stores.mapping import catalog_from_wire

logger = logging.getLogger(__name__)


def parse_event_id(event_id: str) -> EventId:
    """Raises InvalidEventIdError for anything but a positive integer."""
    try:
        return EventId.from_string(event_id)
    except ValueError as exc:
        raise InvalidEventIdError() from exc


class CatalogService:
    """Service for loading and authoring zone catalogs."""

    def __init__(self, store: ZoneConfigStore, validator: TicketSetupValidator) -> None:
        self._store = store
        self._validator = validator

    def get_setup(self, event_id: str) -> dict[str, Any] | None:
        """Return the stored setup payload, or None when nothing is configured yet.

        Raises:
            InvalidEventIdError: If the event_id is malformed.
            GatewayError: If the persistence service fails.
        """
        return self._store.get_config(parse_event_id(event_id))

    def load_catalog(self, event_id: str) -> ZoneCatalog:
        """Return the buyer-side catalog with live occupancy.

        Raises:
            InvalidEventIdError: If the event_id is malformed.
            ConfigurationNotFoundError: If the event has no seating yet.
            MalformedConfigurationError: If the stored payload is unusable.
            GatewayError: If the persistence service fails.
        """
        eid = parse_event_id(event_id)
        data = self._store.get_config(eid)
        if data is None:
            raise ConfigurationNotFoundError(eid.value)
        catalog = catalog_from_wire(data)
        logger.info("loaded catalog for event %s: %d zones", eid, len(catalog.zones))
        return catalog

    def validate(self, draft: TicketSetupDraft) -> ValidationResult:
        return self._validator.validate(draft)

    def save_setup(self, event_id: str, draft: TicketSetupDraft, *, update: bool) -> ValidationResult:
        """Validate then persist; nothing is sent when the draft has violations.

        POST vs PUT is the caller's choice, based on what get_setup returned.

        Raises:
            InvalidEventIdError: If the event_id is malformed.
            GatewayError: If the persistence service rejects or fails.
        """
        eid = parse_event_id(event_id)
        result = self._validator.validate(draft)
        if not result.ok:
            return result
        if update:
            self._store.update_config(eid, result.payload)
        else:
            self._store.create_config(eid, result.payload)
        logger.info(
            "%s ticket setup for event %s (%d zones)",
            "updated" if update else "created", eid, len(result.payload["zones"]),
        )
        return result
