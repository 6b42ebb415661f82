"""Unit tests for CatalogService and SessionContext.

These test error handling and domain error mapping.
Run with: pytest tests/test_services.py -v
"""

from typing import Any

import pytest

from seating.domain import EventId
from seating.domain.errors import (
    ConfigurationNotFoundError,
    ErrorCode,
    GatewayError,
    InvalidEventIdError,
    MalformedConfigurationError,
)
from seating.services import (
    CatalogService,
    Pick,
    SessionContext,
    TicketSetupDraft,
    TicketSetupValidator,
    ZoneDraft,
    parse_event_id,
)
from seating.stores.memory_store import InMemoryZoneConfigStore

from conftest import wire_catalog


def valid_draft() -> TicketSetupDraft:
    return TicketSetupDraft(
        zones=[ZoneDraft(name="VIP", price=5000, seat_rows=4, seat_columns=6)],
        min_per_order=1,
        max_per_order=4,
        sales_start="2025-12-01T10:00:00+07:00",
        sales_end="2025-12-31T23:00:00+07:00",
    )


@pytest.fixture
def store():
    return InMemoryZoneConfigStore()


@pytest.fixture
def service(store):
    return CatalogService(store, TicketSetupValidator())


class TestParseEventId:
    @pytest.mark.parametrize("raw", ["abc", "0", "-3", ""])
    def test_invalid_id_raises_error(self, raw):
        """parse_event_id raises InvalidEventIdError for anything but a positive integer."""
        with pytest.raises(InvalidEventIdError) as exc_info:
            parse_event_id(raw)
        assert exc_info.value.code == ErrorCode.INVALID_EVENT_ID

    def test_valid_id(self):
        """Given digit text, returns the EventId."""
        assert parse_event_id("17") == EventId(17)


class TestCatalogService:
    """Tests for CatalogService."""

    def test_get_setup_returns_none_when_not_configured(self, service):
        """get_setup treats a missing configuration as a normal outcome."""
        assert service.get_setup("5") is None

    def test_get_setup_invalid_id_raises_error(self, service):
        """get_setup raises InvalidEventIdError for a malformed id."""
        with pytest.raises(InvalidEventIdError):
            service.get_setup("five")

    def test_load_catalog_not_found_raises_error(self, service):
        """load_catalog raises ConfigurationNotFoundError when the store returns None."""
        with pytest.raises(ConfigurationNotFoundError) as exc_info:
            service.load_catalog("5")
        assert exc_info.value.event_id == 5

    def test_load_catalog_maps_payload(self, service, store):
        """load_catalog normalizes the stored payload."""
        store.create_config(EventId(5), wire_catalog())

        catalog = service.load_catalog("5")

        assert [z.name for z in catalog.zones] == ["VIP", "Standard"]

    def test_load_catalog_malformed_raises_error(self, service, store):
        """load_catalog raises MalformedConfigurationError for unusable payloads."""
        store.create_config(EventId(5), wire_catalog(minPerOrder=9, maxPerOrder=3))

        with pytest.raises(MalformedConfigurationError):
            service.load_catalog("5")

    def test_save_setup_creates_then_updates(self, service, store):
        """save_setup persists the normalized payload with POST then PUT semantics."""
        created = service.save_setup("5", valid_draft(), update=False)
        assert created.ok
        assert store.get_config(EventId(5)) == created.payload

        draft = valid_draft()
        draft.max_per_order = 2
        updated = service.save_setup("5", draft, update=True)
        assert store.get_config(EventId(5))["maxPerOrder"] == 2
        assert updated.payload["maxPerOrder"] == 2

    def test_save_setup_with_violations_persists_nothing(self, service, store):
        """save_setup returns violations without touching the store."""
        draft = valid_draft()
        draft.zones[0].name = " "

        result = service.save_setup("5", draft, update=False)

        assert result.codes == [ErrorCode.ZONE_NAME_EMPTY]
        assert store.get_config(EventId(5)) is None

    def test_create_twice_raises_gateway_error(self, service):
        """A second POST for the same event is refused by the store."""
        service.save_setup("5", valid_draft(), update=False)

        with pytest.raises(GatewayError) as exc_info:
            service.save_setup("5", valid_draft(), update=False)
        assert exc_info.value.status == 409

    def test_update_without_setup_raises_gateway_error(self, service):
        """PUT before anything exists surfaces the store's message."""
        with pytest.raises(GatewayError) as exc_info:
            service.save_setup("5", valid_draft(), update=True)
        assert exc_info.value.message == "EVENT_NOT_FOUND: 5"

    def test_saved_setup_loads_as_catalog(self, service):
        """A saved setup is readable by the buyer side."""
        service.save_setup("5", valid_draft(), update=False)

        catalog = service.load_catalog("5")

        assert (catalog.zones[0].grid.rows, catalog.zones[0].grid.cols) == (4, 6)
        assert catalog.sales_window.is_complete


class TestSessionContext:
    """Tests for SessionContext lifecycle."""

    def test_start_and_save_picks(self):
        """Saved picks are stored as plain lists under the seating key."""
        storage: dict[str, Any] = {}
        session = SessionContext(storage)
        session.start(1)
        session.save_picks([Pick(1, 0, 0), Pick("zone-2", 3, 4)])

        assert session.event_id == 1
        assert session.picks == [Pick(1, 0, 0), Pick("zone-2", 3, 4)]
        assert storage["seating"]["picks"] == [[1, 0, 0], ["zone-2", 3, 4]]

    def test_restart_same_event_keeps_picks(self):
        """Starting the same event again keeps its picks."""
        session = SessionContext({})
        session.start(1)
        session.save_picks([Pick(1, 0, 0)])

        session.start(1)

        assert session.picks == [Pick(1, 0, 0)]

    def test_switching_event_starts_clean(self):
        """Starting another event drops picks and the last reservation id."""
        session = SessionContext({})
        session.start(1)
        session.save_picks([Pick(1, 0, 0)])
        session.record_reservation(9)

        session.start(2)

        assert session.picks == []
        assert session.last_reservation_id is None

    def test_clear(self):
        """clear removes only the seating entry from storage."""
        storage: dict[str, Any] = {"other": True}
        session = SessionContext(storage)
        session.start(1)

        session.clear()

        assert storage == {"other": True}
        assert session.event_id is None
        assert session.picks == []
