"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest
from rest_framework.test import APIClient

from seating.domain import ZoneCatalog
from seating.stores import get_config_store, get_reservation_gateway, reset_stores
from seating.stores.mapping import catalog_from_wire


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def memory_stores(settings):
    settings.SEATING = {
        **settings.SEATING,
        "STORE_BACKEND": "seating.stores.memory_store.InMemoryZoneConfigStore",
        "GATEWAY_BACKEND": "seating.stores.memory_store.InMemoryReservationGateway",
    }
    reset_stores()
    yield
    reset_stores()


@pytest.fixture
def config_store():
    return get_config_store()


@pytest.fixture
def gateway():
    return get_reservation_gateway()


def wire_catalog(**overrides: Any) -> dict[str, Any]:
    """VIP (ticket type 1) and Standard (ticket type 2) on a 10x12 global grid."""
    data = {
        "globalRows": 10,
        "globalCols": 12,
        "zones": [
            {"id": 1, "name": "VIP", "price": 5000, "ticketTypeId": 1, "rows": 2, "cols": 4},
            {"id": 2, "name": "Standard", "price": 1500, "ticketTypeId": 2},
        ],
        "minPerOrder": 1,
        "maxPerOrder": 5,
        "active": True,
        "salesWindow": {"start": "2020-01-01T00:00:00+00:00", "end": "2099-01-01T00:00:00+00:00"},
    }
    data.update(overrides)
    return data


def make_catalog(**overrides: Any) -> ZoneCatalog:
    return catalog_from_wire(wire_catalog(**overrides))


@pytest.fixture
def catalog() -> ZoneCatalog:
    return make_catalog()
