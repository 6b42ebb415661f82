"""Store factory driven by settings.SEATING.

Instances are built once per process; reset_stores() drops them (tests).
"""

from functools import lru_cache
from typing import Any

from django.conf import settings
from django.utils.module_loading import import_string

from seating.stores.interfaces import ReservationGateway, ZoneConfigStore


def _build(setting: str) -> Any:
    cls = import_string(settings.SEATING[setting])
    factory = getattr(cls, "from_settings", None)
    return factory(settings.SEATING) if factory else cls()


@lru_cache(maxsize=None)
def get_config_store() -> ZoneConfigStore:
    return _build("STORE_BACKEND")


@lru_cache(maxsize=None)
def get_reservation_gateway() -> ReservationGateway:
    return _build("GATEWAY_BACKEND")


def reset_stores() -> None:
    get_config_store.cache_clear()
    get_reservation_gateway.cache_clear()
