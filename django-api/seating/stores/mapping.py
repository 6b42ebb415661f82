"""Wire adapter for the load boundary.

The persistence service has shipped several payload shapes over time
(``seatRows`` vs ``rows`` vs ``seatRow``, ``id`` vs ``zoneId``, a flat
``occupiedSeatMap`` next to per-zone ``occupiedSeats`` ...). Everything
is normalized here so the engines only ever see ZoneCatalog.
"""

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from seating.domain.errors import MalformedConfigurationError
from seating.domain.formatting import parse_wire_datetime
from seating.domain.grid import GridModel
from seating.domain.models import Zone, ZoneCatalog, positive_int, resolve_dimensions, same_id
from seating.domain.value_objects import Money, OrderLimits, SalesWindow, SeatCoordinate

logger = logging.getLogger(__name__)

GLOBAL_ROW_KEYS = ("globalRows", "seatRows", "seatRow", "rows")
GLOBAL_COL_KEYS = ("globalCols", "seatColumns", "seatColumn", "cols", "columns")
ZONE_ROW_KEYS = ("rows", "seatRows", "seatRow")
ZONE_COL_KEYS = ("cols", "seatColumns", "seatColumn", "columns")
SALES_START_KEYS = ("salesStartDatetime", "salesStartDateTime")
SALES_END_KEYS = ("salesEndDatetime", "salesEndDateTime")

DEFAULT_MIN_PER_ORDER = 1
DEFAULT_MAX_PER_ORDER = 10


def _first(data: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def catalog_from_wire(data: Mapping[str, Any]) -> ZoneCatalog:
    """Build a ZoneCatalog from any accepted load payload.

    Raises:
        MalformedConfigurationError: If the payload breaks catalog invariants.
    """
    global_rows = positive_int(_first(data, GLOBAL_ROW_KEYS)) or 0
    global_cols = positive_int(_first(data, GLOBAL_COL_KEYS)) or 0
    flat_occupied = data.get("occupiedSeatMap") or []

    raw_zones = data.get("zones") or []
    if not isinstance(raw_zones, list | tuple):
        raise MalformedConfigurationError(f"zones must be a list, got {type(raw_zones).__name__}")
    zones = tuple(
        _zone_from_wire(raw, idx, global_rows, global_cols, flat_occupied)
        for idx, raw in enumerate(raw_zones)
    )

    try:
        limits = OrderLimits(
            min_per_order=_limit(data.get("minPerOrder"), DEFAULT_MIN_PER_ORDER),
            max_per_order=_limit(data.get("maxPerOrder"), DEFAULT_MAX_PER_ORDER),
        )
        sales_window = _sales_window(data)
    except ValueError as exc:
        raise MalformedConfigurationError(str(exc)) from exc

    active = data.get("active")
    return ZoneCatalog(
        global_rows=global_rows,
        global_cols=global_cols,
        zones=zones,
        limits=limits,
        sales_window=sales_window,
        active=True if active is None else bool(active),
    )


def refresh_occupancy(catalog: ZoneCatalog, data: Mapping[str, Any]) -> None:
    """Reload occupied seats from a fresh payload, keeping resolved dimensions.

    For callers that keep a catalog across polls of the persistence
    service; the request handlers rebuild theirs with catalog_from_wire
    on every request instead. All new sets are computed before any grid
    is touched. Zones missing from the payload, or entries that are not
    objects, leave the current occupancy alone.
    """
    flat_occupied = data.get("occupiedSeatMap") or []
    raw_zones = data.get("zones") or []
    if not isinstance(raw_zones, list | tuple):
        raw_zones = []
    updates: list[tuple[GridModel, frozenset[SeatCoordinate]]] = []
    for zone in catalog.zones:
        raw = next(
            (
                z
                for idx, z in enumerate(raw_zones)
                if isinstance(z, Mapping) and same_id(_zone_id(z, idx), zone.id)
            ),
            None,
        )
        if raw is None:
            continue
        seats = _occupied(raw, zone.id, zone.grid.rows, zone.grid.cols, flat_occupied)
        updates.append((zone.grid, seats))
    for grid, seats in updates:
        grid.replace_occupied(seats)


def _zone_id(raw: Mapping[str, Any], idx: int) -> Any:
    zone_id = _first(raw, ("id", "zoneId"))
    return zone_id if zone_id is not None else f"zone-{idx + 1}"


def _zone_from_wire(
    raw: Mapping[str, Any], idx: int, global_rows: int, global_cols: int, flat_occupied: list
) -> Zone:
    if not isinstance(raw, Mapping):
        raise MalformedConfigurationError(f"zone {idx + 1} is not an object: {raw!r}")
    zone_id = _zone_id(raw, idx)
    name = _text(raw.get("name")) or _text(raw.get("code")) or _text(raw.get("zone")) or f"ZONE-{idx + 1}"
    rows, cols = resolve_dimensions(_first(raw, ZONE_ROW_KEYS), _first(raw, ZONE_COL_KEYS), global_rows, global_cols)

    price = None
    if raw.get("price") is not None and _text(raw.get("price")):
        try:
            price = Money.parse(raw["price"])
        except ValueError as exc:
            raise MalformedConfigurationError(f"zone {name!r}: {exc}") from exc

    return Zone(
        id=zone_id,
        name=name,
        code=_text(raw.get("code")) or name,
        grid=GridModel(rows, cols, _occupied(raw, zone_id, rows, cols, flat_occupied)),
        price=price,
        ticket_type_id=raw.get("ticketTypeId"),
    )


def _occupied(
    raw: Mapping[str, Any], zone_id: Any, rows: int, cols: int, flat_occupied: list
) -> frozenset[SeatCoordinate]:
    # occupiedSeats is 0-based; occupiedSeatMap is 1-based.
    candidates = [(o.get("r"), o.get("c"), 0) for o in _entries(raw.get("occupiedSeats"), zone_id)]
    candidates += [
        (o.get("r"), o.get("c"), 1)
        for o in _entries(flat_occupied, zone_id)
        if same_id(o.get("zoneId"), zone_id)
    ]

    seats = set()
    for r, c, shift in candidates:
        if not isinstance(r, int) or not isinstance(c, int) or isinstance(r, bool) or isinstance(c, bool):
            logger.warning("skipping malformed occupied entry r=%r c=%r in zone %s", r, c, zone_id)
            continue
        row, col = r - shift, c - shift
        if not (0 <= row < rows and 0 <= col < cols):
            logger.warning("dropping occupied seat (%d, %d) outside %dx%d zone %s", row, col, rows, cols, zone_id)
            continue
        seats.add(SeatCoordinate(row, col))
    return frozenset(seats)


def _entries(value: Any, zone_id: Any) -> list[Mapping[str, Any]]:
    if not value:
        return []
    if not isinstance(value, list | tuple):
        logger.warning("skipping occupied list %r in zone %s, not a list", value, zone_id)
        return []
    entries = []
    for entry in value:
        if isinstance(entry, Mapping):
            entries.append(entry)
        else:
            logger.warning("skipping malformed occupied entry %r in zone %s", entry, zone_id)
    return entries


def _limit(value: Any, default: int) -> int:
    if value is None:
        return default
    n = positive_int(value)
    if n is None:
        raise ValueError(f"per-order limit must be a positive integer, got {value!r}")
    return n


def _sales_window(data: Mapping[str, Any]) -> SalesWindow:
    window = data.get("salesWindow") or {}
    if not isinstance(window, Mapping):
        raise ValueError(f"salesWindow must be an object, got {window!r}")
    start = window.get("start") if window else _first(data, SALES_START_KEYS)
    end = window.get("end") if window else _first(data, SALES_END_KEYS)
    return SalesWindow(start=_timestamp(start), end=_timestamp(end))


def _timestamp(value: Any) -> datetime | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    parsed = value if isinstance(value, datetime) else parse_wire_datetime(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
