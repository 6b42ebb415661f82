"""Validation of organizer-authored ticket setups.

validate() is total: any draft, however malformed, yields either a
normalized wire payload or the full list of violations. Nothing here
raises for bad input.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, tzinfo
from typing import Any
from zoneinfo import ZoneInfo

from seating.domain.errors import ErrorCode, Violation
from seating.domain.formatting import money_to_wire, to_wire_datetime
from seating.domain.models import ZoneCatalog, ZoneKey, positive_int, resolve_dimensions
from seating.domain.value_objects import Money
from seating.stores.mapping import catalog_from_wire

logger = logging.getLogger(__name__)


@dataclass
class ZoneDraft:
    """One zone as typed into the setup form; every value may be raw text."""

    name: Any = None
    price: Any = None
    seat_rows: Any = None
    seat_columns: Any = None
    id: ZoneKey | None = None
    ticket_type_id: ZoneKey | None = None


@dataclass
class TicketSetupDraft:
    """An organizer's proposed setup.

    A sales-window point is given either as one combined value
    (``sales_start``: datetime or ISO text) or as separate date and time
    parts; the combined value wins when both are present.

    The grid is taken from the first zone; ``global_rows``/``global_cols``
    only fill in a dimension the first zone leaves blank.
    """

    zones: list[ZoneDraft] = field(default_factory=list)
    global_rows: Any = None
    global_cols: Any = None
    min_per_order: Any = None
    max_per_order: Any = None
    sales_start: Any = None
    sales_end: Any = None
    sales_start_date: str | None = None
    sales_start_time: str | None = None
    sales_end_date: str | None = None
    sales_end_time: str | None = None
    active: bool = True


@dataclass(frozen=True)
class ValidationResult:
    payload: dict[str, Any] | None = None
    violations: tuple[Violation, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.violations

    @property
    def codes(self) -> list[ErrorCode]:
        return [v.code for v in self.violations]

    @property
    def first_message(self) -> str | None:
        """The message a one-alert-at-a-time UI would show."""
        return self.violations[0].message if self.violations else None

    def catalog(self) -> ZoneCatalog:
        """Buyer-side view of the normalized payload (no occupancy)."""
        if self.payload is None:
            raise ValueError("Invalid setups have no catalog")
        return catalog_from_wire(self.payload)


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class TicketSetupValidator:
    """Checks a TicketSetupDraft and normalizes it for persistence."""

    def __init__(self, tz: tzinfo | None = None) -> None:
        self._tz = tz or ZoneInfo("UTC")

    def validate(self, draft: TicketSetupDraft) -> ValidationResult:
        violations: list[Violation] = []

        global_rows, global_cols = self._check_grid(draft, violations)
        names = self._check_zone_names(draft, violations)
        prices = self._check_prices(draft, violations)
        limits = self._check_limits(draft, violations)
        window = self._check_window(draft, violations)

        if violations:
            logger.debug("ticket setup rejected: %s", [v.code.value for v in violations])
            return ValidationResult(violations=tuple(violations))

        zones = []
        for idx, zone in enumerate(draft.zones):
            rows, cols = resolve_dimensions(zone.seat_rows, zone.seat_columns, global_rows, global_cols)
            entry: dict[str, Any] = {
                "code": names[idx],
                "name": names[idx],
                "seatRows": rows,
                "seatColumns": cols,
                "sortOrder": idx,
            }
            if prices[idx] is not None:
                entry["price"] = money_to_wire(prices[idx].amount)
            if zone.id is not None:
                entry["id"] = zone.id
            if zone.ticket_type_id is not None:
                entry["ticketTypeId"] = zone.ticket_type_id
            zones.append(entry)

        start, end = window
        payload = {
            "seatRows": global_rows,
            "seatColumns": global_cols,
            "zones": zones,
            "minPerOrder": limits[0],
            "maxPerOrder": limits[1],
            "active": bool(draft.active),
            "salesStartDatetime": to_wire_datetime(start),
            "salesEndDatetime": to_wire_datetime(end),
        }
        return ValidationResult(payload=payload)

    def _check_grid(self, draft: TicketSetupDraft, violations: list[Violation]) -> tuple[int, int]:
        # The first zone's rows/cols are the global grid for the whole event.
        if not draft.zones:
            violations.append(Violation.of(ErrorCode.GRID_DIMENSION_INVALID, field="zones"))
            return 0, 0
        first = draft.zones[0]
        rows = positive_int(draft.global_rows if _blank(first.seat_rows) else first.seat_rows)
        cols = positive_int(draft.global_cols if _blank(first.seat_columns) else first.seat_columns)
        if rows is None:
            violations.append(Violation.of(ErrorCode.GRID_DIMENSION_INVALID, field="seatRows", zone_index=0))
        if cols is None:
            violations.append(Violation.of(ErrorCode.GRID_DIMENSION_INVALID, field="seatColumns", zone_index=0))
        return rows or 0, cols or 0

    def _check_zone_names(self, draft: TicketSetupDraft, violations: list[Violation]) -> list[str]:
        names = []
        for idx, zone in enumerate(draft.zones):
            name = "" if zone.name is None else str(zone.name).strip()
            if not name:
                violations.append(Violation.of(ErrorCode.ZONE_NAME_EMPTY, field="name", zone_index=idx))
            names.append(name)
        return names

    def _check_prices(self, draft: TicketSetupDraft, violations: list[Violation]) -> list[Money | None]:
        prices: list[Money | None] = []
        for idx, zone in enumerate(draft.zones):
            if _blank(zone.price):
                prices.append(None)
                continue
            try:
                prices.append(Money.parse(zone.price))
            except ValueError:
                violations.append(Violation.of(ErrorCode.ZONE_PRICE_INVALID, field="price", zone_index=idx))
                prices.append(None)
        return prices

    def _check_limits(self, draft: TicketSetupDraft, violations: list[Violation]) -> tuple[int, int]:
        min_per = positive_int(draft.min_per_order)
        max_per = positive_int(draft.max_per_order)
        if min_per is None:
            violations.append(Violation.of(ErrorCode.MIN_PER_ORDER_INVALID, field="minPerOrder"))
        if max_per is None:
            violations.append(Violation.of(ErrorCode.MAX_PER_ORDER_INVALID, field="maxPerOrder"))
        if min_per is not None and max_per is not None and min_per > max_per:
            violations.append(Violation.of(ErrorCode.MIN_EXCEEDS_MAX, field="minPerOrder"))
        return min_per or 0, max_per or 0

    def _check_window(
        self, draft: TicketSetupDraft, violations: list[Violation]
    ) -> tuple[datetime | None, datetime | None]:
        start = self._window_point(draft.sales_start, draft.sales_start_date, draft.sales_start_time)
        end = self._window_point(draft.sales_end, draft.sales_end_date, draft.sales_end_time)
        if start is None or end is None:
            violations.append(Violation.of(ErrorCode.SALES_WINDOW_INCOMPLETE, field="salesWindow"))
        elif start >= end:
            violations.append(Violation.of(ErrorCode.SALES_WINDOW_ORDER, field="salesWindow"))
        return start, end

    def _window_point(self, combined: Any, date_part: Any, time_part: Any) -> datetime | None:
        value = None
        if isinstance(combined, datetime):
            value = combined
        elif not _blank(combined):
            text = str(combined).strip()
            # fromisoformat reads a bare date as midnight; the time part is required
            if not any(sep in text for sep in ("T", "t", " ")):
                return None
            try:
                value = datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError:
                return None
        elif not _blank(date_part) and not _blank(time_part):
            try:
                value = datetime.combine(
                    date.fromisoformat(str(date_part).strip()),
                    time.fromisoformat(str(time_part).strip()),
                )
            except ValueError:
                return None
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=self._tz)
        return value
