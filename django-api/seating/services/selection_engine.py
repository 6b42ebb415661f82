"""Interactive seat-picking state machine for one buyer session.

States:
- empty: no picks, no ticket-type lock
- locked: at least one pick; every further pick must share its ticket type

Removing the last pick releases the lock. Rejections are returned as
ToggleResult values and leave the picks untouched.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from seating.domain.errors import MESSAGES, ErrorCode
from seating.domain.models import Zone, ZoneCatalog, ZoneKey, same_id
from seating.domain.value_objects import SeatCoordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pick:
    """One buyer-selected seat."""

    zone_id: ZoneKey
    row: int
    col: int

    @property
    def coordinate(self) -> SeatCoordinate:
        return SeatCoordinate(self.row, self.col)


class ToggleOutcome(Enum):
    SELECTED = "SELECTED"
    DESELECTED = "DESELECTED"
    REJECTED = "REJECTED"
    IGNORED = "IGNORED"


@dataclass(frozen=True)
class ToggleResult:
    outcome: ToggleOutcome
    error: ErrorCode | None = None

    @property
    def accepted(self) -> bool:
        return self.outcome in (ToggleOutcome.SELECTED, ToggleOutcome.DESELECTED)

    @property
    def message(self) -> str | None:
        return MESSAGES[self.error] if self.error else None

    @classmethod
    def rejected(cls, error: ErrorCode) -> "ToggleResult":
        return cls(outcome=ToggleOutcome.REJECTED, error=error)


@dataclass(frozen=True)
class SelectionLine:
    """A pick rendered for the order summary."""

    zone_id: ZoneKey
    zone_name: str
    row: int
    col: int
    row_label: str
    seat_number: int
    price: Decimal


class SelectionEngine:
    """Tracks picked seats over a ZoneCatalog."""

    def __init__(self, catalog: ZoneCatalog) -> None:
        self._catalog = catalog
        self._picks: list[Pick] = []
        self._ticket_type_id: ZoneKey | None = None

    @property
    def catalog(self) -> ZoneCatalog:
        return self._catalog

    @property
    def picks(self) -> tuple[Pick, ...]:
        return tuple(self._picks)

    @property
    def is_locked(self) -> bool:
        return bool(self._picks)

    @property
    def ticket_type_id(self) -> ZoneKey | None:
        """Ticket type shared by every pick; None when empty or when the zone has none."""
        return self._ticket_type_id if self._picks else None

    def toggle(self, zone_id: object, row: int, col: int) -> ToggleResult:
        zone = self._catalog.zone_of(zone_id)
        if zone is None:
            logger.debug("toggle ignored, unknown zone %r", zone_id)
            return ToggleResult(outcome=ToggleOutcome.IGNORED)

        if not zone.grid.contains(row, col):
            return ToggleResult.rejected(ErrorCode.SEAT_OUT_OF_BOUNDS)

        if zone.grid.is_occupied(row, col):
            logger.debug("toggle rejected, seat %s/%d/%d is occupied", zone.id, row, col)
            return ToggleResult.rejected(ErrorCode.SEAT_OCCUPIED)

        pick = Pick(zone_id=zone.id, row=row, col=col)
        if pick in self._picks:
            self._picks.remove(pick)
            if not self._picks:
                self._ticket_type_id = None
            return ToggleResult(outcome=ToggleOutcome.DESELECTED)

        candidate = zone.ticket_type_id
        if self._picks and not self._same_ticket_type(candidate):
            logger.debug(
                "toggle rejected, ticket type %r does not match locked %r", candidate, self._ticket_type_id
            )
            return ToggleResult.rejected(ErrorCode.CROSS_TICKET_TYPE)

        if len(self._picks) >= self._catalog.max_per_order:
            return ToggleResult.rejected(ErrorCode.MAX_PER_ORDER_REACHED)

        if not self._picks:
            self._ticket_type_id = candidate
        self._picks.append(pick)
        return ToggleResult(outcome=ToggleOutcome.SELECTED)

    def is_selected(self, zone_id: object, row: int, col: int) -> bool:
        return any(
            same_id(p.zone_id, zone_id) and p.row == row and p.col == col for p in self._picks
        )

    def count(self) -> int:
        return len(self._picks)

    def total_price(self) -> Decimal:
        return sum((self._zone(p).unit_price for p in self._picks), Decimal("0"))

    def summary(self) -> list[SelectionLine]:
        lines = []
        for pick in self._picks:
            zone = self._zone(pick)
            coordinate = pick.coordinate
            lines.append(
                SelectionLine(
                    zone_id=zone.id,
                    zone_name=zone.name,
                    row=pick.row,
                    col=pick.col,
                    row_label=coordinate.row_label,
                    seat_number=coordinate.seat_number,
                    price=zone.unit_price,
                )
            )
        return lines

    def reset(self) -> None:
        self._picks.clear()
        self._ticket_type_id = None

    def restore(self, picks: Iterable[Pick]) -> list[Pick]:
        """Replay stored picks in order; return the ones that no longer apply."""
        self.reset()
        dropped = []
        for pick in picks:
            if self.is_selected(pick.zone_id, pick.row, pick.col):
                continue
            result = self.toggle(pick.zone_id, pick.row, pick.col)
            if result.outcome is not ToggleOutcome.SELECTED:
                dropped.append(pick)
        if dropped:
            logger.info("dropped %d stale picks on restore", len(dropped))
        return dropped

    def _zone(self, pick: Pick) -> Zone:
        zone = self._catalog.zone_of(pick.zone_id)
        if zone is None:
            raise LookupError(f"Pick references unknown zone {pick.zone_id!r}")
        return zone

    def _same_ticket_type(self, candidate: ZoneKey | None) -> bool:
        if candidate is None or self._ticket_type_id is None:
            return candidate is None and self._ticket_type_id is None
        return same_id(candidate, self._ticket_type_id)
