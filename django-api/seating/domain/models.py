"""Domain models for zone catalogs.

These are pure domain objects with no wire-format or API input rules.
Normalizing backend payloads into these types happens in stores/mapping.py.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from seating.domain.grid import GridModel
from seating.domain.value_objects import Money, OrderLimits, SalesWindow

ZoneKey = int | str


def same_id(a: object, b: object) -> bool:
    """Identifiers arrive as ints or strings depending on the source."""
    return a is not None and b is not None and str(a) == str(b)


def positive_int(value: object) -> int | None:
    """Return value as an int if it is a positive whole number, else None.

    Accepts ints, integral floats and digit strings; never raises.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        n = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        n = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not (text.isascii() and text.isdigit()):
            return None
        try:
            n = int(text)
        except ValueError:
            # longer than the interpreter's int conversion limit
            return None
    else:
        return None
    return n if n > 0 else None


def resolve_dimensions(rows: object, cols: object, global_rows: int, global_cols: int) -> tuple[int, int]:
    """Own dimensions when both are positive integers, otherwise the global default."""
    own_rows, own_cols = positive_int(rows), positive_int(cols)
    if own_rows is not None and own_cols is not None:
        return own_rows, own_cols
    return global_rows, global_cols


class SaleStatus(Enum):
    ON_SALE = "ONSALE"
    UPCOMING = "UPCOMING"
    OFF_SALE = "OFFSALE"


@dataclass(frozen=True)
class Zone:
    """A named pricing/seating section mapped to one sellable ticket type."""

    id: ZoneKey
    name: str
    grid: GridModel
    price: Money | None = None
    ticket_type_id: ZoneKey | None = None
    code: str = ""

    def __post_init__(self) -> None:
        if not self.code:
            object.__setattr__(self, "code", self.name)

    @property
    def unit_price(self) -> Decimal:
        """Price used for totals; an unset price contributes nothing."""
        return self.price.amount if self.price is not None else Decimal("0")


@dataclass(frozen=True)
class ZoneStats:
    zone_id: ZoneKey
    name: str
    capacity: int
    occupied: int

    @property
    def available(self) -> int:
        return self.capacity - self.occupied


@dataclass(frozen=True)
class ZoneCatalog:
    """Ordered collection of zones plus the sale rules that apply to all of them."""

    global_rows: int
    global_cols: int
    zones: tuple[Zone, ...] = ()
    limits: OrderLimits = field(default_factory=OrderLimits)
    sales_window: SalesWindow = field(default_factory=SalesWindow)
    active: bool = True

    @property
    def min_per_order(self) -> int:
        return self.limits.min_per_order

    @property
    def max_per_order(self) -> int:
        return self.limits.max_per_order

    def resolve_dimensions(self, rows: object, cols: object) -> tuple[int, int]:
        return resolve_dimensions(rows, cols, self.global_rows, self.global_cols)

    def zone_of(self, zone_id: object) -> Zone | None:
        for zone in self.zones:
            if same_id(zone.id, zone_id):
                return zone
        return None

    def sale_status(self, now: datetime) -> SaleStatus:
        if not self.active:
            return SaleStatus.OFF_SALE
        window = self.sales_window
        if window.start is not None and now < window.start:
            return SaleStatus.UPCOMING
        if window.end is not None and now >= window.end:
            return SaleStatus.OFF_SALE
        return SaleStatus.ON_SALE

    def seat_stats(self) -> tuple[list[ZoneStats], ZoneStats]:
        """Per-zone capacity/occupancy and the catalog-wide total."""
        per_zone = [
            ZoneStats(zone_id=z.id, name=z.name, capacity=z.grid.capacity, occupied=len(z.grid.occupied))
            for z in self.zones
        ]
        total = ZoneStats(
            zone_id="*",
            name="Total",
            capacity=sum(s.capacity for s in per_zone),
            occupied=sum(s.occupied for s in per_zone),
        )
        return per_zone, total
