from seating.domain.errors import DomainError, ErrorCode, Violation
from seating.domain.grid import GridModel
from seating.domain.models import SaleStatus, Zone, ZoneCatalog, ZoneStats
from seating.domain.value_objects import (
    EventId,
    Money,
    OrderLimits,
    SalesWindow,
    SeatCoordinate,
    row_label,
)

__all__ = [
    "DomainError",
    "ErrorCode",
    "Violation",
    "GridModel",
    "SaleStatus",
    "Zone",
    "ZoneCatalog",
    "ZoneStats",
    "EventId",
    "Money",
    "OrderLimits",
    "SalesWindow",
    "SeatCoordinate",
    "row_label",
]
