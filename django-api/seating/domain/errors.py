"""Domain error codes for the seating module.

Expected user-input outcomes (setup violations, rejected toggles, submit
preconditions) are carried as values using these codes. Only boundary
failures are raised, as DomainError subclasses.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    # ticket setup violations
    GRID_DIMENSION_INVALID = "GRID_DIMENSION_INVALID"
    ZONE_NAME_EMPTY = "ZONE_NAME_EMPTY"
    ZONE_PRICE_INVALID = "ZONE_PRICE_INVALID"
    MIN_PER_ORDER_INVALID = "MIN_PER_ORDER_INVALID"
    MAX_PER_ORDER_INVALID = "MAX_PER_ORDER_INVALID"
    MIN_EXCEEDS_MAX = "MIN_EXCEEDS_MAX"
    SALES_WINDOW_INCOMPLETE = "SALES_WINDOW_INCOMPLETE"
    SALES_WINDOW_ORDER = "SALES_WINDOW_ORDER"

    # selection / submit preconditions
    CROSS_TICKET_TYPE = "CROSS_TICKET_TYPE"
    SEAT_OCCUPIED = "SEAT_OCCUPIED"
    SEAT_OUT_OF_BOUNDS = "SEAT_OUT_OF_BOUNDS"
    MAX_PER_ORDER_REACHED = "MAX_PER_ORDER_REACHED"
    EMPTY_SELECTION = "EMPTY_SELECTION"
    MISSING_TICKET_TYPE = "MISSING_TICKET_TYPE"
    BELOW_MIN_PER_ORDER = "BELOW_MIN_PER_ORDER"
    SALES_CLOSED = "SALES_CLOSED"

    # boundary
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    CONFIGURATION_NOT_FOUND = "CONFIGURATION_NOT_FOUND"
    MALFORMED_CONFIGURATION = "MALFORMED_CONFIGURATION"


MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.GRID_DIMENSION_INVALID: "Seat rows and seat columns must be positive whole numbers",
    ErrorCode.ZONE_NAME_EMPTY: "Every zone needs a name",
    ErrorCode.ZONE_PRICE_INVALID: "Zone price must be a non-negative number",
    ErrorCode.MIN_PER_ORDER_INVALID: "Minimum tickets per order must be at least 1",
    ErrorCode.MAX_PER_ORDER_INVALID: "Maximum tickets per order must be at least 1",
    ErrorCode.MIN_EXCEEDS_MAX: "Minimum tickets per order cannot exceed the maximum",
    ErrorCode.SALES_WINDOW_INCOMPLETE: "Sales start and end date and time are all required",
    ErrorCode.SALES_WINDOW_ORDER: "Sales start must be before sales end",
    ErrorCode.CROSS_TICKET_TYPE: "Seats in one order must all be the same ticket type",
    ErrorCode.SEAT_OCCUPIED: "This seat is already taken",
    ErrorCode.SEAT_OUT_OF_BOUNDS: "This seat does not exist in the zone",
    ErrorCode.MAX_PER_ORDER_REACHED: "Maximum tickets per order reached",
    ErrorCode.EMPTY_SELECTION: "Select at least one seat",
    ErrorCode.MISSING_TICKET_TYPE: "The selected zone has no ticket type configured",
    ErrorCode.BELOW_MIN_PER_ORDER: "Not enough seats selected for the minimum per order",
    ErrorCode.SALES_CLOSED: "Tickets are not on sale",
}


@dataclass(frozen=True)
class Violation:
    """One problem found in an organizer's ticket setup."""

    code: ErrorCode
    message: str
    field: str | None = None
    zone_index: int | None = None

    @classmethod
    def of(cls, code: ErrorCode, field: str | None = None, zone_index: int | None = None) -> "Violation":
        return cls(code=code, message=MESSAGES[code], field=field, zone_index=zone_index)


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class ConfigurationNotFoundError(DomainError):
    """Raised when an event has no seating configuration yet."""

    def __init__(self, event_id: object) -> None:
        super().__init__(
            code=ErrorCode.CONFIGURATION_NOT_FOUND,
            message="Seating is not configured for this event",
        )
        self.event_id = event_id


class MalformedConfigurationError(DomainError):
    """Raised when stored configuration data breaks catalog invariants."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.MALFORMED_CONFIGURATION,
            message=f"Stored seating configuration is invalid: {detail}",
        )


class GatewayError(DomainError):
    """Raised when the persistence service fails; message is forwarded verbatim."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(code=ErrorCode.TRANSPORT_FAILURE, message=message)
        self.status = status
