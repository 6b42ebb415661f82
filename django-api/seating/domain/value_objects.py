"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Self

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def row_label(row: int) -> str:
    """Map a 0-based row index to its letter label (0 -> A, 25 -> Z, 26 -> AA)."""
    if row < 0:
        raise ValueError("Row index cannot be negative")
    label = ""
    n = row + 1
    while n:
        n, rem = divmod(n - 1, 26)
        label = ALPHABET[rem] + label
    return label


@dataclass(frozen=True)
class EventId:
    """Identifier of the event a seating configuration belongs to."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or self.value <= 0:
            raise ValueError("Event id must be a positive integer")

    @classmethod
    def from_string(cls, value: str) -> Self:
        if not value.isdigit():
            raise ValueError(f"Invalid event id: {value!r}")
        return cls(value=int(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def parse(cls, value: object) -> Self:
        """Build from an int, Decimal or numeric string.

        Raises ValueError for anything that is not a finite, non-negative number.
        """
        if isinstance(value, bool):
            raise ValueError(f"Invalid amount: {value!r}")
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Invalid amount: {value!r}") from exc
        if not amount.is_finite():
            raise ValueError(f"Invalid amount: {value!r}")
        return cls(amount=amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True, order=True)
class SeatCoordinate:
    """0-based (row, col) position inside a zone grid."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if self.row < 0 or self.col < 0:
            raise ValueError("Seat coordinates cannot be negative")

    @property
    def row_label(self) -> str:
        return row_label(self.row)

    @property
    def seat_number(self) -> int:
        """1-based seat number within the row."""
        return self.col + 1

    @property
    def label(self) -> str:
        return f"{self.row_label}{self.seat_number}"


@dataclass(frozen=True)
class OrderLimits:
    """Minimum and maximum ticket count for a single reservation."""

    min_per_order: int = 1
    max_per_order: int = 10

    def __post_init__(self) -> None:
        if self.min_per_order < 1 or self.max_per_order < 1:
            raise ValueError("Per-order limits must be at least 1")
        if self.min_per_order > self.max_per_order:
            raise ValueError("minPerOrder cannot exceed maxPerOrder")


@dataclass(frozen=True)
class SalesWindow:
    """Period during which a ticket configuration is purchasable."""

    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None and self.start >= self.end:
            raise ValueError("Sales window start must be before its end")

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None
