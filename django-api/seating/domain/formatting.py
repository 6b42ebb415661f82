"""Display formats that clients compare against verbatim."""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from seating.domain.models import Zone

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_price(amount: Decimal | int) -> str:
    """5000 -> '5,000'; 1234.5 -> '1,234.50'."""
    value = Decimal(amount)
    if value == value.to_integral_value():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def money_to_wire(amount: Decimal) -> int | float:
    """JSON number for an amount: integral values stay ints."""
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def format_zone_prices(zones: Iterable[Zone], symbol: str = "฿") -> str:
    """Join each zone's name and price; a zone without a price shows its name only."""
    parts = []
    for zone in zones:
        if zone.price is None:
            parts.append(zone.name)
        else:
            parts.append(f"{zone.name} {symbol}{format_price(zone.price.amount)}")
    return " / ".join(parts)


def format_datetime(value: datetime) -> str:
    """24-hour day-month-year, e.g. '22 Mar 2025, 19:00'."""
    return f"{value.day:02d} {MONTHS[value.month - 1]} {value.year}, {value.hour:02d}:{value.minute:02d}"


def to_wire_datetime(value: datetime) -> str:
    """ISO-8601 with offset; naive values are rejected."""
    if value.tzinfo is None:
        raise ValueError("Wire datetimes must carry an offset")
    return value.isoformat()


def parse_wire_datetime(value: str) -> datetime:
    """Parse ISO-8601 as sent by the backend, including a trailing 'Z'."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)
