"""Unit tests for domain primitives and the zone catalog.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from seating.domain import (
    EventId,
    GridModel,
    Money,
    OrderLimits,
    SaleStatus,
    SalesWindow,
    SeatCoordinate,
    ZoneCatalog,
    row_label,
)
from seating.domain.formatting import (
    format_datetime,
    format_price,
    format_zone_prices,
    parse_wire_datetime,
    to_wire_datetime,
)
from seating.domain.models import positive_int, resolve_dimensions

from conftest import make_catalog


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_zero(self):
        """Money can be created with zero."""
        assert Money(Decimal("0")).amount == 0

    def test_money_rejects_negative_amount(self):
        """Money raises ValueError for negative amount."""
        with pytest.raises(ValueError):
            Money(Decimal("-1"))

    def test_money_str_format(self):
        """Money string representation is formatted to 2 decimal places."""
        assert str(Money(Decimal("1500"))) == "1500.00"

    @pytest.mark.parametrize("raw", ["abc", "", "NaN", True, "-5"])
    def test_parse_rejects_non_numbers(self, raw):
        """Money.parse raises ValueError for text, NaN, bools and negatives."""
        with pytest.raises(ValueError):
            Money.parse(raw)

    def test_parse_accepts_numeric_text(self):
        """Money.parse strips and reads numeric text."""
        assert Money.parse(" 1500.50 ").amount == Decimal("1500.50")


class TestEventId:
    """Tests for EventId value object."""

    def test_from_string_valid(self):
        """EventId.from_string parses a positive integer."""
        assert EventId.from_string("42") == EventId(42)

    @pytest.mark.parametrize("raw", ["abc", "-1", "0", "1.5", ""])
    def test_from_string_invalid(self, raw):
        """EventId.from_string raises ValueError for anything else."""
        with pytest.raises(ValueError):
            EventId.from_string(raw)


class TestSeatCoordinate:
    """Tests for row labels and seat numbers."""

    @pytest.mark.parametrize(
        ("row", "label"), [(0, "A"), (1, "B"), (25, "Z"), (26, "AA"), (27, "AB"), (51, "AZ"), (52, "BA")]
    )
    def test_row_label(self, row, label):
        """Row labels run A..Z then AA, AB like spreadsheet columns."""
        assert row_label(row) == label

    def test_seat_number_is_one_based(self):
        """Column 0 is seat 1."""
        seat = SeatCoordinate(1, 0)
        assert seat.seat_number == 1
        assert seat.label == "B1"

    def test_rejects_negative(self):
        """SeatCoordinate raises ValueError for a negative row."""
        with pytest.raises(ValueError):
            SeatCoordinate(-1, 0)


class TestOrderLimitsAndWindow:
    def test_limits_reject_min_above_max(self):
        """OrderLimits raises ValueError when min exceeds max."""
        with pytest.raises(ValueError):
            OrderLimits(min_per_order=10, max_per_order=2)

    def test_limits_reject_zero(self):
        """OrderLimits raises ValueError for a zero minimum."""
        with pytest.raises(ValueError):
            OrderLimits(min_per_order=0, max_per_order=2)

    def test_window_rejects_inverted(self):
        """SalesWindow raises ValueError when start is after end."""
        with pytest.raises(ValueError):
            SalesWindow(start=datetime(2025, 12, 2, tzinfo=UTC), end=datetime(2025, 12, 1, tzinfo=UTC))

    def test_window_with_one_side_is_incomplete(self):
        """A window with only a start is not complete."""
        assert not SalesWindow(start=datetime(2025, 12, 1, tzinfo=UTC)).is_complete


class TestGridModel:
    """Tests for GridModel bounds and occupancy."""

    def test_contains(self):
        """contains is true only inside rows x cols."""
        grid = GridModel(2, 3)
        assert grid.contains(1, 2)
        assert not grid.contains(2, 0)
        assert not grid.contains(0, 3)
        assert not grid.contains(-1, 0)

    def test_is_occupied(self):
        """Given an occupied seat, is_occupied is true only for it."""
        grid = GridModel(2, 3, [SeatCoordinate(0, 1)])
        assert grid.is_occupied(0, 1)
        assert not grid.is_occupied(0, 0)

    def test_is_occupied_out_of_bounds_is_false(self):
        """Given coordinates outside the grid, returns False."""
        grid = GridModel(2, 3, [SeatCoordinate(0, 1)])
        assert grid.is_occupied(5, 5) is False
        assert grid.is_occupied(-1, 1) is False

    def test_rejects_occupied_outside_grid(self):
        """GridModel raises ValueError for occupied seats outside the grid."""
        with pytest.raises(ValueError):
            GridModel(2, 2, [SeatCoordinate(2, 0)])

    def test_replace_occupied_is_all_or_nothing(self):
        """A rejected replacement leaves the previous set in place."""
        grid = GridModel(2, 2, [SeatCoordinate(0, 0)])
        with pytest.raises(ValueError):
            grid.replace_occupied([SeatCoordinate(1, 1), SeatCoordinate(9, 9)])
        assert grid.occupied == frozenset({SeatCoordinate(0, 0)})

        grid.replace_occupied([SeatCoordinate(1, 1)])
        assert grid.occupied == frozenset({SeatCoordinate(1, 1)})

    def test_capacity(self):
        """Capacity is rows times cols."""
        assert GridModel(3, 4).capacity == 12


class TestZoneCatalog:
    """Tests for dimension resolution and lookups."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(3, 3), ("3", 3), (" 4 ", 4), (2.0, 2), (0, None), ("", None), ("x", None), (None, None), (True, None), (-2, None),
         ("²", None), ("٣", None), ("9" * 5000, None), (" 12 ", 12)],
    )
    def test_positive_int(self, value, expected):
        """Given ints, integral floats or ASCII digit text, returns the int; else None."""
        assert positive_int(value) == expected

    def test_resolve_dimensions_uses_own_when_both_positive(self):
        """Given both own dimensions, returns them."""
        assert resolve_dimensions(2, 4, 10, 12) == (2, 4)

    def test_resolve_dimensions_falls_back_when_either_missing(self):
        """Given one missing or zero dimension, returns the global pair."""
        assert resolve_dimensions(2, None, 10, 12) == (10, 12)
        assert resolve_dimensions(0, 4, 10, 12) == (10, 12)

    def test_zone_inherits_global_dimensions(self, catalog):
        """A zone without dimensions gets the global grid."""
        standard = catalog.zone_of(2)
        assert (standard.grid.rows, standard.grid.cols) == (10, 12)
        vip = catalog.zone_of(1)
        assert (vip.grid.rows, vip.grid.cols) == (2, 4)

    def test_resolved_dimensions_do_not_follow_later_global_changes(self, catalog):
        """Zone grids keep the size they were resolved with."""
        changed = ZoneCatalog(global_rows=1, global_cols=1, zones=catalog.zones)
        assert changed.zone_of(2).grid.rows == 10

    def test_zone_of_matches_across_int_and_str(self, catalog):
        """zone_of matches "1" to id 1 and returns None for unknown ids."""
        assert catalog.zone_of("1").name == "VIP"
        assert catalog.zone_of(99) is None

    def test_code_defaults_to_name(self, catalog):
        """Given no code, the zone code is its name."""
        assert catalog.zone_of(1).code == "VIP"

    def test_sale_status(self):
        """Returns upcoming before the window, on sale inside, off sale at the end."""
        catalog = make_catalog(
            salesWindow={"start": "2025-12-01T10:00:00+00:00", "end": "2025-12-31T23:00:00+00:00"}
        )
        assert catalog.sale_status(datetime(2025, 11, 1, tzinfo=UTC)) is SaleStatus.UPCOMING
        assert catalog.sale_status(datetime(2025, 12, 10, tzinfo=UTC)) is SaleStatus.ON_SALE
        assert catalog.sale_status(datetime(2025, 12, 31, 23, tzinfo=UTC)) is SaleStatus.OFF_SALE

    def test_inactive_catalog_is_off_sale(self):
        """An inactive catalog is off sale whatever the time."""
        catalog = make_catalog(active=False)
        assert catalog.sale_status(datetime(2030, 1, 1, tzinfo=UTC)) is SaleStatus.OFF_SALE

    def test_seat_stats(self):
        """Returns per-zone and total capacity, occupied and available counts."""
        catalog = make_catalog(
            zones=[
                {"id": 1, "name": "VIP", "rows": 2, "cols": 2, "occupiedSeats": [{"r": 0, "c": 0}]},
                {"id": 2, "name": "Standard", "rows": 1, "cols": 3},
            ]
        )
        per_zone, total = catalog.seat_stats()
        assert [(s.capacity, s.occupied, s.available) for s in per_zone] == [(4, 1, 3), (3, 0, 3)]
        assert (total.capacity, total.occupied, total.available) == (7, 1, 6)


class TestFormatting:
    """Display strings are compared verbatim by clients."""

    @pytest.mark.parametrize(
        ("amount", "text"),
        [(5000, "5,000"), (Decimal("1500.00"), "1,500"), (Decimal("1234.5"), "1,234.50"), (0, "0"), (1234567, "1,234,567")],
    )
    def test_format_price(self, amount, text):
        """Prices use thousands separators and drop .00."""
        assert format_price(amount) == text

    def test_zone_prices_skip_unset_price(self):
        """A zone without a price shows its name only."""
        catalog = make_catalog(
            zones=[
                {"id": 1, "name": "VIP", "price": 5000},
                {"id": 2, "name": "Standard", "price": 1500},
                {"id": 3, "name": "Balcony"},
                {"id": 4, "name": "Free", "price": 0},
            ]
        )
        assert format_zone_prices(catalog.zones) == "VIP ฿5,000 / Standard ฿1,500 / Balcony / Free ฿0"

    def test_format_datetime_is_24h_day_month_year(self):
        """Datetimes display as day month year with a 24h clock."""
        assert format_datetime(datetime(2025, 3, 22, 19, 5)) == "22 Mar 2025, 19:05"

    def test_wire_datetime_round_trip(self):
        """An offset timestamp is written back unchanged."""
        text = "2025-12-01T10:00:00+07:00"
        assert to_wire_datetime(parse_wire_datetime(text)) == text

    def test_parse_accepts_zulu(self):
        """A trailing Z parses as UTC."""
        assert parse_wire_datetime("2025-12-01T10:00:00Z").utcoffset().total_seconds() == 0

    def test_naive_wire_datetime_rejected(self):
        """to_wire_datetime raises ValueError for a naive datetime."""
        with pytest.raises(ValueError):
            to_wire_datetime(datetime(2025, 1, 1))
