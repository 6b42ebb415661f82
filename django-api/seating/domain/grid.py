"""Rectangular seat grid for one zone."""

from collections.abc import Iterable

from seating.domain.value_objects import SeatCoordinate


class GridModel:
    """rows x cols seat grid with the set of seats that cannot be selected.

    Dimensions are fixed at construction. The occupied set is only ever
    replaced as a whole (on reload), never edited by selection.
    """

    __slots__ = ("_rows", "_cols", "_occupied")

    def __init__(self, rows: int, cols: int, occupied: Iterable[SeatCoordinate] = ()) -> None:
        if rows < 0 or cols < 0:
            raise ValueError("Grid dimensions cannot be negative")
        self._rows = rows
        self._cols = cols
        self._occupied: frozenset[SeatCoordinate] = frozenset()
        self.replace_occupied(occupied)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def occupied(self) -> frozenset[SeatCoordinate]:
        return self._occupied

    @property
    def capacity(self) -> int:
        return self._rows * self._cols

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self._rows and 0 <= col < self._cols

    def is_occupied(self, row: int, col: int) -> bool:
        """Membership test; out-of-bounds input is simply not occupied."""
        if not self.contains(row, col):
            return False
        return SeatCoordinate(row, col) in self._occupied

    def replace_occupied(self, occupied: Iterable[SeatCoordinate]) -> None:
        """Swap in a new occupied set.

        Raises:
            ValueError: If any coordinate lies outside the grid. The current
                set is left untouched in that case.
        """
        seats = frozenset(occupied)
        outside = [s for s in seats if not self.contains(s.row, s.col)]
        if outside:
            raise ValueError(f"Occupied seats outside {self._rows}x{self._cols} grid: {sorted(outside)}")
        self._occupied = seats

    def __repr__(self) -> str:
        return f"GridModel(rows={self._rows}, cols={self._cols}, occupied={len(self._occupied)})"
