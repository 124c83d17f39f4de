# src/dropfour/core/board.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List

from dropfour.config import ROWS, COLS
from dropfour.errors import GeometryError, GravityInvariantError, IllegalMoveError, PolicyError
from dropfour.types import Slot, Player, Move


@dataclass(slots=True)
class Board:
    """
    Flat row-major grid. Row 0 is the top, row ``rows - 1`` the bottom,
    so slot ``index`` sits at ``(index // cols, index % cols)``.

    Only ``drop`` mutates a game board. Search works on ``snapshot()``
    copies, which are the only boards that accept ``forced_drop``.
    """
    rows: int = ROWS
    cols: int = COLS
    slots: List[Slot] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.slots:
            self.slots = [None] * (self.rows * self.cols)
        elif len(self.slots) != self.rows * self.cols:
            raise ValueError(
                f"Expected {self.rows * self.cols} slots for a {self.rows}x{self.cols} board, "
                f"got {len(self.slots)}."
            )

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Board":
        """
        Build a board from top-to-bottom row strings such as ``"..XO..."``.
        Any character other than X/O is an empty slot. Gravity is not checked.
        """
        lines = [r.strip() for r in rows if r.strip()]
        if not lines:
            raise ValueError("No rows given.")
        cols = len(lines[0])
        slots: List[Slot] = []
        for line in lines:
            if len(line) != cols:
                raise ValueError("All rows must have the same width.")
            slots.extend(ch if ch in ("X", "O") else None for ch in line)
        return cls(len(lines), cols, slots)

    # ---- geometry -------------------------------------------------------

    def is_valid_column(self, col: int) -> bool:
        return 0 <= col < self.cols

    def row_of(self, index: int) -> int:
        return index // self.cols

    def column_of(self, index: int) -> int:
        return index % self.cols

    def index_of(self, row: int, col: int) -> int:
        if row < 0 or col < 0 or row >= self.rows or col >= self.cols:
            raise GeometryError(f"Row {row} and column {col} is not a valid combination.")
        return row * self.cols + col

    def diagonal_up_right(self, index: int) -> int:
        row, col = self.row_of(index), self.column_of(index)
        if row == 0 or col == self.cols - 1:
            raise GeometryError(
                f"Cell at index {index} is on row {row} and column {col}. "
                "Cannot get a diagonal cell going right and up."
            )
        return self.index_of(row - 1, col + 1)

    def diagonal_down_right(self, index: int) -> int:
        row, col = self.row_of(index), self.column_of(index)
        if row == self.rows - 1 or col == self.cols - 1:
            raise GeometryError(
                f"Cell at index {index} is on row {row} and column {col}. "
                "Cannot get a diagonal cell going right and down."
            )
        return self.index_of(row + 1, col + 1)

    # ---- occupancy ------------------------------------------------------

    def slot_at(self, index: int) -> Slot:
        if index < 0 or index >= len(self.slots):
            raise IndexError(f"Slot index {index} out of range for {len(self.slots)} slots.")
        return self.slots[index]

    def cell(self, row: int, col: int) -> Slot:
        return self.slots[self.index_of(row, col)]

    def grid(self) -> List[List[Slot]]:
        return [self.slots[r * self.cols:(r + 1) * self.cols] for r in range(self.rows)]

    def is_empty_at_top(self, col: int) -> bool:
        return self.slots[self.index_of(0, col)] is None

    def valid_moves(self) -> List[Move]:
        return [Move(c) for c in range(self.cols) if self.slots[c] is None]

    def is_full(self) -> bool:
        return all(self.slots[c] is not None for c in range(self.cols))

    def landing_index(self, col: int) -> int:
        """Index of the lowest empty slot in ``col`` (scanning bottom to top)."""
        for index in range(self.index_of(self.rows - 1, col), -1, -self.cols):
            if self.slots[index] is None:
                return index
        raise GravityInvariantError(f"Column {col} has no empty slot.")

    # ---- mutation -------------------------------------------------------

    def drop(self, col: Move, player: Player) -> int:
        c = int(col)
        if not self.is_valid_column(c):
            raise IllegalMoveError(f"Column {c + 1} is out of range.")
        if not self.is_empty_at_top(c):
            raise IllegalMoveError(f"Column {c + 1} is full.")
        return self._place(c, player)

    def forced_drop(self, col: Move, player: Player) -> int:
        raise PolicyError("Force drop is not allowed for this game board.")

    def _place(self, col: int, player: Player) -> int:
        index = self.landing_index(col)
        self.slots[index] = player
        return self.row_of(index)

    def snapshot(self) -> "SimulationBoard":
        return SimulationBoard(self.rows, self.cols, list(self.slots))


class SimulationBoard(Board):
    """
    Private what-if copy used by the search. Accepts forced drops, which
    skip the full/valid-column gate because the caller already knows the
    column is playable.
    """
    __slots__ = ()

    def forced_drop(self, col: Move, player: Player) -> int:
        return self._place(int(col), player)
