from __future__ import annotations
from dataclasses import dataclass
from functools import total_ordering
from enum import IntEnum
from typing import Callable, Dict, List, Sequence, Tuple

from dropfour.config import CONNECT_N
from dropfour.core.board import Board
from dropfour.types import Player, Slot, other

def run_scores(n: int) -> Tuple[int, ...]:
    """Score for a clean window holding 0..n-1 of the player's coins; n is a win."""
    return (0,) + tuple(3 ** k for k in range(n - 1))


RUN_SCORES = run_scores(CONNECT_N)  # (0, 1, 3, 9) for four in a row


class ScoreKind(IntEnum):
    LOSS = 0
    FINITE = 1
    WIN = 2


@total_ordering
@dataclass(frozen=True)
class Score:
    """
    Heuristic value with explicit win/loss markers instead of a magic
    maximal number.

    ``plies`` is how far down the line the win or loss happens (0 means
    this very drop completes four). Ordering: any LOSS < any FINITE < any
    WIN; a sooner win beats a later one and a later loss beats a sooner one.
    """
    kind: ScoreKind = ScoreKind.FINITE
    value: int = 0
    plies: int = 0

    @classmethod
    def finite(cls, value: int) -> "Score":
        return cls(ScoreKind.FINITE, value)

    @classmethod
    def win(cls, plies: int = 0) -> "Score":
        return cls(ScoreKind.WIN, plies=plies)

    @classmethod
    def loss(cls, plies: int = 0) -> "Score":
        return cls(ScoreKind.LOSS, plies=plies)

    @property
    def is_win(self) -> bool:
        return self.kind is ScoreKind.WIN

    @property
    def is_loss(self) -> bool:
        return self.kind is ScoreKind.LOSS

    def _key(self) -> Tuple[int, int, int]:
        if self.kind is ScoreKind.WIN:
            return (2, -self.plies, 0)
        if self.kind is ScoreKind.LOSS:
            return (0, self.plies, 0)
        return (1, 0, self.value)

    def __lt__(self, rhs: "Score") -> bool:
        if not isinstance(rhs, Score):
            return NotImplemented
        return self._key() < rhs._key()

    def __add__(self, rhs: "Score") -> "Score":
        if self.kind is ScoreKind.FINITE and rhs.kind is ScoreKind.FINITE:
            return Score.finite(self.value + rhs.value)
        return max(self, rhs) if ScoreKind.WIN in (self.kind, rhs.kind) else min(self, rhs)

    def __sub__(self, rhs: "Score") -> "Score":
        # My gain minus the opponent's best counter-gain, one ply further out.
        if self.kind is not ScoreKind.FINITE:
            return self
        if rhs.kind is ScoreKind.WIN:
            return Score.loss(rhs.plies + 1)
        if rhs.kind is ScoreKind.LOSS:
            return Score.win(rhs.plies + 1)
        return Score.finite(self.value - rhs.value)

    def __str__(self) -> str:
        if self.kind is ScoreKind.FINITE:
            return str(self.value)
        return f"{self.kind.name}@{self.plies}" if self.plies else self.kind.name


ZERO = Score.finite(0)


def _step(board: Board, index: int, d_row: int, d_col: int) -> int:
    return board.index_of(board.row_of(index) + d_row, board.column_of(index) + d_col)


@dataclass(frozen=True)
class Direction:
    name: str
    d_row: int
    d_col: int
    advance: Callable[[Board, int], int]

    def steps_to_edge(self, board: Board, row: int, col: int, sign: int = 1) -> int:
        """How many cells can be walked from (row, col) along sign * direction."""
        d_row, d_col = sign * self.d_row, sign * self.d_col
        limits = []
        if d_row > 0:
            limits.append(board.rows - 1 - row)
        elif d_row < 0:
            limits.append(row)
        if d_col > 0:
            limits.append(board.cols - 1 - col)
        elif d_col < 0:
            limits.append(col)
        return min(limits)


HORIZONTAL = Direction("horizontal", 0, 1, lambda b, i: _step(b, i, 0, 1))
VERTICAL = Direction("vertical", 1, 0, lambda b, i: _step(b, i, 1, 0))
DIAGONAL_UP_RIGHT = Direction("diagonal_up_right", -1, 1, lambda b, i: b.diagonal_up_right(i))
DIAGONAL_DOWN_RIGHT = Direction("diagonal_down_right", 1, 1, lambda b, i: b.diagonal_down_right(i))

DIRECTIONS = (HORIZONTAL, VERTICAL, DIAGONAL_UP_RIGHT, DIAGONAL_DOWN_RIGHT)


def windows_through(board: Board, index: int, direction: Direction) -> List[List[int]]:
    """Every CONNECT_N-long window along ``direction`` that contains ``index`` and fits on the grid."""
    span = CONNECT_N - 1
    row, col = board.row_of(index), board.column_of(index)
    back = min(span, direction.steps_to_edge(board, row, col, -1))
    ahead = min(span, direction.steps_to_edge(board, row, col, +1))

    windows: List[List[int]] = []
    for k in range(back, -1, -1):
        if span - k > ahead:
            break
        window = [board.index_of(row - k * direction.d_row, col - k * direction.d_col)]
        for _ in range(span):
            window.append(direction.advance(board, window[-1]))
        windows.append(window)
    return windows


def score_window(cells: Sequence[Slot], player: Player) -> Score:
    opp = other(player)
    if opp in cells:
        return ZERO
    count = sum(1 for cell in cells if cell == player)
    if count >= CONNECT_N:
        return Score.win()
    return Score.finite(RUN_SCORES[count])


@dataclass(frozen=True)
class DropScore:
    landing: int
    by_direction: Dict[str, Score]

    @property
    def is_win(self) -> bool:
        return any(s.is_win for s in self.by_direction.values())

    @property
    def total(self) -> Score:
        if self.is_win:
            return Score.win()
        return Score.finite(sum(s.value for s in self.by_direction.values()))


def score_drop(board: Board, column: int, player: Player) -> DropScore:
    """
    Score ``player`` dropping a coin into ``column``. The board is not
    modified; the landing slot is counted as the player's coin.
    """
    landing = board.landing_index(column)
    totals: Dict[str, Score] = {}
    for direction in DIRECTIONS:
        total = ZERO
        for window in windows_through(board, landing, direction):
            cells = [player if i == landing else board.slots[i] for i in window]
            total = total + score_window(cells, player)
            if total.is_win:
                break
        totals[direction.name] = total
    return DropScore(landing=landing, by_direction=totals)


def is_winning_state(board: Board, column: int, player: Player) -> bool:
    """True if dropping ``player``'s coin into ``column`` completes four in a row."""
    if not board.is_valid_column(column) or not board.is_empty_at_top(column):
        return False
    return score_drop(board, column, player).is_win
