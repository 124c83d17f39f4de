from __future__ import annotations
from dataclasses import dataclass

from dropfour.config import ROWS, COLS, DEFAULT_DEPTH, HUMAN_FIRST
from dropfour.core.board import Board
from dropfour.types import Player


@dataclass(slots=True)
class GameState:
    board: Board
    current: Player
    last_status: str = "Player X starts."


@dataclass(frozen=True)
class GameConfig:
    """
    Caller-chosen settings for one game. Passed through as-is; a bad
    board size surfaces from the board's own geometry checks.
    """
    rows: int = ROWS
    cols: int = COLS
    depth: int = DEFAULT_DEPTH
    human_first: bool = HUMAN_FIRST

    def new_board(self) -> Board:
        return Board(self.rows, self.cols)
