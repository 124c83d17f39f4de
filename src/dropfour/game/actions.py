from __future__ import annotations

from dropfour.core.board import Board
from dropfour.errors import IllegalMoveError
from dropfour.types import Player, Move


def is_legal_move(board: Board, column: int) -> bool:
    return board.is_valid_column(column) and board.is_empty_at_top(column)


def apply_player_move(board: Board, column: Move, player: Player = "X") -> bool:
    """Gated drop for real game moves. A refused move leaves the board unchanged."""
    try:
        board.drop(column, player)
    except IllegalMoveError:
        return False
    return True
