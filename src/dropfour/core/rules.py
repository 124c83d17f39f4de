from __future__ import annotations
from typing import Optional, List, Tuple

from dropfour.config import CONNECT_N
from dropfour.core.board import Board
from dropfour.core.scoring import DIRECTIONS
from dropfour.types import Player

Coord = Tuple[int, int]  # (row, col)


def check_winner_with_line(board: Board) -> Optional[Tuple[Player, List[Coord]]]:
    """Full-board scan; returns the first completed line found, top-left first."""
    span = CONNECT_N - 1
    for start, p in enumerate(board.slots):
        if p is None:
            continue
        row, col = board.row_of(start), board.column_of(start)
        for direction in DIRECTIONS:
            if direction.steps_to_edge(board, row, col) < span:
                continue
            line = [start]
            for _ in range(span):
                line.append(direction.advance(board, line[-1]))
            if all(board.slots[i] == p for i in line):
                return p, [(board.row_of(i), board.column_of(i)) for i in line]
    return None


def check_winner(board: Board) -> Optional[Player]:
    res = check_winner_with_line(board)
    return res[0] if res else None


def is_draw(board: Board) -> bool:
    return board.is_full() and check_winner(board) is None
