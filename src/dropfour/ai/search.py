from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Optional

from dropfour.config import COMPUTER_PLAYER, DEFAULT_DEPTH, SEARCH_MAX_WORKERS, SEARCH_PARALLEL_LEVELS
from dropfour.core.board import Board
from dropfour.core.scoring import ZERO, Score, score_drop
from dropfour.types import Move, Player, other

logger = logging.getLogger(__name__)


def pick_best(scores: Dict[Move, Score]) -> Optional[Move]:
    """Highest score wins; ties go to the lowest column (first seen under a strict >)."""
    best_move: Optional[Move] = None
    best_score: Optional[Score] = None
    for m in sorted(scores):
        if best_score is None or scores[m] > best_score:
            best_move, best_score = m, scores[m]
    return best_move


@dataclass(slots=True)
class SearchEngine:
    """
    Fixed-depth lookahead over the line-counting heuristic.

    A move is worth its own heuristic gain minus the best gain the other
    side can get in reply, down to ``depth`` plies. A move that completes
    four in a row is a WIN and is never combined arithmetically.

    Every decision node scores its legal columns as independent tasks.
    The first ``parallel_levels`` levels of the recursion each open a
    fresh thread pool (at most ``max_workers`` threads); deeper levels run
    the same evaluation inline. Each task only ever mutates its own board
    snapshot, so the result does not depend on how the work is scheduled.
    """
    max_workers: int = SEARCH_MAX_WORKERS
    parallel_levels: int = SEARCH_PARALLEL_LEVELS

    def value(self, depth: int, column: Move, player: Player, board: Board, level: int = 0) -> Score:
        if depth <= 0:
            return ZERO

        heuristic = score_drop(board, column, player)
        if heuristic.is_win:
            return Score.win()

        what_if = board.snapshot()
        what_if.forced_drop(column, other(player))

        reply = self.best_response(depth - 1, other(player), what_if, level + 1)
        return heuristic.total - reply

    def best_response(self, depth: int, player: Player, board: Board, level: int = 0) -> Score:
        scores = self.score_columns(depth, player, board, level)
        if not scores:
            return ZERO
        return max(scores.values())

    def score_columns(self, depth: int, player: Player, board: Board, level: int = 0) -> Dict[Move, Score]:
        moves = board.valid_moves()
        if level < self.parallel_levels and len(moves) > 1:
            workers = max(1, min(self.max_workers, len(moves)))
            with ThreadPoolExecutor(max_workers=workers) as ex:
                futures = [ex.submit(self.value, depth, m, player, board, level) for m in moves]
                results = [f.result() for f in futures]
        else:
            results = [self.value(depth, m, player, board, level) for m in moves]
        return dict(zip(moves, results))

    def choose_counter_move(self, board: Board, depth: int = DEFAULT_DEPTH, player: Player = COMPUTER_PLAYER) -> Move:
        scores = self.score_columns(depth, player, board)
        best = pick_best(scores)
        if best is None:
            raise ValueError("No valid moves.")

        logger.debug(
            "%s d=%d scores: %s -> column %d",
            player, depth, " ".join(f"{int(m) + 1}:{s}" for m, s in scores.items()), int(best) + 1,
        )
        return best


def choose_counter_move(board: Board, depth: int = DEFAULT_DEPTH, player: Player = COMPUTER_PLAYER) -> Move:
    return SearchEngine().choose_counter_move(board, depth, player)
