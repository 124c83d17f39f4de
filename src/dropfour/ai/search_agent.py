from __future__ import annotations

from dataclasses import dataclass, field
import time

from dropfour.ai.search import SearchEngine, pick_best
from dropfour.config import DEFAULT_DEPTH
from dropfour.game.state import GameState
from dropfour.types import Move, Player


@dataclass(slots=True)
class SearchAgent:
    """
    Plays the lookahead engine for whichever side is to move.
    Knobs:
      - depth: plies of lookahead (the game's difficulty level)
      - engine: fan-out settings for the parallel column evaluation
    """
    name: str = "Lookahead"
    depth: int = DEFAULT_DEPTH
    engine: SearchEngine = field(default_factory=SearchEngine)

    last_info: dict = field(default_factory=dict)

    def choose_move(self, state: GameState) -> Move:
        board = state.board
        me: Player = state.current

        start = time.perf_counter()
        scores = self.engine.score_columns(self.depth, me, board)
        choice = pick_best(scores)
        if choice is None:
            raise ValueError("No valid moves.")

        elapsed = time.perf_counter() - start
        self.last_info = {
            "depth": self.depth,
            "eval": str(scores[choice]),
            "move_col": int(choice) + 1,
            "time_ms": max(1, int(elapsed * 1000)),
            "scores": {int(m) + 1: str(s) for m, s in scores.items()},
        }
        return choice
