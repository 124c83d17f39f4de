from __future__ import annotations

import random
from dataclasses import dataclass, field

from dropfour.game.state import GameState
from dropfour.types import Move


@dataclass(slots=True)
class RandomAgent:
    name: str = "Random AI"
    rng: random.Random = field(default_factory=random.Random)

    def choose_move(self, state: GameState) -> Move:
        moves = state.board.valid_moves()
        if not moves:
            raise ValueError("No valid moves.")
        return self.rng.choice(moves)
