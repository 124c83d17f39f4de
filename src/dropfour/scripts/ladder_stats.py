from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict


@dataclass(frozen=True)
class Team:
    """A ladder entrant. ``make`` builds a fresh agent per game and must pickle (partial, not lambda)."""
    name: str
    make: Callable[[], object]


@dataclass
class Agg:
    """Running record for one entrant across all of its ladder games."""
    games: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    points: float = 0.0

    moves: int = 0
    time_ms: int = 0
    depth_sum: int = 0

    @property
    def ppg(self) -> float:
        return self.points / self.games if self.games else 0.0

    @property
    def avg_ms_per_move(self) -> float:
        return self.time_ms / self.moves if self.moves else 0.0

    @property
    def avg_depth(self) -> float:
        return self.depth_sum / self.moves if self.moves else 0.0

    def absorb(self, side: Dict[str, int]) -> None:
        """Fold one game's per-side move/time/depth counters into the record."""
        self.moves += side["moves"]
        self.time_ms += side["time_ms"]
        self.depth_sum += side["depth"]


def wilson_lcb(p: float, n: int, z: float = 1.96) -> float:
    """
    Lower bound of the Wilson interval for a points-per-game rate ``p`` over
    ``n`` games. Short records are pulled towards zero, so a lucky 2-0 does
    not outrank a steady 15-5.
    """
    if n <= 0:
        return 0.0
    p = min(1.0, max(0.0, p))
    z2 = z * z
    spread = z * math.sqrt(max(0.0, p * (1.0 - p) / n + z2 / (4.0 * n * n)))
    return max(0.0, (p + z2 / (2.0 * n) - spread) / (1.0 + z2 / n))


def strength_score(a: Agg, z: float = 1.96) -> float:
    return wilson_lcb(a.ppg, a.games, z)


def add_result(a: Agg, b: Agg, outcome: str, a_is_x: bool) -> None:
    """Record one game between ``a`` and ``b``. ``outcome`` is "X", "O" or "D"."""
    a.games += 1
    b.games += 1

    if outcome == "D":
        for side in (a, b):
            side.draws += 1
            side.points += 0.5
        return

    winner, loser = (a, b) if (outcome == "X") == a_is_x else (b, a)
    winner.wins += 1
    winner.points += 1.0
    loser.losses += 1
