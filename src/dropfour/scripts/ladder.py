from __future__ import annotations

import argparse
import csv
import logging
import random
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from functools import partial
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

from dropfour.ai.random_agent import RandomAgent
from dropfour.ai.search import SearchEngine
from dropfour.ai.search_agent import SearchAgent
from dropfour.config import ROWS, COLS
from dropfour.core.board import Board
from dropfour.game.controller import play_headless
from dropfour.types import Player, other

from .ladder_stats import Agg, Team, add_result, strength_score

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "name",
    "games", "wins", "draws", "losses",
    "points", "ppg",
    "strength_wilson_lcb",
    "avg_ms_per_move",
    "moves", "time_ms", "avg_depth",
]

# One decision node's fan-out is plenty inside a worker process.
_LADDER_ENGINE = partial(SearchEngine, parallel_levels=1)


def default_roster(max_depth: int = 3) -> List[Team]:
    teams = [Team("Random", partial(RandomAgent, name="Random"))]
    for d in range(1, max_depth + 1):
        name = f"Lookahead d{d}"
        teams.append(Team(name, partial(_make_search_agent, name, d)))
    return teams


def _make_search_agent(name: str, depth: int) -> SearchAgent:
    return SearchAgent(name=name, depth=depth, engine=_LADDER_ENGINE())


def seed_agent(agent, seed: int) -> None:
    rng = getattr(agent, "rng", None)
    if isinstance(rng, random.Random):
        rng.seed(seed)


def opening_board(seed: int, plies: int, rows: int = ROWS, cols: int = COLS) -> Board:
    """A few random plies so repeated pairings of deterministic agents differ."""
    rng = random.Random(seed)
    board = Board(rows, cols)
    player: Player = "X"
    for _ in range(plies):
        moves = board.valid_moves()
        if not moves:
            break
        board.drop(rng.choice(moves), player)
        player = other(player)
    return board


def play_pairing(
    a: Team, b: Team, games: int, base_seed: int, opening_plies: int = 2,
) -> List[Tuple[str, str, bool, str, Dict[str, Dict[str, int]]]]:
    """Play ``games`` games between two teams, alternating who moves first."""
    out = []
    for g in range(games):
        a_is_x = g % 2 == 0
        first, second = (a, b) if a_is_x else (b, a)
        agent_x, agent_o = first.make(), second.make()
        seed_agent(agent_x, base_seed + g + 101)
        seed_agent(agent_o, base_seed + g + 202)

        # Even plies keep X to move after the opening.
        board = opening_board(base_seed + g, opening_plies - opening_plies % 2)
        outcome, stats = play_headless(agent_x, agent_o, board=board)
        out.append((a.name, b.name, a_is_x, outcome, stats))
    return out


def run_pairings_batch(args):
    (batch_items, games_per_pair, opening_plies) = args
    out = []
    for (a, b, base_seed) in batch_items:
        out.extend(play_pairing(a, b, games_per_pair, base_seed, opening_plies))
    return out


def chunked(lst, size: int):
    for i in range(0, len(lst), size):
        yield lst[i : i + size]


def run_ladder(
    teams: Sequence[Team],
    games_per_pair: int = 4,
    opening_plies: int = 2,
    seed: int = 0,
    max_workers: int | None = None,
    batch_pairings: int = 1,
) -> Dict[str, Agg]:
    """Round-robin between all teams; work is spread over a process pool."""
    agg: Dict[str, Agg] = {t.name: Agg() for t in teams}

    pair_items = []
    for i in range(len(teams)):
        for j in range(i + 1, len(teams)):
            pair_items.append((teams[i], teams[j], seed + i * 10_000 + j * 100))
    logger.info("Ladder: %d teams, %d pairings, %d games/pair", len(teams), len(pair_items), games_per_pair)

    with ProcessPoolExecutor(max_workers=max_workers) as ex:
        futures = [
            ex.submit(run_pairings_batch, (chunk, games_per_pair, opening_plies))
            for chunk in chunked(pair_items, batch_pairings)
        ]
        for fut in as_completed(futures):
            for (a_name, b_name, a_is_x, outcome, stats) in fut.result():
                apply_game_result(agg, a_name, b_name, a_is_x, outcome, stats)
                logger.info("%s vs %s (%s first): %s", a_name, b_name, a_name if a_is_x else b_name, outcome)

    return agg


def apply_game_result(agg: Dict[str, Agg], a_name: str, b_name: str, a_is_x: bool, outcome: str, stats) -> None:
    add_result(agg[a_name], agg[b_name], outcome, a_is_x)
    a_side, b_side = ("X", "O") if a_is_x else ("O", "X")
    agg[a_name].absorb(stats[a_side])
    agg[b_name].absorb(stats[b_side])


def result_rows(agg: Dict[str, Agg], z: float = 1.96) -> Iterable[list]:
    for name, a in agg.items():
        yield [
            name,
            a.games, a.wins, a.draws, a.losses,
            a.points, round(a.ppg, 6),
            round(strength_score(a, z), 6),
            round(a.avg_ms_per_move, 3),
            a.moves, a.time_ms, round(a.avg_depth, 3),
        ]


def export_csv(agg: Dict[str, Agg], out_dir: Path, z: float = 1.96) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = time.strftime("%Y%m%d_%H%M%S")
    out_path = out_dir / f"ladder_results_{ts}.csv"
    with open(out_path, "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(CSV_HEADER)
        w.writerows(result_rows(agg, z))
    return out_path


def print_table(agg: Dict[str, Agg], z: float = 1.96) -> None:
    ranked = sorted(agg.items(), key=lambda kv: strength_score(kv[1], z), reverse=True)
    print(f"{'rk':>3}  {'name':<16} {'W-D-L':>9} {'ppg':>6} {'strength':>9} {'ms/move':>8}")
    for rk, (name, a) in enumerate(ranked, start=1):
        wdl = f"{a.wins}-{a.draws}-{a.losses}"
        print(
            f"{rk:>3}  {name:<16} {wdl:>9} {a.ppg:>6.3f} "
            f"{strength_score(a, z):>9.4f} {a.avg_ms_per_move:>8.1f}"
        )


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Round-robin ladder of lookahead depths vs a random baseline.")
    ap.add_argument("--max-depth", type=int, default=3, help="Deepest lookahead agent in the roster")
    ap.add_argument("--games", type=int, default=4, help="Games per pairing (colours alternate)")
    ap.add_argument("--opening-plies", type=int, default=2, help="Random plies before the agents take over")
    ap.add_argument("--seed", type=int, default=0, help="Base seed")
    ap.add_argument("--workers", type=int, default=None, help="Worker processes")
    ap.add_argument("--results-dir", type=str, default="data/results", help="Where the CSV is written")
    ap.add_argument("--no-csv", action="store_true", help="Do not export a CSV")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)

    start = time.perf_counter()
    agg = run_ladder(
        default_roster(args.max_depth),
        games_per_pair=args.games,
        opening_plies=args.opening_plies,
        seed=args.seed,
        max_workers=args.workers,
    )
    print_table(agg)

    if not args.no_csv:
        out_path = export_csv(agg, Path(args.results_dir))
        print(f"\nWrote CSV: {out_path}")

    print(f"Total runtime: {time.perf_counter() - start:.1f}s")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
