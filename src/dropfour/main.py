from __future__ import annotations

import argparse
import logging

from dropfour.config import DEFAULT_DEPTH, HUMAN_FIRST, LOG_LEVEL, ROWS, COLS, START_DELAY_SEC
from dropfour.game.state import GameConfig
from dropfour.ui.menu import human_vs_engine, run_menu, start_game


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Play Connect 4 against the lookahead engine.")
    ap.add_argument("--rows", type=int, default=ROWS, help="Board rows")
    ap.add_argument("--cols", type=int, default=COLS, help="Board columns")
    ap.add_argument("--depth", type=int, default=DEFAULT_DEPTH, help="Search depth (difficulty level, >= 1)")
    ap.add_argument("--computer-first", action="store_true", default=not HUMAN_FIRST,
                    help="Let the computer make the first move")
    ap.add_argument("--no-delay", action="store_true", help="Skip the start countdown and 'thinking' pauses")
    ap.add_argument("--menu", action="store_true", help="Pick the mode from the start menu")
    ap.add_argument("--ladder", action="store_true", help="Run the headless difficulty ladder instead of a game")
    ap.add_argument("--log-level", type=str, default=LOG_LEVEL, help="Logging level (DEBUG shows search scores)")
    return ap


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    if args.depth < 1:
        ap.error("--depth must be at least 1")

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.ladder:
        from dropfour.scripts.ladder import main as ladder_main
        return ladder_main([])

    cfg = GameConfig(rows=args.rows, cols=args.cols, depth=args.depth, human_first=not args.computer_first)
    delay = 0 if args.no_delay else START_DELAY_SEC

    if args.menu:
        run_menu(cfg, show_thinking=not args.no_delay, delay_sec=delay)
        return 0

    agent_x, agent_o = human_vs_engine(cfg)
    start_game(agent_x, agent_o, cfg, show_thinking=not args.no_delay, delay_sec=delay)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
