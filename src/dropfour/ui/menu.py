from __future__ import annotations

import time
from typing import Callable, Optional, Tuple

from dropfour.ai.base import Agent
from dropfour.ai.search_agent import SearchAgent
from dropfour.config import START_DELAY_SEC
from dropfour.game.controller import run_game
from dropfour.game.state import GameConfig
from dropfour.types import Player
from dropfour.ui.prompts import HumanAgent


def human_vs_engine(cfg: GameConfig) -> Tuple[Agent, Agent]:
    """(X, O) for a human against the lookahead engine; ``cfg.human_first`` picks who is X."""
    human = HumanAgent()
    ai = SearchAgent(name=f"Lookahead (d{cfg.depth})", depth=cfg.depth)
    return (human, ai) if cfg.human_first else (ai, human)


def start_game(
    agent_x: Agent,
    agent_o: Agent,
    cfg: GameConfig,
    *,
    show_thinking: bool = True,
    read_move: Callable[[str], str] = input,
    delay_sec: float = START_DELAY_SEC,
) -> Optional[Player]:
    print(f"\nStarting game: {agent_x.name} vs {agent_o.name} on {cfg.rows}x{cfg.cols}")
    if delay_sec > 0:
        print(f"Game will start in {delay_sec:g} seconds...\n")
        time.sleep(delay_sec)
    return run_game(agent_x, agent_o, board=cfg.new_board(), show_thinking=show_thinking, read_move=read_move)


def run_menu(
    cfg: GameConfig,
    *,
    show_thinking: bool = True,
    read: Callable[[str], str] = input,
    delay_sec: float = START_DELAY_SEC,
) -> Optional[Player]:
    """
    Start menu. ``read`` answers both the menu prompt and the in-game move
    prompts. Returns the winner of the game played, or None.
    """
    print("Select mode:")
    print(f"1) Human vs Lookahead (depth {cfg.depth})")
    print("2) Human vs Human")
    print("3) Run difficulty ladder")

    choice = read("Choice: ").strip()

    if choice == "3":
        print("\nStarting difficulty ladder...\n")
        from dropfour.scripts.ladder import main as ladder_main

        ladder_main([])
        return None

    if choice == "2":
        agent_x, agent_o = HumanAgent(), HumanAgent()
    else:
        if choice != "1":
            print("\nInvalid choice. Defaulting to Human vs Lookahead.\n")
        agent_x, agent_o = human_vs_engine(cfg)

    return start_game(
        agent_x, agent_o, cfg,
        show_thinking=show_thinking, read_move=read, delay_sec=delay_sec,
    )
