from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from dropfour.ai.base import Agent
from dropfour.core.board import Board
from dropfour.core.rules import check_winner_with_line, is_draw
from dropfour.core.scoring import is_winning_state
from dropfour.game.actions import is_legal_move
from dropfour.game.state import GameState
from dropfour.types import Player, Move, other
from dropfour.ui.prompts import ai_thinking, parse_move
from dropfour.ui.render import render

logger = logging.getLogger(__name__)


def _agent_name(agent: Agent, fallback: str) -> str:
    name = getattr(agent, "name", None)
    if not name:
        return fallback
    return str(name)


def _status_with_agents(status: str, agent_x: Agent, agent_o: Agent, current: Player) -> str:
    x_name = _agent_name(agent_x, "Player X")
    o_name = _agent_name(agent_o, "Player O")

    header = f"X: {x_name} | O: {o_name} | Turn: {current}"
    if status:
        return f"{header}\n{status}"
    return header


def _play(state: GameState, move: Move) -> bool:
    """Drop for the side to move; True if that drop completed four in a row."""
    won = is_winning_state(state.board, move, state.current)
    state.board.drop(move, state.current)
    return won


def run_game(
    agent_x: Agent,
    agent_o: Agent,
    board: Optional[Board] = None,
    show_thinking: bool = True,
    read_move: Callable[[str], str] = input,
) -> Optional[Player]:
    """
    Interactive loop. Returns the winner, or None for a draw or a quit.
    Illegal or malformed input only updates the status line.
    """
    state = GameState(board=board or Board(), current="X", last_status="Player X starts.")

    while True:
        render(state.board, _status_with_agents(state.last_status, agent_x, agent_o, state.current))

        if is_draw(state.board):
            render(state.board, _status_with_agents("Draw game.", agent_x, agent_o, state.current))
            logger.info("Game drawn")
            return None

        current_agent = agent_x if state.current == "X" else agent_o

        try:
            if current_agent.name == "Human":
                raw = read_move(f"Player {state.current} move: ")
                move = parse_move(raw, state.board.cols)
                if move is None:
                    render(state.board, _status_with_agents("Game quit.", agent_x, agent_o, state.current))
                    return None
                if not is_legal_move(state.board, move):
                    raise ValueError(f"Column {int(move) + 1} is full.")
                state.last_status = f"Player {state.current} chose {int(move) + 1}"

            else:
                if show_thinking:
                    ai_thinking(f"{current_agent.name}")

                move = current_agent.choose_move(state)

                info = getattr(current_agent, "last_info", None)
                if info:
                    state.last_status = (
                        f"{current_agent.name} chose {info.get('move_col')} | "
                        f"d={info.get('depth')} | "
                        f"eval={info.get('eval')} | "
                        f"{info.get('time_ms')}ms"
                    )
                else:
                    state.last_status = f"{current_agent.name} chose {int(move) + 1}"

            if _play(state, move):
                found = check_winner_with_line(state.board)
                line = found[1] if found else None
                render(
                    state.board,
                    _status_with_agents(f"Player {state.current} wins!", agent_x, agent_o, state.current),
                    highlight=line,
                )
                logger.info("Player %s wins with column %d", state.current, int(move) + 1)
                return state.current

            state.current = other(state.current)
            state.last_status += f" | Next: Player {state.current}"

        except ValueError as e:
            # Bad input and IllegalMoveError both land here; the game goes on.
            state.last_status = str(e)


def play_headless(
    agent_x: Agent,
    agent_o: Agent,
    board: Optional[Board] = None,
) -> Tuple[str, Dict[str, Dict[str, int]]]:
    """Agent-vs-agent game without UI. Outcome is "X", "O" or "D"."""
    state = GameState(board=board or Board(), current="X", last_status="")
    stats = {
        "X": {"moves": 0, "time_ms": 0, "depth": 0},
        "O": {"moves": 0, "time_ms": 0, "depth": 0},
    }

    while True:
        if is_draw(state.board):
            return "D", stats

        agent = agent_x if state.current == "X" else agent_o
        move = agent.choose_move(state)

        info = getattr(agent, "last_info", None) or {}
        side_stats = stats[state.current]
        side_stats["moves"] += 1
        side_stats["time_ms"] += max(1, int(info.get("time_ms", 0)))
        side_stats["depth"] += int(info.get("depth", 0))

        if _play(state, move):
            return state.current, stats
        state.current = other(state.current)
