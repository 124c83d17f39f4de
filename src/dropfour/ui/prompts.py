from __future__ import annotations
import sys
import time
from typing import Optional

from dropfour.config import AI_THINKING_SPINNER, AI_THINK_DELAY_SEC
from dropfour.game.state import GameState
from dropfour.types import Move


class HumanAgent:
    name = "Human"

    def choose_move(self, state: GameState) -> Move:
        raise RuntimeError("HumanAgent.choose_move should never be called.")


def parse_move(raw: str, cols: int) -> Optional[Move]:
    """1-based column from the keyboard; None means quit."""
    s = raw.strip().lower()
    if s in {"q", "quit", "exit"}:
        return None
    if not s.isdigit():
        raise ValueError("Invalid input. Enter a number or q.")
    col = int(s) - 1
    if col < 0 or col >= cols:
        raise ValueError(f"Column must be between 1 and {cols}.")
    return Move(col)


def ai_thinking(label: str = "AI is thinking", delay_sec: float = AI_THINK_DELAY_SEC) -> None:
    """Short pause with an optional spinner so the computer's reply is not instant."""
    if delay_sec <= 0:
        return

    if not AI_THINKING_SPINNER:
        time.sleep(delay_sec)
        return

    frames = "|/-\\"
    deadline = time.monotonic() + delay_sec
    i = 0
    while time.monotonic() < deadline:
        sys.stdout.write(f"\r{label}... {frames[i % len(frames)]}")
        sys.stdout.flush()
        time.sleep(0.08)
        i += 1
    sys.stdout.write("\r" + (" " * (len(label) + 10)) + "\r")
    sys.stdout.flush()
