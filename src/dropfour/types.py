# src/dropfour/types.py

from __future__ import annotations
from typing import Literal, Optional, NewType

Player = Literal["X", "O"]
Slot = Optional[Player]      # None == empty
Move = NewType("Move", int)  # column index 0..cols-1


def other(player: Player) -> Player:
    return "O" if player == "X" else "X"
