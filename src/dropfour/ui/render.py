from __future__ import annotations
from typing import Optional, Iterable, Tuple, Set

from dropfour.config import CLEAR_SCREEN, USE_COLOR
from dropfour.core.board import Board
from dropfour.types import Slot

Coord = Tuple[int, int]

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
REVERSE = "\033[7m"

FG_RED = "\033[31m"
FG_YELLOW = "\033[33m"
FG_CYAN = "\033[36m"
FG_GRAY = "\033[90m"


def c(s: str, code: str) -> str:
    if not USE_COLOR:
        return s
    return f"{code}{s}{RESET}"


def _piece(slot: Slot, highlighted: bool = False, width: int = 1) -> str:
    if slot is None:
        text = c("·".rjust(width), FG_GRAY)
    elif slot == "X":
        text = c("X".rjust(width), FG_RED)
    else:
        text = c("O".rjust(width), FG_YELLOW)
    if highlighted and USE_COLOR:
        text = f"{REVERSE}{text}{RESET}"
    return text


def clear_screen() -> None:
    if CLEAR_SCREEN:
        print("\033[2J\033[H", end="")


def board_lines(board: Board, highlight: Optional[Iterable[Coord]] = None) -> list[str]:
    hl: Set[Coord] = set(highlight) if highlight else set()
    width = len(str(board.cols))

    lines = [c("   " + " ".join(str(i + 1).rjust(width) for i in range(board.cols)), DIM)]
    for r, row in enumerate(board.grid()):
        parts = [_piece(slot, (r, col) in hl, width) for col, slot in enumerate(row)]
        lines.append(" | " + " ".join(parts) + " |")
    lines.append(c("   " + "—" * ((width + 1) * board.cols - 1), DIM))
    return lines


def render(board: Board, status: str = "", highlight: Optional[Iterable[Coord]] = None) -> None:
    clear_screen()

    print(c("CONNECT 4", BOLD))
    if status:
        print(c(status, FG_CYAN))
    else:
        print()

    for line in board_lines(board, highlight):
        print(line)

    print(c(f"   Enter 1-{board.cols} to drop. Enter q to quit.", DIM))
