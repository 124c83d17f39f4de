# src/dropfour/config.py

from __future__ import annotations

ROWS = 6
COLS = 7
CONNECT_N = 4

# Game defaults
DEFAULT_DEPTH = 2
HUMAN_FIRST = True
COMPUTER_PLAYER = "O"

# Search fan-out: a fresh thread pool per decision node for the first
# SEARCH_PARALLEL_LEVELS levels, sequential below that.
SEARCH_MAX_WORKERS = COLS
SEARCH_PARALLEL_LEVELS = 2

# UI toggles
USE_COLOR = True
CLEAR_SCREEN = True

# “AI thinking” effect
AI_THINKING_SPINNER = True
AI_THINK_DELAY_SEC = 1  # short pause so AI moves aren’t instant
START_DELAY_SEC = 3  # countdown before a game starts

LOG_LEVEL = "WARNING"
