# src/dropfour/errors.py

from __future__ import annotations


class Connect4Error(Exception):
    """Base class for everything the game core raises on purpose."""


class IllegalMoveError(Connect4Error, ValueError):
    """
    A gated drop was refused: the column is out of range or already full.
    The board is left untouched; the UI reports it and play continues.
    """


class GeometryError(Connect4Error, LookupError):
    """A row/column combination outside the grid was requested."""


class PolicyError(Connect4Error, RuntimeError):
    """A forced drop was attempted on a board that is not a simulation snapshot."""


class GravityInvariantError(Connect4Error, AssertionError):
    """A playable column had no empty slot: the gravity invariant is broken."""
