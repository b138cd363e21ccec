"""
errors.py - Exception hierarchy for the Connect Four engine

Two failure kinds exist: ConfigurationError when an engine is built with an
unusable board size, and InvalidMoveError when a move is rejected. Both derive
from ConnectFourError so callers can catch everything from this package at
once, and from ValueError since both describe a bad argument.
"""

from enum import Enum
from typing import Optional


class MoveRejection(Enum):
    """Why a move was rejected."""
    OUT_OF_BOUNDS = "out_of_bounds"
    COLUMN_FULL = "column_full"
    GAME_OVER = "game_over"


class ConnectFourError(Exception):
    """Base exception for all connectfour errors."""
    pass


class ConfigurationError(ConnectFourError, ValueError):
    """Raised when an engine is created with a board smaller than the minimum."""

    def __init__(self, rows: int, columns: int, min_rows: int, min_cols: int):
        self.rows = rows
        self.columns = columns
        super().__init__(
            f"Board must be at least {min_rows}x{min_cols}, got {rows}x{columns}"
        )


class InvalidMoveError(ConnectFourError, ValueError):
    """
    Raised when a move cannot be applied. The engine state is unchanged,
    so the caller can surface the message and ask for another column.
    """

    def __init__(self, reason: MoveRejection, column: Optional[int] = None, message: str = None):
        self.reason = reason
        self.column = column
        if message is None:
            message = _default_message(reason)
        super().__init__(message)


def _default_message(reason: MoveRejection) -> str:
    if reason == MoveRejection.OUT_OF_BOUNDS:
        return "Column out of bounds"
    if reason == MoveRejection.COLUMN_FULL:
        return "Column is full"
    return "Game is over"
