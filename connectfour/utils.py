"""
utils.py - Constants, enumerations and helper functions for Connect Four

The helpers here work on any rectangular numpy grid of player codes, so the
board size is read from the grid itself rather than fixed at import time.
"""

from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

# Board configuration
DEFAULT_ROWS = 6
DEFAULT_COLS = 7
MIN_ROWS = 4
MIN_COLS = 4
CONNECT_N = 4  # Number of pieces in a row to win

EMPTY_SYMBOL = "."

Position = Tuple[int, int]


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    RED = 1     # First player
    YELLOW = 2  # Second player

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.RED:
            return Player.YELLOW
        elif self == Player.YELLOW:
            return Player.RED
        return Player.EMPTY

    @property
    def display_name(self) -> str:
        return "" if self == Player.EMPTY else self.name.capitalize()

    @property
    def symbol(self) -> str:
        """Single character used in text renderings of the board."""
        if self == Player.EMPTY:
            return EMPTY_SYMBOL
        return self.display_name[0]

    def __str__(self):
        return self.display_name


FIRST_PLAYER = Player.RED


class GameStatus(Enum):
    """Derived phase of a game."""
    IN_PROGRESS = auto()
    WON = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameStatus.IN_PROGRESS


class Direction(Enum):
    """Axes along which a run can form."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # top-left to bottom-right
    DIAGONAL_UP = auto()    # bottom-left to top-right


# (row, col) step for the positive half of each axis
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN: (1, 1),
    Direction.DIAGONAL_UP: (1, -1),
}


def is_valid_position(grid: np.ndarray, row: int, col: int) -> bool:
    """Check if a position lies inside the grid."""
    rows, cols = grid.shape
    return 0 <= row < rows and 0 <= col < cols


def ray_positions(grid: np.ndarray, row: int, col: int, dr: int, dc: int) -> List[Position]:
    """
    Walk from (row, col) in steps of (dr, dc), excluding the start cell.

    Returns:
        The consecutive cells holding the same player as the start cell,
        stopping at the first cell that is off the grid or different
    """
    player_value = grid[row, col]
    positions = []
    r, c = row + dr, col + dc
    while is_valid_position(grid, r, c) and grid[r, c] == player_value:
        positions.append((r, c))
        r += dr
        c += dc
    return positions


def run_through(grid: np.ndarray, row: int, col: int, direction: Direction) -> List[Position]:
    """
    Get the run along one axis that passes through (row, col).

    Returns:
        Cells of the run ordered from the negative end to the positive end
    """
    dr, dc = DIRECTION_VECTORS[direction]
    backward = ray_positions(grid, row, col, -dr, -dc)
    forward = ray_positions(grid, row, col, dr, dc)
    return list(reversed(backward)) + [(row, col)] + forward


def find_winning_run(grid: np.ndarray, row: int, col: int,
                     connect_n: int = CONNECT_N) -> Optional[List[Position]]:
    """
    Find a winning run through the piece at (row, col).

    Only the rays leaving the given cell are inspected, so this is the check
    to run right after a piece lands.

    Returns:
        Cells of the first run of at least connect_n, or None
    """
    if grid[row, col] == Player.EMPTY.value:
        return None

    for direction in DIRECTION_VECTORS:
        positions = run_through(grid, row, col, direction)
        if len(positions) >= connect_n:
            return positions

    return None


def render_board_text(grid: np.ndarray) -> str:
    """
    Render the grid as text, one line per row from top to bottom.

    Empty cells are ".", occupied cells the player's symbol, and every line
    ends with a newline.
    """
    lines = []
    for row in grid:
        lines.append("".join(Player(int(value)).symbol for value in row))
    return "".join(line + "\n" for line in lines)
