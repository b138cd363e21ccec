"""
board.py - Board representation for Connect Four

This module implements the Board class, which owns the grid of cells and
knows how discs drop into columns. Turn order and win state live one level
up, in ConnectFourGame.
"""

from typing import Optional, Tuple

import numpy as np

from connectfour.debug import debug
from connectfour.utils import (DEFAULT_ROWS, DEFAULT_COLS, Player, Position,
                               render_board_text)


class Board:
    """
    A rows x columns grid of Player codes.

    Row 0 is the top of the board and row rows-1 the bottom; discs settle
    at the lowest empty row of their column. The grid is one contiguous
    numpy buffer allocated once, so clearing never changes the dimensions.
    """

    def __init__(self, rows: int = DEFAULT_ROWS, columns: int = DEFAULT_COLS):
        debug.debug(f"Allocating {rows}x{columns} board", "board")
        self._rows = rows
        self._columns = columns
        self._grid = np.zeros((rows, columns), dtype=np.int8)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def grid(self) -> np.ndarray:
        """Read-only view of the live grid."""
        view = self._grid.view()
        view.flags.writeable = False
        return view

    def clear(self) -> None:
        """Set every cell back to empty."""
        debug.trace("Clearing board", "board")
        self._grid.fill(Player.EMPTY.value)

    def in_bounds(self, column: int) -> bool:
        return 0 <= column < self._columns

    def landing_row(self, column: int) -> Optional[int]:
        """
        Get the row where a disc dropped in column would land.

        Returns:
            Row index, or None if the column is full
        """
        for row in range(self._rows - 1, -1, -1):
            if self._grid[row, column] == Player.EMPTY.value:
                return row
        return None

    def is_column_full(self, column: int) -> bool:
        return self._grid[0, column] != Player.EMPTY.value

    def drop(self, column: int, player: Player) -> Position:
        """
        Drop a disc for player into column.

        The caller is expected to have checked bounds and that the column
        has room.

        Returns:
            The (row, column) cell that was filled
        """
        row = self.landing_row(column)
        if row is None:
            raise ValueError(f"column {column} has no empty cell")
        self._grid[row, column] = player.value
        debug.trace(f"Placed {player.name} at ({row}, {column})", "board")
        return row, column

    def cell(self, row: int, column: int) -> Player:
        return Player(int(self._grid[row, column]))

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self._grid))

    def is_full(self) -> bool:
        return self.occupied_count() == self._rows * self._columns

    def get_state(self) -> np.ndarray:
        """
        Get a copy of the grid as a numpy array.

        Returns:
            2D array of player codes, independent of the board
        """
        return self._grid.copy()

    def snapshot(self) -> Tuple[Tuple[Player, ...], ...]:
        """Immutable copy of the occupancy, one tuple per row."""
        return tuple(
            tuple(self.cell(row, column) for column in range(self._columns))
            for row in range(self._rows)
        )

    def render(self) -> str:
        return render_board_text(self._grid)

    def __str__(self) -> str:
        return self.render()
