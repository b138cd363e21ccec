"""
rules.py - Game state management and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, the rule engine: move legality, turn order and
   win/draw detection on top of a Board
2. ConnectFourEnv, a gymnasium-compatible adapter that feeds actions
   to a ConnectFourGame
"""

import operator
from typing import Any, Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connectfour.debug import debug
from connectfour.errors import ConfigurationError, InvalidMoveError, MoveRejection
from connectfour.game.board import Board
from connectfour.utils import (DEFAULT_ROWS, DEFAULT_COLS, MIN_ROWS, MIN_COLS,
                               FIRST_PLAYER, GameStatus, Player, Position,
                               find_winning_run)


class ConnectFourGame:
    """
    Connect Four rule engine.

    The engine owns its board exclusively. Game status is never stored: it
    is derived from the winner and the board occupancy each time it is
    asked for, so it cannot drift from the cells.

    Not thread-safe; callers sharing one engine must serialize access.
    """

    def __init__(self, rows: int = DEFAULT_ROWS, columns: int = DEFAULT_COLS):
        """
        Create an engine with an empty rows x columns board and RED to move.

        Raises:
            ConfigurationError: if rows or columns is below 4
        """
        if rows < MIN_ROWS or columns < MIN_COLS:
            raise ConfigurationError(rows, columns, MIN_ROWS, MIN_COLS)

        debug.debug(f"Initializing ConnectFourGame ({rows}x{columns})", "game")
        self._board = Board(rows, columns)
        self._current_player = FIRST_PLAYER
        self._winner: Optional[Player] = None
        self._last_move: Optional[Position] = None
        self.initialize_board()

    @classmethod
    def create(cls, rows: int, columns: int) -> 'ConnectFourGame':
        return cls(rows, columns)

    @property
    def rows(self) -> int:
        return self._board.rows

    @property
    def columns(self) -> int:
        return self._board.columns

    @property
    def last_move(self) -> Optional[Position]:
        return self._last_move

    @property
    def move_count(self) -> int:
        return self._board.occupied_count()

    def initialize_board(self) -> None:
        """Empty every cell, give the first player the turn and clear the winner."""
        debug.debug("Initializing board", "game")
        self._board.clear()
        self._current_player = FIRST_PLAYER
        self._winner = None
        self._last_move = None

    def reset_board(self) -> None:
        """Start over on the same board size."""
        self.initialize_board()

    def make_move(self, column: int) -> Position:
        """
        Drop the current player's disc into column.

        Args:
            column: The column to play (0-indexed)

        Returns:
            The (row, column) cell that was filled

        Raises:
            InvalidMoveError: if the column is out of bounds or full, or the
                game already has a winner. The engine is left unchanged.
        """
        column = operator.index(column)
        mover = self._current_player
        debug.debug(f"Attempting move in column {column} for {mover.name}", "game")

        if not self._board.in_bounds(column):
            self._reject(MoveRejection.OUT_OF_BOUNDS, column)
        if self._winner is not None:
            self._reject(MoveRejection.GAME_OVER, column)
        if self._board.is_column_full(column):
            self._reject(MoveRejection.COLUMN_FULL, column)

        row, column = self._board.drop(column, mover)
        self._last_move = (row, column)

        # Only the new disc can complete a run: no run existed before this move
        debug.start_timer("win_check")
        winning_run = find_winning_run(self._board.grid, row, column)
        debug.end_timer("win_check", "game")

        if winning_run is not None:
            self._winner = mover
            debug.info(f"{mover.name} wins with {winning_run}", "game")
        else:
            self._current_player = mover.other()
            if self._board.is_full():
                debug.info("Game ends in a draw", "game")

        return row, column

    def _reject(self, reason: MoveRejection, column: int) -> None:
        error = InvalidMoveError(reason, column)
        debug.debug(f"Invalid move: {error}", "game")
        raise error

    def is_valid_move(self, column: int) -> bool:
        """Check whether make_move(column) would succeed."""
        return (self._winner is None
                and self._board.in_bounds(column)
                and not self._board.is_column_full(column))

    def get_valid_moves(self) -> List[int]:
        """
        Get the columns that can still be played.

        Returns:
            Column indices in ascending order, empty once the game is over
        """
        return [col for col in range(self.columns) if self.is_valid_move(col)]

    def get_status(self) -> GameStatus:
        if self._winner is not None:
            return GameStatus.WON
        if self._board.is_full():
            return GameStatus.DRAW
        return GameStatus.IN_PROGRESS

    def is_game_over(self) -> bool:
        return self.get_status().is_game_over()

    def get_turn(self) -> Optional[Player]:
        """
        Get the player to move.

        Returns:
            The current player, or None once the game is over (won or drawn)
        """
        if self.is_game_over():
            return None
        return self._current_player

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if the game is drawn or still going
        """
        return self._winner

    def get_winning_line(self) -> List[Position]:
        """
        Get the cells of the winning run, for highlighting.

        Returns:
            (row, col) positions of the run through the last move, or an
            empty list if nobody has won
        """
        if self._winner is None or self._last_move is None:
            return []
        row, col = self._last_move
        return find_winning_run(self._board.grid, row, col) or []

    def get_board_state(self) -> Tuple[Tuple[Player, ...], ...]:
        """
        Get an immutable snapshot of the board.

        Returns:
            One tuple per row, top row first, holding Player.EMPTY for empty
            cells
        """
        return self._board.snapshot()

    def get_state(self) -> np.ndarray:
        """Copy of the board as a numpy array of player codes."""
        return self._board.get_state()

    def to_display_string(self) -> str:
        return self._board.render()

    def render(self) -> str:
        return self.to_display_string()

    def __str__(self) -> str:
        return self.to_display_string()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Both players act through the same env; rewards are given from RED's
    point of view.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, rows: int = DEFAULT_ROWS, columns: int = DEFAULT_COLS,
                 render_mode: Optional[str] = None):
        """
        Initialize the Connect Four environment.

        Args:
            rows: Board height
            columns: Board width
            render_mode: Mode for rendering the environment
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.game = ConnectFourGame(rows, columns)
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(columns)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(rows, columns), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to an empty board.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.game.reset_board()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play action as a column for the player to move.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        try:
            self.game.make_move(action)
        except InvalidMoveError as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = str(e)
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = self.game.is_game_over()
        if terminated:
            winner = self.game.get_winner()
            if winner == Player.RED:
                reward = self.reward_win
            elif winner == Player.YELLOW:
                reward = self.reward_lose
            else:
                reward = self.reward_draw
            debug.info(f"Game over: {self.game.get_status().name}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, Any]]:
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.get_state()

    def _get_info(self) -> Dict:
        turn = self.game.get_turn()
        return {
            'valid_moves': self.game.get_valid_moves(),
            'current_player': turn.value if turn is not None else Player.EMPTY.value,
            'game_result': self.game.get_status().name,
            'moves_made': self.game.move_count,
            'winning_line': self.game.get_winning_line(),
            'last_move': self.game.last_move,
        }
