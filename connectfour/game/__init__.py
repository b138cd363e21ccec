"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board representation, the rule engine and the
Gymnasium environment wrapping it.
"""

from connectfour.game.board import Board
from connectfour.game.rules import ConnectFourGame, ConnectFourEnv

__all__ = ['Board', 'ConnectFourGame', 'ConnectFourEnv']
