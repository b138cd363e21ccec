"""
connectfour - Connect Four rule engine

This package provides the rules of Connect Four on any board of at least
4x4: board representation, move legality, turn order and win/draw
detection, together with a console front end and a Gymnasium environment
built on the same engine.
"""

from connectfour.errors import (ConnectFourError, ConfigurationError,
                                InvalidMoveError, MoveRejection)
from connectfour.utils import Player, GameStatus
from connectfour.game.rules import ConnectFourGame

__version__ = '0.1.0'

__all__ = ['ConnectFourGame', 'Player', 'GameStatus', 'ConnectFourError',
           'ConfigurationError', 'InvalidMoveError', 'MoveRejection']
