"""
cli.py - Console interface for playing Connect Four

This module provides a text controller that reads columns from an input
stream, applies them to a ConnectFourGame and writes the board and game
messages to an output stream, plus the argparse entry point behind the
`connectfour` command. Columns are entered 1-based.
"""

import argparse
import sys
from typing import Iterator, List, Optional, TextIO

from connectfour.debug import debug, DebugLevel
from connectfour.errors import ConfigurationError, InvalidMoveError
from connectfour.game.rules import ConnectFourGame
from connectfour.utils import DEFAULT_ROWS, DEFAULT_COLS

QUIT_COMMAND = "q"
PLAY_AGAIN_ANSWER = "yes"


class ConsoleController:
    """Console controller for two human players sharing one terminal."""

    def __init__(self, input_stream: Optional[TextIO] = None,
                 output_stream: Optional[TextIO] = None):
        """
        Args:
            input_stream: Source of whitespace-separated commands (stdin by default)
            output_stream: Where board and messages are written (stdout by default)
        """
        self._input = input_stream if input_stream is not None else sys.stdin
        self._output = output_stream if output_stream is not None else sys.stdout
        self._tokens = self._read_tokens()

    def _read_tokens(self) -> Iterator[str]:
        for line in self._input:
            yield from line.split()

    def _next_token(self) -> Optional[str]:
        """Next command, or None at end of input."""
        return next(self._tokens, None)

    def _write(self, text: str = "", end: str = "\n") -> None:
        self._output.write(text + end)
        self._output.flush()

    def play_game(self, game: ConnectFourGame) -> None:
        """
        Run game sessions on game until the players quit or decline a rematch.

        Raises:
            ValueError: if game is None
        """
        if game is None:
            raise ValueError("Game cannot be None")

        debug.info(f"Starting console session on {game.rows}x{game.columns} board", "cli")
        while True:
            if not self._play_round(game):
                return

            self.show_game_over(game)
            self._write("Play again? (yes/no): ", end="")
            answer = self._next_token()
            if answer is None or answer.lower() != PLAY_AGAIN_ANSWER:
                self._write("Thanks for playing!")
                return

            debug.debug("Players asked for a rematch", "cli")
            game.reset_board()

    def _play_round(self, game: ConnectFourGame) -> bool:
        """
        Prompt for moves until the game ends.

        Returns:
            True if the game reached a result, False if the players quit
            or the input ran out
        """
        while not game.is_game_over():
            self.show_board(game)
            self._write(f"Current turn: {game.get_turn().display_name}")
            self._write(f"Enter a column (1-{game.columns}) or '{QUIT_COMMAND}' to quit: ", end="")

            token = self._next_token()
            if token is None:
                self._write()
                self._write("No more input, ending game.")
                return False

            if token.lower() == QUIT_COMMAND:
                self._write("Game quit! Final state:")
                self.show_board(game)
                return False

            try:
                column = int(token) - 1
            except ValueError:
                self._write(f"Invalid input '{token}': enter a column number or '{QUIT_COMMAND}'.")
                continue

            try:
                game.make_move(column)
            except InvalidMoveError as e:
                self._write(f"Invalid move: {e}")

        return True

    def show_board(self, game: ConnectFourGame) -> None:
        self._write(game.to_display_string(), end="")

    def show_game_over(self, game: ConnectFourGame) -> None:
        self.show_board(game)
        winner = game.get_winner()
        if winner is not None:
            self._write(f"{winner.display_name} wins!")
        else:
            self._write("Game over! It's a tie!")


def configure_debug(args):
    """Configure logging from --debug, --debug_level and --log_file."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    elif args.debug_level:
        debug.configure(level=getattr(DebugLevel, args.debug_level.upper()))

    if args.log_file:
        debug.configure(log_file=args.log_file)


def handle_play(args) -> int:
    """Play games on the console until the players stop."""
    try:
        game = ConnectFourGame.create(args.rows, args.columns)
    except ConfigurationError as e:
        debug.error(f"Could not create game: {e}", "cli")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("Starting a new Connect Four game!")
    ConsoleController().play_game(game)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Connect Four for two players on one console',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  connectfour play                       # standard 6x7 board
  connectfour play --rows 4 --columns 4  # smallest board
  connectfour play --debug_level debug --log_file game.log
"""
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play',
        help='Play an interactive game',
        description='Two players take turns entering 1-based column numbers')
    play_parser.add_argument('--rows',
        type=int,
        default=DEFAULT_ROWS,
        help=f'Number of rows, at least 4 (default: {DEFAULT_ROWS})')
    play_parser.add_argument('--columns',
        type=int,
        default=DEFAULT_COLS,
        help=f'Number of columns, at least 4 (default: {DEFAULT_COLS})')
    play_parser.add_argument('--debug',
        action='store_true',
        help='Enable debug mode (equivalent to --debug_level debug)')
    play_parser.add_argument('--debug_level',
        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
        help='Set debug level: none (silent), error, warning, info, debug, trace (most verbose)')
    play_parser.add_argument('--log_file',
        type=str,
        help='Also write log messages to this file')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == 'play':
        configure_debug(args)
        return handle_play(args)

    parser.print_help()
    return 0
