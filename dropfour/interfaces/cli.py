"""
cli.py - Command-line interface for dropfour

A plain text shell over the rules engine: play a two-player game at the
terminal, load and show a saved game, check a save string, and manage save
slots.
"""

import argparse
import sys
from typing import List, Optional, TextIO

from dropfour.config import GameOptions
from dropfour.data.saves import SaveStore
from dropfour.debug import DebugLevel, debug
from dropfour.errors import BoardError, EndOfInput
from dropfour.game.board import Board
from dropfour.game.rules import DropFourGame, GameResult
from dropfour.players import HumanPlayer, Player
from dropfour.utils import RulesVariation


class PromptingPlayer(HumanPlayer):
    """HumanPlayer that asks for its move on an output stream first."""

    def __init__(self, name: str, columns: int, stream: Optional[TextIO] = None, out: Optional[TextIO] = None):
        super().__init__(name, stream)
        self._columns = columns
        self._out = out if out is not None else sys.stdout

    def next_move(self) -> int:
        self._out.write(f"{self.name()}, your move (0-{self._columns - 1}): ")
        self._out.flush()
        return super().next_move()


class SimpleCLI:
    """Command-line interface for dropfour."""

    def __init__(self, options: Optional[GameOptions] = None,
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.options = options or GameOptions.from_env()
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog='dropfour', description='dropfour rules engine')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--log-level', choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level')
        parser.add_argument('--rules', choices=[v.name.lower() for v in RulesVariation],
                            help='Rules variation')
        parser.add_argument('--save-dir', help='Directory holding save slots')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a two-player game')
        play_parser.add_argument('--red', default=None, help='Name of the red player')
        play_parser.add_argument('--yellow', default=None, help='Name of the yellow player')
        play_parser.add_argument('--save', metavar='NAME', help='Save the game to this slot when it ends')

        load_parser = subparsers.add_parser('load', help='Show a saved game')
        source = load_parser.add_mutually_exclusive_group(required=True)
        source.add_argument('moves', nargs='?', help='Save string, one column digit per move')
        source.add_argument('--slot', help='Name of a save slot')

        check_parser = subparsers.add_parser('check', help='Validate a save string')
        check_parser.add_argument('moves', help='Save string, one column digit per move')

        saves_parser = subparsers.add_parser('saves', help='List or delete save slots')
        saves_parser.add_argument('--delete', metavar='NAME', help='Delete a save slot')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None):
        """Parse command-line arguments and apply logging and option overrides."""
        self.args = self.build_parser().parse_args(argv)

        if self.args.rules:
            self.options.rules = RulesVariation.from_name(self.args.rules)
        if self.args.save_dir:
            self.options.save_dir = self.args.save_dir
        if self.args.log_level:
            self.options.log_level = self.args.log_level
        if self.args.debug:
            self.options.log_level = "debug"

        self.options.apply_logging()

    def print(self, text: str = ""):
        self.stdout.write(text + "\n")

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the parsed command. Returns the process exit code."""
        if self.args is None:
            self.parse_args(argv)

        debug.debug(f"Running command {self.args.command}", "cli")
        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'load':
            return self.load_game()
        elif self.args.command == 'check':
            return self.check_save()
        elif self.args.command == 'saves':
            return self.manage_saves()

        self.print("Please specify a command. Use --help for options.")
        return 2

    def play_game(self) -> int:
        """Play a game between two people sharing the terminal."""
        game = DropFourGame(self.options)
        red_name = self.args.red or self.options.player_names[0]
        yellow_name = self.args.yellow or self.options.player_names[1]
        players = [
            PromptingPlayer(red_name, game.board.columns, self.stdin, self.stdout),
            PromptingPlayer(yellow_name, game.board.columns, self.stdin, self.stdout),
        ]

        def show_move(game: DropFourGame, player: Player, column: int, row: int):
            self.print()
            self.print(game.render())

        def show_error(player: Player, error: Exception):
            self.print(f"Invalid move: {error}")

        self.print(f"{red_name} (R) against {yellow_name} (Y). End input to stop.")
        self.print(game.render())

        try:
            result = game.run(players, on_move=show_move, on_error=show_error)
        except EndOfInput:
            self.print()
            self.print("Game stopped.")
            result = game.result

        if result == GameResult.DRAW:
            self.print("It's a draw!")
        elif result.is_game_over():
            winner = red_name if result == GameResult.RED_WIN else yellow_name
            self.print(f"{winner} wins!")

        self.print(f"Moves: {game.save()}")
        if self.args.save:
            return self._save(game.board)
        return 0

    def _save(self, board: Board) -> int:
        try:
            SaveStore(self.options.save_dir).save_game(self.args.save, board)
        except ValueError as e:
            self.print(f"Not saved: {e}")
            return 1
        self.print(f"Saved as '{self.args.save}'")
        return 0

    def load_game(self) -> int:
        """Rebuild a game from a save string or a save slot and show it."""
        game = DropFourGame(self.options)
        try:
            if self.args.slot:
                board = SaveStore(self.options.save_dir).load_game(self.args.slot)
                game.load(board.serialize(), board.variation)
            else:
                game.load(self.args.moves)
        except KeyError:
            self.print(f"No save named '{self.args.slot}'")
            return 1
        except BoardError as e:
            self.print(f"{type(e).__name__}: {e}")
            return 1
        except ValueError as e:
            self.print(f"Unreadable save '{self.args.slot}': {e}")
            return 1

        self.print(game.render())
        if game.winner is not None:
            self.print(f"Winner: {game.winner.name}")
        elif game.result == GameResult.DRAW:
            self.print("Draw")
        else:
            self.print(f"To move: {game.current_token.name}")
        return 0

    def check_save(self) -> int:
        """Validate a save string. Exit code 0 if it loads."""
        try:
            board = Board.from_serialized(self.args.moves, self.options.rules)
        except BoardError as e:
            self.print(f"{type(e).__name__}: {e}")
            return 1

        self.print(f"OK: {len(board.history)} moves")
        return 0

    def manage_saves(self) -> int:
        store = SaveStore(self.options.save_dir)
        if self.args.delete:
            try:
                store.delete_save(self.args.delete)
            except KeyError:
                self.print(f"No save named '{self.args.delete}'")
                return 1
            self.print(f"Deleted '{self.args.delete}'")
            return 0

        slots = store.list_saves()
        if not slots:
            self.print("No saved games found")
            return 0

        self.print(f"Found {len(slots)} saved games:")
        for slot in slots:
            self.print(f"{slot['name']:<16} {slot['rules']:<8} {len(slot['moves']):3d} moves  {slot['saved_at']}")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    try:
        options = GameOptions.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}")
        return 2

    cli = SimpleCLI(options)
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
