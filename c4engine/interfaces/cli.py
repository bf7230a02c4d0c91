"""
cli.py - Command-line harness for the Connect Four engine

This module provides a CLI for playing two-player games at the terminal,
analysing board positions and timing the engine.
"""

import argparse
import random
import sys
from typing import List, Optional

from c4engine.debug import debug, DebugLevel
from c4engine.errors import Connect4Error
from c4engine.utils import ROWS, COLS, Slot, Player, MoveKind
from c4engine.game.board import Board
from c4engine.game.rules import GameEngine, create_game

QUIT = -1
RESTART = -2


class SimpleCLI:
    """Simple command-line interface for the Connect Four engine."""

    def __init__(self):
        self.game: Optional[GameEngine] = None
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four CLI')

        # Logging flags shared by every command
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument('--debug', action='store_true', help='Enable debug output')
        common.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level')
        common.add_argument('--log-file', help='Also write log output to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', parents=[common],
                                            help='Play a two-player game at the terminal')
        play_parser.add_argument('--p1-color', default='red', help='Colour of the first player')
        play_parser.add_argument('--p2-color', default='yellow', help='Colour of the second player')
        play_parser.add_argument('--rows', type=int, default=ROWS, help='Board height')
        play_parser.add_argument('--cols', type=int, default=COLS, help='Board width')

        check_parser = subparsers.add_parser('check', parents=[common],
                                             help='Analyse a board position')
        check_parser.add_argument('--position', required=True,
                                  help='Comma-separated cell values (0 empty, 1, 2), top row first')
        check_parser.add_argument('--rows', type=int, default=ROWS, help='Board height')
        check_parser.add_argument('--cols', type=int, default=COLS, help='Board width')

        benchmark_parser = subparsers.add_parser('benchmark', parents=[common],
                                                 help='Time random games')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of games to play')
        benchmark_parser.add_argument('--seed', type=int, help='Random seed')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and apply the logging settings."""
        self.args = self.build_parser().parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        elif getattr(self.args, 'debug_level', None):
            debug.set_from_string(self.args.debug_level)

        if getattr(self.args, 'log_file', None):
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the parsed command and return an exit code."""
        if not self.args:
            self.parse_args(argv)

        try:
            if self.args.command == 'play':
                self.play_game()
            elif self.args.command == 'check':
                return self.check_position()
            elif self.args.command == 'benchmark':
                self.benchmark()
            else:
                print("Please specify a command. Use --help for options.")
                return 1
        except Connect4Error as e:
            debug.error(str(e), "cli")
            print(f"Error: {e}")
            return 1
        return 0

    def new_game(self) -> GameEngine:
        p1 = Player(self.args.p1_color, "Player 1")
        p2 = Player(self.args.p2_color, "Player 2")
        self.game = create_game(p1, p2, self.args.rows, self.args.cols)
        return self.game

    def play_game(self) -> None:
        """Play a game between two people sharing the terminal."""
        self.new_game()
        print("Starting a new Connect Four game!")
        print(f"Enter a column number (0-{self.game.width - 1}) to drop a piece.")
        print("Other commands: 'q' to quit, 'r' to restart.")
        print(self.game.render())

        while not self.game.is_game_over():
            move = self.get_human_move()

            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return
            if move == RESTART:
                self.new_game()
                print("Game restarted.")
                print(self.game.render())
                continue

            result = self.game.drop_piece(move)
            if result.kind == MoveKind.INVALID:
                print(f"Column {move} is full, pick another.")
                continue

            print(self.game.render())
            if result.kind == MoveKind.WIN:
                print(f"The {result.winner.color} player won!")
            elif result.kind == MoveKind.TIE:
                print("Tie!")

    def get_human_move(self) -> Optional[int]:
        """
        Read one move from standard input.

        Returns:
            Column index, QUIT or RESTART, or None for unusable input
        """
        player = self.game.current_player
        last_col = self.game.width - 1
        try:
            user_input = input(f"{player.label} ({player.color}), column 0-{last_col} or q/r: ")
        except EOFError:
            return QUIT

        user_input = user_input.strip().lower()
        if user_input == 'q':
            return QUIT
        if user_input == 'r':
            return RESTART

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or command.")
            return None

        # Range is checked here so a typo does not end the session
        if not 0 <= move <= last_col:
            print(f"Column must be between 0 and {last_col}.")
            return None
        return move

    def check_position(self) -> int:
        """Analyse a position given on the command line."""
        try:
            board = Board.from_position(self.args.position, self.args.rows, self.args.cols)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render())

        if board.has_floating_pieces():
            print("Warning: position has pieces above empty cells")

        has_win = False
        for slot in (Slot.ONE, Slot.TWO):
            line = board.find_winning_line(slot)
            if line:
                has_win = True
                print(f"Win for player {slot.value} ({slot}) at {line}")
            # The per-piece check must agree with the full scan
            cells = [(r, c) for r in range(board.rows) for c in range(board.cols)
                     if board.get_cell(r, c) == slot]
            if any(board.check_win_at(r, c) for r, c in cells) != bool(line):
                debug.error(f"Win checks disagree for player {slot.value}", "cli")

        if not has_win:
            print("No win detected for any player")

        if board.is_full():
            print("Board is full")
        else:
            print(f"Empty spaces: {board.rows * board.cols - board.count_pieces()}")
        print(f"Valid moves: {board.get_valid_moves()}")
        return 0

    def benchmark(self) -> None:
        """Time full random games."""
        iterations = self.args.iterations
        rng = random.Random(self.args.seed)
        print(f"Running benchmark with {iterations} games...")

        outcomes = {MoveKind.WIN: 0, MoveKind.TIE: 0}
        total_moves = 0

        debug.start_timer("benchmark")
        for _ in range(iterations):
            game = create_game(Player("red"), Player("yellow"))
            result = None
            while not game.is_game_over():
                result = game.drop_piece(rng.choice(game.get_valid_moves()))
            outcomes[result.kind] += 1
            total_moves += game.moves_made
        elapsed = debug.end_timer("benchmark", "cli")

        print(f"Played {iterations} games, {total_moves} moves: "
              f"{outcomes[MoveKind.WIN]} wins, {outcomes[MoveKind.TIE]} ties")
        if iterations and total_moves:
            print(f"{elapsed:.6f} seconds total, "
                  f"{elapsed / iterations * 1000:.6f} ms per game, "
                  f"{elapsed / total_moves * 1000:.6f} ms per move")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
