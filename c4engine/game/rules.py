"""
rules.py - Game state machine and Gymnasium environment for Connect Four

This module provides:
1. GameEngine, which owns the board and turn state and turns each drop
   into an explicit MoveResult
2. ConnectFourEnv, a gymnasium-compatible wrapper for scripted play
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from c4engine.debug import debug
from c4engine.errors import ConfigurationError, GameOverError
from c4engine.utils import ROWS, COLS, Cell, Slot, Player, GameStatus, MoveKind
from c4engine.game.board import Board


@dataclass(frozen=True)
class MoveResult:
    """
    What happened when a piece was dropped.

    ``row`` is None for an INVALID move. ``winner`` and ``winning_line``
    are only filled in for a WIN.
    """
    kind: MoveKind
    player: Player
    column: int
    row: Optional[int] = None
    winner: Optional[Player] = None
    winning_line: Tuple[Cell, ...] = ()

    @property
    def is_game_over(self) -> bool:
        return self.kind in (MoveKind.WIN, MoveKind.TIE)


class GameEngine:
    """
    Connect Four game state machine.

    The engine owns the board and whose turn it is. Callers drop pieces
    with drop_piece and render from the returned MoveResult; the engine
    never draws anything itself.
    """

    def __init__(self, player1: Player, player2: Player, height: int = ROWS, width: int = COLS):
        """
        Start a new game with an empty board.

        Args:
            player1: Player who moves first
            player2: Player who moves second
            height: Number of rows, at least 4
            width: Number of columns, at least 4

        Raises:
            ConfigurationError: For a board that is too small or a bad player pair
        """
        if player1 is None or player2 is None:
            raise ConfigurationError("Both players are required")
        if player1 is player2:
            raise ConfigurationError("A game needs two distinct players")

        self._board = Board(height, width)
        self.players: Tuple[Player, Player] = (player1, player2)
        self._current = Slot.ONE
        self.status = GameStatus.IN_PROGRESS
        self.winner: Optional[Player] = None
        self.last_move: Optional[Cell] = None
        self.moves_made = 0
        self._winning_line: List[Cell] = []

        debug.debug(f"New {height}x{width} game: {player1} vs {player2}", "engine")

    @property
    def board(self) -> Board:
        return self._board

    @property
    def height(self) -> int:
        return self._board.rows

    @property
    def width(self) -> int:
        return self._board.cols

    @property
    def current_player(self) -> Player:
        return self._player_for(self._current)

    @property
    def finished(self) -> bool:
        return self.status.is_game_over()

    def is_game_over(self) -> bool:
        return self.finished

    def _player_for(self, slot: Slot) -> Optional[Player]:
        if slot == Slot.ONE:
            return self.players[0]
        if slot == Slot.TWO:
            return self.players[1]
        return None

    def get_cell(self, row: int, col: int) -> Optional[Player]:
        """Player occupying (row, col), or None for an empty cell."""
        return self._player_for(self._board.get_cell(row, col))

    def cells(self) -> List[List[Optional[Player]]]:
        """Snapshot of the board as rows of players (None where empty)."""
        return [[self._player_for(Slot(int(value))) for value in row] for row in self._board.grid]

    def find_drop_row(self, column: int) -> Optional[int]:
        """
        Row a piece dropped into ``column`` would land in, or None if full.

        Raises:
            OutOfRangeError: If the column is outside the board
        """
        return self._board.find_drop_row(column)

    def get_valid_moves(self) -> List[int]:
        if self.finished:
            return []
        return self._board.get_valid_moves()

    def get_winning_line(self) -> List[Cell]:
        return list(self._winning_line)

    def drop_piece(self, column: int) -> MoveResult:
        """
        Drop the current player's piece into ``column``.

        Returns:
            A MoveResult of kind INVALID (column full, nothing changed),
            WIN, TIE or CONTINUE

        Raises:
            GameOverError: If the game has already been won or tied
            OutOfRangeError: If the column is outside the board
        """
        if self.finished:
            debug.warning(f"Move in column {column} rejected: game is over ({self.status.name})", "engine")
            raise GameOverError(f"Game is over ({self.status.name.lower()}), no further moves accepted")

        player = self.current_player
        debug.debug(f"{player} drops into column {column}", "engine")

        row = self._board.place(column, self._current)
        column = int(column)
        if row is None:
            debug.info(f"Column {column} is full, move ignored", "engine")
            return MoveResult(MoveKind.INVALID, player, column)

        self.last_move = (row, column)
        self.moves_made += 1

        debug.start_timer("win_check")
        winning_line = self._board.get_winning_line(row, column)
        debug.end_timer("win_check", "engine")

        if winning_line:
            self.status = GameStatus.WON
            self.winner = player
            self._winning_line = winning_line
            debug.info(f"{player} wins after move at {self.last_move}", "engine")
            return MoveResult(MoveKind.WIN, player, column, row,
                              winner=player, winning_line=tuple(winning_line))

        if self._board.is_full():
            self.status = GameStatus.TIED
            debug.info("Board full, game tied", "engine")
            return MoveResult(MoveKind.TIE, player, column, row)

        self._current = self._current.other()
        debug.debug(f"Switching to {self.current_player}", "engine")
        return MoveResult(MoveKind.CONTINUE, player, column, row)

    def render(self) -> str:
        return self._board.render()


def create_game(player1: Player, player2: Player, height: int = ROWS, width: int = COLS) -> GameEngine:
    """Create a new game; player1 moves first."""
    return GameEngine(player1, player2, height, width)


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Both sides are played through step(), alternating like the engine.
    Rewards are given from the first player's point of view.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, rows: int = ROWS, cols: int = COLS):
        """
        Initialize the environment.

        Args:
            render_mode: None, "ascii" or "human"
            rows: Board height
            cols: Board width
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ConfigurationError(f"Unsupported render mode: {render_mode}")

        debug.debug("Initializing ConnectFourEnv", "env")
        self.rows = rows
        self.cols = cols
        self.render_mode = render_mode
        self.players = (Player("red", "Player 1"), Player("yellow", "Player 2"))

        self.action_space = spaces.Discrete(cols)
        self.observation_space = spaces.Box(low=0, high=2, shape=(rows, cols), dtype=np.int8)

        self.engine = GameEngine(*self.players, height=rows, width=cols)

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """Start a fresh game and return the initial observation and info."""
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self.engine = GameEngine(*self.players, height=self.rows, width=self.cols)

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a piece for whoever is to move.

        A full column costs reward_invalid_move and leaves the board as it
        was. Stepping a finished game raises GameOverError.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        result = self.engine.drop_piece(action)

        if result.kind == MoveKind.INVALID:
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, False, info

        reward = self.reward_step
        terminated = result.is_game_over
        if result.kind == MoveKind.WIN:
            reward = self.reward_win if result.winner is self.players[0] else self.reward_lose
            debug.info(f"Game over: {result.winner} wins", "env")
        elif result.kind == MoveKind.TIE:
            reward = self.reward_draw
            debug.info("Game over: Draw", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode == "ascii":
            return self.engine.render()
        if self.render_mode == "human":
            print(self.engine.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.engine.board.get_state()

    def _get_info(self) -> Dict:
        valid_moves = self.engine.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.engine.players.index(self.engine.current_player) + 1,
            'game_result': self.engine.status.name,
            'moves_made': self.engine.moves_made,
            'winning_line': self.engine.get_winning_line(),
            'last_move': self.engine.last_move,
        }
