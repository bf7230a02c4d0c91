"""
c4engine.game - Core game mechanics for Connect Four

This package contains the board representation, the game state machine
and the Gymnasium wrapper around it.
"""

from c4engine.game.board import Board
from c4engine.game.rules import GameEngine, MoveResult, ConnectFourEnv, create_game

__all__ = ['Board', 'GameEngine', 'MoveResult', 'ConnectFourEnv', 'create_game']
