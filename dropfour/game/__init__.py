"""
dropfour.game - Core game mechanics for dropfour

This package contains the board model and the game flow built on it.
"""

from dropfour.game.board import Board
from dropfour.game.rules import DropFourEnv, DropFourGame, GameResult

__all__ = ['Board', 'DropFourGame', 'DropFourEnv', 'GameResult']
