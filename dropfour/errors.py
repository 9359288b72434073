"""
errors.py - Exception types raised by the dropfour core

None of these are fatal: the shell catches them and asks for another move
or another save string.
"""

from typing import Optional


class DropFourError(Exception):
    """Base class for every dropfour error."""


class BoardError(DropFourError):
    """A board could not be built from a save string."""


class BadFormat(BoardError):
    """The save string is too short or contains a non-digit character."""


class InvalidBoard(BoardError):
    """The save string parses but replays to an impossible board."""


class GamePlayError(DropFourError):
    """A move was rejected. The board is left untouched."""

    def __init__(self, message: str, column: Optional[int] = None):
        super().__init__(message)
        self.column = column


class InvalidColumn(GamePlayError):
    """The column index is outside the board."""


class ColumnFull(GamePlayError):
    """The column has no empty cell left."""


class GameOver(GamePlayError):
    """A move was attempted after the game was decided."""


class PlayerInputError(DropFourError):
    """A player could not produce a column index."""


class EndOfInput(PlayerInputError):
    """A player has no more input to give."""
