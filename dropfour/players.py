"""
players.py - Sources of moves for a dropfour game

The core never reads input itself. A Player hands it column indices; each
input source gets its own Player class.
"""

import sys
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional, TextIO

from dropfour.debug import debug
from dropfour.errors import EndOfInput, PlayerInputError


class Player(ABC):
    """Something that can name itself and choose a column."""

    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def next_move(self) -> int:
        """
        Return the next column to play.

        Raises:
            PlayerInputError: the input could not be read or parsed
        """


class HumanPlayer(Player):
    """Reads one whole number per line from a text stream."""

    def __init__(self, name: str, stream: Optional[TextIO] = None):
        self._name = name
        self._stream = stream if stream is not None else sys.stdin

    def name(self) -> str:
        return self._name

    def next_move(self) -> int:
        line = self._stream.readline()
        if not line:
            raise EndOfInput("end of input")

        text = line.strip()
        try:
            column = int(text)
        except ValueError:
            raise PlayerInputError(f"not a column number: {text!r}") from None

        if column < 0:
            raise PlayerInputError(f"column must not be negative: {column}")

        debug.trace(f"{self._name} entered {column}", "player")
        return column


class ScriptedPlayer(Player):
    """Plays a fixed sequence of columns."""

    def __init__(self, name: str, moves: Iterable[int]):
        self._name = name
        self._moves: Iterator[int] = iter(moves)

    def name(self) -> str:
        return self._name

    def next_move(self) -> int:
        try:
            return next(self._moves)
        except StopIteration:
            raise EndOfInput(f"{self._name} has no moves left") from None
