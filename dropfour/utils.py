"""
utils.py - Constants, enumerations and helpers shared by the dropfour package

Tokens, rule variants and line directions live here, along with the ASCII
renderer the CLI uses to show a board.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Set, Tuple

import numpy as np

# Save strings shorter than this are rejected as malformed
MIN_SAVE_LENGTH = 3
# One decimal digit per move
MAX_SERIALIZABLE_COLUMNS = 10


class Token(Enum):
    """What occupies a cell: nothing, or one of the two players' tokens."""
    EMPTY = 0
    RED = 1      # plays first
    YELLOW = 2

    def other(self) -> 'Token':
        """The opponent's token. EMPTY has no opponent and maps to itself."""
        if self == Token.RED:
            return Token.YELLOW
        elif self == Token.YELLOW:
            return Token.RED
        return Token.EMPTY

    def is_valid(self) -> bool:
        return self != Token.EMPTY

    @classmethod
    def from_char(cls, char: str) -> 'Token':
        if char == 'R':
            return cls.RED
        elif char == 'Y':
            return cls.YELLOW
        return cls.EMPTY

    def __str__(self):
        if self == Token.RED:
            return "R"
        elif self == Token.YELLOW:
            return "Y"
        return " "


@dataclass(frozen=True)
class Rules:
    """Board geometry and the run length needed to win."""
    columns: int
    rows: int
    connect_n: int = 4

    @property
    def cells(self) -> int:
        return self.columns * self.rows


class RulesVariation(Enum):
    """Known rule variants. New board sizes are added here as data."""
    CLASSIC = Rules(columns=7, rows=6, connect_n=4)

    @property
    def rules(self) -> Rules:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> 'RulesVariation':
        try:
            return cls[name.strip().upper()]
        except KeyError:
            known = ", ".join(v.name.lower() for v in cls)
            raise ValueError(f"Unknown rules variation '{name}' (known: {known})") from None


class Direction(Enum):
    """Lines checked through the last played cell."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # top-left to bottom-right
    DIAGONAL_UP = auto()    # bottom-left to top-right


Cell = Tuple[int, int]  # (column, row), row 0 at the bottom


def render_board_ascii(grid: np.ndarray, highlight: Optional[Iterable[Cell]] = None) -> str:
    """
    Render a column-major grid as ASCII art, top row first.

    Args:
        grid: Array of shape (columns, rows) holding Token values
        highlight: Cells drawn as '*' instead of their token letter

    Returns:
        ASCII representation of the board
    """
    columns, rows = grid.shape
    marked: Set[Cell] = set(highlight or ())

    lines = ["+" + "-" * (columns * 2 - 1) + "+"]
    for row in range(rows - 1, -1, -1):
        cells = []
        for col in range(columns):
            if (col, row) in marked:
                cells.append("*")
            else:
                cells.append(str(Token(int(grid[col, row]))))
        lines.append("|" + " ".join(cells) + "|")
    lines.append("+" + "-" * (columns * 2 - 1) + "+")
    lines.append(" " + " ".join(str(col % 10) for col in range(columns)) + " ")

    return "\n".join(lines)
