"""
board.py - Board representation and core rules for dropfour

This module implements the Board class: gravity drops into a column-major
grid, turn switching, detection of a winning run through the last played
cell, and the digit-per-move save format.
"""

from typing import Iterator, List, Optional, Tuple

import numpy as np

from dropfour.debug import debug
from dropfour.errors import BadFormat, ColumnFull, GamePlayError, InvalidBoard, InvalidColumn
from dropfour.utils import (MAX_SERIALIZABLE_COLUMNS, MIN_SAVE_LENGTH, Cell, Direction,
                            RulesVariation, Token, render_board_ascii)

DIGITS = "0123456789"


class Board:
    """
    A dropfour board.

    The grid is indexed as grid[column, row] with row 0 at the bottom, so a
    drop fills a column upwards. Every successful drop is appended to
    `history`; the last entry is the anchor for win detection.
    """

    def __init__(self, rules: RulesVariation = RulesVariation.CLASSIC):
        """Create an empty board for the given rules variation."""
        self.variation = rules
        self.rules = rules.rules
        self.columns = self.rules.columns
        self.rows = self.rules.rows
        self.grid = np.full((self.columns, self.rows), Token.EMPTY.value, dtype=np.int8)
        self.history: List[int] = []
        self.current_token = Token.RED
        debug.debug(f"New {rules.name.lower()} board ({self.columns}x{self.rows})", "board")

    @classmethod
    def from_serialized(cls, text: str, rules: RulesVariation = RulesVariation.CLASSIC) -> 'Board':
        """
        Rebuild a board by replaying a save string.

        Turns alternate during the replay, so the returned board has the
        same tokens as the game that produced the string and its
        current_token is the player to move next.

        Args:
            text: One decimal digit per move, each a zero-based column
            rules: Rules variation to replay on

        Returns:
            The reconstructed board

        Raises:
            BadFormat: text is shorter than three moves or has a non-digit
            InvalidBoard: a move is off the board or hits a full column
        """
        if len(text) < MIN_SAVE_LENGTH:
            raise BadFormat(f"save string needs at least {MIN_SAVE_LENGTH} moves, got {len(text)}")

        for position, char in enumerate(text):
            if char not in DIGITS:
                raise BadFormat(f"unexpected character {char!r} at position {position}")

        board = cls(rules)
        for position, char in enumerate(text):
            column = int(char)
            if column >= board.columns:
                raise InvalidBoard(f"move {position} plays column {column} on a {board.columns}-column board")
            try:
                board.drop(column)
            except GamePlayError as e:
                raise InvalidBoard(f"move {position} cannot be played: {e}") from e
            board.switch_turn()

        debug.debug(f"Loaded board from {len(text)} moves", "board")
        return board

    def serialize(self) -> str:
        """Return the move history as a save string."""
        if any(column >= MAX_SERIALIZABLE_COLUMNS for column in self.history):
            raise ValueError("history contains columns that do not fit in one digit")
        return "".join(str(column) for column in self.history)

    def _check_column(self, column: int):
        if not 0 <= column < self.columns:
            raise InvalidColumn(f"column {column} is outside 0-{self.columns - 1}", column)

    def drop(self, column: int) -> int:
        """
        Drop the current token into a column.

        Does not switch turns; call switch_turn() before the opponent plays.

        Args:
            column: Zero-based column index

        Returns:
            The row the token landed in

        Raises:
            InvalidColumn: column is not in [0, columns)
            ColumnFull: the column has no empty cell
        """
        self._check_column(column)

        for row in range(self.rows):
            if self.grid[column, row] == Token.EMPTY.value:
                self.grid[column, row] = self.current_token.value
                self.history.append(column)
                debug.trace(f"{self.current_token.name} placed at ({column}, {row})", "board")
                return row

        raise ColumnFull(f"column {column} is full", column)

    def switch_turn(self):
        """Hand the move to the other player."""
        self.current_token = self.current_token.other()
        debug.trace(f"Turn passes to {self.current_token.name}", "board")

    def find_row_for_column(self, column: int) -> Optional[int]:
        """Topmost occupied row of a column, or None if the column is empty."""
        self._check_column(column)
        for row in range(self.rows - 1, -1, -1):
            if self.grid[column, row] != Token.EMPTY.value:
                return row
        return None

    @property
    def last_move(self) -> Optional[Cell]:
        """Cell of the most recent drop."""
        if not self.history:
            return None
        column = self.history[-1]
        return column, self.find_row_for_column(column)

    def cell(self, column: int, row: int) -> Token:
        return Token(int(self.grid[column, row]))

    def _lines_through(self, column: int, row: int) -> Iterator[Tuple[Direction, List[Cell]]]:
        """Yield every full line of the board that passes through a cell."""
        yield Direction.HORIZONTAL, [(c, row) for c in range(self.columns)]
        yield Direction.VERTICAL, [(column, r) for r in range(self.rows)]

        # \ runs from the top-left end down to the bottom-right end
        shift = min(column, self.rows - row - 1)
        top_left = (column - shift, row + shift)
        shift = min(self.columns - column - 1, row)
        bottom_right = (column + shift, row - shift)
        yield Direction.DIAGONAL_DOWN, [(top_left[0] + i, top_left[1] - i)
                                        for i in range(bottom_right[0] - top_left[0] + 1)]

        # / runs from the bottom-left end up to the top-right end
        shift = min(self.columns - column - 1, self.rows - row - 1)
        top_right = (column + shift, row + shift)
        shift = min(column, row)
        bottom_left = (column - shift, row - shift)
        yield Direction.DIAGONAL_UP, [(bottom_left[0] + i, bottom_left[1] + i)
                                      for i in range(top_right[0] - bottom_left[0] + 1)]

    def _find_run(self, line: List[Cell], value: int) -> List[Cell]:
        """First run of at least connect_n cells holding `value` along a line."""
        run: List[Cell] = []
        for cell in line:
            if self.grid[cell] == value:
                run.append(cell)
            elif len(run) >= self.rules.connect_n:
                break
            else:
                run = []
        return run if len(run) >= self.rules.connect_n else []

    def winning_cells(self) -> List[Cell]:
        """
        Cells of the winning run created by the last drop.

        Only lines through the last played cell are scanned, since a win can
        only appear on the move that completes it. Each line is scanned end
        to end and the whole run is returned, so longer runs are reported in
        full.

        Returns:
            (column, row) cells of the run, or an empty list if there is none
        """
        if not self.history:
            return []

        column, row = self.last_move
        value = int(self.grid[column, row])

        debug.start_timer("win_check")
        winner: List[Cell] = []
        for direction, line in self._lines_through(column, row):
            winner = self._find_run(line, value)
            if winner:
                debug.debug(f"{Token(value).name} wins {direction.name.lower()} through ({column}, {row})",
                            "board")
                break
        debug.end_timer("win_check", "board")
        return winner

    def check_win(self) -> bool:
        """Whether the last drop completed a winning run."""
        return bool(self.winning_cells())

    def is_valid_move(self, column: int) -> bool:
        """Whether drop(column) would succeed."""
        return 0 <= column < self.columns and self.grid[column, self.rows - 1] == Token.EMPTY.value

    def get_valid_moves(self) -> List[int]:
        return [column for column in range(self.columns) if self.is_valid_move(column)]

    def is_full(self) -> bool:
        return bool(np.all(self.grid != Token.EMPTY.value))

    def copy(self) -> 'Board':
        """Create an independent copy of the board."""
        new_board = Board(self.variation)
        new_board.grid = self.grid.copy()
        new_board.history = self.history.copy()
        new_board.current_token = self.current_token
        return new_board

    def get_state(self) -> np.ndarray:
        """Copy of the grid, shape (columns, rows)."""
        return self.grid.copy()

    def render(self, highlight: Optional[List[Cell]] = None) -> str:
        return render_board_ascii(self.grid, highlight)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return (self.variation == other.variation
                and np.array_equal(self.grid, other.grid)
                and self.history == other.history
                and self.current_token == other.current_token)

    def __repr__(self):
        return f"Board({self.variation.name}, history={self.history!r}, turn={self.current_token.name})"

    def __str__(self):
        return self.render()
