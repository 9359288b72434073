import pytest

from dropfour.config import GameOptions
from dropfour.debug import debug
from dropfour.game.board import Board
from dropfour.utils import Token

# Fills the classic board without anyone connecting four
DRAW_GAME = "02134650213465" * 3


def place(board: Board, column: int, token: Token) -> int:
    """Drop a specific token regardless of whose turn it is."""
    board.current_token = token
    return board.drop(column)


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def options(tmp_path):
    return GameOptions(save_dir=str(tmp_path / "saves"))


@pytest.fixture(autouse=True)
def restore_debug():
    level = debug.level
    yield
    debug.configure(level=level, enabled=True, components=[])
