from conftest import place
from dropfour.game.board import Board
from dropfour.utils import Token


def test_no_win_on_fresh_board(board):
    assert not board.check_win()
    assert board.winning_cells() == []


def test_no_win_before_four_moves(board):
    for _ in range(3):
        board.drop(3)
        assert not board.check_win()


def test_vertical_win_with_same_token(board):
    for _ in range(4):
        board.drop(3)

    assert board.check_win()
    assert board.winning_cells() == [(3, 0), (3, 1), (3, 2), (3, 3)]


def test_horizontal_win(board):
    for column in (0, 1, 2):
        place(board, column, Token.YELLOW)
    place(board, 3, Token.YELLOW)

    assert board.winning_cells() == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_horizontal_win_completed_in_the_middle(board):
    for column in (0, 1, 3, 4):
        place(board, column, Token.RED)
    assert not board.check_win()

    place(board, 2, Token.RED)
    assert board.winning_cells() == [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]


def test_bottom_left_to_top_right_diagonal(board):
    place(board, 0, Token.RED)
    place(board, 1, Token.YELLOW)
    place(board, 1, Token.RED)
    place(board, 2, Token.YELLOW)
    place(board, 2, Token.YELLOW)
    place(board, 2, Token.RED)
    for _ in range(3):
        place(board, 3, Token.YELLOW)
    assert not board.check_win()

    place(board, 3, Token.RED)
    assert board.last_move == (3, 3)
    assert board.winning_cells() == [(0, 0), (1, 1), (2, 2), (3, 3)]


def test_top_left_to_bottom_right_diagonal(board):
    place(board, 3, Token.RED)
    place(board, 2, Token.YELLOW)
    place(board, 2, Token.RED)
    place(board, 1, Token.YELLOW)
    place(board, 1, Token.YELLOW)
    place(board, 1, Token.RED)
    for _ in range(3):
        place(board, 0, Token.YELLOW)
    assert not board.check_win()

    place(board, 0, Token.RED)
    assert board.winning_cells() == [(0, 3), (1, 2), (2, 1), (3, 0)]


def test_broken_row_is_not_a_win(board):
    for column in (0, 1, 3, 4):
        place(board, column, Token.RED)
    place(board, 2, Token.YELLOW)
    assert not board.check_win()


def test_only_the_last_token_is_checked(board):
    for column in range(4):
        place(board, column, Token.YELLOW)
    place(board, 0, Token.RED)

    # the yellow row is ignored because the last drop was red
    assert not board.check_win()


def test_three_in_a_row_is_not_a_win(board):
    for column in range(3):
        place(board, column, Token.RED)
    assert not board.check_win()


def test_win_in_the_top_right_corner(board):
    for column in range(3, 7):
        for row in range(5):
            place(board, column, Token.YELLOW if (column + row) % 2 else Token.RED)
    for column in range(3, 6):
        place(board, column, Token.RED)
    assert not board.check_win()

    place(board, 6, Token.RED)
    assert board.last_move == (6, 5)
    assert board.winning_cells() == [(3, 5), (4, 5), (5, 5), (6, 5)]


def test_rows_win_once_four_columns_are_filled():
    # filling column by column gives every row a single colour
    board = Board()
    for column in range(board.columns):
        for row in range(board.rows):
            board.drop(column)
            board.switch_turn()
            expected = [(c, row) for c in range(column + 1)] if column >= 3 else []
            assert board.winning_cells() == expected


def test_diagonal_ending_in_the_bottom_right_corner(board):
    for _ in range(3):
        place(board, 3, Token.YELLOW)
    place(board, 3, Token.RED)
    for _ in range(2):
        place(board, 4, Token.YELLOW)
    place(board, 4, Token.RED)
    place(board, 5, Token.YELLOW)
    place(board, 5, Token.RED)
    assert not board.check_win()

    place(board, 6, Token.RED)
    assert board.last_move == (6, 0)
    assert board.winning_cells() == [(3, 3), (4, 2), (5, 1), (6, 0)]
