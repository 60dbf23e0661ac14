import pytest

from game.board import Board, Player
from game.win_detector import WinDetector, wins


ROWS = [[(r, c) for c in range(3)] for r in range(3)]
COLS = [[(r, c) for r in range(3)] for c in range(3)]
DIAGONALS = [[(0, 0), (1, 1), (2, 2)], [(0, 2), (1, 1), (2, 0)]]
ALL_LINES = ROWS + COLS + DIAGONALS


def board_with(cells, mark):
    board = Board()
    for row, col in cells:
        board.set(row, col, mark)
    return board


@pytest.mark.parametrize('mark', [Player.X, Player.O])
@pytest.mark.parametrize('line', ALL_LINES)
def test_every_line_wins_from_every_cell_on_it(line, mark):
    board = board_with(line, mark)
    for row, col in line:
        assert wins(board, row, col, mark)
        assert not wins(board, row, col, mark.opposite())


@pytest.mark.parametrize('line', ALL_LINES)
def test_cells_off_the_line_do_not_see_it(line):
    off_line = [(r, c) for r in range(3) for c in range(3) if (r, c) not in line]
    for row, col in off_line:
        board = board_with(line + [(row, col)], Player.X)
        assert not wins(board, row, col, Player.X)


def test_cell_must_hold_the_mark():
    board = board_with([(0, 0), (0, 1)], Player.X)
    # (0, 2) is empty, so nothing through it can win yet
    assert not wins(board, 0, 2, Player.X)


def test_two_in_a_row_is_not_a_win():
    board = board_with([(1, 0), (1, 1)], Player.O)
    board.set(1, 2, Player.X)
    assert not wins(board, 1, 1, Player.O)
    assert not wins(board, 1, 2, Player.X)


def test_off_diagonal_cell_does_not_check_diagonals():
    # X owns the main diagonal, but (0, 1) is not on it
    board = board_with([(0, 0), (1, 1), (2, 2), (0, 1)], Player.X)
    assert not wins(board, 0, 1, Player.X)
    assert wins(board, 0, 0, Player.X)


def test_centre_checks_both_diagonals():
    board = board_with([(0, 2), (1, 1), (2, 0)], Player.O)
    board.set(0, 0, Player.X)
    assert WinDetector().winning_line(board, 1, 1, Player.O) == [(0, 2), (1, 1), (2, 0)]


def test_row_is_reported_before_column():
    board = board_with([(0, 0), (0, 1), (0, 2), (1, 0), (2, 0)], Player.X)
    assert WinDetector().winning_line(board, 0, 0, Player.X) == [(0, 0), (0, 1), (0, 2)]
