from itertools import combinations

import pytest

from conftest import DRAW_SEQUENCE
from game.board import Board, Cell, Player
from game.errors import NotYourTurn, PositionOccupied, PositionTooHigh, PositionTooLow
from game.game_session import GameSession, MoveOutcome, OutcomeKind, SessionState
from game.move_validator import MoveValidator


ALL_LINES = (
    [[(r, c) for c in range(1, 4)] for r in range(1, 4)]
    + [[(r, c) for r in range(1, 4)] for c in range(1, 4)]
    + [[(1, 1), (2, 2), (3, 3)], [(1, 3), (2, 2), (3, 1)]]
)


def play_all(session, moves):
    outcomes = []
    for i, (row, col) in enumerate(moves):
        mover = session.player_x if i % 2 == 0 else session.player_o
        outcomes.append(session.apply_move(mover, row, col))
    return outcomes


def winning_sequence(line, winner):
    """Legal alternating moves (X first) where `winner` completes `line` last."""
    off_line = [(r, c) for r in range(1, 4) for c in range(1, 4) if (r, c) not in line]
    if winner == Player.X:
        filler = off_line[:2]
        return [line[0], filler[0], line[1], filler[1], line[2]]

    # X needs three harmless cells that do not form a line of their own
    for filler in combinations(off_line, 3):
        if sorted(filler) not in [sorted(l) for l in ALL_LINES]:
            break
    return [filler[0], line[0], filler[1], line[1], filler[2], line[2]]


@pytest.fixture()
def session():
    return GameSession.new('alice', 'bob')


def test_new_session(session):
    assert session.turn == Player.X
    assert session.current_player_id == 'alice'
    assert session.turns_played == 0
    assert not session.completed
    assert session.state == SessionState.IN_PROGRESS
    assert session.board == Board()
    assert session.opponent_of('alice') == 'bob'
    assert session.opponent_of('carol') is None


def test_turns_played_grows_by_one_per_move(session):
    for i, (row, col) in enumerate(DRAW_SEQUENCE[:8]):
        mover = session.current_player_id
        before = session.turns_played
        outcome = session.apply_move(mover, row, col)
        assert outcome == MoveOutcome.continued()
        assert session.turns_played == before + 1 == i + 1
        assert session.board.marks_placed() == session.turns_played


@pytest.mark.parametrize('winner', [Player.X, Player.O])
@pytest.mark.parametrize('line', ALL_LINES)
def test_completing_a_line_wins(session, line, winner):
    moves = winning_sequence(line, winner)
    outcomes = play_all(session, moves)

    assert all(o.kind == OutcomeKind.CONTINUED for o in outcomes[:-1])
    assert outcomes[-1] == MoveOutcome.won(winner)
    assert session.completed
    assert session.state == SessionState.WON
    assert session.winner == winner


def test_draw_ties_exactly_on_ninth_move(session):
    outcomes = play_all(session, DRAW_SEQUENCE)
    assert [o.kind for o in outcomes[:8]] == [OutcomeKind.CONTINUED] * 8
    assert outcomes[8] == MoveOutcome.tied()
    assert session.turns_played == 9
    assert not session.completed
    assert session.state == SessionState.TIED


def test_out_of_turn_move_is_rejected(session):
    with pytest.raises(NotYourTurn):
        session.apply_move('bob', 1, 1)
    assert session.board == Board()
    assert session.turns_played == 0

    session.apply_move('alice', 1, 1)
    with pytest.raises(NotYourTurn):
        session.apply_move('alice', 2, 2)
    assert session.board.get(1, 1) == Cell.EMPTY


def test_turn_is_checked_before_position(session):
    with pytest.raises(NotYourTurn):
        session.apply_move('bob', 4, 4)


@pytest.mark.parametrize('row,col,error', [
    (4, 1, PositionTooHigh),
    (1, 4, PositionTooHigh),
    (0, 1, PositionTooLow),
    (1, 0, PositionTooLow),
    (0, 4, PositionTooHigh),
])
def test_position_out_of_range(session, row, col, error):
    with pytest.raises(error) as exc:
        session.apply_move('alice', row, col)
    assert (exc.value.row, exc.value.col) == (row, col)
    assert session.board == Board()
    assert session.turns_played == 0
    assert session.turn == Player.X


@pytest.mark.parametrize('row,col', [(1, 1), (1, 3), (3, 1), (3, 3)])
def test_boundary_positions_are_accepted(session, row, col):
    assert session.apply_move('alice', row, col) == MoveOutcome.continued()
    assert session.board.get(row - 1, col - 1) == Cell.X


def test_error_messages_name_the_position(session):
    with pytest.raises(PositionTooHigh, match='4,1 is too high'):
        session.apply_move('alice', 4, 1)
    with pytest.raises(PositionTooLow, match='0,2 is too low'):
        session.apply_move('alice', 0, 2)


def test_occupied_cell_is_rejected(session):
    session.apply_move('alice', 2, 2)
    with pytest.raises(PositionOccupied, match='2,2 is already played'):
        session.apply_move('bob', 2, 2)
    assert session.turn == Player.O
    assert session.turns_played == 1


def test_finished_game_resolves_without_a_move(session):
    play_all(session, winning_sequence(ALL_LINES[0], Player.X))
    board_before = session.board.copy()

    assert session.apply_move('bob', 3, 3) == MoveOutcome.lost(Player.O)
    assert session.apply_move('alice', 3, 3) == MoveOutcome.won(Player.X, forced=True)
    assert session.board == board_before
    assert session.turns_played == 5


def test_exhausted_board_resolves_as_tie(session):
    play_all(session, DRAW_SEQUENCE)
    outcome = session.apply_move('bob', 1, 1)
    assert outcome == MoveOutcome.tied(forced=True)
    assert outcome.is_terminal


def test_stranger_cannot_resolve_a_finished_game(session):
    play_all(session, DRAW_SEQUENCE)
    with pytest.raises(NotYourTurn):
        session.apply_move('carol', 1, 1)


def test_validator_lists_open_positions(session):
    validator = MoveValidator()
    session.apply_move('alice', 1, 1)
    moves = validator.get_valid_moves(session)
    assert len(moves) == 8
    assert (1, 1) not in moves
    assert (3, 3) in moves

    result = validator.validate_move(session, 'bob', 1, 1)
    assert not result.is_valid
    assert isinstance(result.error, PositionOccupied)
    assert result.error_message == 'Position 1,1 is already played'

    assert validator.validate_move(session, 'bob', 2, 2).is_valid
