import pytest

from honeycomb.board import FIRST_PLAYER, OPENING_LAYOUT, Board, Player
from honeycomb.errors import OutOfBoundsError
from honeycomb.hexgrid import Hex

B = Player.BLACK
W = Player.WHITE


def test_initial_board_matches_opening_layout(opening):
    assert len(opening) == 7
    assert opening.get(Hex(0, 0, 0)) is W
    for h in (Hex(1, -1, 0), Hex(0, 1, -1), Hex(-1, 0, 1)):
        assert opening.get(h) is B
    for h in (Hex(-1, 1, 0), Hex(1, 0, -1), Hex(0, -1, 1)):
        assert opening.get(h) is W
    assert opening.score() == (3, 4)
    assert FIRST_PLAYER is B


def test_initial_board_is_deterministic():
    assert Board.create_initial() == Board.create_initial()
    assert dict(Board.create_initial().occupied()) == dict(OPENING_LAYOUT)


def test_empty_cell_reads_none(opening):
    assert opening.get(Hex(2, -2, 0)) is None
    assert opening.is_empty(Hex(2, -2, 0))
    assert len(opening.empty_cells()) == 61 - 7


def test_with_placement_returns_new_board(opening):
    nb = opening.with_placement(Hex(1, 1, -2), B, [Hex(1, 0, -1)])

    assert nb.get(Hex(1, 1, -2)) is B
    assert nb.get(Hex(1, 0, -1)) is B
    assert nb.score() == (5, 3)

    # original untouched
    assert opening.get(Hex(1, 1, -2)) is None
    assert opening.get(Hex(1, 0, -1)) is W
    assert opening.score() == (3, 4)


def test_out_of_bounds_is_an_assertion_failure(opening):
    with pytest.raises(OutOfBoundsError):
        opening.get(Hex(5, -5, 0))
    with pytest.raises(AssertionError):
        opening.with_placement(Hex(5, -5, 0), B, [])
    with pytest.raises(OutOfBoundsError):
        opening.with_placement(Hex(1, 1, -2), B, [Hex(0, 5, -5)])
    with pytest.raises(OutOfBoundsError):
        Board({Hex(-5, 0, 5): W})


def test_score_counts_every_piece():
    board = Board.from_dict({(0, 0, 0): "black", (1, -1, 0): "black", (4, -4, 0): "white"})
    assert board.score() == (2, 1)
    assert board.scores() == {B: 2, W: 1}
    assert sum(board.score()) == len(board)


def test_player_opponent_and_parse():
    assert B.opponent is W
    assert W.opponent is B
    assert Player.parse("WHITE") is W
    with pytest.raises(ValueError):
        Player.parse("red")
