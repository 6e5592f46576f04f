import random

import pytest

from honeycomb.board import Board, Player
from honeycomb.errors import IllegalMoveError
from honeycomb.evaluator import ComputerPlayer, ScoringPolicy
from honeycomb.hexgrid import Hex, all_hexes
from honeycomb.moves import flips_for
from honeycomb.turn_engine import (
    GameState,
    Phase,
    TerminalReason,
    resolve_turn,
    winner_of,
)

from tests.conftest import dump_log

B = Player.BLACK
W = Player.WHITE


def test_new_game_starts_with_black_to_move(game):
    assert game.phase is Phase.AWAITING_MOVE
    assert game.current_player is B
    assert game.score_tuple() == (3, 4)
    assert Hex(1, 1, -2) in game.legal_moves()
    assert not game.is_over


def test_opening_capture_scenario(game):
    result = game.attempt_move(Hex(1, 1, -2))

    assert result.player is B
    assert result.flips == (Hex(1, 0, -1),)
    assert game.board.get(Hex(1, 0, -1)) is B
    assert game.score_tuple() == (5, 3)
    assert game.current_player is W
    assert game.move_number == 1
    assert game.last_move == Hex(1, 1, -2)
    assert any("black plays (1,1,-2)" in e for e in result.events)


@pytest.mark.parametrize("coord", [
    Hex(0, 0, 0),      # occupied
    Hex(3, -3, 0),     # captures nothing
    Hex(5, -5, 0),     # off the board
    (1, 1, 1),         # not a cube coordinate
])
def test_illegal_moves_leave_state_unchanged(game, coord):
    board_before = game.board
    with pytest.raises(IllegalMoveError):
        game.attempt_move(coord)
    assert game.board is board_before
    assert game.current_player is B
    assert game.move_number == 0


def test_attempt_move_accepts_tuples_and_strings(game):
    game.attempt_move((1, 1, -2))
    assert game.score_tuple() == (5, 3)


def test_resolve_turn_stays_with_player_who_can_move(opening):
    outcome = resolve_turn(opening, B)
    assert outcome.phase is Phase.AWAITING_MOVE
    assert outcome.player is B
    assert outcome.passed is None


def test_resolve_turn_passes_to_opponent(pass_board):
    outcome = resolve_turn(pass_board, W)
    assert outcome.phase is Phase.AWAITING_MOVE
    assert outcome.player is B
    assert outcome.passed is W
    assert outcome.legal == {Hex(2, -2, 0), Hex(-2, 2, 0)}


def test_resolve_turn_terminal_when_nobody_can_move():
    board = Board.from_dict({(0, 0, 0): "black", (4, -4, 0): "white"})
    outcome = resolve_turn(board, B)
    assert outcome.phase is Phase.TERMINAL
    assert outcome.player is None


def test_turn_passes_silently_after_a_move(pass_board):
    game = GameState(board=pass_board)
    result = game.attempt_move(Hex(2, -2, 0))

    assert result.passed is W
    assert not result.game_over
    assert game.current_player is B
    # the pass does not touch the board
    expected = pass_board.with_placement(Hex(2, -2, 0), B, [Hex(3, -3, 0)])
    assert game.board == expected
    assert game.score_tuple() == (4, 1)
    assert "white has no legal moves and passes." in game.log

    result = game.attempt_move(Hex(-2, 2, 0))
    assert result.game_over
    assert game.phase is Phase.TERMINAL
    assert game.terminal_reason is TerminalReason.BOTH_BLOCKED
    assert game.winner is B
    assert game.score_tuple() == (6, 0)


def test_pass_at_start_of_game(pass_board):
    game = GameState(board=pass_board, current_player=W)
    assert game.current_player is B
    assert game.board == pass_board


def test_draw_on_equal_counts(draw_board):
    game = GameState(board=draw_board)
    assert game.legal_moves() == {Hex(2, -2, 0)}

    result = game.attempt_move(Hex(2, -2, 0))

    assert result.game_over
    assert result.winner is None
    assert game.is_draw
    assert game.score_tuple() == (3, 3)
    assert game.legal_moves() == set()
    assert any("draw" in e for e in game.log)


def test_terminal_game_rejects_moves():
    game = GameState(board=Board.from_dict({(0, 0, 0): "white", (1, -1, 0): "white"}))
    assert game.is_over
    assert game.winner is W
    with pytest.raises(IllegalMoveError):
        game.attempt_move(Hex(2, -2, 0))
    with pytest.raises(IllegalMoveError):
        game.request_computer_move()


def test_winner_of_needs_strictly_more_pieces():
    assert winner_of(Board.from_dict({(0, 0, 0): "black"})) is B
    assert winner_of(Board.from_dict({(0, 0, 0): "white"})) is W
    assert winner_of(Board.from_dict({(0, 0, 0): "white", (1, -1, 0): "black"})) is None


def test_reset_restores_opening(game):
    game.attempt_move(Hex(1, 1, -2))
    gen = game.generation

    game.reset()

    assert game.board == Board.create_initial()
    assert game.current_player is B
    assert game.score_tuple() == (3, 4)
    assert game.move_number == 0
    assert game.last_move is None
    assert not game.is_over
    assert game.generation == gen + 1


def test_reset_after_game_over(draw_board):
    game = GameState(board=draw_board)
    game.attempt_move(Hex(2, -2, 0))
    assert game.is_over

    game.reset()
    assert game.phase is Phase.AWAITING_MOVE
    assert game.winner is None
    assert game.terminal_reason is None


def test_computer_move_is_legal_and_applied_through_attempt_move(vs_computer):
    vs_computer.attempt_move(Hex(1, 1, -2))
    assert vs_computer.is_computer_turn

    choice = vs_computer.request_computer_move()
    assert choice in vs_computer.legal_moves()
    assert vs_computer.move_number == 1  # requesting does not apply

    result = vs_computer.play_computer_move()
    assert result.player is W
    assert vs_computer.move_number == 2


def test_snapshot_is_json_friendly(game):
    snap = game.snapshot()
    assert snap["current_player"] == "black"
    assert snap["scores"] == {"black": 3, "white": 4}
    assert snap["board"]["0,0,0"] == "white"
    assert "1,1,-2" in snap["legal_moves"]
    assert snap["is_over"] is False
    assert snap["winner"] is None


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_random_playout_invariants(seed):
    rng = random.Random(seed)
    game = GameState()

    while not game.is_over:
        board = game.board
        mover = game.current_player
        legal = game.legal_moves()

        # legality is exactly "captures something"
        assert legal == {h for h in all_hexes() if flips_for(board, h, mover)}

        before = board.scores()
        coord = rng.choice(sorted(legal, key=lambda h: (h.q, h.r)))
        n_flips = len(flips_for(board, coord, mover))
        game.attempt_move(coord)
        after = game.board.scores()

        assert after[mover] == before[mover] + 1 + n_flips
        assert after[mover.opponent] == before[mover.opponent] - n_flips
        assert sum(game.score_tuple()) == len(game.board)
        assert game.move_number <= 61 - 7

    dump_log(game)
    black, white = game.score_tuple()
    if black > white:
        assert game.winner is B
    elif white > black:
        assert game.winner is W
    else:
        assert game.is_draw


def test_custom_policy_computer_plays_and_snapshots():
    game = GameState(computer=ComputerPlayer(W, ScoringPolicy(capture_weight=1.0)))
    assert game.snapshot()["difficulty"] == "custom"

    game.attempt_move(Hex(1, 1, -2))
    result = game.play_computer_move()
    assert result.player is W
    assert game.move_number == 2
    assert game.snapshot()["difficulty"] == "custom"


def test_attached_computer_policy_drives_requested_move(choice_board):
    captures_only = ScoringPolicy(capture_weight=1.0)
    position_only = ScoringPolicy(capture_weight=0.0, position_weight=1.0)

    game = GameState(board=choice_board, current_player=B, computer=ComputerPlayer(B, captures_only))
    assert game.request_computer_move() == Hex(3, -3, 0)

    game.computer.set_strength(position_only)
    assert game.request_computer_move() in game.legal_moves()
    assert game.request_computer_move(captures_only) == Hex(3, -3, 0)
