import pytest

from honeycomb.board import Board, Player
from honeycomb.evaluator import ComputerPlayer, Difficulty
from honeycomb.turn_engine import GameState

B = Player.BLACK
W = Player.WHITE

# Black can capture along both ends of the s=0 axis; white's two pieces sit
# next to black corners, which can never be flanked.
#   black (2,-2,0)  flips (3,-3,0)
#   black (-2,2,0)  flips (-3,3,0)
PASS_POSITION = {
    (4, -4, 0): "black",
    (3, -3, 0): "white",
    (-4, 4, 0): "black",
    (-3, 3, 0): "white",
}

# Black's only move (2,-2,0) leaves 3 black vs three isolated white corners.
DRAW_POSITION = {
    (4, -4, 0): "black",
    (3, -3, 0): "white",
    (-4, 4, 0): "white",
    (0, 4, -4): "white",
    (-4, 0, 4): "white",
}

# Two black options: (3,-3,0) flips 2 on the inner ring, (-4,4,0) flips 1 on the outer ring.
CHOICE_POSITION = {
    (0, 0, 0): "black",
    (1, -1, 0): "white",
    (2, -2, 0): "white",
    (-2, 2, 0): "black",
    (-3, 3, 0): "white",
}


def _build_game(board=None, current_player=B, computer=None):
    return GameState(board=board, current_player=current_player, computer=computer)


@pytest.fixture
def game():
    """Fresh two-human game on the opening board."""
    return _build_game()


@pytest.fixture
def opening():
    return Board.create_initial()


@pytest.fixture
def pass_board():
    return Board.from_dict(PASS_POSITION)


@pytest.fixture
def draw_board():
    return Board.from_dict(DRAW_POSITION)


@pytest.fixture
def choice_board():
    return Board.from_dict(CHOICE_POSITION)


@pytest.fixture
def vs_computer():
    """Human black vs a seeded hard computer playing white."""
    return _build_game(computer=ComputerPlayer(W, Difficulty.HARD, seed=7))


def dump_log(game):
    print("\n--- GAME LOG ---")
    for e in game.log:
        print(e)
    print("--- END LOG ---\n")
