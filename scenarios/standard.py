from typing import Optional

import config
from honeycomb.board import Player
from honeycomb.evaluator import ComputerPlayer, Difficulty
from honeycomb.turn_engine import GameState


def build_game(computer: Optional[str] = "white", difficulty: Optional[str] = None,
               seed: Optional[int] = None) -> GameState:
    """
    Standard opening, black to move.
    `computer` is the colour the computer plays ("black"/"white"), or None for two humans.
    """
    ai = None
    if computer:
        ai = ComputerPlayer(
            Player.parse(computer),
            Difficulty.parse(difficulty or config.default_difficulty()),
            seed=seed if seed is not None else config.ai_seed(),
        )

    game = GameState(computer=ai)
    game.log.append("New game: black to move.")
    return game
