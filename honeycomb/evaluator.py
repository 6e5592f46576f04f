"""
Scripted opponent: single-ply heuristic move selection.

A move's score combines
  1) how many pieces it flips,
  2) where it lands (outer ring > next ring > centre > other interior cells),
  3) at the top tier only, how few replies it leaves the opponent,
plus optional bounded noise so the lower tiers are not fully predictable.

Weights live in ScoringPolicy objects keyed by Difficulty. Swap or register a
policy to change the opponent's character without touching the scorer.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Protocol, Union

from honeycomb.board import Board, Player
from honeycomb.hexgrid import BOARD_RADIUS, ORIGIN, Hex, distance_from_center
from honeycomb.moves import flips_for, legal_moves


class RNG(Protocol):
    def uniform(self, a: float, b: float) -> float: ...


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    def __str__(self):
        return self.value

    @staticmethod
    def parse(name: str) -> "Difficulty":
        try:
            return Difficulty(name.strip().lower())
        except ValueError:
            raise ValueError(f"unknown difficulty {name!r} (expected easy, medium or hard)") from None


OUTER_RING_VALUE = 10
INNER_RING_VALUE = 5
CENTER_VALUE = 3
INTERIOR_VALUE = 1


def positional_value(coord: Hex, radius: int = BOARD_RADIUS) -> int:
    if coord == ORIGIN:
        return CENTER_VALUE
    d = distance_from_center(coord)
    if d == radius:
        return OUTER_RING_VALUE
    if d == radius - 1:
        return INNER_RING_VALUE
    return INTERIOR_VALUE


@dataclass(frozen=True)
class ScoringPolicy:
    capture_weight: float = 1.0
    position_weight: float = 0.0
    mobility_weight: float = 0.0
    noise: float = 0.0

    @property
    def uses_lookahead(self) -> bool:
        return self.mobility_weight != 0.0

    @property
    def is_deterministic(self) -> bool:
        return self.noise <= 0.0


POLICIES: Dict[Difficulty, ScoringPolicy] = {
    Difficulty.EASY: ScoringPolicy(capture_weight=1.0, position_weight=0.0, mobility_weight=0.0, noise=3.0),
    Difficulty.MEDIUM: ScoringPolicy(capture_weight=1.0, position_weight=1.0, mobility_weight=0.0, noise=1.0),
    Difficulty.HARD: ScoringPolicy(capture_weight=1.0, position_weight=1.5, mobility_weight=1.0, noise=0.0),
}

PolicyLike = Union[Difficulty, str, ScoringPolicy]


def register_policy(difficulty: Difficulty, policy: ScoringPolicy) -> None:
    POLICIES[difficulty] = policy


def resolve_policy(difficulty: PolicyLike) -> ScoringPolicy:
    if isinstance(difficulty, ScoringPolicy):
        return difficulty
    if isinstance(difficulty, str):
        difficulty = Difficulty.parse(difficulty)
    return POLICIES[difficulty]


def opponent_replies(coord: Hex, player: Player, board: Board) -> int:
    """Legal-move count left to the opponent after `player` plays `coord`."""
    flips = flips_for(board, coord, player)
    after = board.with_placement(coord, player, flips)
    return len(legal_moves(after, player.opponent))


def score_move(coord: Hex, player: Player, board: Board, difficulty: PolicyLike,
               rng: Optional[RNG] = None) -> float:
    policy = resolve_policy(difficulty)

    score = policy.capture_weight * len(flips_for(board, coord, player))
    score += policy.position_weight * positional_value(coord, board.radius)

    if policy.uses_lookahead:
        score -= policy.mobility_weight * opponent_replies(coord, player, board)

    if not policy.is_deterministic:
        r = rng or random.Random()
        score += r.uniform(0.0, policy.noise)

    return score


def _candidate_order(h: Hex):
    return (h.q, h.r, h.s)


def select_move(moves: Iterable[Hex], player: Player, board: Board, difficulty: PolicyLike,
                rng: Optional[RNG] = None) -> Optional[Hex]:
    """
    Highest score wins; ties keep the earliest candidate.
    Candidates are scanned in coordinate order, so a set input gives a repeatable answer.
    Returns None when there is nothing to choose from.
    """
    best: Optional[Hex] = None
    best_score = float("-inf")

    for coord in sorted(moves, key=_candidate_order):
        s = score_move(coord, player, board, difficulty, rng)
        if s > best_score:
            best, best_score = coord, s

    return best


class ComputerPlayer:
    """
    A computer-controlled side: which colour it plays, how well, and its RNG.
    Strength is either a named Difficulty or a substituted ScoringPolicy.
    """

    def __init__(self, player: Player, difficulty: PolicyLike = Difficulty.MEDIUM,
                 seed: Optional[int] = None):
        self.player = player
        self.difficulty: Optional[Difficulty] = None
        self.policy: Optional[ScoringPolicy] = None
        self.set_strength(difficulty)
        self.rng = random.Random(seed)

    def set_strength(self, strength: PolicyLike) -> None:
        if isinstance(strength, ScoringPolicy):
            self.difficulty, self.policy = None, strength
        else:
            self.difficulty = Difficulty.parse(strength) if isinstance(strength, str) else strength
            self.policy = None

    @property
    def strategy(self) -> PolicyLike:
        return self.policy if self.policy is not None else self.difficulty

    @property
    def label(self) -> str:
        return self.difficulty.value if self.difficulty is not None else "custom"

    def choose(self, board: Board, difficulty: Optional[PolicyLike] = None,
               moves: Optional[Iterable[Hex]] = None) -> Optional[Hex]:
        if moves is None:
            moves = legal_moves(board, self.player)
        return select_move(moves, self.player, board, difficulty or self.strategy, self.rng)

    def __repr__(self):
        return f"ComputerPlayer({self.player}, {self.label})"
