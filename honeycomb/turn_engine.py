# honeycomb/turn_engine.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, FrozenSet, List, Optional, Set, Tuple, Union

from honeycomb.board import FIRST_PLAYER, Board, Player
from honeycomb.errors import IllegalMoveError, NoLegalMovesError
from honeycomb.evaluator import ComputerPlayer, Difficulty, PolicyLike
from honeycomb.hexgrid import Hex
from honeycomb.moves import apply_move, has_legal_move, legal_moves


class Phase(Enum):
    AWAITING_MOVE = auto()
    TERMINAL = auto()


class TerminalReason(Enum):
    BOTH_BLOCKED = "both_blocked"


@dataclass(frozen=True)
class TurnOutcome:
    """
    Result of deciding who moves next on a given board.
      - phase AWAITING_MOVE: `player` is to move with `legal` as the options;
        `passed` names the side that was skipped, if any.
      - phase TERMINAL: neither side can place a piece.
    """
    phase: Phase
    player: Optional[Player]
    legal: FrozenSet[Hex] = frozenset()
    passed: Optional[Player] = None


@dataclass(frozen=True)
class MoveResult:
    coord: Hex
    player: Player
    flips: Tuple[Hex, ...]
    passed: Optional[Player] = None
    game_over: bool = False
    winner: Optional[Player] = None
    events: List[str] = field(default_factory=list, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coord": self.coord.key(),
            "player": self.player.value,
            "flips": [h.key() for h in self.flips],
            "passed": self.passed.value if self.passed else None,
            "game_over": self.game_over,
            "winner": self.winner.value if self.winner else None,
            "events": list(self.events),
        }


def _require_moves(board: Board, player: Player) -> Set[Hex]:
    moves = legal_moves(board, player)
    if not moves:
        raise NoLegalMovesError(player)
    return moves


def resolve_turn(board: Board, player: Player) -> TurnOutcome:
    """
    Turn transition after a placement (or at game start) with `player` due to move:
      1) player has a move            -> player moves
      2) only the opponent has a move -> player passes, opponent moves
      3) nobody has a move            -> game over
    """
    try:
        return TurnOutcome(Phase.AWAITING_MOVE, player, frozenset(_require_moves(board, player)))
    except NoLegalMovesError:
        pass

    other = player.opponent
    if not has_legal_move(board, other):
        return TurnOutcome(Phase.TERMINAL, None)

    return TurnOutcome(Phase.AWAITING_MOVE, other, frozenset(legal_moves(board, other)), passed=player)


def winner_of(board: Board) -> Optional[Player]:
    """Strictly larger piece count wins; equal counts is a draw (None)."""
    black, white = board.score()
    if black > white:
        return Player.BLACK
    if white > black:
        return Player.WHITE
    return None


HexLike = Union[Hex, Tuple[int, int, int], str]


def _as_hex(coord: HexLike) -> Hex:
    if isinstance(coord, Hex):
        return coord
    try:
        if isinstance(coord, str):
            return Hex.parse(coord)
        return Hex(*coord)
    except (TypeError, ValueError) as exc:
        raise IllegalMoveError(f"Not a board coordinate: {coord!r} ({exc})") from exc


class GameState:
    def __init__(self, board: Optional[Board] = None, current_player: Player = FIRST_PLAYER,
                 computer: Optional[ComputerPlayer] = None):
        self.computer: Optional[ComputerPlayer] = computer
        self.generation: int = 0  # bumped on reset so stale async work can tell
        self._install(board or Board.create_initial(), current_player)

    def _install(self, board: Board, current_player: Player) -> None:
        self.board: Board = board
        self.current_player: Player = current_player
        self.scores: Dict[Player, int] = board.scores()
        self.phase: Phase = Phase.AWAITING_MOVE
        self.terminal_reason: Optional[TerminalReason] = None
        self.winner: Optional[Player] = None
        self.move_number: int = 0
        self.last_move: Optional[Hex] = None
        self.log: List[str] = []
        self._legal: FrozenSet[Hex] = frozenset()
        self._advance(current_player)

    # -----------------------------
    # Queries
    # -----------------------------
    @property
    def is_over(self) -> bool:
        return self.phase is Phase.TERMINAL

    @property
    def is_draw(self) -> bool:
        return self.is_over and self.winner is None

    @property
    def is_computer_turn(self) -> bool:
        return (not self.is_over and self.computer is not None
                and self.computer.player is self.current_player)

    def legal_moves(self) -> Set[Hex]:
        return set(self._legal)

    def score_tuple(self) -> Tuple[int, int]:
        return self.scores[Player.BLACK], self.scores[Player.WHITE]

    def snapshot(self) -> Dict[str, Any]:
        return {
            "board": self.board.to_dict(),
            "radius": self.board.radius,
            "current_player": self.current_player.value,
            "legal_moves": sorted(h.key() for h in self._legal),
            "scores": {p.value: n for p, n in self.scores.items()},
            "phase": self.phase.name.lower(),
            "is_over": self.is_over,
            "terminal_reason": self.terminal_reason.value if self.terminal_reason else None,
            "winner": self.winner.value if self.winner else None,
            "move_number": self.move_number,
            "last_move": self.last_move.key() if self.last_move else None,
            "computer": self.computer.player.value if self.computer else None,
            "difficulty": self.computer.label if self.computer else None,
            "generation": self.generation,
        }

    # -----------------------------
    # Turn transition
    # -----------------------------
    def _advance(self, player: Player) -> TurnOutcome:
        outcome = resolve_turn(self.board, player)

        if outcome.passed is not None:
            self.log.append(f"{outcome.passed} has no legal moves and passes.")

        if outcome.phase is Phase.TERMINAL:
            self.phase = Phase.TERMINAL
            self.terminal_reason = TerminalReason.BOTH_BLOCKED
            self.winner = winner_of(self.board)
            self._legal = frozenset()
            black, white = self.score_tuple()
            verdict = f"{self.winner} wins" if self.winner else "draw"
            self.log.append(f"Game over: {verdict} ({black}-{white}).")
        else:
            self.current_player = outcome.player
            self._legal = outcome.legal

        return outcome

    # -----------------------------
    # Commands
    # -----------------------------
    def attempt_move(self, coord: HexLike) -> MoveResult:
        """
        Place a piece for the side to move. Raises IllegalMoveError (state untouched)
        if the game is over or the cell is not currently legal.
        """
        coord = _as_hex(coord)
        if self.is_over:
            raise IllegalMoveError("The game is over.", coord)
        if coord not in self._legal:
            raise IllegalMoveError(f"{coord} is not a legal move for {self.current_player}.", coord)

        mover = self.current_player
        self.board, flips = apply_move(self.board, coord, mover)
        self.scores = self.board.scores()
        self.move_number += 1
        self.last_move = coord

        log_start = len(self.log)
        self.log.append(
            f"{mover} plays {coord}, flipping {len(flips)}: " + ", ".join(str(h) for h in flips)
        )
        outcome = self._advance(mover.opponent)

        return MoveResult(
            coord=coord,
            player=mover,
            flips=tuple(flips),
            passed=outcome.passed,
            game_over=self.is_over,
            winner=self.winner,
            events=self.log[log_start:],
        )

    def request_computer_move(self, difficulty: Optional[PolicyLike] = None) -> Hex:
        """
        Pick a move for the side to move without applying it.
        Uses the attached ComputerPlayer when it plays this side.
        """
        if self.is_over:
            raise IllegalMoveError("The game is over.")

        computer = self.computer
        if computer is None or computer.player is not self.current_player:
            computer = ComputerPlayer(self.current_player, Difficulty.MEDIUM)
        choice = computer.choose(self.board, difficulty, moves=self._legal)

        # The transition guarantees a non-empty legal set while awaiting a move.
        assert choice is not None
        return choice

    def play_computer_move(self, difficulty: Optional[PolicyLike] = None) -> MoveResult:
        return self.attempt_move(self.request_computer_move(difficulty))

    def reset(self) -> None:
        self.generation += 1
        self._install(Board.create_initial(self.board.radius), FIRST_PLAYER)
        self.log.append("New game: black to move.")

    def __repr__(self):
        black, white = self.score_tuple()
        state = "over" if self.is_over else f"{self.current_player} to move"
        return f"GameState(move {self.move_number}, {state}, black={black}, white={white})"
