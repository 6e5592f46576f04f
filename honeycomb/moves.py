from __future__ import annotations

from typing import List, Set, Tuple

from honeycomb.board import Board, Player
from honeycomb.errors import IllegalMoveError
from honeycomb.hexgrid import DIRECTIONS, Hex, in_bounds


def capture_chain_in_direction(board: Board, origin: Hex, direction: Hex, player: Player) -> List[Hex]:
    """
    Walk from origin+direction while in bounds:
      - empty cell      -> no capture this way, []
      - opponent piece  -> collect and keep walking
      - own piece       -> capture everything collected (may be [])
    Running off the board is also a failure: a run must be closed by the mover's own piece.
    """
    chain: List[Hex] = []
    current = origin + direction

    while in_bounds(current, board.radius):
        piece = board.get(current)
        if piece is None:
            return []
        if piece is player:
            return chain
        chain.append(current)
        current = current + direction

    return []


def flips_for(board: Board, coord: Hex, player: Player) -> List[Hex]:
    """
    All opponent pieces captured by placing `player` at `coord`.
    Empty result means the placement is illegal (occupied, or captures nothing).
    """
    if not in_bounds(coord, board.radius) or coord in board:
        return []

    flips: List[Hex] = []
    for d in DIRECTIONS:
        flips.extend(capture_chain_in_direction(board, coord, d, player))
    return flips


def legal_moves(board: Board, player: Player) -> Set[Hex]:
    return {h for h in board.cells() if flips_for(board, h, player)}


def has_legal_move(board: Board, player: Player) -> bool:
    return any(flips_for(board, h, player) for h in board.cells())


def apply_move(board: Board, coord: Hex, player: Player) -> Tuple[Board, List[Hex]]:
    flips = flips_for(board, coord, player)
    if not flips:
        raise IllegalMoveError(f"{player} cannot play at {coord}.", coord)
    return board.with_placement(coord, player, flips), flips
