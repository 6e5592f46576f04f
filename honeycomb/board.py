# honeycomb/board.py
from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from honeycomb.errors import OutOfBoundsError
from honeycomb.hexgrid import BOARD_RADIUS, Hex, all_hexes, in_bounds


class Player(Enum):
    BLACK = "black"
    WHITE = "white"

    @property
    def opponent(self) -> "Player":
        return Player.WHITE if self is Player.BLACK else Player.BLACK

    def __str__(self):
        return self.value

    @staticmethod
    def parse(name: str) -> "Player":
        try:
            return Player(name.strip().lower())
        except ValueError:
            raise ValueError(f"unknown player {name!r} (expected black or white)") from None


FIRST_PLAYER = Player.BLACK

# Centre is white, the six neighbours alternate black/white around it.
OPENING_LAYOUT: Tuple[Tuple[Hex, Player], ...] = (
    (Hex(0, 0, 0), Player.WHITE),
    (Hex(1, -1, 0), Player.BLACK),
    (Hex(0, 1, -1), Player.BLACK),
    (Hex(-1, 0, 1), Player.BLACK),
    (Hex(-1, 1, 0), Player.WHITE),
    (Hex(1, 0, -1), Player.WHITE),
    (Hex(0, -1, 1), Player.WHITE),
)


class Board:
    """
    Sparse, immutable occupancy map over the hexagon of `radius`.
    A missing key means the cell is empty. Moves produce a new Board via with_placement().
    """

    __slots__ = ("radius", "_cells")

    def __init__(self, cells: Optional[Mapping[Hex, Player]] = None, radius: int = BOARD_RADIUS):
        self.radius = radius
        self._cells: Dict[Hex, Player] = {}
        for h, p in (cells or {}).items():
            self._check(h)
            self._cells[h] = p

    @classmethod
    def create_initial(cls, radius: int = BOARD_RADIUS) -> "Board":
        return cls(dict(OPENING_LAYOUT), radius=radius)

    @classmethod
    def from_dict(cls, cells: Mapping[Tuple[int, int, int], str], radius: int = BOARD_RADIUS) -> "Board":
        """Build a position from {(q, r, s): "black"|"white"}; handy for tests and scenarios."""
        return cls({Hex(*k): Player.parse(v) for k, v in cells.items()}, radius=radius)

    def _check(self, h: Hex) -> None:
        if not in_bounds(h, self.radius):
            raise OutOfBoundsError(h, self.radius)

    # -----------------------------
    # Reads
    # -----------------------------
    def get(self, h: Hex) -> Optional[Player]:
        self._check(h)
        return self._cells.get(h)

    def is_empty(self, h: Hex) -> bool:
        return self.get(h) is None

    def occupied(self) -> Iterator[Tuple[Hex, Player]]:
        return iter(self._cells.items())

    def empty_cells(self) -> List[Hex]:
        return [h for h in all_hexes(self.radius) if h not in self._cells]

    def cells(self) -> Iterator[Hex]:
        return all_hexes(self.radius)

    def score(self) -> Tuple[int, int]:
        """(black, white) by a full scan; never tracked incrementally."""
        black = 0
        white = 0
        for p in self._cells.values():
            if p is Player.BLACK:
                black += 1
            else:
                white += 1
        return black, white

    def scores(self) -> Dict[Player, int]:
        black, white = self.score()
        return {Player.BLACK: black, Player.WHITE: white}

    def to_dict(self) -> Dict[str, str]:
        return {h.key(): p.value for h, p in self._cells.items()}

    # -----------------------------
    # Writes (copy-on-write)
    # -----------------------------
    def with_placement(self, h: Hex, player: Player, captured: Iterable[Hex]) -> "Board":
        """
        Returns a new board with `h` and every captured cell set to `player`.
        Occupancy is not re-validated here; that is the move engine's job.
        """
        captured = list(captured)
        self._check(h)
        for c in captured:
            self._check(c)

        cells = dict(self._cells)
        cells[h] = player
        for c in captured:
            cells[c] = player

        nb = Board.__new__(Board)
        nb.radius = self.radius
        nb._cells = cells
        return nb

    # -----------------------------
    # Dunder helpers
    # -----------------------------
    def __contains__(self, h: Hex) -> bool:
        return h in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other):
        return isinstance(other, Board) and self.radius == other.radius and self._cells == other._cells

    def __hash__(self):
        return hash((self.radius, frozenset(self._cells.items())))

    def __repr__(self):
        black, white = self.score()
        return f"Board(radius={self.radius}, black={black}, white={white})"
