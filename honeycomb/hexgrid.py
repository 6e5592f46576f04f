# honeycomb/hexgrid.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

BOARD_RADIUS = 4


@dataclass(frozen=True)
class Hex:
    q: int
    r: int
    s: int

    def __post_init__(self):
        if self.q + self.r + self.s != 0:
            raise ValueError(f"cube coordinate must sum to zero, got ({self.q},{self.r},{self.s})")

    def __repr__(self):
        return f"({self.q},{self.r},{self.s})"

    def __add__(self, other: "Hex") -> "Hex":
        return add(self, other)

    def key(self) -> str:
        return f"{self.q},{self.r},{self.s}"

    @staticmethod
    def parse(text: str) -> "Hex":
        """
        Accepts "q,r,s" or "q r s". Also accepts the axial pair "q,r" and derives s.
        """
        parts = text.replace(",", " ").split()
        if len(parts) == 2:
            q, r = int(parts[0]), int(parts[1])
            return Hex(q, r, -q - r)
        if len(parts) != 3:
            raise ValueError(f"expected q,r,s but got {text!r}")
        return Hex(int(parts[0]), int(parts[1]), int(parts[2]))

    def neighbors(self) -> List["Hex"]:
        return [self + d for d in DIRECTIONS]


# Fixed adjacency order; capture scans and neighbor lists follow it.
DIRECTIONS = (
    Hex(1, -1, 0),
    Hex(1, 0, -1),
    Hex(0, 1, -1),
    Hex(-1, 1, 0),
    Hex(-1, 0, 1),
    Hex(0, -1, 1),
)

ORIGIN = Hex(0, 0, 0)


def add(a: Hex, b: Hex) -> Hex:
    return Hex(a.q + b.q, a.r + b.r, a.s + b.s)


def distance_from_center(c: Hex) -> int:
    return max(abs(c.q), abs(c.r), abs(c.s))


def hex_distance(a: Hex, b: Hex) -> int:
    return max(abs(a.q - b.q), abs(a.r - b.r), abs(a.s - b.s))


def in_bounds(c: Hex, radius: int = BOARD_RADIUS) -> bool:
    return distance_from_center(c) <= radius


def all_hexes(radius: int = BOARD_RADIUS) -> Iterator[Hex]:
    """
    Every cell of the hexagon, q ascending then r ascending.
    The order is stable so anything that enumerates the board is deterministic.
    """
    for q in range(-radius, radius + 1):
        for r in range(-radius, radius + 1):
            s = -q - r
            if abs(s) <= radius:
                yield Hex(q, r, s)


def cell_count(radius: int = BOARD_RADIUS) -> int:
    return 3 * radius * (radius + 1) + 1
