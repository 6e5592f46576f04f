from __future__ import annotations

from typing import Iterable, Optional

from honeycomb.board import Board, Player
from honeycomb.hexgrid import Hex

CELL_SYMBOLS = {
    Player.BLACK: "B",
    Player.WHITE: "W",
    None: ".",
}
LEGAL_SYMBOL = "*"
LAST_MOVE_SYMBOLS = {
    Player.BLACK: "b",
    Player.WHITE: "w",
}


def render_board_ascii(board: Board, legal: Iterable[Hex] = (), last_move: Optional[Hex] = None) -> str:
    """
    Rows are r = -R..R; within a row q runs left to right. Each row is indented by |r|
    so neighbouring cells line up as a hexagon. The q of the first cell is printed on the left.
    """
    radius = board.radius
    legal = set(legal)

    lines = [
        "Legend: B black | W white | b/w last move | * legal move | . empty",
        "",
    ]

    for r in range(-radius, radius + 1):
        q_lo = max(-radius, -r - radius)
        q_hi = min(radius, -r + radius)
        row = []
        for q in range(q_lo, q_hi + 1):
            h = Hex(q, r, -q - r)
            piece = board.get(h)
            if piece is not None and h == last_move:
                row.append(LAST_MOVE_SYMBOLS[piece])
            elif piece is None and h in legal:
                row.append(LEGAL_SYMBOL)
            else:
                row.append(CELL_SYMBOLS[piece])
        lines.append(f"r={r:>2} q={q_lo:>2}  " + " " * abs(r) + " ".join(row))

    return "\n".join(lines)


def render_game_ascii(game) -> str:
    black, white = game.score_tuple()
    if game.is_over:
        status = f"Game over: {game.winner} wins" if game.winner else "Game over: draw"
    else:
        status = f"{game.current_player} to move"
    header = f"Move {game.move_number} | {status} | black {black} - white {white}"
    legal = () if game.is_over else game.legal_moves()
    return header + "\n" + render_board_ascii(game.board, legal, game.last_move)
