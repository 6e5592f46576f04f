from __future__ import annotations

import asyncio
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

import config
from honeycomb.errors import IllegalMoveError
from honeycomb.evaluator import Difficulty
from honeycomb.hexgrid import Hex
from honeycomb.render_ascii import render_game_ascii
from honeycomb.turn_engine import GameState
from scenarios.standard import build_game

logger = logging.getLogger(__name__)

app = FastAPI(title="Honeycomb Reversi")
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

# Games live for the lifetime of the process only, oldest first.
GAMES: Dict[str, GameState] = {}

# Every endpoint touching GAMES is `async def` so they all run on the event loop and
# never interleave with each other; the engine itself is synchronous.


def _load_game(game_id: str) -> GameState:
    game = GAMES.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="No such game")
    return game


def _new_game(computer: Optional[str], difficulty: Optional[str]) -> str:
    try:
        game = build_game(computer=computer, difficulty=difficulty)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    limit = config.max_games()
    while len(GAMES) >= limit:
        evicted = next(iter(GAMES))
        del GAMES[evicted]
        logger.info("dropped game %s (limit %d)", evicted, limit)

    game_id = str(uuid.uuid4())
    GAMES[game_id] = game
    logger.info("created game %s (computer=%s)", game_id, computer)
    return game_id


def _tail(lines: list[str], n: int = 50) -> list[str]:
    if n <= 0:
        return []
    return lines[-n:]


def _parse_difficulty(raw: Any) -> Optional[Difficulty]:
    if raw is None or raw == "":
        return None
    try:
        return Difficulty.parse(str(raw))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _coord_from_payload(payload: Dict[str, Any]) -> Hex:
    try:
        if "coord" in payload:
            return Hex.parse(str(payload["coord"]))
        q = int(payload["q"])
        r = int(payload["r"])
        s = int(payload["s"]) if "s" in payload else -q - r
        return Hex(q, r, s)
    except (KeyError, TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Bad coordinate: {exc}")


def _play_computer_turns(game: GameState) -> list[str]:
    # The computer may move several times in a row if the human has to pass.
    events: list[str] = []
    while game.is_computer_turn:
        events.extend(game.play_computer_move().events)
    return events


def _apply_command(game: GameState, command: str) -> list[str]:
    """
    Minimal text command surface for the HTML page.
    Mirrors the REPL: play <q> <r> [<s>], ai, reset.
    The computer's pending turns are played before and after the command.
    """
    events = _play_computer_turns(game)
    return events + _run_command(game, command) + _play_computer_turns(game)


def _run_command(game: GameState, command: str) -> list[str]:
    cmd = command.strip()
    if not cmd:
        return ["(no command)"]

    parts = cmd.split()
    head = parts[0].lower()

    if head == "play":
        if len(parts) not in (3, 4):
            return ["Usage: play <q> <r> [<s>]"]
        try:
            coord = Hex.parse(" ".join(parts[1:]))
        except ValueError as exc:
            return [f"ERROR: {exc}"]
        try:
            result = game.attempt_move(coord)
        except IllegalMoveError as exc:
            return [f"ERROR: {exc.message}"]
        return list(result.events)

    if head == "ai":
        if game.is_over:
            return ["ERROR: The game is over."]
        return list(game.play_computer_move().events)

    if head == "reset":
        game.reset()
        return ["New game."]

    return [f"Unknown command: {cmd}"]


def _ui_state(game_id: str) -> dict[str, Any]:
    game = _load_game(game_id)
    state = game.snapshot()
    state["game_id"] = game_id
    state["board_text"] = render_game_ascii(game)
    state["log_tail"] = "\n".join(_tail(game.log, 60))
    return state


@app.get("/", response_class=HTMLResponse)
async def index(request: Request, game_id: Optional[str] = None):
    # If no game is selected yet, create one against the computer and redirect to it.
    if game_id is None or game_id not in GAMES:
        new_id = _new_game("white", None)
        return RedirectResponse(url=f"/?game_id={new_id}", status_code=302)

    # A computer playing black opens before the page is shown.
    _play_computer_turns(GAMES[game_id])
    state = _ui_state(game_id)
    return templates.TemplateResponse(request, "index.html", {**state, "games": list(GAMES)})


@app.get("/games")
async def list_games():
    return {"games": list(GAMES)}


@app.post("/games")
async def create_game(payload: Optional[Dict[str, Any]] = None):
    payload = payload or {}
    computer = payload.get("computer", "white")
    difficulty = payload.get("difficulty")
    game_id = _new_game(computer or None, difficulty)
    return {"game_id": game_id}


@app.get("/games/{game_id}/state")
async def get_state(game_id: str):
    return _ui_state(game_id)


@app.delete("/games/{game_id}")
async def delete_game(game_id: str):
    _load_game(game_id)
    del GAMES[game_id]
    return {"deleted": game_id}


@app.post("/games/{game_id}/move")
async def post_move(game_id: str, payload: Dict[str, Any]):
    game = _load_game(game_id)
    coord = _coord_from_payload(payload)
    try:
        result = game.attempt_move(coord)
    except IllegalMoveError as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    return {"result": result.to_dict(), "state": _ui_state(game_id)}


@app.post("/games/{game_id}/computer")
async def post_computer_move(game_id: str, payload: Optional[Dict[str, Any]] = None):
    """
    Wait `think_delay` seconds, then let the computer play for the side to move.
    A reset (or any other move) during the wait abandons the request untouched.
    """
    payload = payload or {}
    game = _load_game(game_id)
    difficulty = _parse_difficulty(payload.get("difficulty"))
    if game.is_over:
        raise HTTPException(status_code=400, detail="The game is over.")

    generation = game.generation
    move_number = game.move_number

    delay = config.think_delay()
    if delay > 0:
        await asyncio.sleep(delay)

    if game.generation != generation or game.move_number != move_number or game.is_over:
        logger.info("computer move for game %s abandoned (state changed while thinking)", game_id)
        return {"result": None, "abandoned": True, "state": _ui_state(game_id)}

    result = game.play_computer_move(difficulty)
    return {"result": result.to_dict(), "abandoned": False, "state": _ui_state(game_id)}


@app.post("/games/{game_id}/reset")
async def post_reset(game_id: str):
    game = _load_game(game_id)
    game.reset()
    return {"state": _ui_state(game_id)}


@app.post("/ui/command", response_class=HTMLResponse)
async def ui_command(
    request: Request,
    game_id: str = Form(...),
    command: str = Form(""),
):
    game = _load_game(game_id)
    events = _apply_command(game, command)

    state = _ui_state(game_id)
    return templates.TemplateResponse(
        request,
        "index.html",
        {**state, "games": list(GAMES), "last_events": "\n".join(events)},
    )
