import sys
import time

import config
from honeycomb.errors import IllegalMoveError
from honeycomb.evaluator import Difficulty
from honeycomb.hexgrid import Hex
from honeycomb.render_ascii import render_game_ascii
from scenarios.standard import build_game


def run_repl(game, think_delay: float = 0.0):
    print("Honeycomb Reversi")
    print("Type 'help' for commands. Type 'exit' to quit.\n")
    print(render_game_ascii(game))

    while True:
        run_computer_turns(game, think_delay)

        prompt = f"[Move {game.move_number} | {game.current_player}]> "
        try:
            raw = input(prompt).strip()
        except EOFError:
            break
        cmd = raw.lower()

        if cmd in ("quit", "exit"):
            break

        elif cmd == "help":
            print("Commands:")
            print("  board                       - show the board (* marks legal moves)")
            print("  moves                       - list legal moves for the side to move")
            print("  play <q> <r> [<s>]          - place a piece (s is derived if omitted)")
            print("  ai                          - let the computer pick and play this move")
            print("  hint                        - show what the computer would play")
            print("  difficulty <easy|medium|hard> - set the computer's strength")
            print("  score                       - show piece counts")
            print("  log                         - show recent game log")
            print("  reset                       - start a new game")

        elif cmd in ("board", "map"):
            print(render_game_ascii(game))

        elif cmd == "moves":
            show_moves(game)

        elif cmd.startswith("play "):
            handle_play(game, raw)

        elif cmd == "ai":
            handle_ai(game)

        elif cmd == "hint":
            handle_hint(game)

        elif cmd.startswith("difficulty"):
            handle_difficulty(game, cmd)

        elif cmd == "score":
            black, white = game.score_tuple()
            print(f"black {black} - white {white}")

        elif cmd == "log":
            if not game.log:
                print("(no events)")
            else:
                for line in game.log[-20:]:
                    print(" ", line)

        elif cmd == "reset":
            game.reset()
            print(render_game_ascii(game))

        elif not cmd:
            continue

        else:
            print("Unknown command")


def run_computer_turns(game, think_delay: float = 0.0) -> None:
    # The computer may move several times in a row if the human has to pass.
    while game.is_computer_turn:
        if think_delay > 0:
            time.sleep(think_delay)
        result = game.play_computer_move()
        for e in result.events:
            print(e)
        print(render_game_ascii(game))


def show_moves(game) -> None:
    if game.is_over:
        print("(game over)")
        return
    moves = sorted(game.legal_moves(), key=lambda h: (h.q, h.r))
    print(f"{len(moves)} legal move(s) for {game.current_player}:")
    for h in moves:
        print(f"  {h.q} {h.r} {h.s}")


def handle_play(game, cmd: str) -> None:
    parts = cmd.split()
    if len(parts) not in (3, 4):
        print("Usage: play <q> <r> [<s>]")
        return

    try:
        coord = Hex.parse(" ".join(parts[1:]))
    except ValueError as exc:
        print(f"ERROR: {exc}")
        return

    try:
        result = game.attempt_move(coord)
    except IllegalMoveError as exc:
        print(f"ERROR: {exc.message}")
        return

    for e in result.events:
        print(e)
    print(render_game_ascii(game))


def handle_ai(game) -> None:
    if game.is_over:
        print("ERROR: The game is over.")
        return
    result = game.play_computer_move()
    for e in result.events:
        print(e)
    print(render_game_ascii(game))


def handle_hint(game) -> None:
    if game.is_over:
        print("(game over)")
        return
    h = game.request_computer_move(Difficulty.HARD)
    print(f"Suggested: {h.q} {h.r} {h.s}")


def handle_difficulty(game, cmd: str) -> None:
    parts = cmd.split()
    if len(parts) != 2:
        current = game.computer.label if game.computer else "(no computer player)"
        print(f"Difficulty: {current}")
        print("Usage: difficulty <easy|medium|hard>")
        return
    try:
        level = Difficulty.parse(parts[1])
    except ValueError as exc:
        print(f"ERROR: {exc}")
        return
    if game.computer is None:
        print("ERROR: this game has no computer player.")
        return
    game.computer.set_strength(level)
    print(f"Difficulty set to {level}.")


if __name__ == "__main__":
    computer = sys.argv[1] if len(sys.argv) > 1 else "white"
    run_repl(build_game(computer=None if computer == "none" else computer),
             think_delay=config.think_delay())
