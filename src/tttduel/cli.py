from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, TextIO

from .board import (
    MARK_SYMBOLS,
    InvalidMove,
    current_player,
    evaluate,
    is_valid_state,
    parse_board,
    parse_mark,
)
from .config import load_config
from .render import render_board, score_line, status_line
from .search import NO_MOVE, find_best_move, score_moves
from .selfplay import POLICIES, SelfPlayArgs, run_selfplay
from .session import FIRST_CHOICES, GameSession

BOARD_HELP = "Board string, 9 chars of 0/1/2 or ./X/O, e.g. 100020000"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe against a minimax opponent")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--seed", type=int, default=None, help="Seed for random self-play opponents")

    p_play = sub.add_parser("play", help="Play an interactive game in the terminal")
    p_play.add_argument(
        "--first", choices=list(FIRST_CHOICES), default=None,
        help="Who moves first and plays X (default: $TTTDUEL_FIRST or human)",
    )
    p_play.add_argument(
        "--delay", type=float, default=None,
        help="Seconds to show 'thinking' before the computer moves (default: $TTTDUEL_THINK_DELAY)",
    )

    p_eval = sub.add_parser("evaluate", help="Report whether a board is won, drawn or in progress")
    p_eval.add_argument("--board", required=True, help=BOARD_HELP)

    p_best = sub.add_parser("best-move", help="Compute the optimal move for a mark")
    p_best.add_argument("--board", required=True, help=BOARD_HELP)
    p_best.add_argument("--mark", default=None, help="X or O (default: side to move)")

    p_scores = sub.add_parser("scores", help="Show the minimax score of every empty cell")
    p_scores.add_argument("--board", required=True, help=BOARD_HELP)
    p_scores.add_argument("--mark", default=None, help="X or O (default: side to move)")

    p_self = sub.add_parser("selfplay", help="Play engine matches and tally the results")
    p_self.add_argument("--games", type=int, default=10, help="Number of games (default: 10)")
    p_self.add_argument("--x", dest="x_policy", choices=list(POLICIES), default="minimax")
    p_self.add_argument("--o", dest="o_policy", choices=list(POLICIES), default="random")
    p_self.add_argument(
        "--out", type=Path, default=None,
        help="Export directory for games.csv and manifest.json (default: no export)",
    )
    p_self.add_argument(
        "--save", action="store_true",
        help="Export to $TTTDUEL_RESULTS_DIR (default: results) when --out is not given",
    )
    p_self.add_argument(
        "--format", choices=["csv", "parquet", "both"], default="csv",
        help="Export format: csv (default), parquet, both; parquet requires pandas+pyarrow",
    )
    return p


def _board_and_mark(raw_board: str, raw_mark: Optional[str]):
    board = parse_board(raw_board)
    if not is_valid_state(board):
        raise ValueError("board is not a valid reachable state")
    mark = parse_mark(raw_mark) if raw_mark else current_player(board)
    return board, mark


def _show(session: GameSession, out: TextIO) -> None:
    print(render_board(session.board), file=out)
    print(status_line(session), file=out)
    print(score_line(session.scores), file=out)


def run_interactive(session: GameSession, delay: float,
                    inp: Optional[TextIO] = None, out: Optional[TextIO] = None) -> None:
    """Terminal loop: 1-9 plays a cell, u undoes, n starts over, q quits."""
    inp = inp or sys.stdin
    out = out or sys.stdout
    _show(session, out)
    while True:
        if session.is_computer_turn():
            # the pause only keeps the "thinking" status visible
            if delay > 0:
                time.sleep(delay)
            session.computer_turn()
            _show(session, out)
            continue
        line = inp.readline()
        if not line:
            break
        cmd = line.strip().lower()
        if cmd == "q":
            break
        if cmd == "n":
            session.new_game()
        elif cmd == "u":
            if not session.undo_turn():
                logging.warning("Nothing to undo")
                continue
        elif len(cmd) == 1 and cmd in "123456789":
            try:
                session.play_human(int(cmd) - 1)
            except InvalidMove as e:
                logging.warning("%s", e)
                continue
        else:
            logging.warning("Unknown input %r: use 1-9, u (undo), n (new game), q (quit)", cmd)
            continue
        _show(session, out)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tttduel"))
        except Exception:
            print("unknown")
        return 0

    if ns.cmd == "play":
        try:
            cfg = load_config()
        except ValueError as e:
            logging.error("%s", e)
            return 2
        first = ns.first or cfg.first
        delay = ns.delay if ns.delay is not None else cfg.think_delay
        if delay < 0:
            logging.error("Delay must be >= 0: %s", delay)
            return 2
        session = GameSession()
        session.set_first(first)
        run_interactive(session, delay)
        logging.info("Final tally: %s", score_line(session.scores))
        return 0

    if ns.cmd in ("evaluate", "best-move", "scores"):
        try:
            board, mark = _board_and_mark(ns.board, getattr(ns, "mark", None))
        except ValueError as e:
            logging.error("Invalid board or mark: %s", e)
            return 2
        result = evaluate(board)
        if ns.cmd == "evaluate":
            winner = MARK_SYMBOLS[result.winner] if result.winner else "-"
            print(f"outcome={result.kind} winner={winner}")
            return 0
        if ns.cmd == "best-move":
            move = find_best_move(board, mark) if not result.is_over else NO_MOVE
            print(f"mark={MARK_SYMBOLS[mark]} best_move={move}")
            return 0
        scores = score_moves(board, mark) if not result.is_over else [None] * 9
        print(f"mark={MARK_SYMBOLS[mark]}")
        for i, s in enumerate(scores):
            if s is not None:
                print(f"cell={i} score={s}")
        return 0

    if ns.cmd == "selfplay":
        if ns.games < 0:
            logging.error("Games must be >= 0: %s", ns.games)
            return 2
        out = ns.out
        if out is None and ns.save:
            try:
                out = load_config().results_dir
            except ValueError as e:
                logging.error("%s", e)
                return 2
        try:
            summary = run_selfplay(SelfPlayArgs(
                games=ns.games,
                x_policy=ns.x_policy,
                o_policy=ns.o_policy,
                seed=ns.seed if ns.seed is not None else 42,
                out=out,
                format=ns.format,
                cli_argv=list(argv) if argv is not None else None,
            ))
        except RuntimeError as e:
            logging.error("%s", e)
            return 2
        print(f"games={summary['games']} x={summary['x']} o={summary['o']} draw={summary['draw']}")
        if out is not None:
            logging.info("Exported results to: %s", summary["out"])
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
