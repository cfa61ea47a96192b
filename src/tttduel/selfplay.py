"""
Self-play harness: engine-vs-engine and engine-vs-random matches.

Games are tallied by outcome and can be exported as CSV (and Parquet when
pandas and pyarrow are installed) alongside a manifest.json.
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from .board import (
    EMPTY,
    MARK_SYMBOLS,
    WIN,
    X,
    Outcome,
    apply_move,
    current_player,
    empty_cells,
    evaluate,
    new_board,
    serialize_board,
)
from .search import find_best_move

POLICIES = ("minimax", "random")
RESULTS_VERSION = "1.0.0"


@dataclass
class GameRecord:
    moves: List[int]
    board: List[int]
    outcome: Outcome


@dataclass
class SelfPlayArgs:
    games: int = 10
    x_policy: str = "minimax"
    o_policy: str = "random"
    seed: int = 42
    out: Optional[Path] = None
    format: str = "csv"  # one of: "csv", "parquet", "both"
    cli_argv: Optional[List[str]] = field(default=None)


def choose_move(board: List[int], mark: int, policy: str, rng: np.random.Generator) -> int:
    if policy == "minimax":
        return find_best_move(board, mark)
    if policy == "random":
        return int(rng.choice(list(empty_cells(board))))
    raise ValueError(f"Unknown policy: {policy}")


def play_game(x_policy: str, o_policy: str, rng: np.random.Generator) -> GameRecord:
    board = new_board()
    moves: List[int] = []
    result = evaluate(board)
    while not result.is_over:
        mark = current_player(board)
        policy = x_policy if mark == X else o_policy
        mv = choose_move(board, mark, policy, rng)
        board = apply_move(board, mv, mark)
        moves.append(mv)
        result = evaluate(board)
    return GameRecord(moves=moves, board=board, outcome=result)


def _result_key(result: Outcome) -> str:
    if result.kind == WIN:
        return "x" if result.winner == X else "o"
    return "draw"


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def _record_row(game_id: int, rec: GameRecord) -> Dict[str, Any]:
    return {
        "game": game_id,
        "moves": " ".join(map(str, rec.moves)),
        "plies": len(rec.moves),
        "final_board": serialize_board(rec.board),
        "result": _result_key(rec.outcome),
        "winner": MARK_SYMBOLS[rec.outcome.winner] if rec.outcome.winner != EMPTY else "",
    }


def run_selfplay(args: SelfPlayArgs) -> Dict[str, Any]:
    for p in (args.x_policy, args.o_policy):
        if p not in POLICIES:
            raise ValueError(f"Unknown policy: {p}")
    if args.games < 0:
        raise ValueError(f"games must be >= 0, got {args.games}")
    fmt = (args.format or "csv").lower()
    if fmt not in {"csv", "parquet", "both"}:
        raise ValueError(f"Unknown export format: {args.format}")
    have_parquet = (importlib.util.find_spec('pandas') is not None
                    and importlib.util.find_spec('pyarrow') is not None)
    if args.out is not None and fmt == "parquet" and not have_parquet:
        # fail before playing or writing anything
        raise RuntimeError(
            "Parquet dependencies not available (install pandas and pyarrow). "
            "Use pip install .[parquet] to enable parquet support."
        )

    rng = np.random.default_rng(args.seed)
    tallies = {"x": 0, "o": 0, "draw": 0}
    rows: List[Dict[str, Any]] = []
    logging.info("Playing %d games: X=%s O=%s seed=%d",
                 args.games, args.x_policy, args.o_policy, args.seed)
    for g in range(args.games):
        rec = play_game(args.x_policy, args.o_policy, rng)
        tallies[_result_key(rec.outcome)] += 1
        rows.append(_record_row(g, rec))
        logging.debug("game %d: moves=%s result=%s", g, rec.moves, rec.outcome)

    summary: Dict[str, Any] = {
        "games": args.games,
        "x_policy": args.x_policy,
        "o_policy": args.o_policy,
        "seed": args.seed,
        **tallies,
    }
    logging.info("Results: X=%d O=%d draw=%d", tallies["x"], tallies["o"], tallies["draw"])
    if args.out is not None:
        summary["out"] = str(_export(args, fmt, have_parquet, rows, summary))
    return summary


def _export(args: SelfPlayArgs, fmt: str, have_parquet: bool,
            rows: List[Dict[str, Any]], summary: Dict[str, Any]) -> Path:
    out = args.out
    assert out is not None
    out.mkdir(parents=True, exist_ok=True)
    games_csv = out / "games.csv"
    games_parquet = out / "games.parquet"
    fieldnames = ["game", "moves", "plies", "final_board", "result", "winner"]

    wrote_csv = False
    wrote_parquet = False
    if fmt in {"csv", "both"}:
        with games_csv.open('w', newline='') as f:
            w = csv.DictWriter(f, fieldnames=fieldnames)
            w.writeheader()
            for r in rows:
                w.writerow(r)
        wrote_csv = True
        logging.info("Wrote %s (%d rows)", games_csv, len(rows))

    if fmt in {"parquet", "both"}:
        if have_parquet:
            import pandas as pd  # type: ignore

            pd.DataFrame(rows, columns=fieldnames).to_parquet(games_parquet)
            wrote_parquet = True
            logging.info("Wrote %s", games_parquet)
        else:
            logging.warning(
                "Parquet dependencies not available (install pandas and pyarrow). "
                "Proceeding with CSV only; manifest will record parquet_written=false."
            )

    files: Dict[str, Any] = {
        "games_csv": str(games_csv) if wrote_csv else None,
        "games_parquet": str(games_parquet) if wrote_parquet else None,
    }
    checksums = {label: _sha256_file(Path(p)) for label, p in files.items() if p is not None}
    manifest = {
        "results_version": RESULTS_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "args": {
            "games": args.games,
            "x_policy": args.x_policy,
            "o_policy": args.o_policy,
            "seed": args.seed,
            "format": fmt,
        },
        "cli_argv": args.cli_argv,
        "summary": {k: summary[k] for k in ("x", "o", "draw")},
        "files": files,
        "checksums": checksums,
        "parquet_written": wrote_parquet,
    }
    (out / "manifest.json").write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote manifest.json to %s", out)
    return out
