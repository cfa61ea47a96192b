#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import time
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from tttduel.board import O, X, apply_move, new_board
from tttduel.search import find_best_move


def ci95(times: List[float]) -> Tuple[float, float]:
    """Mean and normal-approximation 95% half-width of the timings."""
    arr = np.asarray(times, dtype=float)
    if arr.size == 0:
        return (float("nan"), float("nan"))
    spread = arr.std(ddof=1) if arr.size > 1 else 0.0
    return float(arr.mean()), float(1.96 * spread / np.sqrt(arr.size))


@dataclass
class Config:
    repeats: int = 5


def _time(fn, repeats: int) -> List[float]:
    times: List[float] = []
    for _ in range(repeats):
        t0 = time.perf_counter()
        fn()
        times.append(time.perf_counter() - t0)
    return times


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Time full-depth searches")
    p.add_argument("--repeats", type=int, default=Config.repeats)
    ns = p.parse_args(argv)
    cfg = Config(repeats=ns.repeats)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    empty = new_board()
    after_center = apply_move(empty, 4, X)
    cases = {
        "empty_board_x": lambda: find_best_move(empty, X),
        "center_opening_o": lambda: find_best_move(after_center, O),
    }
    for name, fn in cases.items():
        m, h = ci95(_time(fn, cfg.repeats))
        logging.info("%s: mean=%.4fs ± %.4fs (95%% CI, N=%d)", name, m, h, cfg.repeats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
