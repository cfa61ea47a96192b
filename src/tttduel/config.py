"""Environment-first configuration for the front ends.

Every value can be set through a TTTDUEL_* environment variable; command-line
flags override whatever load_config() returns.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .session import FIRST_CHOICES

DEFAULT_THINK_DELAY = 0.18


@dataclass
class GameConfig:
    first: str = "human"
    think_delay: float = DEFAULT_THINK_DELAY
    results_dir: Path = Path("results")


def load_config() -> GameConfig:
    """Build a GameConfig from TTTDUEL_FIRST, TTTDUEL_THINK_DELAY and TTTDUEL_RESULTS_DIR."""
    first = os.getenv("TTTDUEL_FIRST", "human").strip().lower()
    if first not in FIRST_CHOICES:
        raise ValueError(f"TTTDUEL_FIRST must be one of {FIRST_CHOICES}, got {first!r}")

    raw_delay = os.getenv("TTTDUEL_THINK_DELAY")
    delay = DEFAULT_THINK_DELAY
    if raw_delay:
        try:
            delay = float(raw_delay)
        except ValueError:
            raise ValueError(f"TTTDUEL_THINK_DELAY is not a number: {raw_delay!r}") from None
        if delay < 0:
            raise ValueError(f"TTTDUEL_THINK_DELAY must be >= 0, got {delay}")

    results = os.getenv("TTTDUEL_RESULTS_DIR")
    return GameConfig(
        first=first,
        think_delay=delay,
        results_dir=Path(results) if results else Path("results"),
    )
