"""tttduel package.

Board model, exact minimax search, a game session for front ends,
a self-play harness and a terminal CLI.

Convenience imports are exposed for common workflows.
"""

from .board import EMPTY, O, X, InvalidMove, Outcome, apply_move, empty_cells, evaluate
from .search import NO_MOVE, find_best_move
from .session import GameSession

__all__ = [
    "EMPTY",
    "X",
    "O",
    "InvalidMove",
    "Outcome",
    "apply_move",
    "evaluate",
    "empty_cells",
    "find_best_move",
    "NO_MOVE",
    "GameSession",
]
