"""
Exact minimax search from the perspective of a given mark.
Scoring:
- A win for the searching mark scores WIN_SCORE - depth (win sooner).
- A win for the opponent scores depth - WIN_SCORE (lose later).
- A draw scores 0.
No pruning and no caching: the full tree from the empty board has well under
a million nodes, so every call enumerates it completely.
"""
import logging
from typing import List, Optional

from .board import EMPTY, check_board, empty_cells, get_winner, opponent

NO_MOVE = -1
WIN_SCORE = 10


class _Counter:
    def __init__(self) -> None:
        self.nodes = 0


def minimax(board: List[int], depth: int, maximizing: bool, mark: int,
            counter: Optional[_Counter] = None) -> int:
    """Score `board` for `mark`; `maximizing` says whose ply it is.

    `board` is mutated during the search and restored before returning.
    """
    if counter is not None:
        counter.nodes += 1
    w = get_winner(board)
    if w != EMPTY:
        return WIN_SCORE - depth if w == mark else depth - WIN_SCORE
    if EMPTY not in board:
        return 0

    if maximizing:
        best = -WIN_SCORE - 1
        for i in list(empty_cells(board)):
            board[i] = mark
            best = max(best, minimax(board, depth + 1, False, mark, counter))
            board[i] = EMPTY
        return best
    best = WIN_SCORE + 1
    opp = opponent(mark)
    for i in list(empty_cells(board)):
        board[i] = opp
        best = min(best, minimax(board, depth + 1, True, mark, counter))
        board[i] = EMPTY
    return best


def score_moves(board: List[int], mark: int) -> List[Optional[int]]:
    """Root score of every cell for `mark`; None where the cell is occupied."""
    check_board(board)
    work = list(board)
    scores: List[Optional[int]] = [None] * 9
    for i in list(empty_cells(work)):
        work[i] = mark
        scores[i] = minimax(work, 0, False, mark)
        work[i] = EMPTY
    return scores


def find_best_move(board: List[int], mark: int) -> int:
    check_board(board)
    work = list(board)
    counter = _Counter()
    best_val: Optional[int] = None
    best_move = NO_MOVE
    for i in list(empty_cells(work)):
        work[i] = mark
        val = minimax(work, 0, False, mark, counter)
        work[i] = EMPTY
        # first strictly greater wins; ties keep the lower index
        if best_val is None or val > best_val:
            best_val = val
            best_move = i
    logging.debug("searched %d nodes, best_move=%d score=%s", counter.nodes, best_move, best_val)
    return best_move
