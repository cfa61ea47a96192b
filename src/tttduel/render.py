"""Plain-text rendering of a session for the terminal front end."""
from __future__ import annotations

from typing import Dict, List

from .board import EMPTY, MARK_SYMBOLS, WIN
from .session import GameSession


def render_board(board: List[int]) -> str:
    # empty cells show the key that plays them (1-9)
    cells = [MARK_SYMBOLS[v] if v != EMPTY else str(i + 1) for i, v in enumerate(board)]
    rows = [" | ".join(cells[r * 3:r * 3 + 3]) for r in range(3)]
    return "\n---------\n".join(rows)


def status_line(session: GameSession) -> str:
    if session.game_over:
        result = session.outcome()
        if result.kind == WIN and result.winner == session.human:
            return "You win!"
        if result.kind == WIN:
            return "Computer wins. Try again."
        return "Draw."
    if session.current == session.human:
        return f"Your turn ({MARK_SYMBOLS[session.human]})"
    return "Computer is thinking..."


def score_line(scores: Dict[str, int]) -> str:
    return (
        f"Wins - You: {scores['human']} | Computer: {scores['computer']}"
        f" | Draws: {scores['draw']}"
    )
