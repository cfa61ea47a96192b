"""
Game session: the state a front end keeps between moves.

A session owns the current board, whose turn it is, which mark belongs to the
human and which to the computer, the undo history and the running tallies.
The board model and the search engine stay stateless; everything mutable
lives here.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from .board import (
    DRAW,
    O,
    WIN,
    X,
    InvalidMove,
    Outcome,
    apply_move,
    evaluate,
    new_board,
    opponent,
)
from .search import NO_MOVE, find_best_move

FIRST_CHOICES = ("human", "computer")


def _empty_scores() -> Dict[str, int]:
    return {"human": 0, "computer": 0, "draw": 0}


@dataclass
class GameSession:
    human: int = X
    computer: int = O
    board: List[int] = field(default_factory=new_board)
    current: int = X
    game_over: bool = False
    history: List[List[int]] = field(default_factory=list)
    scores: Dict[str, int] = field(default_factory=_empty_scores)

    def __post_init__(self) -> None:
        if self.human not in (X, O) or self.computer != opponent(self.human):
            raise ValueError("human and computer must hold opposite marks")

    def new_game(self) -> None:
        self.board = new_board()
        self.history = []
        self.game_over = False
        # X always starts, whoever holds it
        self.current = X
        logging.debug("new game: human=%d computer=%d", self.human, self.computer)

    def set_first(self, who: str) -> None:
        if who not in FIRST_CHOICES:
            raise ValueError(f"first player must be one of {FIRST_CHOICES}, got {who!r}")
        if who == "human":
            self.human, self.computer = X, O
        else:
            self.human, self.computer = O, X
        self.new_game()

    def outcome(self) -> Outcome:
        return evaluate(self.board)

    def is_human_turn(self) -> bool:
        return not self.game_over and self.current == self.human

    def is_computer_turn(self) -> bool:
        return not self.game_over and self.current == self.computer

    def play(self, index: int, mark: int) -> Outcome:
        if self.game_over:
            raise InvalidMove(index, "game is over")
        board = apply_move(self.board, index, mark)
        self.history.append(self.board)
        self.board = board
        self.current = opponent(mark)
        result = evaluate(self.board)
        if result.is_over:
            self._finish(result)
        return result

    def play_human(self, index: int) -> Outcome:
        if self.game_over:
            raise InvalidMove(index, "game is over")
        if self.current != self.human:
            raise InvalidMove(index, "not the human's turn")
        return self.play(index, self.human)

    def computer_turn(self) -> int:
        if not self.is_computer_turn():
            return NO_MOVE
        move = find_best_move(self.board, self.computer)
        if move != NO_MOVE:
            self.play(move, self.computer)
        return move

    def undo(self) -> bool:
        if not self.history or self.game_over:
            return False
        self.board = self.history.pop()
        self.current = X if self.board.count(X) <= self.board.count(O) else O
        self.game_over = False
        return True

    def undo_turn(self) -> bool:
        """Undo back to the human's previous turn (usually the computer's reply too)."""
        if not self.undo():
            return False
        while self.current != self.human and self.history:
            self.undo()
        return True

    def _finish(self, result: Outcome) -> None:
        self.game_over = True
        if result.kind == WIN:
            key = "human" if result.winner == self.human else "computer"
            self.scores[key] += 1
        elif result.kind == DRAW:
            self.scores["draw"] += 1
        logging.info("game over: %s", result)
