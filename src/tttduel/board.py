"""
Board model: representation, move application, win/draw detection.
Notes:
- A board is a list of 9 cells: 0=empty, 1=X, 2=O. X always starts.
- Index layout is row-major:
      0 1 2
      3 4 5
      6 7 8
- Moves never modify the board passed in; apply_move returns a new list.
"""
from dataclasses import dataclass
from typing import Iterator, List

EMPTY = 0
X = 1
O = 2

MARKS = (X, O)
MARK_SYMBOLS = {EMPTY: '.', X: 'X', O: 'O'}

WIN_PATTERNS = [
    [0, 1, 2], [3, 4, 5], [6, 7, 8],
    [0, 3, 6], [1, 4, 7], [2, 5, 8],
    [0, 4, 8], [2, 4, 6]
]

IN_PROGRESS = 'in_progress'
WIN = 'win'
DRAW = 'draw'

_CHAR_TO_CELL = {
    '0': EMPTY, '.': EMPTY, '-': EMPTY, '_': EMPTY,
    '1': X, 'x': X,
    '2': O, 'o': O,
}


class InvalidMove(ValueError):
    """A move that cannot be applied: bad index, occupied cell, or wrong turn."""

    def __init__(self, index: int, reason: str):
        super().__init__(f"invalid move {index}: {reason}")
        self.index = index
        self.reason = reason


@dataclass(frozen=True)
class Outcome:
    kind: str
    winner: int = EMPTY

    @property
    def is_over(self) -> bool:
        return self.kind != IN_PROGRESS

    def __str__(self) -> str:
        if self.kind == WIN:
            return f"win({MARK_SYMBOLS[self.winner]})"
        return self.kind


def check_board(board: List[int]) -> None:
    assert len(board) == 9, f"board must have 9 cells, got {len(board)}"
    assert all(v in (EMPTY, X, O) for v in board), f"unknown cell value in {board!r}"


def new_board() -> List[int]:
    return [EMPTY] * 9


def opponent(mark: int) -> int:
    return O if mark == X else X


def empty_cells(board: List[int]) -> Iterator[int]:
    for i, v in enumerate(board):
        if v == EMPTY:
            yield i


def apply_move(board: List[int], index: int, mark: int) -> List[int]:
    check_board(board)
    if mark not in MARKS:
        raise InvalidMove(index, f"unknown mark {mark!r}")
    if not isinstance(index, int) or not 0 <= index <= 8:
        raise InvalidMove(index, "index out of range")
    if board[index] != EMPTY:
        raise InvalidMove(index, "cell is occupied")
    b = list(board)
    b[index] = mark
    return b


def get_winner(board: List[int]) -> int:
    for pattern in WIN_PATTERNS:
        a, b, c = pattern
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return v
    return EMPTY


def evaluate(board: List[int]) -> Outcome:
    check_board(board)
    w = get_winner(board)
    if w != EMPTY:
        return Outcome(WIN, w)
    if EMPTY not in board:
        return Outcome(DRAW)
    return Outcome(IN_PROGRESS)


def current_player(board: List[int]) -> int:
    return X if board.count(X) == board.count(O) else O


def is_valid_state(board: List[int]) -> bool:
    """True if the board can arise from alternating play with X first."""
    x_count, o_count = board.count(X), board.count(O)
    if not (x_count == o_count or x_count == o_count + 1):
        return False

    def count_wins(p: int) -> int:
        return sum(1 for pat in WIN_PATTERNS if all(board[i] == p for i in pat))

    x_wins, o_wins = count_wins(X), count_wins(O)
    if x_wins and o_wins:
        return False
    if x_wins and x_count != o_count + 1:
        return False
    if o_wins and x_count != o_count:
        return False
    return True


def serialize_board(board: List[int]) -> str:
    return ''.join(str(cell) for cell in board)


def parse_board(text: str) -> List[int]:
    """Parse a 9-character board string (0/1/2 or ./X/O)."""
    raw = text.strip()
    if len(raw) != 9:
        raise ValueError(f"board string must have 9 characters, got {len(raw)}")
    cells = []
    for ch in raw.lower():
        if ch not in _CHAR_TO_CELL:
            raise ValueError(f"unknown board character {ch!r}")
        cells.append(_CHAR_TO_CELL[ch])
    return cells


def parse_mark(text: str) -> int:
    key = text.strip().lower()
    if key in ('x', '1'):
        return X
    if key in ('o', '2'):
        return O
    raise ValueError(f"unknown mark {text!r}")
