import pytest

from tttduel.board import EMPTY, O, X, apply_move, new_board
from tttduel.search import find_best_move, score_moves

CORNERS = {0, 2, 6, 8}
EDGES = {1, 3, 5, 7}


def test_center_opening_answered_with_corner():
    b = apply_move(new_board(), 4, X)
    mv = find_best_move(b, O)
    assert mv in CORNERS
    assert mv not in EDGES
    assert mv == 0


def test_edge_replies_to_center_lose():
    b = apply_move(new_board(), 4, X)
    scores = score_moves(b, O)
    assert all(scores[i] == 0 for i in CORNERS)
    assert all(scores[i] < 0 for i in EDGES)


def test_corner_opening_answered_with_center():
    b = apply_move(new_board(), 0, X)
    assert find_best_move(b, O) == 4


@pytest.mark.parametrize("opening", [1, 3])
def test_edge_opening_reply_is_drawing(opening):
    b = apply_move(new_board(), opening, X)
    mv = find_best_move(b, O)
    assert score_moves(b, O)[mv] == 0


def test_row_completion_vector():
    b = [X, X, EMPTY, O, O, EMPTY, EMPTY, EMPTY, EMPTY]
    assert find_best_move(b, X) == 2
