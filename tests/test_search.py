from tttduel.board import EMPTY, O, X, new_board
from tttduel.search import NO_MOVE, WIN_SCORE, find_best_move, minimax, score_moves


def test_full_board_reports_no_move():
    draw = [1, 2, 1, 1, 2, 2, 2, 1, 1]
    assert find_best_move(draw, X) == NO_MOVE
    assert find_best_move(draw, O) == -1


def test_takes_immediate_win():
    b = [X, X, EMPTY, O, O, EMPTY, EMPTY, EMPTY, EMPTY]
    assert find_best_move(b, X) == 2
    # same board, O completes its own row instead of blocking
    assert find_best_move(b, O) == 5


def test_blocks_immediate_threat():
    b = [X, X, EMPTY, EMPTY, O, EMPTY, EMPTY, EMPTY, EMPTY]
    assert find_best_move(b, O) == 2


def test_search_does_not_modify_board():
    b = [X, EMPTY, EMPTY, EMPTY, O, EMPTY, EMPTY, EMPTY, X]
    before = b[:]
    find_best_move(b, O)
    score_moves(b, O)
    assert b == before


def test_terminal_scores_depend_on_depth():
    x_win = [1, 1, 1, 2, 2, 0, 0, 0, 0]
    assert minimax(x_win[:], 3, True, X) == WIN_SCORE - 3
    assert minimax(x_win[:], 3, False, O) == 3 - WIN_SCORE
    draw = [1, 2, 1, 1, 2, 2, 2, 1, 1]
    assert minimax(draw[:], 5, True, X) == 0


def test_score_moves_marks_occupied_cells_none():
    b = [X, X, EMPTY, O, O, EMPTY, EMPTY, EMPTY, EMPTY]
    scores = score_moves(b, X)
    assert [s is None for s in scores] == [v != EMPTY for v in b]
    assert scores[2] == WIN_SCORE
    assert max(s for s in scores if s is not None) == WIN_SCORE


def test_best_move_is_first_strict_maximum():
    b = [EMPTY, EMPTY, EMPTY, EMPTY, X, EMPTY, EMPTY, EMPTY, EMPTY]
    scores = score_moves(b, O)
    best = max(s for s in scores if s is not None)
    assert find_best_move(b, O) == scores.index(best)


def test_prefers_faster_win():
    # X wins now at 6; 8 only sets up a win later
    b = [X, O, O, X, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY]
    scores = score_moves(b, X)
    assert scores[6] == WIN_SCORE
    assert all(s < WIN_SCORE for i, s in enumerate(scores) if s is not None and i != 6)
    assert find_best_move(b, X) == 6


def test_empty_board_opening_is_first_cell():
    # every opening draws under perfect play, so the lowest index wins the tie
    assert find_best_move(new_board(), X) == 0


def test_search_accepts_tuple_board():
    b = (X, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, EMPTY)
    assert find_best_move(b, O) == 4
    scores = score_moves(b, O)
    assert scores[0] is None
    assert scores[4] == 0
