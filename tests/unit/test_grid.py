import numpy as np
import pytest

from edge_shift_puzzle.game.grid import (
    EMPTY,
    apply_clears_and_shifts,
    can_place,
    can_place_anywhere,
    clear_only,
    compute_clears,
    displacement,
    empty_board,
    find_placements,
    occupied_count,
    place,
    resolve_all_clears,
    translate,
)

LINE3 = ((0, 0), (1, 0), (2, 0))
SQUARE2 = ((0, 0), (1, 0), (0, 1), (1, 1))


def _fill(board, rows=(), cols=(), value=1):
    out = board.copy()
    for r in rows:
        out[r, :] = value
    for c in cols:
        out[:, c] = value
    return out


def test_empty_board_rejects_bad_dimensions():
    assert empty_board(12, 12).shape == (12, 12)
    with pytest.raises(ValueError):
        empty_board(0, 12)
    with pytest.raises(ValueError):
        empty_board(12, -1)


def test_can_place_bounds_and_overlap(board):
    assert can_place(board, LINE3, 0, 0)
    assert can_place(board, LINE3, 9, 11)
    assert not can_place(board, LINE3, 10, 0)
    assert not can_place(board, LINE3, -1, 0)
    assert not can_place(board, LINE3, 0, 12)
    blocked = place(board, SQUARE2, 4, 4, 3)
    assert not can_place(blocked, LINE3, 3, 5)
    assert can_place(blocked, LINE3, 6, 5)


def test_place_returns_copy(board):
    placed = place(board, SQUARE2, 2, 3, 7)
    assert occupied_count(board) == 0
    assert occupied_count(placed) == 4
    assert placed[3, 2] == 7 and placed[4, 3] == 7


def test_interior_row_clears_without_shift(board):
    clears = compute_clears(_fill(board, rows=[6]))
    assert clears.full_rows == {6}
    assert clears.full_cols == frozenset()
    assert (clears.top, clears.bottom, clears.left, clears.right) == (0, 0, 0, 0)
    assert displacement(clears) == (0, 0)


def test_top_left_clear_moves_cell_toward_cleared_edges(board):
    g = _fill(board, rows=[0], cols=[0])
    clears = compute_clears(g)
    assert 0 in clears.full_rows and 0 in clears.full_cols
    assert clears.top == 1 and clears.left == 1
    g[5, 5] = 2
    out = apply_clears_and_shifts(g, clears.full_rows, clears.full_cols, clears)
    assert out[4, 4] == 2
    assert out[5, 5] == EMPTY
    assert occupied_count(out) == 1


def test_opposite_edges_cancel(board):
    clears = compute_clears(_fill(board, rows=[0, 11]))
    assert clears.top == 1 and clears.bottom == 1
    assert clears.displacement[1] == 0
    assert clears.combo == 2 and clears.edge_count == 2


def test_edge_runs_count_contiguous_lines_only(board):
    clears = compute_clears(_fill(board, rows=[0, 1, 3]))
    assert clears.full_rows == {0, 1, 3}
    assert clears.top == 2
    assert clears.bottom == 0


def test_bottom_and_right_shifts_push_content_down_and_right(board):
    g = _fill(board, rows=[10, 11])
    g[5, 5] = 4
    clears = compute_clears(g)
    assert clears.bottom == 2 and clears.displacement == (0, 2)
    out = apply_clears_and_shifts(g, clears.full_rows, clears.full_cols, clears)
    assert out[7, 5] == 4 and occupied_count(out) == 1

    g = _fill(board, cols=[11])
    g[5, 5] = 4
    clears = compute_clears(g)
    assert clears.right == 1 and clears.displacement == (1, 0)
    out = apply_clears_and_shifts(g, clears.full_rows, clears.full_cols, clears)
    assert out[5, 6] == 4 and occupied_count(out) == 1


def test_no_wrap_after_top_left_clear(board):
    g = _fill(board, rows=[0], cols=[0])
    g[1, 1] = 5
    clears = compute_clears(g)
    out = apply_clears_and_shifts(g, clears.full_rows, clears.full_cols, clears)
    assert out[0, 0] == 5
    assert not out[11, :].any()
    assert not out[:, 11].any()


def test_translate_drops_cells_leaving_the_board(board):
    g = board.copy()
    g[0, 0] = 1
    g[0, 5] = 1
    g[5, 0] = 1
    g[3, 3] = 1
    out = translate(g, -1, -1)
    assert occupied_count(out) == 1
    assert out[2, 2] == 1


def test_clear_only_empties_union_of_lines(board):
    g = _fill(board, rows=[2], cols=[7])
    g[5, 5] = 9
    out = clear_only(g, {2}, {7})
    assert occupied_count(out) == 1
    assert out[5, 5] == 9
    assert occupied_count(g) == 12 + 11 + 1


def test_zero_displacement_returns_cleared_board(board):
    g = _fill(board, rows=[0, 11])
    g[5, 5] = 1
    clears = compute_clears(g)
    out = apply_clears_and_shifts(g, clears.full_rows, clears.full_cols, clears)
    assert out[5, 5] == 1 and occupied_count(out) == 1


def test_resolve_all_clears_accumulates(board):
    g = _fill(board, rows=[0])
    g[5, 5] = 1
    result = resolve_all_clears(g)
    assert result.passes == 1
    assert (result.rows, result.cols, result.edge) == (1, 0, 1)
    assert result.score == 150
    assert result.max_combo == 1
    assert result.board[4, 5] == 1
    assert compute_clears(result.board).combo == 0


def test_resolve_full_board(board):
    result = resolve_all_clears(_fill(board, rows=range(12)))
    assert occupied_count(result.board) == 0
    assert result.max_combo == 24
    assert result.edge == 48
    assert result.score == 24 * 100 + 48 * 50 + 23 * 50


def test_resolve_stable_board_is_noop(board):
    g = place(board, SQUARE2, 3, 3, 1)
    result = resolve_all_clears(g)
    assert result.passes == 0 and result.score == 0
    assert np.array_equal(result.board, g)


def test_cascade_terminates_on_random_boards(random_boards):
    for g in random_boards:
        result = resolve_all_clears(g)
        assert result.passes <= g.shape[0] + g.shape[1]
        assert compute_clears(result.board).combo == 0


def test_find_placements(board):
    assert len(find_placements(board, SQUARE2)) == 11 * 11
    assert find_placements(board, SQUARE2, max_results=3) == [(0, 0), (1, 0), (2, 0)]
    full = _fill(board, rows=range(12))
    assert not can_place_anywhere(full, ((0, 0),))
    full[6, 6] = EMPTY
    assert find_placements(full, ((0, 0),)) == [(6, 6)]
