from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Iterable, List, Optional, Tuple

import numpy as np

from .geometry import Coordinate, bounding_size
from .rules import ScoringRules


logger = logging.getLogger(__name__)

EMPTY = 0
BOARD_DTYPE = np.int16

Board = np.ndarray


@dataclass(frozen=True)
class ClearResult:
    """Full lines on a board and the edge-contiguous run at each side."""

    full_rows: frozenset
    full_cols: frozenset
    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0

    @property
    def combo(self) -> int:
        return len(self.full_rows) + len(self.full_cols)

    @property
    def edge_count(self) -> int:
        return self.top + self.bottom + self.left + self.right

    @property
    def displacement(self) -> Tuple[int, int]:
        return displacement(self)


@dataclass(frozen=True, eq=False)
class CascadeResult:
    board: Board
    rows: int = 0
    cols: int = 0
    edge: int = 0
    score: int = 0
    max_combo: int = 0
    passes: int = 0


def empty_board(rows: int, cols: int) -> Board:
    if rows <= 0 or cols <= 0:
        raise ValueError(f"board dimensions must be positive, got {rows}x{cols}")
    return np.zeros((int(rows), int(cols)), dtype=BOARD_DTYPE)


def is_inside(board: Board, col: int, row: int) -> bool:
    rows, cols = board.shape
    return 0 <= row < rows and 0 <= col < cols


def can_place(board: Board, cells: Iterable[Coordinate], col: int, row: int) -> bool:
    for dx, dy in cells:
        c, r = col + dx, row + dy
        if not is_inside(board, c, r):
            return False
        if board[r, c] != EMPTY:
            return False
    return True


def place(board: Board, cells: Iterable[Coordinate], col: int, row: int, color: int) -> Board:
    """Return a copy of `board` with the cells set to `color`.

    Assumes the position was validated with `can_place`.
    """
    out = board.copy()
    for dx, dy in cells:
        out[row + dy, col + dx] = color
    return out


def _edge_run(full: AbstractSet[int], start: int, step: int) -> int:
    run = 0
    while start + run * step in full:
        run += 1
    return run


def compute_clears(board: Board) -> ClearResult:
    rows, cols = board.shape
    occupied = board != EMPTY
    full_rows = frozenset(int(r) for r in np.flatnonzero(np.all(occupied, axis=1)))
    full_cols = frozenset(int(c) for c in np.flatnonzero(np.all(occupied, axis=0)))
    return ClearResult(
        full_rows=full_rows,
        full_cols=full_cols,
        top=_edge_run(full_rows, 0, 1),
        bottom=_edge_run(full_rows, rows - 1, -1),
        left=_edge_run(full_cols, 0, 1),
        right=_edge_run(full_cols, cols - 1, -1),
    )


def clear_only(board: Board, full_rows: Iterable[int], full_cols: Iterable[int]) -> Board:
    out = board.copy()
    rows = sorted(full_rows)
    cols = sorted(full_cols)
    if rows:
        out[rows, :] = EMPTY
    if cols:
        out[:, cols] = EMPTY
    return out


def displacement(shifts: ClearResult) -> Tuple[int, int]:
    """Board translation (dx, dy) for a set of edge shifts.

    A clear at the top or left pulls content up or left; opposite edges
    cancel out.
    """
    return shifts.right - shifts.left, shifts.bottom - shifts.top


def translate(board: Board, dx: int, dy: int) -> Board:
    """Move every cell by (dx, dy); cells leaving the board are dropped."""
    rows, cols = board.shape
    out = np.zeros_like(board)
    r0, r1 = max(0, -dy), min(rows, rows - dy)
    c0, c1 = max(0, -dx), min(cols, cols - dx)
    if r0 < r1 and c0 < c1:
        out[r0 + dy:r1 + dy, c0 + dx:c1 + dx] = board[r0:r1, c0:c1]
    return out


def apply_clears_and_shifts(
    board: Board,
    full_rows: Iterable[int],
    full_cols: Iterable[int],
    shifts: ClearResult,
) -> Board:
    cleared = clear_only(board, full_rows, full_cols)
    dx, dy = displacement(shifts)
    if dx == 0 and dy == 0:
        return cleared
    return translate(cleared, dx, dy)


def resolve_all_clears(board: Board, rules: Optional[ScoringRules] = None) -> CascadeResult:
    """Clear and shift until no row or column is full.

    Each productive pass removes at least one full line of cells, so the
    loop ends within a bounded number of passes.
    """
    rules = rules or ScoringRules()
    rows = cols = edge = score = max_combo = passes = 0
    while True:
        clears = compute_clears(board)
        if clears.combo == 0:
            break
        passes += 1
        rows += len(clears.full_rows)
        cols += len(clears.full_cols)
        edge += clears.edge_count
        score += rules.clear_score(clears.combo, clears.edge_count)
        max_combo = max(max_combo, clears.combo)
        board = apply_clears_and_shifts(board, clears.full_rows, clears.full_cols, clears)
    if passes:
        logger.debug("cascade resolved in %d passes: rows=%d cols=%d edge=%d", passes, rows, cols, edge)
    return CascadeResult(
        board=board,
        rows=rows,
        cols=cols,
        edge=edge,
        score=score,
        max_combo=max_combo,
        passes=passes,
    )


def find_placements(
    board: Board,
    cells: Iterable[Coordinate],
    max_results: Optional[int] = None,
) -> List[Tuple[int, int]]:
    """All valid (col, row) origins, scanned row by row."""
    cells = tuple(cells)
    rows, cols = board.shape
    width, height = bounding_size(cells)
    found: List[Tuple[int, int]] = []
    for row in range(rows - height + 1):
        for col in range(cols - width + 1):
            if can_place(board, cells, col, row):
                found.append((col, row))
                if max_results is not None and len(found) >= max_results:
                    return found
    return found


def can_place_anywhere(board: Board, cells: Iterable[Coordinate]) -> bool:
    return bool(find_placements(board, cells, max_results=1))


def occupied_count(board: Board) -> int:
    return int(np.count_nonzero(board))
