from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Dict


@dataclass
class ScoringRules:
    placement_points: int = 1
    line_clear_points: int = 100
    edge_shift_points: int = 50
    combo_bonus_points: int = 50

    def clear_score(self, combo: int, edge_count: int) -> int:
        """Points for one clear evaluation, excluding the placed cells."""
        if combo <= 0:
            return 0
        score = combo * self.line_clear_points + edge_count * self.edge_shift_points
        if combo > 1:
            score += (combo - 1) * self.combo_bonus_points
        return score

    def move_score(self, placed_cells: int, combo: int, edge_count: int) -> int:
        return placed_cells * self.placement_points + self.clear_score(combo, edge_count)


@dataclass(frozen=True)
class StatsDelta:
    moves: int = 0
    score: int = 0
    placed_blocks: int = 0
    rows_cleared: int = 0
    cols_cleared: int = 0
    edge_shifts: int = 0
    combo: int = 0

    @classmethod
    def for_move(cls, score: int, placed_cells: int, rows: int, cols: int, edge_count: int) -> "StatsDelta":
        return cls(
            moves=1,
            score=score,
            placed_blocks=placed_cells,
            rows_cleared=rows,
            cols_cleared=cols,
            edge_shifts=edge_count,
            combo=rows + cols,
        )

    @classmethod
    def for_cascade(cls, score: int, rows: int, cols: int, edge_count: int, max_combo: int) -> "StatsDelta":
        return cls(
            score=score,
            rows_cleared=rows,
            cols_cleared=cols,
            edge_shifts=edge_count,
            combo=max_combo,
        )

    @property
    def is_empty(self) -> bool:
        return self == StatsDelta()


@dataclass(frozen=True)
class Stats:
    moves: int = 0
    score: int = 0
    total_placed_blocks: int = 0
    rows_cleared: int = 0
    cols_cleared: int = 0
    edge_shifts: int = 0
    max_combo: int = 0

    def apply(self, delta: StatsDelta) -> "Stats":
        return replace(
            self,
            moves=self.moves + delta.moves,
            score=self.score + delta.score,
            total_placed_blocks=self.total_placed_blocks + delta.placed_blocks,
            rows_cleared=self.rows_cleared + delta.rows_cleared,
            cols_cleared=self.cols_cleared + delta.cols_cleared,
            edge_shifts=self.edge_shifts + delta.edge_shifts,
            max_combo=max(self.max_combo, delta.combo),
        )

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)
