from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Tuple, Union

from . import queue as shape_queue
from . import rng
from .geometry import (
    ORIENTATION_COUNT,
    Cells,
    apply_orientation,
    orientation_from_index,
    unique_orientations,
)
from .grid import (
    Board,
    CascadeResult,
    ClearResult,
    apply_clears_and_shifts,
    can_place,
    can_place_anywhere,
    clear_only,
    compute_clears,
    empty_board,
    find_placements,
    place,
    resolve_all_clears,
)
from .queue import QueueState, ShapeInstance
from .rules import ScoringRules, Stats, StatsDelta
from .shapes import DEFAULT_CATALOG, ShapeCatalog


logger = logging.getLogger(__name__)

GRID_ROWS = 12
GRID_COLS = 12
QUEUE_SIZE = 4


class Phase(IntEnum):
    IDLE = 0
    POST_PLACEMENT = 1
    POST_CLEAR = 2
    FINAL = 3


class PlacementError(Enum):
    INVALID_SELECTION = "invalid_selection"
    INVALID_PLACEMENT = "invalid_placement"
    BUSY = "busy"


@dataclass
class GameConfig:
    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    queue_size: int = QUEUE_SIZE
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"board dimensions must be positive, got {self.rows}x{self.cols}")
        if self.queue_size <= 0:
            raise ValueError(f"queue_size must be positive, got {self.queue_size}")


@dataclass(frozen=True, eq=False)
class PhaseSnapshot:
    phase: Phase
    board: Board
    delta: StatsDelta


@dataclass(frozen=True, eq=False)
class TurnOutcome:
    """Everything one placement produced, in presentation order."""

    queue_index: int
    instance: ShapeInstance
    origin: Tuple[int, int]
    cells: Cells
    clears: ClearResult
    move_score: int
    phases: Tuple[PhaseSnapshot, ...]
    cascade: CascadeResult

    @property
    def animated(self) -> bool:
        return len(self.phases) > 1

    @property
    def combo(self) -> int:
        return self.clears.combo

    @property
    def edge_count(self) -> int:
        return self.clears.edge_count

    @property
    def displacement(self) -> Tuple[int, int]:
        return self.clears.displacement

    @property
    def final_board(self) -> Board:
        return self.phases[-1].board

    def board_at(self, phase: Phase) -> Optional[Board]:
        for snapshot in self.phases:
            if snapshot.phase == phase:
                return snapshot.board
        return None


@dataclass(frozen=True, eq=False)
class PlacementResult:
    success: bool
    reason: Optional[PlacementError] = None
    outcome: Optional[TurnOutcome] = None

    def __bool__(self) -> bool:
        return self.success


@dataclass(frozen=True)
class HoverPreview:
    cells: Cells
    absolute_cells: Tuple[Tuple[int, int], ...]
    valid: bool
    color: int


# Commands accepted by EdgeShiftGame.step

@dataclass(frozen=True)
class Select:
    index: int


@dataclass(frozen=True)
class Hover:
    index: int
    col: int
    row: int


@dataclass(frozen=True)
class Place:
    index: int
    col: int
    row: int


@dataclass(frozen=True)
class Rotate:
    index: Optional[int] = None


@dataclass(frozen=True)
class Mirror:
    index: Optional[int] = None
    vertical: bool = False


@dataclass(frozen=True)
class AdvancePhase:
    pass


@dataclass(frozen=True)
class NewGame:
    seed: Optional[int] = None


@dataclass(frozen=True)
class Reset:
    pass


Command = Union[Select, Hover, Place, Rotate, Mirror, AdvancePhase, NewGame, Reset]


class EdgeShiftGame:
    """Owns one session: board, shape queue (with its RNG state) and stats.

    A placement that clears or shifts lines leaves the game busy at
    POST_PLACEMENT; the caller walks it through POST_CLEAR and FINAL with
    `advance_phase()` at whatever pace it animates. The whole cascade is
    computed when the placement commits, phases only reveal it.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        catalog: Optional[ShapeCatalog] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.catalog = catalog or DEFAULT_CATALOG
        self.seed = 0
        self.board: Board = empty_board(self.config.rows, self.config.cols)
        self.queue: QueueState = shape_queue.new_queue(0, self.catalog, self.config.queue_size)
        self.stats = Stats()
        self.phase = Phase.IDLE
        self.game_over = False
        self.last_outcome: Optional[TurnOutcome] = None
        self._pending: List[PhaseSnapshot] = []
        self.new_game(self.config.seed)

    def new_game(self, seed: Optional[int] = None) -> None:
        self.seed = rng.random_seed() if seed is None else rng.seed_state(seed)
        logger.info("new game with seed %d", self.seed)
        self._start()

    def reset_keeping_seed(self) -> None:
        logger.info("restarting game with seed %d", self.seed)
        self._start()

    def _start(self) -> None:
        self.board = empty_board(self.config.rows, self.config.cols)
        self.queue = shape_queue.new_queue(self.seed, self.catalog, self.config.queue_size)
        self.stats = Stats()
        self.phase = Phase.IDLE
        self.last_outcome = None
        self._pending = []
        self.game_over = not self.has_legal_move()

    @property
    def busy(self) -> bool:
        return self.phase != Phase.IDLE

    @property
    def selected(self) -> int:
        return self.queue.selected

    @property
    def pending_phases(self) -> Tuple[Phase, ...]:
        return tuple(snapshot.phase for snapshot in self._pending)

    def shape_at(self, index: int) -> Optional[ShapeInstance]:
        return self.queue.get(index)

    def get_state(self) -> Dict[str, Any]:
        return {
            "board": self.board.copy(),
            "queue": self.queue.items,
            "selected": self.queue.selected,
            "stats": self.stats.to_dict(),
            "busy": self.busy,
            "phase": self.phase,
            "seed": self.seed,
            "game_over": self.game_over,
        }

    def _reject(self, reason: PlacementError, index: int, col: int, row: int) -> PlacementResult:
        logger.debug("placement of slot %d at (%d, %d) rejected: %s", index, col, row, reason.value)
        return PlacementResult(success=False, reason=reason)

    def place_at(self, queue_index: int, col: int, row: int) -> PlacementResult:
        if self.busy:
            return self._reject(PlacementError.BUSY, queue_index, col, row)
        instance = self.queue.get(queue_index)
        if instance is None:
            return self._reject(PlacementError.INVALID_SELECTION, queue_index, col, row)
        cells = instance.cells()
        # Re-check against the live board; a hover result may be stale
        if not can_place(self.board, cells, col, row):
            return self._reject(PlacementError.INVALID_PLACEMENT, queue_index, col, row)

        placed = place(self.board, cells, col, row, instance.color)
        clears = compute_clears(placed)
        move_score = self.rules.move_score(len(cells), clears.combo, clears.edge_count)
        move_delta = StatsDelta.for_move(
            score=move_score,
            placed_cells=len(cells),
            rows=len(clears.full_rows),
            cols=len(clears.full_cols),
            edge_count=clears.edge_count,
        )
        self.stats = self.stats.apply(move_delta)
        self.queue = shape_queue.consume(self.queue, queue_index, self.catalog, self.config.queue_size)

        if clears.combo == 0 and clears.displacement == (0, 0):
            cascade = resolve_all_clears(placed, self.rules)
            extra = _cascade_delta(cascade)
            phases: Tuple[PhaseSnapshot, ...] = (PhaseSnapshot(Phase.FINAL, cascade.board, extra),)
            self.stats = self.stats.apply(extra)
            self._commit(cascade.board)
        else:
            cleared = clear_only(placed, clears.full_rows, clears.full_cols)
            shifted = apply_clears_and_shifts(placed, clears.full_rows, clears.full_cols, clears)
            cascade = resolve_all_clears(shifted, self.rules)
            phases = (
                PhaseSnapshot(Phase.POST_PLACEMENT, placed, move_delta),
                PhaseSnapshot(Phase.POST_CLEAR, cleared, StatsDelta()),
                PhaseSnapshot(Phase.FINAL, cascade.board, _cascade_delta(cascade)),
            )
            self.board = placed
            self.phase = Phase.POST_PLACEMENT
            self._pending = list(phases[1:])
            logger.debug(
                "slot %d placed at (%d, %d): combo=%d edge=%d shift=%s",
                queue_index, col, row, clears.combo, clears.edge_count, clears.displacement,
            )

        outcome = TurnOutcome(
            queue_index=queue_index,
            instance=instance,
            origin=(col, row),
            cells=cells,
            clears=clears,
            move_score=move_score,
            phases=phases,
            cascade=cascade,
        )
        self.last_outcome = outcome
        return PlacementResult(success=True, outcome=outcome)

    def advance_phase(self) -> Optional[PhaseSnapshot]:
        """Reveal the next stage of the running placement.

        Returns the snapshot reached, or None when nothing is pending.
        Reaching FINAL commits the resolved board and clears the busy flag.
        """
        if not self._pending:
            return None
        snapshot = self._pending.pop(0)
        self.stats = self.stats.apply(snapshot.delta)
        if snapshot.phase == Phase.FINAL:
            self._commit(snapshot.board)
        else:
            self.board = snapshot.board
            self.phase = snapshot.phase
            logger.debug("advanced to %s", snapshot.phase.name)
        return snapshot

    def finish_turn(self) -> None:
        while self._pending:
            self.advance_phase()

    def _commit(self, board: Board) -> None:
        self.board = board
        self.phase = Phase.IDLE
        self._pending = []
        self.game_over = not self.has_legal_move()
        if self.game_over:
            logger.info("no legal moves left; final score %d", self.stats.score)

    def _target(self, index: Optional[int]) -> Tuple[int, Optional[ShapeInstance]]:
        if index is None:
            index = self.queue.selected
        if self.busy:
            return index, None
        return index, self.queue.get(index)

    def select(self, index: int) -> bool:
        index, instance = self._target(index)
        if instance is None:
            return False
        self.queue = shape_queue.select(self.queue, index)
        return True

    def rotate_selected(self, queue_index: Optional[int] = None) -> bool:
        index, instance = self._target(queue_index)
        if instance is None:
            return False
        self.queue = shape_queue.replace_item(self.queue, index, instance.rotated())
        return True

    def toggle_mirror(self, queue_index: Optional[int] = None) -> bool:
        index, instance = self._target(queue_index)
        if instance is None:
            return False
        self.queue = shape_queue.replace_item(self.queue, index, instance.mirrored())
        return True

    def toggle_mirror_vertical(self, queue_index: Optional[int] = None) -> bool:
        index, instance = self._target(queue_index)
        if instance is None:
            return False
        self.queue = shape_queue.replace_item(self.queue, index, instance.mirrored(vertical=True))
        return True

    def set_orientation(
        self,
        queue_index: int,
        rotation: int,
        mirrored_h: bool,
        mirrored_v: bool = False,
    ) -> bool:
        index, instance = self._target(queue_index)
        if instance is None:
            return False
        self.queue = shape_queue.replace_item(
            self.queue, index, instance.oriented(rotation, mirrored_h, mirrored_v)
        )
        return True

    def compute_hover_preview(self, queue_index: int, col: int, row: int) -> Optional[HoverPreview]:
        _, instance = self._target(queue_index)
        if instance is None:
            return None
        cells = instance.cells()
        return HoverPreview(
            cells=cells,
            absolute_cells=tuple((col + dx, row + dy) for dx, dy in cells),
            valid=can_place(self.board, cells, col, row),
            color=instance.color,
        )

    def has_legal_move(self) -> bool:
        for instance in self.queue.items:
            for orientation in unique_orientations(instance.shape.cells):
                if can_place_anywhere(self.board, orientation.cells):
                    return True
        return False

    def valid_actions(self) -> List[Tuple[int, int, int, int]]:
        """List of (queue_index, col, row, orientation_index) placements.

        Orientation index o stands for rotation o % 4, mirrored when o >= 4.
        """
        actions: List[Tuple[int, int, int, int]] = []
        for index, instance in enumerate(self.queue.items):
            placements: Dict[frozenset, List[Tuple[int, int]]] = {}
            for o in range(ORIENTATION_COUNT):
                rotation, mirrored_h = orientation_from_index(o)
                cells = apply_orientation(instance.shape.cells, rotation, mirrored_h)
                key = frozenset(cells)
                if key not in placements:
                    placements[key] = find_placements(self.board, cells)
                for col, row in placements[key]:
                    actions.append((index, col, row, o))
        return actions

    def step(self, command: Command) -> Any:
        if isinstance(command, Place):
            return self.place_at(command.index, command.col, command.row)
        elif isinstance(command, Hover):
            return self.compute_hover_preview(command.index, command.col, command.row)
        elif isinstance(command, Rotate):
            return self.rotate_selected(command.index)
        elif isinstance(command, Mirror):
            if command.vertical:
                return self.toggle_mirror_vertical(command.index)
            return self.toggle_mirror(command.index)
        elif isinstance(command, Select):
            return self.select(command.index)
        elif isinstance(command, AdvancePhase):
            return self.advance_phase()
        elif isinstance(command, NewGame):
            return self.new_game(command.seed)
        elif isinstance(command, Reset):
            return self.reset_keeping_seed()
        raise TypeError(f"unknown command {command!r}")


def _cascade_delta(cascade: CascadeResult) -> StatsDelta:
    return StatsDelta.for_cascade(
        score=cascade.score,
        rows=cascade.rows,
        cols=cascade.cols,
        edge_count=cascade.edge,
        max_combo=cascade.max_combo,
    )
