"""Game module for the Edge-Shift Puzzle.

Exports the rules engine and supporting types:
- geometry: shape normalization, rotation and mirroring
- grid: board occupancy, line clears, edge shifts and cascades
- ShapeCatalog / ShapeDefinition: the static shape table
- ShapeInstance / QueueState: the offered batch of shapes
- ScoringRules / Stats: scoring and cumulative statistics
- EdgeShiftGame: turn orchestration and phase tracking
"""

from . import geometry, grid, rng
from .shapes import DEFAULT_CATALOG, ShapeCatalog, ShapeDefinition
from .queue import QueueState, ShapeInstance
from .rules import ScoringRules, Stats, StatsDelta
from .core import (
    AdvancePhase,
    EdgeShiftGame,
    GameConfig,
    Hover,
    HoverPreview,
    Mirror,
    NewGame,
    Phase,
    PhaseSnapshot,
    Place,
    PlacementError,
    PlacementResult,
    Reset,
    Rotate,
    Select,
    TurnOutcome,
)

__all__ = [
    "geometry",
    "grid",
    "rng",
    "DEFAULT_CATALOG",
    "ShapeCatalog",
    "ShapeDefinition",
    "QueueState",
    "ShapeInstance",
    "ScoringRules",
    "Stats",
    "StatsDelta",
    "EdgeShiftGame",
    "GameConfig",
    "Phase",
    "PhaseSnapshot",
    "PlacementError",
    "PlacementResult",
    "HoverPreview",
    "TurnOutcome",
    "Select",
    "Hover",
    "Place",
    "Rotate",
    "Mirror",
    "AdvancePhase",
    "NewGame",
    "Reset",
]
