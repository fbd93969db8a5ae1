from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Tuple

from .geometry import Cells, normalize


@dataclass(frozen=True)
class ShapeDefinition:
    key: str
    name: str
    color: str
    flash: str
    cells: Cells

    def __post_init__(self) -> None:
        if not self.cells:
            raise ValueError(f"shape {self.key!r} has no cells")
        if len(set(self.cells)) != len(self.cells):
            raise ValueError(f"shape {self.key!r} repeats a cell")
        # Frozen: bypass __setattr__ to store the canonical form
        object.__setattr__(self, "cells", normalize(tuple(map(tuple, self.cells))))

    @property
    def size(self) -> int:
        return len(self.cells)


def _shape(key: str, name: str, color: str, flash: str, *cells: Tuple[int, int]) -> ShapeDefinition:
    return ShapeDefinition(key=key, name=name, color=color, flash=flash, cells=tuple(cells))


BASE_SHAPES: Tuple[ShapeDefinition, ...] = (
    _shape("single", "1x1", "bg-emerald-500", "bg-emerald-200", (0, 0)),
    _shape("line2", "1x2", "bg-sky-400", "bg-sky-200", (0, 0), (1, 0)),
    _shape("line3", "1x3", "bg-amber-500", "bg-amber-200", (0, 0), (1, 0), (2, 0)),
    _shape("line4", "1x4", "bg-rose-500", "bg-rose-200", (0, 0), (1, 0), (2, 0), (3, 0)),
    _shape("square2", "2x2", "bg-violet-500", "bg-violet-200", (0, 0), (1, 0), (0, 1), (1, 1)),
    _shape(
        "square3", "3x3", "bg-cyan-500", "bg-cyan-200",
        (0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1), (0, 2), (1, 2), (2, 2),
    ),
    _shape("corner2", "Corner 2x2", "bg-yellow-500", "bg-yellow-200", (0, 0), (1, 0), (0, 1)),
    _shape("t3", "T", "bg-teal-400", "bg-teal-200", (0, 0), (1, 0), (2, 0), (1, 1)),
    _shape("L3", "L", "bg-lime-400", "bg-lime-200", (0, 0), (0, 1), (0, 2), (1, 2)),
    _shape("Z", "Z", "bg-rose-400", "bg-rose-200", (0, 0), (1, 0), (1, 1), (2, 1)),
)

EXTRA_SHAPES: Tuple[ShapeDefinition, ...] = (
    # Remaining tetrominoes
    _shape("J4", "J", "bg-indigo-400", "bg-indigo-200", (1, 0), (1, 1), (1, 2), (0, 2)),
    _shape("S4", "S", "bg-orange-400", "bg-orange-200", (1, 0), (2, 0), (0, 1), (1, 1)),
    # Lines and rectangles
    _shape("line5", "1x5", "bg-fuchsia-500", "bg-fuchsia-200", (0, 0), (1, 0), (2, 0), (3, 0), (4, 0)),
    _shape("line6", "1x6", "bg-pink-500", "bg-pink-200", (0, 0), (1, 0), (2, 0), (3, 0), (4, 0), (5, 0)),
    _shape("rect2x3", "2x3", "bg-sky-500", "bg-sky-200", (0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)),
    _shape(
        "rect2x4", "2x4", "bg-blue-600", "bg-blue-200",
        (0, 0), (1, 0), (2, 0), (3, 0), (0, 1), (1, 1), (2, 1), (3, 1),
    ),
    # Pentominoes
    _shape("I5", "I (5)", "bg-stone-500", "bg-stone-200", (0, 0), (1, 0), (2, 0), (3, 0), (4, 0)),
    _shape("L5", "L (5)", "bg-green-600", "bg-green-200", (0, 0), (0, 1), (0, 2), (0, 3), (1, 3)),
    _shape("J5", "J (5)", "bg-green-500", "bg-green-200", (1, 0), (1, 1), (1, 2), (1, 3), (0, 3)),
    _shape("T5", "T (5)", "bg-indigo-500", "bg-indigo-200", (0, 0), (1, 0), (2, 0), (1, 1), (1, 2)),
    _shape("U5", "U", "bg-lime-500", "bg-lime-200", (0, 0), (0, 1), (2, 0), (2, 1), (1, 1)),
    _shape("V5", "V", "bg-emerald-400", "bg-emerald-200", (0, 0), (0, 1), (0, 2), (1, 2), (2, 2)),
    _shape("W5", "W", "bg-cyan-600", "bg-cyan-200", (0, 0), (0, 1), (1, 1), (1, 2), (2, 2)),
    _shape("X5", "Plus", "bg-purple-500", "bg-purple-200", (1, 0), (0, 1), (1, 1), (2, 1), (1, 2)),
    _shape("Y5", "Y", "bg-teal-500", "bg-teal-200", (0, 0), (1, 0), (2, 0), (3, 0), (1, 1)),
    _shape("P5", "P", "bg-yellow-600", "bg-yellow-200", (0, 0), (1, 0), (0, 1), (1, 1), (0, 2)),
    _shape("N5", "N", "bg-amber-600", "bg-amber-200", (0, 0), (1, 0), (1, 1), (2, 1), (3, 1)),
    _shape("F5", "F", "bg-rose-600", "bg-rose-200", (1, 0), (0, 1), (1, 1), (1, 2), (2, 2)),
    # Hole-makers
    _shape(
        "ring3", "Ring 3x3 (hollow)", "bg-zinc-500", "bg-zinc-200",
        (0, 0), (1, 0), (2, 0), (0, 1), (2, 1), (0, 2), (1, 2), (2, 2),
    ),
    _shape("C5", "C", "bg-orange-500", "bg-orange-200", (0, 0), (1, 0), (0, 1), (0, 2), (1, 2)),
)


class ShapeCatalog:
    """Ordered, read-only table of shape definitions.

    A definition's colour code is its position + 1; board cells store that
    code and 0 means empty.
    """

    def __init__(self, shapes: Iterable[ShapeDefinition]) -> None:
        self._shapes: Tuple[ShapeDefinition, ...] = tuple(shapes)
        if not self._shapes:
            raise ValueError("shape catalog is empty")
        self._by_key: Dict[str, ShapeDefinition] = {}
        for shape in self._shapes:
            if shape.key in self._by_key:
                raise ValueError(f"duplicate shape key {shape.key!r}")
            self._by_key[shape.key] = shape
        self._codes = {shape.key: i + 1 for i, shape in enumerate(self._shapes)}

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[ShapeDefinition]:
        return iter(self._shapes)

    def __getitem__(self, index: int) -> ShapeDefinition:
        return self._shapes[index]

    @property
    def shapes(self) -> Tuple[ShapeDefinition, ...]:
        return self._shapes

    def by_key(self, key: str) -> ShapeDefinition:
        return self._by_key[key]

    def index_of(self, key: str) -> int:
        return self._codes[key] - 1

    def color_code(self, key: str) -> int:
        return self._codes[key]

    def shape_for_code(self, code: int) -> ShapeDefinition:
        """Look up the definition behind a non-zero board value."""
        if not 1 <= code <= len(self._shapes):
            raise KeyError(code)
        return self._shapes[code - 1]


DEFAULT_CATALOG = ShapeCatalog(BASE_SHAPES + EXTRA_SHAPES)
