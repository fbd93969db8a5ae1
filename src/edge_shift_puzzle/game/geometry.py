from __future__ import annotations

from typing import Iterable, List, NamedTuple, Tuple

Coordinate = Tuple[int, int]
Cells = Tuple[Coordinate, ...]

ORIENTATION_COUNT = 8


def normalize(cells: Iterable[Coordinate]) -> Cells:
    """Translate cells so the smallest x and the smallest y are both 0."""
    cells = tuple(cells)
    if not cells:
        return cells
    min_x = min(x for x, _ in cells)
    min_y = min(y for _, y in cells)
    return tuple((x - min_x, y - min_y) for x, y in cells)


def bounding_size(cells: Iterable[Coordinate]) -> Tuple[int, int]:
    """Return (width, height) of the local bounding box."""
    cells = tuple(cells)
    if not cells:
        raise ValueError("bounding_size requires at least one cell")
    width = max(x for x, _ in cells) + 1
    height = max(y for _, y in cells) + 1
    return width, height


def rotate_clockwise(cells: Iterable[Coordinate]) -> Cells:
    cells = tuple(cells)
    _, height = bounding_size(cells)
    return normalize((height - 1 - y, x) for x, y in cells)


def rotate(cells: Iterable[Coordinate], steps: int) -> Cells:
    out = tuple(cells)
    for _ in range(steps % 4):
        out = rotate_clockwise(out)
    return out


def mirror_horizontal(cells: Iterable[Coordinate]) -> Cells:
    cells = tuple(cells)
    width, _ = bounding_size(cells)
    return normalize((width - 1 - x, y) for x, y in cells)


def mirror_vertical(cells: Iterable[Coordinate]) -> Cells:
    cells = tuple(cells)
    _, height = bounding_size(cells)
    return normalize((x, height - 1 - y) for x, y in cells)


def apply_orientation(
    cells: Iterable[Coordinate],
    rotation: int,
    mirrored_h: bool,
    mirrored_v: bool = False,
) -> Cells:
    """Rotate first, then mirror horizontally, then vertically.

    The order matters for asymmetric shapes: mirroring before rotating
    produces a different cell set.
    """
    oriented = rotate(cells, rotation)
    if mirrored_h:
        oriented = mirror_horizontal(oriented)
    if mirrored_v:
        oriented = mirror_vertical(oriented)
    return oriented


def next_orientation_cycle(rotation: int, mirrored_h: bool) -> Tuple[int, bool]:
    """Advance one clockwise step; wrapping past 3 flips the horizontal mirror.

    Repeated calls walk the four rotations of the plain shape and then the
    four rotations of the mirrored one.
    """
    next_rotation = (rotation + 1) % 4
    if next_rotation == 0:
        mirrored_h = not mirrored_h
    return next_rotation, mirrored_h


def orientation_from_index(index: int) -> Tuple[int, bool]:
    index = index % ORIENTATION_COUNT
    return index % 4, index >= 4


class Orientation(NamedTuple):
    rotation: int
    mirrored_h: bool
    cells: Cells


def unique_orientations(cells: Iterable[Coordinate]) -> List[Orientation]:
    """Distinct cell layouts reachable through the rotate control.

    Each layout is tagged with the first (rotation, mirrored_h) state of the
    cycle that produces it.
    """
    base = tuple(cells)
    seen = set()
    out: List[Orientation] = []
    rotation, mirrored_h = 0, False
    for _ in range(ORIENTATION_COUNT):
        oriented = apply_orientation(base, rotation, mirrored_h)
        key = frozenset(oriented)
        if key not in seen:
            seen.add(key)
            out.append(Orientation(rotation, mirrored_h, oriented))
        rotation, mirrored_h = next_orientation_cycle(rotation, mirrored_h)
    return out
