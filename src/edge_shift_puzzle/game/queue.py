"""Shape queue: the batch of offered shapes and the draws that fill it.

The queue drains one shape per placement and is refilled with a whole new
batch only once it is empty. Draws thread the RNG state explicitly, so the
same seed always offers the same shapes in the same order.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple

from . import rng
from .geometry import Cells, apply_orientation, next_orientation_cycle
from .shapes import ShapeCatalog, ShapeDefinition


@dataclass(frozen=True)
class ShapeInstance:
    instance_id: int
    shape: ShapeDefinition
    color: int
    rotation: int = 0
    mirrored_h: bool = False
    mirrored_v: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotation", self.rotation % 4)

    @property
    def shape_key(self) -> str:
        return self.shape.key

    def cells(self) -> Cells:
        """Cell offsets for the current orientation."""
        return apply_orientation(self.shape.cells, self.rotation, self.mirrored_h, self.mirrored_v)

    def rotated(self) -> "ShapeInstance":
        rotation, mirrored_h = next_orientation_cycle(self.rotation, self.mirrored_h)
        return replace(self, rotation=rotation, mirrored_h=mirrored_h)

    def mirrored(self, vertical: bool = False) -> "ShapeInstance":
        if vertical:
            return replace(self, mirrored_v=not self.mirrored_v)
        return replace(self, mirrored_h=not self.mirrored_h)

    def oriented(self, rotation: int, mirrored_h: bool, mirrored_v: bool = False) -> "ShapeInstance":
        return replace(self, rotation=rotation % 4, mirrored_h=mirrored_h, mirrored_v=mirrored_v)


@dataclass(frozen=True)
class QueueState:
    items: Tuple[ShapeInstance, ...]
    rng_state: int
    next_id: int
    selected: int = 0

    def __len__(self) -> int:
        return len(self.items)

    def get(self, index: int):
        if 0 <= index < len(self.items):
            return self.items[index]
        return None


def draw(rng_state: int, catalog: ShapeCatalog, instance_id: int) -> Tuple[ShapeInstance, int]:
    rng_state, shape = rng.choice(rng_state, catalog.shapes)
    instance = ShapeInstance(
        instance_id=instance_id,
        shape=shape,
        color=catalog.color_code(shape.key),
    )
    return instance, rng_state


def initial_batch(
    rng_state: int,
    catalog: ShapeCatalog,
    size: int,
    first_id: int = 1,
) -> Tuple[List[ShapeInstance], int]:
    items: List[ShapeInstance] = []
    for offset in range(size):
        instance, rng_state = draw(rng_state, catalog, first_id + offset)
        items.append(instance)
    return items, rng_state


def new_queue(seed: int, catalog: ShapeCatalog, size: int) -> QueueState:
    items, state = initial_batch(rng.seed_state(seed), catalog, size)
    return QueueState(items=tuple(items), rng_state=state, next_id=1 + size, selected=0)


def consume(queue: QueueState, index: int, catalog: ShapeCatalog, size: int) -> QueueState:
    """Remove the shape at `index`, refilling the whole batch if it runs out."""
    if not 0 <= index < len(queue.items):
        raise IndexError(f"no shape at queue index {index}")
    remaining = queue.items[:index] + queue.items[index + 1:]
    if not remaining:
        items, state = initial_batch(queue.rng_state, catalog, size, first_id=queue.next_id)
        return QueueState(items=tuple(items), rng_state=state, next_id=queue.next_id + size, selected=0)
    selected = max(0, min(queue.selected, len(remaining) - 1))
    return replace(queue, items=remaining, selected=selected)


def replace_item(queue: QueueState, index: int, instance: ShapeInstance) -> QueueState:
    items = list(queue.items)
    items[index] = instance
    return replace(queue, items=tuple(items))


def select(queue: QueueState, index: int) -> QueueState:
    if not 0 <= index < len(queue.items):
        raise IndexError(f"no shape at queue index {index}")
    return replace(queue, selected=index)
