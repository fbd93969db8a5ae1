import pytest

from edge_shift_puzzle.game import DEFAULT_CATALOG
from edge_shift_puzzle.game.geometry import (
    apply_orientation,
    bounding_size,
    mirror_horizontal,
    mirror_vertical,
    next_orientation_cycle,
    normalize,
    orientation_from_index,
    rotate,
    rotate_clockwise,
    unique_orientations,
)

L_SHAPE = ((0, 0), (0, 1), (0, 2), (1, 2))


def test_normalize_moves_min_corner_to_origin():
    cells = normalize([(3, 5), (4, 5), (3, 7)])
    assert cells == ((0, 0), (1, 0), (0, 2))
    assert min(x for x, _ in cells) == 0
    assert min(y for _, y in cells) == 0


def test_bounding_size():
    assert bounding_size([(0, 0), (1, 0), (2, 0)]) == (3, 1)
    assert bounding_size(L_SHAPE) == (2, 3)
    with pytest.raises(ValueError):
        bounding_size([])


def test_rotate_line_and_square_sizes():
    assert bounding_size(rotate([(0, 0), (1, 0), (2, 0)], 1)) == (1, 3)
    assert bounding_size(rotate([(0, 0), (1, 0), (0, 1), (1, 1)], 3)) == (2, 2)


def test_rotate_clockwise_l_shape():
    assert set(rotate_clockwise(L_SHAPE)) == {(0, 0), (1, 0), (2, 0), (0, 1)}


def test_negative_steps_wrap():
    assert rotate(L_SHAPE, -1) == rotate(L_SHAPE, 3)
    assert rotate(L_SHAPE, 6) == rotate(L_SHAPE, 2)


@pytest.mark.parametrize("shape", list(DEFAULT_CATALOG), ids=lambda s: s.key)
def test_four_rotations_restore_every_shape(shape):
    assert sorted(rotate(shape.cells, 4)) == sorted(normalize(shape.cells))


@pytest.mark.parametrize("shape", list(DEFAULT_CATALOG), ids=lambda s: s.key)
def test_mirrors_are_involutions(shape):
    base = sorted(normalize(shape.cells))
    assert sorted(mirror_horizontal(mirror_horizontal(shape.cells))) == base
    assert sorted(mirror_vertical(mirror_vertical(shape.cells))) == base


def test_mirror_axes():
    assert set(mirror_horizontal(L_SHAPE)) == {(1, 0), (1, 1), (1, 2), (0, 2)}
    assert set(mirror_vertical(L_SHAPE)) == {(0, 0), (0, 1), (0, 2), (1, 0)}


def test_orientation_rotates_before_mirroring():
    oriented = set(apply_orientation(L_SHAPE, 1, True))
    assert oriented == set(mirror_horizontal(rotate(L_SHAPE, 1)))
    assert oriented != set(rotate(mirror_horizontal(L_SHAPE), 1))
    assert oriented == {(0, 0), (1, 0), (2, 0), (2, 1)}


def test_vertical_mirror_applied_last():
    oriented = apply_orientation(L_SHAPE, 1, True, True)
    assert oriented == mirror_vertical(mirror_horizontal(rotate(L_SHAPE, 1)))


def test_orientation_cycle():
    state = (0, False)
    for _ in range(3):
        state = next_orientation_cycle(*state)
    assert state == (3, False)
    state = next_orientation_cycle(*state)
    assert state == (0, True)
    for _ in range(4):
        state = next_orientation_cycle(*state)
    assert state == (0, False)


def test_orientation_from_index():
    assert orientation_from_index(0) == (0, False)
    assert orientation_from_index(3) == (3, False)
    assert orientation_from_index(5) == (1, True)


@pytest.mark.parametrize(
    "key, expected",
    [("single", 1), ("square2", 1), ("line3", 2), ("Z", 4), ("t3", 4), ("L3", 8), ("X5", 1)],
)
def test_unique_orientation_counts(key, expected):
    assert len(unique_orientations(DEFAULT_CATALOG.by_key(key).cells)) == expected
