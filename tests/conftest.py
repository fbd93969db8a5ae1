import numpy as np
import pytest

from edge_shift_puzzle.game import DEFAULT_CATALOG, EdgeShiftGame, GameConfig, ShapeCatalog
from edge_shift_puzzle.game.grid import empty_board


@pytest.fixture()
def board():
    return empty_board(12, 12)


@pytest.fixture()
def line3_catalog():
    return ShapeCatalog([DEFAULT_CATALOG.by_key("line3")])


@pytest.fixture()
def line3_game(line3_catalog):
    """Game whose queue only ever offers the horizontal 1x3 line."""
    return EdgeShiftGame(GameConfig(seed=99), catalog=line3_catalog)


@pytest.fixture()
def game():
    return EdgeShiftGame(GameConfig(seed=123456))


@pytest.fixture()
def random_boards():
    gen = np.random.default_rng(2024)
    return [gen.choice([0, 1], size=(12, 12), p=[0.2, 0.8]).astype(np.int16) for _ in range(50)]
