"""Shared test fixtures."""

from typing import Callable

import pytest

from models import ArrayModel, Grid
from .factories import open_grid, random_grid


@pytest.fixture
def grid_factory() -> Callable[..., Grid]:
    """Fixture that returns the open grid factory function."""
    return open_grid


@pytest.fixture
def random_grid_factory() -> Callable[..., Grid]:
    return random_grid


@pytest.fixture
def small_grid() -> Grid:
    """3x3, start top-left, end bottom-right, no walls."""
    return open_grid(3, 3)


@pytest.fixture
def default_grid() -> Grid:
    """20x40 board with the default start / end."""
    return Grid()


@pytest.fixture
def dead_end_grid() -> Grid:
    """DFS tries the top-left dead end before finding the way round."""
    return Grid.from_text(
        """
        ..#
        S#E
        ...
        """
    )


@pytest.fixture
def array() -> ArrayModel:
    return ArrayModel([5, 3, 8, 1])
