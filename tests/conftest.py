import pytest

from bubbletea.model.colors import Color
from bubbletea.model.liquids import LiquidType


@pytest.fixture
def water() -> LiquidType:
    return LiquidType("Water", Color(0.8, 0.9, 1.0, 0.35))


@pytest.fixture
def oil() -> LiquidType:
    return LiquidType("Oil", Color(0.9, 0.75, 0.3, 0.7))


@pytest.fixture
def red() -> LiquidType:
    return LiquidType("Red", Color(1.0, 0.0, 0.0, 1.0))


@pytest.fixture
def blue() -> LiquidType:
    return LiquidType("Blue", Color(0.0, 0.0, 1.0, 1.0))
