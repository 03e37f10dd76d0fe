from __future__ import annotations

import pytest

from helpers import BLACK, WHITE, solid
from rasterprint.rendering import PixelBuffer


@pytest.fixture()
def black_8x1() -> PixelBuffer:
    return solid(8, 1, BLACK)


@pytest.fixture()
def white_8x1() -> PixelBuffer:
    return solid(8, 1, WHITE)
