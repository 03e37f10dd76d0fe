from __future__ import annotations

from typing import Sequence

from rasterprint.rendering import PixelBuffer

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)


def solid(width: int, height: int, rgba: Sequence[int]) -> PixelBuffer:
    return PixelBuffer(width, height, bytes(rgba) * (width * height))


def row_of(*pixels: Sequence[int]) -> PixelBuffer:
    return PixelBuffer(len(pixels), 1, b"".join(bytes(p) for p in pixels))
