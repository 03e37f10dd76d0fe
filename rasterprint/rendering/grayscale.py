from __future__ import annotations

from typing import List

from .types import GrayscaleBuffer, PixelBuffer

RED_WEIGHT = 0.299
GREEN_WEIGHT = 0.587
BLUE_WEIGHT = 0.114


def to_grayscale(px: PixelBuffer) -> GrayscaleBuffer:
    """Composite every pixel over opaque white and reduce it to luminance.

    Fully transparent pixels come out as 255 (white), never as black.
    """
    samples = px.samples
    values: List[float] = [0.0] * (px.width * px.height)
    for p in range(len(values)):
        i = p * 4
        alpha = samples[i + 3] / 255.0
        backing = 255.0 * (1.0 - alpha)
        r = samples[i] * alpha + backing
        g = samples[i + 1] * alpha + backing
        b = samples[i + 2] * alpha + backing
        values[p] = RED_WEIGHT * r + GREEN_WEIGHT * g + BLUE_WEIGHT * b
    return GrayscaleBuffer(px.width, px.height, values)
