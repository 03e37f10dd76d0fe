from __future__ import annotations

from .dither import dither
from .grayscale import to_grayscale
from .resize import resize
from .types import BitBuffer, PixelBuffer


def image_to_bits(px: PixelBuffer, width: int) -> BitBuffer:
    """Resize, convert and dither a captured image at the printer dot width."""
    scaled = resize(px, width)
    return dither(to_grayscale(scaled))
