from __future__ import annotations

from PIL import Image

from ..errors import InvalidInput
from .types import PixelBuffer


def target_height(src_width: int, src_height: int, target_width: int) -> int:
    """Height that keeps the aspect ratio at ``target_width``, rounded half up."""
    return max(1, int(src_height * target_width / src_width + 0.5))


def resize(src: PixelBuffer, target_width: int) -> PixelBuffer:
    """Scale ``src`` to the printer dot width with nearest-neighbour sampling.

    No smoothing is applied so hard black/white edges are not blended into
    gray before dithering.
    """
    if src.width <= 0:
        raise InvalidInput("Source width must be greater than zero")
    if target_width <= 0:
        raise InvalidInput("Target width must be greater than zero")
    height = target_height(src.width, src.height, target_width)
    if src.width == target_width and src.height == height:
        return src
    img = Image.frombytes("RGBA", (src.width, src.height), src.samples)
    img = img.resize((target_width, height), Image.NEAREST)
    return PixelBuffer(target_width, height, img.tobytes())
