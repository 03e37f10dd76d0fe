from __future__ import annotations

from .types import BitBuffer, GrayscaleBuffer

THRESHOLD = 128


def dither(gray: GrayscaleBuffer) -> BitBuffer:
    """Floyd-Steinberg error diffusion to a two-level bitmap.

    Takes ownership of ``gray``: its values are used as the error
    accumulator and the buffer is unreadable afterwards. Pixels are visited
    in raster order; each row depends on the residual of the previous one.
    """
    width = gray.width
    height = gray.height
    values = gray.take_values()
    out = bytearray(width * height)
    for y in range(height):
        has_below = y + 1 < height
        for x in range(width):
            idx = y * width + x
            old = values[idx]
            if old < THRESHOLD:
                out[idx] = 1
                err = old
            else:
                err = old - 255.0
            if not err:
                continue
            if x + 1 < width:
                values[idx + 1] += err * 7 / 16
            if has_below:
                if x > 0:
                    values[idx + width - 1] += err * 3 / 16
                values[idx + width] += err * 5 / 16
                if x + 1 < width:
                    values[idx + width + 1] += err * 1 / 16
    return BitBuffer(width, height, bytes(out))
