from __future__ import annotations

from ..errors import InvalidInput
from ..rendering.types import BitBuffer
from .types import PackedRaster


def bytes_per_row(width: int) -> int:
    return (width + 7) // 8


def pack_line(line: bytes) -> bytes:
    """Pack one row of 0/1 pixels, leftmost pixel in the most significant bit.

    Bits past the end of the row in the last byte stay zero (blank).
    """
    out = bytearray(bytes_per_row(len(line)))
    for x, pix in enumerate(line):
        if pix:
            out[x >> 3] |= 0x80 >> (x & 7)
    return bytes(out)


def pack(bits: BitBuffer) -> PackedRaster:
    """Pack a two-level bitmap into printer rows."""
    if bits.width <= 0 or bits.height <= 0:
        raise InvalidInput("Bitmap dimensions must be greater than zero")
    out = bytearray()
    for y in range(bits.height):
        out += pack_line(bits.row(y))
    return PackedRaster(bytes_per_row(bits.width), bits.height, bytes(out))
