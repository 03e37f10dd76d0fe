from __future__ import annotations

from ..errors import InvalidInput
from .types import CommandBuffer, PackedRaster

GS = 0x1D
LF = 0x0A
RASTER_IMAGE = bytes([GS, 0x76, 0x30])
MAX_FIELD = 0xFFFF


def split_u16(value: int) -> bytes:
    """Little-endian low/high bytes of a 16-bit protocol field."""
    return value.to_bytes(2, "little", signed=False)


def raster_header(bytes_per_row: int, height: int, mode: int = 0) -> bytes:
    """Build the ``GS v 0 m xL xH yL yH`` header."""
    if not 0 <= mode <= 0xFF:
        raise InvalidInput(f"Raster mode must fit in one byte, got {mode}")
    if bytes_per_row > MAX_FIELD:
        raise InvalidInput(f"Row width of {bytes_per_row} bytes overflows the raster command")
    if height > MAX_FIELD:
        raise InvalidInput(f"Height of {height} rows overflows the raster command")
    return RASTER_IMAGE + bytes([mode]) + split_u16(bytes_per_row) + split_u16(height)


def frame(raster: PackedRaster, mode: int = 0) -> CommandBuffer:
    """Wrap packed rows in the raster-image print command."""
    raster.validate()
    header = raster_header(raster.bytes_per_row, raster.height, mode)
    return CommandBuffer(header, raster.data)


def feed_lines_cmd(lines: int) -> bytes:
    """Plain line feeds that push the printed image past the tear bar."""
    return bytes([LF]) * max(0, lines)
