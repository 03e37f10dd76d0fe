from __future__ import annotations

from ..rendering.types import BitBuffer
from .commands import feed_lines_cmd, frame
from .encoding import pack
from .types import CommandBuffer


def build_command(bits: BitBuffer, mode: int = 0) -> CommandBuffer:
    """Pack and frame a dithered bitmap."""
    return frame(pack(bits), mode)


def build_job(command: CommandBuffer, feed_lines: int = 0) -> bytes:
    """Bytes to hand to a transport: the raster command plus trailing feeds."""
    return bytes(command) + feed_lines_cmd(feed_lines)
