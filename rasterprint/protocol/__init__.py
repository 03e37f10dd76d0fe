from .commands import feed_lines_cmd, frame, raster_header, split_u16
from .encoding import bytes_per_row, pack, pack_line
from .job import build_command, build_job
from .types import CommandBuffer, PackedRaster

__all__ = [
    "CommandBuffer",
    "PackedRaster",
    "build_command",
    "build_job",
    "bytes_per_row",
    "feed_lines_cmd",
    "frame",
    "pack",
    "pack_line",
    "raster_header",
    "split_u16",
]
