from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidInput


@dataclass(frozen=True)
class PackedRaster:
    """Rows of 1-bit pixels packed MSB-first, each row padded to whole bytes."""

    bytes_per_row: int
    height: int
    data: bytes

    def validate(self) -> None:
        """Validate dimensions for protocol encoding."""
        if self.bytes_per_row <= 0 or self.height <= 0:
            raise InvalidInput("Raster dimensions must be greater than zero")
        if len(self.data) != self.bytes_per_row * self.height:
            raise InvalidInput("Raster data length must equal bytes_per_row * height")

    def row(self, y: int) -> bytes:
        """Return the packed bytes of row ``y``."""
        start = y * self.bytes_per_row
        return self.data[start : start + self.bytes_per_row]


@dataclass(frozen=True)
class CommandBuffer:
    """A framed raster-image command: 8-byte header plus packed rows."""

    header: bytes
    payload: bytes

    def __bytes__(self) -> bytes:
        return self.header + self.payload

    def __len__(self) -> int:
        return len(self.header) + len(self.payload)
