from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..errors import InvalidInput


def _require_positive(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise InvalidInput(f"Buffer dimensions must be positive, got {width}x{height}")


@dataclass(frozen=True)
class PixelBuffer:
    """Row-major RGBA pixels, four bytes per pixel."""

    width: int
    height: int
    samples: bytes

    def __post_init__(self) -> None:
        _require_positive(self.width, self.height)
        expected = self.width * self.height * 4
        if len(self.samples) != expected:
            raise InvalidInput(f"Expected {expected} RGBA bytes for {self.width}x{self.height}, got {len(self.samples)}")

    def pixel(self, x: int, y: int) -> bytes:
        offset = (y * self.width + x) * 4
        return self.samples[offset : offset + 4]


@dataclass
class GrayscaleBuffer:
    """Row-major luminance values in [0, 255].

    The values list is handed over to exactly one consumer with
    ``take_values()``; the buffer cannot be read after that.
    """

    width: int
    height: int
    _values: Optional[List[float]] = field(repr=False)

    def __post_init__(self) -> None:
        _require_positive(self.width, self.height)
        if self._values is not None and len(self._values) != self.width * self.height:
            raise InvalidInput("Grayscale value count does not match dimensions")

    @property
    def consumed(self) -> bool:
        return self._values is None

    @property
    def values(self) -> List[float]:
        if self._values is None:
            raise InvalidInput("Grayscale buffer was already consumed")
        return self._values

    def take_values(self) -> List[float]:
        values = self.values
        self._values = None
        return values


@dataclass(frozen=True)
class BitBuffer:
    """Row-major two-level pixels, 1 = mark (black), 0 = blank."""

    width: int
    height: int
    bits: bytes

    def __post_init__(self) -> None:
        _require_positive(self.width, self.height)
        if len(self.bits) != self.width * self.height:
            raise InvalidInput("Bit count does not match dimensions")

    def row(self, y: int) -> bytes:
        return self.bits[y * self.width : (y + 1) * self.width]
