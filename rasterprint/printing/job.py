from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..devices import PrinterProfile
from ..errors import InvalidInput
from ..protocol import CommandBuffer, build_command, build_job
from ..rendering import CaptureSource, PixelBuffer, image_to_bits
from ..transport import Transport

logger = logging.getLogger(__name__)

DEFAULT_DOT_WIDTH = 384
DEFAULT_FEED_LINES = 3


@dataclass
class PrintSettings:
    width: int = DEFAULT_DOT_WIDTH
    mode: int = 0
    feed_lines: int = DEFAULT_FEED_LINES

    @classmethod
    def from_profile(cls, profile: PrinterProfile, **overrides) -> "PrintSettings":
        settings = cls(width=profile.dot_width, mode=profile.mode)
        for key, value in overrides.items():
            if value is not None:
                setattr(settings, key, value)
        return settings


class PrintJobBuilder:
    """Turns captured pixels into the bytes sent to the printer.

    Every call builds a fresh buffer chain; nothing is cached between jobs.
    """

    def __init__(self, settings: Optional[PrintSettings] = None) -> None:
        self.settings = settings or PrintSettings()

    def build_command(self, pixels: PixelBuffer) -> CommandBuffer:
        if self.settings.width <= 0:
            raise InvalidInput("Printer dot width must be greater than zero")
        bits = image_to_bits(pixels, self.settings.width)
        command = build_command(bits, self.settings.mode)
        logger.debug(
            "Framed %dx%d raster (%d bytes) from %dx%d capture",
            bits.width,
            bits.height,
            len(command),
            pixels.width,
            pixels.height,
        )
        return command

    def build(self, pixels: PixelBuffer) -> bytes:
        return build_job(self.build_command(pixels), self.settings.feed_lines)

    def build_from_source(self, source: CaptureSource) -> bytes:
        return self.build(source.capture())


async def print_capture(
    source: CaptureSource,
    transport: Transport,
    settings: Optional[PrintSettings] = None,
) -> None:
    """Capture, encode and send one job. Failures propagate unchanged."""
    data = PrintJobBuilder(settings).build_from_source(source)
    await transport.send(data)
