from __future__ import annotations

import asyncio
from typing import List

import pytest
from PIL import Image

from helpers import BLACK, WHITE, solid
from rasterprint.devices import PrinterProfileRegistry
from rasterprint.errors import InvalidInput, TransportFailure
from rasterprint.printing import PrintJobBuilder, PrintSettings, print_capture
from rasterprint.rendering import PillowImageSource
from rasterprint.transport import Transport, TransportKind, TransportState


class RecordingTransport(Transport):
    kind = TransportKind.RELAY

    def __init__(self, fail: bool = False) -> None:
        super().__init__()
        self.fail = fail
        self.sent: List[bytes] = []

    @property
    def is_ready(self) -> bool:
        return True

    async def _send(self, data: bytes) -> None:
        if self.fail:
            raise TransportFailure("relay went away")
        self.sent.append(data)


def test_black_and_white_rows() -> None:
    builder = PrintJobBuilder(PrintSettings(width=8, feed_lines=0))
    assert builder.build(solid(8, 1, BLACK)) == bytes.fromhex("1D 76 30 00 01 00 01 00 FF")
    assert builder.build(solid(8, 1, WHITE)) == bytes.fromhex("1D 76 30 00 01 00 01 00 00")


def test_capture_is_scaled_to_dot_width() -> None:
    command = PrintJobBuilder(PrintSettings(width=384)).build_command(solid(192, 50, BLACK))
    assert command.header == bytes.fromhex("1D 76 30 00 30 00 64 00")
    assert command.payload == b"\xff" * (48 * 100)


def test_unaligned_width_pads_rows() -> None:
    command = PrintJobBuilder(PrintSettings(width=10, mode=1)).build_command(solid(10, 1, BLACK))
    assert command.header == bytes.fromhex("1D 76 30 01 02 00 01 00")
    assert command.payload == b"\xff\xc0"


def test_default_job_ends_with_feeds() -> None:
    data = PrintJobBuilder().build(solid(384, 1, WHITE))
    assert data.endswith(b"\n\n\n")
    assert len(data) == 8 + 48 + 3


def test_non_positive_width_is_invalid() -> None:
    with pytest.raises(InvalidInput):
        PrintJobBuilder(PrintSettings(width=0)).build(solid(8, 1, BLACK))


def test_settings_from_profile_with_overrides() -> None:
    profile = PrinterProfileRegistry.load().require("80mm")
    settings = PrintSettings.from_profile(profile, width=None, mode=1, feed_lines=None)
    assert (settings.width, settings.mode, settings.feed_lines) == (576, 1, 3)


def test_print_capture_sends_one_job() -> None:
    transport = RecordingTransport()
    source = PillowImageSource(Image.new("RGB", (16, 2), "black"))
    asyncio.run(print_capture(source, transport, PrintSettings(width=8, feed_lines=1)))
    assert transport.sent == [bytes.fromhex("1D 76 30 00 01 00 01 00 FF 0A")]
    assert transport.state is TransportState.DONE


def test_print_capture_surfaces_transport_failure() -> None:
    transport = RecordingTransport(fail=True)
    source = PillowImageSource(Image.new("RGB", (8, 1), "white"))
    with pytest.raises(TransportFailure):
        asyncio.run(print_capture(source, transport, PrintSettings(width=8)))
    assert transport.state is TransportState.FAILED
