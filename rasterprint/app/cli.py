from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Optional

from ..devices import PrinterProfile, PrinterProfileRegistry
from ..errors import InvalidInput, PrintError
from ..printing import PrintJobBuilder, PrintSettings
from ..rendering import CaptureSource, ImageFileSource, TextSource
from ..transport import (
    RelayTransport,
    SerialTransport,
    Transport,
    UsbTransport,
    available_transports,
    open_usb_device,
)
from ..transport.relay import DEFAULT_IDLE_TIMEOUT

SERIAL_ENV_VAR = "RASTERPRINT_SERIAL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _hex_int(value: str) -> int:
    return int(value, 16)


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="rasterprint: print images as ESC/POS raster graphics on thermal receipt printers."
    )
    parser.add_argument("path", nargs="?", help="Image to print (.png/.jpg/.gif/.bmp)")
    parser.add_argument("--text", metavar="TEXT", help="Print text instead of an image file")
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--serial",
        metavar="PATH",
        default=os.environ.get(SERIAL_ENV_VAR),
        help=f"Serial port (e.g. /dev/ttyUSB0, default: ${SERIAL_ENV_VAR})",
    )
    target.add_argument("--usb", action="store_true", help="Print to a USB printer")
    target.add_argument("--relay", metavar="URL", help="WebSocket relay URL (e.g. ws://localhost:9000)")
    target.add_argument("--output", metavar="FILE", help="Write the job bytes to a file instead of a printer")
    parser.add_argument("--baud", type=int, help="Serial baud rate (default: from profile)")
    parser.add_argument("--vendor-id", type=_hex_int, metavar="HEX", help="USB vendor id filter")
    parser.add_argument("--product-id", type=_hex_int, metavar="HEX", help="USB product id filter")
    parser.add_argument(
        "--relay-timeout",
        type=float,
        default=DEFAULT_IDLE_TIMEOUT,
        metavar="SECONDS",
        help="Seconds to wait for the relay to close before assuming delivery",
    )
    parser.add_argument("--profile", help="Printer profile (see --list-profiles, default: 58mm)")
    parser.add_argument("--width", type=int, help="Print head width in dots (overrides the profile)")
    parser.add_argument("--mode", type=int, choices=range(0, 256), metavar="0-255", help="Raster mode byte")
    parser.add_argument("--feed", type=int, metavar="LINES", help="Line feeds after the image (default: 3)")
    parser.add_argument("--list-profiles", action="store_true", help="List known printer profiles and exit")
    parser.add_argument("--probe", action="store_true", help="List transports available on this host and exit")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    return parser.parse_args(argv)


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)


def list_profiles() -> int:
    registry = PrinterProfileRegistry.load()
    for profile in registry.profiles:
        aliases = ", ".join(profile.aliases)
        print(f"{profile.name}: {profile.dot_width} dots ({profile.paper_mm} mm){' - ' + aliases if aliases else ''}")
    return 0


def probe() -> int:
    for kind in available_transports():
        print(kind.value)
    return 0


def build_settings(args: argparse.Namespace, profile: PrinterProfile) -> PrintSettings:
    return PrintSettings.from_profile(profile, width=args.width, mode=args.mode, feed_lines=args.feed)


def build_source(args: argparse.Namespace, settings: PrintSettings) -> CaptureSource:
    if args.text is not None:
        return TextSource(args.text, settings.width)
    return ImageFileSource(args.path)


def build_transport(args: argparse.Namespace, profile: PrinterProfile) -> Transport:
    if args.relay:
        return RelayTransport(args.relay, idle_timeout=args.relay_timeout)
    if args.usb:
        device = open_usb_device(args.vendor_id, args.product_id)
        return UsbTransport(device, close_after_send=True)
    if args.serial:
        return SerialTransport(args.serial, baud_rate=args.baud or profile.baud_rate)
    raise InvalidInput("No printer selected. Use --serial, --usb, --relay or --output")


def run_print(args: argparse.Namespace) -> int:
    registry = PrinterProfileRegistry.load()
    profile = registry.require(args.profile)
    settings = build_settings(args, profile)
    data = PrintJobBuilder(settings).build_from_source(build_source(args, settings))
    if args.output:
        with open(args.output, "wb") as handle:
            handle.write(data)
        return 0
    transport = build_transport(args, profile)

    async def run() -> None:
        try:
            await transport.send(data)
        finally:
            await transport.close()

    asyncio.run(run())
    return 0


def main(argv: Optional[list] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)
    if args.list_profiles:
        return list_profiles()
    if args.probe:
        return probe()
    if args.path and args.text is not None:
        print("Provide either a file path or --text, not both. Use --help for usage.", file=sys.stderr)
        return 2
    if not args.path and args.text is None:
        print("Missing file path or --text. Use --help for usage.", file=sys.stderr)
        return 2
    try:
        return run_print(args)
    except (PrintError, OSError) as exc:
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
