from __future__ import annotations

import importlib.util
import logging
from typing import List

from .base import TransportKind

logger = logging.getLogger(__name__)


def _importable(name: str) -> bool:
    return importlib.util.find_spec(name) is not None


def _usb_backend_available() -> bool:
    if not _importable("usb"):
        return False
    from usb.backend import libusb0, libusb1, openusb

    for module in (libusb1, libusb0, openusb):
        if module.get_backend() is not None:
            return True
    logger.debug("pyusb is installed but no libusb backend could be loaded")
    return False


def available_transports() -> List[TransportKind]:
    """Transports this host can use, in order of preference."""
    kinds = []
    if _importable("serial"):
        kinds.append(TransportKind.SERIAL)
    if _usb_backend_available():
        kinds.append(TransportKind.USB)
    if _importable("websockets"):
        kinds.append(TransportKind.RELAY)
    return kinds
