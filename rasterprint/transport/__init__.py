from .base import Transport, TransportKind, TransportState
from .probe import available_transports
from .relay import RelayTransport
from .serial import SerialTransport
from .usb import UsbEndpoint, UsbTransport, find_out_endpoint, open_usb_device

__all__ = [
    "RelayTransport",
    "SerialTransport",
    "Transport",
    "TransportKind",
    "TransportState",
    "UsbEndpoint",
    "UsbTransport",
    "available_transports",
    "find_out_endpoint",
    "open_usb_device",
]
