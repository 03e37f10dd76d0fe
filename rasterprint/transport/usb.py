from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from ..errors import DeviceUnavailable, DeviceUnsupported, TransportFailure
from .base import Transport, TransportKind

logger = logging.getLogger(__name__)

PRINTER_CLASS = 0x07
DEFAULT_TIMEOUT_MS = 5000

UsbDevice = Any


@dataclass(frozen=True)
class UsbEndpoint:
    interface_number: int
    alternate_setting: int
    address: int


def _import_usb():
    try:
        import usb.core
        import usb.util
    except ImportError as exc:
        raise DeviceUnavailable("USB printing requires pyusb. Install with: pip install pyusb") from exc
    return usb


def find_out_endpoint(configuration: Iterable) -> UsbEndpoint:
    """Return the first OUT endpoint of a configuration.

    Interfaces are scanned in declared order, each one's alternate settings
    in declared order, then their endpoints.
    """
    usb = _import_usb()
    for interface in configuration:
        for endpoint in interface:
            if usb.util.endpoint_direction(endpoint.bEndpointAddress) == usb.util.ENDPOINT_OUT:
                return UsbEndpoint(
                    interface.bInterfaceNumber,
                    interface.bAlternateSetting,
                    endpoint.bEndpointAddress,
                )
    raise DeviceUnsupported("Could not find an OUT endpoint on the selected USB device")


def _has_printer_interface(device: UsbDevice) -> bool:
    for configuration in device:
        for interface in configuration:
            if interface.bInterfaceClass == PRINTER_CLASS:
                return True
    return False


def open_usb_device(vendor_id: Optional[int] = None, product_id: Optional[int] = None) -> UsbDevice:
    """Find a USB printer by vendor/product id, or the first printer-class device."""
    usb = _import_usb()
    filters = {}
    if vendor_id is not None:
        filters["idVendor"] = vendor_id
    if product_id is not None:
        filters["idProduct"] = product_id
    if not filters:
        filters["custom_match"] = _has_printer_interface
    try:
        device = usb.core.find(**filters)
    except usb.core.NoBackendError as exc:
        raise DeviceUnavailable("No libusb backend found. Install libusb to print over USB") from exc
    if device is None:
        wanted = ", ".join(f"{key}={value:#06x}" for key, value in filters.items() if key != "custom_match")
        raise DeviceUnavailable(f"No USB printer found ({wanted or 'printer class'})")
    return device


class UsbTransport(Transport):
    """Bulk OUT transfer to a USB printer.

    The OUT endpoint is discovered from the active configuration unless the
    caller already resolved one. Its interface is claimed before writing.
    """

    kind = TransportKind.USB

    def __init__(
        self,
        device: UsbDevice,
        endpoint: Optional[UsbEndpoint] = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        close_after_send: bool = False,
    ) -> None:
        super().__init__()
        self._device = device
        self.endpoint = endpoint
        self._timeout_ms = timeout_ms
        self._close_after_send = close_after_send
        self._claimed = False

    @property
    def is_ready(self) -> bool:
        return self.endpoint is not None and self._claimed

    async def _connect(self) -> None:
        await self._run_blocking(self._connect_blocking)
        logger.info(
            "Claimed USB interface %d, OUT endpoint %#04x",
            self.endpoint.interface_number,
            self.endpoint.address,
        )

    async def _send(self, data: bytes) -> None:
        await self._run_blocking(self._write_blocking, data)

    async def _release(self) -> None:
        await self._run_blocking(self._release_blocking)

    def _connect_blocking(self) -> None:
        usb = _import_usb()
        try:
            configuration = self._active_configuration(usb)
            if self.endpoint is None:
                self.endpoint = find_out_endpoint(configuration)
            self._claim(usb)
        except usb.core.USBError as exc:
            raise TransportFailure(f"USB device setup failed: {exc}") from exc

    def _active_configuration(self, usb):
        try:
            return self._device.get_active_configuration()
        except usb.core.USBError:
            self._device.set_configuration()
            return self._device.get_active_configuration()

    def _claim(self, usb) -> None:
        number = self.endpoint.interface_number
        try:
            if self._device.is_kernel_driver_active(number):
                self._device.detach_kernel_driver(number)
        except NotImplementedError:
            logger.debug("Kernel driver detach not supported by this USB backend")
        usb.util.claim_interface(self._device, number)
        self._claimed = True
        if self.endpoint.alternate_setting:
            self._device.set_interface_altsetting(number, self.endpoint.alternate_setting)

    def _write_blocking(self, data: bytes) -> None:
        usb = _import_usb()
        try:
            written = self._device.write(self.endpoint.address, data, self._timeout_ms)
        except usb.core.USBError as exc:
            raise TransportFailure(f"USB transfer failed: {exc}") from exc
        finally:
            if self._close_after_send:
                self._release_blocking()
        if written != len(data):
            raise TransportFailure(f"Short USB transfer: {written} of {len(data)} bytes")

    def _release_blocking(self) -> None:
        if not self._claimed:
            return
        usb = _import_usb()
        usb.util.release_interface(self._device, self.endpoint.interface_number)
        usb.util.dispose_resources(self._device)
        self._claimed = False
