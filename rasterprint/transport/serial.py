from __future__ import annotations

import logging
import time
from typing import Any, Optional, Union

from ..errors import DeviceUnavailable, TransportFailure
from .base import Transport, TransportKind

logger = logging.getLogger(__name__)

DEFAULT_BAUD_RATE = 19200
WRITE_TIMEOUT = 5.0

# Anything with pyserial's is_open/open/write/flush/close surface.
SerialLike = Any


def _import_serial():
    try:
        import serial
    except ImportError as exc:
        raise DeviceUnavailable("Serial printing requires pyserial. Install with: pip install pyserial") from exc
    return serial


class SerialTransport(Transport):
    """Writes to a serial line, opening it at ``baud_rate`` if needed.

    ``port`` is either a device path or an existing duplex channel. A port
    opened from a path is always closed after the send; a channel handed in
    is left open unless ``close_after_send`` is set.
    """

    kind = TransportKind.SERIAL

    def __init__(
        self,
        port: Union[str, SerialLike],
        baud_rate: int = DEFAULT_BAUD_RATE,
        chunk_size: Optional[int] = None,
        interval_ms: int = 0,
        close_after_send: bool = False,
    ) -> None:
        super().__init__()
        if isinstance(port, str):
            self._path: Optional[str] = port
            self._channel: Optional[SerialLike] = None
        else:
            self._path = getattr(port, "port", None)
            self._channel = port
        self._baud_rate = baud_rate
        self._chunk_size = chunk_size
        self._interval = max(0.0, interval_ms / 1000.0)
        self._close_after_send = close_after_send
        self._owns_channel = False

    @property
    def is_ready(self) -> bool:
        return self._channel is not None and bool(self._channel.is_open)

    async def _connect(self) -> None:
        await self._run_blocking(self._open_blocking)
        logger.info("Opened serial port %s at %d baud", self._path, self._baud_rate)

    async def _send(self, data: bytes) -> None:
        await self._run_blocking(self._write_blocking, data)

    async def _release(self) -> None:
        if self._channel is not None and self._channel.is_open:
            await self._run_blocking(self._channel.close)

    def _open_blocking(self) -> None:
        try:
            if self._channel is None:
                serial = _import_serial()
                self._channel = serial.Serial(self._path, self._baud_rate, timeout=1, write_timeout=WRITE_TIMEOUT)
                self._owns_channel = True
            else:
                self._channel.baudrate = self._baud_rate
                self._channel.open()
        except (OSError, ValueError) as exc:
            raise TransportFailure(f"Serial connection failed: {exc}") from exc

    def _write_blocking(self, data: bytes) -> None:
        channel = self._channel
        step = self._chunk_size or len(data) or 1
        offset = 0
        try:
            while offset < len(data):
                chunk = data[offset : offset + step]
                written = channel.write(chunk)
                if written is not None and written != len(chunk):
                    raise TransportFailure(f"Short serial write: {offset + written} of {len(data)} bytes")
                offset += len(chunk)
                if self._interval and offset < len(data):
                    time.sleep(self._interval)
            channel.flush()
        except OSError as exc:
            raise TransportFailure(f"Serial write failed: {exc}") from exc
        finally:
            if self._owns_channel or self._close_after_send:
                channel.close()
