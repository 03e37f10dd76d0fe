from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from ..errors import DeviceUnavailable, InvalidInput, TransportFailure
from .base import Transport, TransportKind

logger = logging.getLogger(__name__)

DEFAULT_IDLE_TIMEOUT = 1.5
DEFAULT_CONNECT_TIMEOUT = 10.0


def _import_websockets():
    try:
        import websockets
        import websockets.exceptions
    except ImportError as exc:
        raise DeviceUnavailable("Relay printing requires websockets. Install with: pip install websockets") from exc
    return websockets


class RelayTransport(Transport):
    """Sends the job as one binary message to a WebSocket relay proxy.

    The relay never acknowledges. A server-initiated close ends the send;
    otherwise the connection is closed after ``idle_timeout`` seconds and the
    send still counts as complete.
    """

    kind = TransportKind.RELAY

    def __init__(
        self,
        url: str,
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    ) -> None:
        super().__init__()
        if not url.startswith(("ws://", "wss://")):
            raise InvalidInput(f"Relay URL must start with ws:// or wss://, got '{url}'")
        self.url = url
        self._idle_timeout = idle_timeout
        self._connect_timeout = connect_timeout
        self._connection: Optional[Any] = None

    @property
    def is_ready(self) -> bool:
        return self._connection is not None

    async def _connect(self) -> None:
        websockets = _import_websockets()
        try:
            self._connection = await websockets.connect(self.url, open_timeout=self._connect_timeout)
        except (OSError, asyncio.TimeoutError, websockets.exceptions.WebSocketException) as exc:
            raise TransportFailure(f"Relay connection to {self.url} failed: {exc}") from exc
        logger.info("Connected to relay %s", self.url)

    async def _send(self, data: bytes) -> None:
        websockets = _import_websockets()
        connection = self._connection
        try:
            try:
                await connection.send(data)
            except (OSError, websockets.exceptions.WebSocketException) as exc:
                raise TransportFailure(f"Relay send to {self.url} failed: {exc}") from exc
            try:
                await asyncio.wait_for(self._drain(connection), self._idle_timeout)
            except asyncio.TimeoutError:
                logger.debug("Relay still open after %.1fs, treating the send as complete", self._idle_timeout)
        finally:
            await self._release()

    async def _release(self) -> None:
        connection, self._connection = self._connection, None
        if connection is not None:
            await connection.close()

    @staticmethod
    async def _drain(connection) -> None:
        websockets = _import_websockets()
        try:
            async for _ in connection:
                pass
        except websockets.exceptions.ConnectionClosed as exc:
            logger.debug("Relay closed the connection: %s", exc)
