from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional, TypeVar

from ..errors import TransportFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TransportKind(Enum):
    SERIAL = "serial"
    USB = "usb"
    RELAY = "relay"


class TransportState(Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    READY = "ready"
    SENDING = "sending"
    DONE = "done"
    FAILED = "failed"


class Transport:
    """A single-use raw byte channel to a printer.

    ``send`` walks IDLE -> CONNECTING -> READY -> SENDING -> DONE, skipping
    CONNECTING when the handle is already open. Any failure leaves the
    transport in FAILED and propagates; nothing is retried.
    """

    kind: TransportKind

    def __init__(self) -> None:
        self.state = TransportState.IDLE
        self._pending: Optional[asyncio.Future] = None

    @property
    def is_ready(self) -> bool:
        return False

    async def send(self, data: bytes) -> None:
        if self.state is not TransportState.IDLE:
            raise TransportFailure(f"{self.kind.value} transport is single-use (state: {self.state.value})")
        payload = bytes(data)
        try:
            if not self.is_ready:
                self._set_state(TransportState.CONNECTING)
                await self._connect()
            self._set_state(TransportState.READY)
            self._set_state(TransportState.SENDING)
            await self._send(payload)
        except BaseException:
            self._set_state(TransportState.FAILED)
            raise
        self._set_state(TransportState.DONE)
        logger.info("Sent %d bytes over %s", len(payload), self.kind.value)

    async def close(self) -> None:
        """Release the underlying channel; safe to call more than once.

        A blocking write abandoned by a cancelled send is left to finish or
        fail on its own before anything is released.
        """
        await self._finish_pending()
        await self._release()

    async def _release(self) -> None:
        pass

    async def _run_blocking(self, func: Callable[..., T], *args) -> T:
        """Run a blocking device call in the default executor.

        Cancelling the caller does not reach the executor call.
        """
        loop = asyncio.get_running_loop()
        self._pending = loop.run_in_executor(None, func, *args)
        return await asyncio.shield(self._pending)

    async def _finish_pending(self) -> None:
        pending, self._pending = self._pending, None
        if pending is None:
            return
        if not pending.done():
            logger.debug("%s transport: waiting for an in-flight device call", self.kind.value)
            await asyncio.wait({pending})
        if not pending.cancelled():
            pending.exception()

    async def _connect(self) -> None:
        raise NotImplementedError

    async def _send(self, data: bytes) -> None:
        raise NotImplementedError

    def _set_state(self, state: TransportState) -> None:
        logger.debug("%s transport: %s -> %s", self.kind.value, self.state.value, state.value)
        self.state = state
