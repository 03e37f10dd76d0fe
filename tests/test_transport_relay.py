from __future__ import annotations

import asyncio
import socket
import time

import pytest
import websockets

from rasterprint.errors import InvalidInput, TransportFailure
from rasterprint.transport import RelayTransport, TransportState

JOB = bytes.fromhex("1D 76 30 00 01 00 01 00 FF 0A 0A 0A")


def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


async def send_through_relay(handler, **kwargs) -> RelayTransport:
    async with websockets.serve(handler, "127.0.0.1", 0) as server:
        port = server.sockets[0].getsockname()[1]
        transport = RelayTransport(f"ws://127.0.0.1:{port}", **kwargs)
        await transport.send(JOB)
        return transport


def test_server_close_completes_send() -> None:
    received = []

    async def handler(connection) -> None:
        received.append(await connection.recv())
        await connection.close()

    started = time.monotonic()
    transport = asyncio.run(send_through_relay(handler, idle_timeout=10))
    assert time.monotonic() - started < 5
    assert received == [JOB]
    assert transport.state is TransportState.DONE


def test_idle_timeout_counts_as_success() -> None:
    received = []

    async def handler(connection) -> None:
        received.append(await connection.recv())
        await connection.send("ok")
        await connection.wait_closed()

    started = time.monotonic()
    transport = asyncio.run(send_through_relay(handler, idle_timeout=0.2))
    assert time.monotonic() - started >= 0.2
    assert received == [JOB]
    assert transport.state is TransportState.DONE
    assert not transport.is_ready


def test_connection_error_is_a_failure() -> None:
    transport = RelayTransport(f"ws://127.0.0.1:{free_port()}", connect_timeout=2)
    with pytest.raises(TransportFailure, match="Relay connection"):
        asyncio.run(transport.send(JOB))
    assert transport.state is TransportState.FAILED


def test_relay_url_must_be_websocket() -> None:
    with pytest.raises(InvalidInput):
        RelayTransport("http://localhost:9000")
