"""Shared fixtures: an in-memory stand-in for the serial transport."""

from __future__ import annotations

import asyncio

import pytest


class FakeTransport:
    """Records writes and plays back canned replies.

    Each write consumes the next entry of ``replies``: ``None`` means the
    radio stays silent, ``bytes`` is delivered in one piece, and a list of
    ``bytes`` is delivered piece by piece.
    """

    def __init__(self, protocol, replies=()) -> None:
        self.protocol = protocol
        self.replies = list(replies)
        self.written: list[bytes] = []
        self.closed = False

    def write(self, data: bytes) -> None:
        self.written.append(bytes(data))
        if not self.replies:
            return
        reply = self.replies.pop(0)
        if reply is None:
            return
        pieces = reply if isinstance(reply, list) else [reply]
        loop = asyncio.get_running_loop()
        for piece in pieces:
            loop.call_soon(self.protocol.data_received, piece)

    def is_closing(self) -> bool:
        return self.closed

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def attach_fake():
    """Attach a FakeTransport to a TransportSession and return it."""

    def _attach(session, replies=()) -> FakeTransport:
        transport = FakeTransport(session.protocol, replies)
        session.attach(transport)
        return transport

    return _attach
