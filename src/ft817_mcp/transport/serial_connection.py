"""Serial connection to the FT-817 CAT port.

The link is half duplex: one command is written, then the radio answers
with a reply whose length is fixed by the command. Incoming bytes are
re-framed by a :class:`ByteLengthFramer` into chunks of that length, and
:meth:`TransportSession.exchange` waits for exactly one chunk or gives up
after :data:`REPLY_TIMEOUT_MS`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import serial
import serial.tools.list_ports

from ..errors import NO_REPLY, ConfigurationError, LinkTimeout, TransportError
from ..protocol.framing import CommandFrame

logger = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 9600
DEFAULT_REPLY_LENGTH = 1
REPLY_TIMEOUT_MS = 1000


def list_serial_ports() -> list[tuple[str, str]]:
    """List available serial ports as ``(device, description)`` tuples."""
    ports = []
    for port in serial.tools.list_ports.comports():
        ports.append((port.device, f"{port.description} ({port.device})"))
    return ports


@dataclass(frozen=True)
class SerialSettings:
    """Serial parameters, fixed for the lifetime of a session."""

    port: str
    baudrate: int = DEFAULT_BAUDRATE


class ByteLengthFramer:
    """Re-segments a byte stream into chunks of exactly ``length`` bytes."""

    def __init__(self, length: int) -> None:
        if length < 1:
            raise ValueError(f"Chunk length must be positive, got {length}")
        self.length = length
        self.chunks: asyncio.Queue[bytes | None] = asyncio.Queue()
        self._buffer = bytearray()

    def feed(self, data: bytes) -> None:
        self._buffer.extend(data)
        while len(self._buffer) >= self.length:
            self.chunks.put_nowait(bytes(self._buffer[: self.length]))
            del self._buffer[: self.length]

    def close(self) -> None:
        """Wake any reader; a ``None`` chunk means the channel went away."""
        self.chunks.put_nowait(None)

    def discard(self) -> tuple[int, int]:
        """Drop everything buffered. Returns (chunks, loose bytes) dropped."""
        chunks = 0
        while not self.chunks.empty():
            if self.chunks.get_nowait() is not None:
                chunks += 1
        loose = len(self._buffer)
        self._buffer.clear()
        return chunks, loose

    def __repr__(self) -> str:
        return (
            f"ByteLengthFramer(length={self.length}, "
            f"queued={self.chunks.qsize()}, buffered={len(self._buffer)})"
        )


class SerialProtocol(asyncio.Protocol):
    """Feeds received bytes to whichever framer is currently attached."""

    def __init__(self) -> None:
        self.transport: asyncio.Transport | None = None
        self.framer: ByteLengthFramer | None = None
        self.ready = asyncio.Event()

    def connection_made(self, transport) -> None:
        self.transport = transport
        self.ready.set()

    def data_received(self, data: bytes) -> None:
        if self.framer is None:
            logger.debug("No framer attached, discarding %s", data.hex(" "))
            return
        self.framer.feed(data)

    def connection_lost(self, exc: Exception | None) -> None:
        if exc is not None:
            logger.warning("Serial connection lost: %s", exc)
        if self.framer is not None:
            self.framer.close()
        self.transport = None
        self.ready.clear()


class TransportSession:
    """Owns the serial channel and performs request/reply exchanges.

    Only one exchange may be in flight at a time; concurrent callers are
    serialised on an internal lock.

    Usage::

        session = TransportSession("/dev/ttyUSB0")
        await session.open()
        reply = await session.exchange(frame, 5)
        session.close()
    """

    def __init__(self, port: str | None, baudrate: int = DEFAULT_BAUDRATE) -> None:
        if not port:
            raise ConfigurationError("Serial port was not defined")
        self.settings = SerialSettings(port=port, baudrate=baudrate)
        self.protocol = SerialProtocol()
        self._lock = asyncio.Lock()
        self._exchanges = 0
        self._timeouts = 0
        self._dropped_replies = 0
        self.configure_reply_framing(DEFAULT_REPLY_LENGTH)

    @property
    def connected(self) -> bool:
        transport = self.protocol.transport
        return transport is not None and not transport.is_closing()

    @property
    def reply_length(self) -> int:
        return self.protocol.framer.length

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def open(self) -> SerialSettings:
        """Open the serial port.

        Raises:
            TransportError: If the port cannot be opened.
        """
        import serial_asyncio

        loop = asyncio.get_running_loop()
        try:
            await serial_asyncio.create_serial_connection(
                loop,
                lambda: self.protocol,
                self.settings.port,
                baudrate=self.settings.baudrate,
            )
        except serial.SerialException as e:
            raise TransportError(
                f"Could not open serial port {self.settings.port}: {e}"
            ) from e
        await self.protocol.ready.wait()
        logger.info(
            "Connected to %s at %d baud", self.settings.port, self.settings.baudrate
        )
        return self.settings

    def attach(self, transport) -> None:
        """Use an already-open transport instead of opening the port."""
        self.protocol.connection_made(transport)

    def close(self) -> None:
        """Close the serial port."""
        transport = self.protocol.transport
        if transport is None:
            return
        try:
            transport.close()
        finally:
            self.protocol.transport = None
            self.protocol.ready.clear()
            logger.info("Disconnected from %s", self.settings.port)

    def configure_reply_framing(self, byte_length: int) -> None:
        """Replace the attached framer with one delivering ``byte_length`` chunks."""
        if not isinstance(byte_length, int) or byte_length < 1:
            raise ValueError(f"Reply length must be a positive integer, got {byte_length!r}")
        old = self.protocol.framer
        if old is not None:
            self._count_dropped(*old.discard())
        self.protocol.framer = ByteLengthFramer(byte_length)

    async def exchange(
        self,
        frame: CommandFrame | bytes,
        expected_reply_length: int,
    ) -> bytes | LinkTimeout:
        """Write ``frame`` and wait for a reply of ``expected_reply_length`` bytes.

        A length of 0 writes the frame and returns ``b""`` without reading.

        Returns:
            The reply bytes, or :data:`NO_REPLY` if nothing arrived within
            :data:`REPLY_TIMEOUT_MS`.

        Raises:
            TransportError: If the port is not open.
        """
        if expected_reply_length < 0:
            raise ValueError(
                f"Reply length must not be negative, got {expected_reply_length}"
            )
        async with self._lock:
            if not self.connected:
                raise TransportError("Serial port is not open")

            if expected_reply_length and expected_reply_length != self.reply_length:
                self.configure_reply_framing(expected_reply_length)
            else:
                self._count_dropped(*self.protocol.framer.discard())
            framer = self.protocol.framer

            data = bytes(frame)
            logger.debug("TX %s", data.hex(" "))
            self.protocol.transport.write(data)
            self._exchanges += 1

            if expected_reply_length == 0:
                return b""

            try:
                reply = await asyncio.wait_for(
                    framer.chunks.get(), timeout=REPLY_TIMEOUT_MS / 1000
                )
            except asyncio.TimeoutError:
                self._timeouts += 1
                logger.warning(
                    "No reply to %s within %d ms", data.hex(" "), REPLY_TIMEOUT_MS
                )
                return NO_REPLY

            if reply is None:
                raise TransportError("Serial connection lost while awaiting reply")
            logger.debug("RX %s", reply.hex(" "))
            return reply

    def stats(self) -> dict[str, int]:
        return {
            "exchanges": self._exchanges,
            "timeouts": self._timeouts,
            "dropped_replies": self._dropped_replies,
            "reply_length": self.reply_length,
        }

    def _count_dropped(self, chunks: int, loose: int) -> None:
        if chunks or loose:
            self._dropped_replies += chunks
            logger.warning(
                "Dropped stale reply data: %d chunk(s), %d loose byte(s)",
                chunks,
                loose,
            )
