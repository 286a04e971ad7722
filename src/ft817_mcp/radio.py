"""High-level FT-817 client.

Each operation builds its command frame, runs one exchange on the
transport session and decodes the reply. "Radio did not answer" and
"frequency not receivable" come back as :class:`LinkTimeout` and
:class:`UnreachableFrequency` values rather than exceptions.
"""

from __future__ import annotations

import logging
from typing import Callable

from .errors import LinkTimeout, UnreachableFrequency, UnreachableFrequencyError
from .protocol.commands import (
    DEFAULT_FREQUENCY,
    REPLY_LENGTHS,
    Command,
    build_read_freq_mode,
    build_read_rx_status,
    build_read_tx_status,
    build_set_frequency,
    format_frequency,
)
from .protocol.framing import CommandFrame
from .protocol.parser import (
    FrequencyAndMode,
    ReceiverStatus,
    TransmitterStatus,
    decode_freq_mode,
    decode_rx_status,
    decode_tx_status,
    describe_status_byte,
)
from .transport.serial_connection import DEFAULT_BAUDRATE, TransportSession

logger = logging.getLogger(__name__)

# Called with each set-frequency frame before it is written. Raising from
# the hook aborts the write.
PreWriteHook = Callable[[CommandFrame], None]


class FT817:
    """A connection between this computer and the radio.

    Usage::

        async with FT817("/dev/ttyUSB0") as radio:
            await radio.set_frequency(14575000)
            status = await radio.get_receiver_status()
            if not status:
                print("Radio not turned on")
    """

    def __init__(
        self,
        port: str | None,
        baudrate: int = DEFAULT_BAUDRATE,
        pre_write: PreWriteHook | None = None,
    ) -> None:
        self.session = TransportSession(port, baudrate)
        self.pre_write = pre_write

    @property
    def connected(self) -> bool:
        return self.session.connected

    async def open(self) -> None:
        await self.session.open()

    def close(self) -> None:
        self.session.close()

    async def __aenter__(self) -> FT817:
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    async def execute(
        self, frame: CommandFrame, response_length: int = 1
    ) -> bytes | LinkTimeout:
        """Send ``frame`` and return the raw reply, or the no-reply outcome."""
        return await self.session.exchange(frame, response_length)

    async def set_frequency(
        self, frequency: int | str = DEFAULT_FREQUENCY
    ) -> str | UnreachableFrequency:
        """Tune the radio.

        Args:
            frequency: Frequency in 10 Hz units, as an int or digit string.

        Returns:
            The eight-digit frequency string that was sent, or
            :class:`UnreachableFrequency` if nothing was written.
        """
        try:
            frame = build_set_frequency(frequency)
        except UnreachableFrequencyError as e:
            logger.info("Refusing to tune: %s", e)
            return UnreachableFrequency(e.frequency)

        if self.pre_write is not None:
            self.pre_write(frame)

        await self.execute(frame, REPLY_LENGTHS[Command.SET_FREQUENCY])
        return format_frequency(frequency)

    async def get_freq_and_mode(self) -> FrequencyAndMode | LinkTimeout:
        """Read the current frequency and operating mode."""
        resp = await self.execute(
            build_read_freq_mode(), REPLY_LENGTHS[Command.READ_FREQ_MODE]
        )
        if isinstance(resp, LinkTimeout):
            logger.info("Radio not turned on")
            return resp
        return decode_freq_mode(resp)

    async def get_receiver_status(self) -> ReceiverStatus | LinkTimeout:
        """Read squelch state and S-meter."""
        resp = await self.execute(
            build_read_rx_status(), REPLY_LENGTHS[Command.READ_RX_STATUS]
        )
        if isinstance(resp, LinkTimeout):
            return resp
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Receiver status bits %s", describe_status_byte(resp))
        return decode_rx_status(resp)

    async def get_transmitter_status(self) -> TransmitterStatus | LinkTimeout:
        """Read PTT, high-SWR and split flags.

        Only trust ``high_swr`` and ``split_mode_on`` when ``ptt_active``
        is true.
        """
        resp = await self.execute(
            build_read_tx_status(), REPLY_LENGTHS[Command.READ_TX_STATUS]
        )
        if isinstance(resp, LinkTimeout):
            return resp
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Transmitter status bits %s", describe_status_byte(resp))
        return decode_tx_status(resp)

    def stats(self) -> dict[str, int]:
        return self.session.stats()
