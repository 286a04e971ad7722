"""Reply decoding for radio answers.

Each decoder takes the raw reply bytes for one command and returns a frozen
dataclass. A reply of the wrong length means the link misbehaved, so it is
reported as :class:`ReplyLengthError` rather than decoded.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from ..errors import ReplyLengthError
from ..models.modes import mode_name_by_id
from ..utils.conversions import bcd_digits, bits_to_string, hex_byte_to_bits
from .commands import REPLY_LENGTHS, Command

SQUELCH_BIT = 0b10000000
SMETER_MASK = 0b00001111
PTT_BIT = 0b10000000
HIGH_SWR_BIT = 0b01000000
SPLIT_BIT = 0b00100000


@dataclass(frozen=True)
class FrequencyAndMode:
    """Parsed Read Frequency and Mode (0x03) reply."""

    frequency: str  # eight digits, 10 Hz units
    mhzs: int
    khzs: int
    hzs: int  # tens of Hz
    mode_id: str
    mode_name: str

    @property
    def hz(self) -> int:
        return int(self.frequency) * 10

    def to_dict(self) -> dict:
        data = asdict(self)
        data["hz"] = self.hz
        data["display"] = f"{self.mhzs}.{self.khzs:03d}.{self.hzs:02d} MHz"
        return data


@dataclass(frozen=True)
class ReceiverStatus:
    """Parsed Read Receiver Status (0xE7) reply."""

    squelched: bool
    smeter_reading: str
    smeter: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class TransmitterStatus:
    """Parsed Read Transmitter Status (0xF7) reply.

    ``high_swr`` and ``split_mode_on`` are only meaningful while
    ``ptt_active`` is true. On receive the radio reports both as set
    regardless of the real state, so callers must not act on them then.
    """

    ptt_active: bool
    high_swr: bool
    split_mode_on: bool

    @property
    def reliable(self) -> bool:
        return self.ptt_active

    def to_dict(self) -> dict:
        data = asdict(self)
        data["reliable"] = self.reliable
        return data


def _check_length(command: Command, buf: bytes) -> None:
    expected = REPLY_LENGTHS[command]
    if len(buf) != expected:
        raise ReplyLengthError(
            f"{command.name} reply must be {expected} bytes, got {len(buf)}"
        )


def smeter_reading(s: int) -> str:
    """Render a 4-bit S-meter value.

    0-9 map to ``S0``-``S9``; 10-15 map to 10 dB steps above S9.
    """
    if not 0 <= s <= 15:
        raise ValueError(f"S-meter value must be 0-15, got {s}")
    if s <= 9:
        return f"S{s}"
    return f"S9+{(s - 9) * 10}dB"


def decode_freq_mode(buf: bytes) -> FrequencyAndMode:
    """Decode a five-byte frequency/mode reply.

    The first four bytes are BCD frequency digits (MHz first); the last
    byte is the mode id.
    """
    _check_length(Command.READ_FREQ_MODE, buf)
    mode_id = buf[4:].hex()
    frequency = bcd_digits(buf[:4])
    return FrequencyAndMode(
        frequency=frequency,
        mhzs=int(frequency[0:3]),
        khzs=int(frequency[3:6]),
        hzs=int(frequency[6:8]),
        mode_id=mode_id,
        mode_name=mode_name_by_id(mode_id),
    )


def decode_rx_status(buf: bytes) -> ReceiverStatus:
    """Decode a one-byte receiver status reply.

    Bit 7 is set while the receiver is squelched (no signal). Bits 0-3
    carry the S-meter value.
    """
    _check_length(Command.READ_RX_STATUS, buf)
    b = hex_byte_to_bits(buf.hex())
    s = b & SMETER_MASK
    return ReceiverStatus(
        squelched=bool(b & SQUELCH_BIT),
        smeter_reading=smeter_reading(s),
        smeter=s,
    )


def decode_tx_status(buf: bytes) -> TransmitterStatus:
    """Decode a one-byte transmitter status reply.

    Bit 7 is low while PTT is active. Bit 6 is high for excessive SWR and
    bit 5 is high in split mode.
    """
    _check_length(Command.READ_TX_STATUS, buf)
    b = hex_byte_to_bits(buf.hex())
    return TransmitterStatus(
        ptt_active=not b & PTT_BIT,
        high_swr=bool(b & HIGH_SWR_BIT),
        split_mode_on=bool(b & SPLIT_BIT),
    )


def describe_status_byte(buf: bytes) -> str:
    """Bit pattern of a one-byte status reply, for logs and diagnostics."""
    return bits_to_string(hex_byte_to_bits(buf.hex()))
