"""Opcodes and high-level command builders.

Each builder returns a fresh :class:`CommandFrame`; the reply length the
radio will answer with is looked up in :data:`REPLY_LENGTHS`.
"""

from __future__ import annotations

from enum import IntEnum

from ..errors import UnreachableFrequencyError
from ..models.frequencies import is_valid_rx_frequency
from ..utils.conversions import decimal_pair_to_bcd
from .framing import CommandFrame, build_frame

# 145.750.00 MHz, in 10 Hz units
DEFAULT_FREQUENCY = 14575000
FREQUENCY_DIGITS = 8


class Command(IntEnum):
    """CAT opcodes."""

    SET_FREQUENCY = 0x01
    READ_FREQ_MODE = 0x03
    READ_RX_STATUS = 0xE7
    READ_TX_STATUS = 0xF7


# Reply length in bytes for each opcode; 0 means the radio does not answer
REPLY_LENGTHS: dict[Command, int] = {
    Command.SET_FREQUENCY: 0,
    Command.READ_FREQ_MODE: 5,
    Command.READ_RX_STATUS: 1,
    Command.READ_TX_STATUS: 1,
}


def build_command(command: Command, payload: bytes | None = None) -> CommandFrame:
    """Build a frame for ``command``, zero-filling the payload if omitted."""
    if payload is None:
        return build_frame(command.value)
    return build_frame(command.value, payload)


def parse_frequency(frequency: int | str) -> int:
    """Return ``frequency`` as an integer, accepting a string of decimal digits.

    Raises:
        ValueError: If a string is given that is not all decimal digits.
    """
    if isinstance(frequency, str):
        text = frequency.strip()
        if not text.isdecimal():
            raise ValueError(f"Frequency must be numeric, got {frequency!r}")
        return int(text)
    return frequency


def format_frequency(frequency: int | str) -> str:
    """Normalise a frequency to its eight-digit, zero-padded form.

    Accepts an integer or a string of decimal digits.

    Raises:
        ValueError: If the value is negative, not numeric, or longer than
            eight digits.
    """
    frequency = parse_frequency(frequency)
    if frequency < 0:
        raise ValueError(f"Frequency must be positive, got {frequency}")
    digits = str(frequency).zfill(FREQUENCY_DIGITS)
    if len(digits) > FREQUENCY_DIGITS:
        raise ValueError(
            f"Frequency must have at most {FREQUENCY_DIGITS} digits, got {frequency}"
        )
    return digits


def build_set_frequency(frequency: int | str = DEFAULT_FREQUENCY) -> CommandFrame:
    """Build a Set Frequency command (0x01).

    The eight frequency digits are BCD-packed two per byte, MHz first.

    Args:
        frequency: Frequency in 10 Hz units, e.g. ``14575000``.

    Raises:
        UnreachableFrequencyError: If the radio cannot receive there.
    """
    value = parse_frequency(frequency)
    if not is_valid_rx_frequency(value):
        raise UnreachableFrequencyError(value)
    digits = format_frequency(value)
    payload = bytes(
        decimal_pair_to_bcd(digits[i : i + 2]) for i in range(0, FREQUENCY_DIGITS, 2)
    )
    return build_command(Command.SET_FREQUENCY, payload)


def build_read_freq_mode() -> CommandFrame:
    """Build a Read Frequency and Mode command (0x03)."""
    return build_command(Command.READ_FREQ_MODE)


def build_read_rx_status() -> CommandFrame:
    """Build a Read Receiver Status command (0xE7)."""
    return build_command(Command.READ_RX_STATUS)


def build_read_tx_status() -> CommandFrame:
    """Build a Read Transmitter Status command (0xF7)."""
    return build_command(Command.READ_TX_STATUS)
