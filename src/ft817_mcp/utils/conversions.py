"""Decimal, hex and bit-pattern conversions used by the CAT protocol.

The FT-817 packs frequency digits as BCD: the byte ``0x14`` carries the
decimal digits ``1`` and ``4``, not the value twenty.
"""

from __future__ import annotations

import string

from ..errors import FormatError

_DECIMAL = frozenset(string.digits)
_HEX = frozenset(string.hexdigits)


def decimal_pair_to_bcd(pair: str) -> int:
    """Pack a two-character decimal string into one BCD byte.

    Args:
        pair: Exactly two decimal digits, e.g. ``"57"``.

    Returns:
        The packed byte, e.g. ``0x57``.

    Raises:
        FormatError: If ``pair`` is not two decimal digits.
    """
    if len(pair) != 2 or not set(pair) <= _DECIMAL:
        raise FormatError(f"Expected two decimal digits, got {pair!r}")
    return (int(pair[0]) << 4) | int(pair[1])


def hex_byte_to_bits(hex_string: str) -> int:
    """Parse one hex-encoded byte so its bits can be masked.

    Raises:
        FormatError: On malformed hex or anything other than one byte.
    """
    if len(hex_string) != 2 or not set(hex_string) <= _HEX:
        raise FormatError(f"Expected one hex-encoded byte, got {hex_string!r}")
    return int(hex_string, 16)


def bits_to_string(value: int) -> str:
    """Render a byte as an 8-character ``0``/``1`` pattern, MSB first."""
    if not 0 <= value <= 0xFF:
        raise FormatError(f"Value must fit in one byte, got {value}")
    return format(value, "08b")


def bcd_digits(data: bytes) -> str:
    """Return the decimal digit string carried by BCD-packed ``data``.

    Raises:
        FormatError: If any nibble is not a decimal digit.
    """
    digits = data.hex()
    if not set(digits) <= _DECIMAL:
        raise FormatError(f"Not BCD-encoded: {data.hex(' ')}")
    return digits
