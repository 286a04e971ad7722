"""Error taxonomy and tagged outcomes for CAT exchanges.

Programmer and setup mistakes are exceptions. The two outcomes a caller is
expected to branch on, "the radio did not answer" and "that frequency cannot
be tuned", are returned as values instead of raised.
"""

from __future__ import annotations

from dataclasses import dataclass


class CATError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(CATError):
    """No serial device was supplied, or the supplied settings are unusable."""


class FormatError(CATError, ValueError):
    """Malformed hex or decimal input reached the codec."""


class TransportError(CATError, ConnectionError):
    """The serial channel is not open or has been closed."""


class ReplyLengthError(TransportError):
    """A reply buffer did not have the length its command declared."""


class UnreachableFrequencyError(CATError, ValueError):
    """The requested frequency is outside every receivable range."""

    def __init__(self, frequency: int) -> None:
        super().__init__(f"Frequency {frequency} is not receivable")
        self.frequency = frequency


@dataclass(frozen=True)
class LinkTimeout:
    """No reply arrived before the exchange timer fired.

    Usually means the radio is switched off or the cable is unplugged.
    """

    timeout_ms: int = 1000

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class UnreachableFrequency:
    """A set-frequency request was refused before anything was written."""

    frequency: int

    def __bool__(self) -> bool:
        return False


NO_REPLY = LinkTimeout()
