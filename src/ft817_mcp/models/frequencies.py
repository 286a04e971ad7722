"""Receive coverage of the FT-817.

Frequencies throughout the CAT protocol are integers in units of 10 Hz,
so ``14575000`` is 145.750.00 MHz.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FrequencyRange:
    """An inclusive range of CAT frequency values (10 Hz units)."""

    name: str
    low: int
    high: int

    def __contains__(self, frequency: int) -> bool:
        return self.low <= frequency <= self.high

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "low": self.low,
            "high": self.high,
            "low_mhz": self.low / 100_000,
            "high_mhz": self.high / 100_000,
        }


RX_RANGES: tuple[FrequencyRange, ...] = (
    FrequencyRange("HF/6m", 10_000, 5_600_000),        # 100 kHz - 56 MHz
    FrequencyRange("VHF", 7_600_000, 15_400_000),      # 76 - 154 MHz
    FrequencyRange("UHF", 42_000_000, 47_000_000),     # 420 - 470 MHz
)


def is_valid_rx_frequency(frequency: int) -> bool:
    """Return True if the radio can receive on ``frequency``."""
    return any(frequency in r for r in RX_RANGES)
