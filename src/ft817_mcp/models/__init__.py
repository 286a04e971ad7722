"""Lookup tables describing the FT-817's modes and receive coverage."""

from .frequencies import RX_RANGES, FrequencyRange, is_valid_rx_frequency
from .modes import MODES, mode_name_by_id
