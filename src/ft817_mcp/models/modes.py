"""Operating mode table.

The radio reports its mode as the last byte of the frequency/mode reply.
Ids are kept as the two-character lowercase hex rendering of that byte.
"""

from __future__ import annotations

MODES: dict[str, str] = {
    "00": "LSB",
    "01": "USB",
    "02": "CW",
    "03": "CWR",
    "04": "AM",
    "06": "WFM",
    "08": "FM",
    "0a": "DIG",
    "0c": "PKT",
    # Narrow-filter variants set bit 7
    "82": "CWN",
    "83": "CWRN",
    "88": "FMN",
    "8a": "DIGN",
}


def mode_name_by_id(mode_id: str) -> str:
    """Resolve a mode id to its name.

    Unknown ids are returned unchanged, so resolution never fails.
    """
    return MODES.get(mode_id.lower(), mode_id)
