"""Command frame layout for the FT-817 CAT protocol.

Frame layout::

    +---------+---------+---------+---------+---------+
    |  P1     |  P2     |  P3     |  P4     | Opcode  |
    | 1 byte  | 1 byte  | 1 byte  | 1 byte  | 1 byte  |
    +---------+---------+---------+---------+---------+

- P1-P4: opcode-dependent parameters (BCD frequency digits, or zeros)
- Opcode: selects the operation

Every command is exactly five bytes. There is no preamble, length field or
checksum; the expected reply length is implied by the opcode.
"""

from __future__ import annotations

from dataclasses import dataclass

FRAME_SIZE = 5
PAYLOAD_SIZE = FRAME_SIZE - 1
EMPTY_PAYLOAD = b"\x00" * PAYLOAD_SIZE


@dataclass(frozen=True)
class CommandFrame:
    """A five-byte command ready to be written to the radio."""

    opcode: int
    payload: bytes = EMPTY_PAYLOAD

    def to_bytes(self) -> bytes:
        return self.payload + bytes([self.opcode])

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __len__(self) -> int:
        return FRAME_SIZE

    def __repr__(self) -> str:
        return (
            f"CommandFrame(opcode=0x{self.opcode:02X}, "
            f"payload={self.payload.hex(' ')})"
        )


def build_frame(opcode: int, payload: bytes = EMPTY_PAYLOAD) -> CommandFrame:
    """Build a command frame.

    Args:
        opcode: Single-byte operation code.
        payload: Exactly four parameter bytes.

    Raises:
        ValueError: If the opcode does not fit in a byte or the payload is
            not four bytes long.
    """
    if not 0 <= opcode <= 0xFF:
        raise ValueError(f"Opcode must be 0x00-0xFF, got {opcode:#x}")
    if len(payload) != PAYLOAD_SIZE:
        raise ValueError(
            f"Payload must be {PAYLOAD_SIZE} bytes, got {len(payload)}"
        )
    return CommandFrame(opcode=opcode, payload=bytes(payload))
