"""Serial transport: port handling, reply re-framing and the exchange primitive."""

from .serial_connection import (
    REPLY_TIMEOUT_MS,
    ByteLengthFramer,
    SerialSettings,
    TransportSession,
    list_serial_ports,
)
