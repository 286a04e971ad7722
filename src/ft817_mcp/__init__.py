"""CAT control of the Yaesu FT-817 over a serial link, exposed via MCP."""

from .errors import (
    NO_REPLY,
    CATError,
    ConfigurationError,
    FormatError,
    LinkTimeout,
    TransportError,
    UnreachableFrequency,
)
from .radio import FT817
