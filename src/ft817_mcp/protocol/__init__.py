"""Protocol layer: command frames, command builders, and reply decoding."""

from .framing import CommandFrame, build_frame
from .commands import Command, REPLY_LENGTHS
