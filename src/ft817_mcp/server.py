"""MCP server entry point for the Yaesu FT-817.

Exposes tools, resources, and prompts via the Model Context Protocol
using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from mcp.server.fastmcp import FastMCP

from .errors import ConfigurationError, LinkTimeout, UnreachableFrequency
from .models.frequencies import RX_RANGES
from .models.modes import MODES
from .protocol.commands import DEFAULT_FREQUENCY
from .radio import FT817
from .transport.serial_connection import DEFAULT_BAUDRATE, list_serial_ports

logger = logging.getLogger(__name__)

PORT_ENV = "FT817_PORT"
BAUDRATE_ENV = "FT817_BAUDRATE"

mcp = FastMCP(
    "ft817",
    instructions="MCP server for CAT control of a Yaesu FT-817 transceiver",
)

# Global connection state
_radio: FT817 | None = None


def _get_radio() -> FT817:
    """Get the active radio connection, raising if not connected."""
    if _radio is None or not _radio.connected:
        raise RuntimeError(
            "Not connected to radio. Use the 'connect' tool first."
        )
    return _radio


def _no_reply(outcome: LinkTimeout) -> dict[str, Any]:
    return {
        "error": "No response from radio",
        "hint": "Check that the radio is switched on and the CAT cable is connected",
        "timeout_ms": outcome.timeout_ms,
    }


def _resolve_settings(port: str | None, baudrate: int | None) -> tuple[str, int]:
    port = port or os.environ.get(PORT_ENV)
    if not port:
        raise ConfigurationError(
            f"No serial port given and {PORT_ENV} is not set"
        )
    if baudrate is None:
        raw = os.environ.get(BAUDRATE_ENV)
        try:
            baudrate = int(raw) if raw else DEFAULT_BAUDRATE
        except ValueError as e:
            raise ConfigurationError(f"{BAUDRATE_ENV} must be an integer, got {raw!r}") from e
    return port, baudrate


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def list_ports() -> dict[str, Any]:
    """List serial ports that a CAT cable could be attached to."""
    return {
        "ports": [
            {"device": device, "description": description}
            for device, description in list_serial_ports()
        ]
    }


@mcp.tool()
async def connect(port: str | None = None, baudrate: int | None = None) -> dict[str, Any]:
    """Open the CAT serial link to the FT-817.

    Reads the frequency and mode once to confirm the radio answers.

    Args:
        port: Serial device, e.g. /dev/ttyUSB0 or COM3. Defaults to $FT817_PORT.
        baudrate: Must match the radio's CAT RATE menu. Defaults to
                  $FT817_BAUDRATE or 9600.
    """
    global _radio
    if _radio is not None and _radio.connected:
        return {
            "connected": True,
            "message": "Already connected",
            "port": _radio.session.settings.port,
        }

    try:
        port, baudrate = _resolve_settings(port, baudrate)
    except ConfigurationError as e:
        return {"error": str(e)}

    radio = FT817(port, baudrate)
    await radio.open()
    _radio = radio

    result: dict[str, Any] = {
        "connected": True,
        "port": port,
        "baudrate": baudrate,
    }

    reading = await radio.get_freq_and_mode()
    if reading:
        result.update(reading.to_dict())
    else:
        result["warning"] = "Radio did not answer; is it switched on?"

    return result


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the CAT serial link."""
    global _radio
    if _radio is None:
        return {"disconnected": True}
    _radio.close()
    _radio = None
    return {"disconnected": True}


# ─── RADIO TOOLS ─────────────────────────────────────────────────────

@mcp.tool()
async def set_frequency(frequency: int = DEFAULT_FREQUENCY) -> dict[str, Any]:
    """Tune the radio.

    Args:
        frequency: Frequency in units of 10 Hz, e.g. 14575000 for
                   145.750.00 MHz or 1407400 for 14.074.00 MHz.
    """
    radio = _get_radio()
    result = await radio.set_frequency(frequency)
    if isinstance(result, UnreachableFrequency):
        return {
            "error": f"Frequency {result.frequency} is outside the receive ranges",
            "ranges": [r.to_dict() for r in RX_RANGES],
        }
    return {"frequency": result}


@mcp.tool()
async def get_frequency_and_mode() -> dict[str, Any]:
    """Read the current frequency and operating mode."""
    radio = _get_radio()
    result = await radio.get_freq_and_mode()
    if isinstance(result, LinkTimeout):
        return _no_reply(result)
    return result.to_dict()


@mcp.tool()
async def get_receiver_status() -> dict[str, Any]:
    """Read the squelch state and S-meter."""
    radio = _get_radio()
    result = await radio.get_receiver_status()
    if isinstance(result, LinkTimeout):
        return _no_reply(result)
    return result.to_dict()


@mcp.tool()
async def get_transmitter_status() -> dict[str, Any]:
    """Read PTT, high-SWR and split flags.

    high_swr and split_mode_on are only meaningful while ptt_active is
    true; the result's "reliable" field says whether to trust them.
    """
    radio = _get_radio()
    result = await radio.get_transmitter_status()
    if isinstance(result, LinkTimeout):
        return _no_reply(result)
    return result.to_dict()


@mcp.tool()
def get_link_stats() -> dict[str, Any]:
    """Exchange, timeout, and dropped late-reply counters for the link."""
    return _get_radio().stats()


# ─── RESOURCES ───────────────────────────────────────────────────────

@mcp.resource("ft817://device/status")
def resource_device_status() -> str:
    """Connection state and serial settings."""
    if _radio is None or not _radio.connected:
        return json.dumps({"connected": False})
    settings = _radio.session.settings
    return json.dumps({
        "connected": True,
        "port": settings.port,
        "baudrate": settings.baudrate,
        "stats": _radio.stats(),
    })


@mcp.resource("ft817://catalog/modes")
def resource_modes() -> str:
    """Operating modes the radio can report, with their ids."""
    modes = [{"id": mode_id, "name": name} for mode_id, name in MODES.items()]
    return json.dumps({"modes": modes, "count": len(modes)})


@mcp.resource("ft817://catalog/rx-ranges")
def resource_rx_ranges() -> str:
    """Receivable frequency ranges, in 10 Hz units and MHz."""
    return json.dumps({"ranges": [r.to_dict() for r in RX_RANGES]})


# ─── PROMPTS ─────────────────────────────────────────────────────────

@mcp.prompt()
def tune_and_check(frequency: int) -> str:
    """Tune to a frequency and report what the receiver hears.

    Args:
        frequency: Frequency in units of 10 Hz.
    """
    return f"""Tune the radio to {frequency} (10 Hz units) with set_frequency.
Then confirm it with get_frequency_and_mode and read get_receiver_status.

Report:
- The frequency in MHz and the operating mode
- Whether the receiver is squelched
- The S-meter reading

If a tool reports "No response from radio", ask the user to check power
and the CAT cable before retrying."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
