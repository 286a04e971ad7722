"""Tests for reply decoding."""

import pytest

from ft817_mcp.errors import FormatError, ReplyLengthError, TransportError
from ft817_mcp.models.modes import mode_name_by_id
from ft817_mcp.protocol.commands import build_set_frequency
from ft817_mcp.protocol.parser import (
    decode_freq_mode,
    decode_rx_status,
    decode_tx_status,
    describe_status_byte,
    smeter_reading,
)


def test_decode_freq_mode():
    """Reply 14 57 50 00 03 is 145.750.00 MHz in mode 03."""
    result = decode_freq_mode(bytes.fromhex("1457500003"))
    assert result.frequency == "14575000"
    assert result.mhzs == 145
    assert result.khzs == 750
    assert result.hzs == 0
    assert result.mode_id == "03"
    assert result.mode_name == mode_name_by_id("03")
    assert result.hz == 145_750_000


def test_decode_freq_mode_hf():
    """Leading zeros survive in the digit string but not in the integers."""
    result = decode_freq_mode(bytes.fromhex("0140740001"))
    assert result.frequency == "01407400"
    assert (result.mhzs, result.khzs, result.hzs) == (14, 74, 0)
    assert result.mode_name == "USB"


def test_decode_freq_mode_unknown_mode_passes_through():
    """An unknown mode id is reported as its own name."""
    result = decode_freq_mode(bytes.fromhex("14575000ff"))
    assert result.mode_id == "ff"
    assert result.mode_name == "ff"


def test_decode_freq_mode_to_dict():
    """to_dict includes a readable display string."""
    data = decode_freq_mode(bytes.fromhex("1457500008")).to_dict()
    assert data["display"] == "145.750.00 MHz"
    assert data["mode_name"] == "FM"


def test_decode_freq_mode_rejects_non_bcd():
    """A frequency nibble above 9 is a format fault."""
    with pytest.raises(FormatError):
        decode_freq_mode(bytes.fromhex("1a57500003"))


@pytest.mark.parametrize(
    "f", [10000, 350000, 1407400, 5600000, 7600000, 14575000, 43312500, 47000000]
)
def test_set_frequency_payload_decodes_back(f):
    """The set-frequency digits decode back through the reply layout."""
    frame = build_set_frequency(f)
    result = decode_freq_mode(frame.to_bytes())
    assert result.frequency == str(f).zfill(8)


@pytest.mark.parametrize("s", range(10))
def test_rx_status_smeter_up_to_s9(s):
    """Values 0-9 read S0-S9 with squelch open."""
    result = decode_rx_status(bytes([s]))
    assert result.squelched is False
    assert result.smeter_reading == f"S{s}"
    assert result.smeter == s


@pytest.mark.parametrize(
    "s, reading",
    [(10, "S9+10dB"), (11, "S9+20dB"), (12, "S9+30dB"), (15, "S9+60dB")],
)
def test_rx_status_smeter_over_s9(s, reading):
    """Values above 9 read in 10 dB steps over S9."""
    assert decode_rx_status(bytes([s])).smeter_reading == reading


def test_rx_status_squelched():
    """Bit 7 set means the receiver is squelched."""
    result = decode_rx_status(bytes([0b10000000]))
    assert result.squelched is True
    assert result.smeter_reading == "S0"


def test_rx_status_ignores_bits_4_to_6():
    """Only bits 0-3 carry the S-meter."""
    assert decode_rx_status(bytes([0b01110101])).smeter_reading == "S5"


def test_smeter_reading_domain():
    """The 4-bit field is never extrapolated past 15."""
    with pytest.raises(ValueError):
        smeter_reading(16)
    with pytest.raises(ValueError):
        smeter_reading(-1)


def test_tx_status_all_clear_byte():
    """0x00: PTT active (inverted line), SWR fine, split off."""
    result = decode_tx_status(bytes([0b00000000]))
    assert result.ptt_active is True
    assert result.high_swr is False
    assert result.split_mode_on is False


def test_tx_status_all_clear_byte_is_reliable():
    """With PTT active the SWR and split flags can be trusted."""
    result = decode_tx_status(bytes([0b00000000]))
    assert result.reliable is True
    assert result.to_dict()["reliable"] is True


def test_tx_status_receiving_reports_flags_as_set():
    """On receive (0xE0) the radio sets every flag; none is reliable."""
    result = decode_tx_status(bytes([0b11100000]))
    assert result.ptt_active is False
    assert result.high_swr is True
    assert result.split_mode_on is True
    assert result.reliable is False


def test_tx_status_receiving():
    """Bit 7 high means PTT is not active."""
    result = decode_tx_status(bytes([0b10000000]))
    assert result.ptt_active is False
    assert result.to_dict()["reliable"] is False


def test_tx_status_individual_bits():
    """Bits 6 and 5 map to high SWR and split."""
    swr_only = decode_tx_status(bytes([0b01000000]))
    assert swr_only.high_swr is True
    assert swr_only.split_mode_on is False
    split_only = decode_tx_status(bytes([0b00100000]))
    assert split_only.high_swr is False
    assert split_only.split_mode_on is True


@pytest.mark.parametrize(
    "decoder, buf",
    [
        (decode_freq_mode, b"\x14\x57\x50\x00"),
        (decode_rx_status, b""),
        (decode_rx_status, b"\x00\x00"),
        (decode_tx_status, b"\x00\x00"),
    ],
)
def test_wrong_length_is_transport_failure(decoder, buf):
    """A reply of the wrong length is a transport error, not a format error."""
    with pytest.raises(ReplyLengthError):
        decoder(buf)
    with pytest.raises(TransportError):
        decoder(buf)


def test_describe_status_byte():
    """Status bytes render as bit patterns."""
    assert describe_status_byte(b"\x8f") == "10001111"
