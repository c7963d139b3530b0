import numpy as np
import pytest

from logspectrum.protocol import SYNC, decode_frame, encode_frame, quantize


def test_packet_layout():
    pkt = encode_frame(7, [0.0, 1.0, 0.5], [0.25, 0.0, 1.0])
    assert len(pkt) == 2 + 3 + 2 * 3 + 1
    assert pkt[:2] == SYNC
    assert pkt[2] == 7
    assert pkt[3:5] == bytes([0, 3])
    assert pkt[5:8] == bytes([0, 255, 128])
    assert pkt[8:11] == bytes([64, 0, 255])


def test_decode_returns_fields():
    smooth = np.linspace(0.0, 1.0, 300)
    smear = smooth[::-1]
    pkt = encode_frame(300, smooth, smear)
    decoded = decode_frame(pkt)
    assert decoded["frame"] == 300 & 0xFF
    assert decoded["count"] == 300
    assert decoded["smooth"] == quantize(smooth)
    assert decoded["smear"] == quantize(smear)


def test_quantize_clips_out_of_range():
    assert quantize([-2.0, 0.0, 1.0, 4.0]) == bytes([0, 0, 255, 255])


def test_corrupt_checksum_rejected():
    pkt = bytearray(encode_frame(1, [0.5, 0.5], [0.1, 0.1]))
    pkt[6] ^= 0x01
    assert decode_frame(bytes(pkt)) is None


@pytest.mark.parametrize("data", [
    b"",
    b"\xaa\x55\x00",
    b"\x00\x55\x00\x00\x00\x00",
])
def test_malformed_packets_rejected(data):
    assert decode_frame(data) is None


def test_truncated_packet_rejected():
    pkt = encode_frame(1, [0.5] * 4, [0.5] * 4)
    assert decode_frame(pkt[:-2]) is None


def test_mismatched_curves_rejected():
    with pytest.raises(ValueError):
        encode_frame(0, [0.1, 0.2], [0.1])
