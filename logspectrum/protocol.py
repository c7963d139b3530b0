"""Binary frame packet for remote spectrum displays.

Packet format (6 + 2*M bytes):
  Byte 0-1:      0xAA 0x55       Sync marker
  Byte 2:        Frame number    Rolling 0-255
  Byte 3-4:      Bucket count M  Big endian
  Byte 5..:      Smooth curve    M bytes, 0-255
  Byte 5+M..:    Smear curve     M bytes, 0-255
  Last byte:     Checksum        XOR of bytes 2 .. 4+2M

Curve values are clipped to 0..1 before scaling, so negative (near
silent) buckets arrive as 0.
"""

import numpy as np

SYNC = bytes([0xAA, 0x55])
HEADER_SIZE = 3  # frame + count


def quantize(values) -> bytes:
    """Map 0..1 floats to 0..255 bytes."""
    v = np.clip(np.asarray(values, dtype=np.float64), 0.0, 1.0)
    return np.round(v * 255.0).astype(np.uint8).tobytes()


def _checksum(body) -> int:
    chk = 0
    for b in body:
        chk ^= b
    return chk


def encode_frame(frame: int, smooth, smear) -> bytes:
    """Build a frame packet from equally long smooth/smear curves."""
    m = len(smooth)
    if len(smear) != m:
        raise ValueError(f"smooth and smear lengths differ: {m} != {len(smear)}")
    if m > 0xFFFF:
        raise ValueError(f"too many buckets for one packet: {m}")

    body = bytearray(HEADER_SIZE)
    body[0] = frame & 0xFF
    body[1] = (m >> 8) & 0xFF
    body[2] = m & 0xFF
    body += quantize(smooth)
    body += quantize(smear)
    return SYNC + bytes(body) + bytes([_checksum(body)])


def decode_frame(data):
    """Validate one datagram.

    Returns a dict with frame/count/smooth/smear (smooth and smear as
    bytes), or None if the sync, length or checksum is wrong.
    """
    if len(data) < 2 + HEADER_SIZE + 1:
        return None
    if data[0:2] != SYNC:
        return None
    m = (data[3] << 8) | data[4]
    if len(data) != 2 + HEADER_SIZE + 2 * m + 1:
        return None
    body = data[2:-1]
    if _checksum(body) != data[-1]:
        return None
    start = 2 + HEADER_SIZE
    return {
        "frame": data[2],
        "count": m,
        "smooth": bytes(data[start:start + m]),
        "smear": bytes(data[start + m:start + 2 * m]),
    }
