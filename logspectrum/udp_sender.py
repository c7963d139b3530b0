"""UDP renderer: broadcasts each frame's smooth/smear curves as one packet.

The broadcaster owns the rolling frame counter, so receivers can spot
dropped or reordered datagrams. Packets are built by protocol.encode_frame.
"""

import logging
import socket

from logspectrum.config import DEFAULT_UDP_PORT
from logspectrum.protocol import encode_frame

logger = logging.getLogger(__name__)

BROADCAST_ADDR = "255.255.255.255"


class FrameBroadcaster:
    """Sends one spectrum packet per rendered frame."""

    def __init__(self, port=DEFAULT_UDP_PORT, address=BROADCAST_ADDR):
        self._target = (address, port)
        self._sock = None
        self._frame = 0
        self._dropped = 0

    @property
    def frames_sent(self) -> int:
        return self._frame

    def open(self):
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        logger.info("Sending frames to %s:%d", *self._target)

    def render(self, smooth, smear):
        """Encode and send one frame; does nothing until open() is called.

        Send errors drop the frame, log once per burst, and leave the
        counter where it was.
        """
        if self._sock is None:
            return
        packet = encode_frame(self._frame, smooth, smear)
        try:
            self._sock.sendto(packet, self._target)
        except OSError as e:
            if self._dropped == 0:
                logger.warning("Send error: %s", e)
            self._dropped += 1
            return
        if self._dropped:
            logger.info("Sending resumed after %d dropped frames", self._dropped)
            self._dropped = 0
        self._frame += 1

    def close(self):
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *exc):
        self.close()
