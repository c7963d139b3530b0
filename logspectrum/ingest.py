"""Audio callback side of the pipeline: one channel into the ring buffer."""

import logging

import numpy as np

from logspectrum.ring_buffer import SampleRingBuffer

logger = logging.getLogger(__name__)


class ChannelIngestAdapter:
    """Feeds one channel of every delivered audio block to a ring buffer."""

    def __init__(self, ring: SampleRingBuffer, channel: int = 0):
        if channel < 0:
            raise ValueError(f"channel must be >= 0, got {channel}")
        self._ring = ring
        self._channel = channel
        self._warned = False

    @property
    def channel(self) -> int:
        return self._channel

    def on_audio_block(self, samples, frame_count: int):
        """Append the selected channel of the first `frame_count` frames.

        Args:
            samples:     float audio, shape (frames,) for mono or
                         (frames, channels) as delivered by sounddevice
            frame_count: number of valid frames in `samples`
        """
        block = np.asarray(samples)
        if block.ndim == 1:
            mono = block[:frame_count]
        else:
            available = block.shape[1]
            ch = self._channel
            if ch >= available:
                ch = available - 1
                if not self._warned:
                    self._warned = True
                    logger.warning("Channel %d not in a %d-channel stream, "
                                   "analysing channel %d", self._channel,
                                   available, ch)
            mono = block[:frame_count, ch]
        self._ring.extend(mono)
