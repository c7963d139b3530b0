"""Audio file playback that taps every played block.

Decoding is left entirely to soundfile; this module only streams the
decoded frames to the output device and passes each block to a callback
on the way out, so the analysis follows what is actually heard.
"""

import logging
import threading

import numpy as np
import sounddevice as sd
import soundfile as sf

from logspectrum.config import BLOCK_SIZE

logger = logging.getLogger(__name__)


class FilePlayer:
    """Plays an audio file and reports each block to `callback`."""

    def __init__(self, path, callback, device=None, block_size=BLOCK_SIZE,
                 loop=False):
        """
        Args:
            path:       Audio file readable by soundfile.
            callback:   Called with (block, frames) for each played block.
            device:     Output device index or name; None = default.
            block_size: Frames per block.
            loop:       Restart from the beginning at end of file.
        """
        self._data, self._sample_rate = sf.read(path, dtype="float32", always_2d=True)
        self._path = path
        self._callback = callback
        self._device = device
        self._block_size = block_size
        self._loop = loop
        self._pos = 0
        self._stream = None
        self._finished = threading.Event()
        logger.info("Loaded %s: %d ch, %d Hz, %.1f s", path, self.channels,
                    self._sample_rate, self.duration)

    @property
    def sample_rate(self):
        return self._sample_rate

    @property
    def channels(self):
        return self._data.shape[1]

    @property
    def duration(self):
        return len(self._data) / self._sample_rate

    @property
    def finished(self) -> bool:
        return self._finished.is_set()

    def start(self):
        """Open the output stream and begin playback."""
        self._finished.clear()
        self._stream = sd.OutputStream(
            device=self._device,
            channels=self.channels,
            samplerate=self._sample_rate,
            blocksize=self._block_size,
            dtype="float32",
            callback=self._audio_callback,
            finished_callback=self._finished.set,
        )
        self._stream.start()

    def stop(self):
        """Stop playback and close the stream."""
        if self._stream is not None:
            self._stream.stop()
            self._stream.close()
            self._stream = None
        self._finished.set()

    def _next_block(self, frames):
        block = self._data[self._pos:self._pos + frames]
        self._pos += len(block)
        if not self._loop or len(block) == frames or len(self._data) == 0:
            return block

        # Files shorter than one block wrap several times
        parts = [block]
        got = len(block)
        while got < frames:
            self._pos = min(frames - got, len(self._data))
            parts.append(self._data[:self._pos])
            got += self._pos
        return np.concatenate(parts)

    def _audio_callback(self, outdata, frames, time_info, status):
        if status:
            logger.warning("%s", status)
        block = self._next_block(frames)
        n = len(block)
        outdata[:n] = block
        if n < frames:
            outdata[n:] = 0.0
        if n:
            self._callback(block, n)
        if n < frames:
            raise sd.CallbackStop
