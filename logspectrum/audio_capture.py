"""Live audio input via sounddevice.

Opens a threaded InputStream and hands every captured block, still
multi-channel, to a callback (normally SpectrumPipeline.on_audio_block).
"""

import logging

import sounddevice as sd

from logspectrum.config import BLOCK_SIZE, SAMPLE_RATE

logger = logging.getLogger(__name__)

# Substrings of input devices that carry system output rather than a mic
LOOPBACK_HINTS = ("blackhole", "loopback", "monitor", "stereo mix")


def find_loopback_device() -> int | None:
    """Return the index of a loopback-style input device, or None."""
    for i, dev in enumerate(sd.query_devices()):
        name = dev["name"].lower()
        if dev["max_input_channels"] >= 1 and any(h in name for h in LOOPBACK_HINTS):
            return i
    return None


def list_input_devices() -> list[tuple[int, str, int]]:
    """(index, name, input channels) for every device that can record."""
    return [
        (i, dev["name"], dev["max_input_channels"])
        for i, dev in enumerate(sd.query_devices())
        if dev["max_input_channels"] > 0
    ]


class AudioCapture:
    """Captures audio blocks from an input device."""

    def __init__(self, callback, device=None, sample_rate=SAMPLE_RATE,
                 block_size=BLOCK_SIZE, channels=None):
        """
        Args:
            callback:    Called with (block, frames) for each captured block.
                         block is float32, shape (frames, channels).
            device:      sounddevice device index or name. None picks a
                         loopback device if one exists, else the default input.
            sample_rate: Sample rate in Hz.
            block_size:  Frames per block.
            channels:    Channels to open; None uses the device maximum (up to 2).
        """
        if device is None:
            device = find_loopback_device()
            if device is not None:
                logger.info("Using loopback device %s", device)
        info = sd.query_devices(device, "input")
        if info["max_input_channels"] < 1:
            raise RuntimeError(
                f"Device {info['name']!r} has no input channels. "
                "Run with --list-devices to pick another."
            )
        self._callback = callback
        self._device = device
        self._name = info["name"]
        self._sample_rate = sample_rate
        self._block_size = block_size
        self._channels = channels or min(2, info["max_input_channels"])
        self._stream = None

    @property
    def sample_rate(self):
        return self._sample_rate

    @property
    def block_size(self):
        return self._block_size

    @property
    def name(self):
        return self._name

    def start(self):
        """Open and start the input stream."""
        self._stream = sd.InputStream(
            device=self._device,
            channels=self._channels,
            samplerate=self._sample_rate,
            blocksize=self._block_size,
            dtype="float32",
            callback=self._audio_callback,
        )
        self._stream.start()
        logger.info("Capturing from %r (%d ch @ %d Hz)",
                    self._name, self._channels, self._sample_rate)

    def stop(self):
        """Stop and close the input stream."""
        if self._stream is not None:
            self._stream.stop()
            self._stream.close()
            self._stream = None

    def _audio_callback(self, indata, frames, time_info, status):
        if status:
            logger.warning("%s", status)
        self._callback(indata, frames)
