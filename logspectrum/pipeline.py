"""Spectral analysis pipeline: ring buffer in, smoothed log-spectrum out.

The audio thread calls on_audio_block(); the render loop calls tick()
once per frame:

    snapshot -> Hann window -> FFT -> log buckets -> normalise -> smooth
"""

import logging

import numpy as np

from logspectrum.bucketizer import LogBucketizer, normalize
from logspectrum.config import PipelineConfig
from logspectrum.fft_engine import apply_window, fft, hann_window
from logspectrum.ingest import ChannelIngestAdapter
from logspectrum.ring_buffer import SampleRingBuffer
from logspectrum.smoothing import TemporalSmoother

logger = logging.getLogger(__name__)


class SpectrumPipeline:
    """Owns the sample history and the cross-frame smoothing state."""

    def __init__(self, config: PipelineConfig | None = None, channel: int = 0):
        self._config = config or PipelineConfig()
        n = self._config.fft_size

        self._ring = SampleRingBuffer(n)
        self._ingest = ChannelIngestAdapter(self._ring, channel)
        self._window = hann_window(n)
        self._bucketizer = LogBucketizer(n, self._config.bucket_step)
        self._smoother = TemporalSmoother(
            self._bucketizer.count,
            self._config.smooth_rate,
            self._config.smear_rate,
        )
        self._max_amp = 1.0
        self._closed = False

        logger.debug("FFT size %d, %d buckets (step %.3f)",
                     n, self._bucketizer.count, self._config.bucket_step)

    @property
    def config(self) -> PipelineConfig:
        return self._config

    @property
    def bucket_count(self) -> int:
        return self._bucketizer.count

    @property
    def bucket_edges(self) -> tuple[np.ndarray, np.ndarray]:
        return self._bucketizer.edges

    @property
    def ring(self) -> SampleRingBuffer:
        return self._ring

    @property
    def max_amp(self) -> float:
        """Normalisation divisor used by the last analysed frame."""
        return self._max_amp

    def on_audio_block(self, samples, frame_count: int):
        """Audio-thread entry point; see ChannelIngestAdapter."""
        self._ingest.on_audio_block(samples, frame_count)

    def analyze(self) -> np.ndarray:
        """Normalised bucket magnitudes for the current buffer contents.

        Leaves the smoothing state untouched.
        """
        self._check_open()
        windowed = apply_window(self._ring.snapshot(), self._window)
        spectrum = fft(windowed)
        values, self._max_amp = self._bucketizer.bucketize(spectrum)
        return normalize(values, self._max_amp)

    def tick(self, dt: float) -> tuple[np.ndarray, np.ndarray, int]:
        """Run one frame and advance the smoothing state by `dt` seconds.

        Returns:
            (smooth, smear, count): views of length count, valid until
            the next tick
        """
        normalized = self.analyze()
        m = len(normalized)
        self._smoother.update(normalized, dt, m)
        return self._smoother.smooth[:m], self._smoother.smear[:m], m

    def shutdown(self):
        """Zero the sample and smoothing state and close the pipeline.

        Further tick() or analyze() calls raise RuntimeError.
        """
        if self._closed:
            return
        self._closed = True
        self._smoother.reset()
        self._ring.clear()
        logger.debug("Pipeline shut down")

    def _check_open(self):
        if self._closed:
            raise RuntimeError("pipeline has been shut down")
