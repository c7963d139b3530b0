"""Pipeline and host defaults.

The four pipeline options are fixed once a SpectrumPipeline is built;
the host settings only affect audio I/O and the render loop.
"""

from dataclasses import dataclass

# Pipeline
FFT_SIZE = 8192        # power of two; ~186 ms of history at 44.1 kHz
BUCKET_STEP = 1.06     # geometric growth between bucket edges
SMOOTH_RATE = 8.0      # fast track, per second
SMEAR_RATE = 3.0       # slow afterglow track, per second

# Host
SAMPLE_RATE = 44100
BLOCK_SIZE = 1024      # frames per audio callback
TARGET_FPS = 60
DEFAULT_UDP_PORT = 4210


def is_power_of_two(n: int) -> bool:
    return n >= 1 and (n & (n - 1)) == 0


@dataclass(frozen=True)
class PipelineConfig:
    """Options recognised by SpectrumPipeline."""

    fft_size: int = FFT_SIZE
    bucket_step: float = BUCKET_STEP
    smooth_rate: float = SMOOTH_RATE
    smear_rate: float = SMEAR_RATE

    def __post_init__(self):
        n = self.fft_size
        if not isinstance(n, int) or n < 2 or not is_power_of_two(n):
            raise ValueError(
                f"fft_size must be a power of two >= 2, got {self.fft_size!r}"
            )
        if self.bucket_step <= 1.0:
            raise ValueError(f"bucket_step must be > 1, got {self.bucket_step}")
        if self.smooth_rate <= 0 or self.smear_rate <= 0:
            raise ValueError("smooth_rate and smear_rate must be positive")
