"""Log-frequency bucketing and normalisation.

Bin ranges grow geometrically (each bucket ends at ceil(start * step)),
so low frequencies keep near single-bin resolution while the top octaves
are merged into wide buckets. Each bucket holds the peak natural-log
power of its bins.
"""

import math

import numpy as np

from logspectrum.config import BUCKET_STEP

# Starting frequency bin; bin 0 (DC) is never displayed
LOW_BIN = 1.0


def bucket_edges(n: int, step: float = BUCKET_STEP) -> tuple[np.ndarray, np.ndarray]:
    """Start/end bin indices of every bucket for an n-point transform.

    Bucket i covers bins [starts[i], ends[i]). A range can be empty when
    rounding adds no new bin; such a bucket still counts.
    """
    if step <= 1.0:
        raise ValueError(f"step must be > 1, got {step}")
    half = n // 2
    starts, ends = [], []
    f = LOW_BIN
    while int(f) < half:
        f1 = math.ceil(f * step)
        starts.append(int(f))
        ends.append(min(half, int(f1)))
        f = f1
    return np.array(starts, dtype=np.intp), np.array(ends, dtype=np.intp)


def magnitude(spectrum: np.ndarray) -> np.ndarray:
    """ln(re^2 + im^2) per bin; exactly-zero power maps to 0.0."""
    power = spectrum.real ** 2 + spectrum.imag ** 2
    out = np.zeros(power.shape, dtype=np.float64)
    np.log(power, out=out, where=power > 0.0)
    return out


def normalize(values: np.ndarray, max_amp: float) -> np.ndarray:
    return values / max_amp


class LogBucketizer:
    """Reduces an n-point spectrum to M log-spaced peak magnitudes."""

    def __init__(self, n: int, step: float = BUCKET_STEP):
        self._n = n
        self._step = step
        self._starts, self._ends = bucket_edges(n, step)

    @property
    def count(self) -> int:
        """Number of buckets M; fixed for a given n and step."""
        return len(self._starts)

    @property
    def edges(self) -> tuple[np.ndarray, np.ndarray]:
        return self._starts, self._ends

    def bucketize(self, spectrum: np.ndarray) -> tuple[np.ndarray, float]:
        """Peak magnitude per bucket and the pass maximum.

        Args:
            spectrum: complex, shape (n,); only the first n/2 bins are read

        Returns:
            (values, max_amp): values has shape (M,); max_amp is the
            largest bucket value, never below 1.0
        """
        mags = magnitude(spectrum[:self._n // 2])
        values = np.zeros(self.count, dtype=np.float64)
        for i, (lo, hi) in enumerate(zip(self._starts, self._ends)):
            if hi > lo:
                values[i] = mags[lo:hi].max()
        max_amp = max(1.0, float(values.max())) if len(values) else 1.0
        return values, max_amp
