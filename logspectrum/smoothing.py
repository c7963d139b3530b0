"""Two cascaded one-pole low-pass filters over the bucket curve.

`smooth` follows the normalised buckets with a short lag; `smear`
follows `smooth` with a longer one and gives the trailing afterglow.
Both are time-based, so the response does not depend on frame rate.
"""

import numpy as np

from logspectrum.config import SMEAR_RATE, SMOOTH_RATE


class TemporalSmoother:
    """Persistent smooth/smear state, updated in place every frame."""

    def __init__(self, size: int, smooth_rate: float = SMOOTH_RATE,
                 smear_rate: float = SMEAR_RATE):
        self._smooth_rate = smooth_rate
        self._smear_rate = smear_rate
        self.smooth = np.zeros(size, dtype=np.float64)
        self.smear = np.zeros(size, dtype=np.float64)

    @property
    def size(self) -> int:
        return len(self.smooth)

    def update(self, target: np.ndarray, dt: float, count: int | None = None):
        """Move both tracks toward `target` by one frame of `dt` seconds.

        Only indices [0, count) are touched; anything beyond keeps its
        previous value.
        """
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")
        m = len(target) if count is None else count
        m = min(m, self.size)

        # A blend factor above 1 would overshoot; clamp for stalled frames.
        a = min(self._smooth_rate * dt, 1.0)
        b = min(self._smear_rate * dt, 1.0)

        smooth = self.smooth[:m]
        smear = self.smear[:m]
        smooth += (target[:m] - smooth) * a
        smear += (smooth - smear) * b

    def reset(self):
        self.smooth.fill(0.0)
        self.smear.fill(0.0)
