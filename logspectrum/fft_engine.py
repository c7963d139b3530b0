"""Hann window and radix-2 decimation-in-time FFT.

The transform follows the recursive Cooley-Tukey split (even/odd samples
by stride doubling) but evaluates it one level at a time: every
sub-transform of a given size is combined in a single vectorised numpy
step. Everything runs in complex128.
"""

import numpy as np

from logspectrum.config import is_power_of_two


def hann_window(n: int) -> np.ndarray:
    """w(i) = 0.5 - 0.5*cos(2*pi*i/(n-1)), i in [0, n)."""
    if n == 1:
        return np.ones(1, dtype=np.float64)
    i = np.arange(n, dtype=np.float64)
    return 0.5 - 0.5 * np.cos(2.0 * np.pi * i / (n - 1))


def apply_window(samples, window: np.ndarray) -> np.ndarray:
    return np.asarray(samples, dtype=np.float64) * window


def fft(signal) -> np.ndarray:
    """Transform `signal` into its complex frequency coefficients.

    Args:
        signal: real samples, shape (n,), n a power of two

    Returns:
        np.ndarray of complex128, shape (n,)
    """
    x = np.asarray(signal, dtype=np.complex128).ravel()
    n = len(x)
    assert is_power_of_two(n), f"fft size must be a power of two, got {n}"

    # Shape (size, count): column c is the length-`size` transform of
    # x[c::count]. With size 1 that is just the sample itself.
    out = x.reshape(1, n)
    while out.shape[0] < n:
        size, count = out.shape
        # x[c::count/2] splits into x[c::count] (even) and
        # x[c + count/2::count] (odd).
        even = out[:, :count // 2]
        odd = out[:, count // 2:]
        tw = np.exp(-1j * np.pi * np.arange(size) / size)[:, None]
        out = np.vstack((even + tw * odd, even - tw * odd))
    return out.ravel()
