"""Fixed-size sample history shared by the audio thread and the render loop.

The audio callback appends, the render loop takes snapshots. A lock keeps
the two apart: a snapshot contains every block whose append finished
before it, and never half of one.
"""

import threading

import numpy as np


class SampleRingBuffer:
    """Most recent `capacity` samples, oldest evicted first."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._data = np.zeros(capacity, dtype=np.float64)
        self._head = 0  # index of the oldest sample
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return len(self._data)

    def __len__(self):
        return len(self._data)

    def append(self, sample: float):
        """Drop the oldest sample and store `sample` as the newest."""
        with self._lock:
            self._data[self._head] = sample
            self._head = (self._head + 1) % len(self._data)

    def extend(self, samples):
        """Append a block of samples in order.

        Same result as calling append() for each sample, done as at most
        two slice copies.
        """
        block = np.asarray(samples, dtype=np.float64).ravel()
        n = len(self._data)
        if len(block) == 0:
            return
        if len(block) >= n:
            block = block[-n:]
        with self._lock:
            first = min(len(block), n - self._head)
            self._data[self._head:self._head + first] = block[:first]
            rest = len(block) - first
            if rest:
                self._data[:rest] = block[first:]
            self._head = (self._head + len(block)) % n

    def snapshot(self) -> np.ndarray:
        """Copy of the buffer, oldest sample first."""
        with self._lock:
            return np.concatenate((self._data[self._head:], self._data[:self._head]))

    def clear(self):
        with self._lock:
            self._data.fill(0.0)
            self._head = 0
