"""Accelerometer smoothing for tilt steering."""

import numpy as np
from numpy.typing import NDArray


class TiltSmoother:
    """Fixed-size ring buffer that averages the latest tilt samples.

    Raw accelerometer x readings are noisy; the engine only ever sees the
    mean of the last ``window`` samples.
    """

    def __init__(self, window: int = 5) -> None:
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")
        self._samples: NDArray[np.float64] = np.zeros(window, dtype=np.float64)
        self._index = 0
        self._count = 0

    @property
    def window(self) -> int:
        return len(self._samples)

    def __len__(self) -> int:
        return self._count

    def push(self, sample: float) -> float:
        """Record a sample and return the new smoothed value."""
        self._samples[self._index] = sample
        self._index = (self._index + 1) % self.window
        self._count = min(self._count + 1, self.window)
        return self.value

    @property
    def value(self) -> float:
        if self._count == 0:
            return 0.0
        if self._count < self.window:
            return float(self._samples[:self._count].mean())
        return float(self._samples.mean())

    def reset(self) -> None:
        self._samples.fill(0.0)
        self._index = 0
        self._count = 0
