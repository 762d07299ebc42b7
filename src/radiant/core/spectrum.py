"""RGB radiance values.

Radiance, intensity and power are carried as float64 RGB triples. Callers
treat them as opaque values that support arithmetic with scalars.
"""

from typing import Any

import numpy as np
import numpy.typing as npt

Spectrum = npt.NDArray[np.float64]


def as_spectrum(value: Any) -> Spectrum:
    """Convert a scalar or an RGB 3-sequence to a spectrum.

    A scalar is broadcast to all three channels.

    Raises:
        ValueError: If the value is neither a scalar nor three components.
    """
    s = np.asarray(value, dtype=np.float64)
    if s.ndim == 0:
        return np.full(3, float(s), dtype=np.float64)
    if s.shape != (3,):
        raise ValueError(f"Expected a scalar or 3 components, got shape {s.shape}")
    return s.copy()


def black() -> Spectrum:
    """Create a zero spectrum."""
    return np.zeros(3, dtype=np.float64)


def is_black(s: Spectrum) -> bool:
    """Check whether every channel is zero."""
    return not np.any(s)
