"""Deterministic pseudo-random number streams.

Each :class:`Rng` draws from one logical sequence. Sequences are derived
from a fixed entropy value and the sequence index through numpy's
``SeedSequence`` spawn keys, so two generators on different sequences are
statistically independent while the same sequence always reproduces the
same numbers.

Example:
    >>> rng = Rng(7)
    >>> u = rng.uniform_float()      # float in [0, 1)
    >>> k = rng.uniform_uint32(10)   # int in [0, 10)
"""

import numpy as np
import numpy.typing as npt

# Fixed entropy shared by every sequence (the PCG32 default state constant)
DEFAULT_ENTROPY = 0x853C49E6748FEA9B

# Largest float64 strictly below one
ONE_MINUS_EPSILON = float(np.nextafter(1.0, 0.0))


class Rng:
    """A seedable uniform random number generator bound to one sequence.

    Attributes:
        sequence_index: The logical stream this generator draws from.
    """

    def __init__(self, sequence_index: int = 0) -> None:
        self.set_sequence(sequence_index)

    @property
    def sequence_index(self) -> int:
        """Get the index of the active sequence."""
        return self._sequence_index

    def set_sequence(self, sequence_index: int) -> None:
        """Restart the generator at the beginning of a sequence.

        Args:
            sequence_index: Non-negative stream identifier.

        Raises:
            ValueError: If the index is negative.
        """
        if sequence_index < 0:
            raise ValueError(f"Sequence index must be non-negative, got {sequence_index}")
        self._sequence_index = int(sequence_index)
        seed_seq = np.random.SeedSequence(DEFAULT_ENTROPY, spawn_key=(self._sequence_index,))
        self._generator = np.random.Generator(np.random.PCG64(seed_seq))

    def uniform_float(self) -> float:
        """Draw one float in [0, 1)."""
        return min(float(self._generator.random()), ONE_MINUS_EPSILON)

    def uniform_floats(self, shape: int | tuple[int, ...]) -> npt.NDArray[np.float64]:
        """Draw an array of floats in [0, 1).

        Values are produced in C order, so ``uniform_floats(n)`` consumes the
        stream exactly like ``n`` consecutive :meth:`uniform_float` calls.
        """
        return np.minimum(self._generator.random(shape), ONE_MINUS_EPSILON)

    def uniform_uint32(self, bound: int) -> int:
        """Draw an integer uniformly from [0, bound).

        Raises:
            ValueError: If bound is not positive.
        """
        if bound <= 0:
            raise ValueError(f"Bound must be positive, got {bound}")
        return int(self._generator.integers(0, bound))

    def __repr__(self) -> str:
        return f"Rng(sequence_index={self._sequence_index})"
