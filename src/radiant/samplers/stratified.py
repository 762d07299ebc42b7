"""Stratified pixel sampler.

The sampler precomputes every sample a pixel needs when the integrator calls
:meth:`StratifiedSampler.start_pixel`, then hands them out one pixel sample
at a time. A pixel is covered by an x_samples x y_samples grid of strata, so
each pixel takes ``samples_per_pixel = x_samples * y_samples`` samples.

Sample tables, regenerated for every pixel:
    1D dimensions: samples_per_pixel stratified values, shuffled so that
        successive dimensions are not correlated.
    2D dimensions: an x_samples x y_samples stratified grid, shuffled.
    1D arrays: for every pixel sample, ``count`` stratified values.
    2D arrays: for every pixel sample, a ``count``-point Latin hypercube.

Integrator loop:
    >>> sampler = StratifiedSampler(4, 4, jitter_samples=True, n_sampled_dimensions=4)
    >>> sampler.request_2d_array(8)  # e.g. area light samples, before rendering
    >>> for pixel in pixels:
    ...     sampler.start_pixel(pixel)
    ...     while True:
    ...         u_lens = sampler.get_2d()
    ...         light_samples = sampler.get_2d_array(8)
    ...         ...
    ...         if not sampler.start_next_sample():
    ...             break

Once the precomputed dimensions are used up, get_1d and get_2d fall back to
plain uniform random numbers from the sampler's own stream.

Workers never share a sampler. Each worker gets its own instance from
:meth:`StratifiedSampler.clone_with_seed` with a distinct seed.
"""

import copy
import logging

import numpy as np
import numpy.typing as npt

from radiant.core.rng import Rng
from radiant.core.sampling import (
    latin_hypercube,
    shuffle,
    stratified_sample_1d,
    stratified_sample_2d,
)
from radiant.samplers.base import SamplerType
from radiant.samplers.config import SamplerConfig

logger = logging.getLogger(__name__)

Point2i = tuple[int, int]
Point2f = tuple[float, float]


def _readonly(view: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    view = view.view()
    view.setflags(write=False)
    return view


class StratifiedSampler:
    """A pixel sampler generating jittered stratified patterns.

    Attributes:
        sampler_type: Always SamplerType.STRATIFIED.
        samples_per_pixel: Number of samples taken in each pixel.
        x_pixel_samples: Strata along x.
        y_pixel_samples: Strata along y.
        jitter_samples: Whether samples are jittered within strata.
    """

    sampler_type = SamplerType.STRATIFIED

    def __init__(
        self,
        x_pixel_samples: int = 4,
        y_pixel_samples: int = 4,
        jitter_samples: bool = True,
        n_sampled_dimensions: int = 4,
        seed: int = 0,
    ) -> None:
        """Create a sampler.

        Args:
            x_pixel_samples: Strata along x; must be positive.
            y_pixel_samples: Strata along y; must be positive.
            jitter_samples: Jitter samples within strata instead of using
                stratum centers.
            n_sampled_dimensions: Number of precomputed 1D and of 2D
                dimensions per pixel sample.
            seed: Sequence index of the sampler's random stream.

        Raises:
            ValueError: If a sample count is not positive or the number of
                dimensions is negative.
        """
        if x_pixel_samples <= 0 or y_pixel_samples <= 0:
            raise ValueError(
                f"Pixel sample counts must be positive, got "
                f"{x_pixel_samples}x{y_pixel_samples}"
            )
        if n_sampled_dimensions < 0:
            raise ValueError(f"n_sampled_dimensions must be non-negative, got {n_sampled_dimensions}")

        self.x_pixel_samples = x_pixel_samples
        self.y_pixel_samples = y_pixel_samples
        self.jitter_samples = jitter_samples
        self.samples_per_pixel = x_pixel_samples * y_pixel_samples

        spp = self.samples_per_pixel
        self._samples_1d: list[npt.NDArray[np.float64]] = [
            np.zeros(spp, dtype=np.float64) for _ in range(n_sampled_dimensions)
        ]
        self._samples_2d: list[npt.NDArray[np.float64]] = [
            np.zeros((spp, 2), dtype=np.float64) for _ in range(n_sampled_dimensions)
        ]
        self._current_1d_dimension = 0
        self._current_2d_dimension = 0

        self._samples_1d_array_sizes: list[int] = []
        self._samples_2d_array_sizes: list[int] = []
        self._sample_array_1d: list[npt.NDArray[np.float64]] = []
        self._sample_array_2d: list[npt.NDArray[np.float64]] = []
        self._array_1d_offset = 0
        self._array_2d_offset = 0

        self._current_pixel: Point2i = (0, 0)
        self._current_pixel_sample_index = 0
        self._pixel_started = False

        self._rng = Rng(seed)

        logger.debug(
            "Created stratified sampler: %dx%d strata, jitter=%s, %d dimensions, seed=%d",
            x_pixel_samples,
            y_pixel_samples,
            jitter_samples,
            n_sampled_dimensions,
            seed,
        )

    @classmethod
    def from_config(cls, config: SamplerConfig, seed: int = 0) -> "StratifiedSampler":
        """Create a sampler from a SamplerConfig."""
        return cls(
            x_pixel_samples=config.x_samples,
            y_pixel_samples=config.y_samples,
            jitter_samples=config.jitter,
            n_sampled_dimensions=config.sampled_dimensions,
            seed=seed,
        )

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def n_sampled_dimensions(self) -> int:
        """Get the number of precomputed dimensions."""
        return len(self._samples_1d)

    @property
    def seed(self) -> int:
        """Get the sequence index of the sampler's random stream."""
        return self._rng.sequence_index

    @property
    def current_pixel(self) -> Point2i:
        """Get the pixel being sampled."""
        return self._current_pixel

    @property
    def current_sample_index(self) -> int:
        """Get the index of the current sample within the pixel."""
        return self._current_pixel_sample_index

    @property
    def samples_1d_array_sizes(self) -> tuple[int, ...]:
        """Get the registered 1D array sizes in registration order."""
        return tuple(self._samples_1d_array_sizes)

    @property
    def samples_2d_array_sizes(self) -> tuple[int, ...]:
        """Get the registered 2D array sizes in registration order."""
        return tuple(self._samples_2d_array_sizes)

    def config(self) -> SamplerConfig:
        """Export the construction options of this sampler."""
        return SamplerConfig(
            jitter=self.jitter_samples,
            x_samples=self.x_pixel_samples,
            y_samples=self.y_pixel_samples,
            sampled_dimensions=self.n_sampled_dimensions,
        )

    # =========================================================================
    # Pixel and Sample Progression
    # =========================================================================

    def start_pixel(self, p: Point2i) -> None:
        """Generate all sample tables for a pixel and move to its first sample.

        Args:
            p: The pixel coordinate.
        """
        spp = self.samples_per_pixel
        for samples in self._samples_1d:
            stratified_sample_1d(samples, self._rng, self.jitter_samples)
            shuffle(samples, spp, 1, self._rng)
        for samples in self._samples_2d:
            stratified_sample_2d(
                samples, self.x_pixel_samples, self.y_pixel_samples, self._rng, self.jitter_samples
            )
            shuffle(samples, spp, 1, self._rng)

        for count, array in zip(self._samples_1d_array_sizes, self._sample_array_1d, strict=True):
            for j in range(spp):
                samples = array[j * count : (j + 1) * count]
                stratified_sample_1d(samples, self._rng, self.jitter_samples)
                shuffle(samples, count, 1, self._rng)
        for count, array in zip(self._samples_2d_array_sizes, self._sample_array_2d, strict=True):
            for j in range(spp):
                latin_hypercube(array[j * count : (j + 1) * count], self._rng)

        self._current_pixel = (int(p[0]), int(p[1]))
        self._pixel_started = True
        self._reset_cursors(0)

    def start_next_sample(self) -> bool:
        """Advance to the next sample in the pixel.

        Returns:
            True while the new sample index is below samples_per_pixel.
        """
        return self._reset_cursors(self._current_pixel_sample_index + 1)

    def set_sample_number(self, sample_num: int) -> bool:
        """Jump to a given sample in the current pixel.

        Args:
            sample_num: The sample index to move to.

        Returns:
            True if sample_num is below samples_per_pixel.

        Raises:
            ValueError: If sample_num is negative.
        """
        if sample_num < 0:
            raise ValueError(f"Sample number must be non-negative, got {sample_num}")
        return self._reset_cursors(sample_num)

    def _reset_cursors(self, sample_index: int) -> bool:
        self._current_1d_dimension = 0
        self._current_2d_dimension = 0
        self._array_1d_offset = 0
        self._array_2d_offset = 0
        self._current_pixel_sample_index = sample_index
        return self._current_pixel_sample_index < self.samples_per_pixel

    def _check_sample_active(self) -> None:
        if not self._pixel_started:
            raise RuntimeError("No pixel is being sampled; call start_pixel() first")
        if self._current_pixel_sample_index >= self.samples_per_pixel:
            raise RuntimeError(
                f"Sample index {self._current_pixel_sample_index} is past the last sample "
                f"of pixel {self._current_pixel} (samples_per_pixel = {self.samples_per_pixel})"
            )

    # =========================================================================
    # Sample Dispensing
    # =========================================================================

    def get_1d(self) -> float:
        """Get the next 1D sample value for the current pixel sample.

        Returns:
            A float in [0, 1): the next precomputed dimension, or a uniform
            random value once precomputed dimensions run out.

        Raises:
            RuntimeError: If no pixel sample is active.
        """
        self._check_sample_active()
        if self._current_1d_dimension < len(self._samples_1d):
            sample = self._samples_1d[self._current_1d_dimension][self._current_pixel_sample_index]
            self._current_1d_dimension += 1
            return float(sample)
        return self._rng.uniform_float()

    def get_2d(self) -> Point2f:
        """Get the next 2D sample for the current pixel sample.

        Returns:
            A pair of floats in [0, 1). Past the precomputed dimensions the
            pair is drawn from the random stream, second component first.

        Raises:
            RuntimeError: If no pixel sample is active.
        """
        self._check_sample_active()
        if self._current_2d_dimension < len(self._samples_2d):
            x, y = self._samples_2d[self._current_2d_dimension][self._current_pixel_sample_index]
            self._current_2d_dimension += 1
            return float(x), float(y)
        # Draw order is y then x to match the reference sequence
        y = self._rng.uniform_float()
        x = self._rng.uniform_float()
        return x, y

    # =========================================================================
    # Sample Arrays
    # =========================================================================

    def round_count(self, n: int) -> int:
        """Round an array size to one the sampler generates well.

        Stratified sampling handles any count, so this is the identity.
        """
        return n

    def _check_request(self, n: int) -> None:
        if self._pixel_started:
            raise RuntimeError("Sample arrays must be requested before the first start_pixel() call")
        if n <= 0:
            raise ValueError(f"Array size must be positive, got {n}")
        if self.round_count(n) != n:
            raise ValueError(f"Array size {n} is not a valid count; use round_count({n}) = {self.round_count(n)}")

    def request_1d_array(self, n: int) -> None:
        """Register an array of n 1D samples per pixel sample.

        Raises:
            RuntimeError: If rendering has already started.
            ValueError: If n is not positive or not a valid count.
        """
        self._check_request(n)
        self._samples_1d_array_sizes.append(n)
        self._sample_array_1d.append(np.zeros(n * self.samples_per_pixel, dtype=np.float64))
        logger.debug("Registered 1D array of %d samples (slot %d)", n, len(self._sample_array_1d) - 1)

    def request_2d_array(self, n: int) -> None:
        """Register an array of n 2D samples per pixel sample.

        Arrays are handed out in registration order, so callers using
        get_2d_arrays must register each pair consecutively.

        Raises:
            RuntimeError: If rendering has already started.
            ValueError: If n is not positive or not a valid count.
        """
        self._check_request(n)
        self._samples_2d_array_sizes.append(n)
        self._sample_array_2d.append(np.zeros((n * self.samples_per_pixel, 2), dtype=np.float64))
        logger.debug("Registered 2D array of %d samples (slot %d)", n, len(self._sample_array_2d) - 1)

    def _take_array(
        self,
        sizes: list[int],
        arrays: list[npt.NDArray[np.float64]],
        offset: int,
        n: int,
    ) -> npt.NDArray[np.float64]:
        if sizes[offset] != n:
            raise ValueError(
                f"Requested array of {n} samples but slot {offset} was registered "
                f"with {sizes[offset]}"
            )
        start = self._current_pixel_sample_index * n
        return _readonly(arrays[offset][start : start + n])

    def get_1d_array(self, n: int) -> npt.NDArray[np.float64] | None:
        """Get the next registered 1D array for the current pixel sample.

        Args:
            n: Array size; must equal the size registered for the next slot.

        Returns:
            A read-only array of n values in [0, 1), or None once every
            registered 1D array has been consumed for this sample.

        Raises:
            ValueError: If n does not match the registered size.
            RuntimeError: If no pixel sample is active.
        """
        self._check_sample_active()
        if self._array_1d_offset == len(self._sample_array_1d):
            return None
        samples = self._take_array(
            self._samples_1d_array_sizes, self._sample_array_1d, self._array_1d_offset, n
        )
        self._array_1d_offset += 1
        return samples

    def get_2d_array(self, n: int) -> npt.NDArray[np.float64] | None:
        """Get the next registered 2D array for the current pixel sample.

        Args:
            n: Array size; must equal the size registered for the next slot.

        Returns:
            A read-only (n, 2) array of points in [0, 1)^2, or None once
            every registered 2D array has been consumed for this sample.

        Raises:
            ValueError: If n does not match the registered size.
            RuntimeError: If no pixel sample is active.
        """
        self._check_sample_active()
        if self._array_2d_offset == len(self._sample_array_2d):
            return None
        samples = self._take_array(
            self._samples_2d_array_sizes, self._sample_array_2d, self._array_2d_offset, n
        )
        self._array_2d_offset += 1
        return samples

    def get_2d_arrays(
        self, n: int
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]] | tuple[None, None]:
        """Get the next two registered 2D arrays for the current pixel sample.

        Both slots must have been registered with size n, one right after
        the other. They are returned in registration order.

        Args:
            n: Array size of both slots.

        Returns:
            The two read-only (n, 2) arrays, or (None, None) once every
            registered 2D array has been consumed for this sample.

        Raises:
            ValueError: If either slot was registered with a different size.
            RuntimeError: If only one slot is left, or no pixel sample is
                active.
        """
        self._check_sample_active()
        remaining = len(self._sample_array_2d) - self._array_2d_offset
        if remaining == 0:
            return None, None
        if remaining == 1:
            raise RuntimeError(
                f"Paired 2D array request for {n} samples but only slot "
                f"{self._array_2d_offset} is left"
            )
        first = self._take_array(
            self._samples_2d_array_sizes, self._sample_array_2d, self._array_2d_offset, n
        )
        second = self._take_array(
            self._samples_2d_array_sizes, self._sample_array_2d, self._array_2d_offset + 1, n
        )
        self._array_2d_offset += 2
        return first, second

    # =========================================================================
    # Seeding and Cloning
    # =========================================================================

    def reseed(self, seed: int) -> None:
        """Restart the sampler's random stream on sequence seed."""
        self._rng.set_sequence(seed)
        logger.debug("Reseeded stratified sampler with seed %d", seed)

    def clone_with_seed(self, seed: int) -> "StratifiedSampler":
        """Create an independent copy of this sampler with its own stream.

        The copy has the same strata, dimensions and registered arrays, but
        shares no buffers with this sampler.

        Args:
            seed: Sequence index for the copy's random stream.

        Returns:
            The new sampler.
        """
        clone = copy.deepcopy(self)
        clone.reseed(seed)
        return clone

    def __repr__(self) -> str:
        return (
            f"StratifiedSampler({self.x_pixel_samples}x{self.y_pixel_samples}, "
            f"jitter={self.jitter_samples}, dimensions={self.n_sampled_dimensions}, "
            f"seed={self.seed})"
        )
