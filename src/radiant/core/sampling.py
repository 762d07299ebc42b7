"""Sample-distribution primitives for Monte Carlo estimators.

The pattern generators fill caller-owned numpy buffers in place and draw
their randomness from an :class:`~radiant.core.rng.Rng`. They consume the
stream in a fixed order, so a sampler that calls them in a fixed order
produces reproducible patterns for a given sequence.

Generators:
    stratified_sample_1d: One sample per equal-width stratum of [0, 1)
    stratified_sample_2d: One sample per cell of an nx x ny grid over [0, 1)^2
    latin_hypercube: n samples whose projection on every axis is stratified
    shuffle: In-place permutation of fixed-size blocks

Directions:
    uniform_sample_sphere / uniform_sphere_pdf on the host, and the
    ``ti.func`` ``sample_uniform_sphere`` for use inside Taichi kernels.
"""

import math

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from radiant.core.geometry import Vector3
from radiant.core.rng import ONE_MINUS_EPSILON, Rng

# Type aliases for Taichi vectors
vec2 = tm.vec2
vec3 = tm.vec3

INV_4PI = 1.0 / (4.0 * math.pi)


def stratified_sample_1d(
    samples: npt.NDArray[np.float64],
    rng: Rng,
    jitter: bool = True,
) -> None:
    """Fill samples with one value per stratum of [0, 1).

    Stratum i covers [i/n, (i+1)/n). With jitter the value is placed
    uniformly within the stratum, otherwise at its center.

    Args:
        samples: 1D output buffer of length n, written in place.
        rng: Random source, consumed only when jittering (n draws).
        jitter: Whether to randomize positions within strata.
    """
    n = samples.shape[0]
    offsets = rng.uniform_floats(n) if jitter else 0.5
    samples[:] = np.minimum((np.arange(n) + offsets) / n, ONE_MINUS_EPSILON)


def stratified_sample_2d(
    samples: npt.NDArray[np.float64],
    nx: int,
    ny: int,
    rng: Rng,
    jitter: bool = True,
) -> None:
    """Fill samples with one point per cell of an nx x ny grid.

    Points are written row by row (x varies fastest). With jitter each cell
    draws its x offset and then its y offset.

    Args:
        samples: Output buffer of shape (nx * ny, 2), written in place.
        nx: Number of strata along x.
        ny: Number of strata along y.
        rng: Random source, consumed only when jittering (2 draws per cell).
        jitter: Whether to randomize positions within cells.

    Raises:
        ValueError: If the buffer shape does not match the grid.
    """
    if samples.shape != (nx * ny, 2):
        raise ValueError(f"Expected buffer of shape ({nx * ny}, 2), got {samples.shape}")
    if jitter:
        offsets = rng.uniform_floats((ny, nx, 2))
    else:
        offsets = np.full((ny, nx, 2), 0.5)
    ys, xs = np.meshgrid(np.arange(ny), np.arange(nx), indexing="ij")
    samples[:, 0] = np.minimum(((xs + offsets[..., 0]) / nx).ravel(), ONE_MINUS_EPSILON)
    samples[:, 1] = np.minimum(((ys + offsets[..., 1]) / ny).ravel(), ONE_MINUS_EPSILON)


def latin_hypercube(samples: npt.NDArray[np.float64], rng: Rng) -> None:
    """Fill samples with a Latin-hypercube pattern.

    Every axis is stratified independently: row i starts jittered in stratum
    i on every axis, then each axis column is permuted on its own. The
    result covers each axis' n strata exactly once without lining points up
    on the diagonal.

    Args:
        samples: Output buffer of shape (n, n_dimensions), written in place.
        rng: Random source (n * n_dimensions floats, then one integer per
            swap).
    """
    n, n_dimensions = samples.shape
    offsets = rng.uniform_floats((n, n_dimensions))
    samples[:] = np.minimum((np.arange(n)[:, None] + offsets) / n, ONE_MINUS_EPSILON)
    for i in range(n_dimensions):
        for j in range(n):
            other = j + rng.uniform_uint32(n - j)
            samples[j, i], samples[other, i] = samples[other, i], samples[j, i]


def shuffle(samples: npt.NDArray[np.float64], count: int, n_dimensions: int, rng: Rng) -> None:
    """Randomly permute count blocks of n_dimensions consecutive entries.

    Entries are taken along the first axis: scalars for a 1D buffer, whole
    points for an (n, 2) buffer. Blocks move as a unit, so a stride of 2
    over 1D values keeps pairs of values together.

    Args:
        samples: Buffer with at least count * n_dimensions entries, permuted
            in place.
        count: Number of blocks to permute.
        n_dimensions: Block size (stride) in entries.
        rng: Random source (one integer per block).

    Raises:
        ValueError: If the buffer holds too few entries.
    """
    if samples.shape[0] < count * n_dimensions:
        raise ValueError(
            f"Buffer holds {samples.shape[0]} entries, need {count * n_dimensions} "
            f"({count} blocks of {n_dimensions})"
        )
    for i in range(count):
        other = i + rng.uniform_uint32(count - i)
        if other == i:
            continue
        for j in range(n_dimensions):
            a = n_dimensions * i + j
            b = n_dimensions * other + j
            samples[[a, b]] = samples[[b, a]]


def uniform_sample_sphere(u: tuple[float, float]) -> Vector3:
    """Map a point in [0, 1)^2 to a direction uniformly distributed on the sphere."""
    z = 1.0 - 2.0 * u[0]
    r = math.sqrt(max(0.0, 1.0 - z * z))
    phi = 2.0 * math.pi * u[1]
    return np.array([r * math.cos(phi), r * math.sin(phi), z], dtype=np.float64)


def uniform_sphere_pdf() -> float:
    """Solid-angle density of uniform sphere sampling, 1 / (4 pi)."""
    return INV_4PI


@ti.func
def sample_uniform_sphere(u: vec2) -> vec3:
    """Kernel-side uniform sphere sampling.

    Same mapping as uniform_sample_sphere, for use within Taichi kernels.

    Args:
        u: A point in [0, 1)^2.

    Returns:
        A unit direction.
    """
    z = 1.0 - 2.0 * u.x
    r = ti.sqrt(ti.max(0.0, 1.0 - z * z))
    phi = 2.0 * tm.pi * u.y
    return vec3(r * ti.cos(phi), r * ti.sin(phi), z)
