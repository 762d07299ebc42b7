"""Host-side vector utilities and the Ray record.

Vectors, points and normals are float64 numpy arrays of shape (3,). The
functions here are the scalar counterparts of the ``taichi.math`` helpers
used inside kernels.

Example:
    >>> o = point3(0.0, 0.0, 0.0)
    >>> ray = Ray(o=o, d=vec3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)
    array([ 0.,  0., -5.])
"""

import math
from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt

Vector3 = npt.NDArray[np.float64]

# Shadow rays stop just short of their target
SHADOW_EPSILON = 0.0001


def vec3(x: float, y: float, z: float) -> Vector3:
    """Create a 3D vector."""
    return np.array([x, y, z], dtype=np.float64)


def point3(x: float, y: float, z: float) -> Vector3:
    """Create a 3D point."""
    return np.array([x, y, z], dtype=np.float64)


def as_vector3(value: Any) -> Vector3:
    """Convert a 3-sequence to a float64 vector.

    Raises:
        ValueError: If the value does not hold exactly three components.
    """
    v = np.asarray(value, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {v.shape}")
    return v


def frozen(v: Vector3) -> Vector3:
    """Return a read-only copy of a vector."""
    out = np.array(v, dtype=np.float64)
    out.setflags(write=False)
    return out


def zeros3() -> Vector3:
    """Create a zero vector."""
    return np.zeros(3, dtype=np.float64)


def length_squared(v: Vector3) -> float:
    """Compute the squared length of a vector."""
    return float(np.dot(v, v))


def length(v: Vector3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(length_squared(v))


def normalize(v: Vector3) -> Vector3:
    """Normalize a vector to unit length.

    Returns:
        The unit vector, or a zero vector if v has zero length.
    """
    n = length(v)
    if n == 0.0:
        return zeros3()
    return v / n


def distance_squared(a: Vector3, b: Vector3) -> float:
    """Compute the squared distance between two points."""
    return length_squared(a - b)


@dataclass(eq=False)
class Ray:
    """A semi-infinite ray.

    Attributes:
        o: Origin point.
        d: Direction. Not necessarily normalized; shadow rays span
            their segment with t in [0, 1).
        t_max: Upper bound of the parametric extent.
        time: Time the ray is traced at.
        medium: Medium containing the origin, if any.
    """

    o: Vector3
    d: Vector3
    t_max: float = math.inf
    time: float = 0.0
    medium: Any = None

    def at(self, t: float) -> Vector3:
        """Compute the point o + t * d."""
        return self.o + t * self.d
