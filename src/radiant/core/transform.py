"""Affine and projective transforms as 4x4 matrices.

Only what light construction needs is provided: building translations and
scales, composing them, and applying them to points and vectors.

Example:
    >>> t = translate((0.0, 4.0, 0.0)) * scale(2.0, 2.0, 2.0)
    >>> t.transform_point(point3(1.0, 0.0, 0.0))
    array([2., 4., 0.])
"""

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from radiant.core.geometry import Vector3, as_vector3

Matrix4 = npt.NDArray[np.float64]


class Transform:
    """A 4x4 transform with its cached inverse.

    Attributes:
        m: The forward matrix (read-only).
        m_inv: The inverse matrix (read-only).
    """

    def __init__(self, m: Matrix4 | None = None, m_inv: Matrix4 | None = None) -> None:
        """Create a transform.

        Args:
            m: Forward matrix. Identity when omitted.
            m_inv: Inverse matrix. Computed from m when omitted.

        Raises:
            ValueError: If m is not 4x4 or is singular and no inverse is given.
        """
        m = np.identity(4) if m is None else np.array(m, dtype=np.float64)
        if m.shape != (4, 4):
            raise ValueError(f"Transform matrix must be 4x4, got shape {m.shape}")
        if m_inv is None:
            try:
                m_inv = np.linalg.inv(m)
            except np.linalg.LinAlgError as exc:
                raise ValueError("Transform matrix is singular") from exc
        else:
            m_inv = np.array(m_inv, dtype=np.float64)
        m.setflags(write=False)
        m_inv.setflags(write=False)
        self.m = m
        self.m_inv = m_inv

    def inverse(self) -> "Transform":
        """Return the inverse transform."""
        return Transform(self.m_inv, self.m)

    def is_identity(self) -> bool:
        return bool(np.array_equal(self.m, np.identity(4)))

    def __mul__(self, other: "Transform") -> "Transform":
        """Compose transforms; ``(a * b)`` applies b first, then a."""
        return Transform(self.m @ other.m, other.m_inv @ self.m_inv)

    def transform_point(self, p: Vector3) -> Vector3:
        """Apply the transform to a point, dividing by w when needed.

        Raises:
            ValueError: If the point maps to w == 0.
        """
        p = as_vector3(p)
        xp = self.m[:3, :3] @ p + self.m[:3, 3]
        wp = float(self.m[3, :3] @ p + self.m[3, 3])
        if wp == 1.0:
            return xp
        if wp == 0.0:
            raise ValueError("Point transforms to infinity (w == 0)")
        return xp / wp

    def transform_vector(self, v: Vector3) -> Vector3:
        """Apply the linear part of the transform to a vector."""
        return self.m[:3, :3] @ as_vector3(v)

    def __repr__(self) -> str:
        return f"Transform({self.m.tolist()})"


def identity() -> Transform:
    """Create the identity transform."""
    return Transform()


def translate(delta: Sequence[float] | Vector3) -> Transform:
    """Create a translation by delta."""
    d = as_vector3(delta)
    m = np.identity(4)
    m[:3, 3] = d
    m_inv = np.identity(4)
    m_inv[:3, 3] = -d
    return Transform(m, m_inv)


def scale(x: float, y: float, z: float) -> Transform:
    """Create a non-uniform scale.

    Raises:
        ValueError: If any factor is zero.
    """
    if x == 0.0 or y == 0.0 or z == 0.0:
        raise ValueError(f"Scale factors must be non-zero, got ({x}, {y}, {z})")
    m = np.diag([x, y, z, 1.0])
    m_inv = np.diag([1.0 / x, 1.0 / y, 1.0 / z, 1.0])
    return Transform(m, m_inv)
