"""Interaction records and medium interfaces.

An :class:`InteractionCommon` describes a point where light interacts with
the scene: the shading point handed to a light, or the synthetic point a
light places at its own position. Rays leaving an interaction are offset
along the normal by the point's error bound so they do not re-intersect the
surface they start on.

Media are opaque to this package. A :class:`MediumInterface` only holds
references to them; the same medium objects are shared between every light
and shape that borders them.
"""

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from radiant.core.geometry import (
    SHADOW_EPSILON,
    Ray,
    Vector3,
    as_vector3,
    frozen,
    zeros3,
)


@dataclass(frozen=True)
class MediumInterface:
    """The media on either side of a surface or around a light.

    Attributes:
        inside: Medium on the side opposite the normal, or None for vacuum.
        outside: Medium on the side of the normal, or None for vacuum.
    """

    inside: Any = None
    outside: Any = None

    def is_medium_transition(self) -> bool:
        """Check whether the two sides hold different media."""
        return self.inside is not self.outside


def offset_ray_origin(p: Vector3, p_error: Vector3, n: Vector3, w: Vector3) -> Vector3:
    """Push a ray origin off a surface along the normal.

    The offset is the projection of the error box onto the normal, flipped to
    the side w points into.

    Args:
        p: The surface point.
        p_error: Conservative absolute error bound of p per axis.
        n: The surface normal (zero for points that are not on a surface).
        w: The direction the ray will leave in.

    Returns:
        The offset origin.
    """
    d = float(np.dot(np.abs(n), p_error))
    offset = d * n
    if np.dot(w, n) < 0.0:
        offset = -offset
    return p + offset


def _readonly_vector(value: Any) -> Vector3:
    return frozen(as_vector3(value))


@dataclass(frozen=True, eq=False)
class InteractionCommon:
    """Geometry shared by every kind of interaction.

    Vector fields are converted to read-only float64 arrays on construction.

    Attributes:
        p: Position of the interaction.
        time: Time of the interaction.
        p_error: Floating-point error bound on p.
        wo: Outgoing direction (toward the viewer), zero if undefined.
        n: Surface normal, zero if the point is not on a surface.
        medium_interface: Media around the point, or None to inherit the
            medium of the incoming ray.
    """

    p: Vector3
    time: float = 0.0
    p_error: Vector3 = field(default_factory=zeros3)
    wo: Vector3 = field(default_factory=zeros3)
    n: Vector3 = field(default_factory=zeros3)
    medium_interface: MediumInterface | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "p", _readonly_vector(self.p))
        object.__setattr__(self, "p_error", _readonly_vector(self.p_error))
        object.__setattr__(self, "wo", _readonly_vector(self.wo))
        object.__setattr__(self, "n", _readonly_vector(self.n))
        object.__setattr__(self, "time", float(self.time))

    def is_surface_interaction(self) -> bool:
        """Check whether the interaction lies on a surface (non-zero normal)."""
        return bool(np.any(self.n))

    def get_medium(self, w: Vector3) -> Any:
        """Get the medium a ray leaving in direction w starts in."""
        if self.medium_interface is None:
            return None
        if np.dot(w, self.n) > 0.0:
            return self.medium_interface.outside
        return self.medium_interface.inside

    def spawn_ray(self, d: Vector3) -> Ray:
        """Spawn an unbounded ray leaving the interaction in direction d."""
        d = as_vector3(d)
        o = offset_ray_origin(self.p, self.p_error, self.n, d)
        return Ray(o=o, d=d, time=self.time, medium=self.get_medium(d))

    def spawn_ray_to(self, other: "InteractionCommon") -> Ray:
        """Spawn a shadow ray segment toward another interaction.

        Both endpoints are offset off their surfaces. The returned ray reaches
        the target at t = 1 and stops at t = 1 - SHADOW_EPSILON.
        """
        po = offset_ray_origin(self.p, self.p_error, self.n, other.p - self.p)
        pt = offset_ray_origin(other.p, other.p_error, other.n, po - other.p)
        d = pt - po
        return Ray(o=po, d=d, t_max=1.0 - SHADOW_EPSILON, time=self.time, medium=self.get_medium(d))
