"""Light interface shared by every light variant.

Lights form a closed set of variants tagged by :class:`LightType`. Each
variant is a standalone class implementing the :class:`Light` protocol;
integrators only talk to that protocol, and factories pick the variant from
the tag.

The interface covers both directions of light transport:
    sample_li / pdf_li: Incident illumination at a shading point, for
        direct lighting with multiple importance sampling.
    sample_le / pdf_le: Emission from the light, for methods that trace
        paths starting on lights.
    power: Total emitted power, for choosing lights proportionally.
    le: Radiance carried by rays that escape the scene.

Visibility between a shading point and a light sample is returned as a
:class:`VisibilityTester` rather than resolved immediately, so integrators
can skip the shadow ray when the contribution is zero.
"""

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Any, NamedTuple, Protocol

from radiant.core.geometry import Ray, Vector3
from radiant.core.interaction import InteractionCommon
from radiant.core.spectrum import Spectrum


class LightType(IntEnum):
    """Enumeration of light variants.

    Used by factories to dispatch construction by name.
    """

    POINT = 0


class LightFlags(IntFlag):
    """Properties of a light's sampling support."""

    DELTA_POSITION = 1
    DELTA_DIRECTION = 2
    AREA = 4
    INFINITE = 8


def is_delta_light(flags: LightFlags) -> bool:
    """Check whether a light is described by a delta distribution.

    Delta lights can only be reached by sampling them directly; any other
    sampling strategy has zero density of hitting them.
    """
    return bool(flags & (LightFlags.DELTA_POSITION | LightFlags.DELTA_DIRECTION))


class Scene(Protocol):
    """The scene queries lights depend on.

    Implemented outside this package by whatever owns the geometry and
    acceleration structures. Must be safe for concurrent reads.
    """

    def intersect_p(self, ray: Ray) -> bool:
        """Check whether anything intersects ray within [0, ray.t_max)."""
        ...


@dataclass(frozen=True, eq=False)
class VisibilityTester:
    """A deferred shadow-ray test between two interactions.

    Attributes:
        p0: The shading point.
        p1: The point sampled on the light.
    """

    p0: InteractionCommon
    p1: InteractionCommon

    def shadow_ray(self) -> Ray:
        """Build the ray segment spanning the two endpoints."""
        return self.p0.spawn_ray_to(self.p1)

    def unoccluded(self, scene: Scene) -> bool:
        """Check that nothing in scene blocks the segment between the endpoints."""
        return not scene.intersect_p(self.shadow_ray())


class LightLiSample(NamedTuple):
    """Result of sampling incident illumination at a shading point.

    Attributes:
        wi: Unit direction from the shading point toward the light.
        pdf: Solid-angle density of having chosen wi. Zero means the sample
            carries no contribution.
        li: Incident radiance arriving along wi (before occlusion).
        vis: Shadow-ray test to resolve against the scene.
    """

    wi: Vector3
    pdf: float
    li: Spectrum
    vis: VisibilityTester


class LightLeSample(NamedTuple):
    """Result of sampling a ray leaving a light.

    Attributes:
        ray: The emitted ray.
        n_light: Normal at the ray origin (the ray direction for point lights).
        pdf_pos: Area density of the origin.
        pdf_dir: Solid-angle density of the direction.
        le: Emitted radiance (or intensity for delta-position lights).
    """

    ray: Ray
    n_light: Vector3
    pdf_pos: float
    pdf_dir: float
    le: Spectrum


class Light(Protocol):
    """Capabilities every light variant provides."""

    light_type: LightType

    @property
    def flags(self) -> LightFlags: ...

    @property
    def n_samples(self) -> int: ...

    def preprocess(self, scene: Any) -> None: ...

    def sample_li(self, ref: InteractionCommon, u: tuple[float, float]) -> LightLiSample: ...

    def power(self) -> Spectrum: ...

    def le(self, ray: Ray) -> Spectrum: ...

    def pdf_li(self, ref: InteractionCommon, wi: Vector3) -> float: ...

    def sample_le(
        self,
        u1: tuple[float, float],
        u2: tuple[float, float],
        time: float,
    ) -> LightLeSample: ...

    def pdf_le(self, ray: Ray, n_light: Vector3) -> tuple[float, float]: ...
