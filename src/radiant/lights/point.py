"""Isotropic point light.

A point light emits the same radiant intensity I in every direction from a
single position. Its illumination at a point at distance r follows the
inverse-square law:

    L_i = I / r^2

and its total emitted power is:

    Phi = 4 * pi * I

Because the light occupies a single point, sampling it picks one
deterministic direction (pdf = 1 with respect to the delta distribution),
and no other strategy can ever sample it (pdf_li = 0).

Example:
    >>> from radiant.core.transform import translate
    >>> light = PointLight(translate((0.0, 2.0, 0.0)), None, intensity=(10.0, 10.0, 10.0))
    >>> ref = InteractionCommon(p=point3(0.0, 0.0, 0.0))
    >>> sample = light.sample_li(ref, (0.5, 0.5))
    >>> sample.li  # 10 / 2^2
    array([2.5, 2.5, 2.5])
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

import numpy as np

from radiant.core.geometry import Ray, Vector3, frozen, point3, zeros3
from radiant.core.interaction import InteractionCommon, MediumInterface
from radiant.core.light import (
    LightFlags,
    LightLeSample,
    LightLiSample,
    LightType,
    VisibilityTester,
)
from radiant.core.sampling import uniform_sample_sphere, uniform_sphere_pdf
from radiant.core.spectrum import Spectrum, as_spectrum, black
from radiant.core.transform import Transform, translate

logger = logging.getLogger(__name__)


class PointLight:
    """A delta-position light radiating uniformly over the sphere.

    Instances are immutable after construction and can be shared between
    rendering threads.

    Attributes:
        light_type: Always LightType.POINT.
        position: World-space position of the light (read-only).
        intensity: Radiant intensity as RGB (read-only).
        medium_interface: Media surrounding the light, held by reference.
    """

    light_type = LightType.POINT

    def __init__(
        self,
        light_to_world: Transform,
        medium_interface: MediumInterface | None,
        intensity: Any,
    ) -> None:
        """Create a point light at the origin of its local frame.

        Args:
            light_to_world: Transform placing the light in the world. Only
                used here to compute the position.
            medium_interface: Media around the light. None means vacuum.
            intensity: Radiant intensity, a scalar or RGB triple.

        Raises:
            ValueError: If any intensity component is negative.
        """
        i = as_spectrum(intensity)
        if np.any(i < 0.0):
            raise ValueError(f"Intensity must be non-negative, got {i.tolist()}")
        self._p_light = frozen(light_to_world.transform_point(point3(0.0, 0.0, 0.0)))
        self._intensity = frozen(i)
        self._flags = LightFlags.DELTA_POSITION
        self._n_samples = 1
        self._medium_interface = medium_interface if medium_interface is not None else MediumInterface()
        logger.debug(
            "Created point light at %s with intensity %s",
            self._p_light.tolist(),
            self._intensity.tolist(),
        )

    @property
    def position(self) -> Vector3:
        """Get the world-space position."""
        return self._p_light

    @property
    def intensity(self) -> Spectrum:
        """Get the radiant intensity."""
        return self._intensity

    @property
    def flags(self) -> LightFlags:
        """Get the light flags (delta position)."""
        return self._flags

    @property
    def n_samples(self) -> int:
        """Get the number of samples integrators should take (always 1)."""
        return self._n_samples

    @property
    def medium_interface(self) -> MediumInterface:
        """Get the media surrounding the light."""
        return self._medium_interface

    def preprocess(self, scene: Any) -> None:
        """Point lights need no scene information."""

    def sample_li(self, ref: InteractionCommon, u: tuple[float, float]) -> LightLiSample:
        """Sample incident illumination from the light at a shading point.

        The direction is fully determined by the two positions, so u is
        ignored and the pdf is 1. A shading point coinciding with the light
        yields a sample with pdf 0 and no radiance.

        Args:
            ref: The shading point.
            u: Unused 2D sample, accepted for interface uniformity.

        Returns:
            The direction toward the light, pdf, incident radiance
            I / r^2, and the shadow-ray test toward the light.
        """
        d = self._p_light - ref.p
        dist2 = float(np.dot(d, d))
        p_light = InteractionCommon(p=self._p_light, time=ref.time)
        vis = VisibilityTester(ref, p_light)
        if dist2 == 0.0:
            return LightLiSample(wi=zeros3(), pdf=0.0, li=black(), vis=vis)
        wi = d / math.sqrt(dist2)
        return LightLiSample(wi=wi, pdf=1.0, li=self._intensity / dist2, vis=vis)

    def power(self) -> Spectrum:
        """Total power emitted over the sphere, 4 pi I."""
        return 4.0 * math.pi * self._intensity

    def le(self, ray: Ray) -> Spectrum:
        """Point lights add nothing to rays escaping the scene."""
        return black()

    def pdf_li(self, ref: InteractionCommon, wi: Vector3) -> float:
        """Density of sampling the light with any other strategy, always 0."""
        return 0.0

    def sample_le(
        self,
        u1: tuple[float, float],
        u2: tuple[float, float],
        time: float,
    ) -> LightLeSample:
        """Sample a ray leaving the light.

        Args:
            u1: 2D sample choosing the direction uniformly over the sphere.
            u2: Unused; a point light has no surface to sample.
            time: Time for the emitted ray.

        Returns:
            An unbounded ray from the light position, with pdf_pos = 1,
            pdf_dir = 1 / (4 pi) and the light's intensity.
        """
        d = uniform_sample_sphere(u1)
        ray = Ray(
            o=self._p_light.copy(),
            d=d,
            t_max=math.inf,
            time=time,
            medium=self._medium_interface.inside,
        )
        return LightLeSample(
            ray=ray,
            n_light=d.copy(),
            pdf_pos=1.0,
            pdf_dir=uniform_sphere_pdf(),
            le=self._intensity.copy(),
        )

    def pdf_le(self, ray: Ray, n_light: Vector3) -> tuple[float, float]:
        """Densities of sample_le having produced ray.

        Returns:
            (pdf_pos, pdf_dir): the position density is 0 because an
            arbitrary ray almost never starts at the light; the direction
            density is that of uniform sphere sampling.
        """
        return 0.0, uniform_sphere_pdf()

    def __repr__(self) -> str:
        return f"PointLight(position={self._p_light.tolist()}, intensity={self._intensity.tolist()})"


def create_point_light(
    light_to_world: Transform,
    medium_interface: MediumInterface | None,
    params: Mapping[str, Any],
) -> PointLight:
    """Create a point light from named parameters.

    Recognized parameters:
        I: Radiant intensity, scalar or RGB (default (1, 1, 1)).
        scale: Multiplier applied to I (default 1).
        from: Position in the light's local frame (default origin).

    Args:
        light_to_world: Transform of the light's local frame.
        medium_interface: Media around the light.
        params: The parameter mapping.

    Returns:
        The configured light.
    """
    intensity = as_spectrum(params.get("I", (1.0, 1.0, 1.0)))
    sc = float(params.get("scale", 1.0))
    p = params.get("from", (0.0, 0.0, 0.0))
    final_light_to_world = light_to_world * translate(p)
    return PointLight(final_light_to_world, medium_interface, intensity * sc)
