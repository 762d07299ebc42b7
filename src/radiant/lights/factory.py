"""Construction of lights by name.

Maps light names to :class:`~radiant.core.light.LightType` tags and each tag
to the function that builds that variant from named parameters.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from radiant.core.interaction import MediumInterface
from radiant.core.light import Light, LightType
from radiant.core.transform import Transform
from radiant.lights.point import create_point_light

logger = logging.getLogger(__name__)

LightCreator = Callable[[Transform, MediumInterface | None, Mapping[str, Any]], Light]

_LIGHT_CREATORS: dict[LightType, LightCreator] = {
    LightType.POINT: create_point_light,
}


def light_type_from_name(name: str) -> LightType:
    """Look up the light variant for a name such as ``"point"``.

    Raises:
        ValueError: If the name does not match a known variant.
    """
    try:
        return LightType[name.strip().upper()]
    except KeyError:
        known = ", ".join(t.name.lower() for t in LightType)
        raise ValueError(f"Unknown light type: {name!r} (expected one of: {known})") from None


def create_light(
    name: str,
    light_to_world: Transform,
    medium_interface: MediumInterface | None = None,
    params: Mapping[str, Any] | None = None,
) -> Light:
    """Create a light variant from its name and parameters.

    Args:
        name: Variant name, e.g. ``"point"``.
        light_to_world: Transform of the light's local frame.
        medium_interface: Media around the light.
        params: Variant-specific named parameters.

    Returns:
        The constructed light.

    Raises:
        ValueError: If the name is unknown or a parameter is invalid.
    """
    light_type = light_type_from_name(name)
    light = _LIGHT_CREATORS[light_type](light_to_world, medium_interface, params or {})
    logger.debug("Created %s light: %r", light_type.name.lower(), light)
    return light
