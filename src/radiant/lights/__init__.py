"""Light variants.

This module contains the light sources integrators sample:

Components:
    point: Isotropic delta-position point light
    factory: Construction of lights by name
    kernels: Taichi-side mirror of registered point lights (import it
        directly after ``ti.init``; it allocates fields on import)
"""

from .factory import create_light, light_type_from_name
from .point import PointLight, create_point_light

__all__ = [
    "PointLight",
    "create_point_light",
    "create_light",
    "light_type_from_name",
]
