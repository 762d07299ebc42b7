"""Core building blocks shared by samplers and lights.

Components:
    rng: Deterministic per-sequence random number streams
    sampling: Stratified, Latin-hypercube and sphere sampling primitives
    geometry: Host-side vectors and the Ray record
    transform: 4x4 transforms applied to points and vectors
    interaction: Interaction records, ray spawning and medium interfaces
    spectrum: RGB radiance values
    light: Light protocol, flags, sample records and visibility tests
    log: Logging setup for scripts
"""

from .geometry import Ray, distance_squared, length, normalize, point3, vec3
from .interaction import InteractionCommon, MediumInterface
from .light import (
    Light,
    LightFlags,
    LightLeSample,
    LightLiSample,
    LightType,
    VisibilityTester,
    is_delta_light,
)
from .rng import ONE_MINUS_EPSILON, Rng
from .sampling import (
    latin_hypercube,
    shuffle,
    stratified_sample_1d,
    stratified_sample_2d,
    uniform_sample_sphere,
    uniform_sphere_pdf,
)
from .transform import Transform, scale, translate

__all__ = [
    "Rng",
    "ONE_MINUS_EPSILON",
    "stratified_sample_1d",
    "stratified_sample_2d",
    "latin_hypercube",
    "shuffle",
    "uniform_sample_sphere",
    "uniform_sphere_pdf",
    "Ray",
    "vec3",
    "point3",
    "length",
    "normalize",
    "distance_squared",
    "Transform",
    "translate",
    "scale",
    "InteractionCommon",
    "MediumInterface",
    "Light",
    "LightFlags",
    "LightType",
    "LightLiSample",
    "LightLeSample",
    "VisibilityTester",
    "is_delta_light",
]
