"""Sampling engine and light sources for a physically-based renderer.

This package provides the pieces an integrator leans on to estimate the
rendering equation:
- Stratified per-pixel sample generation with Latin-hypercube sample arrays
- Deterministic, per-worker random number streams
- A uniform light interface with a delta-position point light
- Deferred visibility tests resolved against an external scene

Subpackages:
    core: RNG, sampling primitives, geometry, transforms, interactions, lights
    samplers: Stratified sampler, configuration, factories and worker seeding
    lights: Point light (host side and Taichi kernel side) and light factory
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
