"""Pixel samplers.

This module contains the sampling engine integrators draw samples from:

Components:
    base: Sampler protocol and variant tags
    stratified: Stratified sampler with Latin-hypercube sample arrays
    config: Named construction options
    factory: Construction of samplers by name
    seeding: Tile enumeration and per-tile sampler clones
"""

from .base import Sampler, SamplerType
from .config import SamplerConfig
from .factory import create_sampler, sampler_type_from_name
from .seeding import (
    TILE_SIZE,
    iter_tiles,
    samplers_for_tiles,
    tile_bounds,
    tile_count,
    tile_seed,
)
from .stratified import StratifiedSampler

__all__ = [
    "Sampler",
    "SamplerType",
    "SamplerConfig",
    "StratifiedSampler",
    "create_sampler",
    "sampler_type_from_name",
    "TILE_SIZE",
    "tile_count",
    "iter_tiles",
    "tile_bounds",
    "tile_seed",
    "samplers_for_tiles",
]
