"""Pytest configuration for radiant tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_point_light_table():
    """Clear the kernel-side point light table before and after each test.

    Imported lazily so the fields are allocated after Taichi is initialized.
    """
    from radiant.lights.kernels import clear_point_lights

    clear_point_lights()
    yield
    clear_point_lights()


@pytest.fixture
def sampler():
    """A 4x4 jittered stratified sampler with 4 sampled dimensions."""
    from radiant.samplers.stratified import StratifiedSampler

    return StratifiedSampler(4, 4, jitter_samples=True, n_sampled_dimensions=4, seed=0)
