"""Pytest configuration for raytracer tests.

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
def clear_scene_primitives():
    """Clear the Taichi primitive fields before and after each test."""
    # Import here so the fields are allocated after ti.init()
    from whitted.scene.intersection import clear_scene

    clear_scene()
    yield
    clear_scene()


@pytest.fixture
def floor_hit():
    """A camera ray hitting a diffuse floor (z = 0) at the origin, and its HitInfo."""
    from whitted.core.hit import HitInfo
    from whitted.core.ray import Ray
    from whitted.materials.material import Material

    ray = Ray(origin=(0.0, 0.0, 1.0), direction=(0.0, 0.0, -1.0), t=1.0)
    hit_info = HitInfo(normal=(0.0, 0.0, 1.0), material=Material(kd=(0.5, 0.5, 0.5)))
    return ray, hit_info
