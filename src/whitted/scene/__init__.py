"""Scene module.

Components:
    intersection: Taichi primitive storage and closest-hit queries
    manager: SceneManager, the scene object handed to the renderer
    environment: Colors returned for rays that escape the scene
    cornell_box: Demo scenes

Importing this package allocates the Taichi primitive fields, so call
``ti.init`` first.
"""

from .cornell_box import BOX_SIZE, CornellBoxParams, create_cornell_box_scene, create_mirror_box_scene
from .environment import ConstantEnvironment, Environment, GradientEnvironment, environment_from_dict
from .intersection import (
    MAX_QUADS,
    MAX_SPHERES,
    SceneHitRecord,
    add_quad,
    add_sphere,
    clear_scene,
    get_quad_count,
    get_sphere_count,
    intersect_scene,
    query_closest_hit,
)
from .manager import MAX_MATERIALS, QuadInfo, SceneConfig, SceneManager, SphereInfo

__all__ = [
    # Intersection module
    "SceneHitRecord",
    "add_sphere",
    "add_quad",
    "clear_scene",
    "get_sphere_count",
    "get_quad_count",
    "intersect_scene",
    "query_closest_hit",
    "MAX_SPHERES",
    "MAX_QUADS",
    # Manager module
    "SceneManager",
    "SphereInfo",
    "QuadInfo",
    "SceneConfig",
    "MAX_MATERIALS",
    # Environment module
    "Environment",
    "ConstantEnvironment",
    "GradientEnvironment",
    "environment_from_dict",
    # Cornell box module
    "CornellBoxParams",
    "create_cornell_box_scene",
    "create_mirror_box_scene",
    "BOX_SIZE",
]
