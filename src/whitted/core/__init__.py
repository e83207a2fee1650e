"""Core rendering module.

Components:
    ray: Ray data structure and vector helpers
    config: Feature configuration (Features, ShadingModel)
    sampler: Seeded uniform sample source
    debug: Debug ray sinks
    state: RenderState and the Scene interface
    hit: HitInfo records produced by scene intersection
    integrator: Recursive ray renderer
    progressive: Progressive image driver
"""

from .config import DEFAULT_MAX_RAY_DEPTH, Features, ShadingModel, load_features, save_features
from .debug import DebugRay, NullRaySink, RaySink, RecordingRaySink
from .ray import (
    Ray,
    Vec3,
    as_vec3,
    build_onb_from_normal,
    cross,
    dot,
    hit_point,
    length,
    mix,
    near_zero,
    normalize,
    ray_at,
    reflect,
    sample_disk,
    vec3,
    zeros,
)
from .sampler import Sampler
from .state import RenderState, Scene

# hit, integrator and progressive are NOT imported here to avoid circular imports
# with the materials and lights packages. Import them directly, e.g.:
#   from whitted.core.integrator import render_ray

__all__ = [
    "Ray",
    "Vec3",
    "vec3",
    "as_vec3",
    "zeros",
    "ray_at",
    "hit_point",
    "dot",
    "length",
    "normalize",
    "cross",
    "reflect",
    "mix",
    "near_zero",
    "build_onb_from_normal",
    "sample_disk",
    "Features",
    "ShadingModel",
    "DEFAULT_MAX_RAY_DEPTH",
    "load_features",
    "save_features",
    "Sampler",
    "RaySink",
    "NullRaySink",
    "RecordingRaySink",
    "DebugRay",
    "RenderState",
    "Scene",
]
