"""Taichi geometric primitives.

Components:
    sphere: Sphere primitive, HitRecord and robust ray-sphere intersection
    quad: Parallelogram primitive and ray-quad intersection

All intersection routines are Taichi functions (@ti.func) and return a
HitRecord carrying the hit distance, the normal facing the ray and the
texture coordinates.
"""

from .quad import Quad, hit_quad
from .sphere import HitRecord, Sphere, hit_sphere, sphere_uv

__all__ = [
    "Sphere",
    "HitRecord",
    "hit_sphere",
    "sphere_uv",
    "Quad",
    "hit_quad",
]
