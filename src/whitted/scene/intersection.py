"""Scene-level primitive storage and closest-hit queries (Taichi).

Spheres and quads live in structure-of-arrays Taichi fields. The
``intersect_scene`` Taichi function brute-forces every primitive and keeps the
closest hit. ``query_closest_hit`` wraps it for Python-scope callers: it
writes the ray into 0-d query fields, runs a one-shot kernel and reads the
hit back as NumPy values.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.intersection import add_sphere, clear_scene, query_closest_hit
    >>> clear_scene()
    >>> add_sphere(ti.math.vec3(0, 0, -1), 0.5, material_id=0)
    >>> query_closest_hit((0, 0, 0), (0, 0, -1))
    (0.5, array([0., 0., 1.]), array([...]), 0)
"""

from typing import Sequence

import numpy as np
import taichi as ti
import taichi.math as tm

from whitted.geometry.quad import Quad, hit_quad
from whitted.geometry.sphere import HitRecord, Sphere, hit_sphere

vec3 = tm.vec3
vec2 = tm.vec2


@ti.dataclass
class SceneHitRecord:
    """Closest intersection of a ray with the scene.

    Attributes:
        hit: 1 if any primitive was hit, 0 otherwise.
        t: Ray parameter of the closest hit.
        normal: Unit normal facing the incoming ray.
        front_face: 1 if the ray hit the outside of the surface.
        uv: Texture coordinates of the hit point.
        material_id: Material of the hit primitive (-1 on a miss).
    """

    hit: ti.i32
    t: ti.f32
    normal: vec3
    front_face: ti.i32
    uv: vec2
    material_id: ti.i32


# Maximum number of primitives supported in the scene
MAX_SPHERES = 1024
MAX_QUADS = 1024

# Accepted hit distance range for Python-scope queries
T_MIN = 1e-4
T_MAX = 1e10

# Sphere storage
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Quad storage; quad_corners holds the Q corner of each quad
quad_corners = ti.Vector.field(3, dtype=ti.f32, shape=MAX_QUADS)
quad_edge_u = ti.Vector.field(3, dtype=ti.f32, shape=MAX_QUADS)
quad_edge_v = ti.Vector.field(3, dtype=ti.f32, shape=MAX_QUADS)
quad_material_ids = ti.field(dtype=ti.i32, shape=MAX_QUADS)
num_quads = ti.field(dtype=ti.i32, shape=())

# Query input/output for query_closest_hit
_query_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_query_direction = ti.Vector.field(3, dtype=ti.f32, shape=())
_hit_flag = ti.field(dtype=ti.i32, shape=())
_hit_t = ti.field(dtype=ti.f32, shape=())
_hit_normal = ti.Vector.field(3, dtype=ti.f32, shape=())
_hit_uv = ti.Vector.field(2, dtype=ti.f32, shape=())
_hit_material_id = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all primitives.

    Only the counts are reset; stale field data is overwritten by later adds.
    """
    num_spheres[None] = 0
    num_quads[None] = 0


def add_sphere(center: vec3, radius: float, material_id: int = 0) -> int:
    """Add a sphere to the scene.

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = center
    sphere_radii[idx] = radius
    sphere_material_ids[idx] = material_id
    num_spheres[None] = idx + 1
    return idx


def add_quad(q: vec3, u: vec3, v: vec3, material_id: int = 0) -> int:
    """Add the quad with corners q, q+u, q+v and q+u+v to the scene.

    Returns:
        The index of the added quad.

    Raises:
        RuntimeError: If the maximum number of quads is exceeded.
    """
    idx = num_quads[None]
    if idx >= MAX_QUADS:
        raise RuntimeError(f"Maximum number of quads ({MAX_QUADS}) exceeded")
    quad_corners[idx] = q
    quad_edge_u[idx] = u
    quad_edge_v[idx] = v
    quad_material_ids[idx] = material_id
    num_quads[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


def get_quad_count() -> int:
    """Get the number of quads in the scene."""
    return int(num_quads[None])


@ti.func
def _to_scene_hit_record(rec: HitRecord, material_id: ti.i32) -> SceneHitRecord:
    return SceneHitRecord(
        hit=rec.hit,
        t=rec.t,
        normal=rec.normal,
        front_face=rec.front_face,
        uv=rec.uv,
        material_id=material_id,
    )


@ti.func
def intersect_scene(
    ray_origin: vec3,
    ray_direction: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
) -> SceneHitRecord:
    """Closest hit of a ray against every primitive in (t_min, t_max).

    Returns:
        The closest SceneHitRecord, or a record with hit == 0.
    """
    closest_t = t_max
    result = SceneHitRecord(
        hit=0,
        t=0.0,
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
        uv=vec2(0.0, 0.0),
        material_id=-1,
    )

    for i in range(num_spheres[None]):
        sphere = Sphere(center=sphere_centers[i], radius=sphere_radii[i])
        rec = hit_sphere(ray_origin, ray_direction, sphere, t_min, closest_t)
        if rec.hit == 1:
            closest_t = rec.t
            result = _to_scene_hit_record(rec, sphere_material_ids[i])

    for i in range(num_quads[None]):
        quad = Quad(Q=quad_corners[i], u=quad_edge_u[i], v=quad_edge_v[i])
        rec = hit_quad(ray_origin, ray_direction, quad, t_min, closest_t)
        if rec.hit == 1:
            closest_t = rec.t
            result = _to_scene_hit_record(rec, quad_material_ids[i])

    return result


@ti.kernel
def _closest_hit_kernel(t_min: ti.f32, t_max: ti.f32):
    # Single-iteration outer loop keeps the primitive loops serial
    for _ in range(1):
        rec = intersect_scene(_query_origin[None], _query_direction[None], t_min, t_max)
        _hit_flag[None] = rec.hit
        _hit_t[None] = rec.t
        _hit_normal[None] = rec.normal
        _hit_uv[None] = rec.uv
        _hit_material_id[None] = rec.material_id


def query_closest_hit(
    origin: Sequence[float],
    direction: Sequence[float],
    t_min: float = T_MIN,
    t_max: float = T_MAX,
) -> tuple[float, np.ndarray, np.ndarray, int] | None:
    """Find the closest hit of a ray from Python scope.

    Args:
        origin: Ray origin (x, y, z).
        direction: Ray direction (x, y, z); need not be normalized.
        t_min: Smallest accepted hit distance (exclusive).
        t_max: Largest accepted hit distance (exclusive), capped at T_MAX.

    Returns:
        Tuple (t, normal, uv, material_id) of the closest hit, or None on a miss.
    """
    _query_origin[None] = vec3(float(origin[0]), float(origin[1]), float(origin[2]))
    _query_direction[None] = vec3(float(direction[0]), float(direction[1]), float(direction[2]))
    _closest_hit_kernel(t_min, min(t_max, T_MAX))

    if _hit_flag[None] == 0:
        return None

    normal = _hit_normal[None]
    uv = _hit_uv[None]
    return (
        float(_hit_t[None]),
        np.array([float(normal[0]), float(normal[1]), float(normal[2])], dtype=np.float64),
        np.array([float(uv[0]), float(uv[1])], dtype=np.float64),
        int(_hit_material_id[None]),
    )
