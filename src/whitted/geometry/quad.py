"""Quad primitive and ray-quad intersection (Taichi).

A quad is the parallelogram with corners Q, Q+u, Q+v and Q+u+v. Its
geometric normal is normalize(cross(u, v)). A hit point P is written as
P = Q + alpha * u + beta * v and (alpha, beta) doubles as the texture
coordinate.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.geometry.quad import Quad, hit_quad
    >>> floor = Quad(Q=ti.math.vec3(0, 0, 0), u=ti.math.vec3(1, 0, 0), v=ti.math.vec3(0, 0, 1))
    >>> # Use hit_quad within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from .sphere import HitRecord

vec3 = tm.vec3
vec2 = tm.vec2


@ti.dataclass
class Quad:
    """A parallelogram defined by a corner point and two edge vectors."""

    Q: vec3
    u: vec3
    v: vec3


@ti.func
def _compute_quad_frame(quad: Quad):
    """Plane normal, plane constant and the vectors recovering (alpha, beta).

    With n = u x v, w_u = (v x n) / n.n and w_v = (n x u) / n.n satisfy
    alpha = w_u . (P - Q) and beta = w_v . (P - Q).
    """
    n = tm.cross(quad.u, quad.v)
    normal = tm.normalize(n)
    d = tm.dot(normal, quad.Q)
    n_dot_n = tm.dot(n, n)

    w_u = vec3(0.0, 0.0, 0.0)
    w_v = vec3(0.0, 0.0, 0.0)
    # Degenerate quad (parallel edges) keeps zero vectors
    if n_dot_n > 1e-10:
        w_u = tm.cross(quad.v, n) / n_dot_n
        w_v = tm.cross(n, quad.u) / n_dot_n

    return normal, d, w_u, w_v


@ti.func
def hit_quad(
    ray_origin: vec3,
    ray_direction: vec3,
    quad: Quad,
    t_min: ti.f32,
    t_max: ti.f32,
) -> HitRecord:
    """Test for ray-quad intersection inside the open interval (t_min, t_max).

    Intersects the supporting plane, then keeps the hit only if its local
    coordinates fall in [0, 1] x [0, 1].

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (need not be normalized).
        quad: The quad to test.
        t_min: Smallest accepted t (exclusive).
        t_max: Largest accepted t (exclusive).

    Returns:
        A HitRecord; check its hit field.
    """
    normal, d, w_u, w_v = _compute_quad_frame(quad)
    denom = tm.dot(normal, ray_direction)

    did_hit = 0
    hit_t = 0.0
    hit_normal = vec3(0.0, 0.0, 0.0)
    is_front_face = 0
    uv = vec2(0.0, 0.0)

    # Skip rays parallel to the plane
    if ti.abs(denom) > 1e-8:
        t = (d - tm.dot(normal, ray_origin)) / denom
        if t > t_min and t < t_max:
            p_minus_q = ray_origin + t * ray_direction - quad.Q
            alpha = tm.dot(w_u, p_minus_q)
            beta = tm.dot(w_v, p_minus_q)

            if alpha >= 0.0 and alpha <= 1.0 and beta >= 0.0 and beta <= 1.0:
                did_hit = 1
                hit_t = t
                uv = vec2(alpha, beta)
                if denom > 0.0:
                    is_front_face = 0
                    hit_normal = -normal
                else:
                    is_front_face = 1
                    hit_normal = normal

    return HitRecord(
        hit=did_hit,
        t=hit_t,
        normal=hit_normal,
        front_face=is_front_face,
        uv=uv,
    )
