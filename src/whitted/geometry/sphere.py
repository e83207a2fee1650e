"""Sphere primitive and ray-sphere intersection (Taichi).

Intersection uses the numerically robust quadratic formulation from Ray
Tracing Gems (chapter 7), which avoids catastrophic cancellation when the
ray barely grazes the sphere.

Texture coordinates use the usual spherical mapping of the outward unit
normal p:
    u = (atan2(-p.z, p.x) + pi) / (2 pi)
    v = acos(-p.y) / pi
so v = 0 at the bottom pole and v = 1 at the top pole.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -1), radius=0.5)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

vec3 = tm.vec3
vec2 = tm.vec2


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius."""

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Record of a ray-primitive intersection.

    Attributes:
        hit: 1 if the ray intersected the primitive, 0 otherwise.
        t: Ray parameter of the intersection. Only valid if hit == 1.
        normal: Unit surface normal facing the incoming ray.
        front_face: 1 if the ray hit the outside of the surface.
        uv: Texture coordinates of the hit point.
    """

    hit: ti.i32
    t: ti.f32
    normal: vec3
    front_face: ti.i32
    uv: vec2


@ti.func
def _solve_quadratic_robust(h: ti.f32, a: ti.f32, c: ti.f32, sqrt_d: ti.f32):
    """Solve a*t^2 + 2*h*t + c = 0, returning (t0, t1) with t0 <= t1."""
    # q = -(h + sign(h) * sqrt(discriminant))
    sign_h = ti.select(h < 0.0, -1.0, 1.0)
    q = -(h + sign_h * sqrt_d)

    t0 = 0.0
    t1 = 0.0
    if ti.abs(q) < 1e-10:
        # Tangent ray
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        temp = t0
        t0 = t1
        t1 = temp

    return t0, t1


@ti.func
def sphere_uv(p: vec3) -> vec2:
    """Spherical texture coordinates of a point on the unit sphere."""
    theta = ti.acos(tm.clamp(-p.y, -1.0, 1.0))
    phi = tm.atan2(-p.z, p.x) + tm.pi
    return vec2(phi / (2.0 * tm.pi), theta / tm.pi)


@ti.func
def hit_sphere(
    ray_origin: vec3,
    ray_direction: vec3,
    sphere: Sphere,
    t_min: ti.f32,
    t_max: ti.f32,
) -> HitRecord:
    """Test for ray-sphere intersection inside the open interval (t_min, t_max).

    Solves |origin + t * direction - center|^2 = radius^2 in the half-b form
    a*t^2 + 2*h*t + c = 0 with a = d.d, h = d.oc and c = oc.oc - r^2.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (need not be normalized).
        sphere: The sphere to test.
        t_min: Smallest accepted t (exclusive).
        t_max: Largest accepted t (exclusive).

    Returns:
        A HitRecord; check its hit field.
    """
    oc = ray_origin - sphere.center
    a = tm.dot(ray_direction, ray_direction)
    h = tm.dot(ray_direction, oc)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = h * h - a * c

    # Taichi requires outer-scope declaration
    did_hit = 0
    hit_t = 0.0
    hit_normal = vec3(0.0, 0.0, 0.0)
    is_front_face = 0
    uv = vec2(0.0, 0.0)

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t0, t1 = _solve_quadratic_robust(h, a, c, sqrt_d)

        t = t0
        valid = (t > t_min) and (t < t_max)
        if not valid:
            t = t1
            valid = (t > t_min) and (t < t_max)

        if valid:
            did_hit = 1
            hit_t = t
            point = ray_origin + t * ray_direction
            outward_normal = (point - sphere.center) / sphere.radius
            uv = sphere_uv(outward_normal)

            if tm.dot(ray_direction, outward_normal) > 0.0:
                # Ray starts inside the sphere
                is_front_face = 0
                hit_normal = -outward_normal
            else:
                is_front_face = 1
                hit_normal = outward_normal

    return HitRecord(
        hit=did_hit,
        t=hit_t,
        normal=hit_normal,
        front_face=is_front_face,
        uv=uv,
    )
