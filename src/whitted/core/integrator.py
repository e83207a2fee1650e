"""Recursive Whitted-style ray renderer.

This module computes the light arriving along a ray. A ray is intersected
with the scene; at a hit the direct contribution of every light is summed,
and mirror, glossy and passthrough rays are traced recursively until
``features.max_ray_depth`` is reached. Rays that escape the scene return the
environment color.

Recursion scheme at a hit:
    - Mirror reflection (reflective material, reflections on, glossy off):
      ``Lo += ks * render_ray(reflection_ray, depth + 1)``
    - Glossy reflection (reflective material, reflections and glossy on):
      ``Lo += ks * mean(render_ray(perturbed_ray, depth + 1))``
    - Transparency (transparent material, transparency on):
      ``Lo = mix(Lo, render_ray(passthrough_ray, depth + 1), transparency)``

Reflection and transparency can both apply to the same hit.

Example:
    >>> from whitted.core.config import Features
    >>> from whitted.core.integrator import render_ray
    >>> from whitted.core.state import RenderState
    >>> state = RenderState(scene=scene, features=Features(enable_reflections=True))
    >>> color = render_ray(state, camera.get_ray(0.5, 0.5))
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from whitted.core.hit import HitInfo
from whitted.core.ray import (
    Ray,
    Vec3,
    build_onb_from_normal,
    hit_point,
    mix,
    near_zero,
    normalize,
    reflect,
    sample_disk,
    vec3,
    zeros,
)
from whitted.core.state import RenderState
from whitted.lights.contribution import compute_light_contribution

# =============================================================================
# Rendering Constants
# =============================================================================

# Ray offset epsilon to avoid self-intersection of secondary rays
RAY_EPSILON = 1e-3

# Glossy perturbation disk radius is shininess / GLOSSY_RADIUS_DIVISOR
GLOSSY_RADIUS_DIVISOR = 64.0

# Debug colors
HIT_COLOR = vec3(1.0, 1.0, 1.0)
MISS_COLOR = vec3(1.0, 0.0, 0.0)
SECONDARY_RAY_COLOR = vec3(0.0, 0.0, 1.0)
NORMAL_COLOR = vec3(1.0, 0.0, 0.0)


def sample_environment_map(state: RenderState, ray: Ray) -> Vec3:
    """Color of a ray that left the scene.

    Black unless the environment map feature is enabled, in which case the
    scene environment is looked up in the ray direction.
    """
    if state.features.enable_environment_map:
        return state.scene.sample_environment(ray)
    return zeros()


# =============================================================================
# Secondary Ray Generation
# =============================================================================


def generate_reflection_ray(ray: Ray, hit_info: HitInfo) -> Ray:
    """Mirror the incident ray about the surface normal.

    The new ray starts at the hit point pushed RAY_EPSILON along the normal
    and has direction ``reflect(normalize(ray.direction), normalize(N))``.

    Args:
        ray: The incident ray, with ``ray.t`` set to the hit distance.
        hit_info: The intersection.

    Returns:
        The reflected ray with an unbounded t.
    """
    normal = normalize(hit_info.normal)
    direction = reflect(normalize(ray.direction), normal)
    origin = hit_point(ray) + RAY_EPSILON * normal
    return Ray(origin=origin, direction=direction)


def generate_passthrough_ray(ray: Ray, hit_info: HitInfo) -> Ray:
    """Continue the ray through the surface in the same direction.

    The origin is the hit point pushed RAY_EPSILON further along the ray.
    """
    origin = hit_point(ray) + RAY_EPSILON * normalize(ray.direction)
    return Ray(origin=origin, direction=ray.direction.copy())


# =============================================================================
# Recursive Components
# =============================================================================


def render_ray_specular_component(
    state: RenderState, ray: Ray, hit_info: HitInfo, hit_color: Vec3, ray_depth: int
) -> Vec3:
    """Add the mirror reflection to hit_color.

    Returns:
        ``hit_color + ks * render_ray(reflection, ray_depth + 1)``, or
        hit_color unchanged when the reflected direction is degenerate.
    """
    reflection = generate_reflection_ray(ray, hit_info)
    if near_zero(reflection.direction):
        return hit_color

    state.ray_sink.draw_ray(reflection.copy(), SECONDARY_RAY_COLOR)
    state.ray_sink.draw_ray(Ray(origin=reflection.origin, direction=hit_info.normal), NORMAL_COLOR)

    reflected_color = render_ray(state, reflection, ray_depth + 1)
    return hit_color + hit_info.material.ks * reflected_color


def render_ray_glossy_component(
    state: RenderState, ray: Ray, hit_info: HitInfo, hit_color: Vec3, ray_depth: int
) -> Vec3:
    """Add a blurred reflection to hit_color.

    ``features.num_glossy_samples`` rays are traced around the mirror
    direction, each offset inside a disk of radius ``shininess / 64`` that is
    perpendicular to it. Rays that end up below the surface contribute black.
    The averaged color is weighted by ks.
    """
    num_samples = state.features.num_glossy_samples
    mirror = generate_reflection_ray(ray, hit_info)
    if num_samples <= 0 or near_zero(mirror.direction):
        return hit_color

    normal = normalize(hit_info.normal)
    reflected = normalize(mirror.direction)
    tangent, bitangent, _ = build_onb_from_normal(reflected)
    radius = hit_info.material.shininess / GLOSSY_RADIUS_DIVISOR

    accumulated = zeros()
    for _ in range(num_samples):
        dx, dy = sample_disk(state.sampler.next_2d(), radius)
        direction = normalize(reflected + dx * tangent + dy * bitangent)
        if np.dot(direction, normal) <= 0.0:
            continue
        glossy_ray = Ray(origin=mirror.origin.copy(), direction=direction)
        state.ray_sink.draw_ray(glossy_ray.copy(), SECONDARY_RAY_COLOR)
        accumulated += render_ray(state, glossy_ray, ray_depth + 1)

    return hit_color + hit_info.material.ks * (accumulated / num_samples)


def render_ray_transparent_component(
    state: RenderState, ray: Ray, hit_info: HitInfo, hit_color: Vec3, ray_depth: int
) -> Vec3:
    """Blend hit_color with the light seen through the surface.

    Returns:
        ``mix(hit_color, render_ray(passthrough, ray_depth + 1), transparency)``,
        or hit_color unchanged when the ray direction is degenerate.
    """
    passthrough = generate_passthrough_ray(ray, hit_info)
    if near_zero(passthrough.direction):
        return hit_color

    state.ray_sink.draw_ray(passthrough.copy(), SECONDARY_RAY_COLOR)
    passthrough_color = render_ray(state, passthrough, ray_depth + 1)
    return mix(hit_color, passthrough_color, hit_info.material.transparency)


# =============================================================================
# Entry Points
# =============================================================================


def render_ray(state: RenderState, ray: Ray, ray_depth: int = 0) -> Vec3:
    """Compute the light arriving along a camera or secondary ray.

    The incoming ray is not modified; intersection works on a copy.

    Args:
        state: Scene, features, sampler and debug sink.
        ray: The ray to trace.
        ray_depth: Recursion depth of this ray (0 for camera rays).

    Returns:
        RGB radiance along the ray.
    """
    ray = ray.copy()
    hit_info = state.scene.intersect(ray)
    if hit_info is None:
        state.ray_sink.draw_ray(ray.copy(), MISS_COLOR)
        return sample_environment_map(state, ray)

    lo = compute_light_contribution(state, ray, hit_info)
    state.ray_sink.draw_ray(ray.copy(), HIT_COLOR)

    features = state.features
    if ray_depth < features.max_ray_depth:
        material = hit_info.material
        if features.enable_reflections and material.is_reflective:
            if features.enable_glossy_reflection:
                lo = render_ray_glossy_component(state, ray, hit_info, lo, ray_depth)
            else:
                lo = render_ray_specular_component(state, ray, hit_info, lo, ray_depth)

        if features.enable_transparency and material.is_transparent:
            lo = render_ray_transparent_component(state, ray, hit_info, lo, ray_depth)

    return lo


def render_rays(state: RenderState, rays: Sequence[Ray], ray_depth: int = 0) -> Vec3:
    """Average the radiance of several rays (e.g. for antialiasing).

    Raises:
        ValueError: If rays is empty.
    """
    if len(rays) == 0:
        raise ValueError("render_rays needs at least one ray")
    total = zeros()
    for ray in rays:
        total += render_ray(state, ray, ray_depth)
    return total / len(rays)
