"""Shadow-ray visibility of light samples.

Two policies are available. Binary visibility answers whether anything lies
between the hit point and the light sample. Transparency-aware visibility
returns the light color attenuated by the material of the surface being lit
when the sample is occluded. The attenuation uses the receiver's material, not
the occluder's, so it is only an approximation of colored shadows.

``visibility_of_light_sample`` picks the policy from the render features.
"""

from __future__ import annotations

import numpy as np

from whitted.core.hit import HitInfo
from whitted.core.ray import Ray, Vec3, as_vec3, hit_point, length, normalize, vec3, zeros
from whitted.core.state import RenderState

# Offset along the surface normal keeping shadow rays off their own surface
SHADOW_RAY_EPSILON = 1e-4

# Debug colors
OCCLUDED_COLOR = vec3(0.0, 0.0, 1.0)
UNOCCLUDED_COLOR = vec3(0.0, 1.0, 0.0)


def _make_shadow_ray(light_position: Vec3, ray: Ray, hit_info: HitInfo) -> Ray:
    """Build the ray from the hit point toward a light sample.

    The origin is pushed off the surface along the normal, on the side facing
    the light. The ray only accepts hits closer than the light itself.
    """
    p = hit_point(ray)
    light_position = as_vec3(light_position)
    n = normalize(hit_info.normal)
    if np.dot(n, light_position - p) < 0.0:
        n = -n
    origin = p + SHADOW_RAY_EPSILON * n
    to_light = light_position - origin
    distance = length(to_light)
    return Ray(
        origin=origin,
        direction=normalize(to_light),
        t=max(distance - SHADOW_RAY_EPSILON, 0.0),
    )


def _is_occluded(state: RenderState, shadow_ray: Ray) -> bool:
    occluded = state.scene.intersect(shadow_ray) is not None
    state.ray_sink.draw_ray(shadow_ray.copy(), OCCLUDED_COLOR if occluded else UNOCCLUDED_COLOR)
    return occluded


def visibility_of_light_sample_binary(
    state: RenderState,
    light_position: Vec3,
    light_color: Vec3,
    ray: Ray,
    hit_info: HitInfo,
) -> bool:
    """Check whether a light sample is visible from the hit point.

    Args:
        state: Render state providing the scene.
        light_position: Sampled position on the light.
        light_color: Color emitted at the sample (unused by the test).
        ray: The ray that produced the hit; ``ray.t`` locates the hit point.
        hit_info: The intersection being lit.

    Returns:
        True if nothing lies between the hit point and the light sample.
    """
    shadow_ray = _make_shadow_ray(light_position, ray, hit_info)
    if shadow_ray.t <= 0.0:
        return True
    return not _is_occluded(state, shadow_ray)


def visibility_of_light_sample_transparency(
    state: RenderState,
    light_position: Vec3,
    light_color: Vec3,
    ray: Ray,
    hit_info: HitInfo,
) -> Vec3:
    """Light reaching the hit point with transparency-attenuated shadows.

    Returns:
        ``light_color`` when unoccluded, otherwise
        ``light_color * kd * (1 - transparency)`` of the receiving material.
    """
    light_color = as_vec3(light_color)
    if visibility_of_light_sample_binary(state, light_position, light_color, ray, hit_info):
        return light_color
    material = hit_info.material
    return light_color * material.kd * (1.0 - material.transparency)


def visibility_of_light_sample(
    state: RenderState,
    light_position: Vec3,
    light_color: Vec3,
    ray: Ray,
    hit_info: HitInfo,
) -> Vec3:
    """Light from a sample that reaches the hit point under the active features.

    Without shadows the light color is returned without tracing anything.
    With shadows but without transparency the sample is either fully
    visible or black. With both enabled the transparency-aware policy is used.
    """
    features = state.features
    if not features.enable_shadows:
        return as_vec3(light_color)
    if not features.enable_transparency:
        if visibility_of_light_sample_binary(state, light_position, light_color, ray, hit_info):
            return as_vec3(light_color)
        return zeros()
    return visibility_of_light_sample_transparency(state, light_position, light_color, ray, hit_info)
