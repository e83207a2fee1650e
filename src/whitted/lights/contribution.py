"""Direct lighting: sum of the contributions of every scene light.

Point lights are evaluated once. Segment and parallelogram lights are
integrated with ``features.num_shadow_samples`` uniform samples drawn from the
render state's sampler, so results are reproducible for a seeded sampler.
"""

from __future__ import annotations

import numpy as np

from whitted.core.hit import HitInfo
from whitted.core.ray import Ray, Vec3, hit_point, zeros
from whitted.core.state import RenderState
from whitted.lights.lights import (
    ParallelogramLight,
    PointLight,
    SegmentLight,
    sample_parallelogram_light,
    sample_segment_light,
)
from whitted.lights.visibility import visibility_of_light_sample, visibility_of_light_sample_binary
from whitted.materials.shading import compute_shading


def compute_contribution_point_light(
    state: RenderState, light: PointLight, ray: Ray, hit_info: HitInfo
) -> Vec3:
    """Reflected light from a point light.

    An occluded light contributes nothing. For a visible light on a
    transparent surface (transparency < 1) the result is
    ``shading * (1 - transparency)`` plus the transparency-aware visibility
    of the light. That sum can exceed the plain shading value.
    """
    if state.features.enable_shadows and not visibility_of_light_sample_binary(
        state, light.position, light.color, ray, hit_info
    ):
        return zeros()

    p = hit_point(ray)
    shading = compute_shading(
        state.features, -ray.direction, light.position - p, light.color, hit_info
    )

    transparency = hit_info.material.transparency
    if transparency < 1.0:
        visible = visibility_of_light_sample(state, light.position, light.color, ray, hit_info)
        return shading * (1.0 - transparency) + visible
    return shading


def _shade_light_sample(
    state: RenderState, position: Vec3, color: Vec3, ray: Ray, hit_info: HitInfo
) -> Vec3:
    visible = visibility_of_light_sample(state, position, color, ray, hit_info)
    if not np.any(visible):
        return zeros()
    p = hit_point(ray)
    return compute_shading(state.features, -ray.direction, position - p, visible, hit_info)


def compute_contribution_segment_light(
    state: RenderState,
    light: SegmentLight,
    ray: Ray,
    hit_info: HitInfo,
    num_samples: int,
) -> Vec3:
    """Average reflected light over num_samples points on a segment light."""
    accumulated = zeros()
    if num_samples <= 0:
        return accumulated
    for _ in range(num_samples):
        position, color = sample_segment_light(light, state.sampler.next_1d())
        accumulated += _shade_light_sample(state, position, color, ray, hit_info)
    return accumulated / num_samples


def compute_contribution_parallelogram_light(
    state: RenderState,
    light: ParallelogramLight,
    ray: Ray,
    hit_info: HitInfo,
    num_samples: int,
) -> Vec3:
    """Average reflected light over num_samples points on a parallelogram light."""
    accumulated = zeros()
    if num_samples <= 0:
        return accumulated
    for _ in range(num_samples):
        position, color = sample_parallelogram_light(light, state.sampler.next_2d())
        accumulated += _shade_light_sample(state, position, color, ray, hit_info)
    return accumulated / num_samples


def compute_light_contribution(state: RenderState, ray: Ray, hit_info: HitInfo) -> Vec3:
    """Sum of the direct contributions of all scene lights, in scene order.

    Raises:
        TypeError: If the scene holds an object that is not a known light kind.
    """
    lo = zeros()
    num_samples = state.features.num_shadow_samples
    for light in state.scene.lights:
        if isinstance(light, PointLight):
            lo += compute_contribution_point_light(state, light, ray, hit_info)
        elif isinstance(light, SegmentLight):
            lo += compute_contribution_segment_light(state, light, ray, hit_info, num_samples)
        elif isinstance(light, ParallelogramLight):
            lo += compute_contribution_parallelogram_light(state, light, ray, hit_info, num_samples)
        else:
            raise TypeError(f"Unsupported light type: {type(light).__name__}")
    return lo
