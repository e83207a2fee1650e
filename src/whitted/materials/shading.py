"""Shading models evaluated for a single light sample.

Every model takes the direction toward the viewer (or the secondary ray
origin), the direction toward the light sample, the light color arriving
along it, and the hit record, and returns the light reflected toward the
viewer. None of the inputs need to be normalized.

Supported models:
    - Lambertian: kd * light * max(0, N.L)
    - Phong: diffuse term kd * N.L * light * N.L plus ks * light * max(0, R.V),
      with no specular exponent
    - Blinn-Phong: kd * light * N.L plus ks * light * max(0, N.H)^shininess
    - Linear gradient: diffuse color looked up from a gradient at cos(theta)

Example:
    >>> from whitted.core.config import Features, ShadingModel
    >>> from whitted.materials.shading import compute_shading
    >>> features = Features(shading_model=ShadingModel.BLINN_PHONG)
    >>> color = compute_shading(features, view_dir, light_dir, light_color, hit_info)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from whitted.core.config import Features, ShadingModel
from whitted.core.ray import Vec3, as_vec3, normalize, reflect
from whitted.materials.gradient import DEFAULT_GRADIENT, LinearGradient
from whitted.materials.material import sample_material_kd

if TYPE_CHECKING:
    from whitted.core.hit import HitInfo


def compute_shading(
    features: Features,
    camera_direction: Vec3,
    light_direction: Vec3,
    light_color: Vec3,
    hit_info: HitInfo,
    gradient: LinearGradient = DEFAULT_GRADIENT,
) -> Vec3:
    """Evaluate the shading model selected by the features.

    When shading is disabled the light color is simply modulated by the
    diffuse color.

    Args:
        features: Active feature configuration.
        camera_direction: Direction from the hit point toward the viewer.
        light_direction: Direction from the hit point toward the light sample.
        light_color: Light arriving from the sample.
        hit_info: The intersection being shaded.
        gradient: Ramp used by the linear gradient model.

    Returns:
        Reflected light toward the viewer (RGB).
    """
    light_color = as_vec3(light_color)
    if features.enable_shading:
        model = features.shading_model
        if model == ShadingModel.LAMBERTIAN:
            return compute_lambertian_model(features, camera_direction, light_direction, light_color, hit_info)
        if model == ShadingModel.PHONG:
            return compute_phong_model(features, camera_direction, light_direction, light_color, hit_info)
        if model == ShadingModel.BLINN_PHONG:
            return compute_blinn_phong_model(features, camera_direction, light_direction, light_color, hit_info)
        if model == ShadingModel.LINEAR_GRADIENT:
            return compute_linear_gradient_model(
                features, camera_direction, light_direction, light_color, hit_info, gradient
            )
        raise ValueError(f"Unknown shading model: {model}")

    return light_color * sample_material_kd(features, hit_info)


def compute_lambertian_model(
    features: Features,
    camera_direction: Vec3,
    light_direction: Vec3,
    light_color: Vec3,
    hit_info: HitInfo,
) -> Vec3:
    """Lambertian diffuse reflection; zero when the light is behind the surface."""
    n = normalize(hit_info.normal)
    l = normalize(as_vec3(light_direction))
    n_dot_l = max(0.0, float(np.dot(n, l)))
    kd = sample_material_kd(features, hit_info)
    return kd * light_color * n_dot_l


def compute_phong_model(
    features: Features,
    camera_direction: Vec3,
    light_direction: Vec3,
    light_color: Vec3,
    hit_info: HitInfo,
) -> Vec3:
    """Phong reflection as used by this renderer.

    The diffuse term carries the cosine factor twice and the specular term
    uses max(0, R.V) without the shininess exponent.
    """
    n = normalize(hit_info.normal)
    l = normalize(as_vec3(light_direction))
    v = normalize(as_vec3(camera_direction))
    r = reflect(-l, n)

    n_dot_l = max(0.0, float(np.dot(n, l)))
    kd = sample_material_kd(features, hit_info) * n_dot_l
    diffuse = kd * light_color * n_dot_l

    r_dot_v = max(0.0, float(np.dot(r, v)))
    specular = hit_info.material.ks * light_color * r_dot_v

    return diffuse + specular


def compute_blinn_phong_model(
    features: Features,
    camera_direction: Vec3,
    light_direction: Vec3,
    light_color: Vec3,
    hit_info: HitInfo,
) -> Vec3:
    """Blinn-Phong reflection using the half vector between light and view."""
    n = normalize(hit_info.normal)
    l = normalize(as_vec3(light_direction))
    v = normalize(as_vec3(camera_direction))
    h = normalize(l + v)

    n_dot_l = max(0.0, float(np.dot(n, l)))
    diffuse = sample_material_kd(features, hit_info) * light_color * n_dot_l

    n_dot_h = float(np.dot(n, h))
    # 0 ** 0 would light up back-facing highlights for shininess 0
    highlight = n_dot_h ** hit_info.material.shininess if n_dot_h > 0.0 else 0.0
    specular = hit_info.material.ks * light_color * highlight

    return diffuse + specular


def compute_linear_gradient_model(
    features: Features,
    camera_direction: Vec3,
    light_direction: Vec3,
    light_color: Vec3,
    hit_info: HitInfo,
    gradient: LinearGradient = DEFAULT_GRADIENT,
) -> Vec3:
    """Diffuse shading whose color is sampled from a gradient at cos(theta)."""
    cos_theta = float(np.dot(normalize(as_vec3(light_direction)), normalize(hit_info.normal)))
    cos_theta = min(1.0, max(-1.0, cos_theta))
    return gradient.sample(cos_theta) * light_color
