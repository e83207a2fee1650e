"""Materials, textures and shading models."""

from .gradient import DEFAULT_GRADIENT, GradientComponent, LinearGradient
from .material import Material, sample_material_kd
from .shading import (
    compute_blinn_phong_model,
    compute_lambertian_model,
    compute_linear_gradient_model,
    compute_phong_model,
    compute_shading,
)
from .texture import Texture, load_texture, sample_texture_bilinear, sample_texture_nearest

__all__ = [
    "Material",
    "sample_material_kd",
    "Texture",
    "load_texture",
    "sample_texture_nearest",
    "sample_texture_bilinear",
    "GradientComponent",
    "LinearGradient",
    "DEFAULT_GRADIENT",
    "compute_shading",
    "compute_lambertian_model",
    "compute_phong_model",
    "compute_blinn_phong_model",
    "compute_linear_gradient_model",
]
