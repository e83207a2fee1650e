"""Surface material description and diffuse color resolution.

A Material carries everything the Whitted shading models read at a hit point:
diffuse and specular reflectance, the specular exponent, and transparency
(1.0 = fully opaque). The diffuse color can come from a texture.

Example:
    >>> from whitted.materials.material import Material
    >>> glass = Material(kd=(0.9, 0.9, 1.0), ks=(0.1, 0.1, 0.1), shininess=64.0, transparency=0.2)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from whitted.core.ray import Vec3, as_vec3, zeros
from whitted.materials.texture import Texture, sample_texture_bilinear, sample_texture_nearest

if TYPE_CHECKING:
    from whitted.core.config import Features
    from whitted.core.hit import HitInfo


@dataclass(eq=False)
class Material:
    """Whitted-style surface material.

    Attributes:
        kd: Diffuse reflectance (RGB, each component expected in [0, 1]).
        ks: Specular reflectance (RGB). Any non-zero channel makes the
            surface spawn mirror rays when reflections are enabled.
        shininess: Specular exponent used by Blinn-Phong (>= 0).
        transparency: Opacity in [0, 1]; 1.0 is fully opaque, lower values
            let light and passthrough rays through.
        kd_texture: Optional texture that replaces kd when texture mapping
            is enabled.
    """

    kd: Vec3 = field(default_factory=lambda: np.full(3, 0.5))
    ks: Vec3 = field(default_factory=zeros)
    shininess: float = 1.0
    transparency: float = 1.0
    kd_texture: Texture | None = None

    def __post_init__(self) -> None:
        self.kd = as_vec3(self.kd)
        self.ks = as_vec3(self.ks)
        self.shininess = float(self.shininess)
        self.transparency = float(self.transparency)
        if self.shininess < 0.0:
            raise ValueError(f"Shininess must be non-negative, got {self.shininess}")
        if not 0.0 <= self.transparency <= 1.0:
            raise ValueError(f"Transparency must be in [0, 1], got {self.transparency}")

    @property
    def is_reflective(self) -> bool:
        return bool(np.any(self.ks != 0.0))

    @property
    def is_transparent(self) -> bool:
        return self.transparency != 1.0


def sample_material_kd(features: Features, hit_info: HitInfo) -> Vec3:
    """Resolve the diffuse color at a hit point.

    Uses the material texture when texture mapping is enabled and the
    material has one (bilinear or nearest depending on the features),
    otherwise the flat kd.
    """
    material = hit_info.material
    if features.enable_texture_mapping and material.kd_texture is not None:
        if features.enable_bilinear_texture_filtering:
            return sample_texture_bilinear(material.kd_texture, hit_info.tex_coord)
        return sample_texture_nearest(material.kd_texture, hit_info.tex_coord)
    return material.kd
