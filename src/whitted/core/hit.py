"""Hit record passed from scene intersection to shading and lighting."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from whitted.core.ray import Vec3, as_vec3
from whitted.materials.material import Material


@dataclass(frozen=True, eq=False)
class HitInfo:
    """Surface information at a ray-scene intersection.

    The hit point itself is not stored; it is ``ray.origin + ray.direction *
    ray.t`` for the ray that produced the record.

    Attributes:
        normal: Surface normal at the hit point. Not guaranteed to be unit
            length, so consumers normalize it.
        material: The material of the intersected primitive.
        tex_coord: Interpolated texture coordinate (u, v).
    """

    normal: Vec3
    material: Material
    tex_coord: npt.NDArray[np.float64] = field(default_factory=lambda: np.zeros(2))

    def __post_init__(self) -> None:
        object.__setattr__(self, "normal", as_vec3(self.normal))
        object.__setattr__(self, "tex_coord", np.array(self.tex_coord, dtype=np.float64).reshape(2))
