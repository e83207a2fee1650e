"""Pinhole camera model for perspective projection ray generation.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Rays are generated in Python scope as ``whitted.core.ray.Ray`` values with
normalized directions.

Example:
    >>> from whitted.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> ray = camera.get_ray(0.5, 0.5)  # Ray through image center
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from whitted.core.ray import Ray, Vec3, normalize
from whitted.core.sampler import Sampler


@dataclass
class PinholeCamera:
    """A pinhole (perspective) camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float

    origin: Vec3 = field(init=False, repr=False)
    u: Vec3 = field(init=False, repr=False)
    v: Vec3 = field(init=False, repr=False)
    w: Vec3 = field(init=False, repr=False)
    horizontal: Vec3 = field(init=False, repr=False)
    vertical: Vec3 = field(init=False, repr=False)
    lower_left: Vec3 = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")

        h = math.tan(math.radians(self.vfov) / 2.0)
        viewport_height = 2.0 * h
        viewport_width = self.aspect_ratio * viewport_height

        lookfrom = np.array(self.lookfrom, dtype=np.float64)
        lookat = np.array(self.lookat, dtype=np.float64)
        vup = np.array(self.vup, dtype=np.float64)

        w = lookfrom - lookat
        if np.linalg.norm(w) == 0.0:
            raise ValueError("lookfrom and lookat must differ")
        w = w / np.linalg.norm(w)
        u = np.cross(vup, w)
        if np.linalg.norm(u) == 0.0:
            raise ValueError("vup must not be parallel to the view direction")
        u = u / np.linalg.norm(u)
        v = np.cross(w, u)

        self.origin = lookfrom
        self.u = u
        self.v = v
        self.w = w
        self.horizontal = viewport_width * u
        self.vertical = viewport_height * v
        # Viewport sits one unit in front of the camera
        self.lower_left = lookfrom - w - self.horizontal / 2.0 - self.vertical / 2.0

    def get_ray(self, s: float, t: float) -> Ray:
        """Ray through normalized image coordinates.

        Args:
            s: Horizontal coordinate in [0, 1] (left to right).
            t: Vertical coordinate in [0, 1] (bottom to top).
        """
        point = self.lower_left + s * self.horizontal + t * self.vertical
        return Ray(origin=self.origin.copy(), direction=normalize(point - self.origin))

    def get_ray_jittered(self, pixel_i: int, pixel_j: int, width: int, height: int, sampler: Sampler) -> Ray:
        """Ray through a uniformly jittered position inside pixel (i, j).

        Pixel (0, 0) is the bottom-left pixel.
        """
        jitter_u, jitter_v = sampler.next_2d()
        return self.get_ray((pixel_i + jitter_u) / width, (pixel_j + jitter_v) / height)

    def info(self) -> dict[str, tuple[float, float, float]]:
        """Camera vectors for debugging."""
        return {
            name: tuple(float(x) for x in getattr(self, name))
            for name in ("origin", "u", "v", "w", "horizontal", "vertical", "lower_left")
        }
