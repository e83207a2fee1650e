"""Ray data structure and vector utilities for recursive ray tracing.

This module provides the fundamental Ray dataclass and the small set of vector
helpers used by the shading, lighting and recursive rendering code. Vectors and
colors are plain NumPy float64 arrays of shape (3,), so every routine runs in
Python scope and can call back into scene collaborators.

Example:
    >>> from whitted.core.ray import Ray, vec3, hit_point
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    >>> ray.t = 5.0  # Set by scene intersection
    >>> hit_point(ray)  # Point 5 units along the ray
    array([ 0.,  0., -5.])
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors and RGB colors
Vec3 = npt.NDArray[np.float64]

# Components smaller than this are treated as zero
NEAR_ZERO_EPSILON = 1e-8


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector (or RGB color)."""
    return np.array([x, y, z], dtype=np.float64)


def as_vec3(value: Sequence[float] | Vec3) -> Vec3:
    """Convert a sequence of three numbers to a float64 vector.

    Args:
        value: Any sequence or array holding three numbers.

    Returns:
        A new float64 array of shape (3,).

    Raises:
        ValueError: If the value does not hold exactly three components.
    """
    array = np.array(value, dtype=np.float64).reshape(-1)
    if array.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {array.shape}")
    return array


def zeros() -> Vec3:
    """Return the zero vector (black)."""
    return np.zeros(3, dtype=np.float64)


@dataclass
class Ray:
    """A ray with an origin point, a direction and a hit distance.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be
            normalized; ``t`` is measured in units of this vector.
        t: Distance along the ray to the closest accepted hit. Starts
            unbounded and is written by scene intersection. On entry to an
            intersection query it is the largest accepted hit distance.
    """

    origin: Vec3
    direction: Vec3
    t: float = math.inf

    def __post_init__(self) -> None:
        self.origin = as_vec3(self.origin)
        self.direction = as_vec3(self.direction)
        self.t = float(self.t)

    def copy(self) -> Ray:
        """Return an independent copy of the ray."""
        return Ray(origin=self.origin.copy(), direction=self.direction.copy(), t=self.t)


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + ray.direction * t


def hit_point(ray: Ray) -> Vec3:
    """Point where the ray hit the scene, ``origin + direction * t``."""
    return ray.origin + ray.direction * ray.t


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(np.dot(a, b))


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return float(np.linalg.norm(v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
        If v is zero-length, returns a zero vector.
    """
    norm = np.linalg.norm(v)
    if norm == 0.0:
        return zeros()
    return v / norm


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product of two vectors."""
    return np.cross(a, b)


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    The normal should be unit length for correct results.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The reflected direction vector.
    """
    return incident - 2.0 * np.dot(incident, normal) * normal


def mix(a: Vec3, b: Vec3, alpha: float) -> Vec3:
    """Linearly interpolate from a (alpha = 0) to b (alpha = 1)."""
    return a * (1.0 - alpha) + b * alpha


def near_zero(v: Vec3) -> bool:
    """Check if a vector is near zero in all components.

    Used to detect degenerate secondary ray directions.
    """
    return bool(np.all(np.abs(v) < NEAR_ZERO_EPSILON))


def build_onb_from_normal(normal: Vec3) -> tuple[Vec3, Vec3, Vec3]:
    """Build an orthonormal basis from a normal vector.

    Creates a local coordinate frame where the normal is the z-axis.

    Args:
        normal: The axis of the frame (should be normalized).

    Returns:
        A tuple (tangent, bitangent, normal) forming an orthonormal basis.
    """
    # Choose a vector not parallel to normal
    a = vec3(1.0, 0.0, 0.0)
    if abs(normal[0]) > 0.9:
        a = vec3(0.0, 1.0, 0.0)
    tangent = normalize(cross(a, normal))
    bitangent = cross(normal, tangent)
    return tangent, bitangent, normal


def sample_disk(sample: tuple[float, float], radius: float) -> tuple[float, float]:
    """Map a uniform 2D sample to a point uniformly distributed in a disk.

    Args:
        sample: Uniform sample in [0, 1)^2.
        radius: Disk radius.

    Returns:
        The (x, y) offset inside the disk centered at the origin.
    """
    r = radius * math.sqrt(sample[0])
    phi = 2.0 * math.pi * sample[1]
    return r * math.cos(phi), r * math.sin(phi)
