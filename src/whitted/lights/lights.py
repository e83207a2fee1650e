"""Light primitives and light sampling.

Three kinds of lights are supported: a point light, a segment light whose
color varies linearly between its end points, and a parallelogram light with
one color per corner. Area lights are sampled with uniform random numbers
drawn by the caller, so sampling itself is deterministic.

Corner numbering of a parallelogram light::

    v0 + edge02 (2) ---- v0 + edge01 + edge02 (3)
         |                         |
        v0 (0) ---------- v0 + edge01 (1)

Example:
    >>> from whitted.lights.lights import SegmentLight, sample_segment_light
    >>> light = SegmentLight((0, 1, 0), (1, 1, 0), (1, 0, 0), (0, 0, 1))
    >>> position, color = sample_segment_light(light, 0.5)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from whitted.core.ray import Vec3, as_vec3, mix


@dataclass(frozen=True, eq=False)
class PointLight:
    """A light emitting from a single position."""

    position: Vec3
    color: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", as_vec3(self.position))
        object.__setattr__(self, "color", as_vec3(self.color))


@dataclass(frozen=True, eq=False)
class SegmentLight:
    """A light along a line segment.

    Attributes:
        endpoint0: First end point.
        endpoint1: Second end point.
        color0: Color at endpoint0.
        color1: Color at endpoint1.
    """

    endpoint0: Vec3
    endpoint1: Vec3
    color0: Vec3
    color1: Vec3

    def __post_init__(self) -> None:
        for name in ("endpoint0", "endpoint1", "color0", "color1"):
            object.__setattr__(self, name, as_vec3(getattr(self, name)))


@dataclass(frozen=True, eq=False)
class ParallelogramLight:
    """A light covering the parallelogram spanned by two edges from v0.

    Attributes:
        v0: Corner 0.
        edge01: Edge from corner 0 to corner 1.
        edge02: Edge from corner 0 to corner 2.
        color0: Color at v0.
        color1: Color at v0 + edge01.
        color2: Color at v0 + edge02.
        color3: Color at v0 + edge01 + edge02.
    """

    v0: Vec3
    edge01: Vec3
    edge02: Vec3
    color0: Vec3
    color1: Vec3
    color2: Vec3
    color3: Vec3

    def __post_init__(self) -> None:
        for name in ("v0", "edge01", "edge02", "color0", "color1", "color2", "color3"):
            object.__setattr__(self, name, as_vec3(getattr(self, name)))


# Closed set of light kinds; dispatch code handles each of them explicitly
Light = Union[PointLight, SegmentLight, ParallelogramLight]

LIGHT_TYPES = (PointLight, SegmentLight, ParallelogramLight)


def sample_segment_light(light: SegmentLight, sample: float) -> tuple[Vec3, Vec3]:
    """Position and color on a segment light at parameter sample in [0, 1).

    Returns:
        Tuple (position, color), both interpolated from endpoint0/color0 at 0
        toward endpoint1/color1 at 1.
    """
    position = mix(light.endpoint0, light.endpoint1, sample)
    color = mix(light.color0, light.color1, sample)
    return position, color


def sample_parallelogram_light(
    light: ParallelogramLight, sample: tuple[float, float]
) -> tuple[Vec3, Vec3]:
    """Position and color on a parallelogram light at a 2D sample in [0, 1)^2.

    The color is the bilinear blend of the corner colors, with corner 0
    weighted (1-sx)(1-sy), corner 1 sx(1-sy), corner 2 (1-sx)sy and
    corner 3 sx*sy.

    Returns:
        Tuple (position, color).
    """
    sx, sy = sample
    position = light.v0 + light.edge01 * sx + light.edge02 * sy
    color = (
        light.color0 * ((1.0 - sx) * (1.0 - sy))
        + light.color1 * (sx * (1.0 - sy))
        + light.color2 * ((1.0 - sx) * sy)
        + light.color3 * (sx * sy)
    )
    return position, color
