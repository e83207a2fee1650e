"""Debug ray sinks.

Rendering code reports the rays it traces (camera rays, shadow rays, mirror
and passthrough rays) to a sink together with a color code. The default sink
discards them; RecordingRaySink keeps them for inspection or for drawing on
top of a render. Sinks only ever receive copies, so they cannot change what
is rendered.

Color codes used by the renderer:
    - white: ray that hit the scene
    - red: ray that escaped the scene, or a surface normal
    - green: unoccluded shadow ray
    - blue: occluded shadow ray, mirror or passthrough ray
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Protocol

from whitted.core.ray import Ray, Vec3, as_vec3, ray_at


class RaySink(Protocol):
    """Anything that accepts debug rays."""

    def draw_ray(self, ray: Ray, color: Vec3) -> None: ...


class NullRaySink:
    """Sink that ignores every ray."""

    def draw_ray(self, ray: Ray, color: Vec3) -> None:
        return None


@dataclass
class DebugRay:
    """A recorded debug segment.

    Attributes:
        origin: Start of the segment.
        end: End of the segment (the hit point, or one unit along an
            unbounded ray).
        color: The color code the ray was drawn with.
    """

    origin: Vec3
    end: Vec3
    color: Vec3


@dataclass
class RecordingRaySink:
    """Sink that records every ray it is given."""

    rays: list[DebugRay] = field(default_factory=list)

    def draw_ray(self, ray: Ray, color: Vec3) -> None:
        t = ray.t if math.isfinite(ray.t) else 1.0
        self.rays.append(
            DebugRay(origin=ray.origin.copy(), end=ray_at(ray, t), color=as_vec3(color))
        )

    def clear(self) -> None:
        self.rays.clear()

    def __len__(self) -> int:
        return len(self.rays)
