"""Render state shared by every call of the recursive renderer.

RenderState bundles the three things rendering code reads besides the ray
itself: the scene (lights, intersection and environment lookups), the
immutable feature configuration and the random sample source. An optional
debug sink receives the traced rays.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, Sequence

from whitted.core.config import Features
from whitted.core.debug import NullRaySink, RaySink
from whitted.core.ray import Ray, Vec3
from whitted.core.sampler import Sampler

if TYPE_CHECKING:
    from whitted.core.hit import HitInfo
    from whitted.lights.lights import Light


class Scene(Protocol):
    """What the renderer needs from a scene.

    ``intersect`` must write the closest hit distance into ``ray.t`` and
    return its HitInfo, or return None and leave the ray untouched on a miss.
    On entry ``ray.t`` bounds the accepted hit distance.
    """

    @property
    def lights(self) -> Sequence[Light]: ...

    def intersect(self, ray: Ray) -> HitInfo | None: ...

    def sample_environment(self, ray: Ray) -> Vec3: ...


@dataclass
class RenderState:
    """Everything a render call reads besides the ray.

    Attributes:
        scene: The scene being rendered.
        features: Active feature configuration.
        sampler: Sample source for area lights and glossy reflections. Not
            safe to share between threads; see ``with_sampler``.
        ray_sink: Receives debug rays. Defaults to a sink that drops them.
    """

    scene: Scene
    features: Features = field(default_factory=Features)
    sampler: Sampler = field(default_factory=Sampler)
    ray_sink: RaySink = field(default_factory=NullRaySink)

    def with_sampler(self, sampler: Sampler) -> RenderState:
        """Return a state sharing everything but the sampler."""
        return dataclasses.replace(self, sampler=sampler)

    def with_features(self, features: Features) -> RenderState:
        """Return a state sharing everything but the features."""
        return dataclasses.replace(self, features=features)
