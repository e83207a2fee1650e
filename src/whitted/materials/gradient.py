"""Piecewise-linear color ramp sampled by the gradient shading model.

A LinearGradient maps a scalar in [-1, 1] (the cosine between light direction
and surface normal) to a color by interpolating between sorted components.

Example:
    >>> from whitted.materials.gradient import GradientComponent, LinearGradient
    >>> gradient = LinearGradient([
    ...     GradientComponent(-1.0, (0.0, 0.0, 0.0)),
    ...     GradientComponent(1.0, (1.0, 1.0, 1.0)),
    ... ])
    >>> gradient.sample(0.0)
    array([0.5, 0.5, 0.5])
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from whitted.core.ray import Vec3, as_vec3, mix


@dataclass(frozen=True, eq=False)
class GradientComponent:
    """A color stop of a gradient.

    Attributes:
        t: Position of the stop in [-1, 1].
        color: RGB color at the stop.
    """

    t: float
    color: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "t", float(self.t))
        object.__setattr__(self, "color", as_vec3(self.color))


class LinearGradient:
    """An immutable, sorted sequence of color stops.

    Attributes:
        components: The stops sorted by ascending t.
    """

    def __init__(self, components: Iterable[GradientComponent]) -> None:
        """Create a gradient.

        Args:
            components: At least two stops with distinct t values, in any order.

        Raises:
            ValueError: If fewer than two stops are given or two stops share a t.
        """
        stops = tuple(sorted(components, key=lambda c: c.t))
        if len(stops) < 2:
            raise ValueError(f"A linear gradient needs at least 2 components, got {len(stops)}")
        for a, b in zip(stops, stops[1:]):
            if a.t == b.t:
                raise ValueError(f"Gradient components share the same t value {a.t}")
        self._components = stops

    @property
    def components(self) -> tuple[GradientComponent, ...]:
        return self._components

    def sample(self, ti: float) -> Vec3:
        """Sample the gradient at ti.

        Values at or beyond the first/last stop return that stop's color.
        Inside the range the two bracketing stops are interpolated linearly;
        a ti equal to a stop returns exactly that stop's color.
        """
        first = self._components[0]
        last = self._components[-1]
        if ti <= first.t:
            return first.color.copy()
        if ti >= last.t:
            return last.color.copy()

        for a, b in zip(self._components, self._components[1:]):
            if ti == a.t:
                return a.color.copy()
            if a.t < ti < b.t:
                alpha = (ti - a.t) / (b.t - a.t)
                return mix(a.color, b.color, alpha)
            if ti == b.t:
                return b.color.copy()

        # Unreachable for a sorted gradient with ti inside (first.t, last.t)
        raise AssertionError(f"No gradient interval contains {ti}")

    def __len__(self) -> int:
        return len(self._components)

    def __repr__(self) -> str:
        stops = ", ".join(f"{c.t:g}" for c in self._components)
        return f"LinearGradient(t=[{stops}])"


# Default ramp used by the gradient shading model
DEFAULT_GRADIENT = LinearGradient(
    [
        GradientComponent(0.1, (215.0 / 256.0, 210.0 / 256.0, 203.0 / 256.0)),
        GradientComponent(0.22, (250.0 / 256.0, 250.0 / 256.0, 240.0 / 256.0)),
        GradientComponent(0.5, (145.0 / 256.0, 170.0 / 256.0, 175.0 / 256.0)),
        GradientComponent(0.78, (255.0 / 256.0, 250.0 / 256.0, 205.0 / 256.0)),
        GradientComponent(0.9, (170.0 / 256.0, 170.0 / 256.0, 170.0 / 256.0)),
    ]
)
