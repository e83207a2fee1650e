"""Environment lighting for rays that escape the scene."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from whitted.core.ray import Ray, Vec3, as_vec3, mix, normalize


class Environment(Protocol):
    """Radiance arriving from infinitely far away in a ray's direction."""

    def sample(self, ray: Ray) -> Vec3: ...

    def to_dict(self) -> dict[str, Any]: ...


@dataclass(eq=False)
class ConstantEnvironment:
    """The same color in every direction."""

    color: Vec3

    def __post_init__(self) -> None:
        self.color = as_vec3(self.color)

    def sample(self, ray: Ray) -> Vec3:
        return self.color.copy()

    def to_dict(self) -> dict[str, Any]:
        return {"type": "constant", "color": self.color.tolist()}


@dataclass(eq=False)
class GradientEnvironment:
    """Vertical sky gradient.

    Blends from the horizon color (direction pointing down or level) to the
    zenith color (pointing straight up) by ``max(0, y)`` of the normalized
    ray direction.
    """

    horizon: Vec3
    zenith: Vec3

    def __post_init__(self) -> None:
        self.horizon = as_vec3(self.horizon)
        self.zenith = as_vec3(self.zenith)

    def sample(self, ray: Ray) -> Vec3:
        y = float(normalize(ray.direction)[1])
        return mix(self.horizon, self.zenith, max(0.0, y))

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "gradient",
            "horizon": self.horizon.tolist(),
            "zenith": self.zenith.tolist(),
        }


def environment_from_dict(data: dict[str, Any]) -> Environment:
    """Rebuild an environment exported with ``to_dict``.

    Raises:
        ValueError: If the environment type is unknown.
    """
    env_type = str(data.get("type", "")).lower()
    if env_type == "constant":
        return ConstantEnvironment(color=data.get("color", [0.0, 0.0, 0.0]))
    if env_type == "gradient":
        return GradientEnvironment(
            horizon=data.get("horizon", [1.0, 1.0, 1.0]),
            zenith=data.get("zenith", [0.5, 0.7, 1.0]),
        )
    raise ValueError(f"Unknown environment type: {env_type}")
