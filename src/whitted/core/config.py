"""Render feature configuration.

The renderer reads every switch it needs from a single immutable Features
value carried by the render state. Nothing in the rendering code consults
process-wide settings, so two renders with different features can run side by
side.

Features can be written to and read from JSON files:

Example:
    >>> from whitted.core.config import Features, ShadingModel
    >>> features = Features(shading_model=ShadingModel.BLINN_PHONG, enable_reflections=True)
    >>> features.replace(num_shadow_samples=4).num_shadow_samples
    4
    >>> Features.from_dict({"shading_model": "phong"}).shading_model
    <ShadingModel.PHONG: 1>
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Recursion stops once a ray reaches this depth
DEFAULT_MAX_RAY_DEPTH = 6


class ShadingModel(IntEnum):
    """Reflectance model used to shade a light sample at a hit point."""

    LAMBERTIAN = 0
    PHONG = 1
    BLINN_PHONG = 2
    LINEAR_GRADIENT = 3

    @classmethod
    def parse(cls, value: ShadingModel | int | str) -> ShadingModel:
        """Convert an enum member, integer value or name to a ShadingModel.

        Names are case-insensitive and may use dashes or underscores
        ("blinn-phong", "BLINN_PHONG").

        Raises:
            ValueError: If the value does not name a shading model.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_")
            if key not in cls.__members__:
                raise ValueError(f"Unknown shading model: {value}")
            return cls[key]
        try:
            return cls(int(value))
        except ValueError:
            raise ValueError(f"Unknown shading model: {value}") from None


@dataclass(frozen=True)
class Features:
    """Switches and sample counts selecting how rays are rendered.

    Attributes:
        enable_shading: Evaluate the shading model. When off, a light sample
            contributes ``light_color * kd``.
        shading_model: The reflectance model used when shading is enabled.
        enable_texture_mapping: Resolve kd from the material texture if any.
        enable_bilinear_texture_filtering: Filter textures bilinearly instead
            of nearest-neighbour lookups.
        enable_shadows: Cast shadow rays toward light samples.
        enable_transparency: Attenuate shadows by transparency and trace
            passthrough rays through transparent surfaces.
        enable_reflections: Trace mirror rays off reflective surfaces.
        enable_glossy_reflection: Replace mirror rays by a set of rays
            perturbed around the mirror direction.
        enable_environment_map: Escaped rays sample the scene environment
            instead of returning black.
        num_shadow_samples: Samples taken per segment/parallelogram light.
        num_glossy_samples: Rays traced per glossy reflection.
        max_ray_depth: Recursion depth at which no secondary rays are spawned.
    """

    enable_shading: bool = True
    shading_model: ShadingModel = ShadingModel.LAMBERTIAN
    enable_texture_mapping: bool = False
    enable_bilinear_texture_filtering: bool = False
    enable_shadows: bool = True
    enable_transparency: bool = False
    enable_reflections: bool = False
    enable_glossy_reflection: bool = False
    enable_environment_map: bool = False
    num_shadow_samples: int = 16
    num_glossy_samples: int = 8
    max_ray_depth: int = DEFAULT_MAX_RAY_DEPTH

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "shading_model", ShadingModel.parse(self.shading_model))
        for name in ("num_shadow_samples", "num_glossy_samples", "max_ray_depth"):
            value = getattr(self, name)
            if isinstance(value, bool) or int(value) != value:
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
            object.__setattr__(self, name, int(value))

    def replace(self, **changes: Any) -> Features:
        """Return a copy of the features with some fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Export the features to a dictionary (for JSON serialization)."""
        data = dataclasses.asdict(self)
        data["shading_model"] = self.shading_model.name.lower()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Features:
        """Create features from a dictionary; missing keys keep defaults.

        Raises:
            ValueError: If the dictionary contains unknown keys or invalid values.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown feature option(s): {', '.join(unknown)}")
        return cls(**data)


def load_features(filepath: str | Path) -> Features:
    """Load features from a JSON file.

    Args:
        filepath: Path to a JSON object whose keys are Features field names.

    Returns:
        The loaded Features.

    Raises:
        ValueError: If the file does not hold a JSON object or has invalid options.
    """
    path = Path(filepath)
    data = json.loads(path.read_text())
    if not isinstance(data, dict):
        raise ValueError(f"Feature file {path} must contain a JSON object")
    features = Features.from_dict(data)
    logger.debug(f"Loaded features from {path}: {features}")
    return features


def save_features(features: Features, filepath: str | Path) -> None:
    """Write features to a JSON file."""
    Path(filepath).write_text(json.dumps(features.to_dict(), indent=2))
