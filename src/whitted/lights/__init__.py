"""Lights, light sampling, shadow-ray visibility and direct lighting.

Components:
    lights: PointLight, SegmentLight, ParallelogramLight and their samplers
    visibility: Binary and transparency-aware shadow tests
    contribution: Per-light and total direct lighting at a hit
"""

from .contribution import (
    compute_contribution_parallelogram_light,
    compute_contribution_point_light,
    compute_contribution_segment_light,
    compute_light_contribution,
)
from .lights import (
    Light,
    ParallelogramLight,
    PointLight,
    SegmentLight,
    sample_parallelogram_light,
    sample_segment_light,
)
from .visibility import (
    SHADOW_RAY_EPSILON,
    visibility_of_light_sample,
    visibility_of_light_sample_binary,
    visibility_of_light_sample_transparency,
)

__all__ = [
    "Light",
    "PointLight",
    "SegmentLight",
    "ParallelogramLight",
    "sample_segment_light",
    "sample_parallelogram_light",
    "SHADOW_RAY_EPSILON",
    "visibility_of_light_sample",
    "visibility_of_light_sample_binary",
    "visibility_of_light_sample_transparency",
    "compute_contribution_point_light",
    "compute_contribution_segment_light",
    "compute_contribution_parallelogram_light",
    "compute_light_contribution",
]
