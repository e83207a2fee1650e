"""Display transforms for rendered images.

Radiance from the renderer is unbounded: mirror and transparent surfaces
and the point-light transparency blend can push values above 1. These
helpers compress it into [0, 1] and apply gamma encoding.

Example:
    >>> from whitted.preview.display import process_image_for_display
    >>> ldr = process_image_for_display(renderer.get_image_linear(), tone_map="reinhard")
"""

from __future__ import annotations

from typing import Literal

import numpy as np
import numpy.typing as npt

ToneMapMethod = Literal["none", "reinhard", "exposure"]


def tone_map_reinhard(image: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
    """Reinhard operator c / (1 + c), negative values clamped to 0."""
    image = np.maximum(image, 0.0)
    return (image / (1.0 + image)).astype(np.float32)


def tone_map_exposure(image: npt.NDArray[np.float32], exposure: float = 1.0) -> npt.NDArray[np.float32]:
    """Exposure operator 1 - exp(-c * exposure)."""
    image = np.maximum(image, 0.0)
    return (1.0 - np.exp(-image * exposure)).astype(np.float32)


def apply_gamma(image: npt.NDArray[np.float32], gamma: float = 2.2) -> npt.NDArray[np.float32]:
    """Clamp to [0, 1] and encode with out = in^(1/gamma)."""
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")
    image = np.clip(image, 0.0, 1.0)
    if gamma == 1.0:
        return image.astype(np.float32)
    return np.power(image, 1.0 / gamma).astype(np.float32)


def process_image_for_display(
    image: npt.NDArray[np.float32],
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Tone map, gamma encode and clamp a linear image.

    Args:
        image: Linear image of shape (H, W, 3).
        tone_map: "none", "reinhard" or "exposure".
        gamma: Gamma value (2.2 for sRGB).
        exposure: Exposure used by the "exposure" operator.

    Returns:
        Display-ready float32 image in [0, 1].

    Raises:
        ValueError: If tone_map is not a known operator.
    """
    if tone_map == "reinhard":
        result = tone_map_reinhard(image)
    elif tone_map == "exposure":
        result = tone_map_exposure(image, exposure)
    elif tone_map == "none":
        result = np.asarray(image, dtype=np.float32)
    else:
        raise ValueError(f"Unknown tone mapping method: {tone_map}")
    return apply_gamma(result, gamma)
