"""Preview and export of rendered images.

Components:
    display: Tone mapping (Reinhard, exposure) and gamma encoding
    export: PNG export via Pillow and image comparison

Example:
    >>> from whitted.preview import save_png
    >>> renderer.render(16)
    >>> save_png(renderer, "output.png", tone_map="reinhard", gamma=2.2)
"""

from whitted.preview.display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    tone_map_exposure,
    tone_map_reinhard,
)
from whitted.preview.export import compute_rmse, image_to_uint8, save_png, save_png_from_array

__all__ = [
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image_for_display",
    "ToneMapMethod",
    "save_png",
    "save_png_from_array",
    "image_to_uint8",
    "compute_rmse",
]
