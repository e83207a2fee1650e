"""Image textures with nearest and bilinear lookups.

A texture is an (H, W, 3) float image. Texture coordinates repeat outside
[0, 1) and v grows upward, so v = 0 addresses the bottom row of the image.

Example:
    >>> from whitted.materials.texture import load_texture, sample_texture_bilinear
    >>> texture = load_texture("assets/checker.png")
    >>> color = sample_texture_bilinear(texture, (0.25, 0.75))
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from whitted.core.ray import Vec3

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Texture:
    """An RGB image used as a material diffuse color.

    Attributes:
        pixels: Float image of shape (height, width, 3), row 0 at the top.
        name: Optional label (the file path for loaded textures).
    """

    pixels: npt.NDArray[np.float64]
    name: str = ""

    def __post_init__(self) -> None:
        pixels = np.asarray(self.pixels, dtype=np.float64)
        if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError(f"Texture pixels must have shape (H, W, 3), got {pixels.shape}")
        self.pixels = pixels

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


def load_texture(filepath: str | Path) -> Texture:
    """Load an image file as a texture with values in [0, 1].

    Args:
        filepath: Path to any image format Pillow can read.

    Returns:
        The loaded texture.
    """
    with PILImage.open(filepath) as img:
        if img.mode != "RGB":
            img = img.convert("RGB")
        pixels = np.asarray(img, dtype=np.float64) / 255.0
    logger.debug(f"Loaded texture {filepath} ({pixels.shape[1]}x{pixels.shape[0]})")
    return Texture(pixels=pixels, name=str(filepath))


def _texel(texture: Texture, x: int, y: int) -> Vec3:
    """Fetch a texel with repeat wrapping; y counts rows from the bottom."""
    col = x % texture.width
    row = texture.height - 1 - (y % texture.height)
    return texture.pixels[row, col].copy()


def sample_texture_nearest(texture: Texture, tex_coord: Sequence[float]) -> Vec3:
    """Return the texel containing the texture coordinate."""
    u = tex_coord[0] - math.floor(tex_coord[0])
    v = tex_coord[1] - math.floor(tex_coord[1])
    x = min(int(u * texture.width), texture.width - 1)
    y = min(int(v * texture.height), texture.height - 1)
    return _texel(texture, x, y)


def sample_texture_bilinear(texture: Texture, tex_coord: Sequence[float]) -> Vec3:
    """Bilinearly interpolate the four texel centers around the coordinate."""
    # Texel centers sit at half-integer positions
    x = tex_coord[0] * texture.width - 0.5
    y = tex_coord[1] * texture.height - 0.5
    x0 = math.floor(x)
    y0 = math.floor(y)
    fx = x - x0
    fy = y - y0

    c00 = _texel(texture, x0, y0)
    c10 = _texel(texture, x0 + 1, y0)
    c01 = _texel(texture, x0, y0 + 1)
    c11 = _texel(texture, x0 + 1, y0 + 1)

    bottom = c00 * (1.0 - fx) + c10 * fx
    top = c01 * (1.0 - fx) + c11 * fx
    return bottom * (1.0 - fy) + top * fy
