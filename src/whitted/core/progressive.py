"""Progressive image driver for the recursive renderer.

The ProgressiveRenderer traces one jittered camera ray per pixel per sample
pass and keeps the running average of all passes in a NumPy buffer. Every
image row owns a Sampler spawned from the render state's sampler, so the
image only depends on the seed, not on the order rows are processed in.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.core.progressive import ProgressiveRenderer
    >>> from whitted.core.state import RenderState
    >>> from whitted.scene.cornell_box import create_cornell_box_scene
    >>>
    >>> scene, camera = create_cornell_box_scene()
    >>> renderer = ProgressiveRenderer(RenderState(scene=scene), camera, 64, 64)
    >>> renderer.render(4)
    >>> image = renderer.get_image_numpy()
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from whitted.camera.pinhole import PinholeCamera
from whitted.core.integrator import render_ray
from whitted.core.state import RenderState

logger = logging.getLogger(__name__)

# Callback receives (current_samples, total_target_samples)
ProgressCallback = Callable[[int, int], None]


class ProgressiveRenderer:
    """Accumulates per-pixel samples of ``render_ray`` over several passes.

    Attributes:
        state: Render state shared by all rows except for the sampler.
        camera: Camera generating the primary rays.
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, state: RenderState, camera: PinholeCamera, width: int, height: int) -> None:
        """Initialize the renderer.

        Raises:
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self.state = state
        self.camera = camera
        self._width = width
        self._height = height
        # Row 0 is the bottom row of the image
        self._image = np.zeros((height, width, 3), dtype=np.float64)
        self._sample_count = 0
        self._row_samplers = state.sampler.spawn(height)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def sample_count(self) -> int:
        """Number of samples accumulated per pixel."""
        return self._sample_count

    def reset(self) -> None:
        """Discard accumulated samples and start new row sample streams."""
        self._image.fill(0.0)
        self._sample_count = 0
        self._row_samplers = self.state.sampler.spawn(self._height)

    def _render_pass(self) -> None:
        """Trace one jittered sample through every pixel and update the average."""
        start = time.perf_counter()
        n = self._sample_count + 1
        for j in range(self._height):
            sampler = self._row_samplers[j]
            row_state = self.state.with_sampler(sampler)
            for i in range(self._width):
                ray = self.camera.get_ray_jittered(i, j, self._width, self._height, sampler)
                color = render_ray(row_state, ray)
                self._image[j, i] += (color - self._image[j, i]) / n
        self._sample_count = n
        logger.info(
            f"Sample pass {n} ({self._width}x{self._height}) took {time.perf_counter() - start:.2f}s"
        )

    def render(
        self,
        num_samples: int = 1,
        batch_size: int = 1,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Accumulate num_samples more samples per pixel.

        Args:
            num_samples: Number of sample passes to add.
            batch_size: Passes rendered between two callback calls.
            callback: Optional callable receiving (current_samples, target_samples).
        """
        for current, target in self.render_progressive(num_samples, batch_size):
            if callback is not None:
                callback(current, target)

    def render_progressive(
        self,
        num_samples: int = 1,
        batch_size: int = 1,
    ) -> Generator[tuple[int, int], None, None]:
        """Accumulate samples, yielding (current_samples, target_samples) after each batch.

        Example:
            >>> for current, target in renderer.render_progressive(16, batch_size=4):
            ...     print(f"Progress: {current}/{target} samples")
        """
        if num_samples <= 0:
            return
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        target = self._sample_count + num_samples
        remaining = num_samples
        while remaining > 0:
            batch = min(batch_size, remaining)
            for _ in range(batch):
                self._render_pass()
            remaining -= batch
            yield (self._sample_count, target)

    def get_image_linear(self) -> npt.NDArray[np.float32]:
        """Averaged radiance, unclamped, shape (height, width, 3), top row first."""
        return np.flipud(self._image).astype(np.float32)

    def get_image_numpy(self, gamma: float = 1.0) -> npt.NDArray[np.float32]:
        """Averaged image clamped to [0, 1] and optionally gamma encoded.

        Args:
            gamma: Gamma value. Default 1.0 (linear); use 2.2 for sRGB display.

        Returns:
            Array of shape (height, width, 3), top row first.
        """
        image = np.clip(self.get_image_linear(), 0.0, 1.0)
        if gamma != 1.0:
            image = np.power(image, 1.0 / gamma)
        return image.astype(np.float32)

    def get_image_uint8(self, gamma: float = 2.2) -> npt.NDArray[np.uint8]:
        """8-bit version of ``get_image_numpy``."""
        return (self.get_image_numpy(gamma=gamma) * 255).astype(np.uint8)

    def save_image(self, filepath: str | Path, gamma: float = 2.2) -> None:
        """Save the image with gamma encoding (format chosen by extension)."""
        PILImage.fromarray(self.get_image_uint8(gamma=gamma), mode="RGB").save(filepath)
        logger.info(f"Saved {self._width}x{self._height} image to {filepath}")

    def __repr__(self) -> str:
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"samples={self.sample_count})"
        )
