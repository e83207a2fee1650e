"""Seeded random sample source for light and glossy sampling.

A Sampler wraps a NumPy Generator and hands out uniform samples one at a
time. It is not meant to be shared between threads: an image driver that
renders several regions gives each region its own sampler obtained from
``spawn``, which derives independent, reproducible streams from the parent
seed.

Example:
    >>> from whitted.core.sampler import Sampler
    >>> sampler = Sampler(seed=7)
    >>> u = sampler.next_1d()
    >>> row_samplers = sampler.spawn(4)
"""

from __future__ import annotations

import numpy as np


class Sampler:
    """Deterministic source of uniform samples in [0, 1).

    Attributes:
        seed_sequence: The NumPy SeedSequence this sampler was created from.
    """

    def __init__(self, seed: int | np.random.SeedSequence | None = None) -> None:
        """Create a sampler.

        Args:
            seed: Integer seed or SeedSequence. None draws fresh entropy,
                which makes renders non-reproducible.
        """
        if isinstance(seed, np.random.SeedSequence):
            self.seed_sequence = seed
        else:
            self.seed_sequence = np.random.SeedSequence(seed)
        self._rng = np.random.default_rng(self.seed_sequence)

    def next_1d(self) -> float:
        """Draw one sample in [0, 1)."""
        return float(self._rng.random())

    def next_2d(self) -> tuple[float, float]:
        """Draw a sample pair in [0, 1)^2."""
        u, v = self._rng.random(2)
        return float(u), float(v)

    def spawn(self, count: int) -> list[Sampler]:
        """Create independent child samplers, one per execution context.

        The children depend only on this sampler's seed and the order of
        spawn calls, never on how many samples were drawn.
        """
        return [Sampler(child) for child in self.seed_sequence.spawn(count)]

    def __repr__(self) -> str:
        return f"Sampler(entropy={self.seed_sequence.entropy})"
