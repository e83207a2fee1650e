"""Tests for environment lighting.

whitted.scene allocates Taichi fields on import, so the environment module
is imported inside the tests.
"""

import numpy as np
import pytest

from whitted.core.ray import Ray


def _ray(direction):
    return Ray(origin=(0.0, 0.0, 0.0), direction=direction)


class TestConstantEnvironment:
    def test_same_color_everywhere(self):
        from whitted.scene.environment import ConstantEnvironment

        env = ConstantEnvironment(color=(0.2, 0.3, 0.4))
        for direction in [(1, 0, 0), (0, -1, 0), (0, 0, 5)]:
            np.testing.assert_allclose(env.sample(_ray(direction)), [0.2, 0.3, 0.4])


class TestGradientEnvironment:
    @pytest.fixture
    def sky(self):
        from whitted.scene.environment import GradientEnvironment

        return GradientEnvironment(horizon=(1.0, 1.0, 1.0), zenith=(0.0, 0.0, 1.0))

    def test_zenith(self, sky):
        np.testing.assert_allclose(sky.sample(_ray((0, 3, 0))), [0.0, 0.0, 1.0])

    def test_horizon_and_below(self, sky):
        np.testing.assert_allclose(sky.sample(_ray((1, 0, 0))), [1.0, 1.0, 1.0])
        np.testing.assert_allclose(sky.sample(_ray((0, -1, 0))), [1.0, 1.0, 1.0])

    def test_halfway(self, sky):
        direction = (np.sqrt(0.75), 0.5, 0.0)
        np.testing.assert_allclose(sky.sample(_ray(direction)), [0.5, 0.5, 1.0])


class TestEnvironmentFromDict:
    @pytest.mark.parametrize("kind", ["constant", "gradient"])
    def test_round_trip(self, kind):
        from whitted.scene.environment import ConstantEnvironment, GradientEnvironment, environment_from_dict

        if kind == "constant":
            env = ConstantEnvironment(color=(0.1, 0.2, 0.3))
        else:
            env = GradientEnvironment(horizon=(1.0, 0.9, 0.8), zenith=(0.2, 0.4, 0.9))
        restored = environment_from_dict(env.to_dict())
        assert type(restored) is type(env)
        direction = _ray((0.3, 0.5, 0.1))
        np.testing.assert_allclose(restored.sample(direction), env.sample(direction))

    def test_unknown_type(self):
        from whitted.scene.environment import environment_from_dict

        with pytest.raises(ValueError):
            environment_from_dict({"type": "hdri"})
