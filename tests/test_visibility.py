"""Tests for shadow-ray visibility."""

import numpy as np
import pytest
from fakes import FakeScene, FakeSphere

from whitted.core.config import Features
from whitted.core.debug import RecordingRaySink
from whitted.core.hit import HitInfo
from whitted.core.ray import Ray
from whitted.core.state import RenderState
from whitted.lights.visibility import (
    OCCLUDED_COLOR,
    UNOCCLUDED_COLOR,
    visibility_of_light_sample,
    visibility_of_light_sample_binary,
    visibility_of_light_sample_transparency,
)
from whitted.materials.material import Material

LIGHT_POSITION = np.array([0.0, 0.0, 2.0])
LIGHT_COLOR = np.array([1.0, 1.0, 1.0])


def _occluder():
    return FakeSphere(center=(0.0, 0.0, 1.0), radius=0.25, material=Material())


def _transparent_hit():
    ray = Ray(origin=(0.0, 0.0, 1.0), direction=(0.0, 0.0, -1.0), t=1.0)
    hit_info = HitInfo(normal=(0.0, 0.0, 1.0), material=Material(kd=(0.5, 0.5, 0.5), transparency=0.4))
    return ray, hit_info


class TestBinaryVisibility:
    """Tests for the binary shadow test."""

    def test_unoccluded(self, floor_hit):
        ray, hit_info = floor_hit
        state = RenderState(scene=FakeScene())
        assert visibility_of_light_sample_binary(state, LIGHT_POSITION, LIGHT_COLOR, ray, hit_info)

    def test_occluded(self, floor_hit):
        ray, hit_info = floor_hit
        state = RenderState(scene=FakeScene(primitives=[_occluder()]))
        assert not visibility_of_light_sample_binary(state, LIGHT_POSITION, LIGHT_COLOR, ray, hit_info)

    def test_occluder_behind_light_is_ignored(self, floor_hit):
        ray, hit_info = floor_hit
        behind = FakeSphere(center=(0.0, 0.0, 3.0), radius=0.25, material=Material())
        state = RenderState(scene=FakeScene(primitives=[behind]))
        assert visibility_of_light_sample_binary(state, LIGHT_POSITION, LIGHT_COLOR, ray, hit_info)

    def test_light_below_surface_uses_flipped_normal(self, floor_hit):
        ray, hit_info = floor_hit
        below = FakeSphere(center=(0.0, 0.0, -1.0), radius=0.25, material=Material())
        state = RenderState(scene=FakeScene(primitives=[below]))
        assert not visibility_of_light_sample_binary(state, (0.0, 0.0, -2.0), LIGHT_COLOR, ray, hit_info)

    def test_light_at_hit_point_is_visible_without_tracing(self, floor_hit):
        ray, hit_info = floor_hit
        scene = FakeScene(primitives=[_occluder()])
        state = RenderState(scene=scene)
        assert visibility_of_light_sample_binary(state, (0.0, 0.0, 0.0), LIGHT_COLOR, ray, hit_info)
        assert scene.intersect_calls == 0

    def test_shadow_rays_are_drawn(self, floor_hit):
        ray, hit_info = floor_hit
        sink = RecordingRaySink()
        state = RenderState(scene=FakeScene(primitives=[_occluder()]), ray_sink=sink)
        visibility_of_light_sample_binary(state, LIGHT_POSITION, LIGHT_COLOR, ray, hit_info)
        visibility_of_light_sample_binary(state, (5.0, 0.0, 1.0), LIGHT_COLOR, ray, hit_info)
        assert len(sink) == 2
        np.testing.assert_allclose(sink.rays[0].color, OCCLUDED_COLOR)
        np.testing.assert_allclose(sink.rays[1].color, UNOCCLUDED_COLOR)


class TestTransparencyVisibility:
    """Tests for transparency-attenuated visibility."""

    def test_unoccluded_returns_light_color(self):
        ray, hit_info = _transparent_hit()
        state = RenderState(scene=FakeScene())
        color = visibility_of_light_sample_transparency(state, LIGHT_POSITION, LIGHT_COLOR, ray, hit_info)
        np.testing.assert_allclose(color, LIGHT_COLOR)

    def test_occluded_is_attenuated_by_receiver(self):
        ray, hit_info = _transparent_hit()
        state = RenderState(scene=FakeScene(primitives=[_occluder()]))
        color = visibility_of_light_sample_transparency(state, LIGHT_POSITION, LIGHT_COLOR, ray, hit_info)
        np.testing.assert_allclose(color, [0.3, 0.3, 0.3])

    def test_occluded_opaque_receiver_is_black(self, floor_hit):
        ray, hit_info = floor_hit
        state = RenderState(scene=FakeScene(primitives=[_occluder()]))
        color = visibility_of_light_sample_transparency(state, LIGHT_POSITION, LIGHT_COLOR, ray, hit_info)
        np.testing.assert_allclose(color, [0.0, 0.0, 0.0])


class TestVisibilityDispatch:
    """Tests for feature-driven visibility."""

    def test_shadows_disabled_traces_nothing(self):
        ray, hit_info = _transparent_hit()
        scene = FakeScene(primitives=[_occluder()])
        state = RenderState(scene=scene, features=Features(enable_shadows=False))
        color = visibility_of_light_sample(state, LIGHT_POSITION, (0.2, 0.4, 0.6), ray, hit_info)
        np.testing.assert_allclose(color, [0.2, 0.4, 0.6])
        assert scene.intersect_calls == 0

    def test_binary_policy_without_transparency(self):
        ray, hit_info = _transparent_hit()
        state = RenderState(scene=FakeScene(primitives=[_occluder()]), features=Features(enable_transparency=False))
        color = visibility_of_light_sample(state, LIGHT_POSITION, LIGHT_COLOR, ray, hit_info)
        np.testing.assert_allclose(color, [0.0, 0.0, 0.0])

    @pytest.mark.parametrize("occluded, expected", [(False, 1.0), (True, 0.3)])
    def test_transparency_policy(self, occluded, expected):
        ray, hit_info = _transparent_hit()
        primitives = [_occluder()] if occluded else []
        state = RenderState(scene=FakeScene(primitives=primitives), features=Features(enable_transparency=True))
        color = visibility_of_light_sample(state, LIGHT_POSITION, LIGHT_COLOR, ray, hit_info)
        np.testing.assert_allclose(color, [expected] * 3)
