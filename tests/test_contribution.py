"""Tests for direct light contributions."""

import numpy as np
import pytest
from fakes import FakeScene, FakeSphere, SequenceSampler

from whitted.core.config import Features
from whitted.core.hit import HitInfo
from whitted.core.ray import Ray
from whitted.core.state import RenderState
from whitted.lights.contribution import (
    compute_contribution_parallelogram_light,
    compute_contribution_point_light,
    compute_contribution_segment_light,
    compute_light_contribution,
)
from whitted.lights.lights import ParallelogramLight, PointLight, SegmentLight
from whitted.materials.material import Material

WHITE = (1.0, 1.0, 1.0)
OVERHEAD = PointLight(position=(0.0, 0.0, 2.0), color=WHITE)


def _occluder():
    return FakeSphere(center=(0.0, 0.0, 1.0), radius=0.25, material=Material())


def _segment_light():
    return SegmentLight(endpoint0=(-1.0, 0.0, 2.0), endpoint1=(1.0, 0.0, 2.0), color0=(1, 0, 0), color1=(0, 0, 1))


def _parallelogram_light():
    return ParallelogramLight(
        v0=(-1.0, -1.0, 2.0),
        edge01=(2.0, 0.0, 0.0),
        edge02=(0.0, 2.0, 0.0),
        color0=WHITE,
        color1=WHITE,
        color2=WHITE,
        color3=WHITE,
    )


def _transparent_hit(transparency=0.4):
    ray = Ray(origin=(0.0, 0.0, 1.0), direction=(0.0, 0.0, -1.0), t=1.0)
    hit_info = HitInfo(normal=(0.0, 0.0, 1.0), material=Material(kd=(0.5, 0.5, 0.5), transparency=transparency))
    return ray, hit_info


class TestPointLight:
    """Tests for point light contributions."""

    def test_visible_light(self, floor_hit):
        ray, hit_info = floor_hit
        state = RenderState(scene=FakeScene())
        color = compute_contribution_point_light(state, OVERHEAD, ray, hit_info)
        np.testing.assert_allclose(color, [0.5, 0.5, 0.5])

    def test_occluded_light(self, floor_hit):
        ray, hit_info = floor_hit
        state = RenderState(scene=FakeScene(primitives=[_occluder()]))
        color = compute_contribution_point_light(state, OVERHEAD, ray, hit_info)
        np.testing.assert_allclose(color, [0.0, 0.0, 0.0])

    def test_shadows_disabled_ignores_occluder(self, floor_hit):
        ray, hit_info = floor_hit
        scene = FakeScene(primitives=[_occluder()])
        state = RenderState(scene=scene, features=Features(enable_shadows=False))
        color = compute_contribution_point_light(state, OVERHEAD, ray, hit_info)
        np.testing.assert_allclose(color, [0.5, 0.5, 0.5])
        assert scene.intersect_calls == 0

    def test_transparent_surface_adds_visible_light(self):
        ray, hit_info = _transparent_hit(0.4)
        state = RenderState(scene=FakeScene(), features=Features(enable_transparency=True))
        color = compute_contribution_point_light(state, OVERHEAD, ray, hit_info)
        # shading * (1 - transparency) + light color
        np.testing.assert_allclose(color, [1.3, 1.3, 1.3])

    def test_transparent_surface_occluded(self):
        ray, hit_info = _transparent_hit(0.4)
        state = RenderState(scene=FakeScene(primitives=[_occluder()]), features=Features(enable_transparency=True))
        color = compute_contribution_point_light(state, OVERHEAD, ray, hit_info)
        np.testing.assert_allclose(color, [0.0, 0.0, 0.0])

    def test_view_direction_is_reversed_ray(self, floor_hit):
        """Specular response needs the direction toward the viewer."""
        ray, _ = floor_hit
        hit_info = HitInfo(normal=(0.0, 0.0, 1.0), material=Material(kd=(0, 0, 0), ks=(1, 1, 1), shininess=4.0))
        state = RenderState(scene=FakeScene(), features=Features(shading_model="blinn_phong"))
        color = compute_contribution_point_light(state, OVERHEAD, ray, hit_info)
        np.testing.assert_allclose(color, [1.0, 1.0, 1.0])


class TestAreaLights:
    """Tests for sampled segment and parallelogram lights."""

    def test_segment_light_center_sample(self, floor_hit):
        ray, hit_info = floor_hit
        state = RenderState(scene=FakeScene(), sampler=SequenceSampler([0.5]))
        color = compute_contribution_segment_light(state, _segment_light(), ray, hit_info, 4)
        np.testing.assert_allclose(color, [0.25, 0.0, 0.25])

    def test_segment_light_draws_one_sample_each(self, floor_hit):
        ray, hit_info = floor_hit
        sampler = SequenceSampler([0.5])
        state = RenderState(scene=FakeScene(), sampler=sampler)
        compute_contribution_segment_light(state, _segment_light(), ray, hit_info, 5)
        assert sampler.draws == 5

    def test_segment_light_averages_samples(self, floor_hit):
        ray, hit_info = floor_hit
        light = SegmentLight(endpoint0=(0, 0, 2), endpoint1=(0, 0, 2), color0=(0, 0, 0), color1=(1, 1, 1))
        state = RenderState(scene=FakeScene(), sampler=SequenceSampler([0.0, 1.0]))
        color = compute_contribution_segment_light(state, light, ray, hit_info, 2)
        np.testing.assert_allclose(color, [0.25, 0.25, 0.25])

    def test_parallelogram_light_center_sample(self, floor_hit):
        ray, hit_info = floor_hit
        sampler = SequenceSampler([0.5])
        state = RenderState(scene=FakeScene(), sampler=sampler)
        color = compute_contribution_parallelogram_light(state, _parallelogram_light(), ray, hit_info, 3)
        np.testing.assert_allclose(color, [0.5, 0.5, 0.5])
        assert sampler.draws == 6

    @pytest.mark.parametrize("num_samples", [0, -3])
    def test_no_samples_contribute_nothing(self, floor_hit, num_samples):
        ray, hit_info = floor_hit
        state = RenderState(scene=FakeScene(), sampler=SequenceSampler([0.5]))
        color = compute_contribution_parallelogram_light(state, _parallelogram_light(), ray, hit_info, num_samples)
        np.testing.assert_allclose(color, [0.0, 0.0, 0.0])
        color = compute_contribution_segment_light(state, _segment_light(), ray, hit_info, num_samples)
        np.testing.assert_allclose(color, [0.0, 0.0, 0.0])

    def test_occluded_samples_are_black(self, floor_hit):
        ray, hit_info = floor_hit
        state = RenderState(scene=FakeScene(primitives=[_occluder()]), sampler=SequenceSampler([0.5]))
        color = compute_contribution_parallelogram_light(state, _parallelogram_light(), ray, hit_info, 2)
        np.testing.assert_allclose(color, [0.0, 0.0, 0.0])

    def test_occluded_samples_on_transparent_surface_are_attenuated(self):
        ray, hit_info = _transparent_hit(0.4)
        state = RenderState(
            scene=FakeScene(primitives=[_occluder()]),
            features=Features(enable_transparency=True),
            sampler=SequenceSampler([0.5]),
        )
        color = compute_contribution_parallelogram_light(state, _parallelogram_light(), ray, hit_info, 2)
        # Attenuated light 0.3 shaded by kd 0.5
        np.testing.assert_allclose(color, [0.15, 0.15, 0.15])


class TestComputeLightContribution:
    """Tests for summing all scene lights."""

    def test_sums_all_lights(self, floor_hit):
        ray, hit_info = floor_hit
        scene = FakeScene(lights=[OVERHEAD, _segment_light(), _parallelogram_light()])
        state = RenderState(scene=scene, sampler=SequenceSampler([0.5]))
        color = compute_light_contribution(state, ray, hit_info)
        np.testing.assert_allclose(color, [0.5 + 0.25 + 0.5, 0.5 + 0.0 + 0.5, 0.5 + 0.25 + 0.5])

    def test_uses_shadow_sample_count(self, floor_hit):
        ray, hit_info = floor_hit
        sampler = SequenceSampler([0.5])
        state = RenderState(
            scene=FakeScene(lights=[_segment_light()]),
            features=Features(num_shadow_samples=7),
            sampler=sampler,
        )
        compute_light_contribution(state, ray, hit_info)
        assert sampler.draws == 7

    def test_no_lights(self, floor_hit):
        ray, hit_info = floor_hit
        color = compute_light_contribution(RenderState(scene=FakeScene()), ray, hit_info)
        np.testing.assert_allclose(color, [0.0, 0.0, 0.0])

    def test_rejects_unknown_light(self, floor_hit):
        ray, hit_info = floor_hit
        state = RenderState(scene=FakeScene(lights=["not a light"]))
        with pytest.raises(TypeError):
            compute_light_contribution(state, ray, hit_info)
