"""Unit tests for the scene manager.

Tests cover:
- Material registration and validation
- Primitive addition with material assignment
- Light management
- The renderer interface (intersect, sample_environment)
- Scene serialization and clearing
"""

import json

import numpy as np
import pytest
from PIL import Image as PILImage


@pytest.fixture
def fresh_scene():
    """Create a fresh SceneManager for each test."""
    from whitted.scene.manager import SceneManager

    return SceneManager()


class TestMaterialRegistration:
    """Tests for material registration."""

    def test_add_material_from_params(self, fresh_scene):
        mat_id = fresh_scene.add_material(kd=(0.8, 0.2, 0.1), ks=(0.1, 0.1, 0.1), shininess=16.0)
        assert mat_id == 0
        material = fresh_scene.get_material(mat_id)
        np.testing.assert_allclose(material.kd, [0.8, 0.2, 0.1])
        assert material.shininess == 16.0

    def test_add_material_object(self, fresh_scene):
        from whitted.materials.material import Material

        material = Material(transparency=0.5)
        mat_id = fresh_scene.add_material(material)
        assert fresh_scene.get_material(mat_id) is material

    def test_material_ids_are_sequential(self, fresh_scene):
        ids = [fresh_scene.add_material(kd=(0.1 * i, 0.0, 0.0)) for i in range(4)]
        assert ids == [0, 1, 2, 3]
        assert fresh_scene.get_material_count() == 4

    def test_rejects_material_and_params(self, fresh_scene):
        from whitted.materials.material import Material

        with pytest.raises(ValueError):
            fresh_scene.add_material(Material(), kd=(1.0, 0.0, 0.0))

    def test_material_validation(self, fresh_scene):
        with pytest.raises(ValueError):
            fresh_scene.add_material(transparency=2.0)

    def test_unknown_material_id(self, fresh_scene):
        with pytest.raises(ValueError):
            fresh_scene.get_material(0)

    def test_material_capacity(self, fresh_scene, monkeypatch):
        import whitted.scene.manager as manager

        monkeypatch.setattr(manager, "MAX_MATERIALS", 2)
        fresh_scene.add_material()
        fresh_scene.add_material()
        with pytest.raises(RuntimeError):
            fresh_scene.add_material()


class TestPrimitiveAddition:
    """Tests for adding primitives with materials."""

    def test_add_sphere_with_material(self, fresh_scene):
        mat_id = fresh_scene.add_material()
        idx = fresh_scene.add_sphere(center=(0.0, 0.0, -1.0), radius=0.5, material_id=mat_id)
        assert idx == 0
        assert fresh_scene.get_sphere_count() == 1
        assert fresh_scene.spheres[0].center == (0.0, 0.0, -1.0)

    def test_add_quad_with_material(self, fresh_scene):
        mat_id = fresh_scene.add_material()
        idx = fresh_scene.add_quad(
            corner=(0.0, 0.0, 0.0), edge_u=(1.0, 0.0, 0.0), edge_v=(0.0, 1.0, 0.0), material_id=mat_id
        )
        assert idx == 0
        assert fresh_scene.get_quad_count() == 1
        assert fresh_scene.get_primitive_count() == 1

    def test_add_sphere_invalid_material(self, fresh_scene):
        with pytest.raises(ValueError):
            fresh_scene.add_sphere(center=(0.0, 0.0, 0.0), radius=1.0, material_id=3)

    def test_add_quad_invalid_material(self, fresh_scene):
        with pytest.raises(ValueError):
            fresh_scene.add_quad((0, 0, 0), (1, 0, 0), (0, 1, 0), material_id=-1)

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_add_sphere_invalid_radius(self, fresh_scene, radius):
        mat_id = fresh_scene.add_material()
        with pytest.raises(ValueError):
            fresh_scene.add_sphere(center=(0.0, 0.0, 0.0), radius=radius, material_id=mat_id)

    def test_add_sphere_wrong_center_length(self, fresh_scene):
        mat_id = fresh_scene.add_material()
        with pytest.raises(ValueError):
            fresh_scene.add_sphere(center=(0.0, 0.0), radius=1.0, material_id=mat_id)


class TestLights:
    """Tests for light management."""

    def test_lights_keep_insertion_order(self, fresh_scene):
        from whitted.lights.lights import ParallelogramLight, PointLight, SegmentLight

        fresh_scene.add_segment_light((0, 1, 0), (1, 1, 0), (1, 0, 0), (0, 0, 1))
        fresh_scene.add_point_light((0, 2, 0), (1, 1, 1))
        fresh_scene.add_parallelogram_light((0, 3, 0), (1, 0, 0), (0, 0, 1), (1, 1, 1), (1, 1, 1), (1, 1, 1), (1, 1, 1))
        kinds = [type(light) for light in fresh_scene.lights]
        assert kinds == [SegmentLight, PointLight, ParallelogramLight]

    def test_lights_are_read_only_view(self, fresh_scene):
        fresh_scene.add_point_light((0, 2, 0), (1, 1, 1))
        assert isinstance(fresh_scene.lights, tuple)

    def test_rejects_unknown_light(self, fresh_scene):
        with pytest.raises(TypeError):
            fresh_scene.add_light(object())


class TestRendererInterface:
    """Tests for the methods the renderer calls."""

    def test_intersect_hit_sets_t(self, fresh_scene):
        from whitted.core.ray import Ray

        mat_id = fresh_scene.add_material(kd=(0.2, 0.4, 0.6))
        fresh_scene.add_sphere(center=(0.0, 0.0, -2.0), radius=0.5, material_id=mat_id)
        ray = Ray(origin=(0.0, 0.0, 0.0), direction=(0.0, 0.0, -1.0))
        hit_info = fresh_scene.intersect(ray)
        assert hit_info is not None
        assert ray.t == pytest.approx(1.5, abs=1e-5)
        assert hit_info.material is fresh_scene.get_material(mat_id)
        np.testing.assert_allclose(hit_info.normal, [0.0, 0.0, 1.0], atol=1e-5)

    def test_intersect_miss_leaves_ray(self, fresh_scene):
        from whitted.core.ray import Ray

        ray = Ray(origin=(0.0, 0.0, 0.0), direction=(0.0, 0.0, -1.0))
        assert fresh_scene.intersect(ray) is None
        assert ray.t == np.inf

    def test_intersect_honours_ray_t(self, fresh_scene):
        from whitted.core.ray import Ray

        mat_id = fresh_scene.add_material()
        fresh_scene.add_sphere(center=(0.0, 0.0, -2.0), radius=0.5, material_id=mat_id)
        ray = Ray(origin=(0.0, 0.0, 0.0), direction=(0.0, 0.0, -1.0), t=1.0)
        assert fresh_scene.intersect(ray) is None
        assert ray.t == 1.0

    def test_intersect_reports_quad_uv(self, fresh_scene):
        from whitted.core.ray import Ray

        mat_id = fresh_scene.add_material()
        fresh_scene.add_quad((-1.0, -1.0, -1.0), (2.0, 0.0, 0.0), (0.0, 2.0, 0.0), mat_id)
        hit_info = fresh_scene.intersect(Ray(origin=(0.5, 0.0, 0.0), direction=(0.0, 0.0, -1.0)))
        np.testing.assert_allclose(hit_info.tex_coord, [0.75, 0.5], atol=1e-5)

    def test_sample_environment_defaults_to_black(self, fresh_scene):
        from whitted.core.ray import Ray

        color = fresh_scene.sample_environment(Ray(origin=(0, 0, 0), direction=(0, 1, 0)))
        np.testing.assert_allclose(color, [0.0, 0.0, 0.0])

    def test_sample_environment(self, fresh_scene):
        from whitted.core.ray import Ray
        from whitted.scene.environment import ConstantEnvironment

        fresh_scene.environment = ConstantEnvironment(color=(0.1, 0.2, 0.3))
        color = fresh_scene.sample_environment(Ray(origin=(0, 0, 0), direction=(0, 1, 0)))
        np.testing.assert_allclose(color, [0.1, 0.2, 0.3])


class TestSceneClearing:
    """Tests for clearing the scene."""

    def test_clear_scene(self, fresh_scene):
        from whitted.scene.environment import ConstantEnvironment

        fresh_scene.environment = ConstantEnvironment(color=(1.0, 1.0, 1.0))
        mat_id = fresh_scene.add_material()
        fresh_scene.add_sphere((0, 0, 0), 1.0, mat_id)
        fresh_scene.add_quad((0, 0, 0), (1, 0, 0), (0, 1, 0), mat_id)
        fresh_scene.add_point_light((0, 2, 0), (1, 1, 1))

        fresh_scene.clear()
        assert fresh_scene.get_material_count() == 0
        assert fresh_scene.get_primitive_count() == 0
        assert fresh_scene.lights == ()
        assert fresh_scene.environment is not None


class TestSceneSerialization:
    """Tests for scene serialization."""

    def _populate(self, scene):
        from whitted.scene.environment import GradientEnvironment

        glass = scene.add_material(kd=(0.9, 0.9, 1.0), ks=(0.1, 0.1, 0.1), shininess=32.0, transparency=0.3)
        wall = scene.add_material(kd=(0.7, 0.7, 0.7))
        scene.add_sphere((0.5, 0.5, 0.5), 0.25, glass)
        scene.add_quad((0, 0, 1), (1, 0, 0), (0, 1, 0), wall)
        scene.add_point_light((0.5, 0.9, 0.5), (1, 1, 1))
        scene.add_segment_light((0, 1, 0), (1, 1, 0), (1, 0, 0), (0, 0, 1))
        scene.environment = GradientEnvironment(horizon=(1, 1, 1), zenith=(0.3, 0.5, 0.9))

    def test_to_config(self, fresh_scene):
        self._populate(fresh_scene)
        config = fresh_scene.to_config()
        assert len(config.materials) == 2
        assert config.materials[0]["transparency"] == 0.3
        assert config.spheres == [{"center": [0.5, 0.5, 0.5], "radius": 0.25, "material_id": 0}]
        assert [light["type"] for light in config.lights] == ["point", "segment"]
        assert config.environment["type"] == "gradient"

    def test_dict_round_trip_through_json(self, fresh_scene):
        self._populate(fresh_scene)
        data = json.loads(json.dumps(fresh_scene.to_dict()))

        from whitted.scene.manager import SceneManager

        restored = SceneManager()
        restored.from_dict(data)
        assert restored.to_dict() == fresh_scene.to_dict()
        assert restored.get_sphere_count() == 1
        assert restored.get_quad_count() == 1

    def test_from_config_replaces_contents(self, fresh_scene):
        from whitted.scene.manager import SceneConfig

        self._populate(fresh_scene)
        fresh_scene.from_config(SceneConfig(materials=[{"kd": [1.0, 0.0, 0.0]}]))
        assert fresh_scene.get_material_count() == 1
        assert fresh_scene.get_primitive_count() == 0
        assert fresh_scene.lights == ()
        assert fresh_scene.environment is None

    def test_texture_saved_by_path(self, fresh_scene, tmp_path):
        from whitted.materials.texture import load_texture

        path = tmp_path / "checker.png"
        PILImage.fromarray(np.full((2, 2, 3), 255, dtype=np.uint8), mode="RGB").save(path)
        fresh_scene.add_material(kd_texture=load_texture(path))

        data = fresh_scene.to_dict()
        assert data["materials"][0]["kd_texture"] == str(path)
        fresh_scene.from_dict(data)
        assert fresh_scene.get_material(0).kd_texture.width == 2

    def test_unknown_light_type(self, fresh_scene):
        with pytest.raises(ValueError):
            fresh_scene.from_dict({"lights": [{"type": "spot", "position": [0, 0, 0]}]})


class TestCapacityInfo:
    """Tests for capacity information."""

    def test_capacity_methods(self):
        from whitted.scene.intersection import MAX_QUADS, MAX_SPHERES
        from whitted.scene.manager import MAX_MATERIALS, SceneManager

        assert SceneManager.get_max_spheres() == MAX_SPHERES
        assert SceneManager.get_max_quads() == MAX_QUADS
        assert SceneManager.get_max_materials() == MAX_MATERIALS
