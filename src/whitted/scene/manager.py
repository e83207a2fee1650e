"""Scene manager coordinating primitives, materials, lights and environment.

The SceneManager is the scene object handed to the renderer. Geometry is
stored in the Taichi primitive fields of ``whitted.scene.intersection``;
materials, lights and the environment stay on the Python side because the
recursive renderer reads them from Python scope.

The SceneManager maintains:
- A material registry indexed by material_id
- Sphere and quad bookkeeping mirroring the Taichi fields
- The light list, in insertion order
- Scene serialization to plain dictionaries

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> red = scene.add_material(kd=(0.8, 0.1, 0.1))
    >>> scene.add_sphere(center=(0, 0, -1), radius=0.5, material_id=red)
    >>> scene.add_point_light(position=(0, 2, 0), color=(1, 1, 1))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

import taichi.math as tm

from whitted.core.hit import HitInfo
from whitted.core.ray import Ray, Vec3, zeros
from whitted.lights.lights import LIGHT_TYPES, Light, ParallelogramLight, PointLight, SegmentLight
from whitted.materials.material import Material
from whitted.materials.texture import load_texture
from whitted.scene.environment import Environment, environment_from_dict
from whitted.scene.intersection import (
    MAX_QUADS,
    MAX_SPHERES,
    T_MIN,
    add_quad,
    add_sphere,
    clear_scene,
    get_quad_count,
    get_sphere_count,
    query_closest_hit,
)

logger = logging.getLogger(__name__)

vec3 = tm.vec3

MAX_MATERIALS = 1024


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        center: The center of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID assigned to the sphere.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int


@dataclass
class QuadInfo:
    """Information about a quad in the scene.

    Attributes:
        quad_index: The index in the quad storage arrays.
        corner: The corner point (Q) of the quad.
        edge_u: The first edge vector.
        edge_v: The second edge vector.
        material_id: The material ID assigned to the quad.
    """

    quad_index: int
    corner: tuple[float, float, float]
    edge_u: tuple[float, float, float]
    edge_v: tuple[float, float, float]
    material_id: int


@dataclass
class SceneConfig:
    """Configuration for scene serialization."""

    materials: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)
    quads: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)
    environment: dict[str, Any] | None = None


def _as_tuple3(values: Sequence[float]) -> tuple[float, float, float]:
    if len(values) != 3:
        raise ValueError(f"Expected 3 components, got {len(values)}")
    return (float(values[0]), float(values[1]), float(values[2]))


def _material_to_dict(material: Material) -> dict[str, Any]:
    data: dict[str, Any] = {
        "kd": material.kd.tolist(),
        "ks": material.ks.tolist(),
        "shininess": material.shininess,
        "transparency": material.transparency,
    }
    if material.kd_texture is not None:
        data["kd_texture"] = material.kd_texture.name
    return data


def _light_to_dict(light: Light) -> dict[str, Any]:
    if isinstance(light, PointLight):
        return {"type": "point", "position": light.position.tolist(), "color": light.color.tolist()}
    if isinstance(light, SegmentLight):
        return {
            "type": "segment",
            "endpoint0": light.endpoint0.tolist(),
            "endpoint1": light.endpoint1.tolist(),
            "color0": light.color0.tolist(),
            "color1": light.color1.tolist(),
        }
    if isinstance(light, ParallelogramLight):
        return {
            "type": "parallelogram",
            "v0": light.v0.tolist(),
            "edge01": light.edge01.tolist(),
            "edge02": light.edge02.tolist(),
            "color0": light.color0.tolist(),
            "color1": light.color1.tolist(),
            "color2": light.color2.tolist(),
            "color3": light.color3.tolist(),
        }
    raise TypeError(f"Unsupported light type: {type(light).__name__}")


def _light_from_dict(data: dict[str, Any]) -> Light:
    light_type = str(data.get("type", "")).lower()
    params = {key: value for key, value in data.items() if key != "type"}
    if light_type == "point":
        return PointLight(**params)
    if light_type == "segment":
        return SegmentLight(**params)
    if light_type == "parallelogram":
        return ParallelogramLight(**params)
    raise ValueError(f"Unknown light type: {light_type}")


class SceneManager:
    """Scene built from Taichi primitives, Python materials and lights.

    Implements the scene interface used by the renderer: ``lights``,
    ``intersect(ray)`` and ``sample_environment(ray)``.

    Attributes:
        materials: Registered materials; the list index is the material_id.
        spheres: SphereInfo for all spheres in the scene.
        quads: QuadInfo for all quads in the scene.
        environment: Color source for escaped rays, or None for black.
    """

    def __init__(self, environment: Environment | None = None) -> None:
        """Initialize an empty scene (clearing the Taichi primitive fields)."""
        self.materials: list[Material] = []
        self.spheres: list[SphereInfo] = []
        self.quads: list[QuadInfo] = []
        self._lights: list[Light] = []
        self.environment = environment
        clear_scene()

    def clear(self) -> None:
        """Remove every primitive, material and light. The environment is kept."""
        clear_scene()
        self.materials.clear()
        self.spheres.clear()
        self.quads.clear()
        self._lights.clear()

    # =========================================================================
    # Material Management
    # =========================================================================

    def add_material(self, material: Material | None = None, **params: Any) -> int:
        """Register a material.

        Args:
            material: A ready Material. If omitted, one is built from params.
            **params: Material fields (kd, ks, shininess, transparency,
                kd_texture) used when no material is given.

        Returns:
            The material ID.

        Raises:
            RuntimeError: If the maximum number of materials is exceeded.
            ValueError: If both a material and params are given, or a
                parameter is out of range.
        """
        if material is not None and params:
            raise ValueError("Pass either a Material or material parameters, not both")
        if len(self.materials) >= MAX_MATERIALS:
            raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")
        if material is None:
            material = Material(**params)
        material_id = len(self.materials)
        self.materials.append(material)
        logger.debug(f"Added material {material_id}: {_material_to_dict(material)}")
        return material_id

    def get_material(self, material_id: int) -> Material:
        """Look up a material by ID.

        Raises:
            ValueError: If material_id is not registered.
        """
        self._check_material_id(material_id)
        return self.materials[material_id]

    def get_material_count(self) -> int:
        """Get the number of registered materials."""
        return len(self.materials)

    def _check_material_id(self, material_id: int) -> None:
        if material_id < 0 or material_id >= len(self.materials):
            raise ValueError(f"Invalid material_id: {material_id}")

    # =========================================================================
    # Primitive Management
    # =========================================================================

    def add_sphere(
        self,
        center: Sequence[float],
        radius: float,
        material_id: int,
    ) -> int:
        """Add a sphere to the scene.

        Returns:
            The index of the added sphere.

        Raises:
            RuntimeError: If the maximum number of spheres is exceeded.
            ValueError: If material_id is invalid or radius is not positive.
        """
        self._check_material_id(material_id)
        if radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        center = _as_tuple3(center)
        sphere_index = add_sphere(vec3(*center), float(radius), material_id)
        self.spheres.append(
            SphereInfo(sphere_index=sphere_index, center=center, radius=float(radius), material_id=material_id)
        )
        return sphere_index

    def add_quad(
        self,
        corner: Sequence[float],
        edge_u: Sequence[float],
        edge_v: Sequence[float],
        material_id: int,
    ) -> int:
        """Add a quad with vertices corner, corner+edge_u, corner+edge_v, corner+edge_u+edge_v.

        The front face is the side cross(edge_u, edge_v) points to.

        Returns:
            The index of the added quad.

        Raises:
            RuntimeError: If the maximum number of quads is exceeded.
            ValueError: If material_id is invalid.
        """
        self._check_material_id(material_id)
        corner = _as_tuple3(corner)
        edge_u = _as_tuple3(edge_u)
        edge_v = _as_tuple3(edge_v)
        quad_index = add_quad(vec3(*corner), vec3(*edge_u), vec3(*edge_v), material_id)
        self.quads.append(
            QuadInfo(quad_index=quad_index, corner=corner, edge_u=edge_u, edge_v=edge_v, material_id=material_id)
        )
        return quad_index

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return get_sphere_count()

    def get_quad_count(self) -> int:
        """Get the number of quads in the scene."""
        return get_quad_count()

    def get_primitive_count(self) -> int:
        """Get the total number of primitives in the scene."""
        return self.get_sphere_count() + self.get_quad_count()

    # =========================================================================
    # Lights
    # =========================================================================

    @property
    def lights(self) -> tuple[Light, ...]:
        """Scene lights in insertion order."""
        return tuple(self._lights)

    def add_light(self, light: Light) -> int:
        """Add a light and return its index.

        Raises:
            TypeError: If light is not a PointLight, SegmentLight or ParallelogramLight.
        """
        if not isinstance(light, LIGHT_TYPES):
            raise TypeError(f"Unsupported light type: {type(light).__name__}")
        self._lights.append(light)
        logger.debug(f"Added {type(light).__name__} #{len(self._lights) - 1}")
        return len(self._lights) - 1

    def add_point_light(self, position: Sequence[float], color: Sequence[float]) -> int:
        """Add a point light."""
        return self.add_light(PointLight(position=position, color=color))

    def add_segment_light(
        self,
        endpoint0: Sequence[float],
        endpoint1: Sequence[float],
        color0: Sequence[float],
        color1: Sequence[float],
    ) -> int:
        """Add a segment light whose color varies from color0 to color1."""
        return self.add_light(SegmentLight(endpoint0=endpoint0, endpoint1=endpoint1, color0=color0, color1=color1))

    def add_parallelogram_light(
        self,
        v0: Sequence[float],
        edge01: Sequence[float],
        edge02: Sequence[float],
        color0: Sequence[float],
        color1: Sequence[float],
        color2: Sequence[float],
        color3: Sequence[float],
    ) -> int:
        """Add a parallelogram light with one color per corner."""
        return self.add_light(
            ParallelogramLight(
                v0=v0,
                edge01=edge01,
                edge02=edge02,
                color0=color0,
                color1=color1,
                color2=color2,
                color3=color3,
            )
        )

    # =========================================================================
    # Renderer Interface
    # =========================================================================

    def intersect(self, ray: Ray) -> HitInfo | None:
        """Find the closest hit along the ray closer than ``ray.t``.

        On a hit ``ray.t`` is set to the hit distance. On a miss the ray is
        left untouched and None is returned.
        """
        result = query_closest_hit(ray.origin, ray.direction, T_MIN, ray.t)
        if result is None:
            return None
        t, normal, uv, material_id = result
        ray.t = t
        return HitInfo(normal=normal, material=self.materials[material_id], tex_coord=uv)

    def sample_environment(self, ray: Ray) -> Vec3:
        """Environment color in the ray direction (black without an environment)."""
        if self.environment is None:
            return zeros()
        return self.environment.sample(ray)

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig()
        config.materials = [_material_to_dict(material) for material in self.materials]
        config.spheres = [
            {"center": list(s.center), "radius": s.radius, "material_id": s.material_id}
            for s in self.spheres
        ]
        config.quads = [
            {
                "corner": list(q.corner),
                "edge_u": list(q.edge_u),
                "edge_v": list(q.edge_v),
                "material_id": q.material_id,
            }
            for q in self.quads
        ]
        config.lights = [_light_to_dict(light) for light in self._lights]
        if self.environment is not None:
            config.environment = self.environment.to_dict()
        return config

    def from_config(self, config: SceneConfig) -> None:
        """Replace the scene contents with a configuration.

        Textures referenced by materials are loaded from their file paths.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()

        # Materials first, primitives refer to them by ID
        for mat_config in config.materials:
            params = dict(mat_config)
            texture_path = params.pop("kd_texture", None)
            if texture_path:
                params["kd_texture"] = load_texture(texture_path)
            self.add_material(**params)

        for sphere_config in config.spheres:
            self.add_sphere(
                sphere_config.get("center", [0.0, 0.0, 0.0]),
                sphere_config.get("radius", 1.0),
                sphere_config.get("material_id", 0),
            )

        for quad_config in config.quads:
            self.add_quad(
                quad_config.get("corner", [0.0, 0.0, 0.0]),
                quad_config.get("edge_u", [1.0, 0.0, 0.0]),
                quad_config.get("edge_v", [0.0, 1.0, 0.0]),
                quad_config.get("material_id", 0),
            )

        for light_config in config.lights:
            self.add_light(_light_from_dict(light_config))

        self.environment = None if config.environment is None else environment_from_dict(config.environment)
        logger.debug(
            f"Loaded scene: {len(self.materials)} materials, {len(self.spheres)} spheres, "
            f"{len(self.quads)} quads, {len(self._lights)} lights"
        )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "materials": config.materials,
            "spheres": config.spheres,
            "quads": config.quads,
            "lights": config.lights,
            "environment": config.environment,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary produced by ``to_dict``."""
        config = SceneConfig(
            materials=data.get("materials", []),
            spheres=data.get("spheres", []),
            quads=data.get("quads", []),
            lights=data.get("lights", []),
            environment=data.get("environment"),
        )
        self.from_config(config)

    # =========================================================================
    # Capacity Information
    # =========================================================================

    @staticmethod
    def get_max_spheres() -> int:
        """Get the maximum number of spheres supported."""
        return MAX_SPHERES

    @staticmethod
    def get_max_quads() -> int:
        """Get the maximum number of quads supported."""
        return MAX_QUADS

    @staticmethod
    def get_max_materials() -> int:
        """Get the maximum number of materials supported."""
        return MAX_MATERIALS
