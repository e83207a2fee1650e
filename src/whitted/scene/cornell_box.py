"""Demo scenes: a Whitted-style Cornell box and a closed mirror box.

The Cornell box is modelled at unit scale (BOX_SIZE = 2) so that the Taichi
float32 intersection keeps enough precision for the small ray offsets used
by the renderer.

Cornell box layout:
- Red left wall, green right wall, white back wall, floor and ceiling
- A mirror sphere, a transparent sphere and a diffuse sphere on the floor
- A parallelogram light just below the ceiling and a dim point fill light

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.cornell_box import create_cornell_box_scene
    >>> scene, camera = create_cornell_box_scene()
"""

from __future__ import annotations

from dataclasses import dataclass

from whitted.camera.pinhole import PinholeCamera
from whitted.scene.manager import SceneManager

# =============================================================================
# Cornell Box Parameters
# =============================================================================


@dataclass
class CornellBoxParams:
    """Parameters for configuring a Cornell box scene.

    Attributes:
        light_intensity: Scale applied to the ceiling light colors.
        light_color: RGB color of the ceiling light.
        fill_light_intensity: Scale of the white point fill light (0 disables it).
        left_wall_color: RGB diffuse color of the left wall.
        right_wall_color: RGB diffuse color of the right wall.
        back_wall_color: RGB diffuse color of the back wall, floor and ceiling.
        box_size: Edge length of the box.

    Example:
        >>> params = CornellBoxParams(light_color=(1.0, 0.9, 0.8))
        >>> params.light_intensity
        1.0
    """

    light_intensity: float = 1.0
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    fill_light_intensity: float = 0.25
    left_wall_color: tuple[float, float, float] = (0.65, 0.05, 0.05)
    right_wall_color: tuple[float, float, float] = (0.12, 0.45, 0.15)
    back_wall_color: tuple[float, float, float] = (0.73, 0.73, 0.73)
    box_size: float = 2.0


# =============================================================================
# Cornell Box Constants
# =============================================================================

BOX_SIZE = 2.0

# Ceiling light footprint relative to the box (classic 130x105 of 555)
LIGHT_WIDTH_FRACTION = 130.0 / 555.0
LIGHT_DEPTH_FRACTION = 105.0 / 555.0

MIRROR_SPHERE_KS = (0.9, 0.9, 0.9)
MIRROR_SPHERE_KD = (0.05, 0.05, 0.05)

GLASS_SPHERE_KD = (0.8, 0.9, 1.0)
GLASS_SPHERE_TRANSPARENCY = 0.3

DIFFUSE_SPHERE_KD = (0.73, 0.73, 0.73)


def _add_box_walls(
    scene: SceneManager, box_size: float, side_materials: tuple[int, int, int, int, int], front: int | None
) -> None:
    """Add the walls of an axis-aligned box spanning [0, box_size]^3.

    side_materials gives the left, right, back, floor and ceiling materials.
    The front wall (z = 0) is only added when front is not None.
    """
    left, right, back, floor, ceiling = side_materials
    s = box_size
    scene.add_quad(corner=(0.0, 0.0, 0.0), edge_u=(0.0, s, 0.0), edge_v=(0.0, 0.0, s), material_id=left)
    scene.add_quad(corner=(s, 0.0, s), edge_u=(0.0, s, 0.0), edge_v=(0.0, 0.0, -s), material_id=right)
    scene.add_quad(corner=(0.0, 0.0, s), edge_u=(s, 0.0, 0.0), edge_v=(0.0, s, 0.0), material_id=back)
    scene.add_quad(corner=(0.0, 0.0, 0.0), edge_u=(s, 0.0, 0.0), edge_v=(0.0, 0.0, s), material_id=floor)
    scene.add_quad(corner=(0.0, s, s), edge_u=(s, 0.0, 0.0), edge_v=(0.0, 0.0, -s), material_id=ceiling)
    if front is not None:
        scene.add_quad(corner=(s, 0.0, 0.0), edge_u=(-s, 0.0, 0.0), edge_v=(0.0, s, 0.0), material_id=front)


# =============================================================================
# Scene Factories
# =============================================================================


def create_cornell_box_scene(
    params: CornellBoxParams | None = None,
) -> tuple[SceneManager, PinholeCamera]:
    """Create the Cornell box scene.

    The box spans [0, box_size] on every axis and is open at z = 0, where
    the camera looks in along +Z.

    Args:
        params: Optional CornellBoxParams. If None, uses CornellBoxParams().

    Returns:
        A tuple (scene, camera).

    Example:
        >>> scene, camera = create_cornell_box_scene()
        >>> scene.get_quad_count(), scene.get_sphere_count(), len(scene.lights)
        (5, 3, 2)
    """
    if params is None:
        params = CornellBoxParams()
    s = params.box_size

    scene = SceneManager()

    # Materials
    left_mat = scene.add_material(kd=params.left_wall_color)
    right_mat = scene.add_material(kd=params.right_wall_color)
    white_mat = scene.add_material(kd=params.back_wall_color)
    mirror_mat = scene.add_material(kd=MIRROR_SPHERE_KD, ks=MIRROR_SPHERE_KS, shininess=8.0)
    glass_mat = scene.add_material(
        kd=GLASS_SPHERE_KD, ks=(0.1, 0.1, 0.1), shininess=64.0, transparency=GLASS_SPHERE_TRANSPARENCY
    )
    diffuse_mat = scene.add_material(kd=DIFFUSE_SPHERE_KD)

    _add_box_walls(scene, s, (left_mat, right_mat, white_mat, white_mat, white_mat), front=None)

    # Spheres resting on the floor
    radius = 0.15 * s
    scene.add_sphere(center=(0.27 * s, radius, 0.35 * s), radius=radius, material_id=mirror_mat)
    scene.add_sphere(center=(0.73 * s, radius, 0.35 * s), radius=radius, material_id=glass_mat)
    scene.add_sphere(center=(0.5 * s, radius, 0.7 * s), radius=radius, material_id=diffuse_mat)

    # Ceiling light, slightly below the ceiling so the ceiling never shadows it
    light_width = LIGHT_WIDTH_FRACTION * s
    light_depth = LIGHT_DEPTH_FRACTION * s
    color = tuple(c * params.light_intensity for c in params.light_color)
    scene.add_parallelogram_light(
        v0=((s - light_width) / 2.0, s * 0.995, (s - light_depth) / 2.0),
        edge01=(light_width, 0.0, 0.0),
        edge02=(0.0, 0.0, light_depth),
        color0=color,
        color1=color,
        color2=color,
        color3=color,
    )
    if params.fill_light_intensity > 0.0:
        fill = params.fill_light_intensity
        scene.add_point_light(position=(0.5 * s, 0.8 * s, 0.1 * s), color=(fill, fill, fill))

    camera = PinholeCamera(
        lookfrom=(s / 2.0, s / 2.0, -1.44 * s),
        lookat=(s / 2.0, s / 2.0, s / 2.0),
        vup=(0.0, 1.0, 0.0),
        vfov=40.0,
        aspect_ratio=1.0,
    )
    return scene, camera


def create_mirror_box_scene(box_size: float = BOX_SIZE) -> tuple[SceneManager, PinholeCamera]:
    """Create a closed box whose six walls are perfect mirrors (ks = 1).

    Every camera ray keeps bouncing, so renders of this scene only finish
    because recursion stops at ``max_ray_depth``.

    Returns:
        A tuple (scene, camera) with the camera inside the box.
    """
    s = box_size
    scene = SceneManager()
    mirror = scene.add_material(kd=(0.1, 0.1, 0.1), ks=(1.0, 1.0, 1.0))
    _add_box_walls(scene, s, (mirror, mirror, mirror, mirror, mirror), front=mirror)
    scene.add_point_light(position=(0.5 * s, 0.9 * s, 0.5 * s), color=(1.0, 1.0, 1.0))

    camera = PinholeCamera(
        lookfrom=(0.5 * s, 0.5 * s, 0.2 * s),
        lookat=(0.5 * s, 0.5 * s, s),
        vup=(0.0, 1.0, 0.0),
        vfov=60.0,
        aspect_ratio=1.0,
    )
    return scene, camera
