"""Recursive Whitted-style ray tracer.

Rays are traced in Python scope on NumPy vectors: each hit is lit by point,
segment and parallelogram lights through shadow rays, then mirror, glossy
and passthrough rays are followed recursively up to a configurable depth.
Scene intersection runs in Taichi kernels.

Subpackages:
    core: Rays, configuration, sampling, render state and the recursive renderer
    materials: Materials, textures, gradients and shading models
    lights: Light primitives, light sampling, shadow visibility and direct lighting
    geometry: Taichi sphere and quad primitives
    scene: Taichi primitive storage, scene manager, environments and demo scenes
    camera: Pinhole camera
    preview: Tone mapping and PNG export
"""

__version__ = "0.1.0"
