#!/usr/bin/env python3
"""Render the Cornell box scene with the recursive Whitted renderer.

Usage:
    python -m examples.render_cornell_box [options]

Options:
    --width WIDTH             Image width in pixels (default: 128)
    --height HEIGHT           Image height in pixels (default: 128)
    --samples SAMPLES         Jittered samples per pixel (default: 4)
    --output OUTPUT           Output file path (default: cornell_box.png)
    --shading-model MODEL     lambertian, phong, blinn-phong or linear-gradient
    --reflections             Trace mirror reflections
    --glossy                  Use glossy instead of mirror reflections
    --transparency            Trace passthrough rays and attenuated shadows
    --no-shadows              Disable shadow rays
    --shadow-samples N        Samples per area light (default: 16)
    --max-depth N             Maximum recursion depth (default: 6)
    --features PATH           Load the feature set from a JSON file instead
    --seed SEED               Sampler seed (default: 0)
    --mirror-box              Render the closed mirror box instead
    --sky                     Light escaped rays with a gradient sky
    --verbose                 Enable debug logging

Example:
    python -m examples.render_cornell_box --width 96 --height 96 --samples 2 --reflections --transparency
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the Cornell box scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=128, help="Image width in pixels (default: 128)")
    parser.add_argument("--height", type=int, default=128, help="Image height in pixels (default: 128)")
    parser.add_argument("--samples", type=int, default=4, help="Samples per pixel (default: 4)")
    parser.add_argument(
        "--output", type=str, default="cornell_box.png", help="Output file path (default: cornell_box.png)"
    )
    parser.add_argument(
        "--shading-model",
        type=str,
        default="blinn-phong",
        help="lambertian, phong, blinn-phong or linear-gradient (default: blinn-phong)",
    )
    parser.add_argument("--reflections", action="store_true", help="Trace mirror reflections")
    parser.add_argument("--glossy", action="store_true", help="Use glossy reflections")
    parser.add_argument("--transparency", action="store_true", help="Enable transparency")
    parser.add_argument("--no-shadows", action="store_true", help="Disable shadow rays")
    parser.add_argument("--shadow-samples", type=int, default=16, help="Samples per area light (default: 16)")
    parser.add_argument("--max-depth", type=int, default=6, help="Maximum recursion depth (default: 6)")
    parser.add_argument("--features", type=str, default=None, help="JSON feature file overriding the flags")
    parser.add_argument("--seed", type=int, default=0, help="Sampler seed (default: 0)")
    parser.add_argument("--mirror-box", action="store_true", help="Render the closed mirror box")
    parser.add_argument("--sky", action="store_true", help="Light escaped rays with a gradient sky")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def build_features(args: argparse.Namespace):
    """Create the Features for a run from the command line."""
    from whitted.core.config import Features, load_features

    if args.features is not None:
        return load_features(args.features)
    return Features(
        shading_model=args.shading_model,
        enable_shadows=not args.no_shadows,
        enable_reflections=args.reflections or args.glossy,
        enable_glossy_reflection=args.glossy,
        enable_transparency=args.transparency,
        enable_environment_map=args.sky,
        num_shadow_samples=args.shadow_samples,
        max_ray_depth=args.max_depth,
    )


def render_cornell_box(args: argparse.Namespace) -> Path:
    """Render the selected scene and save it.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from whitted.core.progressive import ProgressiveRenderer
    from whitted.core.sampler import Sampler
    from whitted.core.state import RenderState
    from whitted.preview.export import save_png
    from whitted.scene.cornell_box import create_cornell_box_scene, create_mirror_box_scene
    from whitted.scene.environment import GradientEnvironment

    features = build_features(args)
    if args.mirror_box:
        scene, camera = create_mirror_box_scene()
    else:
        scene, camera = create_cornell_box_scene()
    if args.sky:
        scene.environment = GradientEnvironment(horizon=(1.0, 1.0, 1.0), zenith=(0.5, 0.7, 1.0))

    if not args.quiet:
        print(f"Rendering {args.width}x{args.height}, {args.samples} spp")
        print(f"Features: {features.to_dict()}")

    state = RenderState(scene=scene, features=features, sampler=Sampler(seed=args.seed))
    renderer = ProgressiveRenderer(state, camera, args.width, args.height)

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not args.quiet:
            elapsed = time.time() - start_time
            print(f"\r  Progress: {current}/{target} samples ({elapsed:.1f}s)", end="", flush=True)

    renderer.render(num_samples=args.samples, batch_size=1, callback=progress_callback)
    if not args.quiet:
        print()

    output_file = Path(args.output)
    save_png(renderer, output_file, tone_map="reinhard", gamma=2.2)

    if not args.quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")
    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    # Scene queries are issued one ray at a time, which the CPU backend handles best
    ti.init(arch=ti.cpu)

    try:
        render_cornell_box(args)
        return 0
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
