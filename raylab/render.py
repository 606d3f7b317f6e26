"""Camera ray generation, the render loop and the command-line entry point."""

from __future__ import annotations

import argparse
import math
import sys
import time
from typing import Callable, List, Optional, Sequence

from raylab.image import save_images
from raylab.material import Light
from raylab.mathutil import deg2rad, update_progress
from raylab.ray import Ray
from raylab.scene import Scene
from raylab.shapes import MeshTriangle
from raylab.vector import Vec3, normalize

DEFAULT_EYE = Vec3(-1, 5, 10)
DEFAULT_MODEL = "../models/bunny.obj"


def render(
    scene: Scene,
    eye: Vec3 = DEFAULT_EYE,
    progress: Optional[Callable[[float], None]] = None,
) -> List[Vec3]:
    """Trace one primary ray per pixel; returns the framebuffer row by row."""
    if scene.bvh is None:
        scene.build_bvh()
    scale = math.tan(deg2rad(scene.fov * 0.5))
    aspect = scene.width / scene.height
    framebuffer: List[Vec3] = []
    for j in range(scene.height):
        y = (1 - 2 * (j + 0.5) / scene.height) * scale
        for i in range(scene.width):
            x = (2 * (i + 0.5) / scene.width - 1) * aspect * scale
            direction = normalize(Vec3(x, y, -1))
            framebuffer.append(scene.cast_ray(Ray(eye, direction), 0))
        if progress is not None:
            progress(j / scene.height)
    if progress is not None:
        progress(1.0)
    return framebuffer


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render an OBJ model with a BVH ray tracer.")
    parser.add_argument("model", nargs="?", default=DEFAULT_MODEL, help="OBJ file to render")
    parser.add_argument("--width", type=int, default=1280)
    parser.add_argument("--height", type=int, default=960)
    parser.add_argument("--scale", type=float, default=60.0, help="model scale factor")
    parser.add_argument("--output", default=".", help="directory for image.png and binary.ppm")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Render the model with two point lights and write the images."""
    args = _parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        print(f"invalid image size {args.width}x{args.height}", file=sys.stderr)
        return 2

    scene = Scene(args.width, args.height)
    scene.add_object(MeshTriangle.from_obj(args.model, args.scale))
    scene.add_light(Light(Vec3(-20, 70, 20), Vec3.splat(1)))
    scene.add_light(Light(Vec3(20, 70, 20), Vec3.splat(1)))
    print(" - Generating BVH...\n")
    scene.build_bvh()

    start = time.monotonic()
    framebuffer = render(scene, progress=update_progress)
    elapsed = int(time.monotonic() - start)
    save_images(framebuffer, scene.width, scene.height, args.output)

    print("\nRender complete: ")
    print(f"Time taken: {elapsed // 3600} hours")
    print(f"          : {elapsed // 60} minutes")
    print(f"          : {elapsed} seconds")
    return 0