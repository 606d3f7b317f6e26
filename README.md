# raylab

A compact ray tracer in plain Python with no third-party dependencies.
Scenes of spheres, triangles and triangle meshes (loaded from Wavefront
OBJ files) are organised into a bounding volume hierarchy
(`raylab.bvh.BVHAccel`) and shaded Whitted-style: mirror reflection,
refraction mixed by the Fresnel equations, and Phong shading with hard
shadows from point lights.

Each render can be written as `image.png` (a linear clamp of the colours)
and `binary.ppm` (a binary P6 image with a 0.6 gamma curve).

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
raylab-bvh [MODEL] [--width W] [--height H] [--scale S] [--output DIR]
```

Loads `MODEL` (an `.obj` file holding exactly one mesh; default
`../models/bunny.obj`), scales every vertex by `--scale` (default 60),
lights it with two point lights at (-20, 70, 20) and (20, 70, 20), and
renders it from the eye position (-1, 5, 10) at `--width` x `--height`
pixels (default 1280 x 960). A progress bar is drawn on the terminal while
rendering, and `image.png` and `binary.ppm` are written to `--output`
(default the current directory). The time taken is printed at the end.

Pure Python is slow: a full-size render of a detailed model takes a long
time, so small sizes are the way to experiment.

## Library overview

| Module | What it offers |
| --- | --- |
| `raylab.vector` | `Vec3`, `Vec2`, `dot`, `cross`, `normalize`, `lerp`, `component_min`, `component_max` |
| `raylab.mathutil` | `clamp`, `deg2rad`, `solve_quadratic`, `random_float`, `progress_bar`, `update_progress` |
| `raylab.optics` | `reflect`, `refract`, `fresnel` |
| `raylab.ray` | `Ray` with `at(t)` and a cached `direction_inv` |
| `raylab.bounds` | `Bounds3` axis-aligned boxes, `union`, `union_point` |
| `raylab.material` | `MaterialType`, `Material`, `Intersection`, `Light`, `AreaLight` |
| `raylab.objgeometry` | OBJ text helpers (`split`, `tail`, `first_token`, `get_element`) and polygon `triangulate` |
| `raylab.objloader` | `Loader`, `Mesh`, `ObjMaterial`, `load_obj` for `.obj`/`.mtl` files |
| `raylab.shapes` | `Sphere`, `Triangle`, `MeshTriangle` (with `MeshTriangle.from_obj`), `ray_triangle_intersect` |
| `raylab.bvh` | `BVHAccel`, `BVHNode`, `SplitMethod` |
| `raylab.scene` | `Scene` with `add_object`, `add_light`, `build_bvh`, `intersect`, `trace`, `cast_ray` |
| `raylab.render` | `render` (camera rays over every pixel) and the `main` entry point |
| `raylab.image` | `encode_ppm`, `encode_png`, `save_images` |

### Small examples

Vector arithmetic and optics:

```python
from raylab.vector import Vec3, normalize
from raylab.optics import reflect, fresnel

incident = normalize(Vec3(1.0, -1.0, 0.0))
normal = Vec3(0.0, 1.0, 0.0)
bounced = reflect(incident, normal)
kr = fresnel(incident, normal, 1.5)   # fraction of light reflected
```

Loading an OBJ model:

```python
from raylab.objloader import load_obj

loader = load_obj("model.obj")   # ValueError if the file holds no geometry
for mesh in loader.meshes:
    print(mesh.name, len(mesh.vertices))
```

Building a small scene, rendering it and saving it:

```python
from raylab.image import save_images
from raylab.material import Light, Material, MaterialType
from raylab.render import render
from raylab.scene import Scene
from raylab.shapes import Sphere
from raylab.vector import Vec3

scene = Scene(160, 120)
scene.add_object(Sphere(Vec3(0, 0, -5), 1.0))
scene.add_object(Sphere(Vec3(2, 0, -7), 1.0, Material(MaterialType.REFLECTION, ior=10)))
scene.add_light(Light(Vec3(-20, 70, 20), Vec3.splat(1)))

framebuffer = render(scene, eye=Vec3(0, 0, 0))
save_images(framebuffer, scene.width, scene.height, ".")
```

`render` builds the hierarchy if the scene has none yet. After adding
objects to a scene whose hierarchy is already built, call
`scene.build_bvh()` again; `Scene.intersect` raises `RuntimeError` if no
hierarchy has been built.

## Conventions

* The camera looks down the negative z axis; the field of view defaults
  to 90 degrees.
* Colours are `Vec3` values nominally in `[0, 1]`; they are clamped when
  written out.
* Recursion stops after a maximum depth of 5 bounces, returning black.
* Rays that miss everything return the scene's background colour.

## What it does not do

* There is one command, `raylab-bvh`, and it renders a single OBJ mesh.
  There is no ready-made demo scene of spheres over a checkered floor and
  no command for one; such scenes have to be put together with
  `raylab.scene.Scene` and `raylab.shapes` as in the example above.
* `AreaLight` can be created and sampled, but the shading skips area
  lights: only point lights (`Light`) illuminate a scene.
* `SplitMethod.SAH` is accepted by `BVHAccel`, but every hierarchy is
  split the naive way, at the median along the longest axis.
* Texture maps named in MTL files are read into `ObjMaterial` but never
  used for shading.