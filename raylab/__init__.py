"""A small ray tracer: BVH-accelerated Whitted-style shading and OBJ loading."""

__version__ = "0.1.0"

__all__ = [
    "bounds",
    "bvh",
    "image",
    "material",
    "mathutil",
    "objgeometry",
    "objloader",
    "optics",
    "ray",
    "render",
    "scene",
    "shapes",
    "vector",
]