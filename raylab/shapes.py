"""Renderable shapes: spheres, triangles and triangle meshes."""

from __future__ import annotations

import abc
import math
from functools import reduce
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from raylab.bounds import Bounds3, union, union_point
from raylab.bvh import BVHAccel
from raylab.material import Intersection, Material, MaterialType
from raylab.mathutil import solve_quadratic
from raylab.objloader import load_obj
from raylab.ray import Ray
from raylab.vector import Vec2, Vec3, cross, dot, lerp, normalize

EPSILON = 0.00001

TexCoords = Tuple[Vec2, Vec2, Vec2]

_CHECKER_DARK = Vec3(0.815, 0.235, 0.031)
_CHECKER_LIGHT = Vec3(0.937, 0.937, 0.231)


def ray_triangle_intersect(
    v0: Vec3, v1: Vec3, v2: Vec3, origin: Vec3, direction: Vec3
) -> Optional[Tuple[float, float, float]]:
    """Moller-Trumbore test for front-facing triangles.

    Returns ``(t, u, v)`` with barycentric ``u`` and ``v``, or ``None``.
    """
    edge1 = v1 - v0
    edge2 = v2 - v0
    pvec = cross(direction, edge2)
    det = dot(edge1, pvec)
    if det <= 0:
        return None
    tvec = origin - v0
    u = dot(tvec, pvec)
    if u < 0 or u > det:
        return None
    qvec = cross(tvec, edge1)
    v = dot(direction, qvec)
    if v < 0 or u + v > det:
        return None
    inv_det = 1 / det
    return dot(edge2, qvec) * inv_det, u * inv_det, v * inv_det


class Shape(abc.ABC):
    """A surface that rays can hit."""

    material: Optional[Material] = None

    def hit_distance(self, ray: Ray) -> Optional[float]:
        """Distance to the nearest hit, or ``None``; shapes without a direct test return ``None``."""
        return None

    @abc.abstractmethod
    def get_intersection(self, ray: Ray) -> Intersection:
        """Full hit record for ``ray``."""

    @abc.abstractmethod
    def surface_properties(
        self, point: Vec3, direction: Vec3, index: int, uv: Vec2
    ) -> Tuple[Vec3, Vec2]:
        """Normal and texture coordinates at a hit point."""

    @abc.abstractmethod
    def eval_diffuse_color(self, st: Vec2) -> Vec3:
        """Diffuse colour at texture coordinates ``st``."""

    @abc.abstractmethod
    def bounds(self) -> Bounds3:
        """Axis-aligned bounding box."""


class Sphere(Shape):
    """A sphere given by centre and radius."""

    def __init__(self, center: Vec3, radius: float, material: Optional[Material] = None) -> None:
        self.center = center
        self.radius = radius
        self.radius2 = radius * radius
        self.material = material if material is not None else Material()

    def _nearest_root(self, ray: Ray) -> Optional[float]:
        offset = ray.origin - self.center
        a = dot(ray.direction, ray.direction)
        b = 2 * dot(ray.direction, offset)
        c = dot(offset, offset) - self.radius2
        roots = solve_quadratic(a, b, c)
        if roots is None:
            return None
        t0, t1 = roots
        if t0 < 0:
            t0 = t1
        if t0 < 0:
            return None
        return t0

    def hit_distance(self, ray: Ray) -> Optional[float]:
        return self._nearest_root(ray)

    def get_intersection(self, ray: Ray) -> Intersection:
        t = self._nearest_root(ray)
        if t is None:
            return Intersection()
        coords = ray.origin + ray.direction * t
        return Intersection(
            happened=True,
            coords=coords,
            normal=normalize(coords - self.center),
            distance=t,
            obj=self,
            material=self.material,
        )

    def surface_properties(
        self, point: Vec3, direction: Vec3, index: int, uv: Vec2
    ) -> Tuple[Vec3, Vec2]:
        return normalize(point - self.center), Vec2()

    def eval_diffuse_color(self, st: Vec2) -> Vec3:
        return self.material.color

    def bounds(self) -> Bounds3:
        r = Vec3.splat(self.radius)
        return Bounds3.from_points(self.center - r, self.center + r)


class Triangle(Shape):
    """A single triangle; vertices are in counter-clockwise order."""

    def __init__(
        self,
        v0: Vec3,
        v1: Vec3,
        v2: Vec3,
        material: Optional[Material] = None,
        tex_coords: Optional[TexCoords] = None,
    ) -> None:
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.material = material
        self.tex_coords: TexCoords = tex_coords or (Vec2(), Vec2(), Vec2())
        self.e1 = v1 - v0
        self.e2 = v2 - v0
        self.normal = normalize(cross(self.e1, self.e2))

    def get_intersection(self, ray: Ray) -> Intersection:
        if dot(ray.direction, self.normal) > 0:
            return Intersection()
        s = ray.origin - self.v0
        s1 = cross(ray.direction, self.e2)
        s2 = cross(s, self.e1)
        det = dot(self.e1, s1)
        if abs(det) < EPSILON:
            return Intersection()
        det_inv = 1.0 / det
        t = dot(s2, self.e2) * det_inv
        b1 = dot(s1, s) * det_inv
        if b1 < 0 or b1 > 1:
            return Intersection()
        b2 = dot(s2, ray.direction) * det_inv
        if b2 < 0 or b1 + b2 > 1:
            return Intersection()
        if t <= 0:
            return Intersection()
        return Intersection(
            happened=True,
            coords=ray.origin + ray.direction * t,
            normal=self.normal,
            distance=t,
            obj=self,
            material=self.material,
        )

    def surface_properties(
        self, point: Vec3, direction: Vec3, index: int, uv: Vec2
    ) -> Tuple[Vec3, Vec2]:
        return self.normal, Vec2()

    def eval_diffuse_color(self, st: Vec2) -> Vec3:
        return Vec3(0.5, 0.5, 0.5)

    def bounds(self) -> Bounds3:
        return union_point(Bounds3.from_points(self.v0, self.v1), self.v2)


class MeshTriangle(Shape):
    """A triangle mesh with its own hierarchy for ray queries."""

    def __init__(self, triangles: Sequence[Triangle], material: Optional[Material] = None) -> None:
        self.triangles = list(triangles)
        self.material = material
        self.bounding_box = reduce(
            union, (tri.bounds() for tri in self.triangles), Bounds3.empty()
        )
        self.bvh = BVHAccel(self.triangles)

    @classmethod
    def from_obj(cls, path: Union[str, Path], scale: float = 60.0) -> "MeshTriangle":
        """Build a mesh from an OBJ file holding exactly one mesh, scaling every vertex."""
        loader = load_obj(path)
        if len(loader.meshes) != 1:
            raise ValueError(f"expected exactly one mesh in {path}, found {len(loader.meshes)}")
        vertices = loader.meshes[0].vertices
        triangles = []
        for start in range(0, len(vertices) - 2, 3):
            corners = vertices[start:start + 3]
            material = Material(
                MaterialType.DIFFUSE_AND_GLOSSY,
                Vec3(0.5, 0.5, 0.5),
                Vec3(0, 0, 0),
                kd=0.6,
                ks=0.0,
                specular_exponent=0.0,
            )
            positions = [vertex.position * scale for vertex in corners]
            tex = tuple(vertex.texture_coordinate for vertex in corners)
            triangles.append(Triangle(*positions, material=material, tex_coords=tex))
        return cls(triangles)

    def get_intersection(self, ray: Ray) -> Intersection:
        return self.bvh.intersect(ray)

    def surface_properties(
        self, point: Vec3, direction: Vec3, index: int, uv: Vec2
    ) -> Tuple[Vec3, Vec2]:
        tri = self.triangles[index]
        e0 = normalize(tri.v1 - tri.v0)
        e1 = normalize(tri.v2 - tri.v1)
        normal = normalize(cross(e0, e1))
        st0, st1, st2 = tri.tex_coords
        st = st0 * (1 - uv.x - uv.y) + st1 * uv.x + st2 * uv.y
        return normal, st

    def eval_diffuse_color(self, st: Vec2) -> Vec3:
        scale = 5
        pattern = (math.fmod(st.x * scale, 1) > 0.5) ^ (math.fmod(st.y * scale, 1) > 0.5)
        return lerp(_CHECKER_DARK, _CHECKER_LIGHT, float(pattern))

    def bounds(self) -> Bounds3:
        return self.bounding_box