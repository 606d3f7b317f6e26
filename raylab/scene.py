"""Scene description and Whitted-style shading over a bounding volume hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from raylab.bvh import BVHAccel, SplitMethod
from raylab.material import AreaLight, Intersection, Light, Material, MaterialType
from raylab.optics import fresnel, reflect, refract
from raylab.ray import Ray
from raylab.shapes import EPSILON, Shape
from raylab.vector import Vec2, Vec3, dot, normalize


@dataclass
class Scene:
    """Objects, lights and render settings."""

    width: int = 1280
    height: int = 960
    fov: float = 90.0
    background_color: Vec3 = field(
        default_factory=lambda: Vec3(0.235294, 0.67451, 0.843137)
    )
    max_depth: int = 5
    objects: List[Shape] = field(default_factory=list)
    lights: List[Light] = field(default_factory=list)
    bvh: Optional[BVHAccel] = field(default=None, init=False)

    def add_object(self, obj: Shape) -> None:
        """Add a shape; call ``build_bvh`` again before rendering."""
        self.objects.append(obj)

    def add_light(self, light: Light) -> None:
        self.lights.append(light)

    def build_bvh(self) -> BVHAccel:
        """Build the hierarchy over the current objects."""
        self.bvh = BVHAccel(self.objects, 1, SplitMethod.NAIVE)
        return self.bvh

    def intersect(self, ray: Ray) -> Intersection:
        """Nearest hit of ``ray``; the hierarchy must have been built."""
        if self.bvh is None:
            raise RuntimeError("scene hierarchy not built; call build_bvh() first")
        return self.bvh.intersect(ray)

    def trace(self, ray: Ray) -> Optional[Tuple[float, Shape]]:
        """Brute-force nearest hit over all objects: ``(distance, object)`` or ``None``."""
        nearest: Optional[Tuple[float, Shape]] = None
        for obj in self.objects:
            t = obj.hit_distance(ray)
            if t is not None and (nearest is None or t < nearest[0]):
                nearest = (t, obj)
        return nearest

    def cast_ray(self, ray: Ray, depth: int = 0) -> Vec3:
        """Colour seen along ``ray``, recursing for mirrors and glass."""
        if depth > self.max_depth:
            return Vec3()
        hit = self.intersect(ray)
        if not hit.happened:
            return self.background_color

        hit_point = hit.coords
        direction = ray.direction
        normal, st = hit.obj.surface_properties(hit_point, direction, 0, Vec2())
        material = hit.material if hit.material is not None else Material()
        offset = normal * EPSILON

        if material.type is MaterialType.REFLECTION_AND_REFRACTION:
            reflection_dir = normalize(reflect(direction, normal))
            refraction_dir = normalize(refract(direction, normal, material.ior))
            reflection_orig = (
                hit_point - offset if dot(reflection_dir, normal) < 0 else hit_point + offset
            )
            refraction_orig = (
                hit_point - offset if dot(refraction_dir, normal) < 0 else hit_point + offset
            )
            reflection_color = self.cast_ray(Ray(reflection_orig, reflection_dir), depth + 1)
            refraction_color = self.cast_ray(Ray(refraction_orig, refraction_dir), depth + 1)
            kr = fresnel(direction, normal, material.ior)
            return reflection_color * kr + refraction_color * (1 - kr)

        if material.type is MaterialType.REFLECTION:
            kr = fresnel(direction, normal, material.ior)
            reflection_dir = reflect(direction, normal)
            reflection_orig = (
                hit_point + offset if dot(reflection_dir, normal) < 0 else hit_point - offset
            )
            return self.cast_ray(Ray(reflection_orig, reflection_dir), depth + 1) * kr

        return self._phong(hit, material, normal, st, direction)

    def _phong(
        self, hit: Intersection, material: Material, normal: Vec3, st: Vec2, direction: Vec3
    ) -> Vec3:
        hit_point = hit.coords
        light_amt = Vec3()
        specular_color = Vec3()
        shadow_orig = (
            hit_point + normal * EPSILON
            if dot(direction, normal) < 0
            else hit_point - normal * EPSILON
        )
        for light in self.lights:
            if isinstance(light, AreaLight):
                continue
            light_dir = normalize(light.position - hit_point)
            l_dot_n = max(0.0, dot(light_dir, normal))
            in_shadow = self.intersect(Ray(shadow_orig, light_dir)).happened
            if not in_shadow:
                light_amt = light_amt + light.intensity * l_dot_n
            reflection_dir = reflect(-light_dir, normal)
            specular_color = specular_color + (
                max(0.0, -dot(reflection_dir, direction)) ** material.specular_exponent
            ) * light.intensity
        diffuse = hit.obj.eval_diffuse_color(st)
        return light_amt * (diffuse * material.kd + specular_color * material.ks)