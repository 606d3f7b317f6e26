"""Axis-aligned bounding boxes."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Sequence

from raylab.ray import Ray
from raylab.vector import Vec3, component_max, component_min

_BIG = sys.float_info.max


@dataclass(frozen=True)
class Bounds3:
    """A box given by its minimum and maximum corners."""

    p_min: Vec3
    p_max: Vec3

    @classmethod
    def empty(cls) -> "Bounds3":
        """An inverted box that any union replaces."""
        return cls(Vec3.splat(_BIG), Vec3.splat(-_BIG))

    @classmethod
    def from_points(cls, p1: Vec3, p2: Vec3) -> "Bounds3":
        """The smallest box holding both points."""
        return cls(component_min(p1, p2), component_max(p1, p2))

    def diagonal(self) -> Vec3:
        return self.p_max - self.p_min

    def max_extent(self) -> int:
        """Index of the longest axis: 0 for x, 1 for y, 2 for z."""
        d = self.diagonal()
        if d.x > d.y and d.x > d.z:
            return 0
        if d.y > d.z:
            return 1
        return 2

    def surface_area(self) -> float:
        d = self.diagonal()
        return 2 * (d.x * d.y + d.x * d.z + d.y * d.z)

    def centroid(self) -> Vec3:
        return 0.5 * self.p_min + 0.5 * self.p_max

    def intersect(self, other: "Bounds3") -> "Bounds3":
        """Overlap of two boxes, normalised so that min <= max per axis."""
        return Bounds3.from_points(
            component_max(self.p_min, other.p_min),
            component_min(self.p_max, other.p_max),
        )

    def offset(self, p: Vec3) -> Vec3:
        """Position of ``p`` relative to the box, 0 at ``p_min`` and 1 at ``p_max``."""
        o = p - self.p_min
        coords = []
        for value, lo, hi in zip(o, self.p_min, self.p_max):
            coords.append(value / (hi - lo) if hi > lo else value)
        return Vec3(*coords)

    def overlaps(self, other: "Bounds3") -> bool:
        return all(
            a_max >= b_min and a_min <= b_max
            for a_min, a_max, b_min, b_max in zip(
                self.p_min, self.p_max, other.p_min, other.p_max
            )
        )

    def inside(self, p: Vec3) -> bool:
        return all(lo <= v <= hi for v, lo, hi in zip(p, self.p_min, self.p_max))

    def __getitem__(self, index: int) -> Vec3:
        if index == 0:
            return self.p_min
        if index == 1:
            return self.p_max
        raise IndexError(f"Bounds3 index out of range: {index}")

    def intersect_p(self, ray: Ray, inv_dir: Vec3, dir_is_neg: Sequence[int]) -> bool:
        """Slab test: does the ray enter the box at a non-negative distance?"""
        enters = []
        exits = []
        for axis in range(3):
            t0 = (self.p_min[axis] - ray.origin[axis]) * inv_dir[axis]
            t1 = (self.p_max[axis] - ray.origin[axis]) * inv_dir[axis]
            if dir_is_neg[axis]:
                t0, t1 = t1, t0
            enters.append(t0)
            exits.append(t1)
        t_enter = max(enters)
        t_exit = min(exits)
        return t_enter < t_exit and t_exit >= 0


def union(b1: Bounds3, b2: Bounds3) -> Bounds3:
    """The smallest box holding both boxes."""
    return Bounds3(component_min(b1.p_min, b2.p_min), component_max(b1.p_max, b2.p_max))


def union_point(b: Bounds3, p: Vec3) -> Bounds3:
    """The smallest box holding ``b`` and the point ``p``."""
    return Bounds3(component_min(b.p_min, p), component_max(b.p_max, p))