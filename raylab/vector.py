"""Small 2D and 3D vector types and the geometric helpers used by the renderers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

Scalar = Union[int, float]


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable three-component vector, also used for RGB colours."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def splat(cls, value: Scalar) -> "Vec3":
        """Return a vector with every component set to ``value``."""
        return cls(value, value, value)

    def __add__(self, other: "Vec3") -> "Vec3":
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Union["Vec3", Scalar]) -> "Vec3":
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> "Vec3":
        if isinstance(other, (int, float)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __truediv__(self, scalar: Scalar) -> "Vec3":
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> "Vec3":
        return Vec3(-self.x, -self.y, -self.z)

    def __getitem__(self, index: int) -> float:
        if index == 0:
            return self.x
        if index == 1:
            return self.y
        if index == 2:
            return self.z
        raise IndexError(f"Vec3 index out of range: {index}")

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __str__(self) -> str:
        return f"{self.x:g}, {self.y:g}, {self.z:g}"


@dataclass(frozen=True, slots=True)
class Vec2:
    """An immutable two-component vector, used for texture coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __mul__(self, scalar: Scalar) -> "Vec2":
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vec2(self.x * scalar, self.y * scalar)


def lerp(a: Vec3, b: Vec3, t: float) -> Vec3:
    """Linear interpolation between ``a`` (t=0) and ``b`` (t=1)."""
    return a * (1 - t) + b * t


def normalize(v: Vec3) -> Vec3:
    """Return ``v`` scaled to unit length; a zero vector is returned unchanged."""
    mag2 = v.x * v.x + v.y * v.y + v.z * v.z
    if mag2 > 0:
        inv_mag = 1 / math.sqrt(mag2)
        return Vec3(v.x * inv_mag, v.y * inv_mag, v.z * inv_mag)
    return v


def dot(a: Vec3, b: Vec3) -> float:
    """Dot product."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Cross product."""
    return Vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def component_min(a: Vec3, b: Vec3) -> Vec3:
    """Component-wise minimum."""
    return Vec3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))


def component_max(a: Vec3, b: Vec3) -> Vec3:
    """Component-wise maximum."""
    return Vec3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))