"""Materials, lights and ray-hit records."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass, field
from typing import Any, Optional

from raylab.mathutil import random_float
from raylab.vector import Vec3


class MaterialType(enum.Enum):
    """How a surface scatters light."""

    DIFFUSE_AND_GLOSSY = enum.auto()
    REFLECTION_AND_REFRACTION = enum.auto()
    REFLECTION = enum.auto()


@dataclass
class Material:
    """Surface description used by the shading code."""

    type: MaterialType = MaterialType.DIFFUSE_AND_GLOSSY
    color: Vec3 = field(default_factory=lambda: Vec3(1, 1, 1))
    emission: Vec3 = field(default_factory=Vec3)
    ior: float = 1.3
    kd: float = 0.8
    ks: float = 0.2
    specular_exponent: float = 25.0

    def color_at(self, u: float, v: float) -> Vec3:
        """Texture lookup; materials carry no texture, so this is black."""
        return Vec3()


@dataclass
class Intersection:
    """Result of a ray-object query."""

    happened: bool = False
    coords: Vec3 = field(default_factory=Vec3)
    normal: Vec3 = field(default_factory=Vec3)
    distance: float = sys.float_info.max
    obj: Optional[Any] = None
    material: Optional[Material] = None


@dataclass
class Light:
    """A point light."""

    position: Vec3
    intensity: Vec3


@dataclass
class AreaLight(Light):
    """A rectangular light spanned by ``u`` and ``v`` from ``position``."""

    length: float = 100.0
    normal: Vec3 = field(default_factory=lambda: Vec3(0, -1, 0))
    u: Vec3 = field(default_factory=lambda: Vec3(1, 0, 0))
    v: Vec3 = field(default_factory=lambda: Vec3(0, 0, 1))

    def sample_point(self) -> Vec3:
        """A uniformly random point on the light's surface."""
        ru = random_float()
        rv = random_float()
        return self.position + ru * self.u + rv * self.v