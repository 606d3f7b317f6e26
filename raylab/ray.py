"""Rays with a cached inverse direction."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field

from raylab.vector import Vec3


def _inverse(component: float) -> float:
    if component == 0:
        return math.copysign(math.inf, component)
    return 1.0 / component


@dataclass
class Ray:
    """A ray ``origin + t * direction``."""

    origin: Vec3
    direction: Vec3
    t: float = 0.0
    direction_inv: Vec3 = field(init=False)
    t_min: float = field(init=False, default=0.0)
    t_max: float = field(init=False, default=sys.float_info.max)

    def __post_init__(self) -> None:
        d = self.direction
        self.direction_inv = Vec3(_inverse(d.x), _inverse(d.y), _inverse(d.z))

    def at(self, t: float) -> Vec3:
        """Point along the ray at parameter ``t``."""
        return self.origin + self.direction * t

    def __str__(self) -> str:
        return f"[origin:={self.origin}, direction={self.direction}, time={self.t:g}]\n"