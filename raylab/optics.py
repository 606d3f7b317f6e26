"""Reflection, refraction and Fresnel reflectance."""

from __future__ import annotations

import math

from raylab.mathutil import clamp
from raylab.vector import Vec3, dot


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Mirror ``incident`` about ``normal``."""
    return incident - 2 * dot(incident, normal) * normal


def refract(incident: Vec3, normal: Vec3, ior: float) -> Vec3:
    """Refraction direction by Snell's law.

    Handles rays arriving from inside the object by swapping the indices and
    flipping the normal. Returns the zero vector on total internal reflection.
    """
    cosi = clamp(-1, 1, dot(incident, normal))
    etai, etat = 1.0, ior
    n = normal
    if cosi < 0:
        cosi = -cosi
    else:
        etai, etat = etat, etai
        n = -normal
    eta = etai / etat
    k = 1 - eta * eta * (1 - cosi * cosi)
    if k < 0:
        return Vec3()
    return eta * incident + (eta * cosi - math.sqrt(k)) * n


def fresnel(incident: Vec3, normal: Vec3, ior: float) -> float:
    """Fraction of light reflected at the surface; transmittance is ``1 - kr``."""
    cosi = clamp(-1, 1, dot(incident, normal))
    etai, etat = 1.0, ior
    if cosi > 0:
        etai, etat = etat, etai
    sint = etai / etat * math.sqrt(max(0.0, 1 - cosi * cosi))
    if sint >= 1:
        return 1.0
    cost = math.sqrt(max(0.0, 1 - sint * sint))
    cosi = abs(cosi)
    rs = ((etat * cosi) - (etai * cost)) / ((etat * cosi) + (etai * cost))
    rp = ((etai * cosi) - (etat * cost)) / ((etai * cosi) + (etat * cost))
    return (rs * rs + rp * rp) / 2