"""String parsing and polygon geometry helpers for Wavefront OBJ data."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TypeVar

from raylab.vector import Vec2, Vec3, cross, dot

T = TypeVar("T")

_BLANKS = " \t"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Vertex:
    """A model vertex: position, normal and texture coordinate."""

    position: Vec3 = field(default_factory=Vec3)
    normal: Vec3 = field(default_factory=Vec3)
    texture_coordinate: Vec2 = field(default_factory=Vec2)


def split(text: str, token: str) -> List[str]:
    """Split ``text`` at ``token``.

    Consecutive tokens yield empty fields and a trailing token yields no
    trailing empty field.
    """
    out: List[str] = []
    temp = ""
    width = len(token)
    i = 0
    while i < len(text):
        if text[i:i + width] == token:
            if temp:
                out.append(temp)
                temp = ""
                i += width - 1
            else:
                out.append("")
        elif i + width >= len(text):
            out.append(temp + text[i:i + width])
            break
        else:
            temp += text[i]
        i += 1
    return out


def _first_not_blank(text: str, start: int = 0) -> Optional[int]:
    for pos in range(start, len(text)):
        if text[pos] not in _BLANKS:
            return pos
    return None


def _first_blank(text: str, start: int) -> Optional[int]:
    for pos in range(start, len(text)):
        if text[pos] in _BLANKS:
            return pos
    return None


def _last_not_blank(text: str) -> Optional[int]:
    for pos in range(len(text) - 1, -1, -1):
        if text[pos] not in _BLANKS:
            return pos
    return None


def tail(text: str) -> str:
    """Everything after the first token, with surrounding blanks removed."""
    token_start = _first_not_blank(text)
    if token_start is None:
        return ""
    space_start = _first_blank(text, token_start)
    if space_start is None:
        return ""
    tail_start = _first_not_blank(text, space_start)
    if tail_start is None:
        return ""
    tail_end = _last_not_blank(text)
    if tail_end is not None:
        return text[tail_start:tail_end + 1]
    return text[tail_start:]


def first_token(text: str) -> str:
    """The first blank-separated token of ``text``, or an empty string."""
    token_start = _first_not_blank(text)
    if token_start is None:
        return ""
    token_end = _first_blank(text, token_start)
    if token_end is None:
        return text[token_start:]
    return text[token_start:token_end]


def get_element(elements: Sequence[T], index: str) -> T:
    """Look up an OBJ index: 1-based when positive, from the end when negative."""
    match = _LEADING_INT.match(index)
    if match is None:
        raise ValueError(f"invalid OBJ index: {index!r}")
    idx = int(match.group(1))
    idx = len(elements) + idx if idx < 0 else idx - 1
    if not 0 <= idx < len(elements):
        raise IndexError(f"OBJ index {index!r} out of range for {len(elements)} elements")
    return elements[idx]


def magnitude(v: Vec3) -> float:
    """Euclidean length."""
    return math.sqrt(v.x * v.x + v.y * v.y + v.z * v.z)


def angle_between(a: Vec3, b: Vec3) -> float:
    """Angle between two non-zero vectors, in radians."""
    lengths = magnitude(a) * magnitude(b)
    if lengths == 0:
        raise ValueError("angle with a zero-length vector is undefined")
    cosine = max(-1.0, min(1.0, dot(a, b) / lengths))
    return math.acos(cosine)


def project(a: Vec3, b: Vec3) -> Vec3:
    """Projection of ``a`` onto the direction of ``b``."""
    length = magnitude(b)
    if length == 0:
        raise ValueError("cannot project onto a zero-length vector")
    bn = b / length
    return bn * dot(a, bn)


def same_side(p1: Vec3, p2: Vec3, a: Vec3, b: Vec3) -> bool:
    """Whether ``p1`` and ``p2`` lie on the same side of the line through ``a`` and ``b``."""
    edge = b - a
    cp1 = cross(edge, p1 - a)
    cp2 = cross(edge, p2 - a)
    return dot(cp1, cp2) >= 0


def triangle_normal(t1: Vec3, t2: Vec3, t3: Vec3) -> Vec3:
    """Unnormalised face normal of a triangle."""
    return cross(t2 - t1, t3 - t1)


def in_triangle(point: Vec3, t1: Vec3, t2: Vec3, t3: Vec3) -> bool:
    """Whether ``point`` lies within the triangle ``t1 t2 t3``."""
    within_prism = (
        same_side(point, t1, t2, t3)
        and same_side(point, t2, t1, t3)
        and same_side(point, t3, t1, t2)
    )
    if not within_prism:
        return False
    n = triangle_normal(t1, t2, t3)
    if magnitude(n) == 0:
        return False
    return magnitude(project(point, n)) == 0


def _emit(out: List[int], vertices: Sequence[Vertex], *targets: Vec3) -> None:
    for j, vertex in enumerate(vertices):
        for target in targets:
            if vertex.position == target:
                out.append(j)


def triangulate(vertices: Sequence[Vertex]) -> List[int]:
    """Ear-clip a polygon into triangles; returns indices into ``vertices``."""
    if len(vertices) < 3:
        return []
    if len(vertices) == 3:
        return [0, 1, 2]

    out: List[int] = []
    remaining = list(vertices)
    while remaining:
        count = len(remaining)
        prev, cur, nxt = remaining[-1], remaining[0], remaining[1 % count]

        if count == 3:
            _emit(out, vertices[:3], cur.position, prev.position, nxt.position)
            break

        if count == 4:
            _emit(out, vertices, cur.position, prev.position, nxt.position)
            corners = (cur.position, prev.position, nxt.position)
            other = next(
                (v.position for v in remaining if v.position not in corners),
                Vec3(),
            )
            _emit(out, vertices, prev.position, nxt.position, other)
            break

        for i, cur in enumerate(remaining):
            prev = remaining[i - 1]
            nxt = remaining[(i + 1) % count]
            corners = (prev.position, cur.position, nxt.position)
            blocked = any(
                in_triangle(v.position, *corners) and v.position not in corners
                for v in vertices
            )
            if blocked:
                continue
            _emit(out, vertices, cur.position, prev.position, nxt.position)
            for k, candidate in enumerate(remaining):
                if candidate.position == cur.position:
                    del remaining[k]
                    break
            break
        else:
            break
    return out