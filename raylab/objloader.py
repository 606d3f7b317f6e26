"""Wavefront OBJ and MTL file loading."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from raylab.objgeometry import (
    Vertex,
    first_token,
    get_element,
    split,
    tail,
    triangulate,
)
from raylab.vector import Vec2, Vec3, cross

PathLike = Union[str, Path]

_LEADING_FLOAT = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_float(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    if match is None:
        raise ValueError(f"expected a number, got {text!r}")
    return float(match.group(1))


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"expected an integer, got {text!r}")
    return int(match.group(1))


def _to_vec3(fields: Sequence[str]) -> Vec3:
    return Vec3(_to_float(fields[0]), _to_float(fields[1]), _to_float(fields[2]))


def _read_lines(path: PathLike):
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            yield line.rstrip("\n")


@dataclass
class ObjMaterial:
    """A material read from an MTL file."""

    name: str = ""
    ka: Vec3 = field(default_factory=Vec3)
    kd: Vec3 = field(default_factory=Vec3)
    ks: Vec3 = field(default_factory=Vec3)
    ns: float = 0.0
    ni: float = 0.0
    d: float = 0.0
    illum: int = 0
    map_ka: str = ""
    map_kd: str = ""
    map_ks: str = ""
    map_ns: str = ""
    map_d: str = ""
    map_bump: str = ""


@dataclass
class Mesh:
    """A named list of vertices with triangle indices into it."""

    vertices: List[Vertex] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    name: str = ""
    material: Optional[ObjMaterial] = None


def _face_vertices(
    line: str,
    positions: Sequence[Vec3],
    tcoords: Sequence[Vec2],
    normals: Sequence[Vec3],
) -> List[Vertex]:
    out: List[Vertex] = []
    no_normal = False
    position = Vec3()
    normal = Vec3()
    texture = Vec2()
    for item in split(tail(line), " "):
        parts = split(item, "/")
        if len(parts) == 1:
            position = get_element(positions, parts[0])
            texture = Vec2(0, 0)
            no_normal = True
        elif len(parts) == 2:
            position = get_element(positions, parts[0])
            texture = get_element(tcoords, parts[1])
            no_normal = True
        elif len(parts) == 3 and parts[1] == "":
            position = get_element(positions, parts[0])
            texture = Vec2(0, 0)
            normal = get_element(normals, parts[2])
        elif len(parts) == 3:
            position = get_element(positions, parts[0])
            texture = get_element(tcoords, parts[1])
            normal = get_element(normals, parts[2])
        else:
            continue
        out.append(Vertex(position, normal, texture))

    # Faces without normals get a flat normal from their first three corners.
    if no_normal and len(out) >= 3:
        a = out[0].position - out[1].position
        b = out[2].position - out[1].position
        flat = cross(a, b)
        for vertex in out:
            vertex.normal = flat
    return out


class Loader:
    """Reads OBJ models and the MTL material libraries they reference."""

    def __init__(self) -> None:
        self.meshes: List[Mesh] = []
        self.vertices: List[Vertex] = []
        self.indices: List[int] = []
        self.materials: List[ObjMaterial] = []

    def load_file(self, path: PathLike) -> bool:
        """Load an OBJ file, replacing previously loaded geometry.

        Returns whether any geometry was found. Raises ``ValueError`` for a
        path without the ``.obj`` extension and ``OSError`` if it cannot be read.
        """
        path_text = str(path)
        if not path_text.endswith(".obj"):
            raise ValueError(f"not an OBJ file: {path_text}")
        lines = list(_read_lines(path_text))

        self.meshes = []
        self.vertices = []
        self.indices = []

        positions: List[Vec3] = []
        tcoords: List[Vec2] = []
        normals: List[Vec3] = []
        vertices: List[Vertex] = []
        indices: List[int] = []
        material_names: List[str] = []
        listening = False
        mesh_name = ""

        for line in lines:
            token = first_token(line)

            if token in ("o", "g") or line.startswith("g"):
                named = token in ("o", "g")
                if not listening:
                    listening = True
                    mesh_name = tail(line) if named else "unnamed"
                elif indices and vertices:
                    self.meshes.append(Mesh(vertices, indices, mesh_name))
                    vertices, indices = [], []
                    mesh_name = tail(line)
                else:
                    mesh_name = tail(line) if named else "unnamed"

            if token == "v":
                positions.append(_to_vec3(split(tail(line), " ")))
            elif token == "vt":
                fields = split(tail(line), " ")
                tcoords.append(Vec2(_to_float(fields[0]), _to_float(fields[1])))
            elif token == "vn":
                normals.append(_to_vec3(split(tail(line), " ")))
            elif token == "f":
                face = _face_vertices(line, positions, tcoords, normals)
                vertices.extend(face)
                self.vertices.extend(face)
                for index in triangulate(face):
                    indices.append(len(vertices) - len(face) + index)
                    self.indices.append(len(self.vertices) - len(face) + index)
            elif token == "usemtl":
                material_names.append(tail(line))
                # A material change inside a group starts a new mesh.
                if indices and vertices:
                    self.meshes.append(Mesh(vertices, indices, f"{mesh_name}_2"))
                    vertices, indices = [], []
            elif token == "mtllib":
                parts = split(path_text, "/")
                prefix = "".join(f"{part}/" for part in parts[:-1]) if len(parts) != 1 else ""
                try:
                    self.load_materials(prefix + tail(line))
                except (ValueError, OSError):
                    pass

        if indices and vertices:
            self.meshes.append(Mesh(vertices, indices, mesh_name))

        for mesh, material_name in zip(self.meshes, material_names):
            mesh.material = next(
                (m for m in self.materials if m.name == material_name), mesh.material
            )

        return bool(self.meshes or self.vertices or self.indices)

    def load_materials(self, path: PathLike) -> None:
        """Append the materials of an MTL file to ``materials``.

        Raises ``ValueError`` for a path without the ``.mtl`` extension and
        ``OSError`` if it cannot be read.
        """
        path_text = str(path)
        if not path_text.endswith(".mtl"):
            raise ValueError(f"not an MTL file: {path_text}")
        lines = list(_read_lines(path_text))

        current = ObjMaterial()
        listening = False
        for line in lines:
            token = first_token(line)
            if token == "newmtl":
                if listening:
                    self.materials.append(current)
                    current = ObjMaterial()
                listening = True
                current.name = tail(line) if len(line) > 7 else "none"
            elif token in ("Ka", "Kd", "Ks"):
                fields = split(tail(line), " ")
                if len(fields) != 3:
                    continue
                setattr(current, token.lower(), _to_vec3(fields))
            elif token == "Ns":
                current.ns = _to_float(tail(line))
            elif token == "Ni":
                current.ni = _to_float(tail(line))
            elif token == "d":
                current.d = _to_float(tail(line))
            elif token == "illum":
                current.illum = _to_int(tail(line))
            elif token == "map_Ka":
                current.map_ka = tail(line)
            elif token == "map_Kd":
                current.map_kd = tail(line)
            elif token == "map_Ks":
                current.map_ks = tail(line)
            elif token == "map_Ns":
                current.map_ns = tail(line)
            elif token == "map_d":
                current.map_d = tail(line)
            elif token in ("map_Bump", "map_bump", "bump"):
                current.map_bump = tail(line)

        self.materials.append(current)


def load_obj(path: PathLike) -> Loader:
    """Load an OBJ file; raises ``ValueError`` if it holds no geometry."""
    loader = Loader()
    if not loader.load_file(path):
        raise ValueError(f"no geometry found in {path}")
    return loader