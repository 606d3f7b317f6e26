import math

import pytest

from raylab.objgeometry import (
    Vertex,
    angle_between,
    first_token,
    get_element,
    in_triangle,
    magnitude,
    project,
    same_side,
    split,
    tail,
    triangle_normal,
    triangulate,
)
from raylab.vector import Vec3, dot


def _polygon(points):
    return [Vertex(position=Vec3(*p)) for p in points]


def test_split_spaces():
    assert split("1.0 2.0 3.0", " ") == ["1.0", "2.0", "3.0"]


def test_split_face_with_missing_texture():
    assert split("1//2", "/") == ["1", "", "2"]


def test_split_trailing_token_and_empty():
    assert split("a b ", " ") == ["a", "b"]
    assert split("", " ") == []


def test_split_single_field():
    assert split("v1", "/") == ["v1"]


def test_tail_strips_keyword_and_blanks():
    assert tail("v  1 2 3  ") == "1 2 3"
    assert tail("\tusemtl\tshiny") == "shiny"


def test_tail_without_rest_is_empty():
    assert tail("f") == ""
    assert tail("   ") == ""


def test_first_token():
    assert first_token("  vn 0 1 0") == "vn"
    assert first_token("mtllib") == "mtllib"
    assert first_token("") == ""
    assert first_token(" \t ") == ""


def test_get_element_positive_is_one_based():
    items = ["a", "b", "c"]
    assert get_element(items, "1") == "a"
    assert get_element(items, "3") == "c"


def test_get_element_negative_counts_from_end():
    items = ["a", "b", "c"]
    assert get_element(items, "-1") == "c"
    assert get_element(items, "-3") == "a"


def test_get_element_errors():
    with pytest.raises(IndexError):
        get_element(["a"], "0")
    with pytest.raises(IndexError):
        get_element(["a"], "2")
    with pytest.raises(ValueError):
        get_element(["a"], "x")


def test_magnitude_and_angle():
    assert magnitude(Vec3(3, 4, 0)) == pytest.approx(5.0)
    assert angle_between(Vec3(1, 0, 0), Vec3(0, 2, 0)) == pytest.approx(math.pi / 2)
    assert angle_between(Vec3(1, 1, 0), Vec3(2, 2, 0)) == pytest.approx(0.0, abs=1e-6)


def test_angle_with_zero_vector_raises():
    with pytest.raises(ValueError):
        angle_between(Vec3(), Vec3(1, 0, 0))


def test_project_is_parallel_and_leaves_perpendicular_residue():
    a, b = Vec3(2, 3, 4), Vec3(0, 0, 5)
    p = project(a, b)
    assert magnitude(p - Vec3(0, 0, 4)) == pytest.approx(0.0)
    assert dot(a - p, b) == pytest.approx(0.0)


def test_same_side():
    a, b = Vec3(0, 0, 0), Vec3(1, 0, 0)
    assert same_side(Vec3(0, 1, 0), Vec3(5, 2, 0), a, b)
    assert not same_side(Vec3(0, 1, 0), Vec3(0, -1, 0), a, b)


def test_triangle_normal_is_perpendicular_to_edges():
    t1, t2, t3 = Vec3(1, 0, 2), Vec3(3, 1, 0), Vec3(0, 4, 1)
    n = triangle_normal(t1, t2, t3)
    assert dot(n, t2 - t1) == pytest.approx(0.0)
    assert dot(n, t3 - t1) == pytest.approx(0.0)


def test_in_triangle():
    t1, t2, t3 = Vec3(0, 0, 0), Vec3(4, 0, 0), Vec3(0, 4, 0)
    assert in_triangle(Vec3(1, 1, 0), t1, t2, t3)
    assert not in_triangle(Vec3(5, 5, 0), t1, t2, t3)
    assert not in_triangle(Vec3(1, 1, 0), t1, t1, t1)


def test_triangulate_small_inputs():
    assert triangulate(_polygon([(0, 0, 0), (1, 0, 0)])) == []
    assert triangulate(_polygon([(0, 0, 0), (1, 0, 0), (0, 1, 0)])) == [0, 1, 2]


def test_triangulate_quad():
    quad = _polygon([(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)])
    assert triangulate(quad) == [0, 1, 3, 1, 2, 3]


def test_triangulate_pentagon_covers_all_vertices():
    points = [
        (math.cos(2 * math.pi * k / 5), math.sin(2 * math.pi * k / 5), 0.0)
        for k in range(5)
    ]
    indices = triangulate(_polygon(points))
    assert len(indices) == 9
    assert set(indices) == set(range(5))
    triangles = [indices[i:i + 3] for i in range(0, 9, 3)]
    assert all(len(set(tri)) == 3 for tri in triangles)


def test_vertex_defaults():
    v = Vertex()
    assert v.position == Vec3()
    assert v.normal == Vec3()
    assert v.texture_coordinate.x == 0.0 and v.texture_coordinate.y == 0.0