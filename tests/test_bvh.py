import pytest

from raylab.bounds import Bounds3, union
from raylab.bvh import BVHAccel, BVHNode, SplitMethod
from raylab.ray import Ray
from raylab.shapes import Sphere
from raylab.vector import Vec3, normalize


def _spheres():
    return [
        Sphere(Vec3(x + 0.3, y + 0.3, z), 0.7)
        for x in (-3, 0, 3)
        for y in (-3, 0, 3)
        for z in (-8, -14)
    ]


def _rays():
    steps = (-0.4, -0.2, 0.02, 0.21, 0.43)
    return [Ray(Vec3(), normalize(Vec3(a, b, -1))) for a in steps for b in steps]


def _brute_force(shapes, ray):
    hits = [s.get_intersection(ray) for s in shapes]
    return min((h for h in hits if h.happened), key=lambda h: h.distance, default=None)


def _nodes(node):
    yield node
    if node.left is not None:
        yield from _nodes(node.left)
    if node.right is not None:
        yield from _nodes(node.right)


def test_empty_hierarchy_reports_no_hit():
    bvh = BVHAccel([])
    assert bvh.root is None
    assert bvh.intersect(Ray(Vec3(), Vec3(0, 0, -1))).happened is False
    assert bvh.world_bound() == Bounds3.empty()


def test_defaults_and_node_limit():
    sphere = Sphere(Vec3(0.3, 0.3, -5), 1)
    bvh = BVHAccel([sphere])
    assert bvh.max_prims_in_node == 1
    assert bvh.split_method is SplitMethod.NAIVE
    assert BVHAccel([sphere], max_prims_in_node=1000).max_prims_in_node == 255


def test_single_primitive_is_leaf():
    sphere = Sphere(Vec3(0.3, 0.3, -5), 1)
    bvh = BVHAccel([sphere])
    assert bvh.root.is_leaf
    assert bvh.root.obj is sphere
    assert bvh.root.bounds == sphere.bounds()


def test_single_sphere_hit_distance():
    sphere = Sphere(Vec3(0.3, 0.3, -5), 1)
    ray = Ray(Vec3(0.3, 0.3, 0), Vec3(0, 0, -1))
    hit = BVHAccel([sphere]).intersect(ray)
    assert hit.happened
    assert hit.obj is sphere
    assert hit.distance == pytest.approx(sphere.hit_distance(ray))


def test_miss_when_pointing_away():
    bvh = BVHAccel(_spheres())
    hit = bvh.intersect(Ray(Vec3(), normalize(Vec3(0.1, 0.1, 1))))
    assert hit.happened is False


def test_nearest_along_axis_regardless_of_order():
    near = Sphere(Vec3(0.3, 0.3, -5), 1)
    middle = Sphere(Vec3(0.3, 0.3, -10), 1)
    far = Sphere(Vec3(0.3, 0.3, -15), 1)
    ray = Ray(Vec3(0.3, 0.3, 0), Vec3(0, 0, -1))
    for order in ([near, middle, far], [far, middle, near], [middle, far, near]):
        assert BVHAccel(order).intersect(ray).obj is near


def test_matches_brute_force():
    shapes = _spheres()
    bvh = BVHAccel(shapes)
    hits = 0
    for ray in _rays():
        expected = _brute_force(shapes, ray)
        got = bvh.intersect(ray)
        if expected is None:
            assert got.happened is False
        else:
            hits += 1
            assert got.happened
            assert got.obj is expected.obj
            assert got.distance == pytest.approx(expected.distance)
    assert hits > 0


def test_tree_structure_invariants():
    shapes = _spheres()
    bvh = BVHAccel(shapes)
    nodes = list(_nodes(bvh.root))
    leaves = [n for n in nodes if n.is_leaf]
    assert len(leaves) == len(shapes)
    assert {id(n.obj) for n in leaves} == {id(s) for s in shapes}
    for node in nodes:
        assert isinstance(node, BVHNode)
        if not node.is_leaf:
            assert node.left is not None and node.right is not None
            assert node.bounds == union(node.left.bounds, node.right.bounds)


def test_world_bound_holds_every_primitive():
    shapes = _spheres()
    world = BVHAccel(shapes).world_bound()
    for shape in shapes:
        box = shape.bounds()
        assert world.inside(box.p_min)
        assert world.inside(box.p_max)