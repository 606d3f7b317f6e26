"""Bounding volume hierarchy over scene primitives."""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from functools import reduce
from typing import Iterable, List, Optional, Protocol

from raylab.bounds import Bounds3, union, union_point
from raylab.material import Intersection
from raylab.ray import Ray

logger = logging.getLogger(__name__)

MAX_PRIMS_IN_NODE_LIMIT = 255


class Primitive(Protocol):
    """Anything the hierarchy can hold."""

    def bounds(self) -> Bounds3: ...

    def get_intersection(self, ray: Ray) -> Intersection: ...


class SplitMethod(enum.Enum):
    """How interior nodes divide their primitives."""

    NAIVE = enum.auto()
    SAH = enum.auto()


@dataclass
class BVHNode:
    """A node of the hierarchy; leaves hold exactly one primitive."""

    bounds: Bounds3 = field(default_factory=Bounds3.empty)
    left: Optional["BVHNode"] = None
    right: Optional["BVHNode"] = None
    obj: Optional[Primitive] = None
    split_axis: int = 0
    first_prim_offset: int = 0
    n_primitives: int = 0

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


class BVHAccel:
    """Accelerates ray queries by splitting primitives along their longest axis."""

    def __init__(
        self,
        primitives: Iterable[Primitive],
        max_prims_in_node: int = 1,
        split_method: SplitMethod = SplitMethod.NAIVE,
    ) -> None:
        self.max_prims_in_node = min(MAX_PRIMS_IN_NODE_LIMIT, max_prims_in_node)
        self.split_method = split_method
        self.primitives: List[Primitive] = list(primitives)
        self.root: Optional[BVHNode] = None
        self.build_seconds = 0.0
        if not self.primitives:
            return
        start = time.perf_counter()
        self.root = self._build(self.primitives)
        self.build_seconds = time.perf_counter() - start
        logger.debug(
            "BVH generation complete for %d primitives in %.3f s",
            len(self.primitives),
            self.build_seconds,
        )

    def _build(self, objects: List[Primitive]) -> BVHNode:
        if len(objects) == 1:
            obj = objects[0]
            return BVHNode(bounds=obj.bounds(), obj=obj, n_primitives=1)
        if len(objects) == 2:
            left = self._build([objects[0]])
            right = self._build([objects[1]])
            return BVHNode(bounds=union(left.bounds, right.bounds), left=left, right=right)

        centroid_bounds = reduce(
            union_point,
            (obj.bounds().centroid() for obj in objects),
            Bounds3.empty(),
        )
        axis = centroid_bounds.max_extent()
        ordered = sorted(objects, key=lambda obj: obj.bounds().centroid()[axis])
        middle = len(ordered) // 2
        left = self._build(ordered[:middle])
        right = self._build(ordered[middle:])
        return BVHNode(
            bounds=union(left.bounds, right.bounds),
            left=left,
            right=right,
            split_axis=axis,
        )

    def world_bound(self) -> Bounds3:
        """Bounds of everything in the hierarchy; an empty box when it holds nothing."""
        if self.root is None:
            return Bounds3.empty()
        return self.root.bounds

    def intersect(self, ray: Ray) -> Intersection:
        """The nearest hit along ``ray``, or a record with ``happened`` false."""
        if self.root is None:
            return Intersection()
        d = ray.direction
        dir_is_neg = (int(d.x < 0), int(d.y < 0), int(d.z < 0))
        return self._intersect_node(self.root, ray, dir_is_neg)

    def _intersect_node(self, node: BVHNode, ray: Ray, dir_is_neg) -> Intersection:
        if not node.bounds.intersect_p(ray, ray.direction_inv, dir_is_neg):
            return Intersection()
        if node.is_leaf:
            return node.obj.get_intersection(ray)

        left = self._intersect_node(node.left, ray, dir_is_neg)
        right = self._intersect_node(node.right, ray, dir_is_neg)
        if left.happened and right.happened:
            return left if left.distance < right.distance else right
        if left.happened:
            return left
        if right.happened:
            return right
        return Intersection()