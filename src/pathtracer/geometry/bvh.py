# pathtracer/geometry/bvh.py
"""
Bounding volume hierarchy over scene objects.

The tree has two node kinds. A BVHLeaf aliases exactly one scene-owned
hittable and never copies it. A BVHNode owns the two child nodes that
build_bvh created for it. Scene objects are therefore only ever reachable
through leaves, and each appears in exactly one leaf.
"""
import logging
from typing import Iterator, List, Optional, Sequence, Union
import numpy as np
from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.errors import EmptySceneError
from pathtracer.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)


class BVHLeaf(Hittable):
    """Non-owning reference to one scene object."""

    def __init__(self, obj: Hittable):
        self.object = obj
        self.bbox = obj.bounding_box()

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        return self.object.hit(ray, ray_t)

    def leaves(self) -> Iterator["BVHLeaf"]:
        yield self

    def node_count(self) -> int:
        return 1

    def depth(self) -> int:
        return 1


class BVHNode(Hittable):
    """Internal node owning its left and right subtrees."""

    def __init__(self, left: "BVHTree", right: "BVHTree"):
        self.left = left
        self.right = right
        self.bbox = AABB.surrounding_box(left.bounding_box(), right.bounding_box())

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        if not self.bbox.hit(ray, ray_t):
            return None

        hit_left = self.left.hit(ray, ray_t)
        # The right subtree can only report something closer than the left hit
        right_t = Interval(ray_t.min, hit_left.t if hit_left is not None else ray_t.max)
        hit_right = self.right.hit(ray, right_t)

        return hit_right if hit_right is not None else hit_left

    def leaves(self) -> Iterator[BVHLeaf]:
        yield from self.left.leaves()
        yield from self.right.leaves()

    def node_count(self) -> int:
        return 1 + self.left.node_count() + self.right.node_count()

    def depth(self) -> int:
        return 1 + max(self.left.depth(), self.right.depth())


BVHTree = Union[BVHLeaf, BVHNode]


def build_bvh(objects: Sequence[Hittable]) -> BVHTree:
    """
    Builds a BVH over objects and returns its root.

    The input sequence is not modified; the builder partitions its own
    list of references.

    Raises:
        EmptySceneError: if objects is empty.
    """
    if len(objects) == 0:
        raise EmptySceneError("Cannot build a BVH over zero objects")

    work = list(objects)
    root = _build(work, 0, len(work))
    logger.info("BVH built: %d objects, %d nodes, depth %d",
                len(work), root.node_count(), root.depth())
    return root


def _build(objects: List[Hittable], start: int, end: int) -> BVHTree:
    object_span = end - start
    if object_span == 1:
        return BVHLeaf(objects[start])

    # Bounding box of all objects in this range decides the split axis
    box = AABB.EMPTY
    for i in range(start, end):
        box = AABB.surrounding_box(box, objects[i].bounding_box())
    axis = box.longest_axis()

    if object_span == 2:
        a, b = objects[start], objects[start + 1]
        if _box_min(b, axis) < _box_min(a, axis):
            a, b = b, a
        return BVHNode(BVHLeaf(a), BVHLeaf(b))

    # Partial sort: only the midpoint split has to be right, not the order
    # within each half
    mid_offset = object_span // 2
    keys = np.fromiter((_box_min(objects[i], axis) for i in range(start, end)),
                       dtype=np.float64, count=object_span)
    order = np.argpartition(keys, mid_offset, kind='introselect')
    objects[start:end] = [objects[start + int(k)] for k in order]

    mid = start + mid_offset
    return BVHNode(_build(objects, start, mid), _build(objects, mid, end))


def _box_min(obj: Hittable, axis: int) -> float:
    return obj.bounding_box().axis_interval(axis).min
