# pathtracer/geometry/plane.py
from typing import Optional
from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vec3, Point3
from pathtracer.errors import DegenerateGeometryError
from pathtracer.geometry.hittable import Hittable, HitRecord

PARALLEL_EPSILON = 1e-6
# An infinite plane gets a large but finite, thin box so it can sit in a BVH.
PLANE_EXTENT = 1000.0
PLANE_THICKNESS = 0.001


class Plane(Hittable):
    """
    Infinite plane through a point with the given normal.
    """
    def __init__(self, point: Point3, normal: Vec3, material):
        if normal.near_zero():
            raise DegenerateGeometryError("Plane normal must be non-zero")
        self.point = point
        self.normal = normal.normalize()
        self.material = material
        self.bbox = self._slab_box()

    def _slab_box(self) -> AABB:
        n = self.normal
        ax, ay, az = abs(n.x), abs(n.y), abs(n.z)
        wide = Interval(-PLANE_EXTENT, PLANE_EXTENT)
        if ay > ax and ay > az:
            return AABB(wide, Interval(self.point.y - PLANE_THICKNESS,
                                       self.point.y + PLANE_THICKNESS), wide)
        if ax > az:
            return AABB(Interval(self.point.x - PLANE_THICKNESS,
                                 self.point.x + PLANE_THICKNESS), wide, wide)
        return AABB(wide, wide, Interval(self.point.z - PLANE_THICKNESS,
                                         self.point.z + PLANE_THICKNESS))

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        denom = self.normal.dot(ray.direction)
        if abs(denom) < PARALLEL_EPSILON:
            return None

        t = (self.point - ray.origin).dot(self.normal) / denom
        if not ray_t.surrounds(t):
            return None

        rec = HitRecord()
        rec.t = t
        rec.p = ray.at(t)
        rec.set_face_normal(ray, self.normal)
        rec.material = self.material
        return rec
