# pathtracer/geometry/triangle.py
from typing import Optional
from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vec3, Point3
from pathtracer.errors import DegenerateGeometryError
from pathtracer.geometry.hittable import Hittable, HitRecord

DETERMINANT_EPSILON = 1e-13
MIN_AREA = 1e-10
BOX_PADDING = 0.001


class Triangle(Hittable):
    """
    A single triangle with precomputed edges and face normal. The face
    normal follows the winding v0 -> v1 -> v2.
    """
    def __init__(self, v0: Point3, v1: Point3, v2: Point3, material=None):
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.edge1 = v1 - v0
        self.edge2 = v2 - v0
        n = self.edge1.cross(self.edge2)
        if n.length() * 0.5 < MIN_AREA:
            raise DegenerateGeometryError(f"Triangle has zero area: {v0}, {v1}, {v2}")
        self.normal = n.normalize()
        self.material = material

        pad = Vec3(BOX_PADDING, BOX_PADDING, BOX_PADDING)
        lo = Vec3(min(v0.x, v1.x, v2.x), min(v0.y, v1.y, v2.y), min(v0.z, v1.z, v2.z))
        hi = Vec3(max(v0.x, v1.x, v2.x), max(v0.y, v1.y, v2.y), max(v0.z, v1.z, v2.z))
        self.bbox = AABB.from_points(lo - pad, hi + pad)

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        # Möller–Trumbore intersection algorithm
        h = ray.direction.cross(self.edge2)
        det = self.edge1.dot(h)

        # Ray is parallel to the triangle
        if abs(det) < DETERMINANT_EPSILON:
            return None

        inv = 1.0 / det
        s = ray.origin - self.v0
        u = inv * s.dot(h)
        if u < 0.0 or u > 1.0:
            return None

        q = s.cross(self.edge1)
        v = inv * ray.direction.dot(q)
        if v < 0.0 or u + v > 1.0:
            return None

        t = inv * self.edge2.dot(q)
        if not ray_t.surrounds(t):
            return None

        rec = HitRecord()
        rec.t = t
        rec.p = ray.at(t)
        rec.u = u
        rec.v = v
        rec.set_face_normal(ray, self.normal)
        rec.material = self.material
        return rec

    def __repr__(self) -> str:
        return f"Triangle({self.v0!r}, {self.v1!r}, {self.v2!r})"
