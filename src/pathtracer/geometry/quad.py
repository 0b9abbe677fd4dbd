# pathtracer/geometry/quad.py
from typing import Optional
from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vec3, Point3
from pathtracer.errors import DegenerateGeometryError
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.world import HittableList

PARALLEL_EPSILON = 1e-8
UNIT_INTERVAL = Interval(0.0, 1.0)


class Quad(Hittable):
    """
    Parallelogram with corner Q and edge vectors u and v, spanning
    Q, Q+u, Q+v and Q+u+v. The front face is on the side of cross(u, v).
    """
    def __init__(self, Q: Point3, u: Vec3, v: Vec3, material):
        n = u.cross(v)
        if n.near_zero():
            raise DegenerateGeometryError("Quad edges must be non-zero and not parallel")
        self.Q = Q
        self.u = u
        self.v = v
        self.material = material

        self.normal = n.normalize()
        self.D = self.normal.dot(Q)
        # Projects a planar offset onto (alpha, beta) along u and v.
        self.w = n / n.dot(n)

        bbox_diagonal1 = AABB.from_points(Q, Q + u + v)
        bbox_diagonal2 = AABB.from_points(Q + u, Q + v)
        self.bbox = AABB.surrounding_box(bbox_diagonal1, bbox_diagonal2).pad_to_minimums()

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        denom = self.normal.dot(ray.direction)

        # No hit if the ray is parallel to the plane.
        if abs(denom) < PARALLEL_EPSILON:
            return None

        t = (self.D - self.normal.dot(ray.origin)) / denom
        if not ray_t.surrounds(t):
            return None

        intersection = ray.at(t)
        planar_hitpt_vector = intersection - self.Q
        alpha = self.w.dot(planar_hitpt_vector.cross(self.v))
        beta = self.w.dot(self.u.cross(planar_hitpt_vector))

        if not (UNIT_INTERVAL.contains(alpha) and UNIT_INTERVAL.contains(beta)):
            return None

        rec = HitRecord()
        rec.t = t
        rec.p = intersection
        rec.u = alpha
        rec.v = beta
        rec.set_face_normal(ray, self.normal)
        rec.material = self.material
        return rec


def box(a: Point3, b: Point3, material) -> HittableList:
    """
    Returns the six quads of the box with opposite corners a and b.
    """
    sides = HittableList()
    lo = Vec3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))
    hi = Vec3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))

    dx = Vec3(hi.x - lo.x, 0, 0)
    dy = Vec3(0, hi.y - lo.y, 0)
    dz = Vec3(0, 0, hi.z - lo.z)

    sides.add(Quad(Vec3(lo.x, lo.y, hi.z), dx, dy, material))   # front
    sides.add(Quad(Vec3(hi.x, lo.y, hi.z), -dz, dy, material))  # right
    sides.add(Quad(Vec3(hi.x, lo.y, lo.z), -dx, dy, material))  # back
    sides.add(Quad(Vec3(lo.x, lo.y, lo.z), dz, dy, material))   # left
    sides.add(Quad(Vec3(lo.x, hi.y, hi.z), dx, -dz, material))  # top
    sides.add(Quad(Vec3(lo.x, lo.y, lo.z), dx, dz, material))   # bottom
    return sides
