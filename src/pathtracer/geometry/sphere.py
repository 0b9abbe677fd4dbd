# pathtracer/geometry/sphere.py
import math
from typing import Optional, Tuple
from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vec3, Point3
from pathtracer.errors import DegenerateGeometryError
from pathtracer.geometry.hittable import Hittable, HitRecord


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.

    When center_end is given the sphere moves linearly from center at ray
    time 0 to center_end at ray time 1, which produces motion blur.
    """
    def __init__(self, center: Point3, radius: float, material,
                 center_end: Optional[Point3] = None):
        if not radius > 0:
            raise DegenerateGeometryError(f"Sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = float(radius)
        self.material = material
        self.center_end = center_end
        self.motion = (center_end - center) if center_end is not None else None

        rvec = Vec3(radius, radius, radius)
        box = AABB.from_points(center - rvec, center + rvec)
        if center_end is not None:
            box_end = AABB.from_points(center_end - rvec, center_end + rvec)
            box = AABB.surrounding_box(box, box_end)
        self.bbox = box

    def center_at(self, time: float) -> Point3:
        if self.motion is None:
            return self.center
        return self.center + self.motion * time

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        center = self.center_at(ray.time)
        oc = center - ray.origin
        a = ray.direction.length_squared()
        h = ray.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = h * h - a * c

        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (h - sqrtd) / a
        if not ray_t.surrounds(root):
            root = (h + sqrtd) / a
            if not ray_t.surrounds(root):
                return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(root)
        outward_normal = (rec.p - center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        rec.u, rec.v = sphere_uv(outward_normal)
        rec.material = self.material
        return rec


def sphere_uv(p: Vec3) -> Tuple[float, float]:
    """
    Maps a point on the unit sphere to (u, v) in [0, 1]: u is the angle
    around the Y axis from X=-1, v the angle from Y=-1 to Y=+1.
    """
    theta = math.acos(max(-1.0, min(1.0, -p.y)))
    phi = math.atan2(-p.z, p.x) + math.pi
    return phi / (2 * math.pi), theta / math.pi
