# pathtracer/geometry/transform.py
"""
Instance transforms. Both wrappers alias the wrapped object instead of
copying it, so one scene object can be placed several times.
"""
import math
from typing import Optional
from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import degrees_to_radians
from pathtracer.core.vector import Vec3
from pathtracer.geometry.hittable import Hittable, HitRecord


class Translate(Hittable):
    def __init__(self, obj: Hittable, offset: Vec3):
        self.object = obj
        self.offset = offset
        self.material = obj.material
        self.bbox = obj.bounding_box() + offset

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        # Move the ray backwards by the offset
        offset_ray = Ray(ray.origin - self.offset, ray.direction, ray.time)

        rec = self.object.hit(offset_ray, ray_t)
        if rec is None:
            return None

        # Move the intersection point forwards by the offset
        rec.p = rec.p + self.offset
        return rec


class RotateY(Hittable):
    """
    Rotates the wrapped object by angle degrees about the Y axis.
    """
    def __init__(self, obj: Hittable, angle: float):
        self.object = obj
        self.angle = angle
        self.material = obj.material
        radians = degrees_to_radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)
        self.bbox = self._rotated_box(obj.bounding_box())

    def _rotated_box(self, box: AABB) -> AABB:
        if box.is_empty():
            return AABB.EMPTY
        lo = [math.inf, math.inf, math.inf]
        hi = [-math.inf, -math.inf, -math.inf]
        for x in (box.x.min, box.x.max):
            for y in (box.y.min, box.y.max):
                for z in (box.z.min, box.z.max):
                    corner = self._to_world(Vec3(x, y, z))
                    for axis in range(3):
                        lo[axis] = min(lo[axis], corner[axis])
                        hi[axis] = max(hi[axis], corner[axis])
        return AABB.from_points(Vec3(*lo), Vec3(*hi))

    def _to_object(self, p: Vec3) -> Vec3:
        return Vec3(self.cos_theta * p.x - self.sin_theta * p.z,
                    p.y,
                    self.sin_theta * p.x + self.cos_theta * p.z)

    def _to_world(self, p: Vec3) -> Vec3:
        return Vec3(self.cos_theta * p.x + self.sin_theta * p.z,
                    p.y,
                    -self.sin_theta * p.x + self.cos_theta * p.z)

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        rotated_ray = Ray(self._to_object(ray.origin),
                          self._to_object(ray.direction),
                          ray.time)

        rec = self.object.hit(rotated_ray, ray_t)
        if rec is None:
            return None

        rec.p = self._to_world(rec.p)
        rec.normal = self._to_world(rec.normal)
        return rec
