# pathtracer/geometry/hittable.py
from typing import Optional
from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vec3


class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("p", "normal", "material", "t", "u", "v", "front_face")

    def __init__(self, p: Vec3 = None, normal: Vec3 = None, material=None,
                 t: float = 0.0, u: float = 0.0, v: float = 0.0,
                 front_face: bool = True):
        self.p = p                    # Intersection point
        self.normal = normal          # Unit normal, always against the ray
        self.material = material      # Not owned; the scene owns materials
        self.t = t                    # Ray parameter at intersection
        self.u = u                    # Surface texture coordinates
        self.v = v
        self.front_face = front_face  # Whether the hit was on the outside

    def set_face_normal(self, ray: Ray, outward_normal: Vec3):
        """
        Ensures that the normal always points against the ray.
        outward_normal is assumed to have unit length.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal


class Hittable:
    """
    Base class for objects that can be hit by a ray. Every subclass carries
    a bounding box and an optional material reference.
    """
    material = None
    bbox: AABB = AABB.EMPTY

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        """
        Returns the closest intersection with t strictly inside ray_t, or
        None.
        """
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self) -> AABB:
        return self.bbox
