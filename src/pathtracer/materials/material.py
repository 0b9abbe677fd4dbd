# pathtracer/materials/material.py
import random
from typing import Optional, Tuple
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Point3
from pathtracer.geometry.hittable import HitRecord

BLACK = Color(0.0, 0.0, 0.0)


class Material:
    """
    Abstract material class. Subclasses must implement scatter(); emissive
    materials also override emitted().
    """
    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: random.Random) -> Optional[Tuple[Color, Ray]]:
        """
        Computes the attenuation and the scattered ray.
        Returns a tuple (attenuation, scattered_ray) or None if the ray is
        absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def emitted(self, u: float, v: float, p: Point3) -> Color:
        """
        Light emitted at the hit point. Non-emissive materials are black.
        """
        return BLACK
