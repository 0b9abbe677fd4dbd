# pathtracer/materials/dielectric.py
import math
import random
from typing import Tuple
from pathtracer.core.ray import Ray
from pathtracer.core.utils import reflect, refract, reflectance
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material

WHITE = Color(1.0, 1.0, 1.0)


class Dielectric(Material):
    """
    Clear refractive material such as glass or water. refraction_index is
    the index of the material over that of the enclosing medium.
    """
    def __init__(self, refraction_index: float):
        if refraction_index <= 0:
            raise ValueError(f"refraction_index must be positive, got {refraction_index}")
        self.refraction_index = refraction_index

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: random.Random) -> Tuple[Color, Ray]:
        # Glass doesn't absorb light
        attenuation = WHITE

        # Leaving the medium inverts the ratio
        ri = 1.0 / self.refraction_index if rec.front_face else self.refraction_index

        unit_direction = ray_in.direction.normalize()
        cos_theta = min((-unit_direction).dot(rec.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        cannot_refract = ri * sin_theta > 1.0
        if cannot_refract or reflectance(cos_theta, ri) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ri)

        return attenuation, Ray(rec.p, direction, ray_in.time)
