# pathtracer/materials/metal.py
import random
from typing import Optional, Tuple, Union
from pathtracer.core.ray import Ray
from pathtracer.core.utils import reflect, random_unit_vector
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material
from pathtracer.materials.textures import Texture, as_texture


class Metal(Material):
    """
    Metal material with reflective properties and optional texture support.
    fuzz in [0, 1] blurs the reflection; larger values are clamped to 1.
    """
    def __init__(self, albedo: Union[Color, Texture], fuzz: float = 0.0):
        self.texture = as_texture(albedo)
        self.fuzz = min(fuzz, 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: random.Random) -> Optional[Tuple[Color, Ray]]:
        reflected = reflect(ray_in.direction, rec.normal).normalize()
        reflected = reflected + random_unit_vector(rng) * self.fuzz
        scattered = Ray(rec.p, reflected, ray_in.time)

        # Absorb the ray if the fuzzed reflection points into the surface
        if scattered.direction.dot(rec.normal) <= 0:
            return None

        attenuation = self.texture.value(rec.u, rec.v, rec.p)
        return attenuation, scattered
