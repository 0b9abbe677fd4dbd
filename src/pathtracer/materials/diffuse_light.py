# pathtracer/materials/diffuse_light.py
import random
from typing import Union
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Point3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material
from pathtracer.materials.textures import Texture, as_texture


class DiffuseLight(Material):
    """
    Emissive material. It is the only source of radiance in a scene apart
    from the background, and can be textured.
    """
    def __init__(self, emit: Union[Color, Texture]):
        self.texture = as_texture(emit)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> None:
        """
        Emissive materials do not scatter rays.
        """
        return None

    def emitted(self, u: float, v: float, p: Point3) -> Color:
        return self.texture.value(u, v, p)
