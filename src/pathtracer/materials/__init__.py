from pathtracer.materials.material import Material
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.textures import Texture, SolidColor, CheckerTexture

__all__ = [
    "Material",
    "Lambertian",
    "Metal",
    "Dielectric",
    "DiffuseLight",
    "Texture",
    "SolidColor",
    "CheckerTexture",
]
