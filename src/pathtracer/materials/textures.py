# pathtracer/materials/textures.py
import math
from typing import Union
from pathtracer.core.vector import Color, Point3


class Texture:
    """Base class for all textures."""
    def value(self, u: float, v: float, p: Point3) -> Color:
        """Evaluate the texture at surface coordinates (u, v) and point p."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")


class SolidColor(Texture):
    """A solid color texture."""
    def __init__(self, color: Color):
        self.color = color

    def value(self, u: float, v: float, p: Point3) -> Color:
        return self.color

    def __repr__(self) -> str:
        return f"SolidColor({self.color!r})"


class CheckerTexture(Texture):
    """
    A 3D checker pattern: space is cut into cubes of side `scale` and
    alternate cubes take the even or odd texture. It does not depend on the
    surface parameterization.
    """
    def __init__(self, scale: float, even: Union[Color, Texture], odd: Union[Color, Texture]):
        self.inv_scale = 1.0 / scale
        self.even = as_texture(even)
        self.odd = as_texture(odd)

    def value(self, u: float, v: float, p: Point3) -> Color:
        x = math.floor(self.inv_scale * p.x)
        y = math.floor(self.inv_scale * p.y)
        z = math.floor(self.inv_scale * p.z)
        is_even = (x + y + z) % 2 == 0
        return self.even.value(u, v, p) if is_even else self.odd.value(u, v, p)


def as_texture(value: Union[Color, Texture]) -> Texture:
    """Wraps a plain color in a SolidColor; textures pass through."""
    if isinstance(value, Texture):
        return value
    return SolidColor(value)
