from pathtracer.renderer.raytracer import Renderer, ray_color, render_row, sky_color
from pathtracer.renderer.tone_mapping import gamma_encode, save_image

__all__ = [
    "Renderer",
    "ray_color",
    "render_row",
    "sky_color",
    "gamma_encode",
    "save_image",
]
