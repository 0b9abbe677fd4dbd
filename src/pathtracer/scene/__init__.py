from pathtracer.scene.scene import Scene
from pathtracer.scene.parser import parse_scene, parse_scene_string
from pathtracer.scene.presets import PRESETS, checkered_spheres, cornell_box, load_preset

__all__ = [
    "Scene",
    "parse_scene",
    "parse_scene_string",
    "PRESETS",
    "checkered_spheres",
    "cornell_box",
    "load_preset",
]
