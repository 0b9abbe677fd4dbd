# pathtracer/scene/parser.py
"""
Reader for the block-structured scene description format.

A scene file is a sequence of blocks, each opened by a header line ending in
``{`` and closed by a line holding only ``}``. Inside a block every line is
``key value...``. ``#`` starts a comment. Example::

    camera {
        width 400
        aspect_ratio 16 9
        lookfrom 13 2 3
        lookat 0 0 0
        background sky
    }
    texture ground checker {
        scale 0.32
        even 0.2 0.3 0.1
        odd 0.9 0.9 0.9
    }
    material floor lambertian {
        texture ground
    }
    sphere {
        center 0 -1000 0
        radius 1000
        material floor
    }

Blocks are applied in file order, so a material must be defined before the
objects that use it.
"""
import logging
import os
from typing import Callable, Dict, List, Optional, Tuple

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vec3, Color
from pathtracer.errors import DegenerateGeometryError, SceneParseError, SceneReferenceError
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.mesh import load_obj
from pathtracer.geometry.plane import Plane
from pathtracer.geometry.quad import Quad, box
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.transform import RotateY, Translate
from pathtracer.geometry.triangle import Triangle
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal
from pathtracer.materials.textures import CheckerTexture, SolidColor, Texture
from pathtracer.scene.scene import Scene

logger = logging.getLogger(__name__)

# Keys every object block accepts on top of its own
TRANSFORM_KEYS = ("rotate_y", "translate")


class Block:
    """One parsed ``header {`` ... ``}`` block."""
    def __init__(self, kind: str, args: List[str], line: int):
        self.kind = kind
        self.args = args
        self.line = line
        self.entries: Dict[str, Tuple[List[str], int]] = {}

    def __repr__(self) -> str:
        return f"Block({self.kind!r}, {self.args!r}, line={self.line})"


def tokenize_blocks(text: str, filename: str = "<string>") -> List[Block]:
    """Splits scene text into blocks without interpreting any values."""
    blocks: List[Block] = []
    current: Optional[Block] = None

    for line_num, raw in enumerate(text.splitlines(), 1):
        line = raw.split('#', 1)[0].strip()
        if not line:
            continue

        if current is None:
            tokens = line.split()
            if tokens[-1] != '{':
                raise SceneParseError(f"Expected a block header ending in '{{', got {line!r}",
                                      filename, line_num)
            if len(tokens) < 2:
                raise SceneParseError("Block header has no type", filename, line_num)
            current = Block(tokens[0], tokens[1:-1], line_num)
            continue

        if line == '}':
            blocks.append(current)
            current = None
            continue

        tokens = line.split()
        if '{' in tokens or '}' in tokens:
            raise SceneParseError("Blocks cannot be nested", filename, line_num)
        key, values = tokens[0], tokens[1:]
        if key in current.entries:
            raise SceneParseError(f"Duplicate key {key!r} in {current.kind} block",
                                  filename, line_num)
        current.entries[key] = (values, line_num)

    if current is not None:
        raise SceneParseError(f"Unterminated {current.kind} block", filename, current.line)
    return blocks


class SceneParser:
    """
    Builds a Scene and a Camera from parsed blocks. Relative mesh paths are
    resolved against base_dir.
    """
    def __init__(self, filename: str = "<string>", base_dir: str = "."):
        self.filename = filename
        self.base_dir = base_dir
        self.scene = Scene()
        self.camera: Optional[Camera] = None
        self._object_builders: Dict[str, Tuple[Tuple[str, ...], Callable[[Block], Hittable]]] = {
            "sphere": (("center", "radius", "center_end", "material"), self._sphere),
            "plane": (("point", "normal", "material"), self._plane),
            "quad": (("q", "u", "v", "material"), self._quad),
            "box": (("a", "b", "material"), self._box),
            "triangle": (("v0", "v1", "v2", "material"), self._triangle),
            "mesh": (("file", "material", "scale", "position", "rotation"), self._mesh),
        }

    def parse(self, text: str) -> Tuple[Scene, Camera]:
        for block in tokenize_blocks(text, self.filename):
            if block.kind == "camera":
                self._camera(block)
            elif block.kind == "texture":
                self._texture(block)
            elif block.kind == "material":
                self._material(block)
            elif block.kind in self._object_builders:
                self._object(block)
            else:
                raise SceneParseError(f"Unknown block type {block.kind!r}", self.filename, block.line)

        if self.camera is None:
            logger.info("%s: no camera block, using defaults", self.filename)
            self.camera = Camera()
        logger.info("Parsed %s: %s", self.filename, self.scene)
        return self.scene, self.camera

    # -- value helpers ------------------------------------------------------

    def _error(self, message: str, line: int) -> SceneParseError:
        return SceneParseError(message, self.filename, line)

    def _check_keys(self, block: Block, allowed):
        for key, (_, line) in block.entries.items():
            if key not in allowed:
                raise self._error(f"Unknown key {key!r} in {block.kind} block", line)

    def _check_args(self, block: Block, count: int, usage: str):
        if len(block.args) != count:
            raise self._error(f"Expected '{usage} {{'", block.line)

    def _numbers(self, block: Block, key: str, count: int) -> Optional[List[float]]:
        if key not in block.entries:
            return None
        values, line = block.entries[key]
        if len(values) != count:
            raise self._error(f"{key} expects {count} value(s), got {len(values)}", line)
        try:
            return [float(v) for v in values]
        except ValueError:
            raise self._error(f"Invalid number in {key}: {' '.join(values)}", line) from None

    def _float(self, block: Block, key: str, default: Optional[float] = None) -> float:
        numbers = self._numbers(block, key, 1)
        if numbers is None:
            if default is None:
                raise self._error(f"{block.kind} block is missing {key!r}", block.line)
            return default
        return numbers[0]

    def _int(self, block: Block, key: str, default: int) -> int:
        if key not in block.entries:
            return default
        values, line = block.entries[key]
        if len(values) != 1:
            raise self._error(f"{key} expects 1 value(s), got {len(values)}", line)
        try:
            return int(values[0])
        except ValueError:
            raise self._error(f"Invalid integer in {key}: {values[0]}", line) from None

    def _vec3(self, block: Block, key: str, default: Optional[Vec3] = None) -> Vec3:
        numbers = self._numbers(block, key, 3)
        if numbers is None:
            if default is None:
                raise self._error(f"{block.kind} block is missing {key!r}", block.line)
            return default
        return Vec3(*numbers)

    def _word(self, block: Block, key: str) -> Tuple[str, int]:
        if key not in block.entries:
            raise self._error(f"{block.kind} block is missing {key!r}", block.line)
        values, line = block.entries[key]
        if len(values) != 1:
            raise self._error(f"{key} expects a single name", line)
        return values[0], line

    def _lookup(self, block: Block, key: str, find):
        name, line = self._word(block, key)
        try:
            return find(name)
        except SceneReferenceError as e:
            # Attach the location while keeping the SceneReferenceError type
            e.args = (f"{self.filename}:{line}: {e.args[0]}",)
            raise

    def _color_or_texture(self, block: Block, color_key: str, texture_key: str):
        has_color = color_key in block.entries
        has_texture = texture_key in block.entries
        if has_color == has_texture:
            raise self._error(f"{block.kind} block needs exactly one of "
                              f"{color_key!r} or {texture_key!r}", block.line)
        if has_color:
            return self._vec3(block, color_key)
        return self._lookup(block, texture_key, self.scene.texture)

    # -- blocks -------------------------------------------------------------

    def _camera(self, block: Block):
        if self.camera is not None:
            raise self._error("Only one camera block is allowed", block.line)
        self._check_args(block, 0, "camera")
        self._check_keys(block, ("width", "aspect_ratio", "samples", "max_depth", "vfov",
                                 "lookfrom", "lookat", "vup", "defocus_angle",
                                 "focus_dist", "background"))
        defaults = Camera()

        aspect_ratio = defaults.aspect_ratio
        ratio = self._numbers(block, "aspect_ratio", 2)
        if ratio is not None:
            if ratio[1] <= 0 or ratio[0] <= 0:
                raise self._error("aspect_ratio must be positive", block.entries["aspect_ratio"][1])
            aspect_ratio = ratio[0] / ratio[1]

        background = None
        if "background" in block.entries:
            if block.entries["background"][0] != ["sky"]:
                background = Color(*self._numbers(block, "background", 3))

        settings = dict(
            image_width=self._int(block, "width", defaults.image_width),
            aspect_ratio=aspect_ratio,
            samples_per_pixel=self._int(block, "samples", defaults.samples_per_pixel),
            max_depth=self._int(block, "max_depth", defaults.max_depth),
            vfov=self._float(block, "vfov", defaults.vfov),
            lookfrom=self._vec3(block, "lookfrom", defaults.lookfrom),
            lookat=self._vec3(block, "lookat", defaults.lookat),
            vup=self._vec3(block, "vup", defaults.vup),
            defocus_angle=self._float(block, "defocus_angle", defaults.defocus_angle),
            focus_dist=self._float(block, "focus_dist", defaults.focus_dist),
            background=background,
        )
        try:
            self.camera = Camera(**settings)
        except ValueError as e:
            raise self._error(f"Invalid camera: {e}", block.line) from e

    def _texture(self, block: Block):
        self._check_args(block, 2, "texture <name> <type>")
        name, kind = block.args
        if kind == "solid":
            self._check_keys(block, ("color",))
            texture: Texture = SolidColor(self._vec3(block, "color"))
        elif kind == "checker":
            self._check_keys(block, ("scale", "even", "odd", "even_texture", "odd_texture"))
            scale = self._float(block, "scale")
            if scale == 0:
                raise self._error("checker scale must be non-zero", block.entries["scale"][1])
            texture = CheckerTexture(scale,
                                     self._color_or_texture(block, "even", "even_texture"),
                                     self._color_or_texture(block, "odd", "odd_texture"))
        else:
            raise self._error(f"Unknown texture type {kind!r}", block.line)
        self.scene.add_texture(texture, name)

    def _material(self, block: Block):
        self._check_args(block, 2, "material <name> <type>")
        name, kind = block.args
        if kind == "lambertian":
            self._check_keys(block, ("albedo", "texture"))
            material: Material = Lambertian(self._color_or_texture(block, "albedo", "texture"))
        elif kind == "metal":
            self._check_keys(block, ("albedo", "texture", "fuzz"))
            material = Metal(self._color_or_texture(block, "albedo", "texture"),
                             self._float(block, "fuzz", 0.0))
        elif kind == "dielectric":
            self._check_keys(block, ("refraction_index",))
            refraction_index = self._float(block, "refraction_index")
            try:
                material = Dielectric(refraction_index)
            except ValueError as e:
                raise self._error(str(e), block.entries["refraction_index"][1]) from e
        elif kind == "diffuse_light":
            self._check_keys(block, ("emit", "texture"))
            material = DiffuseLight(self._color_or_texture(block, "emit", "texture"))
        else:
            raise self._error(f"Unknown material type {kind!r}", block.line)
        self.scene.add_material(material, name)

    def _object(self, block: Block):
        self._check_args(block, 0, block.kind)
        keys, build = self._object_builders[block.kind]
        self._check_keys(block, keys + TRANSFORM_KEYS)
        try:
            obj = build(block)
        except DegenerateGeometryError as e:
            raise self._error(str(e), block.line) from e

        # Rotation is applied before translation
        if "rotate_y" in block.entries:
            obj = RotateY(obj, self._float(block, "rotate_y"))
        if "translate" in block.entries:
            obj = Translate(obj, self._vec3(block, "translate"))
        self.scene.add_object(obj)

    def _material_ref(self, block: Block) -> Material:
        return self._lookup(block, "material", self.scene.material)

    def _sphere(self, block: Block) -> Hittable:
        center_end = self._vec3(block, "center_end") if "center_end" in block.entries else None
        return Sphere(self._vec3(block, "center"), self._float(block, "radius"),
                      self._material_ref(block), center_end=center_end)

    def _plane(self, block: Block) -> Hittable:
        return Plane(self._vec3(block, "point"), self._vec3(block, "normal"),
                     self._material_ref(block))

    def _quad(self, block: Block) -> Hittable:
        return Quad(self._vec3(block, "q"), self._vec3(block, "u"), self._vec3(block, "v"),
                    self._material_ref(block))

    def _box(self, block: Block) -> Hittable:
        return box(self._vec3(block, "a"), self._vec3(block, "b"), self._material_ref(block))

    def _triangle(self, block: Block) -> Hittable:
        return Triangle(self._vec3(block, "v0"), self._vec3(block, "v1"), self._vec3(block, "v2"),
                        self._material_ref(block))

    def _mesh(self, block: Block) -> Hittable:
        path, _ = self._word(block, "file")
        if not os.path.isabs(path):
            path = os.path.join(self.base_dir, path)
        return load_obj(path, self._material_ref(block),
                        scale=self._vec3(block, "scale", Vec3(1.0, 1.0, 1.0)),
                        position=self._vec3(block, "position", Vec3(0.0, 0.0, 0.0)),
                        rotation=self._vec3(block, "rotation", Vec3(0.0, 0.0, 0.0)))


def parse_scene_string(text: str, filename: str = "<string>",
                       base_dir: str = ".") -> Tuple[Scene, Camera]:
    """Parses scene text. filename is only used in error messages."""
    return SceneParser(filename, base_dir).parse(text)


def parse_scene(path: str) -> Tuple[Scene, Camera]:
    """
    Reads a scene file and returns the scene and its camera.

    Raises:
        SceneParseError: on malformed input.
        SceneReferenceError: on a reference to an undefined material or texture.
        OSError: if the file (or a mesh it names) cannot be read.
    """
    logger.info("Parsing scene file: %s", path)
    with open(path, 'r') as f:
        text = f.read()
    return parse_scene_string(text, path, os.path.dirname(os.path.abspath(path)))
