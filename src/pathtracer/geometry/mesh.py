# pathtracer/geometry/mesh.py
import logging
import math
from typing import Iterable, List, Optional
from pathtracer.core.aabb import AABB
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import degrees_to_radians
from pathtracer.core.vector import Vec3, Point3
from pathtracer.errors import DegenerateGeometryError, SceneParseError
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.triangle import Triangle

logger = logging.getLogger(__name__)


class TriangleMesh(Hittable):
    """
    A growable collection of triangles sharing one material.

    The bounding box is recomputed lazily: mutations only mark it dirty and
    the next bounding_box() or hit() call rebuilds it.
    """
    def __init__(self, material, triangles: Optional[Iterable[Triangle]] = None):
        self.material = material
        self.triangles: List[Triangle] = []
        self._bbox = AABB.EMPTY
        self._bbox_dirty = False
        for tri in triangles or ():
            self.add(tri)

    def add(self, triangle: Triangle) -> Triangle:
        triangle.material = self.material
        self.triangles.append(triangle)
        self._bbox_dirty = True
        return triangle

    def add_triangle(self, v0: Point3, v1: Point3, v2: Point3) -> Triangle:
        return self.add(Triangle(v0, v1, v2, self.material))

    def __len__(self) -> int:
        return len(self.triangles)

    @property
    def bbox(self) -> AABB:
        if self._bbox_dirty:
            box = AABB.EMPTY
            for tri in self.triangles:
                box = AABB.surrounding_box(box, tri.bounding_box())
            self._bbox = box
            self._bbox_dirty = False
        return self._bbox

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        # Quick rejection: a ray that misses the mesh box skips every triangle
        if not self.triangles or not self.bbox.hit(ray, ray_t):
            return None

        closest_hit = None
        closest_so_far = ray_t.max
        for triangle in self.triangles:
            rec = triangle.hit(ray, Interval(ray_t.min, closest_so_far))
            if rec is not None:
                closest_so_far = rec.t
                closest_hit = rec
        return closest_hit


def _rotate_xyz(v: Vec3, rotation: Vec3) -> Vec3:
    """Rotates v about X, then Y, then Z; angles in radians."""
    x, y, z = v.x, v.y, v.z
    if rotation.x != 0.0:
        c, s = math.cos(rotation.x), math.sin(rotation.x)
        y, z = y * c - z * s, y * s + z * c
    if rotation.y != 0.0:
        c, s = math.cos(rotation.y), math.sin(rotation.y)
        x, z = x * c + z * s, -x * s + z * c
    if rotation.z != 0.0:
        c, s = math.cos(rotation.z), math.sin(rotation.z)
        x, y = x * c - y * s, x * s + y * c
    return Vec3(x, y, z)


def _face_index(token: str, vertex_count: int, filename: str, line_num: int) -> int:
    # f entries look like "i", "i/t", "i//n" or "i/t/n"; only i matters here
    head = token.split('/')[0]
    try:
        idx = int(head)
    except ValueError:
        raise SceneParseError(f"Invalid face index {token!r}", filename, line_num) from None
    # OBJ indices are 1-based; negative ones count back from the last vertex
    resolved = idx - 1 if idx > 0 else vertex_count + idx
    if idx == 0 or not 0 <= resolved < vertex_count:
        raise SceneParseError(
            f"Face index {idx} out of range (vertex_count={vertex_count})",
            filename, line_num)
    return resolved


def load_obj(filename: str, material,
             scale: Vec3 = Vec3(1.0, 1.0, 1.0),
             position: Vec3 = Vec3(0.0, 0.0, 0.0),
             rotation: Vec3 = Vec3(0.0, 0.0, 0.0)) -> TriangleMesh:
    """
    Load a triangle mesh from a Wavefront OBJ file.

    Each vertex is scaled, rotated about X, Y then Z (rotation in degrees),
    then moved to position. Polygons are fan-triangulated. Degenerate faces
    are skipped with a warning.

    Raises:
        SceneParseError: on malformed lines, bad indices, or a file with no
            vertices or no faces.
        OSError: if the file cannot be read.
    """
    radians = Vec3(degrees_to_radians(rotation.x),
                   degrees_to_radians(rotation.y),
                   degrees_to_radians(rotation.z))
    vertices: List[Vec3] = []
    mesh = TriangleMesh(material)
    skipped = 0

    logger.info("Parsing OBJ file: %s", filename)
    with open(filename, 'r') as f:
        for line_num, line in enumerate(f, 1):
            values = line.split()
            if not values or values[0].startswith('#'):
                continue

            if values[0] == 'v':
                try:
                    v = Vec3(float(values[1]), float(values[2]), float(values[3]))
                except (IndexError, ValueError):
                    raise SceneParseError("Invalid vertex format", filename, line_num) from None
                v = _rotate_xyz(v * scale, radians) + position
                vertices.append(v)
            elif values[0] == 'f':
                if len(values) < 4:
                    raise SceneParseError("Face needs at least three vertices", filename, line_num)
                indices = [_face_index(tok, len(vertices), filename, line_num)
                           for tok in values[1:]]
                for i in range(1, len(indices) - 1):
                    try:
                        mesh.add_triangle(vertices[indices[0]],
                                          vertices[indices[i]],
                                          vertices[indices[i + 1]])
                    except DegenerateGeometryError:
                        skipped += 1
                        logger.warning("%s:%d: skipping degenerate face", filename, line_num)
            # vt, vn, groups and materials are ignored

    if not vertices:
        raise SceneParseError("No vertices found in OBJ file", filename)
    if not mesh.triangles:
        raise SceneParseError("No faces found in OBJ file", filename)

    logger.info("Loaded %d vertices, %d triangles (%d degenerate skipped)",
                len(vertices), len(mesh.triangles), skipped)
    return mesh
