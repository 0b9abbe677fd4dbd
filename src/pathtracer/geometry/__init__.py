from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.world import HittableList
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.plane import Plane
from pathtracer.geometry.quad import Quad, box
from pathtracer.geometry.triangle import Triangle
from pathtracer.geometry.mesh import TriangleMesh, load_obj
from pathtracer.geometry.transform import Translate, RotateY
from pathtracer.geometry.bvh import BVHLeaf, BVHNode, build_bvh

__all__ = [
    "Hittable",
    "HitRecord",
    "HittableList",
    "Sphere",
    "Plane",
    "Quad",
    "box",
    "Triangle",
    "TriangleMesh",
    "load_obj",
    "Translate",
    "RotateY",
    "BVHLeaf",
    "BVHNode",
    "build_bvh",
]
