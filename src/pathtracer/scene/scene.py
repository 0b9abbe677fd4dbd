# pathtracer/scene/scene.py
import logging
from typing import Dict, List, Optional

from pathtracer.errors import SceneReferenceError
from pathtracer.geometry.bvh import build_bvh
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.world import HittableList
from pathtracer.materials.material import Material
from pathtracer.materials.textures import Texture

logger = logging.getLogger(__name__)


class Scene:
    """
    Owns everything a render reads: the top-level objects plus every
    material and texture they refer to. Names are optional and only used
    by scene files to refer back to earlier definitions.
    """
    def __init__(self):
        self.objects = HittableList()
        self.materials: List[Material] = []
        self.textures: List[Texture] = []
        self._materials_by_name: Dict[str, Material] = {}
        self._textures_by_name: Dict[str, Texture] = {}

    def add_object(self, obj: Hittable) -> Hittable:
        return self.objects.add(obj)

    def add_material(self, material: Material, name: Optional[str] = None) -> Material:
        self.materials.append(material)
        if name is not None:
            self._materials_by_name[name] = material
        return material

    def add_texture(self, texture: Texture, name: Optional[str] = None) -> Texture:
        self.textures.append(texture)
        if name is not None:
            self._textures_by_name[name] = texture
        return texture

    def material(self, name: str) -> Material:
        try:
            return self._materials_by_name[name]
        except KeyError:
            raise SceneReferenceError("material", name) from None

    def texture(self, name: str) -> Texture:
        try:
            return self._textures_by_name[name]
        except KeyError:
            raise SceneReferenceError("texture", name) from None

    def world(self, use_bvh: bool = True) -> Hittable:
        """
        Returns the structure to trace against: a BVH over the top-level
        objects, or the flat object list when use_bvh is False.
        Raises EmptySceneError for a BVH over an empty scene.
        """
        if not use_bvh:
            logger.debug("Using flat list of %d objects", len(self.objects))
            return self.objects
        return build_bvh(self.objects.objects)

    def __len__(self) -> int:
        return len(self.objects)

    def __repr__(self) -> str:
        return (f"Scene(objects={len(self.objects)}, materials={len(self.materials)}, "
                f"textures={len(self.textures)})")
