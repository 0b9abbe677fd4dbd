"""Unit tests for the scene registry and the built-in presets.

Tests cover:
- Object, material and texture registration and name lookup
- World construction with and without a BVH
- The checkered spheres and Cornell box presets
"""

import pytest

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Color, Point3
from pathtracer.errors import EmptySceneError, SceneReferenceError
from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.textures import SolidColor
from pathtracer.scene.presets import PRESETS, checkered_spheres, cornell_box, load_preset
from pathtracer.scene.scene import Scene


class TestScene:
    """Tests for Scene."""

    def test_named_material_lookup(self, gray):
        """Test that named materials can be looked up."""
        scene = Scene()
        assert scene.add_material(gray, "gray") is gray
        assert scene.material("gray") is gray
        assert scene.materials == [gray]

    def test_anonymous_material_is_kept(self, gray):
        """Test that unnamed materials are still owned by the scene."""
        scene = Scene()
        scene.add_material(gray)
        assert scene.materials == [gray]
        with pytest.raises(SceneReferenceError):
            scene.material("gray")

    def test_unknown_names(self):
        """Test that unknown names raise a LookupError subclass."""
        scene = Scene()
        with pytest.raises(SceneReferenceError, match="material"):
            scene.material("missing")
        with pytest.raises(LookupError, match="texture"):
            scene.texture("missing")

    def test_texture_lookup(self):
        """Test texture registration."""
        scene = Scene()
        tex = scene.add_texture(SolidColor(Color(1, 0, 0)), "red")
        assert scene.texture("red") is tex

    def test_world_with_bvh(self, two_sphere_scene):
        """Test that the default world is a BVH over the objects."""
        assert isinstance(two_sphere_scene.world(), BVHNode)

    def test_world_without_bvh(self, two_sphere_scene):
        """Test that use_bvh=False returns the flat list itself."""
        world = two_sphere_scene.world(use_bvh=False)
        assert isinstance(world, HittableList)
        assert world is two_sphere_scene.objects

    def test_empty_scene_bvh_raises(self):
        """Test that an empty scene cannot be accelerated."""
        with pytest.raises(EmptySceneError):
            Scene().world()

    def test_empty_scene_flat_list(self):
        """Test that an empty scene still gives a flat, empty world."""
        assert len(Scene().world(use_bvh=False)) == 0

    def test_len(self, gray):
        """Test that len counts top-level objects."""
        scene = Scene()
        scene.add_object(Sphere(Point3(0, 0, 0), 1.0, gray))
        assert len(scene) == 1


class TestPresets:
    """Tests for the built-in demo scenes."""

    def test_checkered_spheres_contents(self):
        """Test the three showcase spheres, the ground and the small spheres."""
        scene, camera = checkered_spheres(seed=0)
        assert isinstance(camera, Camera)
        radii = sorted(obj.radius for obj in scene.objects)
        assert radii[-1] == 1000.0
        assert radii.count(1.0) == 3
        assert all(r == 0.2 for r in radii[:-4])
        assert 4 < len(scene) <= 104

    def test_checkered_spheres_is_seeded(self):
        """Test that a seed fully determines the random spheres."""
        def centers(seed):
            scene, _ = checkered_spheres(seed)
            return [(o.center.x, o.center.z) for o in scene.objects]

        assert centers(3) == centers(3)
        assert centers(3) != centers(4)

    def test_cornell_box_contents(self):
        """Test walls, light, boxes and the black background."""
        scene, camera = cornell_box()
        assert len(scene) == 8
        assert camera.background == Color(0, 0, 0)
        assert scene.material("light").emitted(0, 0, Point3(0, 0, 0)) == Color(15, 15, 15)
        assert isinstance(scene.material("white"), Lambertian)

    def test_load_preset(self):
        """Test lookup by name, including unknown names."""
        assert set(PRESETS) == {"checkered_spheres", "cornell_box"}
        scene, _ = load_preset("cornell_box")
        assert len(scene) == 8
        with pytest.raises(SceneReferenceError):
            load_preset("teapot")
