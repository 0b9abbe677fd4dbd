"""Pytest configuration for pathtracer tests.

This module provides shared fixtures: seeded random generators, a scripted
generator for forcing specific samples, and small ready-made scenes.
"""

import os
import random

# The tests run numba parallel kernels and fork multiprocessing pools in one
# process; numba's default TBB threading layer is not fork-safe and hangs the
# interpreter at exit, so pin the fork-safe workqueue layer for the test run.
os.environ.setdefault("NUMBA_THREADING_LAYER", "workqueue")

import pytest

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Color, Point3, Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.lambertian import Lambertian
from pathtracer.scene.scene import Scene


class ScriptedRng:
    """Stand-in for random.Random that replays fixed values.

    uniform() pops from the queued values (cycling when exhausted) and
    random() always returns the same number.
    """

    def __init__(self, uniforms=(0.0,), fixed=0.5):
        self.uniforms = list(uniforms)
        self.fixed = fixed
        self._index = 0

    def uniform(self, lo, hi):
        value = self.uniforms[self._index % len(self.uniforms)]
        self._index += 1
        return value

    def random(self):
        return self.fixed


@pytest.fixture
def rng():
    """A seeded generator so random tests are repeatable."""
    return random.Random(1234)


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRng instances."""
    return ScriptedRng


@pytest.fixture
def gray():
    """A plain diffuse material."""
    return Lambertian(Color(0.5, 0.5, 0.5))


@pytest.fixture
def two_sphere_scene(gray):
    """Ground sphere plus one foreground sphere, as a Scene."""
    scene = Scene()
    scene.add_material(gray, "gray")
    scene.add_object(Sphere(Point3(0, -100.5, -1), 100.0, gray))
    scene.add_object(Sphere(Point3(0, 0, -1), 0.5, gray))
    return scene


@pytest.fixture
def tiny_camera():
    """A very small camera so renders finish quickly."""
    return Camera(image_width=6, aspect_ratio=1.5, samples_per_pixel=1, max_depth=4,
                  vfov=90.0, lookfrom=Point3(0, 0, 0), lookat=Point3(0, 0, -1),
                  vup=Vec3(0, 1, 0))
