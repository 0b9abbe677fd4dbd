"""Unit tests for materials and textures.

Tests cover:
- Solid and checker textures
- Lambertian scattering, including the degenerate-direction fallback
- Metal reflection, fuzz clamping and absorption below the surface
- Dielectric refraction, total internal reflection and Fresnel choice
- Diffuse lights
"""

import math

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Point3, Vec3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal
from pathtracer.materials.textures import CheckerTexture, SolidColor, Texture

UP = Vec3(0, 1, 0)


def make_record(normal=UP, front_face=True, p=Point3(0, 0, 0), u=0.25, v=0.75):
    return HitRecord(p=p, normal=normal, t=1.0, u=u, v=v, front_face=front_face)


class TestTextures:
    """Tests for SolidColor and CheckerTexture."""

    def test_solid_color_ignores_coordinates(self):
        """Test that a solid color is the same everywhere."""
        tex = SolidColor(Color(0.1, 0.2, 0.3))
        assert tex.value(0.0, 0.0, Point3(0, 0, 0)) == Color(0.1, 0.2, 0.3)
        assert tex.value(0.9, 0.1, Point3(5, -3, 2)) == Color(0.1, 0.2, 0.3)

    def test_checker_parity(self):
        """Test that neighboring cells alternate and diagonal cells match."""
        even = Color(1, 1, 1)
        odd = Color(0, 0, 0)
        tex = CheckerTexture(1.0, even, odd)
        assert tex.value(0, 0, Point3(0.5, 0.5, 0.5)) == even
        assert tex.value(0, 0, Point3(1.5, 0.5, 0.5)) == odd
        assert tex.value(0, 0, Point3(1.5, 1.5, 0.5)) == even
        assert tex.value(0, 0, Point3(-0.5, 0.5, 0.5)) == odd

    def test_checker_scale(self):
        """Test that the cell size follows the scale."""
        tex = CheckerTexture(0.5, Color(1, 1, 1), Color(0, 0, 0))
        assert tex.value(0, 0, Point3(0.25, 0.1, 0.1)) == Color(1, 1, 1)
        assert tex.value(0, 0, Point3(0.75, 0.1, 0.1)) == Color(0, 0, 0)

    def test_checker_accepts_nested_textures(self):
        """Test that the cells may themselves be textures."""
        inner = CheckerTexture(0.1, Color(1, 0, 0), Color(0, 1, 0))
        tex = CheckerTexture(10.0, inner, Color(0, 0, 1))
        assert isinstance(tex.even, Texture)
        assert tex.value(0, 0, Point3(0.05, 0.05, 0.05)) == Color(1, 0, 0)

    def test_base_texture_is_abstract(self):
        """Test that the base class cannot be evaluated."""
        with pytest.raises(NotImplementedError):
            Texture().value(0, 0, Point3(0, 0, 0))


class TestLambertian:
    """Tests for Lambertian."""

    def test_scatter_from_hit_point(self, rng):
        """Test origin, non-degenerate direction and attenuation."""
        mat = Lambertian(Color(0.5, 0.6, 0.7))
        rec = make_record(p=Point3(1, 2, 3))
        for _ in range(100):
            attenuation, scattered = mat.scatter(Ray(Point3(0, 5, 0), Vec3(0, -1, 0)), rec, rng)
            assert scattered.origin == Point3(1, 2, 3)
            assert not scattered.direction.near_zero()
            assert scattered.direction.dot(UP) >= 0
            assert attenuation == Color(0.5, 0.6, 0.7)

    def test_degenerate_direction_falls_back_to_normal(self, scripted_rng):
        """Test that a random vector cancelling the normal yields the normal."""
        # random_unit_vector draws (0, -0.5, 0), normalized to -UP
        rng = scripted_rng(uniforms=(0.0, -0.5, 0.0))
        mat = Lambertian(Color(0.5, 0.5, 0.5))
        _, scattered = mat.scatter(Ray(Point3(0, 1, 0), Vec3(0, -1, 0)), make_record(), rng)
        assert scattered.direction == UP

    def test_textured_albedo(self, rng):
        """Test that the attenuation is sampled from the texture."""
        tex = CheckerTexture(1.0, Color(1, 0, 0), Color(0, 0, 1))
        mat = Lambertian(tex)
        attenuation, _ = mat.scatter(Ray(Point3(0, 1, 0), Vec3(0, -1, 0)),
                                     make_record(p=Point3(1.5, 0.5, 0.5)), rng)
        assert attenuation == Color(0, 0, 1)

    def test_ray_time_preserved(self, rng):
        """Test that the scattered ray keeps the incoming ray's time."""
        mat = Lambertian(Color(0.5, 0.5, 0.5))
        _, scattered = mat.scatter(Ray(Point3(0, 1, 0), Vec3(0, -1, 0), 0.7), make_record(), rng)
        assert scattered.time == 0.7

    def test_does_not_emit(self):
        """Test that non-emissive materials are black."""
        assert Lambertian(Color(1, 1, 1)).emitted(0, 0, Point3(0, 0, 0)) == Color(0, 0, 0)


class TestMetal:
    """Tests for Metal."""

    def test_mirror_reflection(self, rng):
        """Test that a zero-fuzz metal is a perfect mirror."""
        mat = Metal(Color(0.8, 0.8, 0.8), 0.0)
        attenuation, scattered = mat.scatter(Ray(Point3(-1, 1, 0), Vec3(1, -1, 0)), make_record(), rng)
        d = scattered.direction
        assert d.x == pytest.approx(math.sqrt(0.5))
        assert d.y == pytest.approx(math.sqrt(0.5))
        assert attenuation == Color(0.8, 0.8, 0.8)

    def test_fuzz_is_clamped(self):
        """Test that fuzz above 1 is reduced to 1."""
        assert Metal(Color(1, 1, 1), 5.0).fuzz == 1.0
        assert Metal(Color(1, 1, 1), 0.3).fuzz == 0.3

    def test_fuzz_into_surface_is_absorbed(self, scripted_rng):
        """Test that a fuzzed reflection pointing below the surface is absorbed."""
        # Perturbation is exactly -UP, which drags the reflection under the surface
        rng = scripted_rng(uniforms=(0.0, -0.5, 0.0))
        mat = Metal(Color(1, 1, 1), 1.0)
        assert mat.scatter(Ray(Point3(-1, 1, 0), Vec3(1, -1, 0)), make_record(), rng) is None

    def test_fuzzed_reflections_stay_above_surface(self, rng):
        """Test that every returned scatter points away from the surface."""
        mat = Metal(Color(1, 1, 1), 0.9)
        for _ in range(200):
            result = mat.scatter(Ray(Point3(-1, 0.1, 0), Vec3(1, -0.1, 0)), make_record(), rng)
            if result is not None:
                assert result[1].direction.dot(UP) > 0


class TestDielectric:
    """Tests for Dielectric."""

    def test_normal_incidence_refracts_straight_through(self, scripted_rng):
        """Test that with a high random draw the ray passes straight through."""
        rng = scripted_rng(fixed=0.5)  # above the ~4% Fresnel reflectance
        mat = Dielectric(1.5)
        rec = make_record(normal=Vec3(0, 0, 1), front_face=True)
        attenuation, scattered = mat.scatter(Ray(Point3(0, 0, 1), Vec3(0, 0, -1)), rec, rng)
        assert attenuation == Color(1, 1, 1)
        assert scattered.direction.x == pytest.approx(0.0)
        assert scattered.direction.z == pytest.approx(-1.0)

    def test_low_draw_reflects(self, scripted_rng):
        """Test that a draw below the Fresnel reflectance reflects."""
        rng = scripted_rng(fixed=0.0)
        mat = Dielectric(1.5)
        rec = make_record(normal=Vec3(0, 0, 1), front_face=True)
        _, scattered = mat.scatter(Ray(Point3(0, 0, 1), Vec3(0, 0, -1)), rec, rng)
        assert scattered.direction.z == pytest.approx(1.0)

    def test_total_internal_reflection(self, scripted_rng):
        """Test that a grazing ray leaving glass is always reflected."""
        rng = scripted_rng(fixed=0.999)
        mat = Dielectric(1.5)
        # Leaving the medium: the recorded normal faces the incoming ray
        rec = make_record(normal=UP, front_face=False)
        _, scattered = mat.scatter(Ray(Point3(-1, 0.2, 0), Vec3(1, -0.2, 0)), rec, rng)
        assert scattered.direction.y > 0
        assert scattered.direction.length() == pytest.approx(1.0)

    def test_refraction_bends_towards_normal(self, scripted_rng):
        """Test Snell's law on entering glass."""
        rng = scripted_rng(fixed=0.999)
        mat = Dielectric(1.5)
        rec = make_record(normal=UP, front_face=True)
        incoming = Vec3(math.sin(0.6), -math.cos(0.6), 0)
        _, scattered = mat.scatter(Ray(Point3(0, 1, 0), incoming), rec, rng)
        sin_out = scattered.direction.x / scattered.direction.length()
        assert sin_out == pytest.approx(math.sin(0.6) / 1.5)

    @pytest.mark.parametrize("index", [0.0, -1.5])
    def test_non_positive_index_rejected(self, index):
        """Test that a zero or negative refraction index is rejected."""
        with pytest.raises(ValueError, match="refraction_index"):
            Dielectric(index)


class TestDiffuseLight:
    """Tests for DiffuseLight."""

    def test_emits_and_never_scatters(self, rng):
        """Test emission and the absence of scattering."""
        light = DiffuseLight(Color(4, 4, 4))
        assert light.emitted(0.5, 0.5, Point3(0, 0, 0)) == Color(4, 4, 4)
        assert light.scatter(Ray(Point3(0, 1, 0), Vec3(0, -1, 0)), make_record(), rng) is None

    def test_textured_emission(self):
        """Test emission sampled from a texture."""
        light = DiffuseLight(CheckerTexture(1.0, Color(1, 1, 1), Color(2, 2, 2)))
        assert light.emitted(0, 0, Point3(1.5, 0.5, 0.5)) == Color(2, 2, 2)

    def test_base_material_is_abstract(self, rng):
        """Test that the base class cannot scatter."""
        with pytest.raises(NotImplementedError):
            Material().scatter(Ray(Point3(0, 1, 0), Vec3(0, -1, 0)), make_record(), rng)
