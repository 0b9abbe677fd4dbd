# pathtracer/camera/camera.py
import math
import random
from typing import Optional
from pathtracer.core.vector import Vec3, Point3, Color
from pathtracer.core.ray import Ray
from pathtracer.core.utils import degrees_to_radians, random_in_unit_disk


class Camera:
    """
    Positionable pinhole or thin-lens camera.

    All parameters are plain attributes; derived viewport geometry is
    computed once in __init__ and again by update_camera() after any
    attribute changes.
    """
    def __init__(self,
                 image_width: int = 100,
                 aspect_ratio: float = 1.0,
                 samples_per_pixel: int = 10,
                 max_depth: int = 10,
                 vfov: float = 90.0,
                 lookfrom: Point3 = Point3(0, 0, 0),
                 lookat: Point3 = Point3(0, 0, -1),
                 vup: Vec3 = Vec3(0, 1, 0),
                 defocus_angle: float = 0.0,
                 focus_dist: float = 10.0,
                 background: Optional[Color] = None):
        self.image_width = image_width
        self.aspect_ratio = aspect_ratio
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.vfov = vfov  # Vertical field of view in degrees
        self.lookfrom = lookfrom
        self.lookat = lookat
        self.vup = vup
        self.defocus_angle = defocus_angle  # Cone angle of rays through each pixel
        self.focus_dist = focus_dist  # Distance to the plane of perfect focus
        self.background = background  # None selects the sky gradient
        self.update_camera()

    def update_camera(self):
        """Recomputes the camera basis, the pixel grid and the defocus disk."""
        if self.image_width < 1:
            raise ValueError(f"image_width must be at least 1, got {self.image_width}")
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if self.focus_dist <= 0:
            raise ValueError(f"focus_dist must be positive, got {self.focus_dist}")
        if (self.lookfrom - self.lookat).near_zero():
            raise ValueError("lookfrom and lookat must be different points")
        if self.vup.cross(self.lookfrom - self.lookat).near_zero():
            raise ValueError("vup must not be parallel to the view direction")

        self.image_height = max(1, int(self.image_width / self.aspect_ratio))
        self.pixel_samples_scale = 1.0 / self.samples_per_pixel
        self.center = self.lookfrom

        # Viewport dimensions
        theta = degrees_to_radians(self.vfov)
        h = math.tan(theta / 2)
        viewport_height = 2 * h * self.focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Orthonormal camera basis
        self.w = (self.lookfrom - self.lookat).normalize()
        self.u = self.vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        # Vectors across the horizontal and down the vertical viewport edges
        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (self.center
                               - self.w * self.focus_dist
                               - viewport_u / 2
                               - viewport_v / 2)
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        defocus_radius = self.focus_dist * math.tan(degrees_to_radians(self.defocus_angle / 2))
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

    def get_ray(self, i: int, j: int, rng: random.Random) -> Ray:
        """
        Returns a ray from the defocus disk (or the camera center) through a
        random point inside pixel (i, j), at a random time in [0, 1).
        """
        offset_x = rng.random() - 0.5
        offset_y = rng.random() - 0.5
        pixel_sample = (self.pixel00_loc
                        + self.pixel_delta_u * (i + offset_x)
                        + self.pixel_delta_v * (j + offset_y))

        ray_origin = self.center if self.defocus_angle <= 0 else self.defocus_disk_sample(rng)
        ray_direction = pixel_sample - ray_origin
        ray_time = rng.random()
        return Ray(ray_origin, ray_direction, ray_time)

    def defocus_disk_sample(self, rng: random.Random) -> Point3:
        """Random point on the camera's defocus disk."""
        p = random_in_unit_disk(rng)
        return self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y

    def __repr__(self) -> str:
        return (f"Camera({self.image_width}x{self.image_height}, spp={self.samples_per_pixel}, "
                f"max_depth={self.max_depth}, vfov={self.vfov})")
