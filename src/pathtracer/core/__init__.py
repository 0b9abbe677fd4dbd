from pathtracer.core.vector import Vec3, Point3, Color
from pathtracer.core.ray import Ray
from pathtracer.core.interval import Interval
from pathtracer.core.aabb import AABB

__all__ = ["Vec3", "Point3", "Color", "Ray", "Interval", "AABB"]
