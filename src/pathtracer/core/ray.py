# pathtracer/core/ray.py
from pathtracer.core.vector import Vec3, Point3


class Ray:
    """
    Represents a ray in 3D space with an origin and direction. The time
    parameter in [0, 1) selects the position of moving objects.
    """
    __slots__ = ("origin", "direction", "time")

    def __init__(self, origin: Point3, direction: Vec3, time: float = 0.0):
        self.origin = origin
        self.direction = direction
        self.time = time

    def at(self, t: float) -> Point3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray({self.origin!r}, {self.direction!r}, time={self.time})"
