# pathtracer/core/aabb.py
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vec3

# Direction components smaller than this are treated as parallel to a slab.
PARALLEL_EPSILON = 1e-12
MIN_EXTENT = 1e-4


class AABB:
    """
    Axis-aligned bounding box made of one interval per axis.
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: Interval = Interval.EMPTY, y: Interval = Interval.EMPTY,
                 z: Interval = Interval.EMPTY):
        self.x = x
        self.y = y
        self.z = z

    @staticmethod
    def from_points(a: Vec3, b: Vec3) -> "AABB":
        """
        Box with a and b as opposite corners, in any order.
        """
        return AABB(
            Interval(a.x, b.x) if a.x <= b.x else Interval(b.x, a.x),
            Interval(a.y, b.y) if a.y <= b.y else Interval(b.y, a.y),
            Interval(a.z, b.z) if a.z <= b.z else Interval(b.z, a.z),
        )

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        return AABB(
            Interval.enclose(box0.x, box1.x),
            Interval.enclose(box0.y, box1.y),
            Interval.enclose(box0.z, box1.z),
        )

    def axis_interval(self, n: int) -> Interval:
        if n == 1:
            return self.y
        if n == 2:
            return self.z
        return self.x

    def longest_axis(self) -> int:
        x_size = self.x.size()
        y_size = self.y.size()
        z_size = self.z.size()
        if x_size > y_size:
            return 0 if x_size > z_size else 2
        return 1 if y_size > z_size else 2

    def pad_to_minimums(self) -> "AABB":
        """
        Returns a copy where no side is thinner than MIN_EXTENT, so flat
        primitives still have a box the slab test can hit.
        """
        x = self.x if self.x.size() >= MIN_EXTENT else self.x.expand(MIN_EXTENT)
        y = self.y if self.y.size() >= MIN_EXTENT else self.y.expand(MIN_EXTENT)
        z = self.z if self.z.size() >= MIN_EXTENT else self.z.expand(MIN_EXTENT)
        return AABB(x, y, z)

    def is_empty(self) -> bool:
        return self.x.is_empty() or self.y.is_empty() or self.z.is_empty()

    def hit(self, ray: Ray, ray_t: Interval) -> bool:
        # Slab method: for each axis, narrow the running interval.
        t_min = ray_t.min
        t_max = ray_t.max
        origin = ray.origin
        direction = ray.direction
        for axis in range(3):
            ax = self.axis_interval(axis)
            d = direction[axis]
            o = origin[axis]
            if abs(d) < PARALLEL_EPSILON:
                if o < ax.min or o > ax.max:
                    return False
                continue
            inv_d = 1.0 / d
            t0 = (ax.min - o) * inv_d
            t1 = (ax.max - o) * inv_d
            if inv_d < 0:
                t0, t1 = t1, t0
            if t0 > t_min:
                t_min = t0
            if t1 < t_max:
                t_max = t1
            if t_max <= t_min:
                return False
        return True

    def __add__(self, offset: Vec3) -> "AABB":
        return AABB(self.x + offset.x, self.y + offset.y, self.z + offset.z)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __repr__(self) -> str:
        return f"AABB({self.x!r}, {self.y!r}, {self.z!r})"


AABB.EMPTY = AABB(Interval.EMPTY, Interval.EMPTY, Interval.EMPTY)
