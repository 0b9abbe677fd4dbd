# pathtracer/core/utils.py
import math
import random
from pathtracer.core.vector import Vec3


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def make_rng(seed: int, stream: int = 0) -> random.Random:
    """
    Returns an independent generator for one unit of work (an image row).
    The same (seed, stream) pair always produces the same sequence, no
    matter which process draws from it.
    """
    return random.Random(f"{seed}:{stream}")


def random_vec3(rng: random.Random, lo: float = 0.0, hi: float = 1.0) -> Vec3:
    return Vec3(rng.uniform(lo, hi), rng.uniform(lo, hi), rng.uniform(lo, hi))


def random_in_unit_sphere(rng: random.Random) -> Vec3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vec3(rng.uniform(-1, 1),
                 rng.uniform(-1, 1),
                 rng.uniform(-1, 1))
        if 1e-160 < p.length_squared() < 1.0:
            return p


def random_unit_vector(rng: random.Random) -> Vec3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    return random_in_unit_sphere(rng).normalize()


def random_on_hemisphere(normal: Vec3, rng: random.Random) -> Vec3:
    on_unit_sphere = random_unit_vector(rng)
    if on_unit_sphere.dot(normal) > 0.0:
        return on_unit_sphere
    return -on_unit_sphere


def random_in_unit_disk(rng: random.Random) -> Vec3:
    """
    Returns a random point in the unit disk on the z=0 plane, used for
    defocus blur.
    """
    while True:
        p = Vec3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0.0)
        if p.length_squared() < 1.0:
            return p


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)


def refract(uv: Vec3, n: Vec3, etai_over_etat: float) -> Vec3:
    """
    Refracts the unit vector uv through a surface with unit normal n
    using Snell's law.
    """
    # min() guards acos-domain overshoot from rounding
    cos_theta = min((-uv).dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel


def reflectance(cosine: float, refraction_index: float) -> float:
    """
    Schlick's approximation of Fresnel reflectance.
    """
    r0 = (1.0 - refraction_index) / (1.0 + refraction_index)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cosine), 5)
