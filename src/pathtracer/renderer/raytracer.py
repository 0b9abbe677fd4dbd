# pathtracer/renderer/raytracer.py
import logging
import math
import random
import time
from multiprocessing import Pool
from typing import Callable, Optional

import numpy as np

from pathtracer.camera.camera import Camera
from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import make_rng
from pathtracer.core.vector import Color
from pathtracer.geometry.hittable import Hittable

logger = logging.getLogger(__name__)

# Hits closer than this along a scattered ray are self-intersections.
SHADOW_ACNE_EPSILON = 0.001

BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)

RowSink = Callable[[int, np.ndarray], None]


def sky_color(ray: Ray) -> Color:
    """Vertical white-to-blue gradient used when no background is set."""
    unit_direction = ray.direction.normalize()
    a = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - a) + SKY_BLUE * a


def ray_color(ray: Ray, depth: int, world: Hittable, background: Optional[Color],
              rng: random.Random) -> Color:
    """
    Estimates the radiance arriving along `ray`, following at most `depth`
    bounces.

    The path is followed iteratively: `throughput` is the product of the
    attenuations met so far and `radiance` the light gathered so far.
    """
    radiance = BLACK
    throughput = WHITE

    for _ in range(depth):
        rec = world.hit(ray, Interval(SHADOW_ACNE_EPSILON, math.inf))
        if rec is None:
            missed = sky_color(ray) if background is None else background
            return radiance + throughput * missed

        radiance = radiance + throughput * rec.material.emitted(rec.u, rec.v, rec.p)

        scatter = rec.material.scatter(ray, rec, rng)
        if scatter is None:
            return radiance

        attenuation, ray = scatter
        throughput = throughput * attenuation

    # Bounce limit reached: no more light is gathered
    return radiance


def render_row(camera: Camera, world: Hittable, seed: int, j: int) -> np.ndarray:
    """
    Renders image row j and returns it as a (width, 3) array of linear,
    sample-averaged color.
    """
    rng = make_rng(seed, j)

    row = np.zeros((camera.image_width, 3), dtype=np.float64)
    for i in range(camera.image_width):
        r = g = b = 0.0
        for _ in range(camera.samples_per_pixel):
            ray = camera.get_ray(i, j, rng)
            c = ray_color(ray, camera.max_depth, world, camera.background, rng)
            r += c.x
            g += c.y
            b += c.z
        row[i, 0] = r * camera.pixel_samples_scale
        row[i, 1] = g * camera.pixel_samples_scale
        row[i, 2] = b * camera.pixel_samples_scale
    return row


# Shared by worker processes (set by the pool initializer)
_worker_data = {}


def _init_worker(camera: Camera, world: Hittable, seed: int):
    """Initialize worker process with the scene it traces."""
    _worker_data['camera'] = camera
    _worker_data['world'] = world
    _worker_data['seed'] = seed


def _render_row(j: int):
    """Render a single row of pixels. Called by worker processes."""
    d = _worker_data
    return j, render_row(d['camera'], d['world'], d['seed'], j)


class Renderer:
    """
    Renders a world through a camera into a linear float64 framebuffer of
    shape (image_height, image_width, 3), row 0 at the top.

    Every row draws from its own generator seeded by (seed, row), so the
    image only depends on the seed, never on `workers`.
    """
    def __init__(self, camera: Camera, world: Hittable, seed: int = 0, workers: int = 1):
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.camera = camera
        self.world = world
        self.seed = seed
        self.workers = workers

    def render(self, on_row: Optional[RowSink] = None) -> np.ndarray:
        """
        Renders every row. `on_row(j, row)` is called once per finished
        row, in row order.
        """
        cam = self.camera
        framebuffer = np.zeros((cam.image_height, cam.image_width, 3), dtype=np.float64)

        logger.info("Rendering %dx%d, %d samples per pixel, max depth %d, %d worker(s)",
                    cam.image_width, cam.image_height, cam.samples_per_pixel,
                    cam.max_depth, self.workers)
        start_time = time.perf_counter()

        if self.workers == 1:
            rows = ((j, render_row(cam, self.world, self.seed, j))
                    for j in range(cam.image_height))
            self._collect(rows, framebuffer, on_row, start_time)
        else:
            init_args = (cam, self.world, self.seed)
            with Pool(processes=self.workers, initializer=_init_worker, initargs=init_args) as pool:
                self._collect(pool.imap(_render_row, range(cam.image_height)),
                              framebuffer, on_row, start_time)

        logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
        return framebuffer

    def _collect(self, rows, framebuffer: np.ndarray, on_row: Optional[RowSink], start_time: float):
        height = framebuffer.shape[0]
        for completed, (j, row) in enumerate(rows, start=1):
            framebuffer[j] = row
            if on_row is not None:
                on_row(j, row)
            elapsed = time.perf_counter() - start_time
            eta = elapsed / completed * (height - completed)
            logger.debug("Row %d/%d | Elapsed: %.1fs | ETA: %.1fs", completed, height, elapsed, eta)
