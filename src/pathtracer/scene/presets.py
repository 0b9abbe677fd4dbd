# pathtracer/scene/presets.py
import random
from typing import Callable, Dict, Tuple

from pathtracer.camera.camera import Camera
from pathtracer.core.utils import random_vec3
from pathtracer.core.vector import Color, Point3, Vec3
from pathtracer.errors import SceneReferenceError
from pathtracer.geometry.quad import Quad, box
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.transform import RotateY, Translate
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.textures import CheckerTexture
from pathtracer.scene.scene import Scene


def checkered_spheres(seed: int = 0) -> Tuple[Scene, Camera]:
    """
    Three large checkered spheres on a checkered ground, surrounded by a
    grid of small random spheres (solid and checkered diffuse, metal, glass).
    The same seed always builds the same scene.
    """
    rng = random.Random(seed)
    scene = Scene()

    white = Color(0.9, 0.9, 0.9)
    black = Color(0.1, 0.1, 0.1)
    red = Color(0.8, 0.2, 0.2)
    blue = Color(0.2, 0.2, 0.8)
    green = Color(0.2, 0.8, 0.2)

    checker_bw = scene.add_texture(CheckerTexture(0.32, white, black), "checker_bw")
    checker_rb = scene.add_texture(CheckerTexture(0.5, red, blue), "checker_rb")
    checker_gw = scene.add_texture(CheckerTexture(0.5, green, white), "checker_gw")

    scene.add_object(Sphere(Point3(0, 1, 0), 1.0, scene.add_material(Lambertian(checker_bw))))
    scene.add_object(Sphere(Point3(-4, 1, 0), 1.0, scene.add_material(Lambertian(checker_rb))))
    scene.add_object(Sphere(Point3(4, 1, 0), 1.0, scene.add_material(Lambertian(checker_gw))))

    ground_checker = scene.add_texture(
        CheckerTexture(0.32, Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9)), "ground")
    ground = scene.add_material(Lambertian(ground_checker), "ground")
    scene.add_object(Sphere(Point3(0, -1000, 0), 1000.0, ground))

    for a in range(-5, 5):
        for b in range(-5, 5):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            # Keep clear of the big sphere on the right
            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.5:
                albedo = random_vec3(rng) * random_vec3(rng)
                material = Lambertian(albedo)
            elif choose_mat < 0.7:
                c1 = random_vec3(rng)
                c2 = random_vec3(rng)
                scale = rng.uniform(0.1, 1.0)
                material = Lambertian(scene.add_texture(CheckerTexture(scale, c1, c2)))
            elif choose_mat < 0.85:
                albedo = random_vec3(rng, 0.5, 1.0)
                fuzz = rng.uniform(0.0, 0.5)
                material = Metal(albedo, fuzz)
            else:
                material = Dielectric(1.5)

            scene.add_object(Sphere(center, 0.2, scene.add_material(material)))

    camera = Camera(image_width=400,
                    aspect_ratio=16.0 / 9.0,
                    samples_per_pixel=10,
                    max_depth=10,
                    vfov=20.0,
                    lookfrom=Point3(13, 2, 3),
                    lookat=Point3(0, 0, 0),
                    vup=Vec3(0, 1, 0),
                    defocus_angle=0.6,
                    focus_dist=10.0)
    return scene, camera


def cornell_box(seed: int = 0) -> Tuple[Scene, Camera]:
    """
    The classic Cornell box: coloured walls, a ceiling light and two
    rotated boxes, lit only by the light (black background).
    """
    scene = Scene()

    red = scene.add_material(Lambertian(Color(0.65, 0.05, 0.05)), "red")
    white = scene.add_material(Lambertian(Color(0.73, 0.73, 0.73)), "white")
    green = scene.add_material(Lambertian(Color(0.12, 0.45, 0.15)), "green")
    light = scene.add_material(DiffuseLight(Color(15, 15, 15)), "light")

    scene.add_object(Quad(Point3(555, 0, 0), Vec3(0, 555, 0), Vec3(0, 0, 555), green))
    scene.add_object(Quad(Point3(0, 0, 0), Vec3(0, 555, 0), Vec3(0, 0, 555), red))
    scene.add_object(Quad(Point3(343, 554, 332), Vec3(-130, 0, 0), Vec3(0, 0, -105), light))
    scene.add_object(Quad(Point3(0, 0, 0), Vec3(555, 0, 0), Vec3(0, 0, 555), white))
    scene.add_object(Quad(Point3(555, 555, 555), Vec3(-555, 0, 0), Vec3(0, 0, -555), white))
    scene.add_object(Quad(Point3(0, 0, 555), Vec3(555, 0, 0), Vec3(0, 555, 0), white))

    tall = box(Point3(0, 0, 0), Point3(165, 330, 165), white)
    scene.add_object(Translate(RotateY(tall, 15), Vec3(265, 0, 295)))

    short = box(Point3(0, 0, 0), Point3(165, 165, 165), white)
    scene.add_object(Translate(RotateY(short, -18), Vec3(130, 0, 65)))

    camera = Camera(image_width=300,
                    aspect_ratio=1.0,
                    samples_per_pixel=64,
                    max_depth=50,
                    vfov=40.0,
                    lookfrom=Point3(278, 278, -800),
                    lookat=Point3(278, 278, 0),
                    vup=Vec3(0, 1, 0),
                    defocus_angle=0.0,
                    focus_dist=10.0,
                    background=Color(0, 0, 0))
    return scene, camera


PRESETS: Dict[str, Callable[[int], Tuple[Scene, Camera]]] = {
    "checkered_spheres": checkered_spheres,
    "cornell_box": cornell_box,
}


def load_preset(name: str, seed: int = 0) -> Tuple[Scene, Camera]:
    try:
        build = PRESETS[name]
    except KeyError:
        raise SceneReferenceError("preset", name) from None
    return build(seed)
