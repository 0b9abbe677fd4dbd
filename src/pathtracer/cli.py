# pathtracer/cli.py
import argparse
import logging
import sys
import time

from pathtracer import __version__
from pathtracer.errors import PathTracerError
from pathtracer.renderer.raytracer import Renderer
from pathtracer.renderer.tone_mapping import gamma_encode, save_image
from pathtracer.scene.parser import parse_scene
from pathtracer.scene.presets import PRESETS, load_preset

logger = logging.getLogger(__name__)

PRESET_PREFIX = "preset:"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Offline path tracer: renders a scene file or a built-in preset to an image.")
    parser.add_argument("scene",
                        help=f"scene file, or {PRESET_PREFIX}<name> with name one of: "
                             f"{', '.join(sorted(PRESETS))}")
    parser.add_argument("output", help="output image (.ppm, .png, ...)")
    parser.add_argument("--width", type=int, help="override image width in pixels")
    parser.add_argument("--samples", type=int, help="override samples per pixel")
    parser.add_argument("--max-depth", type=int, help="override the bounce limit")
    parser.add_argument("--seed", type=int, default=0, help="random seed (default: 0)")
    parser.add_argument("--workers", type=int, default=1,
                        help="worker processes rendering rows (default: 1)")
    parser.add_argument("--no-bvh", action="store_true",
                        help="trace against the flat object list instead of a BVH")
    parser.add_argument("-v", "--verbose", action="store_true", help="log per-row progress")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_scene(source: str, seed: int):
    if source.startswith(PRESET_PREFIX):
        return load_preset(source[len(PRESET_PREFIX):], seed)
    return parse_scene(source)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    start_time = time.perf_counter()
    try:
        scene, camera = load_scene(args.scene, args.seed)

        if args.width is not None:
            camera.image_width = args.width
        if args.samples is not None:
            camera.samples_per_pixel = args.samples
        if args.max_depth is not None:
            camera.max_depth = args.max_depth
        camera.update_camera()

        world = scene.world(use_bvh=not args.no_bvh)
        renderer = Renderer(camera, world, seed=args.seed, workers=args.workers)
        framebuffer = renderer.render()
        save_image(gamma_encode(framebuffer), args.output)
    except (PathTracerError, OSError, ValueError) as e:
        logger.error("%s", e)
        return 1

    logger.info("Done in %.2fs", time.perf_counter() - start_time)
    return 0


if __name__ == "__main__":
    sys.exit(main())
