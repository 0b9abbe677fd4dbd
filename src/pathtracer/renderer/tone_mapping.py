# pathtracer/renderer/tone_mapping.py
import logging

import numpy as np
from numba import njit, prange
from PIL import Image

logger = logging.getLogger(__name__)

# Largest encoded intensity before scaling, so 1.0 maps to 255 and not 256
MAX_INTENSITY = 0.999


@njit(parallel=True, cache=True)
def _gamma_encode_kernel(linear_image, output_image):
    height, width = linear_image.shape[0], linear_image.shape[1]
    for y in prange(height):
        for x in range(width):
            for c in range(3):
                value = linear_image[y, x, c]
                # Gamma 2; NaN and non-positive radiance map to black
                if value > 0.0:
                    value = np.sqrt(value)
                else:
                    value = 0.0
                value = min(value, MAX_INTENSITY)
                output_image[y, x, c] = int(256.0 * value)


def gamma_encode(framebuffer: np.ndarray) -> np.ndarray:
    """
    Converts a linear (height, width, 3) framebuffer into 8-bit sRGB-ish
    pixels using gamma 2 and the [0, 0.999] * 256 quantization.
    """
    if framebuffer.ndim != 3 or framebuffer.shape[2] != 3:
        raise ValueError(f"Expected a (height, width, 3) framebuffer, got shape {framebuffer.shape}")
    linear_image = np.ascontiguousarray(framebuffer, dtype=np.float64)
    output_image = np.zeros(linear_image.shape, dtype=np.uint8)
    _gamma_encode_kernel(linear_image, output_image)
    return output_image


def save_image(pixels: np.ndarray, output_path: str) -> None:
    """
    Writes 8-bit RGB pixels to output_path. The format follows the file
    extension (.ppm, .png, or anything else Pillow can write).
    """
    image = Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))
    image.save(output_path)
    logger.info("Wrote %dx%d image to %s", image.width, image.height, output_path)
