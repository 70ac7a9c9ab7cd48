# filters.py
"""
Pixel filters applied to a sampled buffer before the particle field is built.
"""
import logging
import numpy as np

from sampler import PixelBuffer


def grayscale(pixels: PixelBuffer) -> PixelBuffer:
    """
    Replaces R, G and B of every pixel with their average.

    The average is rounded half-to-even, as a clamped byte array stores
    fractional values. Alpha is left untouched. Returns a new buffer.
    """
    rgba = pixels.data.reshape(-1, 4)
    average = np.rint(rgba[:, :3].sum(axis=1, dtype=np.uint16) / 3.0).astype(np.uint8)

    out = rgba.copy()
    out[:, 0] = average
    out[:, 1] = average
    out[:, 2] = average

    logging.debug(f"Grayscale filter applied to {pixels.width}x{pixels.height} buffer.")
    return PixelBuffer(out, pixels.width, pixels.height)
