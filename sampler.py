# sampler.py
"""
Pixel sampling for the particle portrait.

This module wraps a pygame surface as a 2D drawing Canvas, loads images,
and rasterizes an image (scaled and centered) onto a canvas so its pixels
can be read back as a flat RGBA PixelBuffer.
"""
import logging
import math
import numpy as np
import pygame
from typing import Tuple

from errors import InvalidImageError, SampleOutOfRangeError, SurfaceUnavailableError

# --- Data Contracts ---
#
# class PixelBuffer:
#   - __init__(self, data, width: int, height: int):
#     - Inputs: RGBA bytes (or a uint8 array), row-major.
#     - Invariants: len(data) == width * height * 4. The stored array
#       is read-only.
#
# class Canvas:
#   - create(width: int, height: int) -> Canvas: offscreen RGBA surface.
#   - draw_image / get_pixel_buffer / clear_region / clear / fill_rect.
#   - Raises SurfaceUnavailableError if the surface cannot be created and
#     SampleOutOfRangeError when reading outside the surface.
#
# sample(image, canvas, image_scale, clear_after=True) -> (PixelBuffer, bool):
#   - Outputs: the full canvas as a PixelBuffer, and whether the drawn
#     region was cleared again afterwards.
#   - Side Effects: draws on `canvas`; clears the drawn region if asked.
#   - Raises InvalidImageError for a zero-width or zero-height image.

TRANSPARENT = (0, 0, 0, 0)


class PixelBuffer:
    """
    A flat, row-major RGBA byte buffer of known width and height.
    """
    def __init__(self, data, width: int, height: int):
        if isinstance(data, np.ndarray):
            array = np.array(data, dtype=np.uint8).ravel()
        else:
            array = np.frombuffer(bytes(data), dtype=np.uint8)
        expected = width * height * 4
        if array.size != expected:
            raise ValueError(
                f"Pixel buffer holds {array.size} bytes, expected {expected} "
                f"for {width}x{height} RGBA."
            )
        array.flags.writeable = False
        self.data = array
        self.width = width
        self.height = height

    def __len__(self) -> int:
        return self.data.size

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Returns the (R, G, B, A) value at (x, y)."""
        i = ((y * self.width) + x) * 4
        return tuple(int(v) for v in self.data[i:i + 4])


def _placement(x: float, y: float, w: float, h: float) -> pygame.Rect:
    """Integer rectangle covering a fractional draw region."""
    return pygame.Rect(math.floor(x), math.floor(y), max(int(round(w)), 0), max(int(round(h)), 0))


class Canvas:
    """
    A 2D raster target backed by a pygame surface.
    """
    def __init__(self, surface: pygame.Surface, background: tuple = TRANSPARENT):
        if surface is None:
            raise SurfaceUnavailableError("No drawing surface was supplied.")
        self.surface = surface
        self.background = background

    @classmethod
    def create(cls, width: int, height: int, background: tuple = TRANSPARENT) -> "Canvas":
        """Creates an offscreen RGBA canvas of the given size."""
        if width < 1 or height < 1:
            raise SurfaceUnavailableError(f"Cannot create a {width}x{height} canvas.")
        try:
            surface = pygame.Surface((width, height), pygame.SRCALPHA)
        except pygame.error as e:
            logging.error(f"Could not create a {width}x{height} surface: {e}")
            raise SurfaceUnavailableError(str(e)) from e
        surface.fill(background)
        logging.debug(f"Offscreen canvas created ({width}x{height}).")
        return cls(surface, background)

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def draw_image(self, image: pygame.Surface, x: float, y: float, w: float, h: float) -> pygame.Rect:
        """Draws `image` scaled to w x h at (x, y). Returns the covered rectangle."""
        rect = _placement(x, y, w, h)
        if rect.width == 0 or rect.height == 0:
            return rect
        if rect.size != image.get_size():
            image = pygame.transform.scale(image, rect.size)
        self.surface.blit(image, rect.topleft)
        return rect

    def get_pixel_buffer(self, x: int, y: int, w: int, h: int) -> PixelBuffer:
        """Reads a region of the surface back as RGBA bytes."""
        rect = pygame.Rect(x, y, w, h)
        if not self.surface.get_rect().contains(rect):
            raise SampleOutOfRangeError(
                f"Region {tuple(rect)} lies outside the {self.width}x{self.height} surface."
            )
        data = pygame.image.tobytes(self.surface.subsurface(rect), "RGBA")
        return PixelBuffer(data, w, h)

    def clear_region(self, x: float, y: float, w: float, h: float):
        self.surface.fill(self.background, _placement(x, y, w, h))

    def clear(self):
        self.surface.fill(self.background)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: tuple):
        self.surface.fill(color, pygame.Rect(x, y, w, h))


def load_image(path: str) -> pygame.Surface:
    """
    Decodes an image file.

    Raises InvalidImageError if the file is missing, cannot be decoded, or
    has a zero dimension. No partial result is ever returned.
    """
    logging.info(f"Loading image from {path}...")
    try:
        image = pygame.image.load(path)
    except (pygame.error, OSError) as e:
        logging.error(f"Could not load image {path}: {e}")
        raise InvalidImageError(f"Could not load image {path}: {e}") from e

    width, height = image.get_size()
    if width == 0 or height == 0:
        logging.error(f"Image {path} has zero size ({width}x{height}).")
        raise InvalidImageError(f"Image {path} has zero size ({width}x{height}).")

    logging.info(f"Image loaded ({width}x{height}).")
    return image


def sample(
    image: pygame.Surface, canvas: Canvas, image_scale: float, clear_after: bool = True
) -> Tuple[PixelBuffer, bool]:
    """
    Rasterizes `image` centered on `canvas` and reads back the whole canvas.

    The scaled image is placed at the canvas center; anything outside the
    canvas is cropped by the surface. If `clear_after` is set, the drawn
    region is cleared again so the canvas can be reused for the animation
    without showing the static picture.

    Returns:
        Tuple[PixelBuffer, bool]: the sampled pixels and whether the drawn
        region was cleared.
    """
    width, height = image.get_size()
    if width == 0 or height == 0:
        raise InvalidImageError(f"Cannot sample a {width}x{height} image.")

    draw_w = width * image_scale
    draw_h = height * image_scale
    draw_x = canvas.width / 2 - draw_w / 2
    draw_y = canvas.height / 2 - draw_h / 2

    canvas.draw_image(image, draw_x, draw_y, draw_w, draw_h)
    pixels = canvas.get_pixel_buffer(0, 0, canvas.width, canvas.height)

    if clear_after:
        canvas.clear_region(draw_x, draw_y, draw_w, draw_h)

    logging.debug(
        f"Sampled {width}x{height} image at scale {image_scale} into a "
        f"{pixels.width}x{pixels.height} buffer (cleared={clear_after})."
    )
    return pixels, clear_after
