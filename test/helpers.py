import numpy as np
import pygame

from sampler import PixelBuffer


def make_buffer(width, height, color=(0, 0, 0, 255)):
    """A width x height buffer filled with one RGBA color."""
    data = np.tile(np.array(color, dtype=np.uint8), width * height)
    return PixelBuffer(data, width, height)


def make_image(width, height, color=(255, 0, 0, 255)):
    image = pygame.Surface((width, height), pygame.SRCALPHA)
    image.fill(color)
    return image
