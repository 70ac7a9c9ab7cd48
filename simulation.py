# simulation.py
"""
Ties the particle portrait together.

This module defines the Simulation class, which owns the effect
configuration, the pointer tracker, the particle field and the random
generator used for warping. It advances the field one frame at a time.
"""
import logging
import numpy as np
import pygame

from config import EffectConfig
from filters import grayscale
from particle import ParticleField
from pointer import PointerTracker
from sampler import Canvas, PixelBuffer, sample

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, field: ParticleField, config: EffectConfig,
#              tracker: PointerTracker = None):
#     - Side Effects: creates the warp RNG from config.seed.
#
#   - from_image(image, canvas: Canvas, config: EffectConfig) -> Simulation:
#     - Side Effects: draws on `canvas` while sampling; the drawn image is
#       cleared again if config.clear_after_sample.
#     - Raises: InvalidImageError, SampleOutOfRangeError.
#
#   - frame(self, canvas: Canvas) -> None:
#     - Side Effects: clears the canvas, updates every particle, then draws
#       every particle. All updates finish before the first draw.
#
#   - warp(self) -> None:
#     - Side Effects: scatters every particle over the configured surface.


class Simulation:
    """
    Drives one particle portrait: field, pointer and configuration.
    """
    def __init__(self, field: ParticleField, config: EffectConfig, tracker: PointerTracker = None):
        self.field = field
        self.config = config
        self.tracker = tracker if tracker is not None else PointerTracker()
        self.rng = np.random.default_rng(config.seed)
        self.frames = 0

        logging.info(
            f"Simulation initialized: ease {config.ease}, friction {config.friction}, "
            f"radius {config.radius}, {len(field)} particles."
        )

    @classmethod
    def from_image(cls, image: pygame.Surface, canvas: Canvas, config: EffectConfig,
                   tracker: PointerTracker = None) -> "Simulation":
        """Samples `image` on `canvas` and builds the field from it."""
        pixels = cls._sample(image, canvas, config)
        return cls(ParticleField.build(pixels, config), config, tracker)

    @staticmethod
    def _sample(image: pygame.Surface, canvas: Canvas, config: EffectConfig) -> PixelBuffer:
        pixels, cleared = sample(image, canvas, config.image_scale, config.clear_after_sample)
        if not cleared:
            logging.debug("Sampled image left on the canvas.")
        if config.grayscale:
            pixels = grayscale(pixels)
        return pixels

    @property
    def pointer(self):
        return self.tracker.state

    def rebuild(self, pixels: PixelBuffer):
        """Replaces the whole field with one built from new pixels."""
        if self.config.grayscale:
            pixels = grayscale(pixels)
        self.field = ParticleField.build(pixels, self.config)

    def step(self):
        """Advances every particle by one frame."""
        self.field.update(self.tracker.state, self.config)
        self.frames += 1

    def frame(self, canvas: Canvas):
        """Clears the canvas, updates every particle, then draws them all."""
        canvas.clear()
        self.step()
        self.field.draw(canvas)

    def warp(self):
        """Scatters every particle; the ease term pulls them back home."""
        self.field.warp(self.config.width, self.config.height, self.rng)
