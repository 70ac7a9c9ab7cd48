# particle.py
"""
Builds and stores the particle field of a portrait.

This module defines the ParticleField class, which samples a pixel buffer
on a regular grid and keeps every particle's origin, position, velocity
and color in NumPy arrays. A Particle is a small record view over one row
of those arrays. The per-frame physics runs in Numba-jitted kernels.
"""
import logging
import math
import numpy as np
from numba import jit
from typing import Iterator, Tuple

from config import EffectConfig
from errors import SampleOutOfRangeError
from pointer import PointerState
from sampler import Canvas, PixelBuffer

# --- Data Contracts ---
#
# class ParticleField:
#   - build(pixels: PixelBuffer, config: EffectConfig) -> ParticleField:
#     - Inputs:
#       - pixels: the sampled RGBA buffer.
#       - config: resolved effect configuration (width, height, gap,
#         particle_size).
#     - Outputs: a field with one particle per grid cell, in raster order
#       (y outer, x inner, stride = gap).
#     - Raises: SampleOutOfRangeError if config.width/height exceed the
#       buffer's dimensions.
#     - Invariants:
#       - self.origins, self.positions, self.velocities are (N, 2) float64.
#       - self.colors is (N, 3) uint8.
#       - N == ceil(width / gap) * ceil(height / gap).
#
#   - update(self, pointer: PointerState, config: EffectConfig) -> None:
#     - Side Effects: advances positions and velocities by one frame.
#     - Invariants: never raises; no clamping to the canvas.
#
#   - warp(self, width: float, height: float, rng) -> None:
#     - Side Effects: moves every position into [0, width) x [0, height).
#       Origins and velocities are untouched.


@jit(nopython=True)
def _step_particle(position, velocity, origin, px, py, pvx, pvy, ease, friction, radius):
    """
    Numba-jitted physics step for a single particle.

    The repulsion test compares the squared distance against a radius that
    scales with pointer speed, so a still pointer repels nothing.
    """
    dx = px - position[0]
    dy = py - position[1]
    distance_sq = dx * dx + dy * dy
    speed_radius = radius * (2.0 * max(abs(pvx), abs(pvy)))

    if distance_sq < speed_radius and distance_sq != 0.0:
        force = -speed_radius / distance_sq
        angle = math.atan2(dy, dx)
        velocity[0] += force * math.cos(angle)
        velocity[1] += force * math.sin(angle)

    velocity[0] *= friction
    velocity[1] *= friction

    position[0] += velocity[0] + (origin[0] - position[0]) * ease
    position[1] += velocity[1] + (origin[1] - position[1]) * ease


@jit(nopython=True)
def _update_field_numba(positions, velocities, origins, px, py, pvx, pvy, ease, friction, radius):
    """Numba-jitted loop applying the physics step to every particle."""
    for i in range(positions.shape[0]):
        _step_particle(
            positions[i], velocities[i], origins[i],
            px, py, pvx, pvy, ease, friction, radius
        )


class Particle:
    """
    One simulated point, viewed as rows of the owning field's arrays.

    Writes through a Particle land directly in the field's arrays.
    """
    __slots__ = ('_position', '_velocity', '_origin', 'color', 'size')

    def __init__(self, position: np.ndarray, velocity: np.ndarray, origin: np.ndarray,
                 color: Tuple[int, int, int], size: float):
        self._position = position
        self._velocity = velocity
        self._origin = origin
        self.color = color
        self.size = size

    @property
    def position(self) -> Tuple[float, float]:
        return float(self._position[0]), float(self._position[1])

    @property
    def velocity(self) -> Tuple[float, float]:
        return float(self._velocity[0]), float(self._velocity[1])

    @property
    def origin(self) -> Tuple[float, float]:
        return float(self._origin[0]), float(self._origin[1])

    def update(self, pointer: PointerState, config: EffectConfig):
        """Advances this particle by one frame."""
        _step_particle(
            self._position, self._velocity, self._origin,
            float(pointer.x), float(pointer.y), float(pointer.vx), float(pointer.vy),
            float(config.ease), float(config.friction), float(config.radius)
        )

    def warp(self, bounds: Tuple[float, float], rng: np.random.Generator):
        """Moves the particle to a random point within (0, 0)-(width, height)."""
        width, height = bounds
        self._position[:] = rng.uniform(low=[0, 0], high=[width, height])

    def draw(self, canvas: Canvas):
        x, y = self.position
        canvas.fill_rect(x, y, self.size, self.size, self.color)

    def __repr__(self):
        return (
            f"Particle(position={self.position}, origin={self.origin}, "
            f"velocity={self.velocity}, color={self.color}, size={self.size})"
        )


class ParticleField:
    """
    An ordered collection of particles, stored as NumPy arrays.
    """
    def __init__(self, origins: np.ndarray, colors: np.ndarray, size: float):
        self.origins = np.array(origins, dtype=np.float64).reshape(-1, 2)
        self.positions = self.origins.copy()
        self.velocities = np.zeros_like(self.origins)
        self.colors = np.array(colors, dtype=np.uint8).reshape(-1, 3)
        self.size = size

        if self.colors.shape[0] != self.origins.shape[0]:
            raise ValueError(
                f"Got {self.colors.shape[0]} colors for {self.origins.shape[0]} particles."
            )

    @classmethod
    def build(cls, pixels: PixelBuffer, config: EffectConfig) -> "ParticleField":
        """
        Samples `pixels` every `config.gap` pixels and creates one particle
        per sample, colored with the sampled RGB value.
        """
        if config.width > pixels.width or config.height > pixels.height:
            msg = (
                f"Scan region {config.width}x{config.height} exceeds the "
                f"sampled {pixels.width}x{pixels.height} buffer."
            )
            logging.error(msg)
            raise SampleOutOfRangeError(msg)

        ys = np.arange(0, config.height, config.gap)
        xs = np.arange(0, config.width, config.gap)
        grid_y, grid_x = np.meshgrid(ys, xs, indexing='ij')
        grid_x = grid_x.ravel()
        grid_y = grid_y.ravel()

        index = ((grid_y * config.width) + grid_x) * 4
        data = pixels.data
        colors = np.stack([data[index], data[index + 1], data[index + 2]], axis=1)
        origins = np.stack([grid_x, grid_y], axis=1)

        field = cls(origins, colors, config.particle_size)
        logging.info(
            f"ParticleField built with {len(field)} particles "
            f"({len(xs)}x{len(ys)} grid, gap {config.gap})."
        )
        logging.debug(
            f"Particle arrays created. "
            f"Positions shape: {field.positions.shape}, "
            f"Colors shape: {field.colors.shape}"
        )
        return field

    def __len__(self) -> int:
        return self.origins.shape[0]

    def __getitem__(self, i: int) -> Particle:
        if i < 0:
            i += len(self)
        if not 0 <= i < len(self):
            raise IndexError(f"particle index {i} out of range")
        return Particle(
            self.positions[i], self.velocities[i], self.origins[i],
            tuple(int(c) for c in self.colors[i]), self.size
        )

    def __iter__(self) -> Iterator[Particle]:
        for i in range(len(self)):
            yield self[i]

    def update(self, pointer: PointerState, config: EffectConfig):
        """Advances every particle by one frame."""
        _update_field_numba(
            self.positions, self.velocities, self.origins,
            float(pointer.x), float(pointer.y), float(pointer.vx), float(pointer.vy),
            float(config.ease), float(config.friction), float(config.radius)
        )

    def draw(self, canvas: Canvas):
        """Fills a size x size square per particle. Particles off the canvas are skipped."""
        size = self.size
        x = self.positions[:, 0]
        y = self.positions[:, 1]
        # Also excludes NaN positions.
        visible = (x > -size) & (x < canvas.width) & (y > -size) & (y < canvas.height)

        fill = canvas.fill_rect
        for (px, py), color in zip(self.positions[visible].tolist(), self.colors[visible].tolist()):
            fill(px, py, size, size, tuple(color))

    def warp(self, width: float, height: float, rng: np.random.Generator):
        """Scatters every particle uniformly over the given bounds."""
        self.positions[:] = rng.uniform(
            low=[0, 0],
            high=[width, height],
            size=(len(self), 2)
        )
        logging.info(f"Warped {len(self)} particles within {width}x{height}.")

    def mean_displacement(self) -> float:
        """Average distance of the particles from their origins."""
        if len(self) == 0:
            return 0.0
        return float(np.mean(np.linalg.norm(self.positions - self.origins, axis=1)))
