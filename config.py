# config.py
"""
Resolves the effect configuration.

The `effect` section of `config.json` is turned into an immutable
EffectConfig once, when the particle field is built. Every component that
needs a parameter receives the EffectConfig explicitly.
"""
import logging
import math
import numbers
from dataclasses import dataclass
from typing import Dict, Any, Optional

from constants import (
    DEFAULT_GAP, DEFAULT_IMAGE_SCALE, DEFAULT_PARTICLE_SIZE,
    DEFAULT_EASE, DEFAULT_FRICTION, DEFAULT_RADIUS
)

# --- Data Contracts ---
#
# EffectConfig.from_params(params: Dict[str, Any], width: int, height: int) -> EffectConfig:
#   - Inputs:
#     - params: the "effect" section of config.json. All keys optional:
#       "gap", "image_scale", "particle_size", "ease", "friction",
#       "radius", "seed", "clear_after_sample", "grayscale".
#     - width, height: size of the drawing surface.
#   - Outputs: a frozen EffectConfig.
#   - Side Effects: None.
#   - Invariants: raises ValueError (logged as CRITICAL) for any value
#     outside its documented range or of the wrong type. A JSON null
#     falls back to the default.


def _is_finite_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


@dataclass(frozen=True)
class EffectConfig:
    """Immutable parameters of one particle portrait."""
    width: int
    height: int
    gap: int = DEFAULT_GAP
    image_scale: float = DEFAULT_IMAGE_SCALE
    particle_size: float = DEFAULT_PARTICLE_SIZE
    ease: float = DEFAULT_EASE
    friction: float = DEFAULT_FRICTION
    radius: float = DEFAULT_RADIUS
    seed: Optional[int] = None
    clear_after_sample: bool = True
    grayscale: bool = False

    def __post_init__(self):
        problems = []
        for name in ('width', 'height', 'gap', 'image_scale', 'particle_size',
                     'ease', 'friction', 'radius'):
            value = getattr(self, name)
            if not _is_finite_number(value):
                problems.append(f"{name} must be a finite number, got {value!r}")

        if not problems:
            if not (self.width >= 1 and self.height >= 1):
                problems.append(f"surface size must be positive, got {self.width}x{self.height}")
            if int(self.gap) != self.gap or not self.gap >= 1:
                problems.append(f"gap must be an integer >= 1, got {self.gap}")
            if not self.image_scale > 0:
                problems.append(f"image_scale must be > 0, got {self.image_scale}")
            if not self.particle_size > 0:
                problems.append(f"particle_size must be > 0, got {self.particle_size}")
            if not 0 <= self.ease <= 1:
                problems.append(f"ease must be within [0, 1], got {self.ease}")
            if not 0 <= self.friction <= 1:
                problems.append(f"friction must be within [0, 1], got {self.friction}")
            # A zero radius is allowed and disables repulsion.
            if not self.radius >= 0:
                problems.append(f"radius must be >= 0, got {self.radius}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            problems.append(f"seed must be an integer, got {self.seed!r}")

        if problems:
            msg = "Configuration error: " + "; ".join(problems)
            logging.critical(msg)
            raise ValueError(msg)

        # Allows integral floats such as 2.0 coming from JSON.
        object.__setattr__(self, 'width', int(self.width))
        object.__setattr__(self, 'height', int(self.height))
        object.__setattr__(self, 'gap', int(self.gap))
        for name in ('image_scale', 'particle_size', 'ease', 'friction', 'radius'):
            object.__setattr__(self, name, float(getattr(self, name)))
        object.__setattr__(self, 'clear_after_sample', bool(self.clear_after_sample))
        object.__setattr__(self, 'grayscale', bool(self.grayscale))

    @classmethod
    def from_params(cls, params: Dict[str, Any], width: int, height: int) -> "EffectConfig":
        """Builds an EffectConfig from a config.json section, applying defaults."""
        def value(key, default):
            # JSON null means "use the default".
            found = params.get(key)
            return default if found is None else found

        config = cls(
            width=width,
            height=height,
            gap=value('gap', DEFAULT_GAP),
            image_scale=value('image_scale', DEFAULT_IMAGE_SCALE),
            particle_size=value('particle_size', DEFAULT_PARTICLE_SIZE),
            ease=value('ease', DEFAULT_EASE),
            friction=value('friction', DEFAULT_FRICTION),
            radius=value('radius', DEFAULT_RADIUS),
            seed=params.get('seed'),
            clear_after_sample=value('clear_after_sample', True),
            grayscale=value('grayscale', False),
        )
        logging.debug(f"Effect configuration resolved: {config}")
        return config
