# errors.py
"""
Exceptions raised while setting up a particle portrait.

All of them are fatal for the effect instance being built: they abort
initialization and are reported to the caller. Nothing in the per-frame
update raises.
"""


class ParticlePortraitError(Exception):
    """Base class for setup failures."""


class SurfaceUnavailableError(ParticlePortraitError):
    """The drawing surface could not be created or found."""


class InvalidImageError(ParticlePortraitError):
    """The image failed to decode or has a zero dimension."""


class SampleOutOfRangeError(ParticlePortraitError):
    """A scan region exceeds the sampled pixel buffer."""
