# pointer.py
"""
Tracks the pointer position and its per-event displacement.

The host writes to the tracker from its pointer-move events; the physics
update only reads the PointerState. Both run on the same thread, so the
latest sample before a frame simply wins.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class PointerState:
    """Last known pointer position (x, y) and displacement (vx, vy)."""
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0


class PointerTracker:
    """
    Owns the PointerState and updates it from pointer-move notifications.
    """
    def __init__(self):
        self._state = PointerState()
        self._seen = False

    @property
    def state(self) -> PointerState:
        return self._state

    def move(self, x: float, y: float,
             movement_x: Optional[float] = None, movement_y: Optional[float] = None):
        """
        Records a pointer-move notification.

        If the host reports the movement it is used as-is, otherwise the
        displacement is the delta from the previous notification. The first
        notification without a reported movement has zero displacement.
        """
        state = self._state
        if movement_x is None:
            movement_x = x - state.x if self._seen else 0.0
        if movement_y is None:
            movement_y = y - state.y if self._seen else 0.0

        state.x = float(x)
        state.y = float(y)
        state.vx = float(movement_x)
        state.vy = float(movement_y)
        self._seen = True
