# loop.py
"""
Repeats a frame callback at the display refresh cadence until stopped.
"""
import logging
import pygame
from typing import Callable, Optional

from constants import FPS

# --- Data Contracts ---
#
# class AnimationLoop:
#   - __init__(self, frame_callback: Callable[[], None], fps: int = FPS,
#              clock=None, log_throttle: int = 100):
#     - clock: anything with a tick(fps) method; pygame.time.Clock by default.
#
#   - run(self, max_frames: Optional[int] = None) -> int:
#     - Outputs: number of frames completed by this call.
#     - Invariants: a started frame always runs to completion. The stop
#       flag is only checked between frames.
#
#   - stop(self) -> None:
#     - Idempotent. No frame is scheduled after it returns.


class AnimationLoop:
    """
    Calls `frame_callback` once per frame until `stop()` is called.
    """
    def __init__(self, frame_callback: Callable[[], None], fps: int = FPS,
                 clock=None, log_throttle: int = 100):
        self.frame_callback = frame_callback
        self.fps = fps
        self.clock = clock if clock is not None else pygame.time.Clock()
        self.log_throttle = max(int(log_throttle), 1)
        self.frames = 0
        self._stopped = False

    @property
    def running(self) -> bool:
        return not self._stopped

    def stop(self):
        if not self._stopped:
            logging.info(f"Animation loop stopping after {self.frames} frames.")
        self._stopped = True

    def frame(self):
        """Runs exactly one frame."""
        self.frame_callback()
        self.frames += 1

        # Hot loops must throttle logs
        if self.frames % self.log_throttle == 0:
            logging.info(f"Animation frame {self.frames}")

    def run(self, max_frames: Optional[int] = None) -> int:
        """
        Runs frames until stopped or until `max_frames` frames have run.

        Returns:
            int: the number of frames run by this call.
        """
        logging.info(f"Animation loop started at {self.fps} FPS.")
        count = 0
        while not self._stopped:
            if max_frames is not None and count >= max_frames:
                logging.info(f"Reached max_frames ({max_frames}). Stopping animation loop.")
                self.stop()
                break
            self.frame()
            count += 1
            self.clock.tick(self.fps)
        return count
