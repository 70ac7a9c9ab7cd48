# visualization.py
"""
Handles the pygame window of the particle portrait.
"""
import logging
import pygame
from typing import Tuple

from constants import (
    BACKGROUND_COLOR, CAPTION, BUTTON_WIDTH, BUTTON_HEIGHT, BUTTON_MARGIN,
    BUTTON_COLOR, BUTTON_HOVER_COLOR, BUTTON_TEXT_COLOR, BUTTON_FONT_SIZE
)
from errors import SurfaceUnavailableError
from sampler import Canvas

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from simulation import Simulation


# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, width: int, height: int):
#     - Side Effects: initializes pygame and opens a width x height window.
#     - Raises: SurfaceUnavailableError if the window cannot be created.
#     - self.canvas is a Canvas over the window surface.
#
#   - handle_events(self, simulation: "Simulation") -> bool:
#     - Outputs: False if the user asked to quit, True otherwise.
#     - Side Effects: forwards pointer motion to simulation.tracker and
#       triggers simulation.warp() from the warp button or the W key.
#
#   - present(self) -> None:
#     - Side Effects: draws the warp button over the canvas and flips
#       the display.

class Visualizer:
    """
    Owns the display window, routes input events and presents frames.
    """
    def __init__(self, width: int, height: int):
        pygame.init()
        pygame.font.init()

        try:
            self.screen = pygame.display.set_mode((width, height))
        except pygame.error as e:
            logging.critical(f"Could not open a {width}x{height} window: {e}")
            raise SurfaceUnavailableError(f"Could not open a {width}x{height} window: {e}") from e

        pygame.display.set_caption(CAPTION)
        self.canvas = Canvas(self.screen, BACKGROUND_COLOR)
        self.canvas.clear()

        # Pygame's bundled default font is always available.
        self.font = pygame.font.Font(None, BUTTON_FONT_SIZE)
        self.warp_button_rect = pygame.Rect(
            width - BUTTON_WIDTH - BUTTON_MARGIN, BUTTON_MARGIN, BUTTON_WIDTH, BUTTON_HEIGHT
        )

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def handle_event(self, event: pygame.event.Event, simulation: "Simulation") -> bool:
        """Routes a single event. Returns False if the user asked to quit."""
        if event.type == pygame.QUIT:
            logging.info("Quit event received. Shutting down visualizer.")
            return False

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False
            if event.key == pygame.K_w:
                logging.info("Warp triggered from keyboard.")
                simulation.warp()

        if event.type == pygame.MOUSEMOTION:
            x, y = event.pos
            movement_x, movement_y = event.rel
            simulation.tracker.move(x, y, movement_x, movement_y)

        if event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1 and self.warp_button_rect.collidepoint(event.pos):
                logging.info("Warp triggered from button.")
                simulation.warp()

        return True

    def handle_events(self, simulation: "Simulation") -> bool:
        """
        Drains the pygame event queue.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        running = True
        for event in pygame.event.get():
            if not self.handle_event(event, simulation):
                running = False
        return running

    def _draw_warp_button(self, mouse_pos: Tuple[int, int]):
        """Draws the warp button and handles its hover state."""
        is_hovered = self.warp_button_rect.collidepoint(mouse_pos)
        color = BUTTON_HOVER_COLOR if is_hovered else BUTTON_COLOR

        pygame.draw.rect(self.screen, color, self.warp_button_rect, border_radius=5)

        text_surf = self.font.render("Warp", True, BUTTON_TEXT_COLOR)
        text_rect = text_surf.get_rect(center=self.warp_button_rect.center)
        self.screen.blit(text_surf, text_rect)

    def present(self):
        """Draws the UI over the current frame and shows it."""
        self._draw_warp_button(pygame.mouse.get_pos())
        pygame.display.flip()

    def close(self):
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()
