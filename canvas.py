# canvas.py

import pygame
import constants


class Canvas:
    """
    Thin drawing surface used by the particle engine.

    Data Contract:
    - Inputs:
        - surface (pygame.Surface): The surface to draw on, usually the display surface.
        - background (tuple): RGB color used by clear().
        - trail_alpha (int | None): When set (0-255), clear() blends the background over
          the previous frame instead of replacing it. Lower values leave longer trails.
    - Side Effects: Draws on `surface`.
    """
    def __init__(self, surface: pygame.Surface, background=constants.BACKGROUND_COLOR, trail_alpha=None):
        self.background = background
        self.trail_alpha = trail_alpha
        self.resize(surface)

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    @property
    def bounds(self) -> tuple:
        return (self.width, self.height)

    def resize(self, surface: pygame.Surface):
        """Points the canvas at a new surface, e.g. after the window was resized."""
        self.surface = surface
        self._trail_surface = None
        if self.trail_alpha is not None:
            self._trail_surface = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
            self._trail_surface.fill((*self.background, self.trail_alpha))

    def clear(self):
        if self._trail_surface is None:
            self.surface.fill(self.background)
        else:
            self.surface.blit(self._trail_surface, (0, 0))

    def draw_filled_circle(self, x: float, y: float, radius: float, color):
        pygame.draw.circle(self.surface, pygame.Color(color), (int(x), int(y)), max(1, int(radius)))

    def draw_line(self, start, end, color, thickness: int = 1):
        pygame.draw.line(
            self.surface, pygame.Color(color),
            (int(start[0]), int(start[1])), (int(end[0]), int(end[1])),
            thickness
        )
