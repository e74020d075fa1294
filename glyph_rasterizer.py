# glyph_rasterizer.py

import logging
import numpy as np
import pygame
import constants
from errors import InvalidArgumentError

logger = logging.getLogger(constants.LOGGER_NAME)


class GlyphRasterizer:
    """
    Renders single characters off-screen and converts them into presence masks.

    A presence mask is a 2-D boolean array (rows x columns) where True marks a
    pixel of glyph ink. Columns without ink on either side are trimmed so the
    mask is as narrow as the glyph. Rows are not trimmed.

    Data Contract:
    - Inputs:
        - font_size (int): Font size in pixels used for every glyph.
        - padding (int): Extra pixels added to the square raster side.
        - font_name (str | None): Path to a font file, or None for pygame's default font.
    - Outputs: get_mask_for() returns a read-only np.ndarray of dtype bool.
    - Side Effects: Initializes pygame.font if it is not already initialized.
    - Invariants: Every cached mask has `size` rows and is never mutated or evicted.
    """
    def __init__(self, font_size: int, padding: int = 0, font_name=None):
        if not pygame.font.get_init():
            pygame.font.init()

        self.font_size = font_size
        self.size = font_size + padding
        self._font = pygame.font.Font(font_name, font_size)
        self._surface = pygame.Surface((self.size, self.size))
        self._cache = {}

        logger.info(f"GlyphRasterizer created: font_size={font_size}, raster={self.size}x{self.size}.")

    @property
    def cached_characters(self):
        return tuple(self._cache)

    def get_mask_for(self, character: str) -> np.ndarray:
        """
        Returns the trimmed presence mask for a single character, rendering it on first use.

        Raises InvalidArgumentError if `character` is not a string of length one.
        """
        if not isinstance(character, str) or len(character) != 1:
            raise InvalidArgumentError(f"Expected a single character, got {character!r}.")

        mask = self._cache.get(character)
        if mask is not None:
            return mask

        mask = self._trim_columns(self._render(character))
        mask.setflags(write=False)
        self._cache[character] = mask
        logger.debug(f"Rasterized {character!r}: {mask.shape[1]} columns, {int(mask.sum())} ink cells.")
        return mask

    def _render(self, character: str) -> np.ndarray:
        """
        Draws the character centered on the raster surface and reduces it to booleans.

        Anti-aliasing is disabled so every ink pixel is exactly INK_COLOR.
        Raises InvalidArgumentError when the font cannot render the character
        (e.g. NUL or a lone surrogate).
        """
        try:
            glyph = self._font.render(character, False, constants.INK_COLOR)
        except (ValueError, UnicodeError, pygame.error) as e:
            raise InvalidArgumentError(f"Cannot render {character!r}.") from e

        self._surface.fill(constants.BLACK)
        self._surface.blit(glyph, glyph.get_rect(center=(self.size // 2, self.size // 2)))

        # surfarray is indexed [x, y]; transpose to rows of pixels.
        pixels = pygame.surfarray.array3d(self._surface).transpose(1, 0, 2)
        return np.all(pixels == np.array(constants.INK_COLOR), axis=2)

    @staticmethod
    def _trim_columns(mask: np.ndarray) -> np.ndarray:
        inked_columns = np.flatnonzero(mask.any(axis=0))
        if inked_columns.size == 0:
            return np.zeros((mask.shape[0], 0), dtype=bool)
        return mask[:, inked_columns[0]:inked_columns[-1] + 1].copy()
