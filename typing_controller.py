# typing_controller.py

import logging
from collections import namedtuple
import numpy as np
import constants
from glyph_rasterizer import GlyphRasterizer
from particle import Behavior
from particle_system import ParticleSwarm

logger = logging.getLogger(constants.LOGGER_NAME)

# One entry per keystroke on the undo stack.
KeystrokeRecord = namedtuple('KeystrokeRecord', ['spawned', 'cursor_before'])


class TypingController:
    """
    Turns keystrokes into particles that fly in and spell out the typed text.

    Data Contract:
    - Inputs:
        - swarm (ParticleSwarm): Receives the spawned particles; its bounds drive the layout.
        - rasterizer (GlyphRasterizer): Source of presence masks.
        - config (dict): The 'simulation' section of the config file.
    - Outputs: handle_character() returns the number of particles spawned,
      handle_backspace() the number of orbiting particles removed.
    - Side Effects: Adds and removes particles in the swarm.
    - Invariants: `cursor` is the offset of the next character from the text origin.
      Every keystroke that moved the cursor has exactly one record on the history stack.
    """
    def __init__(self, swarm: ParticleSwarm, rasterizer: GlyphRasterizer, config: dict):
        self.swarm = swarm
        self.rasterizer = rasterizer
        self.config = config
        self.cursor = np.zeros(2)
        self._history = []

    @property
    def origin(self) -> np.ndarray:
        """Top-left corner of the text block, as a fraction of the canvas size."""
        text_origin = self.config['text_origin']
        return self.swarm.bounds * np.array((text_origin['x'], text_origin['y']))

    @property
    def line_height(self) -> float:
        return self.rasterizer.size * self.config['cell_spacing'] * self.config['line_height_scalar']

    @property
    def history_depth(self) -> int:
        return len(self._history)

    def handle_character(self, character: str) -> int:
        mask = self.rasterizer.get_mask_for(character)
        spacing = self.config['cell_spacing']
        top_left = self.origin + self.cursor

        rows, columns = np.nonzero(mask)
        for r, c in zip(rows, columns):
            destination = top_left + np.array((c * spacing, r * spacing), dtype=float)
            self.swarm.spawn_traveling(destination, self.config['char_particle_radius'])

        spawned = len(rows)
        self._history.append(KeystrokeRecord(spawned, self.cursor.copy()))

        width = mask.shape[1] or self.config['space_width']
        self._advance(width * self.config['advance_scalar'])

        logger.debug(f"Typed {character!r}: spawned {spawned} particles, cursor now {self.cursor.tolist()}.")
        return spawned

    def handle_newline(self):
        """Moves the cursor to the start of the next line."""
        self._history.append(KeystrokeRecord(0, self.cursor.copy()))
        self._wrap()
        logger.debug(f"Newline: cursor now {self.cursor.tolist()}.")

    def handle_backspace(self) -> int:
        """
        Undoes the most recent keystroke.

        All traveling particles are dropped, since a glyph still in flight is abandoned.
        Orbiting particles are removed from the tail by the count spawned for that
        keystroke; they are not tagged with the character that produced them.
        """
        if not self._history:
            logger.debug("Backspace with nothing to undo.")
            return 0

        record = self._history.pop()
        dropped = self.swarm.discard(Behavior.TRAVELING)
        removed = self.swarm.remove_latest(Behavior.ORBITING, record.spawned)
        self.cursor = record.cursor_before.copy()

        logger.debug(
            f"Backspace: dropped {dropped} traveling, removed {removed}/{record.spawned} orbiting, "
            f"cursor back to {self.cursor.tolist()}."
        )
        return removed

    def _advance(self, distance: float):
        right_edge = self.swarm.bounds[0] - self.config['right_margin']
        if self.origin[0] + self.cursor[0] + distance > right_edge:
            self._wrap()
        else:
            self.cursor[0] += distance

    def _wrap(self):
        self.cursor[0] = 0.0
        self.cursor[1] += self.line_height

    def draw_cursor(self, canvas):
        """Draws a caret at the position of the next character."""
        top = self.origin + self.cursor
        bottom = top + np.array((0.0, self.rasterizer.size * self.config['cell_spacing']))
        canvas.draw_line(top, bottom, constants.CURSOR_COLOR, constants.CURSOR_THICKNESS)
