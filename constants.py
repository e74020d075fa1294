# constants.py

"""
Application Constants

This module defines static configuration values for the application's framework.
These are not expected to change between runs. Tunable values live in config.json.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

import numpy as np

# Screen dimensions (initial; the window is resizable)
WIDTH = 1280  # Pixels
HEIGHT = 720  # Pixels

# Framerate
FPS = 60  # Frames per second

# Colors (RGB)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)

# Window Title
TITLE = "Particle Typer"

# Name of the dedicated application logger
LOGGER_NAME = "particle_typer"

# Palette used for particle colors.
COLORS = ('#673C4F', '#7F557D', '#726E97', '#7698B3', '#83B5D1')

# Background and glyph ink colors.
BACKGROUND_COLOR = BLACK
INK_COLOR = WHITE  # Rasterizer ink; must differ from BLACK, the cleared surface color.

# Caret drawn at the text cursor.
CURSOR_COLOR = (131, 181, 209)
CURSOR_THICKNESS = 2  # Pixels

# Orbit sample table: 16 angles evenly spaced over one turn, starting at 0.
SAMPLE_ANGLE_COUNT = 16
SAMPLE_ANGLES = np.linspace(0.0, 2.0 * np.pi, SAMPLE_ANGLE_COUNT, endpoint=False)
COS_VALUES = np.cos(SAMPLE_ANGLES)
SIN_VALUES = np.sin(SAMPLE_ANGLES)

# Motion tuning used when config.json omits a key.
DEFAULT_MOTION = {
    'arrival_threshold': 1.0,                   # Canvas units
    'travel_divisor': {'x': 15, 'y': 30},       # Frames-ish; larger is slower
    'orbit_travel_factor': {'min': 10, 'max': 20},
    'orbit_radius_scalar': {'min': 1.0, 'max': 2.5},  # Multiplies the particle radius
}
