# main.py

import pygame
import constants
import json
import logging
import logger_setup
import numpy as np
from canvas import Canvas
from glyph_rasterizer import GlyphRasterizer
from particle_system import ParticleSwarm
from typing_controller import TypingController

# Get the application's dedicated logger
logger = logging.getLogger(constants.LOGGER_NAME)


def handle_event(event, canvas, swarm, controller):
    """
    Dispatches a single pygame event.

    - Outputs: False when the application should stop, True otherwise.
    """
    if event.type == pygame.QUIT:
        return False

    if event.type == pygame.VIDEORESIZE:
        canvas.resize(pygame.display.get_surface())
        swarm.resize(canvas.bounds)
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        elif event.key == pygame.K_BACKSPACE:
            controller.handle_backspace()
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            controller.handle_newline()
        elif len(event.unicode) == 1 and event.unicode.isprintable():
            controller.handle_character(event.unicode)
    return True


def run_animation_loop(canvas, swarm, controller, clock, sim_config):
    """
    Runs one draw/update pass per display frame until the window is closed.
    """
    # --- Loop Setup ---
    running = True
    tick = 0
    log_interval = sim_config['log_interval_ticks']

    while running:
        # Event handling
        for event in pygame.event.get():
            if not handle_event(event, canvas, swarm, controller):
                running = False

        # --- Drawing & Update ---
        canvas.clear()
        swarm.tick(canvas=canvas)
        if sim_config['show_cursor']:
            controller.draw_cursor(canvas)
        pygame.display.flip()

        # --- Logging (throttled) ---
        if tick % log_interval == 0:
            logger.debug(
                f"Tick={tick}, "
                f"Counts={swarm.counts()}, "
                f"ReclassifyMisses={swarm.reclassify_misses}, "
                f"FPS={clock.get_fps():.1f}"
            )

        clock.tick(constants.FPS)
        tick += 1

    return tick


def main(config_path='config.json'):
    """
    Main function to initialize and run the typer animation.
    """
    # --- Setup ---
    logger_setup.setup_logging(config_path)

    with open(config_path, 'r') as f:
        config = json.load(f)
    sim_config = config['simulation']

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config['master_seed'])
    logger.info(f"Master RNG initialized with seed: {config['master_seed']}")

    # --- Initialization ---
    pygame.init()
    screen = pygame.display.set_mode((constants.WIDTH, constants.HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption(constants.TITLE)
    clock = pygame.time.Clock()

    canvas = Canvas(screen, trail_alpha=sim_config['trail_alpha'])
    swarm = ParticleSwarm(config=sim_config, rng=rng, bounds=canvas.bounds)
    rasterizer = GlyphRasterizer(
        font_size=sim_config['font_size'],
        padding=sim_config['font_padding'],
        font_name=sim_config['font_name'],
    )
    controller = TypingController(swarm, rasterizer, sim_config)

    ticks = run_animation_loop(canvas, swarm, controller, clock, sim_config)

    logger.info(f"Application shutting down after {ticks} frames. Final counts: {swarm.counts()}")
    pygame.quit()

if __name__ == "__main__":
    main()
