import copy
import json
import os
from pathlib import Path

# Headless pygame; must be set before pygame is imported anywhere.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from glyph_rasterizer import GlyphRasterizer
from particle_system import ParticleSwarm

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"


@pytest.fixture(scope="session")
def base_config():
    with open(CONFIG_PATH, "r") as f:
        return json.load(f)


@pytest.fixture
def sim_config(base_config):
    config = copy.deepcopy(base_config["simulation"])
    config["ambient_particle_count"] = 25
    return config


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def swarm(sim_config, rng):
    return ParticleSwarm(config=sim_config, rng=rng, bounds=(1200, 800))


@pytest.fixture(scope="session")
def rasterizer(base_config):
    sim = base_config["simulation"]
    return GlyphRasterizer(
        font_size=sim["font_size"],
        padding=sim["font_padding"],
        font_name=sim["font_name"],
    )


@pytest.fixture
def surface():
    return pygame.Surface((60, 40))
