# particle_system.py

import logging
import numpy as np
import constants
from particle import Behavior, Particle

logger = logging.getLogger(constants.LOGGER_NAME)


class ParticleCollection:
    """
    Insertion-ordered set of particles with O(1) append and removal by identity.

    Iteration yields particles in the order they were added.
    """
    def __init__(self, particles=()):
        self._particles = {}
        for particle in particles:
            self.append(particle)

    def __len__(self):
        return len(self._particles)

    def __iter__(self):
        return iter(list(self._particles.values()))

    def __contains__(self, particle):
        return id(particle) in self._particles

    def append(self, particle: Particle):
        self._particles[id(particle)] = particle

    def remove(self, particle: Particle) -> bool:
        """Removes `particle` if present. Returns False when it was not in the collection."""
        return self._particles.pop(id(particle), None) is not None

    def pop_latest(self, count: int) -> list:
        """Removes and returns up to `count` of the most recently added particles."""
        removed = []
        while self._particles and len(removed) < count:
            removed.append(self._particles.popitem()[1])
        return removed

    def clear(self) -> int:
        dropped = len(self._particles)
        self._particles.clear()
        return dropped


class ParticleSwarm:
    """
    Owns every particle in the animation, grouped by behavior.

    Data Contract:
    - Inputs:
        - config (dict): The 'simulation' section of the config file.
        - rng (np.random.Generator): The master seeded random number generator.
        - bounds (tuple): The (width, height) of the canvas.
    - Outputs: None. This class modifies its internal state.
    - Side Effects: Manages the lifecycle of all particles.
    - Invariants:
        - A particle belongs to exactly one collection, the one keyed by its behavior.
        - The AMBIENT collection is rebuilt only by resize(); ORBITING and TRAVELING
          change with typing activity.
    """
    def __init__(self, config: dict, rng: np.random.Generator, bounds: tuple):
        self.config = config
        self.rng = rng
        self.motion = {key: config[key] for key in constants.DEFAULT_MOTION if key in config}
        self.collections = {behavior: ParticleCollection() for behavior in Behavior}
        self.reclassify_misses = 0
        self.bounds = np.array(bounds, dtype=float)

        self.resize(bounds)
        logger.info(f"ParticleSwarm created with motion settings: {self.motion}")

    # --- Particle creation ---

    def _random_within_bounds(self, radius: float) -> np.ndarray:
        """Random position whose circle of `radius` lies inside the bounds."""
        low = np.full(2, float(radius))
        high = np.maximum(self.bounds - radius, low)
        return self.rng.uniform(low, high)

    def _random_color(self) -> str:
        return constants.COLORS[self.rng.integers(len(constants.COLORS))]

    def _create_ambient_particle(self) -> Particle:
        radius_bounds = self.config['radius_bounds']
        radius = int(self.rng.integers(radius_bounds['min'], radius_bounds['max'] + 1))
        return Particle(
            position=self._random_within_bounds(radius),
            velocity=(self.rng.random(2) - 0.5) * self.config['speed_scalar'],
            radius=radius,
            color=self._random_color(),
            behavior=Behavior.AMBIENT,
            rng=self.rng,
            motion=self.motion,
        )

    def spawn_traveling(self, destination, radius: float) -> Particle:
        """Creates a traveling particle at a random spot on the canvas and adds it to the swarm."""
        particle = Particle(
            position=self._random_within_bounds(radius),
            radius=radius,
            color=self._random_color(),
            behavior=Behavior.TRAVELING,
            destination=destination,
            rng=self.rng,
            motion=self.motion,
        )
        self.add(particle)
        return particle

    # --- Collection management ---

    def add(self, particle: Particle):
        self.collections[particle.behavior].append(particle)

    def reclassify(self, particle: Particle, old_behavior: Behavior, new_behavior: Behavior):
        """
        Moves `particle` from the `old_behavior` collection to the `new_behavior` one.

        A particle missing from `old_behavior` is left alone; the miss is logged and counted.
        """
        if not self.collections[old_behavior].remove(particle):
            self.reclassify_misses += 1
            logger.warning(f"Reclassify miss: {particle} not found among {old_behavior.name} particles.")
            return
        self.collections[new_behavior].append(particle)

    def discard(self, behavior: Behavior) -> int:
        """Drops every particle with `behavior`. Returns how many were dropped."""
        return self.collections[behavior].clear()

    def remove_latest(self, behavior: Behavior, count: int) -> int:
        """Removes up to `count` of the most recently added particles with `behavior`."""
        return len(self.collections[behavior].pop_latest(count))

    def counts(self) -> dict:
        return {behavior.name: len(collection) for behavior, collection in self.collections.items()}

    def __len__(self):
        return sum(len(collection) for collection in self.collections.values())

    # --- Lifecycle ---

    def resize(self, bounds: tuple):
        """
        Adopts new canvas bounds and regenerates the ambient particles inside them.

        Orbiting and traveling particles keep their positions; they are not bound
        to the canvas size.
        """
        self.bounds = np.array(bounds, dtype=float)
        ambient = [self._create_ambient_particle() for _ in range(self.config['ambient_particle_count'])]
        # Grouped by color, as they are drawn.
        ambient.sort(key=lambda particle: particle.color, reverse=True)
        self.collections[Behavior.AMBIENT] = ParticleCollection(ambient)

        logger.info(f"Swarm resized to {self.bounds.tolist()} with {len(ambient)} ambient particles.")

    def tick(self, bounds=None, canvas=None):
        """
        Draws then updates every particle exactly once.

        A particle that changes behavior during the tick is moved to its new
        collection immediately, but is not updated a second time.
        """
        bounds = self.bounds if bounds is None else bounds
        # Snapshot first; reclassification mutates the collections mid-pass.
        particles = [particle for collection in self.collections.values() for particle in collection]

        for particle in particles:
            if canvas is not None:
                particle.draw(canvas)
            change = particle.update(bounds)
            if change is not None:
                self.reclassify(*change)
