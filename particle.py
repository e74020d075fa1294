# particle.py

import logging
from collections import namedtuple
from enum import Enum
import numpy as np
import constants
from errors import InvalidArgumentError, PreconditionViolation
from orbit import OrbitPath

logger = logging.getLogger(constants.LOGGER_NAME)


class Behavior(Enum):
    """How a particle moves on the canvas."""
    AMBIENT = 'AMBIENT'      # Bounces around the canvas using its velocity.
    ORBITING = 'ORBITING'    # Cycles through the points of its OrbitPath.
    TRAVELING = 'TRAVELING'  # Eases toward a one-shot destination.


# Emitted by Particle.update() when the particle switches behavior. The owner
# must move the particle between its collections before the next frame.
BehaviorChange = namedtuple('BehaviorChange', ['particle', 'old_behavior', 'new_behavior'])


class Particle:
    """
    A single animated point (a "circle") driven by a per-particle behavior state machine.

    Transitions:
        TRAVELING --arrived--> ORBITING (new OrbitPath centered at the arrival point)
        ORBITING  --arrived--> ORBITING (destination <- OrbitPath.advance())
        AMBIENT   --boundary-> AMBIENT  (velocity component negated)

    Data Contract:
    - Inputs:
        - position (array-like): Initial (x, y).
        - radius (float): Visual radius; also scales the orbit radius.
        - color: Any pygame color value.
        - behavior (Behavior): Initial behavior.
        - velocity (array-like | None): (dx, dy), used only while AMBIENT.
        - destination (array-like | None): Required for TRAVELING.
        - rng (np.random.Generator | None): Source of randomness for orbit creation.
        - motion (dict | None): Overrides for constants.DEFAULT_MOTION.
    - Outputs: update() returns a BehaviorChange or None.
    - Invariants:
        - TRAVELING always has a destination.
        - ORBITING always owns exactly one OrbitPath and a destination taken from it.
        - AMBIENT has a velocity and neither a destination nor an orbit.
    """
    def __init__(self, position, radius: float, color, behavior: Behavior = Behavior.AMBIENT,
                 velocity=None, destination=None, rng: np.random.Generator = None, motion: dict = None):
        self.position = np.array(position, dtype=float)
        self.velocity = np.zeros(2) if velocity is None else np.array(velocity, dtype=float)
        self.radius = radius
        self.color = color
        self.rng = rng if rng is not None else np.random.default_rng()
        self.motion = {**constants.DEFAULT_MOTION, **(motion or {})}
        self.destination = None if destination is None else np.array(destination, dtype=float)
        self.orbit = None
        self.behavior = None

        behavior = _coerce_behavior(behavior)
        if behavior is Behavior.TRAVELING and self.destination is None:
            raise InvalidArgumentError("A traveling particle needs a destination.")
        self.set_behavior(behavior)

    # --- Properties derived from the motion settings ---

    @property
    def threshold(self) -> float:
        return self.motion['arrival_threshold']

    @property
    def travel_divisor(self) -> np.ndarray:
        divisor = self.motion['travel_divisor']
        return np.array((divisor['x'], divisor['y']), dtype=float)

    def distance_to_destination(self) -> float:
        if self.destination is None:
            raise PreconditionViolation(f"{self.behavior.name} particle has no destination.")
        return float(np.hypot(*(self.destination - self.position)))

    # --- Behavior changes ---

    def set_behavior(self, new_behavior, reset_orbit: bool = False):
        """
        Sets the behavior used by update().

        `new_behavior` may be a Behavior member or its name. When entering ORBITING
        with reset_orbit=True (or with no orbit yet), a new OrbitPath is centered
        on the current position.

        Raises InvalidArgumentError for an unrecognized behavior.
        """
        behavior = _coerce_behavior(new_behavior)

        if behavior is Behavior.ORBITING:
            if reset_orbit or self.orbit is None:
                self._start_orbit()
        elif behavior is Behavior.TRAVELING:
            if self.destination is None:
                raise PreconditionViolation("Cannot travel without a destination; use travel_to().")
            self.orbit = None
        else:
            self.destination = None
            self.orbit = None

        self.behavior = behavior

    def travel_to(self, destination):
        """Sends the particle toward `destination`, abandoning any orbit."""
        self.destination = np.array(destination, dtype=float)
        self.set_behavior(Behavior.TRAVELING)

    def _start_orbit(self):
        scalar = self.motion['orbit_radius_scalar']
        travel = self.motion['orbit_travel_factor']
        self.orbit = OrbitPath(
            center=self.position,
            radius=self.radius * self.rng.uniform(scalar['min'], scalar['max']),
            travel_factor=int(self.rng.integers(travel['min'], travel['max'] + 1)),
        )
        self.destination = self.orbit.advance()

    # --- Per-frame update ---

    def update(self, bounds=None):
        """
        Moves the particle one frame according to its behavior.

        - Inputs: bounds (array-like | None): (width, height); required while AMBIENT.
        - Outputs: A BehaviorChange when the particle switched behavior, otherwise None.
        """
        return _UPDATE_HANDLERS[self.behavior](self, bounds)

    def _update_ambient(self, bounds):
        if bounds is None:
            raise PreconditionViolation("Ambient particles need bounds to update.")
        bounds = np.asarray(bounds, dtype=float)

        # Reverse direction on any axis where the circle touches an edge.
        hits_edge = (self.position + self.radius >= bounds) | (self.position - self.radius <= 0)
        self.velocity[hits_edge] *= -1
        self.position += self.velocity

        # Nudge back inside so a fast particle never leaves the canvas.
        np.clip(self.position, self.radius, np.maximum(bounds - self.radius, self.radius), out=self.position)
        return None

    def _update_traveling(self, bounds):
        self.distance_to_destination()  # Fails loudly if the destination is missing.
        self.position += (self.destination - self.position) / self.travel_divisor

        if self.distance_to_destination() < self.threshold:
            self.set_behavior(Behavior.ORBITING, reset_orbit=True)
            logger.debug(f"Particle arrived at {self.position.round(2).tolist()}, now orbiting: {self.orbit}")
            return BehaviorChange(self, Behavior.TRAVELING, Behavior.ORBITING)
        return None

    def _update_orbiting(self, bounds):
        if self.orbit is None:
            raise PreconditionViolation("Orbiting particle has no orbit.")
        self.position += (self.destination - self.position) / self.orbit.travel_factor

        if self.distance_to_destination() < self.threshold:
            self.destination = self.orbit.advance()
        return None

    def draw(self, canvas):
        """Draws the particle on the canvas."""
        canvas.draw_filled_circle(self.position[0], self.position[1], self.radius, self.color)

    def __repr__(self):
        return (f"Particle(behavior={self.behavior.name}, position={self.position.round(2).tolist()}, "
                f"radius={self.radius})")


def _coerce_behavior(value) -> Behavior:
    if isinstance(value, Behavior):
        return value
    if isinstance(value, str) and value in Behavior.__members__:
        return Behavior[value]
    raise InvalidArgumentError(f"Invalid behavior: {value!r}.")


_UPDATE_HANDLERS = {
    Behavior.AMBIENT: Particle._update_ambient,
    Behavior.ORBITING: Particle._update_orbiting,
    Behavior.TRAVELING: Particle._update_traveling,
}
