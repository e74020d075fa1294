# orbit.py

import numpy as np
import constants


class OrbitPath:
    """
    A path that resembles an orbit: successive points on a circle around a fixed center.

    Data Contract:
    - Inputs:
        - center (array-like): The (x, y) center of the orbit.
        - radius (float): Distance of every sampled point from the center.
        - travel_factor (int): Divisor used by an orbiting particle to ease toward
          the next point. Larger values mean more frames per point.
    - Outputs: advance() returns the next target point as a float array of shape (2,).
    - Invariants: angle_index is always in [0, SAMPLE_ANGLE_COUNT). The sequence of
      points repeats every SAMPLE_ANGLE_COUNT calls and cannot be rewound.
    """
    def __init__(self, center, radius: float, travel_factor: int):
        self.center = np.array(center, dtype=float)
        self.radius = float(radius)
        self.travel_factor = travel_factor
        self.angle_index = 0

    def advance(self) -> np.ndarray:
        point = self.center + self.radius * np.array(
            (constants.COS_VALUES[self.angle_index], constants.SIN_VALUES[self.angle_index])
        )
        self.angle_index = (self.angle_index + 1) % constants.SAMPLE_ANGLE_COUNT
        return point

    def __repr__(self):
        return (f"OrbitPath(center={self.center.tolist()}, radius={self.radius:.2f}, "
                f"travel_factor={self.travel_factor}, angle_index={self.angle_index})")
