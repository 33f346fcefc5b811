"""
Gravity Field
=============

Newtonian attraction of the catalog bodies on a massless test particle.
"""

import numpy as np
from typing import Iterable

from ..core.bodies import BodySample
from ..core.config import G, KM_PER_WORLD_UNIT, MIN_GRAVITY_DISTANCE


class GravityField:
    """
    Summed point-mass gravity from a list of positioned bodies.

    Only body-to-probe attraction is modelled. Positions are in world
    units; the force law is evaluated in kilometres and the result is
    returned in world units per second squared.
    """

    def __init__(self,
                 gravitational_constant: float = G,
                 km_per_world_unit: float = KM_PER_WORLD_UNIT,
                 min_distance: float = MIN_GRAVITY_DISTANCE):
        """
        Initialize gravity field.

        Args:
            gravitational_constant: G in km³/(kg·s²)
            km_per_world_unit: Length scale of world units
            min_distance: Bodies closer than this [world units] are ignored
        """
        self.G = gravitational_constant
        self.km_per_world_unit = km_per_world_unit
        self.min_distance = min_distance

    def compute_acceleration(self,
                             test_position: np.ndarray,
                             bodies: Iterable[BodySample]) -> np.ndarray:
        """
        Gravitational acceleration at a point.

        Args:
            test_position: Position [world units]
            bodies: Bodies with mass [kg] and position [world units]

        Returns:
            Acceleration [world units/s²]
        """
        acc = np.zeros(3)
        test_position = np.asarray(test_position, dtype=float)

        for body in bodies:
            mass = body.mass_kg
            if mass is None or body.position is None or not np.isfinite(mass):
                continue

            r_vec = np.asarray(body.position, dtype=float) - test_position
            distance = np.linalg.norm(r_vec)
            if not distance > self.min_distance:
                continue

            distance_km = distance * self.km_per_world_unit
            acc_km = self.G * mass / distance_km**2  # km/s²
            acc += (r_vec / distance) * (acc_km / self.km_per_world_unit)

        return acc


_default_field = GravityField()


def compute_acceleration(test_position: np.ndarray,
                         bodies: Iterable[BodySample]) -> np.ndarray:
    """Acceleration using the default unit system."""
    return _default_field.compute_acceleration(test_position, bodies)
