"""
Numerical Integrators
=====================

Fixed-step integration for probe motion.
"""

import numpy as np
from typing import Tuple


def velocity_update(velocity: np.ndarray, acceleration: np.ndarray, dt: float) -> np.ndarray:
    """v' = v + a·dt"""
    return velocity + acceleration * dt


def position_update(position: np.ndarray, velocity: np.ndarray, dt: float) -> np.ndarray:
    """x' = x + v'·dt, using the already-updated velocity."""
    return position + velocity * dt


class SemiImplicitEuler:
    """
    Semi-implicit (symplectic) Euler integrator.

    Velocity is updated first and the new velocity moves the position.
    The two half-steps are also exposed separately so a caller can
    validate the velocity before committing the position.
    """

    def step(self,
             position: np.ndarray,
             velocity: np.ndarray,
             acceleration: np.ndarray,
             dt: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Perform one step with a precomputed acceleration.

        Returns:
            Tuple of (new_position, new_velocity)
        """
        v_new = self.update_velocity(velocity, acceleration, dt)
        r_new = self.update_position(position, v_new, dt)
        return r_new, v_new

    @staticmethod
    def update_velocity(velocity: np.ndarray, acceleration: np.ndarray, dt: float) -> np.ndarray:
        return velocity_update(velocity, acceleration, dt)

    @staticmethod
    def update_position(position: np.ndarray, velocity: np.ndarray, dt: float) -> np.ndarray:
        return position_update(position, velocity, dt)
