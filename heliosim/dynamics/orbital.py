"""
Orbital Position Solver
=======================

Keplerian placement of bodies on fixed analytic orbits.

Given a body's classical elements and the simulated days elapsed since
the epoch, returns its position relative to its orbital parent. Bodies
are not perturbed by one another.
"""

import logging
from dataclasses import replace

import numpy as np

from ..core.bodies import OrbitalElements
from ..core.config import (
    KeplerParameters,
    KEPLER_TOLERANCE,
    KEPLER_MAX_ITERATIONS,
    KEPLER_MIN_DERIVATIVE,
    MAX_ECCENTRICITY,
)

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * np.pi


def normalize_angle(angle: float) -> float:
    """Wrap an angle into [0, 2π)."""
    wrapped = angle % TWO_PI
    # Tiny negative inputs round up to exactly 2π
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return float(wrapped)


def clamp_eccentricity(eccentricity) -> float:
    """
    Clamp eccentricity into [0, MAX_ECCENTRICITY].

    Parabolic and hyperbolic values are not supported and are pulled
    back just inside the ellipse range. Missing or non-finite values
    become a circular orbit.
    """
    if eccentricity is None or not np.isfinite(eccentricity):
        return 0.0
    return float(min(max(eccentricity, 0.0), MAX_ECCENTRICITY))


def _angle_rad(value_deg) -> float:
    if value_deg is None or not np.isfinite(value_deg):
        return 0.0
    return float(np.radians(value_deg))


def solve_kepler(mean_anomaly: float,
                 eccentricity: float,
                 tolerance: float = KEPLER_TOLERANCE,
                 max_iterations: int = KEPLER_MAX_ITERATIONS,
                 min_derivative: float = KEPLER_MIN_DERIVATIVE) -> float:
    """
    Solve Kepler's equation E - e·sin(E) = M for the eccentric anomaly.

    Newton-Raphson, starting from M for e < 0.8 and from π otherwise.

    Args:
        mean_anomaly: Mean anomaly [rad], any real value
        eccentricity: Orbit eccentricity, clamped into [0, 0.999999]
        tolerance: Stop when the correction is below this [rad]
        max_iterations: Hard iteration cap
        min_derivative: Abort when |1 - e·cos(E)| falls below this

    Returns:
        Eccentric anomaly E [rad]
    """
    M = normalize_angle(mean_anomaly)
    e = clamp_eccentricity(eccentricity)

    E = M if e < 0.8 else np.pi

    for iteration in range(max_iterations):
        f_prime = 1.0 - e * np.cos(E)
        if abs(f_prime) < min_derivative:
            logger.debug("Kepler derivative vanished at E=%.6g (e=%.6g)", E, e)
            break

        delta = (E - e * np.sin(E) - M) / f_prime
        E -= delta

        if abs(delta) < tolerance:
            break
    else:
        logger.debug("Kepler solver hit %d iterations (M=%.6g, e=%.6g)",
                     max_iterations, M, e)

    return float(E)


def mean_anomaly_at(elements: OrbitalElements, elapsed_days: float) -> float:
    """
    Mean anomaly after elapsed_days, wrapped into [0, 2π).

    M = M0 + n·t with mean motion n = 2π / period.
    """
    n = TWO_PI / elements.period_days
    M = _angle_rad(elements.mean_anomaly_epoch_deg) + n * elapsed_days
    return normalize_angle(M)


def true_anomaly(eccentric_anomaly: float, eccentricity: float) -> float:
    """
    True anomaly from eccentric anomaly.

    Uses tan(ν/2) = sqrt((1+e)/(1-e))·tan(E/2) in its atan2 form so
    the quadrant is kept.
    """
    e = clamp_eccentricity(eccentricity)
    half = 0.5 * eccentric_anomaly
    return float(2.0 * np.arctan2(np.sqrt(1.0 + e) * np.sin(half),
                                  np.sqrt(1.0 - e) * np.cos(half)))


def perifocal_to_parent(elements: OrbitalElements) -> np.ndarray:
    """
    Rotation from the orbital plane to the parent frame.

    Q = R3(Ω) · R1(i) · R3(ω)
    """
    i = _angle_rad(elements.inclination_deg)
    Omega = _angle_rad(elements.lon_ascending_node_deg)
    omega = _angle_rad(elements.arg_periapsis_deg)

    R3_Omega = np.array([
        [np.cos(Omega), -np.sin(Omega), 0],
        [np.sin(Omega), np.cos(Omega), 0],
        [0, 0, 1]
    ])

    R1_i = np.array([
        [1, 0, 0],
        [0, np.cos(i), -np.sin(i)],
        [0, np.sin(i), np.cos(i)]
    ])

    R3_omega = np.array([
        [np.cos(omega), -np.sin(omega), 0],
        [np.sin(omega), np.cos(omega), 0],
        [0, 0, 1]
    ])

    return R3_Omega @ R1_i @ R3_omega


def solve_position(elements: OrbitalElements,
                   elapsed_days: float,
                   params: KeplerParameters = None) -> np.ndarray:
    """
    Position of a body relative to its parent.

    Args:
        elements: Orbital elements
        elapsed_days: Simulated days since the epoch
        params: Kepler solver settings

    Returns:
        Position [x, y, z] in the length unit of the semi-major axis.
        Degenerate orbits return the origin.
    """
    if elements.is_degenerate:
        return np.zeros(3)

    params = params or KeplerParameters()
    a = float(elements.semi_major_axis_km)
    e = clamp_eccentricity(elements.eccentricity)

    M = mean_anomaly_at(elements, elapsed_days)
    if not np.isfinite(M):
        return np.zeros(3)

    E = solve_kepler(M, e,
                     tolerance=params.tolerance,
                     max_iterations=params.max_iterations,
                     min_derivative=params.min_derivative)
    nu = true_anomaly(E, e)

    # Orbital-plane radius and coordinates
    r = a * (1 - e**2) / (1 + e * np.cos(nu))
    r_pqw = r * np.array([np.cos(nu), np.sin(nu), 0.0])

    return perifocal_to_parent(elements) @ r_pqw


def orbit_path(elements: OrbitalElements,
               num_points: int = 181,
               params: KeplerParameters = None) -> np.ndarray:
    """
    Sample a closed orbit for drawing.

    Sweeps the epoch mean anomaly once around the orbit at t = 0.

    Returns:
        (num_points, 3) array, empty for degenerate orbits
    """
    if elements.is_degenerate or num_points < 1:
        return np.zeros((0, 3))

    points = np.zeros((num_points, 3))
    for k, m0_deg in enumerate(np.linspace(0.0, 360.0, num_points)):
        sample = replace(elements, mean_anomaly_epoch_deg=float(m0_deg))
        points[k] = solve_position(sample, 0.0, params)
    return points


class OrbitalElementsSolver:
    """
    Analytic orbit placement with configurable Kepler settings.

    Stateless apart from its settings; identical inputs always give
    identical positions.
    """

    def __init__(self, params: KeplerParameters = None):
        """
        Initialize solver.

        Args:
            params: Kepler iteration settings
        """
        self.params = params or KeplerParameters()

    def solve_kepler(self, mean_anomaly: float, eccentricity: float) -> float:
        return solve_kepler(mean_anomaly, eccentricity,
                            tolerance=self.params.tolerance,
                            max_iterations=self.params.max_iterations,
                            min_derivative=self.params.min_derivative)

    def solve_position(self, elements: OrbitalElements, elapsed_days: float) -> np.ndarray:
        return solve_position(elements, elapsed_days, self.params)

    def orbit_path(self, elements: OrbitalElements, num_points: int = 181) -> np.ndarray:
        return orbit_path(elements, num_points, self.params)

    def orbital_radius(self, elements: OrbitalElements, elapsed_days: float) -> float:
        """Distance from the parent at the given time."""
        return float(np.linalg.norm(self.solve_position(elements, elapsed_days)))
