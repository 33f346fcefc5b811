"""
Celestial Body State
====================

Orbital elements and the per-frame body view consumed by the probe core.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class OrbitalElements:
    """
    Classical Keplerian elements relative to the parent body.

    Any element may be None. Missing angles default to zero; a missing
    semi-major axis or period makes the orbit degenerate (body sits at
    the parent origin).
    """
    semi_major_axis_km: Optional[float] = None
    eccentricity: Optional[float] = None
    period_days: Optional[float] = None
    inclination_deg: Optional[float] = None
    lon_ascending_node_deg: Optional[float] = None
    arg_periapsis_deg: Optional[float] = None
    mean_anomaly_epoch_deg: Optional[float] = None

    @property
    def is_degenerate(self) -> bool:
        """True when the orbit cannot be placed and resolves to the origin."""
        a = self.semi_major_axis_km
        p = self.period_days
        if a is None or p is None:
            return True
        if not (np.isfinite(a) and np.isfinite(p)):
            return True
        return not (a > 0 and p > 0)


@dataclass
class CelestialBody:
    """A body on a fixed analytic orbit around its parent."""
    name: str
    parent: Optional[str] = None
    elements: OrbitalElements = field(default_factory=OrbitalElements)
    mass_kg: Optional[float] = None
    radius_km: float = 0.0
    size_multiplier: Optional[float] = None
    kind: str = "body"

    # Accumulated simulated time and the resulting parent-relative position
    elapsed_days: float = 0.0
    local_position: np.ndarray = field(default_factory=lambda: np.zeros(3))

    @property
    def is_root(self) -> bool:
        return self.parent is None


@dataclass(frozen=True)
class BodySample:
    """
    Read-only per-frame view of a body for gravity and collision tests.

    position is in world units in the bodies' frame, or None when the
    body could not be placed this frame.
    """
    name: str
    position: Optional[np.ndarray]
    radius_km: float = 0.0
    mass_kg: Optional[float] = None
    size_multiplier: Optional[float] = None
