"""
Solar System Model
==================

Flat body table with parent links, refreshed each frame from the
analytic orbit solver.
"""

import logging
import numpy as np
from typing import Dict, Iterable, List, Optional

from ..core.bodies import BodySample, CelestialBody
from ..core.config import UnitParameters
from ..dynamics.orbital import OrbitalElementsSolver

logger = logging.getLogger(__name__)


class OrbitalSystem:
    """
    Hierarchy of bodies on fixed Keplerian orbits.

    Bodies are stored in a flat name-keyed table. The hierarchy is
    expressed only through each body's parent name; absolute positions
    are resolved by walking parent links up to the root.
    """

    def __init__(self,
                 bodies: Iterable[CelestialBody],
                 solver: OrbitalElementsSolver = None,
                 units: UnitParameters = None):
        """
        Initialize the system and place every body at t = 0.

        Args:
            bodies: Bodies with exactly one root (no parent)
            solver: Orbit solver
            units: World unit scale

        Raises:
            ValueError: Duplicate names, unknown parents, parent cycles
                or a root count other than one
        """
        self.solver = solver or OrbitalElementsSolver()
        self.units = units or UnitParameters()

        self._bodies: Dict[str, CelestialBody] = {}
        for body in bodies:
            if body.name in self._bodies:
                raise ValueError(f"Duplicate body name: {body.name}")
            self._bodies[body.name] = body

        self._validate()
        self.root = next(b.name for b in self._bodies.values() if b.parent is None)

        self.refresh(0.0)

    def _validate(self):
        roots = [b.name for b in self._bodies.values() if b.parent is None]
        if len(roots) != 1:
            raise ValueError(f"Expected exactly one root body, found {len(roots)}: {roots}")

        for body in self._bodies.values():
            if body.parent is not None and body.parent not in self._bodies:
                raise ValueError(f"Body {body.name} has unknown parent {body.parent}")

        for name in self._bodies:
            seen = set()
            current = name
            while current is not None:
                if current in seen:
                    raise ValueError(f"Parent cycle through body {name}")
                seen.add(current)
                current = self._bodies[current].parent

    def refresh(self, delta_days: float) -> bool:
        """
        Advance every body's clock and recompute its local position.

        Args:
            delta_days: Simulated days since the previous refresh

        Returns:
            False when delta_days was not finite and nothing changed
        """
        if not np.isfinite(delta_days):
            logger.warning("Skipping body refresh with non-finite delta_days=%r", delta_days)
            return False

        km_to_world = self.units.km_to_world
        for body in self._bodies.values():
            body.elapsed_days += delta_days
            local_km = self.solver.solve_position(body.elements, body.elapsed_days)
            body.local_position = local_km * km_to_world

        return True

    def absolute_position(self, name: str) -> np.ndarray:
        """
        Position of a body in the system frame [world units].

        Sums local positions along the parent chain.
        """
        position = np.zeros(3)
        current: Optional[str] = name
        while current is not None:
            body = self._bodies[current]
            position = position + body.local_position
            current = body.parent
        return position

    def samples(self) -> List[BodySample]:
        """Read-only per-frame view for gravity and collision tests."""
        return [
            BodySample(
                name=body.name,
                position=self.absolute_position(body.name),
                radius_km=body.radius_km,
                mass_kg=body.mass_kg,
                size_multiplier=body.size_multiplier,
            )
            for body in self._bodies.values()
        ]

    def orbit_path(self, name: str, num_points: int = 181) -> np.ndarray:
        """
        Orbit polyline of a body relative to its parent [world units].
        """
        body = self._bodies[name]
        return self.solver.orbit_path(body.elements, num_points) * self.units.km_to_world

    def children(self, name: str) -> List[str]:
        """Names of bodies orbiting the given body."""
        return [b.name for b in self._bodies.values() if b.parent == name]

    def body(self, name: str) -> CelestialBody:
        return self._bodies[name]

    @property
    def names(self) -> List[str]:
        return list(self._bodies)

    def __contains__(self, name: str) -> bool:
        return name in self._bodies

    def __len__(self) -> int:
        return len(self._bodies)
