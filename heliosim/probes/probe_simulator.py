"""
Probe Simulator
===============

Gravity integration, collision tests and lifecycle management for
launched probes.
"""

import itertools
import logging
import numpy as np
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .effects import EffectManager
from .pool import EntityPool
from .probe import Probe, ProbeState
from .resources import ResourceFactory, null_resource_factory
from ..core.bodies import BodySample
from ..core.config import ProbeParameters, UnitParameters
from ..dynamics.gravity import GravityField
from ..dynamics.integrators import SemiImplicitEuler

logger = logging.getLogger(__name__)


@dataclass
class CollisionEvent:
    """A probe hitting a body."""
    probe_id: int
    body_name: str
    position: np.ndarray
    explosion_id: Optional[int] = None


@dataclass
class ProbeStepReport:
    """Outcome of one probe step."""
    collisions: List[CollisionEvent] = field(default_factory=list)
    removed: List[Tuple[int, ProbeState]] = field(default_factory=list)
    live_count: int = 0

    @property
    def had_collision(self) -> bool:
        return bool(self.collisions)


class ProbeSimulator:
    """
    Owns the bounded collection of live probes.

    Per step, for every probe:
    - Sample gravity at the probe's absolute position
    - Semi-implicit Euler update, guarding against non-finite velocity
    - Trail update
    - Collision test against each body
    - Range cull
    - Removal of dead probes, releasing their render resources

    None of the terminal conditions raise; they are normal ends of a
    probe's life and show up in the returned report.
    """

    def __init__(self,
                 params: ProbeParameters = None,
                 units: UnitParameters = None,
                 gravity: GravityField = None,
                 effects: EffectManager = None,
                 resource_factory: ResourceFactory = None):
        """
        Initialize probe simulator.

        Args:
            params: Pool, trail and range limits
            units: Unit scale used for collision radii and default gravity
            gravity: Gravity field (built from units if omitted)
            effects: Explosion manager fed by collisions
            resource_factory: Builds the render handle for a new probe
        """
        self.params = params or ProbeParameters()
        self.units = units or UnitParameters()
        self.gravity = gravity or GravityField(
            gravitational_constant=self.units.gravitational_constant,
            km_per_world_unit=self.units.km_per_world_unit,
            min_distance=self.params.min_gravity_distance,
        )
        self.effects = effects if effects is not None else EffectManager()
        self.resource_factory = resource_factory or null_resource_factory
        self.integrator = SemiImplicitEuler()

        self._pool: EntityPool[Probe] = EntityPool(self.params.max_probes, name="probes")
        self._ids = itertools.count(1)
        self.launch_count = 0
        self.collision_count = 0

    # === Launch ===

    def launch(self,
               position: np.ndarray,
               direction: np.ndarray,
               launch_speed: float,
               mass_kg: float = 0.0) -> Probe:
        """
        Launch a probe.

        Args:
            position: Launch position [world units, probe frame]
            direction: Launch direction (any length)
            launch_speed: Speed [world units/s]
            mass_kg: Probe mass, display only

        Returns:
            The new probe, now the newest in the pool
        """
        position = np.array(position, dtype=float)
        velocity = _unit(direction) * float(launch_speed)
        if not np.all(np.isfinite(velocity)):
            velocity = np.zeros(3)

        probe = Probe(
            probe_id=next(self._ids),
            position=position,
            velocity=velocity,
            mass_kg=float(mass_kg),
            trail=deque(maxlen=self.params.trail_length),
        )
        # Two coincident points so the trail is never a single-point curve
        probe.trail.append(position.copy())
        probe.trail.append(position.copy())

        probe.resource = self.resource_factory(probe)
        probe.resource.update_position(probe.position)

        evicted = self._pool.add(probe)
        if evicted is not None:
            logger.debug("Evicted probe %d to launch probe %d", evicted.probe_id, probe.probe_id)

        self.launch_count += 1
        return probe

    # === Step ===

    def step(self,
             dt: float,
             bodies: Sequence[BodySample],
             frame_offset: np.ndarray = None) -> ProbeStepReport:
        """
        Advance every live probe by dt.

        Args:
            dt: Real seconds since the previous frame
            bodies: Current body positions [world units], radii and masses
            frame_offset: Translation of the probe frame relative to the
                bodies' frame

        Returns:
            Collisions and removals that happened this step
        """
        report = ProbeStepReport()
        if not np.isfinite(dt) or dt < 0:
            logger.warning("Skipping probe step with invalid dt=%r", dt)
            report.live_count = len(self._pool)
            return report

        offset = np.zeros(3) if frame_offset is None else np.asarray(frame_offset, dtype=float)

        for probe in self._pool:
            if probe.alive:
                self._step_probe(probe, dt, bodies, offset, report)

            if not probe.alive:
                report.removed.append((probe.probe_id, probe.state))
                logger.debug("Removing probe %d (%s)", probe.probe_id, probe.state.name)
                self._pool.remove(probe.probe_id)

        report.live_count = len(self._pool)
        return report

    def _step_probe(self,
                    probe: Probe,
                    dt: float,
                    bodies: Sequence[BodySample],
                    offset: np.ndarray,
                    report: ProbeStepReport):
        probe.age_s += dt

        # Gravity at the absolute position
        absolute = probe.position + offset
        acceleration = self.gravity.compute_acceleration(absolute, bodies)

        velocity = self.integrator.update_velocity(probe.velocity, acceleration, dt)
        if not np.all(np.isfinite(velocity)):
            probe.kill(ProbeState.DEAD_INSTABILITY)
            return
        probe.velocity = velocity

        position = self.integrator.update_position(probe.position, velocity, dt)
        if not np.all(np.isfinite(position)):
            probe.kill(ProbeState.DEAD_INSTABILITY)
            return
        probe.position = position

        probe.trail.append(position.copy())
        probe.resource.update_position(position)
        if len(probe.trail) >= 2:
            probe.resource.update_trail(probe.trail_points)

        # Collisions
        absolute = position + offset
        for body in bodies:
            if body.position is None:
                continue
            body_absolute = np.asarray(body.position, dtype=float) + offset
            if np.linalg.norm(absolute - body_absolute) < self.effective_collision_radius(body):
                explosion = self.effects.spawn(absolute)
                report.collisions.append(CollisionEvent(
                    probe_id=probe.probe_id,
                    body_name=body.name,
                    position=absolute.copy(),
                    explosion_id=explosion.explosion_id,
                ))
                self.collision_count += 1
                probe.kill(ProbeState.DEAD_COLLISION)
                break

        # Range cull in the probe's own frame
        if probe.alive and np.linalg.norm(probe.position) > self.params.max_range:
            probe.kill(ProbeState.DEAD_OUT_OF_RANGE)

    def effective_collision_radius(self, body: BodySample) -> float:
        """Collision radius of a body in world units."""
        size = body.size_multiplier if body.size_multiplier is not None else self.units.size_multiplier
        return (body.radius_km * self.units.km_to_world * size
                * self.params.collision_radius_factor)

    # === Access ===

    @property
    def probes(self) -> Tuple[Probe, ...]:
        """Live probes, oldest first."""
        return tuple(self._pool)

    def get(self, probe_id: int) -> Optional[Probe]:
        return self._pool.get(probe_id)

    def clear(self):
        """Dispose every probe."""
        self._pool.clear()

    def __len__(self) -> int:
        return len(self._pool)


def _unit(vector) -> np.ndarray:
    v = np.asarray(vector, dtype=float).reshape(3)
    norm = np.linalg.norm(v)
    if not norm > 0 or not np.isfinite(norm):
        return np.zeros(3)
    return v / norm
