"""
Main Simulator
==============

Per-frame driver tying body placement, probe physics and collision
effects together.
"""

import logging
import numpy as np
from typing import Callable, Dict, Iterable, List
from dataclasses import dataclass, field

from .bodies import CelestialBody
from .config import SimulationConfig
from .time_manager import SimulationTime, TimeController
from ..dynamics.orbital import OrbitalElementsSolver
from ..environment.catalog import build_bodies
from ..environment.solar_system import OrbitalSystem
from ..probes.effects import EffectManager
from ..probes.launcher import LaunchSettings
from ..probes.probe import Probe
from ..probes.probe_simulator import CollisionEvent, ProbeSimulator
from ..probes.resources import ResourceFactory

logger = logging.getLogger(__name__)


@dataclass
class FrameState:
    """Summary of one simulated frame."""
    time_s: float = 0.0
    dt: float = 0.0
    elapsed_days: float = 0.0
    delta_days: float = 0.0
    time_multiplier: float = 0.0
    bodies_refreshed: bool = True
    skipped: bool = False

    live_probes: int = 0
    live_explosions: int = 0
    collisions: List[CollisionEvent] = field(default_factory=list)
    removed_probes: int = 0


class Simulator:
    """
    heliosim frame engine.

    Each call to step(dt), in order:
    - Reads the time multiplier and converts dt to simulated days
    - Refreshes body positions (skipped if the day delta is not finite)
    - Steps every probe against the refreshed bodies
    - Steps collision effects once
    - Notifies collision and step callbacks
    """

    def __init__(self,
                 config: SimulationConfig = None,
                 bodies: Iterable[CelestialBody] = None,
                 probe_resource_factory: ResourceFactory = None,
                 effect_resource_factory: ResourceFactory = None):
        """
        Initialize simulator.

        Args:
            config: Simulation configuration
            bodies: Body table, defaults to the solar system catalog
            probe_resource_factory: Render handle factory for probes
            effect_resource_factory: Render handle factory for explosions
        """
        self.config = config or SimulationConfig()

        # Time
        self.time = SimulationTime(epoch=self.config.time.epoch)
        self.time_controller = TimeController(self.config.time.time_multiplier)

        # Bodies
        self.solver = OrbitalElementsSolver(self.config.kepler)
        self.system = OrbitalSystem(
            build_bodies() if bodies is None else bodies,
            solver=self.solver,
            units=self.config.units,
        )

        # Probes and effects
        self.effects = EffectManager(self.config.effects, effect_resource_factory)
        self.probes = ProbeSimulator(
            params=self.config.probes,
            units=self.config.units,
            effects=self.effects,
            resource_factory=probe_resource_factory,
        )

        # Translation of the probe frame relative to the bodies' frame
        self.frame_offset = np.zeros(3)

        self.step_count = 0
        self.skipped_frames = 0
        self.total_collisions = 0

        # Data logging
        self.history: List[FrameState] = []

        # Callbacks
        self.step_callbacks: List[Callable] = []
        self.collision_callbacks: List[Callable] = []

    def reset(self):
        """Remove all probes and effects and rewind the clocks."""
        self.probes.clear()
        self.effects.clear()
        self.time.reset()
        for name in self.system.names:
            self.system.body(name).elapsed_days = 0.0
        self.system.refresh(0.0)
        self.frame_offset = np.zeros(3)
        self.history.clear()
        self.step_count = 0
        self.skipped_frames = 0
        self.total_collisions = 0

    def step(self, dt: float) -> FrameState:
        """
        Advance the simulation by one frame.

        Args:
            dt: Real seconds since the previous frame

        Returns:
            Frame summary
        """
        if not np.isfinite(dt) or dt < 0:
            logger.warning("Skipping frame with invalid dt=%r", dt)
            self.skipped_frames += 1
            return FrameState(
                time_s=self.time.elapsed_seconds,
                dt=dt,
                elapsed_days=self.time.elapsed_days,
                time_multiplier=self.time_controller.get(),
                bodies_refreshed=False,
                skipped=True,
                live_probes=len(self.probes),
                live_explosions=len(self.effects),
            )

        # === Bodies ===
        multiplier = self.time_controller.get()
        delta_days = self.time_controller.delta_days(dt)
        refreshed = self.system.refresh(delta_days)
        bodies = self.system.samples()

        # === Probes and effects ===
        report = self.probes.step(dt, bodies, self.frame_offset)
        self.effects.step(dt)

        self.time.advance(dt, delta_days if refreshed else 0.0)
        self.step_count += 1
        self.total_collisions += len(report.collisions)

        state = FrameState(
            time_s=self.time.elapsed_seconds,
            dt=dt,
            elapsed_days=self.time.elapsed_days,
            delta_days=delta_days,
            time_multiplier=multiplier,
            bodies_refreshed=refreshed,
            live_probes=report.live_count,
            live_explosions=len(self.effects),
            collisions=report.collisions,
            removed_probes=len(report.removed),
        )

        for event in report.collisions:
            for callback in self.collision_callbacks:
                callback(self, event)

        for callback in self.step_callbacks:
            callback(self, state)

        # Log state
        if len(self.history) == 0 or state.collisions or \
           (state.time_s - self.history[-1].time_s) >= (1.0 / self.config.output_rate_hz):
            self.history.append(state)

        return state

    def run(self,
            duration_seconds: float = None,
            dt: float = None,
            progress_callback: Callable = None) -> List[FrameState]:
        """
        Run fixed-rate frames for a duration of real time.

        Args:
            duration_seconds: Duration (default: config duration)
            dt: Frame step (default: config frame step)
            progress_callback: Called with progress (0-1)

        Raises:
            ValueError: Non-positive frame step or negative duration

        Returns:
            List of logged frame states
        """
        duration = self.config.duration_seconds if duration_seconds is None else duration_seconds
        dt = self.config.time.frame_step_seconds if dt is None else dt
        if not np.isfinite(dt) or dt <= 0:
            raise ValueError(f"Frame step must be positive, got {dt}")
        if not np.isfinite(duration) or duration < 0:
            raise ValueError(f"Duration must be non-negative, got {duration}")

        n_frames = int(round(duration / dt))
        for frame in range(n_frames):
            self.step(dt)

            if progress_callback and frame % 100 == 0:
                progress_callback(frame / n_frames)

        if self.config.verbose:
            logger.info("Simulation complete: %d frames, %d probes live, %d collisions",
                        self.step_count, len(self.probes), self.total_collisions)

        return self.history

    # === Probes ===

    def launch_probe(self,
                     position: np.ndarray,
                     direction: np.ndarray,
                     speed_km_s: float,
                     mass_kg: float = 0.0) -> Probe:
        """
        Launch a probe.

        Args:
            position: Launch position in the probe frame [world units]
            direction: Launch direction
            speed_km_s: Launch speed [km/s]
            mass_kg: Probe mass [kg]
        """
        speed = self.config.units.km_s_to_world(speed_km_s)
        return self.probes.launch(position, direction, speed, mass_kg)

    def launch_from_settings(self,
                             position: np.ndarray,
                             direction: np.ndarray,
                             settings: LaunchSettings) -> Probe:
        """Launch a probe with mass and speed taken from the panel sliders."""
        return self.launch_probe(position, direction, settings.speed_km_s, settings.mass_kg)

    def translate_frame(self, delta: np.ndarray):
        """Move the probe frame relative to the bodies (ship motion)."""
        self.frame_offset = self.frame_offset + np.asarray(delta, dtype=float)

    def set_time_multiplier(self, multiplier: float):
        """Externally set the time multiplier; read at the next frame."""
        self.time_controller.set(multiplier)

    # === Callbacks ===

    def add_step_callback(self, callback: Callable):
        """Add callback to be called each step."""
        self.step_callbacks.append(callback)

    def add_collision_callback(self, callback: Callable):
        """Add callback called as callback(sim, event) for every collision."""
        self.collision_callbacks.append(callback)

    # === Output ===

    def probe_trails(self) -> Dict[int, np.ndarray]:
        """Trail points of every live probe, keyed by probe id."""
        return {p.probe_id: np.array(p.trail_points) for p in self.probes.probes}

    def get_telemetry(self) -> Dict:
        """
        Get current telemetry data.

        Returns:
            Dictionary of telemetry values
        """
        return {
            'time_s': self.time.elapsed_seconds,
            'elapsed_days': self.time.elapsed_days,
            'date': self.time.current_date.isoformat(),
            'time_multiplier': self.time_controller.get(),
            'frame_offset': self.frame_offset.tolist(),
            'live_probes': len(self.probes),
            'live_explosions': len(self.effects),
            'total_collisions': self.total_collisions,
            'probes': [
                {
                    'id': p.probe_id,
                    'position': p.position.tolist(),
                    'velocity': p.velocity.tolist(),
                    'mass_kg': p.mass_kg,
                    'alive': p.alive,
                }
                for p in self.probes.probes
            ],
            'explosions': [
                {
                    'id': e.explosion_id,
                    'position': e.position.tolist(),
                    'scale': e.scale,
                    'fade': e.fade,
                    'alive': e.alive,
                }
                for e in self.effects.explosions
            ],
        }

    def export_trajectory(self, filename: str = None) -> np.ndarray:
        """
        Export frame history.

        Args:
            filename: Optional CSV filename

        Returns:
            History data array
        """
        if not self.history:
            return np.array([])

        data = np.zeros((len(self.history), 7))

        for i, state in enumerate(self.history):
            data[i, 0] = state.time_s
            data[i, 1] = state.elapsed_days
            data[i, 2] = state.time_multiplier
            data[i, 3] = state.live_probes
            data[i, 4] = state.live_explosions
            data[i, 5] = len(state.collisions)
            data[i, 6] = state.removed_probes

        if filename:
            header = "time_s,elapsed_days,time_multiplier,live_probes," + \
                     "live_explosions,collisions,removed_probes"
            np.savetxt(filename, data, delimiter=',', header=header)

        return data
