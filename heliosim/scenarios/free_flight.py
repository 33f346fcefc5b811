"""
Free Flight Scenario
====================

A probe launched in empty space travels in a straight line.
"""

import numpy as np
from typing import Dict, Optional
from dataclasses import dataclass, field

from ..core.bodies import CelestialBody
from ..core.config import SimulationConfig
from ..core.simulator import Simulator


@dataclass
class FreeFlightScenarioConfig:
    """Configuration for free flight scenario."""
    launch_position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    direction: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, -1.0]))
    speed: float = 10.0  # world units/s
    num_frames: int = 600
    frame_dt: float = 1.0 / 60.0


class FreeFlightScenario:
    """
    Free flight scenario.

    Tests:
    - Straight-line motion without gravity
    - Trail stays within its cap
    - Range culling once the probe leaves the working volume
    """

    def __init__(self, config: FreeFlightScenarioConfig = None):
        """
        Initialize free flight scenario.

        Args:
            config: Scenario configuration
        """
        self.config = config or FreeFlightScenarioConfig()
        self.sim_config = SimulationConfig(
            duration_seconds=self.config.num_frames * self.config.frame_dt,
        )

        self.simulator: Optional[Simulator] = None
        self.probe_id: Optional[int] = None
        self.results: Dict = {}
        self.position_history = []
        self.time_history = []

    def setup(self):
        """Setup scenario with a single massless marker as the only body."""
        self.simulator = Simulator(self.sim_config, bodies=[CelestialBody(name='Origin')])
        probe = self.simulator.probes.launch(
            self.config.launch_position,
            self.config.direction,
            self.config.speed,
        )
        self.probe_id = probe.probe_id

    def run(self) -> Dict:
        """
        Run free flight scenario.

        Returns:
            Results dictionary
        """
        if self.simulator is None:
            self.setup()

        print(f"Running Free Flight Scenario: {self.config.num_frames} frames")

        for _ in range(self.config.num_frames):
            self.simulator.step(self.config.frame_dt)
            probe = self.simulator.probes.get(self.probe_id)
            if probe is None:
                break
            self.position_history.append(probe.position.copy())
            self.time_history.append(self.simulator.time.elapsed_seconds)

        self.results = self._analyze_results()
        return self.results

    def _analyze_results(self) -> Dict:
        """Compare the flown path with the analytic straight line."""
        if not self.position_history:
            return {'frames_flown': 0, 'probe_alive': False}

        direction = np.asarray(self.config.direction, dtype=float)
        direction = direction / np.linalg.norm(direction)

        times = np.array(self.time_history)
        expected = self.config.launch_position + np.outer(times, direction) * self.config.speed
        errors = np.linalg.norm(np.array(self.position_history) - expected, axis=1)

        probe = self.simulator.probes.get(self.probe_id)
        return {
            'frames_flown': len(self.position_history),
            'flight_time_s': float(times[-1]),
            'final_position': self.position_history[-1].tolist(),
            'distance_travelled': float(np.linalg.norm(self.position_history[-1] - self.config.launch_position)),
            'max_position_error': float(errors.max()),
            'probe_alive': probe is not None,
            'trail_points': len(probe.trail) if probe is not None else 0,
        }

    def get_summary(self) -> str:
        """Get human-readable summary."""
        if not self.results:
            return "Scenario not yet run."

        return f"""
Free Flight Scenario Summary
============================
Frames flown: {self.results['frames_flown']}
Flight time: {self.results.get('flight_time_s', 0.0):.3f} s
Distance travelled: {self.results.get('distance_travelled', 0.0):.3f} world units
Max deviation from straight line: {self.results.get('max_position_error', 0.0):.3e}
Probe alive: {self.results['probe_alive']}
"""
