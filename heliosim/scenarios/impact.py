"""
Impact Scenario
===============

A probe fired at a catalog body until it hits, with the collision
afterglow played out.
"""

import numpy as np
from typing import Dict, List, Optional
from dataclasses import dataclass

from ..core.config import SimulationConfig, TimeParameters
from ..core.simulator import Simulator
from ..probes.probe_simulator import CollisionEvent


@dataclass
class ImpactScenarioConfig:
    """Configuration for impact scenario."""
    target: str = 'Earth'
    standoff: float = 30.0  # world units from the collision surface
    speed: float = 20.0  # world units/s
    mass_kg: float = 500.0
    time_multiplier: float = 1.0  # keep the target nearly fixed
    max_duration_s: float = 10.0
    frame_dt: float = 1.0 / 60.0


class ImpactScenario:
    """
    Impact scenario.

    Tests:
    - Collision against a moving body's effective radius
    - Explosion spawn and decay
    - Collision callbacks
    """

    def __init__(self, config: ImpactScenarioConfig = None):
        """
        Initialize impact scenario.

        Args:
            config: Scenario configuration
        """
        self.config = config or ImpactScenarioConfig()
        self.sim_config = SimulationConfig(
            duration_seconds=self.config.max_duration_s,
            time=TimeParameters(
                time_multiplier=self.config.time_multiplier,
                frame_step_seconds=self.config.frame_dt,
            ),
        )

        self.simulator: Optional[Simulator] = None
        self.events: List[CollisionEvent] = []
        self.distance_history = []
        self.time_history = []
        self.impact_time: Optional[float] = None
        self.results: Dict = {}

    def setup(self):
        """Setup scenario: launch one probe straight at the target."""
        self.simulator = Simulator(self.sim_config)
        self.simulator.add_collision_callback(self._on_collision)

        # Launch radially outward from the target so the path never crosses the root body
        target = self.simulator.system.absolute_position(self.config.target)
        sample = next(s for s in self.simulator.system.samples() if s.name == self.config.target)
        radius = self.simulator.probes.effective_collision_radius(sample)
        outward = target / np.linalg.norm(target)
        launch = target + outward * (radius + self.config.standoff)
        self.simulator.probes.launch(launch, target - launch, self.config.speed, self.config.mass_kg)

    def _on_collision(self, sim: Simulator, event: CollisionEvent):
        self.events.append(event)
        if self.impact_time is None:
            self.impact_time = sim.time.elapsed_seconds

    def run(self) -> Dict:
        """
        Run impact scenario.

        Returns:
            Results dictionary
        """
        if self.simulator is None:
            self.setup()

        print(f"Running Impact Scenario: target {self.config.target}")

        sim = self.simulator
        n_frames = int(round(self.config.max_duration_s / self.config.frame_dt))
        for _ in range(n_frames):
            sim.step(self.config.frame_dt)

            target = sim.system.absolute_position(self.config.target)
            probes = sim.probes.probes
            if probes:
                self.time_history.append(sim.time.elapsed_seconds)
                self.distance_history.append(float(np.linalg.norm(probes[0].position - target)))

            # Stop once the afterglow has faded
            if self.events and len(sim.effects) == 0:
                break

        self.results = self._analyze_results()
        return self.results

    def _analyze_results(self) -> Dict:
        """Analyze scenario results."""
        impact = self.events[0] if self.events else None

        return {
            'target': self.config.target,
            'impacted': impact is not None,
            'impact_body': impact.body_name if impact else None,
            'time_to_impact_s': self.impact_time,
            'closest_approach': min(self.distance_history) if self.distance_history else None,
            'collisions': len(self.events),
            'explosions_spawned': self.simulator.effects.spawn_count,
            'live_probes': len(self.simulator.probes),
            'live_explosions': len(self.simulator.effects),
            'frames': self.simulator.step_count,
        }

    def get_summary(self) -> str:
        """Get human-readable summary."""
        if not self.results:
            return "Scenario not yet run."

        if self.results['impacted']:
            impact_str = (f"{self.results['impact_body']} after "
                          f"{self.results['time_to_impact_s']:.3f} s")
        else:
            impact_str = "No impact"

        return f"""
Impact Scenario Summary
=======================
Target: {self.results['target']}
Impact: {impact_str}
Collisions: {self.results['collisions']}
Explosions spawned: {self.results['explosions_spawned']}
Frames: {self.results['frames']}
"""
