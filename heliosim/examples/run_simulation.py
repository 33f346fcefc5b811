#!/usr/bin/env python3
"""
heliosim Simulation Example
===========================

Example script demonstrating the probe and orbit engine.
"""

import logging
import numpy as np
import time

# Add parent directory to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from heliosim.core.config import SimulationConfig
from heliosim.core.simulator import Simulator
from heliosim.probes.launcher import LaunchSettings


def run_quick_simulation():
    """Run one minute of frames with a handful of probes in flight."""
    print("=" * 60)
    print("heliosim Quick Simulation")
    print("=" * 60)

    config = SimulationConfig(duration_seconds=60.0, verbose=True)
    sim = Simulator(config)

    # Fire a fan of probes from just outside Earth's orbit
    earth = sim.system.absolute_position('Earth')
    origin = earth * 1.2
    settings = LaunchSettings(mass_fraction=0.2, speed_fraction=0.5)
    for angle in np.linspace(0.0, 2.0 * np.pi, 8, endpoint=False):
        direction = np.array([np.cos(angle), np.sin(angle), 0.0])
        sim.launch_from_settings(origin, direction, settings)

    print(f"\nSimulation Configuration:")
    print(f"  Duration: {config.duration_seconds} s")
    print(f"  Frame step: {config.time.frame_step_seconds:.4f} s")
    print(f"  Time multiplier: {config.time.time_multiplier:.0f}x")
    print(f"  Bodies: {len(sim.system)}")
    print(f"  Launch speed: {settings.speed_km_s:.1f} km/s ({settings.speed_percent_c:.1f}% c)")
    print(f"  Probe mass: {settings.mass_kg:.0f} kg")

    print("\nRunning simulation...")
    start_time = time.time()

    def progress(p):
        if p > 0:
            print(f"  Progress: {p*100:.0f}%", end='\r')

    history = sim.run(progress_callback=progress)

    elapsed = time.time() - start_time
    print(f"\nSimulation complete in {elapsed:.2f}s")
    print(f"  Logged {len(history)} frames")
    print(f"  Real-time factor: {config.duration_seconds / elapsed:.1f}x")

    telemetry = sim.get_telemetry()
    print(f"\nFinal State:")
    print(f"  Date: {telemetry['date']}")
    print(f"  Simulated days: {telemetry['elapsed_days']:.1f}")
    print(f"  Live probes: {telemetry['live_probes']}")
    print(f"  Collisions: {telemetry['total_collisions']}")


def run_free_flight_scenario():
    """Run free flight scenario."""
    print("\n" + "=" * 60)
    print("Free Flight Scenario")
    print("=" * 60)

    from heliosim.scenarios.free_flight import FreeFlightScenario, FreeFlightScenarioConfig

    scenario = FreeFlightScenario(FreeFlightScenarioConfig(num_frames=300))
    scenario.run()

    print(scenario.get_summary())


def run_impact_scenario():
    """Run impact scenario."""
    print("\n" + "=" * 60)
    print("Impact Scenario")
    print("=" * 60)

    from heliosim.scenarios.impact import ImpactScenario, ImpactScenarioConfig

    scenario = ImpactScenario(ImpactScenarioConfig(target='Mars'))
    scenario.run()

    print(scenario.get_summary())


def show_planet_positions():
    """Print planet positions a year after epoch."""
    print("\n" + "=" * 60)
    print("Planet Positions")
    print("=" * 60)

    sim = Simulator()
    sim.system.refresh(365.25)

    print(f"\n{'Body':>10} {'x':>10} {'y':>10} {'z':>10} {'r':>10}")
    print("-" * 54)
    for name in sim.system.children(sim.system.root):
        body = sim.system.body(name)
        if body.kind != 'planet':
            continue
        p = sim.system.absolute_position(name)
        print(f"{name:>10} {p[0]:>10.2f} {p[1]:>10.2f} {p[2]:>10.2f} {np.linalg.norm(p):>10.2f}")
    print("\n(world units, 1 unit = 1e6 km)")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="heliosim Simulation Examples")
    parser.add_argument('--all', action='store_true', help='Run all examples')
    parser.add_argument('--quick', action='store_true', help='Run quick simulation')
    parser.add_argument('--free-flight', action='store_true', help='Run free flight scenario')
    parser.add_argument('--impact', action='store_true', help='Run impact scenario')
    parser.add_argument('--planets', action='store_true', help='Show planet positions')

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Default to quick if no args
    if not any(vars(args).values()):
        args.quick = True

    if args.all or args.quick:
        run_quick_simulation()

    if args.all or args.free_flight:
        run_free_flight_scenario()

    if args.all or args.impact:
        run_impact_scenario()

    if args.all or args.planets:
        show_planet_positions()

    print("\n" + "=" * 60)
    print("Examples complete!")
    print("=" * 60)
