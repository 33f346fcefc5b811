import numpy as np
import pytest

from heliosim.scenarios import (
    FreeFlightScenario,
    FreeFlightScenarioConfig,
    ImpactScenario,
    ImpactScenarioConfig,
)


def test_free_flight_is_a_straight_line():
    scenario = FreeFlightScenario(FreeFlightScenarioConfig(num_frames=600))

    results = scenario.run()

    assert results['frames_flown'] == 600
    assert results['probe_alive']
    assert results['max_position_error'] < 1e-9
    assert np.allclose(results['final_position'], [0.0, 0.0, -100.0])
    assert results['trail_points'] == 100
    assert "Free Flight" in scenario.get_summary()


def test_free_flight_leaves_range():
    config = FreeFlightScenarioConfig(speed=15000.0 * 60.0, num_frames=5)
    scenario = FreeFlightScenario(config)

    results = scenario.run()

    # Range culled on the second frame
    assert results['frames_flown'] == 1
    assert not results['probe_alive']


def test_impact_scenario_hits_target():
    scenario = ImpactScenario(ImpactScenarioConfig(target='Earth'))

    results = scenario.run()

    assert results['impacted']
    assert results['impact_body'] == 'Earth'
    assert results['collisions'] == 1
    assert results['explosions_spawned'] == 1
    assert results['live_probes'] == 0
    assert results['live_explosions'] == 0
    # standoff / speed
    assert results["time_to_impact_s"] == pytest.approx(30.0 / 20.0, abs=0.05)


def test_summary_before_run():
    assert ImpactScenario().get_summary() == "Scenario not yet run."
