import numpy as np
import pytest

from heliosim.core.bodies import BodySample
from heliosim.core.config import ProbeParameters
from heliosim.dynamics.gravity import GravityField
from heliosim.probes.effects import EffectManager
from heliosim.probes.probe import ProbeState
from heliosim.probes.probe_simulator import ProbeSimulator
from heliosim.probes.resources import RenderResource

DT = 1.0 / 60.0


class RecordingResource(RenderResource):
    def __init__(self):
        super().__init__()
        self.release_calls = 0
        self.positions = []
        self.trail_sizes = []

    def update_position(self, position):
        self.positions.append(np.array(position))

    def update_trail(self, points):
        self.trail_sizes.append(len(points))

    def _release(self):
        self.release_calls += 1


@pytest.fixture
def resources():
    return []


@pytest.fixture
def sim(resources):
    def factory(entity):
        resource = RecordingResource()
        resources.append(resource)
        return resource

    return ProbeSimulator(resource_factory=factory)


def _blocker(position, radius_km=1000.0, mass_kg=None):
    # Default size multiplier 1000: radius 1000 km -> 1.1 world units with the 1.1 factor
    return BodySample(name="Blocker", position=np.array(position, dtype=float),
                      radius_km=radius_km, mass_kg=mass_kg)


def test_launch_seeds_trail_and_velocity(sim):
    probe = sim.launch([1.0, 2.0, 3.0], [0.0, 0.0, -2.0], 10.0, mass_kg=500.0)

    assert probe.alive
    assert np.allclose(probe.velocity, [0.0, 0.0, -10.0])
    assert len(probe.trail) == 2
    assert np.array_equal(probe.trail[0], probe.trail[1])
    assert probe.mass_kg == 500.0
    assert sim.get(probe.probe_id) is probe


def test_zero_direction_launches_at_rest(sim):
    probe = sim.launch(np.zeros(3), np.zeros(3), 10.0)

    assert np.array_equal(probe.velocity, np.zeros(3))


def test_fifty_first_launch_evicts_oldest(sim, resources):
    probes = [sim.launch(np.zeros(3), [1.0, 0.0, 0.0], 1.0) for _ in range(51)]

    assert len(sim) == 50
    assert sim.get(probes[0].probe_id) is None
    assert probes[0].state == ProbeState.REMOVED
    assert resources[0].release_calls == 1
    assert sim.probes[0] is probes[1]
    assert sim.probes[-1] is probes[-1]
    assert all(r.release_calls == 0 for r in resources[1:])


def test_straight_line_without_bodies(sim):
    probe = sim.launch(np.zeros(3), [0.0, 0.0, -1.0], 10.0)

    for _ in range(60):
        sim.step(DT, [])

    assert np.allclose(probe.position, [0.0, 0.0, -10.0])
    assert np.allclose(probe.velocity, [0.0, 0.0, -10.0])


def test_trail_is_capped(sim, resources):
    probe = sim.launch(np.zeros(3), [1.0, 0.0, 0.0], 1.0)

    for _ in range(150):
        sim.step(DT, [])

    assert len(probe.trail) == 100
    assert np.array_equal(probe.trail[-1], probe.position)
    assert max(resources[0].trail_sizes) == 100


def test_single_body_velocity_change():
    gravity = GravityField(gravitational_constant=1.0, km_per_world_unit=1.0)
    sim = ProbeSimulator(gravity=gravity)
    probe = sim.launch(np.zeros(3), np.zeros(3), 0.0)
    body = BodySample(name="Mass", position=np.array([2.0, 0.0, 0.0]), mass_kg=4.0)

    sim.step(0.5, [body])

    # a = G m / d^2 = 1; semi-implicit Euler moves with the new velocity
    assert np.allclose(probe.velocity, [0.5, 0.0, 0.0])
    assert np.allclose(probe.position, [0.25, 0.0, 0.0])


def test_gravity_uses_offset_probe_position():
    gravity = GravityField(gravitational_constant=1.0, km_per_world_unit=1.0)
    sim = ProbeSimulator(gravity=gravity)
    probe = sim.launch(np.zeros(3), np.zeros(3), 0.0)
    body = BodySample(name="Mass", position=np.array([10.0, 0.0, 0.0]), mass_kg=100.0)

    sim.step(0.1, [body], frame_offset=np.array([20.0, 0.0, 0.0]))

    assert probe.velocity[0] == pytest.approx(-0.1)


def test_non_finite_velocity_kills_without_moving(sim, resources):
    probe = sim.launch([1.0, 1.0, 1.0], [1.0, 0.0, 0.0], 1.0)
    probe.velocity = np.array([np.nan, 0.0, 0.0])

    report = sim.step(DT, [])

    assert report.removed == [(probe.probe_id, ProbeState.DEAD_INSTABILITY)]
    assert np.array_equal(probe.position, [1.0, 1.0, 1.0])
    assert len(probe.trail) == 2
    assert len(sim) == 0
    assert resources[0].release_calls == 1


def test_collision_spawns_one_explosion():
    effects = EffectManager()
    sim = ProbeSimulator(effects=effects)
    probe = sim.launch(np.zeros(3), [1.0, 0.0, 0.0], 60.0)
    blocker = _blocker([5.0, 0.0, 0.0])

    collisions = []
    for _ in range(10):
        collisions.extend(sim.step(DT, [blocker]).collisions)

    assert len(collisions) == 1
    event = collisions[0]
    assert event.probe_id == probe.probe_id
    assert event.body_name == "Blocker"
    assert np.linalg.norm(event.position - blocker.position) < 1.1
    assert len(effects) == 1
    assert effects.spawn_count == 1
    assert np.array_equal(effects.get(event.explosion_id).position, event.position)
    assert probe.state == ProbeState.REMOVED
    assert len(sim) == 0
    assert sim.collision_count == 1


def test_collision_is_unaffected_by_frame_offset():
    effects = EffectManager()
    sim = ProbeSimulator(effects=effects)
    sim.launch(np.zeros(3), [1.0, 0.0, 0.0], 60.0)
    blocker = _blocker([5.0, 0.0, 0.0])
    offset = np.array([100.0, -40.0, 7.0])

    hits = sum(len(sim.step(DT, [blocker], offset).collisions) for _ in range(10))

    assert hits == 1
    # Explosion is placed at the probe's absolute position
    assert effects.explosions[0].position[0] > 100.0


def test_body_without_position_is_not_hit(sim):
    sim.launch(np.zeros(3), [1.0, 0.0, 0.0], 1.0)
    unplaced = BodySample(name="Ghost", position=None, radius_km=1e9)

    report = sim.step(DT, [unplaced])

    assert not report.had_collision
    assert len(sim) == 1


def test_effective_collision_radius(sim):
    planet = BodySample(name="Earth", position=np.zeros(3), radius_km=6371.0)
    sun = BodySample(name="Sun", position=np.zeros(3), radius_km=696340.0, size_multiplier=150)

    assert sim.effective_collision_radius(planet) == pytest.approx(6371.0 * 1e-6 * 1000 * 1.1)
    assert sim.effective_collision_radius(sun) == pytest.approx(696340.0 * 1e-6 * 150 * 1.1)


def test_range_cull(sim):
    probe = sim.launch([19999.5, 0.0, 0.0], [1.0, 0.0, 0.0], 60.0)
    inside = sim.launch([100.0, 0.0, 0.0], [1.0, 0.0, 0.0], 60.0)

    report = sim.step(DT, [])

    assert report.removed == [(probe.probe_id, ProbeState.DEAD_OUT_OF_RANGE)]
    assert len(sim) == 1
    assert sim.probes[0] is inside


def test_range_cull_ignores_frame_offset():
    sim = ProbeSimulator(params=ProbeParameters(max_range=50.0))
    probe = sim.launch(np.zeros(3), [1.0, 0.0, 0.0], 1.0)

    sim.step(DT, [], frame_offset=np.array([1000.0, 0.0, 0.0]))

    assert probe.alive


@pytest.mark.parametrize("dt", [float("nan"), float("inf"), -0.1])
def test_invalid_dt_is_a_no_op(sim, dt):
    probe = sim.launch([1.0, 0.0, 0.0], [0.0, 1.0, 0.0], 5.0)

    report = sim.step(dt, [_blocker([1.0, 0.0, 0.0])])

    assert report.collisions == [] and report.removed == []
    assert report.live_count == 1
    assert np.array_equal(probe.position, [1.0, 0.0, 0.0])
    assert len(probe.trail) == 2
    assert probe.age_s == 0.0


def test_clear_disposes_all(sim, resources):
    for _ in range(5):
        sim.launch(np.zeros(3), [1.0, 0.0, 0.0], 1.0)

    sim.clear()

    assert len(sim) == 0
    assert [r.release_calls for r in resources] == [1] * 5
