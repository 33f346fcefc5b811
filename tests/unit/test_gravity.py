import numpy as np
import pytest

from heliosim.core.bodies import BodySample
from heliosim.core.config import G, KM_PER_WORLD_UNIT
from heliosim.dynamics.gravity import GravityField, compute_acceleration


def test_single_body_magnitude_and_direction():
    mass = 5.97237e24
    body = BodySample(name="Earth", position=np.array([0.0, 3.0, 0.0]), mass_kg=mass)

    acc = compute_acceleration(np.zeros(3), [body])

    distance_km = 3.0 * KM_PER_WORLD_UNIT
    expected = G * mass / distance_km**2 / KM_PER_WORLD_UNIT
    assert acc[1] == pytest.approx(expected, rel=1e-12)
    assert acc[0] == 0.0 and acc[2] == 0.0


def test_unit_field_inverse_square():
    field = GravityField(gravitational_constant=1.0, km_per_world_unit=1.0)
    near = BodySample(name="A", position=np.array([1.0, 0.0, 0.0]), mass_kg=1.0)
    far = BodySample(name="A", position=np.array([2.0, 0.0, 0.0]), mass_kg=1.0)

    a_near = field.compute_acceleration(np.zeros(3), [near])
    a_far = field.compute_acceleration(np.zeros(3), [far])

    assert np.allclose(a_near, [1.0, 0.0, 0.0])
    assert np.allclose(a_far, [0.25, 0.0, 0.0])


def test_symmetric_bodies_cancel():
    field = GravityField(gravitational_constant=1.0, km_per_world_unit=1.0)
    bodies = [
        BodySample(name="L", position=np.array([-2.0, 0.0, 0.0]), mass_kg=3.0),
        BodySample(name="R", position=np.array([2.0, 0.0, 0.0]), mass_kg=3.0),
    ]

    assert np.allclose(field.compute_acceleration(np.zeros(3), bodies), 0.0)


def test_bodies_without_mass_or_position_are_skipped():
    field = GravityField(gravitational_constant=1.0, km_per_world_unit=1.0)
    bodies = [
        BodySample(name="no mass", position=np.array([1.0, 0.0, 0.0]), mass_kg=None),
        BodySample(name="nan mass", position=np.array([1.0, 0.0, 0.0]), mass_kg=float("nan")),
        BodySample(name="unplaced", position=None, mass_kg=10.0),
    ]

    assert np.array_equal(field.compute_acceleration(np.zeros(3), bodies), np.zeros(3))


def test_coincident_body_is_skipped():
    field = GravityField(gravitational_constant=1.0, km_per_world_unit=1.0)
    bodies = [
        BodySample(name="here", position=np.zeros(3), mass_kg=1e30),
        BodySample(name="almost here", position=np.array([1e-7, 0.0, 0.0]), mass_kg=1e30),
    ]

    acc = field.compute_acceleration(np.zeros(3), bodies)

    assert np.array_equal(acc, np.zeros(3))
