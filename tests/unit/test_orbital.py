import numpy as np
import pytest

from heliosim.core.bodies import OrbitalElements
from heliosim.dynamics.orbital import (
    OrbitalElementsSolver,
    clamp_eccentricity,
    normalize_angle,
    orbit_path,
    solve_kepler,
    solve_position,
    true_anomaly,
)


@pytest.mark.parametrize("e", [0.0, 0.1, 0.5, 0.79, 0.8, 0.95, 0.99, 0.9999, 0.999999])
def test_solve_kepler_satisfies_keplers_equation(e):
    edges = [0.0, 1e-12, 1e-6, 2 * np.pi - 1e-6, 2 * np.pi - 1e-12, 2 * np.pi]
    for M in np.concatenate([np.linspace(-3 * np.pi, 3 * np.pi, 37), edges]):
        E = solve_kepler(M, e)
        assert np.isfinite(E)
        assert abs(E - e * np.sin(E) - normalize_angle(M)) < 1e-6


def test_solve_kepler_circular_orbit_is_identity():
    for M in np.linspace(0.0, 2 * np.pi, 13, endpoint=False):
        assert solve_kepler(M, 0.0) == pytest.approx(M, abs=1e-12)


@pytest.mark.parametrize("e", [1.0, 1.5, 2.0])
def test_solve_kepler_clamps_unbound_eccentricity(e):
    E = solve_kepler(1.0, e)
    assert np.isfinite(E)
    assert E == solve_kepler(1.0, 0.999999)


def test_clamp_eccentricity_handles_missing_and_negative():
    assert clamp_eccentricity(None) == 0.0
    assert clamp_eccentricity(float("nan")) == 0.0
    assert clamp_eccentricity(-0.3) == 0.0
    assert clamp_eccentricity(0.4) == 0.4


def test_normalize_angle_range():
    for angle in [-1e-20, -np.pi, 0.0, 7 * np.pi, 1e6]:
        wrapped = normalize_angle(angle)
        assert 0.0 <= wrapped < 2 * np.pi


def test_true_anomaly_keeps_quadrant():
    # Past apoapsis the true anomaly continues into the lower half-plane
    nu = true_anomaly(1.5 * np.pi, 0.3)
    assert np.sin(nu) < 0


def test_circular_orbit_quarter_period():
    elements = OrbitalElements(semi_major_axis_km=1.0, eccentricity=0.0, period_days=1.0)

    position = solve_position(elements, 0.25)

    assert np.allclose(position, [0.0, 1.0, 0.0], atol=1e-12)


def test_eccentric_orbit_starts_at_periapsis():
    elements = OrbitalElements(semi_major_axis_km=2.0, eccentricity=0.5, period_days=10.0)

    position = solve_position(elements, 0.0)

    assert np.allclose(position, [1.0, 0.0, 0.0], atol=1e-12)


def test_polar_orbit_rotates_into_z():
    elements = OrbitalElements(semi_major_axis_km=1.0, eccentricity=0.0, period_days=4.0,
                               inclination_deg=90.0)

    position = solve_position(elements, 1.0)

    assert np.allclose(position, [0.0, 0.0, 1.0], atol=1e-12)


def test_position_is_periodic():
    elements = OrbitalElements(semi_major_axis_km=149.6e6, eccentricity=0.017, period_days=365.2,
                               inclination_deg=1.0, lon_ascending_node_deg=-11.2,
                               arg_periapsis_deg=114.2, mean_anomaly_epoch_deg=358.6)

    start = solve_position(elements, 12.0)
    later = solve_position(elements, 12.0 + 3 * 365.2)

    assert np.allclose(start, later, rtol=1e-9, atol=1e-3)


@pytest.mark.parametrize("elements", [
    OrbitalElements(),
    OrbitalElements(semi_major_axis_km=1.0),
    OrbitalElements(period_days=1.0),
    OrbitalElements(semi_major_axis_km=1.0, period_days=0.0),
    OrbitalElements(semi_major_axis_km=1.0, period_days=-3.5),
    OrbitalElements(semi_major_axis_km=float("nan"), period_days=1.0),
    OrbitalElements(semi_major_axis_km=1.0, period_days=float("inf")),
])
def test_degenerate_elements_sit_at_origin(elements):
    assert elements.is_degenerate
    assert np.array_equal(solve_position(elements, 42.0), np.zeros(3))


def test_non_finite_elapsed_days_returns_origin():
    elements = OrbitalElements(semi_major_axis_km=1.0, eccentricity=0.1, period_days=1.0)

    assert np.array_equal(solve_position(elements, float("inf")), np.zeros(3))


def test_orbit_path_stays_between_periapsis_and_apoapsis():
    a, e = 10.0, 0.3
    elements = OrbitalElements(semi_major_axis_km=a, eccentricity=e, period_days=5.0,
                               inclination_deg=20.0)

    path = orbit_path(elements, 181)

    assert path.shape == (181, 3)
    radii = np.linalg.norm(path, axis=1)
    assert radii.min() >= a * (1 - e) - 1e-9
    assert radii.max() <= a * (1 + e) + 1e-9
    assert np.allclose(path[0], path[-1], atol=1e-9)


def test_orbit_path_is_empty_for_degenerate_orbit():
    assert orbit_path(OrbitalElements(), 50).shape == (0, 3)


def test_solver_class_matches_functions():
    solver = OrbitalElementsSolver()
    elements = OrbitalElements(semi_major_axis_km=5.0, eccentricity=0.2, period_days=3.0)

    assert np.array_equal(solver.solve_position(elements, 1.3), solve_position(elements, 1.3))
    assert solver.orbital_radius(elements, 0.0) == pytest.approx(4.0)
