import math
from datetime import datetime

import pytest

from heliosim.core.time_manager import SimulationTime, TimeController


def test_default_multiplier_is_one_day_per_second():
    tc = TimeController()

    assert tc.get() == 86400
    assert tc.delta_days(1.0) == pytest.approx(1.0)
    assert tc.delta_days(1.0 / 60.0) == pytest.approx(1.0 / 60.0)


def test_set_multiplier_is_read_back():
    tc = TimeController()
    tc.set(3600)
    assert tc.get() == 3600
    assert tc.delta_days(24.0) == pytest.approx(1.0)

    tc.multiplier = 0.0
    assert tc.delta_days(10.0) == 0.0


def test_non_finite_multiplier_gives_non_finite_days():
    tc = TimeController(float("inf"))

    assert not math.isfinite(tc.delta_days(0.1))


def test_simulation_time_advance():
    st = SimulationTime()
    st.advance(0.5, 2.0)
    st.advance(0.5, 1.0)

    assert st.elapsed_seconds == 1.0
    assert st.elapsed_days == 3.0
    assert st.frame_count == 2
    assert st.current_date == datetime(2000, 1, 4, 12, 0, 0)


def test_simulation_time_ignores_non_finite_days():
    st = SimulationTime()
    st.advance(0.1, 1.5)
    st.advance(0.1, float("nan"))

    assert st.elapsed_days == 1.5
    assert st.frame_count == 2


def test_julian_date_and_reset():
    st = SimulationTime()
    assert st.julian_date == 2451545.0

    st.advance(1.0, 10.0)
    assert st.julian_date == 2451555.0

    st.reset()
    assert st.elapsed_days == 0.0
    assert st.elapsed_seconds == 0.0
    assert st.frame_count == 0
