"""
Simulation Time Manager
=======================

Time multiplier control and simulated-clock bookkeeping.
Converts real frame seconds into simulated days.
"""

import numpy as np
from datetime import datetime, timedelta

from .config import SEC_TO_DAYS, SECONDS_PER_DAY


class TimeController:
    """
    Holds the simulation time multiplier.

    The multiplier is set from outside (a UI control) and read once at
    the start of every frame by the driver; nothing inside the core
    mutates it.
    """

    def __init__(self, multiplier: float = SECONDS_PER_DAY):
        """
        Initialize time controller.

        Args:
            multiplier: Simulated seconds per real second
        """
        self._multiplier = float(multiplier)

    def get(self) -> float:
        """Current time multiplier."""
        return self._multiplier

    def set(self, value: float):
        """Set the time multiplier."""
        self._multiplier = float(value)

    @property
    def multiplier(self) -> float:
        return self._multiplier

    @multiplier.setter
    def multiplier(self, value: float):
        self.set(value)

    def delta_days(self, dt_seconds: float) -> float:
        """
        Convert real elapsed seconds into simulated days.

        Args:
            dt_seconds: Real seconds since the previous frame

        Returns:
            Simulated days; may be non-finite, callers must check
        """
        return dt_seconds * SEC_TO_DAYS * self._multiplier

    def __repr__(self) -> str:
        return f"TimeController(multiplier={self._multiplier:g})"


class SimulationTime:
    """
    Tracks simulation time.

    Provides:
    - Real elapsed seconds and frame count
    - Simulated elapsed days since the epoch
    - Calendar date and Julian date of the simulated clock
    """

    J2000_EPOCH = datetime(2000, 1, 1, 12, 0, 0)
    J2000_JD = 2451545.0

    def __init__(self, epoch: datetime = None):
        """
        Initialize simulation time.

        Args:
            epoch: Calendar date at simulated day zero
        """
        self.epoch = epoch or self.J2000_EPOCH
        self.elapsed_seconds = 0.0
        self.elapsed_days = 0.0
        self.frame_count = 0

    def reset(self):
        """Reset simulation time to the epoch."""
        self.elapsed_seconds = 0.0
        self.elapsed_days = 0.0
        self.frame_count = 0

    def advance(self, dt_seconds: float, delta_days: float) -> float:
        """
        Advance the clocks by one frame.

        Non-finite simulated days leave the simulated clock untouched.

        Returns:
            Current real elapsed time in seconds
        """
        self.elapsed_seconds += dt_seconds
        if np.isfinite(delta_days):
            self.elapsed_days += delta_days
        self.frame_count += 1
        return self.elapsed_seconds

    @property
    def current_date(self) -> datetime:
        """Calendar date of the simulated clock."""
        return self.epoch + timedelta(days=self.elapsed_days)

    @property
    def julian_date(self) -> float:
        """Julian Date of the simulated clock."""
        delta = self.epoch - self.J2000_EPOCH
        return self.J2000_JD + delta.total_seconds() / SECONDS_PER_DAY + self.elapsed_days

    def __repr__(self) -> str:
        return (f"SimulationTime(date={self.current_date}, "
                f"elapsed={self.elapsed_seconds:.3f}s, days={self.elapsed_days:.3f})")
