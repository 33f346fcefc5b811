"""
Launch Controls
===============

Maps the probe panel's mass and speed sliders to launch parameters.
"""

from dataclasses import dataclass

from ..core.config import C_KMPS

MIN_PROBE_MASS_KG = 10.0
MAX_EXTRA_MASS_KG = 1e6


def _clamp_fraction(value: float) -> float:
    return min(max(float(value), 0.0), 1.0)


@dataclass
class LaunchSettings:
    """Slider positions in [0, 1]."""
    mass_fraction: float = 0.1
    speed_fraction: float = 0.1

    def __post_init__(self):
        self.mass_fraction = _clamp_fraction(self.mass_fraction)
        self.speed_fraction = _clamp_fraction(self.speed_fraction)

    @property
    def mass_kg(self) -> float:
        """Cubic mapping so the low end of the slider stays fine-grained."""
        return MIN_PROBE_MASS_KG + self.mass_fraction**3 * MAX_EXTRA_MASS_KG

    @property
    def speed_km_s(self) -> float:
        """Linear fraction of the speed of light."""
        return self.speed_fraction * C_KMPS

    @property
    def speed_percent_c(self) -> float:
        return self.speed_fraction * 100.0
