"""
Simulation Configuration
========================

Physical constants, unit conversions and tuning parameters for the
heliosim probe and orbit engine.
"""

import numpy as np
from dataclasses import dataclass, field
from datetime import datetime


# Gravitational constant in km³/(kg·s²) so physics runs in kilometres
G = 6.67430e-20
AU_IN_KM = 149_597_870.7

# One world unit is one million kilometres
KM_PER_WORLD_UNIT = 1e6
KM_TO_WORLD_UNITS = 1 / KM_PER_WORLD_UNIT

# Body radii are enlarged by this factor so they stay visible at world scale
SIZE_MULTIPLIER = 1_000
SUN_SIZE_MULTIPLIER = 150

# Speed of light [km/s]
C_KMPS = 299_792.458

SECONDS_PER_DAY = 86400.0
SEC_TO_DAYS = 1 / SECONDS_PER_DAY

# Probe pool and integration limits
MAX_PROBES = 50
TRAIL_LENGTH = 100
MAX_RANGE = 20000.0
MIN_GRAVITY_DISTANCE = 1e-6
COLLISION_RADIUS_FACTOR = 1.1

# Kepler solver
KEPLER_TOLERANCE = 1e-8
KEPLER_MAX_ITERATIONS = 100
KEPLER_MIN_DERIVATIVE = 1e-12
MAX_ECCENTRICITY = 0.999999


@dataclass
class UnitParameters:
    """Length scale and gravity constants shared by all components."""
    gravitational_constant: float = G  # km³/(kg·s²)
    km_per_world_unit: float = KM_PER_WORLD_UNIT
    size_multiplier: float = SIZE_MULTIPLIER

    @property
    def km_to_world(self) -> float:
        """Multiply kilometres by this to get world units."""
        return 1.0 / self.km_per_world_unit

    def km_s_to_world(self, speed_km_s: float) -> float:
        """Convert a speed in km/s to world units per second."""
        return speed_km_s * self.km_to_world


@dataclass
class KeplerParameters:
    """Newton-Raphson settings for Kepler's equation."""
    tolerance: float = KEPLER_TOLERANCE  # rad
    max_iterations: int = KEPLER_MAX_ITERATIONS
    min_derivative: float = KEPLER_MIN_DERIVATIVE


@dataclass
class ProbeParameters:
    """Probe pool limits and collision tuning."""
    max_probes: int = MAX_PROBES
    trail_length: int = TRAIL_LENGTH  # points
    max_range: float = MAX_RANGE  # world units from local origin
    collision_radius_factor: float = COLLISION_RADIUS_FACTOR
    min_gravity_distance: float = MIN_GRAVITY_DISTANCE  # world units


@dataclass
class EffectParameters:
    """Collision afterglow settings."""
    initial_life: float = 1.0  # seconds
    growth_rate: float = 2.0  # scale *= 1 + dt * growth_rate
    life_epsilon: float = 1e-9  # remaining life at or below this is spent
    max_explosions: int = 64


@dataclass
class TimeParameters:
    """Simulation clock settings."""
    epoch: datetime = field(default_factory=lambda: datetime(2000, 1, 1, 12, 0, 0))
    time_multiplier: float = SECONDS_PER_DAY  # one simulated day per real second
    frame_step_seconds: float = 1.0 / 60.0


@dataclass
class SimulationConfig:
    """Complete simulation configuration."""
    name: str = "heliosim"

    units: UnitParameters = field(default_factory=UnitParameters)
    kepler: KeplerParameters = field(default_factory=KeplerParameters)
    probes: ProbeParameters = field(default_factory=ProbeParameters)
    effects: EffectParameters = field(default_factory=EffectParameters)
    time: TimeParameters = field(default_factory=TimeParameters)

    # Output options
    duration_seconds: float = 60.0
    output_rate_hz: float = 10.0  # History sampling rate
    verbose: bool = False

    def __post_init__(self):
        """Validate configuration."""
        assert self.units.km_per_world_unit > 0, "World unit scale must be positive"
        assert np.isfinite(self.units.gravitational_constant), "G must be finite"
        assert self.kepler.tolerance > 0, "Kepler tolerance must be positive"
        assert self.kepler.max_iterations >= 1, "Kepler needs at least one iteration"
        assert self.probes.max_probes >= 1, "Probe pool needs at least one slot"
        assert self.probes.trail_length >= 2, "Trail needs at least two points"
        assert self.probes.max_range > 0, "Range threshold must be positive"
        assert self.effects.initial_life > 0, "Explosion life must be positive"
        assert 0 <= self.effects.life_epsilon < self.effects.initial_life, "Life tolerance out of range"
        assert self.time.frame_step_seconds > 0, "Frame step must be positive"
        assert self.output_rate_hz > 0, "Output rate must be positive"


# Pre-defined configurations
def create_default_config() -> SimulationConfig:
    """Create configuration matching the interactive fly-through."""
    return SimulationConfig()


def create_realtime_config() -> SimulationConfig:
    """Create configuration where one simulated second passes per real second."""
    return SimulationConfig(
        time=TimeParameters(time_multiplier=1.0),
    )
