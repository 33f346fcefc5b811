"""
heliosim Orbital and Probe Physics Engine
=========================================

Physics core for an interactive solar-system fly-through.

Components:
- Keplerian orbit placement for the Sun, planets, moons and small bodies
- Point-mass gravity acting on launched probes
- Semi-implicit Euler probe integration with collision and range culling
- Bounded probe and explosion pools with explicit resource disposal
- Time multiplier control for simulated days per real second
"""

__version__ = "1.0.0"

from heliosim.core.simulator import Simulator, FrameState
from heliosim.core.config import SimulationConfig
from heliosim.core.time_manager import TimeController, SimulationTime

__all__ = [
    'Simulator',
    'FrameState',
    'SimulationConfig',
    'TimeController',
    'SimulationTime',
]
