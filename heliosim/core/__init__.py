"""
Simulation Core Module
======================

Configuration, body state, time control and the frame driver.
"""

from .config import SimulationConfig
from .bodies import OrbitalElements, CelestialBody, BodySample
from .time_manager import TimeController, SimulationTime
from .simulator import Simulator, FrameState

__all__ = [
    'SimulationConfig',
    'OrbitalElements',
    'CelestialBody',
    'BodySample',
    'TimeController',
    'SimulationTime',
    'Simulator',
    'FrameState',
]
