"""
Environment Module
==================

Solar system catalog and body hierarchy.
"""

from .catalog import SOLAR_SYSTEM, DEEP_SPACE_PROBES, build_bodies, deep_space_markers
from .solar_system import OrbitalSystem

__all__ = [
    'SOLAR_SYSTEM',
    'DEEP_SPACE_PROBES',
    'build_bodies',
    'deep_space_markers',
    'OrbitalSystem',
]
