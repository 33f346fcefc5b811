"""
Dynamics Module
===============

Orbit placement, gravity and probe integration.
"""

from .orbital import OrbitalElementsSolver, solve_kepler, solve_position, orbit_path
from .gravity import GravityField, compute_acceleration
from .integrators import SemiImplicitEuler

__all__ = [
    'OrbitalElementsSolver',
    'solve_kepler',
    'solve_position',
    'orbit_path',
    'GravityField',
    'compute_acceleration',
    'SemiImplicitEuler',
]
