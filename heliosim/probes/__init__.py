"""
Probes Module
=============

Probe pool, integration, collisions and collision effects.
"""

from .probe import Probe, ProbeState
from .probe_simulator import ProbeSimulator, ProbeStepReport, CollisionEvent
from .effects import EffectManager, Explosion
from .launcher import LaunchSettings
from .pool import EntityPool
from .resources import RenderResource, NullRenderResource

__all__ = [
    'Probe',
    'ProbeState',
    'ProbeSimulator',
    'ProbeStepReport',
    'CollisionEvent',
    'EffectManager',
    'Explosion',
    'LaunchSettings',
    'EntityPool',
    'RenderResource',
    'NullRenderResource',
]
