"""
Simulation Scenarios
====================

Pre-configured probe scenarios for exercising the heliosim engine.
"""

from .free_flight import FreeFlightScenario, FreeFlightScenarioConfig
from .impact import ImpactScenario, ImpactScenarioConfig

__all__ = [
    'FreeFlightScenario',
    'FreeFlightScenarioConfig',
    'ImpactScenario',
    'ImpactScenarioConfig',
]
