"""
Probe State
===========

A launched probe and its lifecycle states.
"""

import numpy as np
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, List

from .resources import RenderResource, NullRenderResource
from ..core.config import TRAIL_LENGTH


class ProbeState(Enum):
    """Probe lifecycle. No state leads back to ALIVE."""
    ALIVE = 0
    DEAD_INSTABILITY = 1
    DEAD_COLLISION = 2
    DEAD_OUT_OF_RANGE = 3
    REMOVED = 4

    @property
    def is_dead(self) -> bool:
        return self not in (ProbeState.ALIVE, ProbeState.REMOVED)


@dataclass
class Probe:
    """
    A probe in flight.

    position and velocity are in world units (per second) in the frame
    the probe was launched in. mass_kg is carried for display only;
    gravity acting on the probe does not depend on it.
    """
    probe_id: int
    position: np.ndarray
    velocity: np.ndarray
    mass_kg: float = 0.0
    trail: Deque[np.ndarray] = field(default_factory=lambda: deque(maxlen=TRAIL_LENGTH))
    state: ProbeState = ProbeState.ALIVE
    resource: RenderResource = field(default_factory=NullRenderResource)
    age_s: float = 0.0

    @property
    def entity_id(self) -> int:
        return self.probe_id

    @property
    def alive(self) -> bool:
        return self.state == ProbeState.ALIVE

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    @property
    def trail_points(self) -> List[np.ndarray]:
        return list(self.trail)

    def kill(self, reason: ProbeState):
        """Mark the probe dead; the first reason sticks."""
        if self.state == ProbeState.ALIVE:
            self.state = reason

    def dispose(self):
        """Release render resources and mark the probe removed."""
        if self.state == ProbeState.REMOVED:
            return
        self.resource.dispose()
        self.state = ProbeState.REMOVED

    def __repr__(self) -> str:
        return (f"Probe(id={self.probe_id}, state={self.state.name}, "
                f"pos={np.round(self.position, 3)}, speed={self.speed:.3f})")
