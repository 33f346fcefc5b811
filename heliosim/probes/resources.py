"""
Render Resources
================

Handles for whatever a renderer allocates per probe or explosion.

The physics core never draws anything. It owns one handle per entity,
pushes state into it, and disposes it exactly once when the entity is
removed.
"""

import numpy as np
from typing import Callable, Sequence


class RenderResource:
    """
    Base handle for per-entity rendering resources.

    Subclasses override the update hooks and _release(); dispose() is
    safe to call more than once and releases only the first time.
    """

    def __init__(self):
        self.disposed = False

    def update_position(self, position: np.ndarray):
        """Entity moved."""

    def update_trail(self, points: Sequence[np.ndarray]):
        """Trail changed; called only with at least two points."""

    def update_effect(self, scale: float, fade: float):
        """Explosion grew or faded."""

    def dispose(self):
        """Release the underlying resources."""
        if self.disposed:
            return
        self.disposed = True
        self._release()

    def _release(self):
        pass


class NullRenderResource(RenderResource):
    """Resource handle for headless runs."""


ResourceFactory = Callable[[object], RenderResource]


def null_resource_factory(entity) -> RenderResource:
    return NullRenderResource()
