"""
Collision Effects
=================

Short-lived explosion markers spawned where probes hit bodies.
"""

import itertools
import logging
import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .pool import EntityPool
from .resources import RenderResource, NullRenderResource, ResourceFactory, null_resource_factory
from ..core.config import EffectParameters

logger = logging.getLogger(__name__)


@dataclass
class Explosion:
    """Expanding, fading marker at a collision point."""
    explosion_id: int
    position: np.ndarray
    life: float = 1.0
    scale: float = 1.0
    fade: float = 1.0
    elapsed_s: float = 0.0
    alive: bool = True
    resource: RenderResource = field(default_factory=NullRenderResource)

    @property
    def entity_id(self) -> int:
        return self.explosion_id

    def dispose(self):
        self.resource.dispose()
        self.alive = False


class EffectManager:
    """
    Owns the live explosion markers.

    Each step shrinks the remaining life by dt, grows the marker and
    sets the fade to the remaining life. Markers whose life is used up
    are disposed and removed in the same step.
    """

    def __init__(self,
                 params: EffectParameters = None,
                 resource_factory: ResourceFactory = None):
        """
        Initialize effect manager.

        Args:
            params: Life and growth settings
            resource_factory: Builds the render handle for a new explosion
        """
        self.params = params or EffectParameters()
        self.resource_factory = resource_factory or null_resource_factory
        self._pool: EntityPool[Explosion] = EntityPool(self.params.max_explosions, name="explosions")
        self._ids = itertools.count(1)
        self.spawn_count = 0

    def spawn(self, position: np.ndarray) -> Explosion:
        """
        Create an explosion at a position.

        Args:
            position: World position of the collision

        Returns:
            The new explosion
        """
        explosion = Explosion(
            explosion_id=next(self._ids),
            position=np.array(position, dtype=float),
            life=self.params.initial_life,
            fade=self.params.initial_life,
        )
        explosion.resource = self.resource_factory(explosion)
        explosion.resource.update_position(explosion.position)

        self._pool.add(explosion)
        self.spawn_count += 1
        return explosion

    def step(self, dt: float) -> List[int]:
        """
        Age every live explosion by dt.

        Args:
            dt: Real seconds since the previous frame

        Returns:
            Ids of explosions removed this step
        """
        if not np.isfinite(dt) or dt < 0:
            logger.warning("Skipping effect step with invalid dt=%r", dt)
            return []

        removed = []
        for explosion in self._pool:
            explosion.life -= dt
            explosion.elapsed_s += dt
            explosion.scale *= 1 + dt * self.params.growth_rate
            # Spent once life reaches zero within rounding
            spent = explosion.life <= self.params.life_epsilon
            explosion.fade = 0.0 if spent else max(explosion.life, 0.0)
            explosion.resource.update_effect(explosion.scale, explosion.fade)

            if spent:
                self._pool.remove(explosion.explosion_id)
                removed.append(explosion.explosion_id)

        return removed

    def get(self, explosion_id: int) -> Optional[Explosion]:
        return self._pool.get(explosion_id)

    @property
    def explosions(self) -> Tuple[Explosion, ...]:
        """Live explosions, oldest first."""
        return tuple(self._pool)

    def clear(self):
        """Dispose every live explosion."""
        self._pool.clear()

    def __len__(self) -> int:
        return len(self._pool)
