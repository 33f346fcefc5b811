import numpy as np
import pytest

from heliosim.core.config import EffectParameters
from heliosim.probes.effects import EffectManager
from heliosim.probes.resources import RenderResource


class EffectResource(RenderResource):
    def __init__(self):
        super().__init__()
        self.effects = []
        self.releases = 0

    def update_effect(self, scale, fade):
        self.effects.append((scale, fade))

    def _release(self):
        self.releases += 1


def test_explosion_dies_on_fourth_quarter_second():
    resource = EffectResource()
    manager = EffectManager(resource_factory=lambda entity: resource)
    explosion = manager.spawn([1.0, 2.0, 3.0])

    for _ in range(3):
        assert manager.step(0.25) == []
        assert explosion.alive

    assert manager.step(0.25) == [explosion.explosion_id]
    assert not explosion.alive
    assert len(manager) == 0
    assert resource.releases == 1


@pytest.mark.parametrize("dt", [0.25, 0.1, 0.2, 1.0 / 3.0, 1.0 / 30.0, 1.0 / 60.0, 1.0 / 90.0, 1.0 / 144.0])
def test_explosion_dies_exactly_at_end_of_life(dt):
    resource = EffectResource()
    manager = EffectManager(resource_factory=lambda entity: resource)
    explosion = manager.spawn(np.zeros(3))
    expected_steps = round(1.0 / dt)

    for _ in range(expected_steps - 1):
        manager.step(dt)
        assert explosion.alive

    assert manager.step(dt) == [explosion.explosion_id]
    assert not explosion.alive
    assert explosion.elapsed_s == pytest.approx(1.0)
    assert resource.effects[-1][1] == 0.0
    assert resource.releases == 1


def test_growth_and_fade():
    manager = EffectManager()
    explosion = manager.spawn(np.zeros(3))

    manager.step(0.25)

    assert explosion.life == pytest.approx(0.75)
    assert explosion.fade == pytest.approx(0.75)
    assert explosion.scale == pytest.approx(1.5)

    manager.step(0.25)
    assert explosion.scale == pytest.approx(1.5 * 1.5)


def test_fade_never_negative():
    resource = EffectResource()
    manager = EffectManager(resource_factory=lambda entity: resource)
    manager.spawn(np.zeros(3))

    manager.step(1.7)

    assert resource.effects[-1][1] == 0.0


@pytest.mark.parametrize("dt", [float("nan"), -1.0])
def test_invalid_dt_leaves_explosions_untouched(dt):
    manager = EffectManager()
    explosion = manager.spawn(np.zeros(3))

    assert manager.step(dt) == []
    assert explosion.life == 1.0
    assert explosion.scale == 1.0


def test_explosion_cap_evicts_oldest():
    manager = EffectManager(EffectParameters(max_explosions=2))
    first = manager.spawn(np.zeros(3))
    manager.spawn(np.zeros(3))
    manager.spawn(np.zeros(3))

    assert len(manager) == 2
    assert not first.alive
    assert manager.get(first.explosion_id) is None
    assert manager.spawn_count == 3
