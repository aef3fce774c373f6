import math

import pytest

from neonshot.entities import WeaponMode
from neonshot.weapons import fire, fire_cooldown_ms


def test_default_weapon(state):
    event = fire(state, (400, 300), (1.0, 0.0))

    assert event == "shoot_default"
    assert len(state.store.projectiles) == 1
    p = state.store.projectiles[0]
    assert (p.x, p.y) == (400, 300)
    assert p.vx == pytest.approx(7.0)
    assert p.vy == pytest.approx(0.0)
    assert p.radius == 5
    assert p.pierce == 1


def test_shotgun_spreads_three(state):
    state.store.weapon_mode = WeaponMode.SHOTGUN
    event = fire(state, (400, 300), (0.0, -1.0))

    assert event == "shoot_shotgun"
    shots = state.store.projectiles
    assert len(shots) == 3
    headings = sorted(math.atan2(p.vy, p.vx) for p in shots)
    base = -math.pi / 2
    assert headings == pytest.approx([base - 0.2, base, base + 0.2])
    for p in shots:
        assert math.hypot(p.vx, p.vy) == pytest.approx(8.0)
        assert p.radius == 4
        assert p.pierce == 1


def test_pierce_weapon(state):
    state.store.weapon_mode = WeaponMode.PIERCE
    event = fire(state, (400, 300), (0.0, 1.0))

    assert event == "shoot_pierce"
    (p,) = state.store.projectiles
    assert p.vy == pytest.approx(12.0)
    assert p.radius == 8
    assert p.pierce == 3


def test_fire_turns_the_player(state):
    fire(state, state.player.pos, (-1.0, 0.0))
    assert state.player.facing == pytest.approx(math.pi)


@pytest.mark.parametrize("mode, ms", [
    (WeaponMode.DEFAULT, 200),
    (WeaponMode.SHOTGUN, 400),
    (WeaponMode.PIERCE, 600),
])
def test_cooldowns(mode, ms):
    assert fire_cooldown_ms(mode) == ms


def test_zero_aim_fires_up(state):
    fire(state, (400, 300), (0.0, 0.0))
    p = state.store.projectiles[0]
    assert p.vx == pytest.approx(0.0)
    assert p.vy == pytest.approx(-7.0)
    assert state.player.facing == pytest.approx(-math.pi / 2)
