import pytest

from neonshot.motion import move_entities, move_player
from neonshot.store import new_state

from factories import drop_at, enemy_at, projectile_at


def test_projectile_moves_by_velocity(state):
    state.store.projectiles.append(projectile_at(100, 100, vx=3, vy=-2))
    move_entities(state)
    p = state.store.projectiles[0]
    assert (p.x, p.y) == (103, 98)


def test_projectile_leaving_bounds_removed_same_tick(state):
    state.store.projectiles.append(projectile_at(798, 300, vx=7))
    state.store.projectiles.append(projectile_at(300, 3, vy=-7))
    move_entities(state)
    assert state.store.projectiles == []


def test_projectile_on_the_edge_is_kept(state):
    state.store.projectiles.append(projectile_at(793, 300, vx=7))
    move_entities(state)
    assert state.store.projectiles[0].x == 800


def test_pursuit_enemy_heads_for_player(state):
    e = enemy_at(0, 300)  # basic at level 1: speed 1.4
    state.store.enemies.append(e)
    move_entities(state)
    assert (e.x, e.y) == pytest.approx((1.4, 300))

    # player moves, heading follows
    state.player.x, state.player.y = 1.4, 600
    move_entities(state)
    assert (e.x, e.y) == pytest.approx((1.4, 301.4))


def test_fixed_enemy_keeps_its_velocity(state):
    e = enemy_at(100, 100, pursuit=False)
    e.vx, e.vy = 1.0, 0.0
    state.store.enemies.append(e)
    move_entities(state)
    move_entities(state)
    assert (e.x, e.y) == (102, 100)


def test_fixed_enemy_culled_far_outside(state):
    e = enemy_at(829, 300, pursuit=False)  # radius 15: cull past 830
    e.vx = 2.0
    state.store.enemies.append(e)
    move_entities(state)
    assert state.store.enemies == []


def test_pursuit_enemy_never_culled():
    state = new_state(800, 600)
    e = enemy_at(-100, -100)
    state.store.enemies.append(e)
    move_entities(state)
    assert state.store.enemies == [e]


def test_drop_drifts_one_unit(state):
    d = drop_at(400, 200)
    state.store.drops.append(d)
    move_entities(state)
    assert (d.x, d.y) == pytest.approx((400, 201))


def test_drop_on_player_stays_put(state):
    d = drop_at(400, 300)
    state.store.drops.append(d)
    move_entities(state)
    assert (d.x, d.y) == (400, 300)


def test_move_player_clamped(state):
    move_player(state, -50, 900)
    assert state.player.pos == (15, 585)
