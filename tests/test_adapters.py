import pytest

from neonshot.__main__ import run_demo
from neonshot.adapters import AutoAim, FrameTrail, PointerAim, build_frame, facing_for, nearest_enemy, shows_win
from neonshot.entities import EnemyKind, Phase, WeaponMode

from factories import drop_at, enemy_at, projectile_at


def test_frame_draw_order(state):
    state.store.enemies.append(enemy_at(100, 100, kind=EnemyKind.FAST))
    state.store.projectiles.append(projectile_at(200, 200))
    state.store.drops.append(drop_at(300, 300, kind=WeaponMode.PIERCE))

    frame = build_frame(state)
    assert [item.shape for item in frame.items] == ["square", "circle", "triangle"]
    assert frame.items[0].color == state.store.drops[0].color
    assert frame.score == 0 and frame.lives == 3 and frame.level == 1
    assert frame.phase is Phase.PLAYING


def test_tank_hp_bar_fraction(state):
    tank = enemy_at(100, 100, kind=EnemyKind.TANK, level=3)
    tank.hp = 1
    state.store.enemies.append(tank)
    (item,) = build_frame(state).items
    assert item.hp_fraction == pytest.approx(0.25)


def test_spinning_shapes_rotate_with_time(state):
    state.store.enemies.append(enemy_at(100, 100, kind=EnemyKind.FAST))
    state.store.enemies.append(enemy_at(300, 100))
    a = build_frame(state, now=0.0).items
    b = build_frame(state, now=1.0).items
    assert a[0].rotation != b[0].rotation
    assert a[1].rotation == b[1].rotation == 0.0


def test_pointer_aim(state):
    aim = PointerAim()
    assert aim.aim(state) == (0.0, -1.0)
    aim.move(500, 300)
    assert aim.aim(state) == pytest.approx((1.0, 0.0))
    # pointer on the player falls back to straight up
    aim.move(400, 300)
    assert aim.aim(state) == (0.0, -1.0)


def test_auto_aim_picks_nearest(state):
    assert AutoAim().aim(state) == (0.0, -1.0)
    far = enemy_at(400, 0)
    near = enemy_at(300, 300)
    state.store.enemies.extend([far, near])
    assert nearest_enemy(state) is near
    assert AutoAim().aim(state) == pytest.approx((-1.0, 0.0))


def test_facing_for():
    assert facing_for((1.0, 0.0)) == pytest.approx(0.0)
    assert facing_for((0.0, -1.0)) == pytest.approx(-1.5707963, rel=1e-6)


def test_headless_demo(capsys):
    prog = run_demo(seconds=5.0, seed=7, verbose=0)
    out = capsys.readouterr().out
    assert "Demo finished" in out
    assert prog.level >= 1
    assert prog.score >= 0


def test_facing_for_zero_aim_points_up():
    assert facing_for((0.0, 0.0)) == pytest.approx(-1.5707963, rel=1e-6)
    assert facing_for(None) == pytest.approx(-1.5707963, rel=1e-6)


def test_trail_fades_older_frames(state):
    p = projectile_at(100, 100, vy=-7)
    state.store.projectiles.append(p)
    trail = FrameTrail(length=4, max_alpha=96)
    for _ in range(6):
        trail.push(build_frame(state))
        p.y -= 7

    assert len(trail.frames) == 4
    ghosts = list(trail.ghosts())
    # the newest frame is drawn live, not as a ghost
    assert [alpha for _, alpha in ghosts] == [24, 48, 72]
    assert [item.y for item, _ in ghosts] == [86, 79, 72]

    trail.clear()
    assert list(trail.ghosts()) == []


def test_win_overlay_only_for_final_level(state):
    state.progression.phase = Phase.TRANSITIONING
    state.progression.score = 1500
    assert not shows_win(build_frame(state))

    state.progression.level = 3
    state.progression.score = 8000
    assert shows_win(build_frame(state))

    # a lost game never shows the win overlay, whatever the score
    state.progression.phase = Phase.GAME_OVER
    state.progression.won = False
    assert not shows_win(build_frame(state))
    state.progression.won = True
    assert shows_win(build_frame(state))
