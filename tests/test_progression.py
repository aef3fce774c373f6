from neonshot import progression
from neonshot.collision import CollisionReport
from neonshot.entities import Phase, WeaponMode

from factories import drop_at, enemy_at, projectile_at


def test_score_accumulates(state):
    assert progression.apply(state, CollisionReport(score=300)) == []
    assert state.progression.score == 300
    assert state.phase is Phase.PLAYING


def test_threshold_starts_transition(state):
    state.progression.score = 1400
    events = progression.apply(state, CollisionReport(score=100))
    assert state.progression.score == 1500
    assert state.phase is Phase.TRANSITIONING
    assert events == ["level_up"]


def test_final_level_threshold_wins(state):
    state.progression.level = 3
    state.progression.score = 7900
    events = progression.apply(state, CollisionReport(score=100))
    assert events == ["win"]
    assert state.phase is Phase.TRANSITIONING


def test_last_life_ends_game(state):
    state.progression.lives = 1
    events = progression.apply(state, CollisionReport(lives_lost=1))
    assert state.progression.lives == 0
    assert state.phase is Phase.GAME_OVER
    assert events == []


def test_game_over_wins_over_level_up(state):
    state.progression.lives = 1
    state.progression.score = 1400
    progression.apply(state, CollisionReport(score=100, lives_lost=1))
    assert state.phase is Phase.GAME_OVER


def test_reports_ignored_outside_play(state):
    state.progression.phase = Phase.GAME_OVER
    progression.apply(state, CollisionReport(score=500, lives_lost=1))
    assert state.progression.score == 0
    assert state.progression.lives == 3


def test_transition_advances_level(state):
    state.progression.score = 1500
    state.progression.phase = Phase.TRANSITIONING
    state.store.enemies.append(enemy_at(10, 10))
    state.store.projectiles.append(projectile_at(20, 20))
    state.store.drops.append(drop_at(30, 30))
    state.store.weapon_mode = WeaponMode.SHOTGUN

    assert progression.complete_transition(state) is Phase.PLAYING
    prog = state.progression
    assert (prog.level, prog.lives, prog.score) == (2, 4, 1500)
    assert len(state.store) == 0
    assert state.store.weapon_mode is WeaponMode.DEFAULT


def test_final_transition_is_terminal(state):
    state.progression.level = 3
    state.progression.phase = Phase.TRANSITIONING

    assert progression.complete_transition(state) is Phase.GAME_OVER
    assert state.progression.won
    # nothing moves it on afterwards
    assert progression.complete_transition(state) is Phase.GAME_OVER
    assert state.progression.level == 3


def test_begin_only_from_waiting(state):
    assert not progression.begin(state)
    state.progression.phase = Phase.WAITING
    assert progression.begin(state)
    assert state.phase is Phase.PLAYING


def test_reset(state):
    prog = state.progression
    prog.score, prog.lives, prog.level, prog.phase, prog.won = 9000, 0, 3, Phase.GAME_OVER, True
    state.store.enemies.append(enemy_at(10, 10))
    state.store.weapon_mode = WeaponMode.PIERCE

    progression.reset(state, require_start_gesture=True)
    assert (prog.score, prog.lives, prog.level, prog.won) == (0, 3, 1, False)
    assert prog.phase is Phase.WAITING
    assert len(state.store) == 0
    assert state.store.weapon_mode is WeaponMode.DEFAULT

    progression.reset(state)
    assert prog.phase is Phase.PLAYING
