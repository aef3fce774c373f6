"""
Enemy spawning: level-scaled type roll, off-screen edge placement
"""

from __future__ import annotations

from typing import Optional

from .config import (
    ENEMY_TYPES,
    BASIC_SPEED_PER_LEVEL,
    FAST_CHANCE,
    TANK_CHANCE,
    SPAWN_BASE_MS,
    SPAWN_STEP_MS,
    SPAWN_FLOOR_MS,
)
from .entities import Enemy, EnemyKind, Phase
from .store import SimulationState
from .utils import aim_vector


def spawn_interval_ms(level: int) -> int:
    """Spawn period for a level; higher levels spawn faster down to the floor"""
    return max(SPAWN_FLOOR_MS, SPAWN_BASE_MS - SPAWN_STEP_MS * level)


def roll_enemy_kind(roll: float, level: int) -> EnemyKind:
    if level >= 2 and roll < FAST_CHANCE:
        return EnemyKind.FAST
    if level >= 3 and roll > 1.0 - TANK_CHANCE:
        return EnemyKind.TANK
    return EnemyKind.BASIC


def make_enemy(kind: EnemyKind, x: float, y: float, level: int, pursuit: bool = True) -> Enemy:
    stats = ENEMY_TYPES[kind.value]
    speed = stats["speed"]
    if kind is EnemyKind.BASIC:
        speed += BASIC_SPEED_PER_LEVEL * level
    return Enemy(
        x=x,
        y=y,
        radius=stats["radius"],
        color=stats["color"],
        hp=stats["hp"],
        max_hp=stats["hp"],
        kind=kind,
        speed=speed,
        pursuit=pursuit,
    )


def try_spawn_enemy(state: SimulationState) -> Optional[Enemy]:
    """
    Add one enemy just outside a random playfield edge.

    Does nothing unless the game is actively playing. The enemy is aimed at the
    playfield centre; with fixed motion that heading is its velocity for life,
    with pursuit it is recomputed every tick.
    """
    if state.phase is not Phase.PLAYING:
        return None

    rng = state.rng
    level = state.progression.level
    kind = roll_enemy_kind(rng.random(), level)
    radius = ENEMY_TYPES[kind.value]["radius"]

    # Spawn on a random edge, fully off-screen
    if rng.random() < 0.5:
        x = -radius if rng.random() < 0.5 else state.width + radius
        y = rng.random() * state.height
    else:
        x = rng.random() * state.width
        y = -radius if rng.random() < 0.5 else state.height + radius

    enemy = make_enemy(kind, x, y, level, pursuit=state.enemy_motion == "pursuit")
    cx, cy = state.center
    nx, ny = aim_vector(x, y, cx, cy)
    enemy.vx = nx * enemy.speed
    enemy.vy = ny * enemy.speed

    state.store.enemies.append(enemy)
    return enemy
