"""
Per-tick movement of projectiles, enemies and drops
"""

from __future__ import annotations

from .config import DROP_SPEED, ENEMY_CULL_RADII
from .store import SimulationState
from .utils import clamp, normalize


def _out_of_bounds(x: float, y: float, width: float, height: float, margin: float = 0.0) -> bool:
    return x < -margin or x > width + margin or y < -margin or y > height + margin


def move_projectiles(state: SimulationState):
    """Ballistic motion; anything leaving the playfield is removed this tick"""
    kept = []
    for p in state.store.projectiles:
        p.x += p.vx
        p.y += p.vy
        if not _out_of_bounds(p.x, p.y, state.width, state.height):
            kept.append(p)
    state.store.projectiles[:] = kept


def move_enemies(state: SimulationState):
    px, py = state.player.pos
    kept = []
    for e in state.store.enemies:
        if e.pursuit:
            nx, ny = normalize(px - e.x, py - e.y)
            e.vx = nx * e.speed
            e.vy = ny * e.speed
        e.x += e.vx
        e.y += e.vy

        # Fixed-velocity enemies that missed the player never come back
        margin = e.radius * ENEMY_CULL_RADII
        if not e.pursuit and _out_of_bounds(e.x, e.y, state.width, state.height, margin):
            continue
        kept.append(e)
    state.store.enemies[:] = kept


def move_drops(state: SimulationState):
    px, py = state.player.pos
    for d in state.store.drops:
        nx, ny = normalize(px - d.x, py - d.y)
        d.x += nx * DROP_SPEED
        d.y += ny * DROP_SPEED


def move_entities(state: SimulationState):
    move_projectiles(state)
    move_enemies(state)
    move_drops(state)


def move_player(state: SimulationState, x: float, y: float):
    """Place a player-controlled avatar, kept inside the playfield"""
    r = state.player.contact_radius
    state.player.x = clamp(x, r, state.width - r)
    state.player.y = clamp(y, r, state.height - r)
