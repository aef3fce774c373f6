"""
Collision detection and resolution.

Runs once per tick after motion, in a fixed order so outcomes are
deterministic:

1. drop vs player (pickup)
2. enemy vs player (contact damage)
3. projectile vs enemy (hits, kills, drops)

Nothing is removed while the collections are being walked. Every pass only
marks entities; the collections are compacted once at the end. An enemy whose
hp reached zero is skipped by every later projectile in the same tick, so each
death is scored exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .config import DROP_CHANCE, DROP_COLORS, DROP_RADIUS, HIT_TOLERANCE, KILL_SCORES
from .entities import Drop, Enemy, EnemyKind, WeaponMode
from .store import SimulationState
from .utils import circle_collide, distance


@dataclass
class CollisionReport:
    """Outcome of one collision pass, applied by the progression controller"""
    score: int = 0
    lives_lost: int = 0
    kills: List[EnemyKind] = field(default_factory=list)
    pickups: List[WeaponMode] = field(default_factory=list)
    events: List[str] = field(default_factory=list)


def _roll_drop(state: SimulationState, enemy: Enemy):
    rng = state.rng
    if rng.random() >= DROP_CHANCE:
        return None
    kind = WeaponMode.SHOTGUN if rng.random() < 0.5 else WeaponMode.PIERCE
    return Drop(x=enemy.x, y=enemy.y, kind=kind, radius=DROP_RADIUS, color=DROP_COLORS[kind.value])


def _pickup_drops(state: SimulationState, report: CollisionReport):
    player = state.player
    store = state.store
    remaining = []
    for d in store.drops:
        if distance(player.x, player.y, d.x, d.y) < player.pickup_radius + d.radius:
            store.weapon_mode = d.kind
            report.pickups.append(d.kind)
            report.events.append("pickup")
        else:
            remaining.append(d)
    store.drops[:] = remaining


def _contact_player(state: SimulationState, report: CollisionReport):
    player = state.player
    for e in state.store.enemies:
        if e.dead:
            continue
        if distance(player.x, player.y, e.x, e.y) < player.contact_radius + e.radius:
            e.dead = True
            report.lives_lost += 1
            report.events.append("damage")


def _hit_enemies(state: SimulationState, report: CollisionReport) -> List[Drop]:
    store = state.store
    spawned = []
    for e in store.enemies:
        for p in store.projectiles:
            if e.dead:
                break
            if p.pierce <= 0:
                continue
            if not circle_collide(p.x, p.y, p.radius, e.x, e.y, e.radius, tolerance=HIT_TOLERANCE):
                continue

            e.hp -= 1
            p.pierce -= 1
            report.events.append("hit")

            if e.hp <= 0:
                e.dead = True
                report.score += KILL_SCORES[e.kind.value]
                report.kills.append(e.kind)
                report.events.append("explode")
                drop = _roll_drop(state, e)
                if drop is not None:
                    spawned.append(drop)
    return spawned


def resolve_collisions(state: SimulationState) -> CollisionReport:
    report = CollisionReport()
    store = state.store

    _pickup_drops(state, report)
    _contact_player(state, report)
    spawned = _hit_enemies(state, report)

    # Compact after the full pass
    store.enemies[:] = [e for e in store.enemies if not e.dead]
    store.projectiles[:] = [p for p in store.projectiles if p.pierce > 0]
    store.drops.extend(spawned)
    return report
