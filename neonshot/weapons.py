"""
Weapon system: turns a fire request into projectiles for the active mode
"""

from __future__ import annotations

import math
from typing import List, Tuple

from .config import WEAPONS
from .entities import Projectile, WeaponMode
from .store import SimulationState
from .utils import aim_vector, angle_to


def fire_cooldown_ms(mode: WeaponMode) -> int:
    return WEAPONS[mode.value]["cooldown_ms"]


def shoot_event(mode: WeaponMode) -> str:
    return f"shoot_{mode.value}"


def build_projectiles(origin: Tuple[float, float], aim: Tuple[float, float], mode: WeaponMode) -> List[Projectile]:
    """One projectile per spread offset, all starting at the origin"""
    weapon = WEAPONS[mode.value]
    ox, oy = origin
    # zero-length aim shoots straight up
    angle = angle_to(0.0, 0.0, *aim_vector(0.0, 0.0, *aim))
    shots = []
    for offset in weapon["spread"]:
        heading = angle + offset
        shots.append(Projectile(
            x=ox,
            y=oy,
            vx=math.cos(heading) * weapon["speed"],
            vy=math.sin(heading) * weapon["speed"],
            radius=weapon["radius"],
            color=weapon["color"],
            pierce=weapon["pierce"],
        ))
    return shots


def fire(state: SimulationState, origin: Tuple[float, float], aim: Tuple[float, float]) -> str:
    """
    Append the active weapon's projectiles to the store.

    Rate limiting is the caller's job. Returns the sound event to play.
    """
    mode = state.store.weapon_mode
    state.store.projectiles.extend(build_projectiles(origin, aim, mode))
    state.player.facing = angle_to(0.0, 0.0, *aim_vector(0.0, 0.0, *aim))
    return shoot_event(mode)
