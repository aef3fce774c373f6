"""
Game entity dataclasses and the closed tags they carry
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .config import ENEMY_TYPES


class WeaponMode(str, Enum):
    DEFAULT = "default"
    SHOTGUN = "shotgun"
    PIERCE = "pierce"


class EnemyKind(str, Enum):
    BASIC = "basic"
    FAST = "fast"
    TANK = "tank"


class Phase(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    TRANSITIONING = "transitioning"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class DrawDescriptor:
    """How an enemy kind is drawn: outline shape and spin rate (rad/s)"""
    shape: str
    spin: float


DRAW_DESCRIPTORS = {
    EnemyKind(name): DrawDescriptor(shape=stats["shape"], spin=stats["spin"])
    for name, stats in ENEMY_TYPES.items()
}


@dataclass
class Player:
    """Player avatar; fixed at the centre unless the input moves it"""
    x: float
    y: float
    pickup_radius: float = 20.0
    contact_radius: float = 15.0
    facing: float = -math.pi / 2  # straight up

    @property
    def pos(self) -> Tuple[float, float]:
        return self.x, self.y


@dataclass
class Projectile:
    """Projectile fired by the player"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float = 5.0
    color: str = "#ffffff"
    pierce: int = 1


@dataclass
class Enemy:
    """Enemy entity moving toward the player"""
    x: float
    y: float
    radius: float
    color: str
    hp: int
    max_hp: int
    kind: EnemyKind
    speed: float
    vx: float = 0.0
    vy: float = 0.0
    pursuit: bool = True
    dead: bool = False  # killed or touched the player this tick, awaiting removal

    @property
    def draw(self) -> DrawDescriptor:
        return DRAW_DESCRIPTORS[self.kind]


@dataclass
class Drop:
    """Weapon pickup left behind by a killed enemy"""
    x: float
    y: float
    kind: WeaponMode
    radius: float = 8.0
    color: str = "#ffff00"
