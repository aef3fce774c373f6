"""
Simulation state: entity collections, progression counters and the player
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from .config import GAME_CONFIG, PLAYER_PICKUP_RADIUS, PLAYER_CONTACT_RADIUS
from .entities import Drop, Enemy, Phase, Player, Projectile, WeaponMode


@dataclass
class EntityStore:
    """Owns every live entity of the current level plus the active weapon"""
    projectiles: List[Projectile] = field(default_factory=list)
    enemies: List[Enemy] = field(default_factory=list)
    drops: List[Drop] = field(default_factory=list)
    weapon_mode: WeaponMode = WeaponMode.DEFAULT

    def clear(self):
        """Drop all entities and fall back to the default weapon"""
        self.projectiles.clear()
        self.enemies.clear()
        self.drops.clear()
        self.weapon_mode = WeaponMode.DEFAULT

    def __len__(self) -> int:
        return len(self.projectiles) + len(self.enemies) + len(self.drops)


@dataclass
class ProgressionState:
    score: int = 0
    lives: int = 3
    level: int = 1
    phase: Phase = Phase.PLAYING
    won: bool = False


@dataclass
class SimulationState:
    """
    Everything one game owns. Passed by reference into each subsystem;
    only the loop driver keeps it across ticks.
    """
    width: float
    height: float
    player: Player
    store: EntityStore = field(default_factory=EntityStore)
    progression: ProgressionState = field(default_factory=ProgressionState)
    enemy_motion: str = "pursuit"
    rng: random.Random = field(default_factory=random.Random)
    tick: int = 0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Playfield must have positive size, got {self.width}x{self.height}")
        if self.enemy_motion not in ("pursuit", "fixed"):
            raise ValueError(f"Unknown enemy motion: {self.enemy_motion}")

    @property
    def center(self):
        return self.width * 0.5, self.height * 0.5

    @property
    def phase(self) -> Phase:
        return self.progression.phase


def new_state(
    width: float = GAME_CONFIG["width"],
    height: float = GAME_CONFIG["height"],
    enemy_motion: str = GAME_CONFIG["enemy_motion"],
    seed: Optional[int] = None,
    phase: Phase = Phase.PLAYING,
) -> SimulationState:
    """Fresh level-1 state with the player at the centre"""
    player = Player(
        x=width * 0.5,
        y=height * 0.5,
        pickup_radius=PLAYER_PICKUP_RADIUS,
        contact_radius=PLAYER_CONTACT_RADIUS,
    )
    state = SimulationState(
        width=width,
        height=height,
        player=player,
        enemy_motion=enemy_motion,
        rng=random.Random(seed),
    )
    state.progression.lives = GAME_CONFIG["start_lives"]
    state.progression.phase = phase
    return state
