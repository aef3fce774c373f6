"""
Collaborator contracts around the core: frame snapshots for a renderer,
named sound events, and aim providers.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .config import MAX_LEVEL, PLAYER_COLOR
from .entities import Enemy, Phase
from .store import SimulationState
from .utils import aim_vector, angle_to, distance, DEFAULT_AIM

SOUND_EVENTS = (
    "shoot_default",
    "shoot_shotgun",
    "shoot_pierce",
    "hit",
    "explode",
    "level_up",
    "win",
    "pickup",
    "damage",
)


# ----------------------------
# Render contract
# ----------------------------

@dataclass
class DrawItem:
    x: float
    y: float
    radius: float
    color: str
    shape: str  # circle, triangle, square
    rotation: float = 0.0
    hp_fraction: Optional[float] = None  # only for multi-hit enemies


@dataclass
class Frame:
    width: float
    height: float
    phase: Phase
    score: int
    lives: int
    level: int
    weapon: str
    won: bool
    player: DrawItem
    items: List[DrawItem] = field(default_factory=list)


def build_frame(state: SimulationState, now: float = 0.0) -> Frame:
    """Snapshot of the state in draw order: drops, projectiles, enemies"""
    store = state.store
    prog = state.progression
    items = []
    for d in store.drops:
        items.append(DrawItem(d.x, d.y, d.radius, d.color, "square"))
    for p in store.projectiles:
        items.append(DrawItem(p.x, p.y, p.radius, p.color, "circle"))
    for e in store.enemies:
        desc = e.draw
        hp_fraction = e.hp / e.max_hp if e.max_hp > 1 else None
        items.append(DrawItem(e.x, e.y, e.radius, e.color, desc.shape, desc.spin * now, hp_fraction))

    player = state.player
    return Frame(
        width=state.width,
        height=state.height,
        phase=prog.phase,
        score=prog.score,
        lives=prog.lives,
        level=prog.level,
        weapon=store.weapon_mode.value,
        won=prog.won,
        player=DrawItem(player.x, player.y, player.contact_radius, PLAYER_COLOR, "triangle", player.facing),
        items=items,
    )


def shows_win(frame: Frame) -> bool:
    """Win overlay: set once the game is won, and already during the final dwell"""
    return frame.won or (frame.phase is Phase.TRANSITIONING and frame.level >= MAX_LEVEL)


class FrameTrail:
    """
    The last few frames, for fading motion trails.
    ghosts() yields the older items with an alpha that grows toward the present.
    """

    def __init__(self, length: int = 4, max_alpha: int = 96):
        self.frames = deque(maxlen=length)
        self.max_alpha = max_alpha

    def push(self, frame: Frame):
        self.frames.append(frame)

    def clear(self):
        self.frames.clear()

    def ghosts(self) -> Iterator[Tuple[DrawItem, int]]:
        older = list(self.frames)[:-1]
        for age, frame in enumerate(older, start=1):
            alpha = self.max_alpha * age // len(self.frames)
            for item in frame.items:
                yield item, alpha


class NullRenderer:
    def draw(self, frame: Frame):
        pass


# ----------------------------
# Audio contract
# ----------------------------

class NullAudio:
    def play(self, event: str):
        pass


class RecordingAudio:
    """Keeps every event in order; handy for tests and headless runs"""

    def __init__(self):
        self.events: List[str] = []

    def play(self, event: str):
        self.events.append(event)

    def count(self, event: str) -> int:
        return self.events.count(event)

    def clear(self):
        self.events.clear()


# ----------------------------
# Input contract
# ----------------------------

def nearest_enemy(state: SimulationState) -> Optional[Enemy]:
    px, py = state.player.pos
    alive = [e for e in state.store.enemies if not e.dead]
    if not alive:
        return None
    return min(alive, key=lambda e: distance(px, py, e.x, e.y))


class PointerAim:
    """Aims at the last known pointer position"""

    def __init__(self, x: Optional[float] = None, y: Optional[float] = None):
        self.x = x
        self.y = y

    def move(self, x: float, y: float):
        self.x, self.y = x, y

    def aim(self, state: SimulationState) -> Optional[Tuple[float, float]]:
        if self.x is None or self.y is None:
            return DEFAULT_AIM
        px, py = state.player.pos
        return aim_vector(px, py, self.x, self.y)


class AutoAim:
    """Aims at the nearest enemy, or straight up when there is none"""

    def aim(self, state: SimulationState) -> Optional[Tuple[float, float]]:
        target = nearest_enemy(state)
        if target is None:
            return DEFAULT_AIM
        px, py = state.player.pos
        return aim_vector(px, py, target.x, target.y)


def facing_for(aim: Optional[Tuple[float, float]]) -> float:
    """Heading the avatar should show, pointing up when there is no aim"""
    dx, dy = aim_vector(0.0, 0.0, *aim) if aim is not None else DEFAULT_AIM
    return angle_to(0.0, 0.0, dx, dy)
