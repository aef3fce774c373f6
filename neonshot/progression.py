"""
Score, lives and level progression.

Phase machine:
    WAITING -> PLAYING -> TRANSITIONING -> PLAYING (next level) -> ... -> GAME_OVER

GAME_OVER is terminal; only a full reset leaves it.
"""

from __future__ import annotations

from typing import List

from .collision import CollisionReport
from .config import GAME_CONFIG, LEVEL_THRESHOLDS, MAX_LEVEL
from .entities import Phase
from .store import SimulationState


def level_threshold(level: int) -> int:
    return LEVEL_THRESHOLDS[min(level, MAX_LEVEL) - 1]


def apply(state: SimulationState, report: CollisionReport) -> List[str]:
    """
    Fold one collision report into the progression state.

    Losing the last life ends the game on the spot and skips the level check
    for that tick. Returns any phase events (level_up / win).
    """
    prog = state.progression
    if prog.phase is not Phase.PLAYING:
        return []

    prog.score += report.score
    prog.lives -= report.lives_lost

    if prog.lives <= 0:
        prog.phase = Phase.GAME_OVER
        return []

    if prog.score >= level_threshold(prog.level):
        prog.phase = Phase.TRANSITIONING
        return ["win" if prog.level >= MAX_LEVEL else "level_up"]
    return []


def complete_transition(state: SimulationState) -> Phase:
    """Called once the dwell is over; advances the level or ends a won game"""
    prog = state.progression
    if prog.phase is not Phase.TRANSITIONING:
        return prog.phase

    if prog.level >= MAX_LEVEL:
        prog.won = True
        prog.phase = Phase.GAME_OVER
        return prog.phase

    prog.level += 1
    prog.lives += 1  # reward for clearing the level
    state.store.clear()
    prog.phase = Phase.PLAYING
    return prog.phase


def begin(state: SimulationState) -> bool:
    """Leave WAITING on the first start gesture"""
    if state.progression.phase is Phase.WAITING:
        state.progression.phase = Phase.PLAYING
        return True
    return False


def reset(state: SimulationState, require_start_gesture: bool = False):
    """Full reset to level 1, score 0, starting lives"""
    prog = state.progression
    prog.score = 0
    prog.lives = GAME_CONFIG["start_lives"]
    prog.level = 1
    prog.won = False
    prog.phase = Phase.WAITING if require_start_gesture else Phase.PLAYING
    state.store.clear()
    state.player.x, state.player.y = state.center
    state.tick = 0
