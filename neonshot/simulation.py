"""
One simulation tick: motion, collisions, then progression.

The step mutates the state it is given and returns the events it produced;
audio and rendering happen afterwards, in the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from . import progression
from .collision import CollisionReport, resolve_collisions
from .entities import Phase
from .motion import move_entities
from .store import SimulationState


@dataclass
class TickOutcome:
    report: CollisionReport = field(default_factory=CollisionReport)
    events: List[str] = field(default_factory=list)
    phase_before: Phase = Phase.PLAYING
    phase_after: Phase = Phase.PLAYING

    @property
    def phase_changed(self) -> bool:
        return self.phase_before is not self.phase_after


def simulate_tick(state: SimulationState) -> TickOutcome:
    phase = state.phase
    outcome = TickOutcome(phase_before=phase, phase_after=phase)
    if phase is not Phase.PLAYING:
        return outcome

    move_entities(state)
    report = resolve_collisions(state)
    outcome.report = report
    outcome.events = list(report.events) + progression.apply(state, report)
    outcome.phase_after = state.phase
    state.tick += 1
    return outcome
