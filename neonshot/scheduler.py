"""
Virtual-clock scheduler.

Mirrors the arcade/pyglet clock interface (``schedule``, ``schedule_once``,
``unschedule``; callbacks receive the elapsed seconds) but only moves when
``advance`` is called, so headless runs and tests are deterministic.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Dict, Optional

_EPS = 1e-9


@dataclass
class _Job:
    callback: Callable[[float], None]
    due: float
    last: float
    interval: Optional[float]  # None for one-shot
    order: int


class ManualScheduler:
    def __init__(self, start: float = 0.0):
        self._now = start
        self._jobs: Dict[Callable, _Job] = {}
        self._order = itertools.count()

    def time(self) -> float:
        return self._now

    def schedule(self, callback: Callable[[float], None], interval: float):
        assert interval > 0, "interval must be positive"
        self._jobs[callback] = _Job(callback, self._now + interval, self._now, interval, next(self._order))

    def schedule_once(self, callback: Callable[[float], None], delay: float):
        self._jobs[callback] = _Job(callback, self._now + delay, self._now, None, next(self._order))

    def unschedule(self, callback: Callable[[float], None]):
        self._jobs.pop(callback, None)

    def is_scheduled(self, callback: Callable[[float], None]) -> bool:
        return callback in self._jobs

    @property
    def pending(self) -> int:
        return len(self._jobs)

    def advance(self, dt: float) -> int:
        """Move the clock forward by dt seconds, firing due callbacks in order"""
        target = self._now + dt
        fired = 0
        while True:
            due = [j for j in self._jobs.values() if j.due <= target + _EPS]
            if not due:
                break
            job = min(due, key=lambda j: (j.due, j.order))
            self._now = max(self._now, job.due)
            elapsed = job.due - job.last
            if job.interval is None:
                del self._jobs[job.callback]
            else:
                job.last = job.due
                job.due += job.interval
            job.callback(elapsed)
            fired += 1
        self._now = max(self._now, target)
        return fired
