import random

import pytest

from neonshot.adapters import RecordingAudio
from neonshot.loop import LoopDriver
from neonshot.scheduler import ManualScheduler
from neonshot.store import new_state


class ScriptedRandom(random.Random):
    """random() returns the scripted values in order, then a value that never triggers a roll"""

    def __init__(self, values=(), fallback=0.99):
        super().__init__(0)
        self._values = list(values)
        self._fallback = fallback

    def random(self):
        if self._values:
            return self._values.pop(0)
        return self._fallback


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def state():
    s = new_state(800, 600, seed=0)
    s.rng = ScriptedRandom()  # no drops unless a test scripts them
    return s


@pytest.fixture
def game():
    """State, virtual clock, recorded audio and a driver that has not started yet"""
    s = new_state(800, 600, seed=1)
    s.rng = ScriptedRandom()
    scheduler = ManualScheduler()
    audio = RecordingAudio()
    driver = LoopDriver(s, scheduler, audio=audio)
    return s, scheduler, audio, driver
