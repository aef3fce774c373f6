"""
Loop driver: owns the frame and spawn timers for one game.

Both timers are acquired together when play starts and released together on
every way out of PLAYING: a phase change inside a tick, restart, teardown, an
exception in a callback, or leaving ``running()``.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, List, Optional, Tuple

from . import progression
from .adapters import AutoAim, NullAudio, NullRenderer, PointerAim, build_frame, facing_for, nearest_enemy
from .config import GAME_CONFIG
from .entities import Phase
from .simulation import TickOutcome, simulate_tick
from .spawn import spawn_interval_ms, try_spawn_enemy
from .store import SimulationState
from .weapons import fire, fire_cooldown_ms

_EPS = 1e-9


class _TimerScope:
    """Every callback scheduled through here is cancelled by ``release``"""

    def __init__(self, scheduler):
        self.scheduler = scheduler
        self._callbacks: List[Callable] = []

    def every(self, callback: Callable[[float], None], interval: float):
        self.scheduler.schedule(callback, interval)
        self._callbacks.append(callback)

    def once(self, callback: Callable[[float], None], delay: float):
        self.scheduler.schedule_once(callback, delay)
        self._callbacks.append(callback)

    def release(self):
        while self._callbacks:
            self.scheduler.unschedule(self._callbacks.pop())

    @property
    def active(self) -> bool:
        return bool(self._callbacks)


class LoopDriver:
    def __init__(
        self,
        state: SimulationState,
        scheduler,
        audio=None,
        renderer=None,
        aim=None,
        frame_interval: float = GAME_CONFIG["frame_interval"],
        transition_ms: int = GAME_CONFIG["transition_ms"],
        autofire: bool = GAME_CONFIG["autofire"],
        require_start_gesture: bool = GAME_CONFIG["require_start_gesture"],
        verbose: int = 0,
        on_tick: Optional[Callable[[TickOutcome], None]] = None,
    ):
        self.state = state
        self.scheduler = scheduler
        self.audio = audio if audio is not None else NullAudio()
        self.renderer = renderer if renderer is not None else NullRenderer()
        self.aim = aim if aim is not None else (AutoAim() if autofire else PointerAim())
        self.frame_interval = frame_interval
        self.transition_ms = transition_ms
        self.autofire = autofire
        self.require_start_gesture = require_start_gesture
        self.verbose = verbose
        self.on_tick = on_tick

        self._timers = _TimerScope(scheduler)
        self._last_fire: Optional[float] = None

        if require_start_gesture and state.phase is Phase.PLAYING and state.tick == 0:
            state.progression.phase = Phase.WAITING

    # ----------------------------
    # Lifecycle
    # ----------------------------

    @property
    def ticking(self) -> bool:
        return self._timers.active

    def start(self):
        """Begin (or resume) play; from WAITING this counts as the start gesture"""
        progression.begin(self.state)
        if self.state.phase is Phase.PLAYING and not self._timers.active:
            self._acquire()
            if self.verbose > 0:
                print(f"[LoopDriver] Level {self.state.progression.level} started")

    def teardown(self):
        self._timers.release()

    def restart(self):
        """Full reset to level 1 / score 0 / starting lives"""
        self.teardown()
        progression.reset(self.state, require_start_gesture=self.require_start_gesture)
        self._last_fire = None
        if self.verbose > 0:
            print("[LoopDriver] Restarted")
        if not self.require_start_gesture:
            self.start()
        self.redraw()

    @contextmanager
    def running(self):
        self.start()
        try:
            yield self
        finally:
            self.teardown()

    def _acquire(self):
        spawn_every = spawn_interval_ms(self.state.progression.level) / 1000.0
        self._timers.every(self._on_frame, self.frame_interval)
        self._timers.every(self._on_spawn, spawn_every)

    # ----------------------------
    # Input
    # ----------------------------

    def fire_readiness(self) -> float:
        """Share of the active weapon's cooldown that has elapsed (1.0 = ready)"""
        if self._last_fire is None:
            return 1.0
        cooldown = fire_cooldown_ms(self.state.store.weapon_mode) / 1000.0
        return min(1.0, (self.scheduler.time() - self._last_fire) / cooldown)

    def request_fire(self, aim: Optional[Tuple[float, float]] = None) -> bool:
        """
        Fire the active weapon if its cooldown has passed.
        Returns True when projectiles were created.
        """
        state = self.state
        if state.phase is Phase.WAITING:
            self.start()
            return False
        if state.phase is not Phase.PLAYING:
            return False

        if aim is None:
            aim = self.aim.aim(state)
        if aim is None:
            return False

        now = self.scheduler.time()
        cooldown = fire_cooldown_ms(state.store.weapon_mode) / 1000.0
        if self._last_fire is not None and now - self._last_fire < cooldown - _EPS:
            return False
        self._last_fire = now

        self._emit([fire(state, state.player.pos, aim)])
        return True

    # ----------------------------
    # Scheduled callbacks
    # ----------------------------

    def _on_frame(self, dt: float):
        try:
            self.state.player.facing = facing_for(self.aim.aim(self.state))
            # Autofire with nothing on screen is a no-op
            if self.autofire and nearest_enemy(self.state) is not None:
                self.request_fire()
            outcome = simulate_tick(self.state)
            self._emit(outcome.events)
            if self.on_tick is not None:
                self.on_tick(outcome)
            if outcome.phase_changed:
                self._on_phase_change(outcome.phase_after)
            self.redraw()
        except Exception:
            self.teardown()
            raise

    def _on_spawn(self, dt: float):
        try:
            try_spawn_enemy(self.state)
        except Exception:
            self.teardown()
            raise

    def _on_phase_change(self, phase: Phase):
        self._timers.release()
        prog = self.state.progression
        if phase is Phase.TRANSITIONING:
            self._timers.once(self._on_transition_done, self.transition_ms / 1000.0)
            if self.verbose > 0:
                print(f"[LoopDriver] Level {prog.level} cleared with score {prog.score}")
        elif phase is Phase.GAME_OVER and self.verbose > 0:
            print(f"[LoopDriver] Game over at level {prog.level}, score {prog.score}")

    def _on_transition_done(self, dt: float):
        try:
            self._timers.release()
            phase = progression.complete_transition(self.state)
            if phase is Phase.PLAYING:
                self._last_fire = None
                self.start()
            elif self.verbose > 0:
                print(f"[LoopDriver] Victory! Final score {self.state.progression.score}")
            self.redraw()
        except Exception:
            self.teardown()
            raise

    # ----------------------------
    # Side effects
    # ----------------------------

    def _emit(self, events: List[str]):
        for event in events:
            self.audio.play(event)

    def redraw(self):
        """Push a fresh frame to the renderer"""
        self.renderer.draw(build_frame(self.state, self.scheduler.time()))
