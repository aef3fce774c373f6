"""
NeonShotEnv - Gymnasium environment over the NeonShot core
----------------------------------------------------------
- Same simulation the arcade front-end plays (LoopDriver on a virtual clock)
- 1 agent that aims + shoots (weapon cooldowns enforced by the driver)
- Enemies spawn off-screen and home in on the player
- Vector observation: player state + top-K nearest enemies + top-M nearest drops
- MultiDiscrete action space: [move(5), shoot(2), aim(8)]

Moves are ignored unless the env is built with movable_player=True, matching
the fixed centre turret of the arcade game.

Quick test:
    python -m neonshot demo
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .adapters import PointerAim, RecordingAudio
from .collision import CollisionReport
from .config import GAME_CONFIG, MAX_LEVEL
from .entities import Phase, WeaponMode
from .loop import LoopDriver
from .motion import move_player
from .progression import level_threshold
from .scheduler import ManualScheduler
from .simulation import TickOutcome
from .store import new_state
from .utils import clamp

DEFAULT_REWARD_CONFIG = {
    "R_SCORE": 0.01,     # per score point (basic kill = 1.0)
    "R_HIT": 0.1,
    "R_PICKUP": 0.5,
    "R_DAMAGE": 2.0,     # per life lost
    "R_LEVEL": 5.0,
    "R_WIN": 20.0,
    "R_SHOT": 0.01,
    "R_TIME": 0.001,
    "R_DEATH": 10.0,
}

_WEAPON_ORDER = [WeaponMode.DEFAULT, WeaponMode.SHOTGUN, WeaponMode.PIERCE]


class NeonShotEnv(gym.Env):
    """Top-down NeonShot arena as a Gymnasium environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        width: int = GAME_CONFIG["width"],
        height: int = GAME_CONFIG["height"],
        frame_interval: float = GAME_CONFIG["frame_interval"],
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 5,
        m_drops: int = 2,
        enemy_motion: str = GAME_CONFIG["enemy_motion"],
        movable_player: bool = False,
        player_speed: float = 4.0,
        skip_transitions: bool = True,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only 'vector' is implemented."
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.obs_mode = obs_mode

        # Arena
        self.width = width
        self.height = height
        self.frame_interval = frame_interval
        self.max_steps = max_steps
        self.enemy_motion = enemy_motion

        # Observation config
        self.k_enemies = k_enemies
        self.m_drops = m_drops

        # Gameplay config
        self.movable_player = movable_player
        self.player_speed = player_speed
        self.skip_transitions = skip_transitions
        self.reward_config = dict(DEFAULT_REWARD_CONFIG)
        if reward_config:
            self.reward_config.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        # Action space:
        # move: 0 stay, 1 up, 2 down, 3 left, 4 right
        # shoot: 0/1
        # aim: 0..7 (8 directions)
        self.action_space = spaces.MultiDiscrete([5, 2, 8])

        # Observation space (vector)
        # Player: pos(2) weapon one-hot(3) lives(1) level(1) progress(1) ready(1)
        # Each enemy: rel pos(2) rel vel(2) hp fraction(1)
        # Each drop: rel pos(2)
        obs_dim = 2 + 3 + 1 + 1 + 1 + 1 + (self.k_enemies * 5) + (self.m_drops * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        # Arcade rendering state
        self._window = None

        self.state = None
        self.scheduler: ManualScheduler = None  # type: ignore
        self.driver: LoopDriver = None  # type: ignore
        self.audio = RecordingAudio()
        self._step_count = 0
        self._step_report = CollisionReport()
        self._kills = 0

        # Precompute aim directions (8-way)
        self._aim_dirs = []
        for i in range(8):
            ang = (math.pi * 2) * (i / 8.0)
            self._aim_dirs.append((math.cos(ang), math.sin(ang)))

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        if self.driver is not None:
            self.driver.teardown()

        # Draw the game seed from the env RNG so reset(seed=...) is reproducible
        game_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.state = new_state(self.width, self.height, enemy_motion=self.enemy_motion, seed=game_seed)
        self.scheduler = ManualScheduler()
        self.audio.clear()
        renderer = self._window.renderer if self._window is not None else None
        self.driver = LoopDriver(
            self.state,
            self.scheduler,
            audio=self.audio,
            renderer=renderer,
            aim=PointerAim(),
            frame_interval=self.frame_interval,
            on_tick=self._on_tick,
        )
        self.driver.start()
        self._step_count = 0
        self._step_report = CollisionReport()
        self._kills = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, shoot, aim = int(action[0]), int(action[1]), int(action[2])
        self.audio.clear()
        self._step_report = CollisionReport()

        self._apply_move(move)
        if shoot:
            # Point the aim 100 units out along the chosen direction
            dx, dy = self._aim_dirs[aim % 8]
            player = self.state.player
            self.driver.aim.move(player.x + dx * 100.0, player.y + dy * 100.0)
            self.driver.request_fire()

        # One frame of simulation (and any spawns that fall due)
        self.scheduler.advance(self.frame_interval)
        if self.skip_transitions and self.state.phase is Phase.TRANSITIONING:
            self.scheduler.advance(self.driver.transition_ms / 1000.0)

        reward = self._compute_reward()

        terminated = self.state.phase is Phase.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _apply_move(self, move: int):
        if not self.movable_player or move == 0:
            return
        dx, dy = {1: (0.0, -1.0), 2: (0.0, 1.0), 3: (-1.0, 0.0), 4: (1.0, 0.0)}[move]
        player = self.state.player
        move_player(self.state, player.x + dx * self.player_speed, player.y + dy * self.player_speed)

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        state = self.state
        player = state.player
        prog = state.progression

        weapon = [1.0 if state.store.weapon_mode is w else 0.0 for w in _WEAPON_ORDER]
        ready = self.driver.fire_readiness()

        obs_parts = [player.x / self.width * 2 - 1, player.y / self.height * 2 - 1]  # map to [-1,1]
        obs_parts += [w * 2 - 1 for w in weapon]
        obs_parts += [
            clamp(prog.lives / 5.0, 0, 1) * 2 - 1,
            (prog.level - 1) / max(1, MAX_LEVEL - 1) * 2 - 1,
            clamp(prog.score / level_threshold(prog.level), 0, 1) * 2 - 1,
            ready * 2 - 1,
        ]

        # Enemies: top-K nearest
        enemies_sorted = sorted(
            state.store.enemies,
            key=lambda e: (e.x - player.x) ** 2 + (e.y - player.y) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - player.x) / self.width, -1, 1),
                    clamp((e.y - player.y) / self.height, -1, 1),
                    clamp(e.vx / 3.0, -1, 1),
                    clamp(e.vy / 3.0, -1, 1),
                    e.hp / e.max_hp * 2 - 1,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0, 0.0]

        # Drops: top-M nearest
        drops_sorted = sorted(
            state.store.drops,
            key=lambda d: (d.x - player.x) ** 2 + (d.y - player.y) ** 2
        )
        for i in range(self.m_drops):
            if i < len(drops_sorted):
                d = drops_sorted[i]
                obs_parts += [
                    clamp((d.x - player.x) / self.width, -1, 1),
                    clamp((d.y - player.y) / self.height, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _on_tick(self, outcome: TickOutcome):
        """Fold each simulated tick into this step's collision totals"""
        step, report = self._step_report, outcome.report
        step.score += report.score
        step.lives_lost += report.lives_lost
        step.kills.extend(report.kills)
        step.pickups.extend(report.pickups)
        step.events.extend(report.events)
        self._kills += len(report.kills)

    def _compute_reward(self) -> float:
        rc = self.reward_config
        audio = self.audio
        report = self._step_report
        prog = self.state.progression

        # Shots and phase events happen outside the collision pass
        shots = sum(audio.count(f"shoot_{w.value}") for w in _WEAPON_ORDER)

        reward = 0.0
        reward += rc["R_SCORE"] * report.score
        reward += rc["R_HIT"] * report.events.count("hit")
        reward += rc["R_PICKUP"] * len(report.pickups)
        reward -= rc["R_DAMAGE"] * report.lives_lost
        reward += rc["R_LEVEL"] * audio.count("level_up")
        reward += rc["R_WIN"] * audio.count("win")
        reward -= rc["R_SHOT"] * shots
        reward -= rc["R_TIME"]

        if prog.phase is Phase.GAME_OVER and not prog.won:
            reward -= rc["R_DEATH"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        prog = self.state.progression
        return {
            "score": prog.score,
            "lives": prog.lives,
            "level": prog.level,
            "phase": prog.phase.value,
            "won": prog.won,
            "weapon": self.state.store.weapon_mode.value,
            "num_enemies": len(self.state.store.enemies),
            "num_drops": len(self.state.store.drops),
            "num_projectiles": len(self.state.store.projectiles),
            "kills": self._kills,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .render import NeonShotWindow
            self._window = NeonShotWindow(self.width, self.height, title="NeonShotEnv - Arcade")
            self.driver.renderer = self._window.renderer
            self.driver.redraw()

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self.driver is not None:
            self.driver.teardown()
        if self._window is not None:
            self._window.close()
            self._window = None
