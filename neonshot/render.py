"""
Arcade front-end: draws frames pushed by the loop driver and feeds pointer
input back into it.

The core works in screen space with y growing downward; everything is
flipped here on the way to arcade's y-up coordinates.
"""

from __future__ import annotations

import math
import time
from typing import List, Optional, Tuple

import arcade

from .adapters import DrawItem, Frame, FrameTrail, NullAudio, PointerAim, shows_win
from .config import GAME_CONFIG, MAX_LEVEL, PLAYER_GLOW
from .entities import Phase
from .loop import LoopDriver
from .store import new_state


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


class ArcadeScheduler:
    """Scheduler backed by arcade's (pyglet's) clock"""

    def time(self) -> float:
        return time.perf_counter()

    def schedule(self, callback, interval: float):
        arcade.schedule(callback, interval)

    def schedule_once(self, callback, delay: float):
        arcade.schedule_once(callback, delay)

    def unschedule(self, callback):
        arcade.unschedule(callback)


class ArcadeRenderer:
    """Keeps the latest frame and paints it when the window redraws"""

    BG = (5, 5, 5)
    HUD_C = (220, 220, 220)
    HP_BACK = (200, 40, 40)
    HP_FILL = (144, 238, 144)
    GLOW_ALPHA = 60
    GLOW_SCALE = 1.6

    def __init__(self, height: float):
        self.height = height
        self.frame: Optional[Frame] = None
        self.trail = FrameTrail()

    def draw(self, frame: Frame):
        self.frame = frame
        if frame.phase is Phase.PLAYING:
            self.trail.push(frame)
        else:
            self.trail.clear()

    def _flip(self, points: List[Tuple[float, float]]) -> List[Tuple[float, float]]:
        return [(x, self.height - y) for x, y in points]

    def _shape_points(self, item: DrawItem) -> List[Tuple[float, float]]:
        r = item.radius
        if item.shape == "square":
            local = [(-r, -r), (r, -r), (r, r), (-r, r)]
        elif item.shape == "player":
            local = [(r + 5, 0), (-10, 15), (-10, -15)]
        else:
            local = [(0, -r), (r, r), (-r, r)]
        c, s = math.cos(item.rotation), math.sin(item.rotation)
        return self._flip([(item.x + px * c - py * s, item.y + px * s + py * c) for px, py in local])

    def _draw_glow(self, item: DrawItem, color):
        arcade.draw_circle_filled(item.x, self.height - item.y, item.radius * self.GLOW_SCALE, (*color, self.GLOW_ALPHA))

    def _draw_item(self, item: DrawItem):
        color = hex_to_rgb(item.color)
        self._draw_glow(item, color)
        if item.shape == "circle":
            arcade.draw_circle_filled(item.x, self.height - item.y, item.radius, color)
        else:
            arcade.draw_polygon_filled(self._shape_points(item), color)

        if item.hp_fraction is not None:
            left = item.x - item.radius
            top = self.height - (item.y - item.radius - 6)
            width = item.radius * 2
            arcade.draw_lrbt_rectangle_filled(left, left + width, top - 4, top, self.HP_BACK)
            if item.hp_fraction > 0:
                arcade.draw_lrbt_rectangle_filled(left, left + width * item.hp_fraction, top - 4, top, self.HP_FILL)

    def paint(self):
        frame = self.frame
        if frame is None:
            return

        # Fading trail of the last few frames under the live entities
        for item, alpha in self.trail.ghosts():
            arcade.draw_circle_filled(item.x, self.height - item.y, item.radius * 0.7, (*hex_to_rgb(item.color), alpha))

        for item in frame.items:
            self._draw_item(item)

        # Player ship with a glow ring
        p = frame.player
        arcade.draw_circle_outline(p.x, self.height - p.y, p.radius + 6, hex_to_rgb(PLAYER_GLOW), 2)
        self._draw_item(DrawItem(p.x, p.y, p.radius, p.color, "player", p.rotation))

        # HUD
        lives_c = (255, 60, 60) if frame.lives == 1 else self.HUD_C
        arcade.draw_text(f"Score: {frame.score}", 12, self.height - 28, self.HUD_C, 14)
        arcade.draw_text(f"Level: {frame.level} / {MAX_LEVEL}", 12, self.height - 50, self.HUD_C, 14)
        arcade.draw_text(f"Lives: {frame.lives}", 12, self.height - 72, lives_c, 14)
        arcade.draw_text(f"Weapon: {frame.weapon}", 12, self.height - 94, self.HUD_C, 14)

        cx, cy = frame.width / 2, self.height / 2
        if frame.phase is Phase.WAITING:
            arcade.draw_text("Click to start", cx, cy, self.HUD_C, 28, anchor_x="center")
        elif frame.phase is Phase.TRANSITIONING and frame.level < MAX_LEVEL:
            arcade.draw_text(f"Level {frame.level} cleared!", cx, cy + 20, self.HUD_C, 32, anchor_x="center")
            arcade.draw_text("Lives +1", cx, cy - 20, (0, 255, 204), 18, anchor_x="center")
        elif frame.phase is Phase.GAME_OVER or frame.phase is Phase.TRANSITIONING:
            won = shows_win(frame)
            title = "You win!" if won else "Game over"
            arcade.draw_text(title, cx, cy + 20, (255, 215, 0) if won else (255, 60, 60), 36, anchor_x="center")
            arcade.draw_text(f"Final score: {frame.score}", cx, cy - 20, self.HUD_C, 18, anchor_x="center")
            if frame.phase is Phase.GAME_OVER:
                arcade.draw_text("Press R to restart", cx, cy - 50, self.HUD_C, 14, anchor_x="center")


class NeonShotWindow(arcade.Window):
    """Arcade window; playable when given a loop driver"""

    def __init__(self, width: int, height: int, title: str = "NeonShot", driver: Optional[LoopDriver] = None):
        super().__init__(width, height, title)
        self.background_color = ArcadeRenderer.BG
        self.renderer = ArcadeRenderer(height)
        self.driver = driver

    def on_draw(self):
        self.clear()
        self.renderer.paint()

    def on_mouse_motion(self, x, y, dx, dy):
        if self.driver is not None and isinstance(self.driver.aim, PointerAim):
            self.driver.aim.move(x, self.height - y)

    def on_mouse_press(self, x, y, button, modifiers):
        if self.driver is None:
            return
        if isinstance(self.driver.aim, PointerAim):
            self.driver.aim.move(x, self.height - y)
        self.driver.request_fire()

    def on_key_press(self, symbol, modifiers):
        if self.driver is None:
            return
        if symbol == arcade.key.R and self.driver.state.phase is Phase.GAME_OVER:
            self.driver.restart()
        elif symbol == arcade.key.ESCAPE:
            self.close()

    def on_close(self):
        if self.driver is not None:
            self.driver.teardown()
        super().on_close()


def play(
    width: int = GAME_CONFIG["width"],
    height: int = GAME_CONFIG["height"],
    enemy_motion: str = GAME_CONFIG["enemy_motion"],
    autofire: bool = False,
    seed: Optional[int] = None,
    verbose: int = 1,
):
    """Open the game window and run until it is closed"""
    state = new_state(width, height, enemy_motion=enemy_motion, seed=seed)
    window = NeonShotWindow(width, height)
    audio = NullAudio()
    driver = LoopDriver(
        state,
        ArcadeScheduler(),
        audio=audio,
        renderer=window.renderer,
        autofire=autofire,
        require_start_gesture=True,
        verbose=verbose,
    )
    window.driver = driver
    driver.restart()  # draws the waiting screen
    try:
        arcade.run()
    finally:
        driver.teardown()
    return state.progression
