"""
Game configuration for NeonShot
Fixed gameplay policy: level thresholds, enemy stats, weapon table, timings
"""

# Playfield / loop parameters
GAME_CONFIG = {
    "width": 800,
    "height": 600,
    "frame_interval": 1 / 60,  # seconds between simulation ticks
    "transition_ms": 3000,  # dwell between levels
    "start_lives": 3,
    "enemy_motion": "pursuit",  # "pursuit" or "fixed", applied to every enemy of a run
    "require_start_gesture": False,  # start in WAITING until the first input
    "autofire": False,  # fire at the nearest enemy whenever the cooldown allows
}

# Score needed to clear level 1, 2, 3
LEVEL_THRESHOLDS = [1500, 4000, 8000]
MAX_LEVEL = len(LEVEL_THRESHOLDS)

# ==============================================================================
# SPAWNING
# ==============================================================================

SPAWN_BASE_MS = 1000
SPAWN_STEP_MS = 200  # faster spawning per level
SPAWN_FLOOR_MS = 400

FAST_CHANCE = 0.3  # roll below this from level 2
TANK_CHANCE = 0.2  # roll above 1 - this from level 3

# ==============================================================================
# ENEMIES
# ==============================================================================

ENEMY_TYPES = {
    "basic": {
        "radius": 15.0,
        "color": "#ff3366",
        "speed": 1.2,  # + BASIC_SPEED_PER_LEVEL * level
        "hp": 1,
        "score": 100,
        "shape": "circle",
        "spin": 0.0,  # radians per second
    },
    "fast": {
        "radius": 10.0,
        "color": "#00ffff",
        "speed": 2.5,
        "hp": 1,
        "score": 200,
        "shape": "triangle",
        "spin": 4.0,
    },
    "tank": {
        "radius": 30.0,
        "color": "#cc00ff",
        "speed": 0.5,
        "hp": 4,
        "score": 300,
        "shape": "square",
        "spin": 2.0,
    },
}

BASIC_SPEED_PER_LEVEL = 0.2

KILL_SCORES = {name: stats["score"] for name, stats in ENEMY_TYPES.items()}

# ==============================================================================
# WEAPONS
# ==============================================================================

WEAPONS = {
    "default": {
        "spread": [0.0],
        "speed": 7.0,
        "radius": 5.0,
        "pierce": 1,
        "color": "#ffffff",
        "cooldown_ms": 200,
    },
    "shotgun": {
        "spread": [-0.2, 0.0, 0.2],
        "speed": 8.0,
        "radius": 4.0,
        "pierce": 1,
        "color": "#ffff00",
        "cooldown_ms": 400,
    },
    "pierce": {
        "spread": [0.0],
        "speed": 12.0,
        "radius": 8.0,
        "pierce": 3,
        "color": "#00ffcc",
        "cooldown_ms": 600,
    },
}

# ==============================================================================
# DROPS / PLAYER
# ==============================================================================

DROP_CHANCE = 0.15
DROP_RADIUS = 8.0
DROP_SPEED = 1.0  # units per tick toward the player
DROP_COLORS = {
    "shotgun": "#ffff00",
    "pierce": "#00ffcc",
}

PLAYER_PICKUP_RADIUS = 20.0
PLAYER_CONTACT_RADIUS = 15.0
PLAYER_COLOR = "#ffffff"
PLAYER_GLOW = "#0066ff"

# Circle overlap tolerance for projectile hits
HIT_TOLERANCE = 1.0

# Fixed-velocity enemies this many radii past the bounds are culled
ENEMY_CULL_RADII = 2.0
