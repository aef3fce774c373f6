"""NeonShot - top-down arcade shooter core, arcade front-end and Gymnasium env"""

from .entities import Enemy, EnemyKind, Drop, Phase, Projectile, WeaponMode
from .store import EntityStore, SimulationState, new_state
from .loop import LoopDriver
from .scheduler import ManualScheduler
from .env import NeonShotEnv

__all__ = [
    'Enemy',
    'EnemyKind',
    'Drop',
    'Phase',
    'Projectile',
    'WeaponMode',
    'EntityStore',
    'SimulationState',
    'new_state',
    'LoopDriver',
    'ManualScheduler',
    'NeonShotEnv',
]
