"""Space Survivor - 2D arcade survival simulation core"""

from .config import SurvivorConfig, MOVEMENT_DIRECT, MOVEMENT_INERTIAL
from .input_state import Direction, InputSnapshot, InputState
from .world import (
    World,
    WorldSnapshot,
    StepEvents,
    init_session,
    tick,
    fire_projectile,
    set_directional,
    is_terminal,
    restart,
)

__all__ = [
    'SurvivorConfig', 'MOVEMENT_DIRECT', 'MOVEMENT_INERTIAL',
    'Direction', 'InputSnapshot', 'InputState',
    'World', 'WorldSnapshot', 'StepEvents',
    'init_session', 'tick', 'fire_projectile', 'set_directional', 'is_terminal', 'restart',
]
