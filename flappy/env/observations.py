# flappy/env/observations.py
from __future__ import annotations
from typing import Tuple
import numpy as np

from flappy.game.config import BIRD_H, OBSTACLE_W, JUMP_VY, MAX_FALL_VY

OBS_SIZE = 6
# speeds above this read as 1.0 (covers the fastest level plus a long ramp)
SPEED_NORM_PX_S = 1000.0

OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _norm_vy(vy: float) -> float:
    vy_max = max(abs(JUMP_VY), MAX_FALL_VY)
    return max(-1.0, min(1.0, vy / vy_max))


def obs_bounds() -> Tuple[np.ndarray, np.ndarray]:
    return OBS_LOW.copy(), OBS_HIGH.copy()


def build_observation(world) -> np.ndarray:
    """
    Returns (6,) float32:
      [bird_y_norm, bird_vy_norm, obstacle_x_norm, gap_top_norm, gap_bottom_norm, speed_norm]
    - bird_y_norm uses the bird's top over [0, field_height - BIRD_H]
    - obstacle_x_norm maps the pipe's left edge from [-OBSTACLE_W, field_width] to [0,1]
    """
    h = float(world.field_height)
    w = float(world.field_width)
    obstacle = world.obstacle

    y_norm = _clamp01(world.bird.y / max(1.0, h - BIRD_H))
    vy_norm = _norm_vy(world.bird.vy)
    x_norm = _clamp01((obstacle.x + OBSTACLE_W) / (w + OBSTACLE_W))
    gap_top = _clamp01(obstacle.gap_height / h)
    gap_bot = _clamp01(obstacle.gap_bottom / h)
    speed = _clamp01(world.speed / SPEED_NORM_PX_S)

    return np.array([y_norm, vy_norm, x_norm, gap_top, gap_bot, speed], dtype=np.float32)
