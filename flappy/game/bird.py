# flappy/game/bird.py
from __future__ import annotations
from dataclasses import dataclass
import pygame
from .config import BIRD_X, BIRD_W, BIRD_H, GRAVITY, JUMP_VY, MAX_FALL_VY, HEIGHT


@dataclass
class Bird:
    """
    Falling player at a fixed x. Only vertical motion is simulated:
    - y is the TOP edge, kept inside [0, field_height - BIRD_H]
    - vy > 0 means falling
    """
    y: float
    vy: float = 0.0
    x: float = float(BIRD_X)
    field_height: int = HEIGHT

    @property
    def max_y(self) -> float:
        return float(self.field_height - BIRD_H)

    @property
    def bottom(self) -> float:
        return self.y + BIRD_H

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), BIRD_W, BIRD_H)

    def flap(self):
        """Replace vertical speed with the jump impulse (no stacking)."""
        self.vy = JUMP_VY

    def update_physics(self, dt: float):
        """Integrate gravity, clamp fall speed, then keep the bird inside the field."""
        self.vy = min(self.vy + GRAVITY * dt, MAX_FALL_VY)
        self.y += self.vy * dt

        # Floor and ceiling kill momentum, no bounce
        if self.y < 0.0:
            self.y = 0.0
            self.vy = 0.0
        elif self.y > self.max_y:
            self.y = self.max_y
            self.vy = 0.0

    def reset(self):
        self.y = self.field_height / 2
        self.vy = 0.0
