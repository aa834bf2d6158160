# flappy/game/obstacles.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Tuple
import pygame
from .config import WIDTH, HEIGHT, OBSTACLE_W, BIRD_W, BIRD_H


@dataclass
class ObstaclePair:
    """A top/bottom pipe pair sharing one x; the open gap is [gap_height, gap_height + gap)."""
    x: float
    gap_height: float
    gap: int
    field_height: int = HEIGHT

    @property
    def gap_bottom(self) -> float:
        return self.gap_height + self.gap

    @property
    def right(self) -> float:
        return self.x + OBSTACLE_W

    def has_exited(self) -> bool:
        """Fully scrolled past the left boundary."""
        return self.x < -OBSTACLE_W

    def rects(self) -> Tuple[pygame.Rect, pygame.Rect]:
        """(top, bottom) rects for drawing and observation probes."""
        x = int(self.x)
        top = pygame.Rect(x, 0, OBSTACLE_W, int(self.gap_height))
        bottom_y = int(self.gap_bottom)
        bottom = pygame.Rect(x, bottom_y, OBSTACLE_W, max(0, self.field_height - bottom_y))
        return top, bottom


class ObstacleGen:
    """
    Spawns the single live obstacle pair. Gap placement comes from an injectable
    random.Random so a seed reproduces the exact sequence of gaps.
    """
    def __init__(self, seed: int | None = None, rng: random.Random | None = None,
                 field_width: int = WIDTH, field_height: int = HEIGHT):
        if rng is None:
            if seed is None:
                seed = random.randrange(0, 2**32 - 1)
            rng = random.Random(seed)
        self.seed = seed
        self.rng = rng
        self.field_width = field_width
        self.field_height = field_height

    def random_gap_height(self, gap: int) -> float:
        return self.rng.uniform(0.0, float(self.field_height - gap))

    def spawn(self, gap: int) -> ObstaclePair:
        return ObstaclePair(
            x=float(self.field_width),
            gap_height=self.random_gap_height(gap),
            gap=gap,
            field_height=self.field_height,
        )

    def respawn(self, pair: ObstaclePair, gap: int):
        """Recycle the pair in place at the right edge with a fresh gap."""
        pair.x = float(self.field_width)
        pair.gap = gap
        pair.gap_height = self.random_gap_height(gap)


def spans_overlap(a0: float, a1: float, b0: float, b1: float) -> bool:
    """Half-open [a0, a1) vs [b0, b1)."""
    return a0 < b1 and b0 < a1


def bird_hits_obstacle(bird_x: float, bird_y: float, pair: ObstaclePair) -> bool:
    """
    True when the pipe band overlaps the bird horizontally and the bird is not
    fully inside the gap (top edge above gap_height or bottom edge below gap_bottom).
    """
    if not spans_overlap(bird_x, bird_x + BIRD_W, pair.x, pair.right):
        return False
    hits_top = bird_y < pair.gap_height
    hits_bottom = bird_y + BIRD_H > pair.gap_bottom
    return hits_top or hits_bottom
