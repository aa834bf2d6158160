# flappy/game/difficulty.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List

from .config import DIFFICULTY_TABLE, HEIGHT, SPEED_RAMP_PER_10


@dataclass(frozen=True)
class Difficulty:
    """
    One selectable level:
    - speed: horizontal scroll of the obstacle pair (px/s)
    - gap:   vertical opening between top and bottom pipe (px)
    - ramp:  if True, speed grows by SPEED_RAMP_PER_10 every 10 points
    """
    name: str
    speed: float
    gap: int
    ramp: bool = False

    def effective_speed(self, score: int) -> float:
        if not self.ramp:
            return self.speed
        return self.speed + SPEED_RAMP_PER_10 * (score // 10)

    def validate(self, field_height: int = HEIGHT) -> "Difficulty":
        if self.speed <= 0:
            raise ValueError(f"{self.name}: speed must be > 0, got {self.speed}")
        if not (0 < self.gap <= field_height):
            raise ValueError(f"{self.name}: gap must be in (0, {field_height}], got {self.gap}")
        return self


DIFFICULTIES: Dict[str, Difficulty] = {
    name: Difficulty(name=name, speed=speed, gap=gap, ramp=ramp).validate()
    for name, (speed, gap, ramp) in DIFFICULTY_TABLE.items()
}


def difficulty_names() -> List[str]:
    return list(DIFFICULTIES.keys())


def get_difficulty(name: str) -> Difficulty:
    try:
        return DIFFICULTIES[name]
    except KeyError:
        raise ValueError(f"Unknown difficulty {name!r} (choose from {', '.join(DIFFICULTIES)})") from None
