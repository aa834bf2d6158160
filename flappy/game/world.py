# flappy/game/world.py
from __future__ import annotations
import random
from enum import Enum
from typing import Any, Dict, Optional, Union

from .config import WIDTH, HEIGHT, DIFFICULTY_DEFAULT
from .bird import Bird
from .difficulty import Difficulty, get_difficulty
from .obstacles import ObstacleGen, bird_hits_obstacle


class Status(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


class World:
    """
    Whole simulation state, mutated in place.

    Idle -> Running -> Ended -> Running -> ...
    - start()/flap() enter Running (a reset plus the first flap)
    - advance(dt) integrates, scrolls, scores and checks collisions
    - a collision ends the run and records the best score

    `store` is any object with load() -> int and save(int); None disables persistence.
    """

    def __init__(self,
                 seed: Optional[int] = None,
                 difficulty: Union[str, Difficulty] = DIFFICULTY_DEFAULT,
                 store=None,
                 rng: Optional[random.Random] = None,
                 field_width: int = WIDTH,
                 field_height: int = HEIGHT):
        self.field_width = field_width
        self.field_height = field_height
        self.difficulty = self._resolve(difficulty)
        self.store = store

        self.obstacles = ObstacleGen(seed=seed, rng=rng, field_width=field_width, field_height=field_height)
        self.bird = Bird(y=field_height / 2, field_height=field_height)
        self.obstacle = self.obstacles.spawn(self.difficulty.gap)

        self.status = Status.IDLE
        self.score = 0
        self.runs = 0  # bumped on every start(); lets the stepper spot a new run
        self.best_score = store.load() if store is not None else 0

    # -------------------- Read-only views --------------------

    @property
    def seed(self) -> Optional[int]:
        return self.obstacles.seed

    @property
    def is_running(self) -> bool:
        return self.status is Status.RUNNING

    @property
    def bird_y(self) -> float:
        return self.bird.y

    @property
    def bird_vy(self) -> float:
        return self.bird.vy

    @property
    def obstacle_x(self) -> float:
        return self.obstacle.x

    @property
    def gap_height(self) -> float:
        return self.obstacle.gap_height

    @property
    def speed(self) -> float:
        return self.difficulty.effective_speed(self.score)

    def snapshot(self) -> Dict[str, Any]:
        """Everything a renderer needs for one frame."""
        return {
            "status": self.status,
            "bird_y": self.bird.y,
            "bird_vy": self.bird.vy,
            "obstacle_x": self.obstacle.x,
            "gap_height": self.obstacle.gap_height,
            "gap_size": self.obstacle.gap,
            "score": self.score,
            "best_score": self.best_score,
            "difficulty": self.difficulty.name,
        }

    # -------------------- Transitions --------------------

    def start(self):
        if self.is_running:
            return
        self.bird.reset()
        self.obstacles.respawn(self.obstacle, self.difficulty.gap)
        self.score = 0
        self.status = Status.RUNNING
        self.runs += 1
        # the starting input doubles as the first flap
        self.bird.flap()

    def flap(self):
        if not self.is_running:
            self.start()
            return
        self.bird.flap()

    def advance(self, dt: float):
        if not self.is_running:
            return
        assert dt >= 0.0, f"dt must be >= 0, got {dt}"

        self.bird.update_physics(dt)

        self.obstacle.x -= self.speed * dt
        if self.obstacle.has_exited():
            self.obstacles.respawn(self.obstacle, self.difficulty.gap)
            self.score += 1

        if bird_hits_obstacle(self.bird.x, self.bird.y, self.obstacle):
            self.end_run()

    def end_run(self):
        """Running -> Ended. Also used for an explicit stop."""
        if not self.is_running:
            return
        self.status = Status.ENDED
        self.bird.reset()
        if self.score > self.best_score:
            self.best_score = self.score
            if self.store is not None:
                self.store.save(self.best_score)

    def set_difficulty(self, difficulty: Union[str, Difficulty]) -> bool:
        """Only allowed outside a run; returns False (no change) while Running."""
        resolved = self._resolve(difficulty)
        if self.is_running:
            return False
        self.difficulty = resolved
        return True

    def _resolve(self, difficulty: Union[str, Difficulty]) -> Difficulty:
        if isinstance(difficulty, Difficulty):
            return difficulty.validate(self.field_height)
        return get_difficulty(difficulty).validate(self.field_height)
