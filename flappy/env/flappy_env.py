# flappy/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from flappy.game.config import WIDTH, HEIGHT, DIFFICULTY_DEFAULT
from flappy.game.world import World
from flappy.game.render import draw_world
from flappy.env.observations import OBS_SIZE, obs_bounds, build_observation


class FlappyEnv(gym.Env):
    """
    Flappy Bird Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal), fixed dt.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Observation: shape (6,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 difficulty: str = DIFFICULTY_DEFAULT,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.difficulty = difficulty

        self.sim_fps = 60
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)
        low, high = obs_bounds()
        self.observation_space = gym.spaces.Box(low=low, high=high, shape=(OBS_SIZE,), dtype=np.float32)

        self.world: Optional[World] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        self.screen = None
        self.clock = None
        self.font = None
        self.small_font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # Explicit seed -> exact gap sequence; otherwise draw one from the env's RNG
        if seed is not None:
            world_seed = int(seed)
        else:
            world_seed = int(self.np_random.integers(0, 2**31 - 1))

        # No store: env episodes never touch the player's saved best score
        self.world = World(seed=world_seed, difficulty=self.difficulty, store=None)
        self.world.start()

        self.timestep = 0
        self.current_seed = world_seed

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._info()

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.world is not None, "Call reset() before step()"

        if action == 1 and self.world.is_running:
            self.world.flap()

        for _ in range(self.frame_skip):
            self.world.advance(self.dt)
            if not self.world.is_running:
                break

        alive = self.world.is_running
        reward = 1.0 if alive else -1.0

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._info()

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.world is not None
        return build_observation(self.world)

    def _info(self) -> Dict[str, Any]:
        assert self.world is not None
        return {
            "score": self.world.score,
            "seed": self.current_seed,
            "timestep": self.timestep,
            "obstacle_x": self.world.obstacle_x,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.world is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Flappy Bird — Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()
            self.font = pygame.font.SysFont("jetbrainsmono", 32, bold=True)
            self.small_font = pygame.font.SysFont("jetbrainsmono", 18)

        draw_world(self.screen, self.world, self.font, self.small_font)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        frame = pygame.surfarray.array3d(self.screen)
        return np.transpose(frame, (1, 0, 2)).copy()

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
