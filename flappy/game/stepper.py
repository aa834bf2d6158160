# flappy/game/stepper.py
from __future__ import annotations
import time
from collections import deque
from typing import Callable, Deque, Optional

from .config import MAX_STEP_S
from .world import World


class Stepper:
    """
    Turns wall-clock time into bounded simulation steps, one tick per display refresh.

    - dt = min(max_step_s, now - last_tick): a long stall never becomes one huge step
      that could carry the obstacle past the bird between two collision checks.
    - the first tick of a run only records the time and advances by 0.
    - flap requests are queued and applied at the start of the next tick.
    """

    def __init__(self, world: World,
                 clock: Callable[[], float] = time.perf_counter,
                 max_step_s: float = MAX_STEP_S):
        assert max_step_s > 0.0, "max_step_s must be > 0"
        self.world = world
        self.clock = clock
        self.max_step_s = float(max_step_s)
        self.last_tick: Optional[float] = None
        self._run = world.runs
        self._pending: Deque[str] = deque()

    @property
    def active(self) -> bool:
        return self.world.is_running

    @property
    def pending_inputs(self) -> int:
        return len(self._pending)

    def request_flap(self):
        self._pending.append("flap")

    def tick(self, now: Optional[float] = None) -> float:
        """Apply queued inputs, then advance the world. Returns the dt used."""
        if now is None:
            now = self.clock()

        while self._pending:
            self._pending.popleft()
            self.world.flap()

        if not self.world.is_running:
            self.last_tick = None
            return 0.0

        if self.last_tick is None or self._run != self.world.runs:
            # first tick of a run, including runs restarted directly on the world
            dt = 0.0
        else:
            dt = min(self.max_step_s, max(0.0, now - self.last_tick))
        self.last_tick = now
        self._run = self.world.runs

        self.world.advance(dt)

        if not self.world.is_running:
            # run ended this tick; the next run starts with a fresh clock
            self.last_tick = None
        return dt

    def stop(self):
        """Explicit stop: end the run, drop queued inputs, forget the clock."""
        self._pending.clear()
        self.last_tick = None
        self.world.end_run()
