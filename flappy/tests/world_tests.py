# flappy/tests/world_tests.py
"""
Physics, scoring and state-machine checks for World.

Usage (from repo root):
  python -m flappy.tests.world_tests
  pytest flappy/tests/world_tests.py
"""

from __future__ import annotations
import random
import sys

from flappy.game.config import HEIGHT, WIDTH, BIRD_X, BIRD_W, BIRD_H, OBSTACLE_W, JUMP_VY
from flappy.game.difficulty import Difficulty, DIFFICULTIES, get_difficulty
from flappy.game.world import World, Status

SIM_DT = 1.0 / 60.0

# gap == field height: the gap always starts at 0 and covers the field, nothing can be hit
OPEN_FIELD = Difficulty(name="Open", speed=150.0, gap=HEIGHT)


class MemoryStore:
    def __init__(self, value: int = 0):
        self.value = value
        self.saves = []

    def load(self) -> int:
        return self.value

    def save(self, score: int):
        self.saves.append(score)
        self.value = score


def force_collision(world: World):
    """Put the pipe on top of the bird with the bird above the gap."""
    world.obstacle.x = float(BIRD_X)
    world.obstacle.gap_height = 300.0
    world.bird.y = 100.0
    world.advance(0.0)


# -------------------- Physics --------------------

def test_bird_stays_in_field():
    rng = random.Random(7)
    for dt in (0.0, 0.001, SIM_DT, 0.05, 0.1, 0.5, 2.0):
        for diff in (OPEN_FIELD, get_difficulty("Medium")):
            world = World(seed=3, difficulty=diff)
            world.start()
            for _ in range(300):
                if rng.random() < 0.15:
                    world.flap()
                world.advance(dt)
                assert 0.0 <= world.bird_y <= HEIGHT - BIRD_H, f"bird_y out of field: {world.bird_y} (dt={dt})"


def test_floor_and_ceiling_zero_velocity():
    world = World(seed=1, difficulty=OPEN_FIELD)
    world.start()
    world.bird.y = HEIGHT - BIRD_H - 1.0
    world.bird.vy = 500.0
    world.advance(0.1)
    assert world.bird_y == HEIGHT - BIRD_H and world.bird_vy == 0.0, "floor must clamp and stop the bird"

    world.bird.y = 1.0
    world.flap()
    world.advance(0.1)
    assert world.bird_y == 0.0 and world.bird_vy == 0.0, "ceiling must clamp and stop the bird"


def test_flap_replaces_velocity():
    world = World(seed=1, difficulty=OPEN_FIELD)
    world.start()
    for prior in (650.0, 0.0, -1000.0, JUMP_VY / 2):
        world.bird.vy = prior
        world.flap()
        assert world.bird_vy == JUMP_VY, f"flap after vy={prior} gave {world.bird_vy}"


def test_fall_speed_is_capped():
    from flappy.game.config import MAX_FALL_VY
    world = World(seed=1, difficulty=OPEN_FIELD)
    world.start()
    world.bird.y = 0.0
    world.bird.vy = MAX_FALL_VY - 1.0
    world.advance(0.05)
    assert world.bird_vy == MAX_FALL_VY


# -------------------- Obstacles / scoring --------------------

def test_obstacle_scrolls_at_difficulty_speed():
    # 400x600 field (width x height), gap 200, 150 px/s: 1 s at 60 steps -> x = 250
    world = World(seed=5, difficulty=Difficulty("Test", 150.0, 200), field_width=400, field_height=600)
    world.start()
    assert world.obstacle_x == 400.0
    for _ in range(60):
        world.advance(SIM_DT)
    assert world.status is Status.RUNNING
    assert abs(world.obstacle_x - 250.0) < 1e-6, f"obstacle_x={world.obstacle_x}"


def test_zero_step_after_start_changes_nothing():
    world = World(seed=5)
    world.start()
    y0, score0, x0 = world.bird_y, world.score, world.obstacle_x
    assert y0 == HEIGHT / 2 and score0 == 0 and x0 == WIDTH
    world.advance(0.0)
    assert (world.bird_y, world.score, world.obstacle_x) == (y0, score0, x0)


def test_exit_scores_once_and_respawns():
    world = World(seed=5)
    world.start()
    world.obstacle.x = -OBSTACLE_W - 1e-3
    world.advance(SIM_DT)
    assert world.score == 1, f"score={world.score}"
    assert world.obstacle_x == float(WIDTH)
    world.advance(SIM_DT)
    assert world.score == 1, "no second point without a second exit"


def test_score_counts_exits_only():
    world = World(seed=9, difficulty=OPEN_FIELD)
    world.start()
    exits = 0
    prev_x = world.obstacle_x
    for _ in range(600):  # 10 s
        world.advance(SIM_DT)
        if world.obstacle_x > prev_x:
            exits += 1
        prev_x = world.obstacle_x
        assert world.score == exits, f"score {world.score} != exits {exits}"
    assert world.status is Status.RUNNING
    assert exits == int((150.0 * 10.0) // (WIDTH + OBSTACLE_W))


def test_gap_height_range_every_difficulty():
    for diff in DIFFICULTIES.values():
        world = World(seed=11, difficulty=diff)
        world.start()
        for i in range(200):
            world.obstacle.x = -OBSTACLE_W - 1.0
            world.advance(0.0)
            assert 0.0 <= world.gap_height <= HEIGHT - diff.gap, f"{diff.name}: gap_height={world.gap_height}"
            assert world.obstacle.gap == diff.gap
            assert world.score == i + 1


def test_same_seed_same_gaps():
    def gaps(world: World, n: int):
        world.start()
        out = []
        for _ in range(n):
            world.obstacle.x = -OBSTACLE_W - 1.0
            world.advance(0.0)
            out.append(world.gap_height)
        return out

    assert gaps(World(seed=42), 20) == gaps(World(seed=42), 20)
    assert gaps(World(rng=random.Random(42)), 20) == gaps(World(rng=random.Random(42)), 20)
    assert gaps(World(seed=42), 20) != gaps(World(seed=43), 20)


def test_ramp_speeds_up_every_ten_points():
    from flappy.game.config import SPEED_RAMP_PER_10
    ramp = Difficulty("Ramp", 100.0, 200, ramp=True)
    flat = Difficulty("Flat", 100.0, 200)
    assert ramp.effective_speed(0) == 100.0
    assert ramp.effective_speed(9) == 100.0
    assert ramp.effective_speed(10) == 100.0 + SPEED_RAMP_PER_10
    assert ramp.effective_speed(25) == 100.0 + 2 * SPEED_RAMP_PER_10
    assert flat.effective_speed(50) == 100.0

    world = World(seed=1, difficulty=ramp)
    world.start()
    world.score = 10
    world.advance(0.1)
    assert abs(world.obstacle_x - (WIDTH - 0.1 * (100.0 + SPEED_RAMP_PER_10))) < 1e-9


# -------------------- Collisions --------------------

def test_collision_top_segment_ends_run():
    world = World(seed=1)
    world.start()
    force_collision(world)
    assert world.status is Status.ENDED
    assert world.bird_y == HEIGHT / 2, "bird goes back to center on end"


def test_collision_bottom_segment_ends_run():
    world = World(seed=1, difficulty="Medium")
    world.start()
    world.obstacle.x = float(BIRD_X - OBSTACLE_W + 1)  # 1 px of overlap on the left side
    world.obstacle.gap_height = 100.0
    world.bird.y = 100.0 + 200 - BIRD_H + 1.0          # bottom edge 1 px into the lower pipe
    world.advance(0.0)
    assert world.status is Status.ENDED


def test_inside_gap_or_no_overlap_keeps_running():
    world = World(seed=1, difficulty="Medium")
    world.start()
    # fully inside the gap
    world.obstacle.x = float(BIRD_X)
    world.obstacle.gap_height = 100.0
    world.bird.y = 100.0
    world.advance(0.0)
    assert world.status is Status.RUNNING
    world.bird.y = 100.0 + 200 - BIRD_H
    world.advance(0.0)
    assert world.status is Status.RUNNING

    # outside the gap but pipes not overlapping horizontally
    world.bird.y = 0.0
    for x in (BIRD_X + BIRD_W, BIRD_X - OBSTACLE_W, 300.0):
        world.obstacle.x = float(x)
        world.advance(0.0)
        assert world.status is Status.RUNNING, f"collided with no overlap at x={x}"


def test_advance_outside_run_is_noop():
    world = World(seed=1)
    snap = world.snapshot()
    world.advance(0.5)
    assert world.snapshot() == snap and world.status is Status.IDLE

    world.start()
    force_collision(world)
    snap = world.snapshot()
    world.advance(0.5)
    assert world.snapshot() == snap


# -------------------- Runs / best score --------------------

def test_best_score_only_at_end_and_only_up():
    store = MemoryStore(value=4)
    world = World(seed=1, store=store)
    assert world.best_score == 4

    world.start()
    world.score = 7
    assert world.best_score == 4, "best must not move during a run"
    force_collision(world)
    assert world.best_score == 7 and store.saves == [7]
    assert world.score == 7, "final score stays visible until the next start"

    world.flap()
    assert world.score == 0 and world.status is Status.RUNNING
    world.score = 3
    force_collision(world)
    assert world.best_score == 7 and store.saves == [7], "lower score must not overwrite best"


def test_flap_from_ended_restarts_with_impulse():
    world = World(seed=1)
    world.start()
    world.advance(0.2)
    world.score = 2
    force_collision(world)
    world.flap()
    assert world.status is Status.RUNNING
    assert world.score == 0
    assert world.bird_y == HEIGHT / 2
    assert world.bird_vy == JUMP_VY
    assert world.obstacle_x == float(WIDTH)


def test_start_while_running_is_noop():
    world = World(seed=1)
    world.start()
    world.advance(0.3)
    snap = world.snapshot()
    world.start()
    assert world.snapshot() == snap


def test_difficulty_switch_only_outside_run():
    world = World(seed=1)
    assert world.set_difficulty("Hard") is True
    assert world.difficulty.name == "Hard"
    world.start()
    assert world.obstacle.gap == get_difficulty("Hard").gap
    assert world.set_difficulty("Easy") is False
    assert world.difficulty.name == "Hard"
    try:
        world.set_difficulty("Nope")
    except ValueError:
        pass
    else:
        raise AssertionError("unknown difficulty must raise ValueError")


def main():
    tests = [(name, fn) for name, fn in sorted(globals().items()) if name.startswith("test_") and callable(fn)]
    try:
        for name, fn in tests:
            fn()
            print(f"✓ {name}")
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    print("🎉 All world tests passed")


if __name__ == "__main__":
    main()
