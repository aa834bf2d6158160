# /experiments/sanity_rollout.py
"""
Sanity rollouts for FlappyEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Appends one row per episode to a CSV for notebook analysis

Usage examples (from repo root):
  # Run both policies over 20 default seeds, frame_skip=2:
  python -m experiments.sanity_rollout --policies both --frame-skip 2

  # Only heuristic, custom seeds, harder level:
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333 --difficulty Hard

  # Quick random-only smoke with fewer steps:
  python -m experiments.sanity_rollout --policies random --steps 300 --out-dir /tmp/sanity
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import List, Tuple

import numpy as np

from flappy.env.flappy_env import FlappyEnv
from flappy.game.config import HEIGHT, BIRD_H, DIFFICULTY_DEFAULT
from flappy.game.difficulty import difficulty_names


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int, flap_prob: float = 0.15):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < flap_prob)
    return act

def tiny_heuristic_policy_init(margin_px: float = 12.0):
    """
    Very small rule: flap when the bird is falling and its bottom edge comes
    within `margin_px` of the lower pipe's top.
    """
    def act(obs: np.ndarray) -> int:
        y_norm, vy_norm, _x, _gap_top, gap_bot = obs[:5]
        bird_bottom = float(y_norm) * (HEIGHT - BIRD_H) + BIRD_H
        gap_bottom = float(gap_bot) * HEIGHT
        falling = vy_norm >= 0.0
        return 1 if (falling and bird_bottom > gap_bottom - margin_px) else 0
    return act


# ------------------------ Rollout core ------------------------

def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int,
                    difficulty: str,
                    steps_limit: int) -> Tuple[int, float, int, bool, bool, float]:
    """
    Returns: (ep_len, ret_sum, score, terminated, truncated, flap_ratio)
    """
    env = FlappyEnv(frame_skip=frame_skip, difficulty=difficulty)

    if policy_name == "random":
        # Make action RNG seed a function of seed for determinism
        policy = random_policy_init(10_000 + seed)
    elif policy_name == "heuristic":
        policy = tiny_heuristic_policy_init()
    else:
        raise ValueError("Unknown policy")

    ret_sum = 0.0
    flaps = 0
    ep_len = 0
    term = trunc = False

    try:
        obs, info = env.reset(seed=seed)
        for t in range(steps_limit):
            a = policy(obs)
            flaps += a
            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1
            if term or trunc:
                break
        score = int(info.get("score", 0))
    finally:
        env.close()

    return ep_len, ret_sum, score, bool(term), bool(trunc), flaps / max(1, ep_len)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"],
                    help="Which policy to run")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--frame-skip", type=int, default=2,
                    help="Sim frames per decision step")
    ap.add_argument("--difficulty", type=str, default=DIFFICULTY_DEFAULT, choices=difficulty_names())
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--out-dir", type=str, default="experiments/runs",
                    help="Directory to store episodes.csv")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))  # 20 fixed eval seeds by default

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "env_name", "obs_version", "difficulty",
        "policy_name", "seed",
        "frame_skip", "sim_fps", "decision_hz",
        "episode_len_decisions", "return_sum", "score",
        "terminated", "truncated", "flap_ratio",
    ]
    env_name = "FlappyEnv"
    obs_version = "v1"
    sim_fps = 60
    decision_hz = sim_fps / max(1, args.frame_skip)

    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]

    print(f"Running policies={to_run} on {len(seeds)} seeds "
          f"(difficulty={args.difficulty}, frame_skip={args.frame_skip}, decision_hz≈{decision_hz:.1f})")
    print(f"Writing summaries to {episodes_csv}")

    for policy_name in to_run:
        scores = []
        for seed in seeds:
            ep_len, ret_sum, score, terminated, truncated, flap_ratio = run_one_episode(
                policy_name=policy_name,
                seed=seed,
                frame_skip=args.frame_skip,
                difficulty=args.difficulty,
                steps_limit=args.steps,
            )
            scores.append(score)

            row = [
                env_name, obs_version, args.difficulty,
                policy_name, seed,
                args.frame_skip, sim_fps, decision_hz,
                ep_len, f"{ret_sum:.1f}", score,
                int(terminated), int(truncated), f"{flap_ratio:.3f}",
            ]
            write_episode_row(episodes_csv, header, row)

            print(f"[{policy_name}] seed={seed}  len={ep_len}  score={score}  "
                  f"ret={ret_sum:.1f}  term={terminated} trunc={truncated}")
        print(f"[{policy_name}] mean score={np.mean(scores):.2f}  max={int(np.max(scores))}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
