from pathlib import Path

# --- Display ---
WIDTH = 400
HEIGHT = 600
FPS = 60

# --- World / Physics ---
GRAVITY = 1400.0            # px/s^2, positive = down
JUMP_VY = -420.0            # flap sets vy to this (px/s), never additive
MAX_FALL_VY = 650.0         # clamp downward speed
MAX_STEP_S = 0.1            # stepper clamp for slow frames (sec)

# --- Bird ---
BIRD_X = 100                # bird's fixed x (obstacles scroll left)
BIRD_W = 33
BIRD_H = 28

# --- Obstacles ---
OBSTACLE_W = 52
SPEED_RAMP_PER_10 = 25.0    # extra px/s per 10 points on ramping difficulties
SEED_DEFAULT = 12345

# --- Difficulty: name -> (scroll px/s, gap px, ramp) ---
# Original speeds were px per 24 ms tick, scaled here to px/s.
DIFFICULTY_TABLE = {
    "Easy":    (165.0, 250, False),
    "Medium":  (250.0, 200, False),
    "Hard":    (335.0, 170, False),
    "Insane":  (415.0, 150, False),
    "Hell":    (500.0, 120, True),
    "Extreme": (665.0, 100, False),
}
DIFFICULTY_DEFAULT = "Medium"

# --- Persistence ---
BEST_SCORE_PATH = Path.home() / ".flappy" / "best_score.txt"

# --- Colors (RGB) ---
COLOR_BG = (78, 192, 202)
COLOR_FG = (255, 255, 255)
COLOR_GOLD = (255, 215, 0)
COLOR_BIRD = (250, 214, 60)
COLOR_BIRD_DEAD = (255, 86, 110)
COLOR_PIPE = (92, 181, 56)
COLOR_PIPE_EDGE = (44, 96, 26)
COLOR_PANEL = (0, 0, 0)
