# flappy/game/game.py
import sys, argparse
import pygame
from pygame import K_SPACE, K_UP, K_ESCAPE
from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT, DIFFICULTY_DEFAULT, BEST_SCORE_PATH
from .difficulty import difficulty_names
from .storage import BestScoreStore
from .stepper import Stepper
from .world import World
from .render import draw_world

LOG_RUNS = True

# K_1..K_6 pick a difficulty while no run is active
DIFFICULTY_KEYS = {getattr(pygame, f"K_{i}"): name for i, name in enumerate(difficulty_names(), start=1)}


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Gap seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--difficulty", type=str, default=DIFFICULTY_DEFAULT, choices=difficulty_names())
    p.add_argument("--best-score-file", type=str, default=str(BEST_SCORE_PATH),
                   help="Where the best score is kept between launches.")
    return p.parse_args()


def run():
    args = parse_args()

    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None  # World randomizes
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption("Flappy Bird")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 32, bold=True)
    small = pygame.font.SysFont("jetbrainsmono", 18)

    world = World(seed=launch_seed, difficulty=args.difficulty, store=BestScoreStore(args.best_score_file))
    stepper = Stepper(world)
    if LOG_RUNS:
        print(f"Seed: {world.seed}  Difficulty: {world.difficulty.name}  Best: {world.best_score}")

    while True:
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == K_ESCAPE):
                stepper.stop()
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key in (K_SPACE, K_UP):
                    stepper.request_flap()
                elif event.key in DIFFICULTY_KEYS and not world.is_running:
                    world.set_difficulty(DIFFICULTY_KEYS[event.key])
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                stepper.request_flap()

        was_running = world.is_running
        stepper.tick()
        if LOG_RUNS and was_running and not world.is_running:
            print(f"Run over: score={world.score} best={world.best_score} ({world.difficulty.name})")

        draw_world(screen, world, font, small)
        pygame.display.flip()


if __name__ == "__main__":
    run()
