# flappy/game/render.py
from __future__ import annotations
import pygame
from .config import (
    WIDTH, HEIGHT, BIRD_W, BIRD_H,
    COLOR_BG, COLOR_FG, COLOR_GOLD, COLOR_BIRD, COLOR_BIRD_DEAD,
    COLOR_PIPE, COLOR_PIPE_EDGE, COLOR_PANEL,
)
from .difficulty import difficulty_names
from .world import World, Status


def draw_pipes(surf: pygame.Surface, world: World):
    for r in world.obstacle.rects():
        if r.height <= 0:
            continue
        pygame.draw.rect(surf, COLOR_PIPE, r)
        pygame.draw.rect(surf, COLOR_PIPE_EDGE, r, width=2)


def draw_bird(surf: pygame.Surface, world: World):
    color = COLOR_BIRD_DEAD if world.status is Status.ENDED else COLOR_BIRD
    pygame.draw.ellipse(surf, color, world.bird.rect)
    eye = (int(world.bird.x) + BIRD_W - 9, int(world.bird.y) + BIRD_H // 3)
    pygame.draw.circle(surf, (0, 0, 0), eye, 3)


def _blit_centered(surf, font, text, color, y):
    img = font.render(text, True, color)
    surf.blit(img, (WIDTH // 2 - img.get_width() // 2, y))


def draw_startboard(surf: pygame.Surface, world: World, font: pygame.font.Font, small: pygame.font.Font):
    """Idle / Ended overlay: title, best score, difficulty picker, start prompt."""
    names = difficulty_names()
    panel_w = int(WIDTH * 0.8)
    panel_h = 150 + 22 * len(names)
    panel = pygame.Surface((panel_w, panel_h), pygame.SRCALPHA)
    panel.fill((*COLOR_PANEL, 150))
    x0 = (WIDTH - panel_w) // 2
    y0 = (HEIGHT - panel_h) // 2
    surf.blit(panel, (x0, y0))
    pygame.draw.rect(surf, COLOR_FG, (x0, y0, panel_w, panel_h), width=2, border_radius=10)

    y = y0 + 14
    _blit_centered(surf, font, "FLAPPY BIRD", COLOR_FG, y)
    y += 40
    _blit_centered(surf, small, f"Best Score: {world.best_score}", COLOR_GOLD, y)
    y += 30
    for i, name in enumerate(names, start=1):
        active = name == world.difficulty.name
        label = f"{i}  {name}" + ("  <" if active else "")
        _blit_centered(surf, small, label, COLOR_GOLD if active else COLOR_FG, y)
        y += 22
    y += 14
    _blit_centered(surf, small, "Click / SPACE to start", COLOR_FG, y)


def draw_world(surf: pygame.Surface, world: World, font: pygame.font.Font, small: pygame.font.Font):
    surf.fill(COLOR_BG)
    draw_pipes(surf, world)
    draw_bird(surf, world)
    _blit_centered(surf, font, str(world.score), COLOR_FG, 40)
    if not world.is_running:
        draw_startboard(surf, world, font, small)
