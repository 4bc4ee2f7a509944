"""
Live genetic automaton: cells with heritable rules evolve on a toroidal grid.
"""

from __future__ import annotations
import argparse
import logging
import os
import random
import time

import pygame

import config
from render import colors
from render.renderer import build_habitat_layer, draw_event_log, draw_habitat_legend, draw_hud, draw_world
from world.catastrophe import CATASTROPHES
from world.events import EventLog
from world.habitat import HABITAT_STYLES
from world.presets import preset_ids
from world.world import World

logger = logging.getLogger("automaton")

CATASTROPHE_KEYS = {pygame.K_1 + i: c for i, c in enumerate(CATASTROPHES)}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the genetic cellular automaton.")
    parser.add_argument("--width", type=int, default=config.GRID_W)
    parser.add_argument("--height", type=int, default=config.GRID_H)
    parser.add_argument("--density", type=float, default=config.INITIAL_DENSITY)
    parser.add_argument("--preset", choices=preset_ids(), default="random")
    parser.add_argument("--habitats", choices=HABITAT_STYLES, default="zones")
    parser.add_argument("--speed", type=float, default=config.TICK_RATE, help="generations per second")
    parser.add_argument("--cell-size", type=int, default=config.CELL_SIZE)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def save_snapshot(screen: pygame.Surface, world: World) -> str:
    os.makedirs(config.SNAPSHOT_DIR, exist_ok=True)
    path = os.path.join(config.SNAPSHOT_DIR, f"gen_{world.generation:06d}_{int(time.time())}.png")
    pygame.image.save(screen, path)
    return path


def log_new_events(event_log: EventLog, world: World) -> None:
    for event in event_log.observe(world.stats, world.catastrophe_history):
        logger.info("[gen %d] %s", event.generation, event.message)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    rng = random.Random(args.seed)
    world = World.create(
        args.width,
        args.height,
        initial_density=args.density,
        tick_rate=args.speed,
        habitat_style=args.habitats,
        rng=rng,
    )

    presets = preset_ids()
    preset_idx = presets.index(args.preset)
    world.initialize(presets[preset_idx])

    cell = args.cell_size
    grid_w = world.width * cell
    grid_h = world.height * cell

    pygame.init()
    try:
        screen = pygame.display.set_mode((grid_w + config.HUD_WIDTH, max(grid_h, 560)))
        pygame.display.set_caption("Genetic Automaton")
        clock = pygame.time.Clock()

        habitat_layer = build_habitat_layer(world, cell)
        show_habitats = True
        show_grid = False
        event_log = EventLog()
        log_new_events(event_log, world)

        speed = world.config.tick_rate
        running = False
        tick_accum = 0.0
        alive = True

        while alive:
            dt = clock.tick(config.FPS) / 1000.0

            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    alive = False
                elif e.type == pygame.KEYDOWN:
                    if e.key == pygame.K_SPACE:
                        running = not running
                    elif e.key == pygame.K_n:
                        world.tick()
                        log_new_events(event_log, world)
                    elif e.key == pygame.K_r:
                        event_log.reset()
                        world.initialize(presets[preset_idx])
                        log_new_events(event_log, world)
                    elif e.key == pygame.K_c:
                        running = False
                        world.clear()
                        event_log.reset()
                    elif e.key == pygame.K_p:
                        preset_idx = (preset_idx + 1) % len(presets)
                        event_log.reset()
                        world.initialize(presets[preset_idx])
                        log_new_events(event_log, world)
                    elif e.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                        speed = min(config.MAX_TICK_RATE, speed + 1)
                    elif e.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                        speed = max(1.0, speed - 1)
                    elif e.key == pygame.K_h:
                        show_habitats = not show_habitats
                    elif e.key == pygame.K_g:
                        show_grid = not show_grid
                    elif e.key == pygame.K_s:
                        logger.info("Snapshot saved to %s", save_snapshot(screen, world))
                    elif e.key in CATASTROPHE_KEYS:
                        world.trigger_catastrophe(CATASTROPHE_KEYS[e.key])
                        log_new_events(event_log, world)
                elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    mx, my = e.pos
                    if mx < grid_w and my < grid_h:
                        x, y = mx // cell, my // cell
                        current = world.get_cell(x, y)
                        if current is not None:
                            world.set_cell(x, y, not current.alive)

            if running:
                # catch-up capped at 4 ticks per frame
                tick_accum = min(tick_accum + dt * speed, 4.0)
                while tick_accum >= 1.0:
                    tick_accum -= 1.0
                    world.tick()
                    log_new_events(event_log, world)

            screen.fill(colors.PANEL)
            draw_world(screen, world, cell, habitat_layer if show_habitats else None, show_grid)
            y = draw_hud(screen, world, grid_w, running, speed, presets[preset_idx])
            y = draw_habitat_legend(screen, world, grid_w, y)
            draw_event_log(screen, event_log.events, grid_w, y)

            pygame.display.flip()
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
