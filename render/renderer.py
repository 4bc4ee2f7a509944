"""
nimbus_automata module: render/renderer.py

Pygame rendering of the cell grid, HUD and event log.
"""

from __future__ import annotations
from typing import List, Optional

import pygame

from render import colors
from world.events import LogEvent
from world.habitat import HABITATS, habitat_counts
from world.world import CatastropheEvent, World


def build_habitat_layer(world: World, cell_size: int) -> pygame.Surface:
    """Pre-rendered biome background; the habitat map never changes for a size."""
    surf = pygame.Surface((world.width * cell_size, world.height * cell_size))
    for y, row in enumerate(world.habitat_map):
        for x, hid in enumerate(row):
            surf.fill(colors.HABITAT_BG[hid], (x * cell_size, y * cell_size, cell_size, cell_size))
    return surf


def draw_world(
    screen: pygame.Surface,
    world: World,
    cell_size: int,
    habitat_layer: Optional[pygame.Surface] = None,
    show_grid: bool = False,
) -> None:
    if habitat_layer is not None:
        screen.blit(habitat_layer, (0, 0))
    else:
        screen.fill(colors.BG, (0, 0, world.width * cell_size, world.height * cell_size))

    gap = 1 if cell_size > 3 else 0
    for y, row in enumerate(world.get_grid()):
        for x, cell in enumerate(row):
            if not cell.alive:
                continue
            # fade with remaining energy, never below 30%
            max_energy = max(1.0, float(cell.genome.energy))
            alpha = max(0.3, min(1.0, cell.current_energy / max_energy))
            r, g, b = cell.genome.color
            col = (int(r * alpha), int(g * alpha), int(b * alpha))
            screen.fill(col, (x * cell_size, y * cell_size, cell_size - gap, cell_size - gap))

    if show_grid and cell_size > 3:
        w = world.width * cell_size
        h = world.height * cell_size
        for x in range(world.width + 1):
            pygame.draw.line(screen, colors.GRID_LINE, (x * cell_size, 0), (x * cell_size, h))
        for y in range(world.height + 1):
            pygame.draw.line(screen, colors.GRID_LINE, (0, y * cell_size), (w, y * cell_size))


def draw_hud(
    screen: pygame.Surface,
    world: World,
    x0: int,
    running: bool,
    speed: float,
    preset_id: str,
) -> int:
    font = pygame.font.Font(None, 24)
    stats = world.stats
    last: Optional[CatastropheEvent] = world.last_catastrophe

    lines = [
        f"Generation: {stats.generation}",
        f"Population: {stats.population}",
        f"Births: {stats.births}  Deaths: {stats.deaths}",
        f"Avg energy: {stats.avg_energy:.1f}",
        f"Avg mutation: {stats.avg_mutation_rate * 100:.1f}%",
        f"Avg fitness: {stats.avg_fitness:.2f}",
        f"Dominance streak: {world.dominance_streak}",
        f"Speed: {speed:.0f} gen/s  {'running' if running else 'paused'}",
        f"Preset: {preset_id}",
    ]
    if last is not None:
        lines.append(f"Last: {last.name} (gen {last.generation}, {last.affected})")

    y = 10
    for line in lines:
        txt = font.render(line, True, colors.TEXT)
        screen.blit(txt, (x0 + 12, y))
        y += 22

    # dominant color swatch
    label = font.render("Dominant:", True, colors.TEXT)
    screen.blit(label, (x0 + 12, y))
    pygame.draw.rect(screen, stats.dominant_color, (x0 + 110, y, 40, 16))
    return y + 28


def draw_habitat_legend(screen: pygame.Surface, world: World, x0: int, y0: int) -> int:
    font = pygame.font.Font(None, 20)
    counts = habitat_counts(world.habitat_map)
    total = max(1, world.width * world.height)
    y = y0
    for hid, habitat in HABITATS.items():
        if counts[hid] == 0:
            continue
        pygame.draw.rect(screen, colors.HABITAT_BG[hid], (x0 + 12, y + 2, 12, 12))
        pygame.draw.rect(screen, colors.TEXT_DIM, (x0 + 12, y + 2, 12, 12), 1)
        txt = font.render(f"{habitat.name} {counts[hid] * 100 / total:.0f}%", True, colors.TEXT_DIM)
        screen.blit(txt, (x0 + 30, y))
        y += 18
    return y + 8


def draw_event_log(screen: pygame.Surface, events: List[LogEvent], x0: int, y0: int, max_lines: int = 12) -> None:
    font = pygame.font.Font(None, 20)
    y = y0
    for event in events[:max_lines]:
        col = colors.EVENT_KIND.get(event.kind, colors.TEXT_DIM)
        txt = font.render(f"[{event.generation}] {event.message}", True, col)
        screen.blit(txt, (x0 + 12, y))
        y += 18
