"""
nimbus_automata module: world/catastrophe.py

Catastrophes knock back the dominant lineage.

Each operator mutates the grid in place and returns how many cells it hit.
Only cells whose color is within CATASTROPHE_SIMILARITY of the dominant
color are touched, except the meteor, which hits everything in its crater.
"""

from __future__ import annotations
from dataclasses import dataclass
import random
from typing import Callable, Dict, List

import config
from evolution.mutate import clamp_genome
from organism.genome import Color, is_color_similar
from world.grid import Grid, grid_size, toroidal_distance

ApplyFn = Callable[[Grid, Color, object], int]


@dataclass(frozen=True)
class Catastrophe:
    id: str
    name: str
    description: str
    apply: ApplyFn

    def __call__(self, grid: Grid, dominant_color: Color, rng=None) -> int:
        return self.apply(grid, dominant_color, rng or random)


def _matching(grid: Grid, dominant_color: Color):
    for row in grid:
        for cell in row:
            if cell.alive and is_color_similar(cell.genome.color, dominant_color, config.CATASTROPHE_SIMILARITY):
                yield cell


def _plague(grid: Grid, dominant_color: Color, rng) -> int:
    affected = 0
    for cell in _matching(grid, dominant_color):
        if rng.random() < 0.4:
            cell.kill()
            affected += 1
    return affected


def _meteor(grid: Grid, dominant_color: Color, rng) -> int:
    width, height = grid_size(grid)
    if width == 0:
        return 0
    cx = rng.randrange(width)
    cy = rng.randrange(height)
    radius = rng.randint(15, 25)

    affected = 0
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell.alive and toroidal_distance(x, y, cx, cy, width, height) < radius:
                cell.kill()
                affected += 1
    return affected


def _drought(grid: Grid, dominant_color: Color, rng) -> int:
    affected = 0
    for cell in _matching(grid, dominant_color):
        cell.current_energy = int(cell.current_energy * 0.4)
        if cell.current_energy <= 0:
            cell.kill()
        affected += 1
    return affected


def _infertility(grid: Grid, dominant_color: Color, rng) -> int:
    affected = 0
    for cell in _matching(grid, dominant_color):
        cell.genome.birth_count = min(8, cell.genome.birth_count + 2)
        cell.genome.survival_min = max(1, cell.genome.survival_min - 1)
        clamp_genome(cell.genome)
        affected += 1
    return affected


def _mutation_burst(grid: Grid, dominant_color: Color, rng) -> int:
    affected = 0
    for cell in _matching(grid, dominant_color):
        cell.genome.mutation_rate = min(1.0, cell.genome.mutation_rate + 0.3)
        cell.genome.color = (rng.randrange(256), rng.randrange(256), rng.randrange(256))
        affected += 1
    return affected


def _ice_age(grid: Grid, dominant_color: Color, rng) -> int:
    affected = 0
    for cell in _matching(grid, dominant_color):
        if cell.genome.resilience < 0.5 or cell.current_energy < 30:
            cell.kill()
            affected += 1
    return affected


CATASTROPHES: List[Catastrophe] = [
    Catastrophe("plague", "Plague", "A disease strikes the dominant color (40% die)", _plague),
    Catastrophe("meteor", "Meteor", "Devastating impact on a random zone", _meteor),
    Catastrophe("drought", "Drought", "Scarcity drains 60% of the dominant color's energy", _drought),
    Catastrophe("infertility", "Infertility", "The dominant color loses reproductive ability", _infertility),
    Catastrophe("mutation_burst", "Radiation", "Extreme mutations in the dominant color", _mutation_burst),
    Catastrophe("ice_age", "Ice Age", "Extreme cold kills the weakest", _ice_age),
]

_BY_ID: Dict[str, Catastrophe] = {c.id: c for c in CATASTROPHES}


def get_catastrophe(catastrophe_id: str) -> Catastrophe:
    try:
        return _BY_ID[catastrophe_id]
    except KeyError:
        raise KeyError(f"unknown catastrophe: {catastrophe_id!r}") from None


def select_catastrophe(rng=None) -> Catastrophe:
    rng = rng or random
    return rng.choice(CATASTROPHES)
