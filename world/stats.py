"""
nimbus_automata module: world/stats.py

Per-tick aggregate statistics.

The dominant color is the mean color of the most populous quantized bucket
(COLOR_BUCKET per channel), not the global mean: two coexisting species
should not average out into a color neither of them has.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional, Tuple

import config
from organism.cell import Cell
from organism.genome import Color, fitness, round_half_up
from world.grid import Grid


@dataclass
class WorldStats:
    generation: int = 0
    population: int = 0
    births: int = 0
    deaths: int = 0
    avg_energy: float = 0.0
    avg_mutation_rate: float = 0.0
    avg_fitness: float = 0.0
    dominant_color: Color = config.EMPTY_DOMINANT_COLOR

    def copy(self) -> "WorldStats":
        return replace(self)


def dominant_color(cells: Iterable[Cell], bucket: int = config.COLOR_BUCKET) -> Optional[Color]:
    """
    Mean color of the largest bucket, or None when no cell is alive.
    Ties go to the bucket seen first.
    """
    counts: Dict[Tuple[int, int, int], int] = {}
    sums: Dict[Tuple[int, int, int], list] = {}

    for cell in cells:
        if not cell.alive:
            continue
        r, g, b = cell.genome.color
        key = (r // bucket, g // bucket, b // bucket)
        if key not in counts:
            counts[key] = 0
            sums[key] = [0, 0, 0]
        counts[key] += 1
        s = sums[key]
        s[0] += r
        s[1] += g
        s[2] += b

    best = None
    best_count = 0
    for key, n in counts.items():
        if n > best_count:
            best = key
            best_count = n

    if best is None:
        return None
    s = sums[best]
    return tuple(round_half_up(total / best_count) for total in s)  # type: ignore[return-value]


def compute_stats(
    grid: Grid,
    generation: int,
    births: int = 0,
    deaths: int = 0,
    previous: Optional[WorldStats] = None,
) -> WorldStats:
    """
    One pass over the grid. An empty population keeps the previous averages
    and dominant color instead of dividing by zero.
    """
    previous = previous or WorldStats()
    population = 0
    total_energy = 0.0
    total_mutation = 0.0
    total_fitness = 0.0
    alive = []

    for row in grid:
        for cell in row:
            if cell.alive:
                population += 1
                total_energy += cell.current_energy
                total_mutation += cell.genome.mutation_rate
                total_fitness += fitness(cell.genome)
                alive.append(cell)

    stats = WorldStats(
        generation=generation,
        population=population,
        births=births,
        deaths=deaths,
        avg_energy=previous.avg_energy,
        avg_mutation_rate=previous.avg_mutation_rate,
        avg_fitness=previous.avg_fitness,
        dominant_color=previous.dominant_color,
    )
    if population > 0:
        stats.avg_energy = total_energy / population
        stats.avg_mutation_rate = total_mutation / population
        stats.avg_fitness = total_fitness / population
        stats.dominant_color = dominant_color(alive) or previous.dominant_color
    return stats
