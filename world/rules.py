"""
nimbus_automata module: world/rules.py

The per-generation transition.

- Reads only from the current grid and writes a fresh one (no in-place
  update, so a cell never sees an already-updated neighbor)
- Survival and birth thresholds come from each cell's own genome, shifted by
  the habitat under it
- A dead cell with exactly 3 alive neighbors is always eligible for birth,
  whatever the neighbors' birth_count genes say
"""

from __future__ import annotations
from dataclasses import dataclass, replace
import random
from typing import List, Optional

from evolution.reproduction import breed
from evolution.selection import pick_parents
from organism.cell import Cell
from organism.genome import round_half_up
from world.grid import Grid, grid_size, neighbors
from world.habitat import Habitat, HabitatMap, get_habitat_at

CLASSIC_BIRTH = 3
FEED_FACTOR = 0.5
RESILIENCE_FACTOR = 0.1
SURVIVAL_COST = 1.0
RESIST_COST = 2.0


@dataclass
class TickResult:
    grid: Grid
    births: int = 0
    deaths: int = 0


def survives(cell: Cell, alive_count: int, habitat: Habitat) -> bool:
    g = cell.genome
    lo = g.survival_min + habitat.survival_modifier
    hi = g.survival_max + habitat.survival_modifier
    return lo <= alive_count <= hi


def advance_alive(cell: Cell, alive_count: int, habitat: Habitat, rng) -> Optional[Cell]:
    """Next state of a live cell, or None if it dies."""
    if cell.current_energy <= 0:
        return None

    g = cell.genome
    if survives(cell, alive_count, habitat):
        # aggressive cells feed on their neighbors, capped at their reserve
        cap = g.energy * habitat.energy_multiplier
        energy = cell.current_energy - SURVIVAL_COST + g.aggressiveness * alive_count * FEED_FACTOR
        return replace(cell, age=cell.age + 1, current_energy=min(cap, energy))

    if rng.random() < g.resilience * RESILIENCE_FACTOR:
        return replace(cell, age=cell.age + 1, current_energy=cell.current_energy - RESIST_COST)

    return None


def birth_eligible(alive_neighbors: List[Cell], habitat: Habitat) -> bool:
    count = len(alive_neighbors)
    if count == 0:
        return False
    if count == CLASSIC_BIRTH:
        return True
    mean = sum(n.genome.birth_count for n in alive_neighbors) / count
    return count == round_half_up(mean) + habitat.birth_modifier


def spawn_child(alive_neighbors: List[Cell], habitat: Habitat, generation: int, rng) -> Cell:
    parents = pick_parents(alive_neighbors, k=2, rng=rng)
    genome = breed([p.genome for p in parents], habitat.mutation_multiplier, rng)
    return Cell.spawn(genome, generation, habitat.energy_multiplier)


def next_generation(grid: Grid, habitat_map: HabitatMap, generation: int, rng=None) -> TickResult:
    """
    Build the next grid from ``grid``. ``generation`` is stamped on newborns.
    """
    rng = rng or random
    width, height = grid_size(grid)
    result = TickResult(grid=[])

    for y in range(height):
        row: List[Cell] = []
        for x in range(width):
            cell = grid[y][x]
            alive_neighbors = [n for n in neighbors(grid, x, y) if n.alive]
            habitat = get_habitat_at(habitat_map, x, y)

            if cell.alive:
                nxt = advance_alive(cell, len(alive_neighbors), habitat, rng)
                if nxt is None:
                    result.deaths += 1
                    nxt = Cell.dead()
                row.append(nxt)
            elif birth_eligible(alive_neighbors, habitat):
                row.append(spawn_child(alive_neighbors, habitat, generation, rng))
                result.births += 1
            else:
                row.append(Cell.dead())
        result.grid.append(row)

    return result
