from __future__ import annotations
import random
from dataclasses import replace

import pytest

from organism.cell import Cell
from organism.genome import create_default_genome
from world.grid import create_empty_grid
from world.presets import Preset, PresetCell


class ScriptedRandom(random.Random):
    """
    random() replays ``values`` and then keeps returning ``fallback``.
    Integer draws (randint/randrange/choice/shuffle) stay on the seeded
    Mersenne Twister because getrandbits is defined here.
    """

    def __init__(self, values=(), fallback=0.99, seed=0):
        super().__init__(seed)
        self.values = list(values)
        self.fallback = fallback

    def random(self):
        if self.values:
            return self.values.pop(0)
        return self.fallback

    def getrandbits(self, k):
        return super().getrandbits(k)


def fixed_preset(cells):
    cells = list(cells)
    return Preset("fixed", "Fixed", "cells supplied by the test", lambda w, h, d, rng: cells)


def classic_genome(**overrides):
    return replace(create_default_genome(), **overrides)


def grid_with(width, height, placements):
    """placements: iterable of (x, y, genome[, energy])."""
    grid = create_empty_grid(width, height)
    for item in placements:
        x, y, genome = item[:3]
        cell = Cell.spawn(genome.clone(), 0)
        if len(item) > 3:
            cell.current_energy = item[3]
        grid[y][x] = cell
    return grid


def alive_positions(world):
    return {
        (x, y)
        for y, row in enumerate(world.get_grid())
        for x, cell in enumerate(row)
        if cell.alive
    }


def block_cells(blocks_per_side, genome_for):
    """2x2 still-life blocks on a 3-cell pitch; the grid must be 3 * blocks_per_side wide."""
    cells = []
    for by in range(blocks_per_side):
        for bx in range(blocks_per_side):
            g = genome_for(bx, by)
            for dx, dy in ((0, 0), (1, 0), (0, 1), (1, 1)):
                cells.append(PresetCell(bx * 3 + dx, by * 3 + dy, g.clone()))
    return cells


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def scripted():
    return ScriptedRandom
