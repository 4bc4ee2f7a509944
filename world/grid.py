"""
nimbus_automata module: world/grid.py

Toroidal grid helpers. Grids are row-major: ``grid[y][x]``.
"""

from __future__ import annotations
import math
from typing import List

from organism.cell import Cell

Grid = List[List[Cell]]

NEIGHBOR_OFFSETS = [
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
]


def create_empty_grid(width: int, height: int) -> Grid:
    return [[Cell.dead() for _ in range(width)] for _ in range(height)]


def grid_size(grid: Grid) -> tuple[int, int]:
    height = len(grid)
    width = len(grid[0]) if height else 0
    return width, height


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


def neighbors(grid: Grid, x: int, y: int) -> List[Cell]:
    """The 8 wrap-around neighbors of (x, y)."""
    height = len(grid)
    width = len(grid[0])
    out: List[Cell] = []
    for dx, dy in NEIGHBOR_OFFSETS:
        out.append(grid[(y + dy) % height][(x + dx) % width])
    return out


def toroidal_offset(a: float, b: float, size: int) -> float:
    d = abs(a - b)
    return min(d, size - d)


def toroidal_distance(x1: float, y1: float, x2: float, y2: float, width: int, height: int) -> float:
    dx = toroidal_offset(x1, x2, width)
    dy = toroidal_offset(y1, y2, height)
    return math.sqrt(dx * dx + dy * dy)


def alive_cells(grid: Grid):
    for row in grid:
        for cell in row:
            if cell.alive:
                yield cell
