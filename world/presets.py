"""
nimbus_automata module: world/presets.py

Initial color patterns.

Each generator returns the cells to place; every position inside the shape
is kept independently with probability ``density``. The "random" preset
returns nothing, which tells the World to fall back to clustered seeding.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
import random
from typing import Callable, Dict, List

from organism.genome import Color, Genome, create_random_genome


@dataclass
class PresetCell:
    x: int
    y: int
    genome: Genome


GenerateFn = Callable[[int, int, float, object], List[PresetCell]]


@dataclass(frozen=True)
class Preset:
    id: str
    name: str
    description: str
    generate: GenerateFn

    def __call__(self, width: int, height: int, density: float, rng=None) -> List[PresetCell]:
        return self.generate(width, height, density, rng or random)


PALETTE: List[Color] = [
    (255, 60, 60),    # red
    (60, 255, 60),    # green
    (60, 60, 255),    # blue
    (255, 255, 60),   # yellow
    (255, 60, 255),   # magenta
    (60, 255, 255),   # cyan
    (255, 160, 60),   # orange
    (160, 60, 255),   # purple
]


def genome_with_color(color: Color, rng) -> Genome:
    g = create_random_genome(rng)
    g.color = tuple(color)  # type: ignore[assignment]
    return g


def _sample(width: int, height: int, density: float, rng, pick) -> List[PresetCell]:
    """
    Walk the grid row-major; ``pick(x, y)`` returns a color or None (outside
    the shape).
    """
    cells: List[PresetCell] = []
    for y in range(height):
        for x in range(width):
            if rng.random() > density:
                continue
            color = pick(x, y)
            if color is not None:
                cells.append(PresetCell(x, y, genome_with_color(color, rng)))
    return cells


def _random(width, height, density, rng) -> List[PresetCell]:
    return []


def _cross(width, height, density, rng):
    cx, cy = width / 2, height / 2
    arm_width = height / 6
    arm_length = min(width, height) * 0.4

    def pick(x, y):
        dx, dy = x - cx, y - cy
        if dy < 0 and abs(dy) < arm_length and abs(dx) < arm_width:
            return PALETTE[0]
        if dy > 0 and abs(dy) < arm_length and abs(dx) < arm_width:
            return PALETTE[1]
        if dx < 0 and abs(dx) < arm_length and abs(dy) < arm_width:
            return PALETTE[2]
        if dx > 0 and abs(dx) < arm_length and abs(dy) < arm_width:
            return PALETTE[3]
        return None

    return _sample(width, height, density, rng, pick)


def _circles(width, height, density, rng):
    radius = min(width, height) / 8
    centers = [
        (width * 0.25, height * 0.3),
        (width * 0.75, height * 0.3),
        (width * 0.5, height * 0.5),
        (width * 0.25, height * 0.7),
        (width * 0.75, height * 0.7),
        (width * 0.5, height * 0.85),
    ]

    def pick(x, y):
        for i, (px, py) in enumerate(centers):
            if math.hypot(x - px, y - py) < radius:
                return PALETTE[i]
        return None

    return _sample(width, height, density, rng, pick)


def _ring(width, height, density, rng):
    cx, cy = width / 2, height / 2
    outer = min(width, height) * 0.4
    inner = outer * 0.5

    def pick(x, y):
        dx, dy = x - cx, y - cy
        if inner <= math.hypot(dx, dy) <= outer:
            # color by angle
            idx = int((math.atan2(dy, dx) + math.pi) / (2 * math.pi) * len(PALETTE))
            return PALETTE[idx % len(PALETTE)]
        return None

    return _sample(width, height, density, rng, pick)


def _triangles(width, height, density, rng):
    cx, cy = width / 2, height / 2
    size = min(width, height) * 0.35

    def pick(x, y):
        if y < cy and abs(x - cx) < (cy - y) * 0.8 and y > cy - size:
            return PALETTE[0]
        if y > cy and x < cx and (x - (cx - size * 0.8)) > (y - cy) * -0.8 and x > cx - size:
            return PALETTE[1]
        if y > cy and x > cx and ((cx + size * 0.8) - x) > (y - cy) * -0.8 and x < cx + size:
            return PALETTE[2]
        return None

    return _sample(width, height, density, rng, pick)


def _corners(width, height, density, rng):
    size = min(width, height) * 0.3

    def pick(x, y):
        if x < size and y < size:
            return PALETTE[0]
        if x > width - size and y < size:
            return PALETTE[1]
        if x < size and y > height - size:
            return PALETTE[2]
        if x > width - size and y > height - size:
            return PALETTE[3]
        return None

    return _sample(width, height, density, rng, pick)


def _stripes(width, height, density, rng):
    stripe = width / 5
    return _sample(width, height, density, rng,
                   lambda x, y: PALETTE[int(x / stripe) % len(PALETTE)])


def _checkerboard(width, height, density, rng):
    square = 15
    return _sample(width, height, density, rng,
                   lambda x, y: PALETTE[0] if (x // square + y // square) % 2 == 0 else PALETTE[2])


def _horizontal(width, height, density, rng):
    layer = height / 5
    return _sample(width, height, density, rng,
                   lambda x, y: PALETTE[int(y / layer) % len(PALETTE)])


def _vertical(width, height, density, rng):
    layer = width / 5
    return _sample(width, height, density, rng,
                   lambda x, y: PALETTE[int(x / layer) % len(PALETTE)])


def _diagonal(width, height, density, rng):
    stripe = 25
    return _sample(width, height, density, rng,
                   lambda x, y: PALETTE[((x + y) // stripe) % len(PALETTE)])


def _waves(width, height, density, rng):
    layer = height / 5
    amplitude = 10
    frequency = 0.05

    def pick(x, y):
        shifted = y - math.sin(x * frequency) * amplitude
        return PALETTE[abs(math.floor(shifted / layer)) % len(PALETTE)]

    return _sample(width, height, density, rng, pick)


def _gradient(width, height, density, rng):
    def pick(x, y):
        r = math.floor(x / width * 255)
        g = math.floor(y / height * 255)
        b = math.floor((width - x + height - y) / (width + height) * 255)
        return (r, g, b)

    return _sample(width, height, density, rng, pick)


def _bullseye(width, height, density, rng):
    cx, cy = width / 2, height / 2
    ring = min(width, height) / 10

    def pick(x, y):
        return PALETTE[int(math.hypot(x - cx, y - cy) / ring) % len(PALETTE)]

    return _sample(width, height, density, rng, pick)


PRESETS: List[Preset] = [
    Preset("random", "Random", "Random clusters (default)", _random),
    Preset("cross", "Cross", "Four colors in a cross", _cross),
    Preset("circles", "Circles", "Six circles of different colors", _circles),
    Preset("ring", "Ring", "One large ring, colored by angle", _ring),
    Preset("triangles", "Triangles", "Three facing colored triangles", _triangles),
    Preset("corners", "Corners", "Four colors in the corners", _corners),
    Preset("stripes", "Stripes", "Vertical color stripes", _stripes),
    Preset("checkerboard", "Checkerboard", "Two-color checkerboard", _checkerboard),
    Preset("horizontal", "Horizontal", "Horizontal color layers", _horizontal),
    Preset("vertical", "Vertical", "Vertical color layers", _vertical),
    Preset("diagonal", "Diagonal", "Diagonal color stripes", _diagonal),
    Preset("waves", "Waves", "Wavy horizontal layers", _waves),
    Preset("gradient", "Gradient", "Smooth positional color gradient", _gradient),
    Preset("bullseye", "Bullseye", "Concentric colored rings", _bullseye),
]

_BY_ID: Dict[str, Preset] = {p.id: p for p in PRESETS}


def get_preset(preset_id: str) -> Preset:
    try:
        return _BY_ID[preset_id]
    except KeyError:
        raise KeyError(f"unknown preset: {preset_id!r}") from None


def preset_ids() -> List[str]:
    return [p.id for p in PRESETS]
