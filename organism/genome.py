"""
nimbus_automata module: organism/genome.py

Per-cell heritable rules.

Design goals:
- Every cell owns its own Genome (copied on inheritance, never shared)
- Survival/birth thresholds replace the fixed global Life rules
- Color is heritable and acts as the "species" identity
- Every numeric gene has a clamp range that mutation/crossover respect
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Tuple
import math
import random

Color = Tuple[int, int, int]

# (min, max) clamp ranges
SURVIVAL_RANGE = (0, 8)
BIRTH_RANGE = (1, 8)
MUTATION_RATE_RANGE = (0.0, 1.0)
ENERGY_RANGE = (10, 500)
UNIT_RANGE = (0.0, 1.0)
CHANNEL_RANGE = (0, 255)

DEFAULT_COLOR: Color = (0, 255, 128)


def clamp(value, lo, hi):
    return max(lo, min(hi, value))


def clamp_color(color) -> Color:
    return tuple(int(clamp(c, *CHANNEL_RANGE)) for c in color)  # type: ignore[return-value]


def round_half_up(value: float) -> int:
    # halves go up (2.5 -> 3, -2.5 -> -2), unlike round()
    return math.floor(value + 0.5)


@dataclass
class Genome:
    """
    survival_min / survival_max:
      - inclusive alive-neighbor range the cell survives in
    birth_count:
      - neighbor count a dead cell needs to be born (averaged over parents)
    mutation_rate:
      - probability that one gene mutates per reproduction
    energy:
      - maximum/starting energy reserve
    aggressiveness:
      - share of neighbor energy a cell feeds on per tick
    resilience:
      - scales the chance of escaping death
    """
    survival_min: int = 2
    survival_max: int = 3
    birth_count: int = 3
    mutation_rate: float = 0.05
    color: Color = DEFAULT_COLOR
    energy: int = 100
    aggressiveness: float = 0.0
    resilience: float = 0.5

    def clone(self) -> "Genome":
        # color is a tuple, a shallow copy is a full copy
        return replace(self)

    @property
    def survival_span(self) -> int:
        return self.survival_max - self.survival_min + 1


def create_saturated_color(rng=None, strong=(180, 254), weak=(0, 119)) -> Color:
    """
    One random channel boosted into ``strong``, the other two kept in ``weak``.
    Biases toward vivid, separable species colors.
    """
    rng = rng or random
    dominant = rng.randrange(3)
    return tuple(
        rng.randint(*strong) if i == dominant else rng.randint(*weak)
        for i in range(3)
    )  # type: ignore[return-value]


def create_random_genome(rng=None) -> Genome:
    rng = rng or random
    return Genome(
        survival_min=rng.randint(1, 3),
        survival_max=rng.randint(2, 5),
        birth_count=rng.randint(2, 5),
        mutation_rate=rng.uniform(0.0, 0.2),
        color=create_saturated_color(rng),
        energy=rng.randint(50, 149),
        aggressiveness=rng.uniform(0.0, 0.3),
        resilience=rng.uniform(0.3, 0.7),
    )


def create_default_genome() -> Genome:
    """Classic Life parameters; also the placeholder genome of dead cells."""
    return Genome()


def color_distance(a: Color, b: Color) -> int:
    """Manhattan distance in RGB space."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) + abs(a[2] - b[2])


def color_similarity(a: Color, b: Color) -> float:
    """1.0 for identical colors, 0.0 for opposite corners of the RGB cube."""
    return 1.0 - color_distance(a, b) / (255 * 3)


def is_color_similar(color: Color, reference: Color, threshold: int) -> bool:
    return color_distance(color, reference) < threshold


def fitness(genome: Genome) -> float:
    # display-only score, the transition never reads it
    energy_score = genome.energy / 100
    return (genome.survival_span * 10 + energy_score * 50 + genome.resilience * 40) / 100
