"""
nimbus_automata module: evolution/reproduction.py

Sexual/asexual inheritance for newborn cells.

Color inheritance rolls once into one of four bands:
- [0.00, 0.30)  dominant: one parent's color wholesale
- [0.30, 0.50)  purify: saturated average, only when parents are similar (> 0.7)
- [0.30, 0.55)  speciate: a brand-new saturated color (also catches dissimilar purify rolls)
- [0.55, 1.00)  blend: weighted mix with a random bias in [0.3, 0.7]
"""

from __future__ import annotations
import math
import random
from typing import Sequence

from evolution.mutate import clamp_genome, mutate
from organism.genome import Color, Genome, color_similarity, create_saturated_color

DOMINANT_CHANCE = 0.3
PURIFY_UNTIL = 0.5
SPECIATE_UNTIL = 0.55
PURIFY_SIMILARITY = 0.7
PURIFY_SHIFT = 40


def purify_color(color: Color) -> Color:
    """Push the strongest channel up and the weakest down by PURIFY_SHIFT."""
    hi = max(color)
    lo = min(color)
    out = []
    for c in color:
        if c == hi:
            out.append(min(255, c + PURIFY_SHIFT))
        elif c == lo:
            out.append(max(0, c - PURIFY_SHIFT))
        else:
            out.append(c)
    return tuple(out)  # type: ignore[return-value]


def inherit_color(a: Color, b: Color, rng=None) -> Color:
    rng = rng or random
    similarity = color_similarity(a, b)
    roll = rng.random()

    if roll < DOMINANT_CHANCE:
        return tuple(a) if rng.random() > 0.5 else tuple(b)  # type: ignore[return-value]
    if roll < PURIFY_UNTIL and similarity > PURIFY_SIMILARITY:
        avg = tuple((a[i] + b[i]) // 2 for i in range(3))
        return purify_color(avg)  # type: ignore[arg-type]
    if roll < SPECIATE_UNTIL:
        return create_saturated_color(rng, strong=(200, 254), weak=(0, 99))

    bias = rng.uniform(0.3, 0.7)
    return tuple(math.floor(a[i] * bias + b[i] * (1 - bias)) for i in range(3))  # type: ignore[return-value]


def crossover(parent_a: Genome, parent_b: Genome, rng=None) -> Genome:
    """
    Child genome from two parents.

    Threshold genes are coin flips, rates/energy/traits are parent means.
    """
    rng = rng or random
    color = inherit_color(parent_a.color, parent_b.color, rng)

    child = Genome(
        survival_min=parent_a.survival_min if rng.random() > 0.5 else parent_b.survival_min,
        survival_max=parent_a.survival_max if rng.random() > 0.5 else parent_b.survival_max,
        birth_count=parent_a.birth_count if rng.random() > 0.5 else parent_b.birth_count,
        mutation_rate=(parent_a.mutation_rate + parent_b.mutation_rate) / 2,
        color=color,
        energy=(parent_a.energy + parent_b.energy) // 2,
        aggressiveness=(parent_a.aggressiveness + parent_b.aggressiveness) / 2,
        resilience=(parent_a.resilience + parent_b.resilience) / 2,
    )
    return clamp_genome(child)


def breed(parents: Sequence[Genome], mutation_multiplier: float = 1.0, rng=None) -> Genome:
    """
    Newborn genome: crossover of the first two parents, or a copy of a single
    parent, then one mutation pass.
    """
    if not parents:
        raise ValueError("breed() needs at least one parent")
    if len(parents) >= 2:
        base = crossover(parents[0], parents[1], rng)
    else:
        base = parents[0].clone()
    return mutate(base, mutation_multiplier, rng)
