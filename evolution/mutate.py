"""
nimbus_automata module: evolution/mutate.py

Mutation operator for cell genomes.

At most one gene changes per call. The habitat scales the chance through
``mutation_multiplier``.
"""

from __future__ import annotations
import random

from organism.genome import (
    BIRTH_RANGE,
    ENERGY_RANGE,
    MUTATION_RATE_RANGE,
    SURVIVAL_RANGE,
    UNIT_RANGE,
    Genome,
    clamp,
    clamp_color,
    round_half_up,
)

GENE_COUNT = 8
DRAMATIC_COLOR_CHANCE = 0.3


def _mutate_color(color, rng):
    channels = list(color)
    if rng.random() < DRAMATIC_COLOR_CHANCE:
        # re-saturate toward one channel
        dominant = rng.randrange(3)
        channels[dominant] = channels[dominant] + round_half_up(rng.uniform(50.0, 100.0))
        for i in range(3):
            if i != dominant:
                channels[i] -= 30
    else:
        idx = rng.randrange(3)
        channels[idx] = channels[idx] + round_half_up(rng.uniform(-30.0, 30.0))
    return clamp_color(channels)


def mutate(genome: Genome, mutation_multiplier: float = 1.0, rng=None) -> Genome:
    """
    Return a mutated clone of ``genome``.

    With probability ``min(1, mutation_rate * mutation_multiplier)`` one of the
    eight genes is picked uniformly and nudged:
      - survival_min / survival_max / birth_count: integer step in [-1, +1]
      - mutation_rate: +-0.05
      - color: 30% dramatic re-saturation, 70% +-30 on one channel
      - energy: integer step in [-20, +20]
      - aggressiveness / resilience: +-0.1
    """
    rng = rng or random
    mutated = genome.clone()

    chance = min(1.0, genome.mutation_rate * mutation_multiplier)
    if rng.random() >= chance:
        return mutated

    gene = rng.randrange(GENE_COUNT)
    if gene == 0:
        mutated.survival_min = clamp(mutated.survival_min + rng.randint(-1, 1), *SURVIVAL_RANGE)
    elif gene == 1:
        mutated.survival_max = clamp(mutated.survival_max + rng.randint(-1, 1), *SURVIVAL_RANGE)
    elif gene == 2:
        mutated.birth_count = clamp(mutated.birth_count + rng.randint(-1, 1), *BIRTH_RANGE)
    elif gene == 3:
        mutated.mutation_rate = clamp(mutated.mutation_rate + rng.uniform(-0.05, 0.05), *MUTATION_RATE_RANGE)
    elif gene == 4:
        mutated.color = _mutate_color(mutated.color, rng)
    elif gene == 5:
        mutated.energy = clamp(mutated.energy + rng.randint(-20, 20), *ENERGY_RANGE)
    elif gene == 6:
        mutated.aggressiveness = clamp(mutated.aggressiveness + rng.uniform(-0.1, 0.1), *UNIT_RANGE)
    else:
        mutated.resilience = clamp(mutated.resilience + rng.uniform(-0.1, 0.1), *UNIT_RANGE)

    return mutated


def clamp_genome(genome: Genome) -> Genome:
    """Force every gene back into its declared range (in place)."""
    genome.survival_min = clamp(int(genome.survival_min), *SURVIVAL_RANGE)
    genome.survival_max = clamp(int(genome.survival_max), *SURVIVAL_RANGE)
    genome.birth_count = clamp(int(genome.birth_count), *BIRTH_RANGE)
    genome.mutation_rate = clamp(genome.mutation_rate, *MUTATION_RATE_RANGE)
    genome.color = clamp_color(genome.color)
    genome.energy = clamp(int(genome.energy), *ENERGY_RANGE)
    genome.aggressiveness = clamp(genome.aggressiveness, *UNIT_RANGE)
    genome.resilience = clamp(genome.resilience, *UNIT_RANGE)
    return genome
