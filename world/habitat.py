"""
nimbus_automata module: world/habitat.py

Static biome layer:
- Computed once per world size, never random (same size -> same map)
- "zones": circular oasis in the middle, four fixed quadrant biomes around it
- "gradient": horizontal bands from frozen (top) to volcanic (bottom)
- "uniform": temperate everywhere, i.e. unmodified rules
- Each biome carries the modifiers the transition applies per cell
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Dict, List

import config


@dataclass(frozen=True)
class Habitat:
    id: str
    name: str
    description: str
    energy_multiplier: float = 1.0    # scales starting/max energy
    mutation_multiplier: float = 1.0  # scales effective mutation rate
    survival_modifier: int = 0        # added to both survival bounds
    birth_modifier: int = 0           # added to the averaged birth target


HABITATS: Dict[str, Habitat] = {
    "temperate": Habitat("temperate", "Temperate", "Balanced conditions, standard rules"),
    "oasis": Habitat("oasis", "Oasis", "Abundant energy, low mutation",
                     energy_multiplier=1.5, mutation_multiplier=0.5),
    "desert": Habitat("desert", "Desert", "Little energy, strong selection pressure",
                      energy_multiplier=0.6, mutation_multiplier=1.2, survival_modifier=-1),
    "radioactive": Habitat("radioactive", "Radioactive", "Extreme mutation, moderate energy",
                           energy_multiplier=0.8, mutation_multiplier=3.0),
    "volcanic": Habitat("volcanic", "Volcanic", "High energy but unstable",
                        energy_multiplier=1.8, mutation_multiplier=1.5,
                        survival_modifier=1, birth_modifier=1),
    "frozen": Habitat("frozen", "Frozen", "Slow metabolism, high resilience",
                      energy_multiplier=0.7, mutation_multiplier=0.3,
                      survival_modifier=-1, birth_modifier=-1),
}

DEFAULT_HABITAT = "temperate"
HABITAT_STYLES = ("zones", "gradient", "uniform")

# quadrant -> biome, keyed by (right half?, bottom half?)
QUADRANTS = {
    (False, False): "frozen",
    (True, False): "radioactive",
    (False, True): "volcanic",
    (True, True): "desert",
}

GRADIENT_ORDER = ["frozen", "temperate", "oasis", "desert", "volcanic"]

HabitatMap = List[List[str]]


def _zones(width: int, height: int) -> HabitatMap:
    cx = width / 2
    cy = height / 2
    radius = config.OASIS_RADIUS_FRACTION * min(width, height)
    out: HabitatMap = []
    for y in range(height):
        row: List[str] = []
        for x in range(width):
            if math.hypot(x - cx, y - cy) < radius:
                row.append("oasis")
            else:
                row.append(QUADRANTS[(x >= cx, y >= cy)])
        out.append(row)
    return out


def _gradient(width: int, height: int) -> HabitatMap:
    out: HabitatMap = []
    n = len(GRADIENT_ORDER)
    for y in range(height):
        idx = min(int(y / height * n), n - 1)
        out.append([GRADIENT_ORDER[idx]] * width)
    return out


def generate_habitat_map(width: int, height: int, style: str = "zones") -> HabitatMap:
    if style == "zones":
        return _zones(width, height)
    if style == "gradient":
        return _gradient(width, height)
    if style == "uniform":
        return [[DEFAULT_HABITAT] * width for _ in range(height)]
    raise ValueError(f"unknown habitat style: {style!r}")


def get_habitat_at(habitat_map: HabitatMap, x: int, y: int) -> Habitat:
    """O(1) lookup; anything outside the map is temperate."""
    if 0 <= y < len(habitat_map) and 0 <= x < len(habitat_map[y]):
        return HABITATS[habitat_map[y][x]]
    return HABITATS[DEFAULT_HABITAT]


def habitat_counts(habitat_map: HabitatMap) -> Dict[str, int]:
    counts = {hid: 0 for hid in HABITATS}
    for row in habitat_map:
        for hid in row:
            counts[hid] += 1
    return counts
