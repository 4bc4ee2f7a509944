"""
nimbus_automata module: evolution/selection.py

Selection helpers.
"""

from __future__ import annotations
import random
from typing import List, Sequence

from organism.cell import Cell


def pick_parents(neighbors: Sequence[Cell], k: int = 2, rng=None) -> List[Cell]:
    """Shuffle the alive neighbors and keep the first ``k``."""
    rng = rng or random
    pool = [c for c in neighbors if c.alive]
    rng.shuffle(pool)
    return pool[:k]
