"""
nimbus_automata module: organism/cell.py

Grid cell: liveness + owned genome + per-cell bookkeeping.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from organism.genome import Genome, create_default_genome


@dataclass
class Cell:
    alive: bool = False
    genome: Genome = field(default_factory=create_default_genome)
    age: int = 0
    current_energy: float = 0.0
    generation: int = 0  # generation the cell was born in

    @staticmethod
    def dead() -> "Cell":
        return Cell()

    @staticmethod
    def spawn(genome: Genome, generation: int, energy_multiplier: float = 1.0) -> "Cell":
        """
        A newborn takes ownership of ``genome``; callers hand over a copy.
        """
        return Cell(
            alive=True,
            genome=genome,
            age=0,
            current_energy=genome.energy * energy_multiplier,
            generation=generation,
        )

    def kill(self) -> None:
        # back to a neutral placeholder, in place
        self.alive = False
        self.current_energy = 0.0
        self.age = 0
        self.genome = create_default_genome()
