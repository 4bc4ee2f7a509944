"""
nimbus_automata module: world/events.py

Turns stat deltas between two ticks into human-readable log lines.
Purely observational: nothing here feeds back into the simulation.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

import config
from organism.genome import color_distance
from world.stats import WorldStats

BOOM_BIRTHS = 50
MASS_DEATHS = 50
COLOR_SHIFT = 30
COLOR_SHIFT_MIN_GENERATION = 10
MUTATION_SHIFT = 0.02
MILESTONE_EVERY = 100


@dataclass
class LogEvent:
    generation: int
    message: str
    kind: str  # boom | extinction | birth | mutation | info | catastrophe


def detect_events(prev: WorldStats, stats: WorldStats) -> List[LogEvent]:
    gen = stats.generation
    out: List[LogEvent] = []

    if stats.births > BOOM_BIRTHS:
        out.append(LogEvent(gen, f"Baby boom! {stats.births} births", "boom"))
    if stats.deaths > MASS_DEATHS:
        out.append(LogEvent(gen, f"Mass die-off: {stats.deaths} deaths", "extinction"))

    if stats.population > 0 and prev.population == 0:
        out.append(LogEvent(gen, "Life emerges!", "birth"))
    if stats.population == 0 and prev.population > 0:
        out.append(LogEvent(gen, "Total extinction", "extinction"))

    if color_distance(stats.dominant_color, prev.dominant_color) > COLOR_SHIFT and gen > COLOR_SHIFT_MIN_GENERATION:
        r, g, b = stats.dominant_color
        out.append(LogEvent(gen, f"Color shift: rgb({r}, {g}, {b})", "mutation"))

    if abs(stats.avg_mutation_rate - prev.avg_mutation_rate) > MUTATION_SHIFT:
        direction = "up" if stats.avg_mutation_rate > prev.avg_mutation_rate else "down"
        out.append(LogEvent(gen, f"Mutation rate {direction}: {stats.avg_mutation_rate * 100:.1f}%", "mutation"))

    if gen > 0 and gen % MILESTONE_EVERY == 0:
        out.append(LogEvent(gen, f"Generation {gen} reached", "info"))

    return out


class EventLog:
    """Newest-first ring of LogEvents."""

    def __init__(self, max_events: int = config.EVENT_LOG_SIZE):
        self.max_events = max_events
        self.events: List[LogEvent] = []
        self._prev: Optional[WorldStats] = None
        self._last_catastrophe = None

    def _push(self, new: List[LogEvent]) -> None:
        if new:
            self.events = (new + self.events)[: self.max_events]

    def _unseen_from(self, history) -> int:
        """
        Index of the first history entry not yet logged. Entries are matched
        by identity, so a history that was cleared and refilled is logged
        from the start.
        """
        for i in range(len(history) - 1, -1, -1):
            if history[i] is self._last_catastrophe:
                return i + 1
        return 0

    def observe(self, stats: WorldStats, history=None) -> List[LogEvent]:
        """
        Feed the latest stats (and optionally the world's catastrophe history);
        returns the events added by this call.
        """
        new: List[LogEvent] = []
        if self._prev is not None:
            new.extend(detect_events(self._prev, stats))
        self._prev = stats.copy()

        if history is not None:
            for event in history[self._unseen_from(history):]:
                how = "triggered" if event.manual else "struck"
                new.append(LogEvent(
                    event.generation,
                    f"{event.name} {how}: {event.affected} cells affected",
                    "catastrophe",
                ))
            self._last_catastrophe = history[-1] if history else None

        self._push(new)
        return new

    def reset(self) -> None:
        self.events = []
        self._prev = None
        self._last_catastrophe = None
