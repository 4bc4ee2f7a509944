"""
nimbus_automata module: world/world.py

World state container + simulation controller.

WorldState holds everything that changes (grid, counters, streak, history);
World owns exactly one WorldState and is the only thing that mutates it.
Callers serialize tick() calls; each tick builds the next grid privately,
then swaps it in before stats and catastrophe bookkeeping run.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
import logging
import random
from typing import List, Optional, Union

import config
from organism.cell import Cell
from organism.genome import Color, Genome, clamp_color, color_distance, create_random_genome
from world.catastrophe import Catastrophe, get_catastrophe, select_catastrophe
from world.grid import Grid, create_empty_grid, in_bounds, toroidal_distance
from world.habitat import HABITAT_STYLES, Habitat, HabitatMap, generate_habitat_map, get_habitat_at
from world.presets import Preset, PresetCell, get_preset
from world.rules import next_generation
from world.stats import WorldStats, compute_stats

logger = logging.getLogger(__name__)


@dataclass
class WorldConfig:
    width: int = 100
    height: int = 100
    initial_density: float = 0.3
    tick_rate: float = config.TICK_RATE  # generations per second, read by the driver
    habitat_style: str = "zones"

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if not 0.0 <= self.initial_density <= 1.0:
            raise ValueError(f"initial_density must be in [0, 1], got {self.initial_density!r}")
        if self.tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {self.tick_rate!r}")
        if self.habitat_style not in HABITAT_STYLES:
            raise ValueError(f"unknown habitat style: {self.habitat_style!r}")


@dataclass
class CatastropheEvent:
    generation: int
    catastrophe: Catastrophe
    affected: int
    dominant_color: Color
    manual: bool = False

    @property
    def name(self) -> str:
        return self.catastrophe.name


@dataclass
class WorldState:
    config: WorldConfig
    grid: Grid
    habitat_map: HabitatMap
    generation: int = 0
    stats: WorldStats = field(default_factory=WorldStats)
    dominance_streak: int = 0
    last_dominant_color: Optional[Color] = None
    catastrophe_history: List[CatastropheEvent] = field(default_factory=list)
    last_catastrophe: Optional[CatastropheEvent] = None
    ready: bool = False

    @staticmethod
    def create(cfg: WorldConfig) -> "WorldState":
        return WorldState(
            config=cfg,
            grid=create_empty_grid(cfg.width, cfg.height),
            habitat_map=generate_habitat_map(cfg.width, cfg.height, cfg.habitat_style),
        )

    def reset_history(self) -> None:
        self.dominance_streak = 0
        self.last_dominant_color = None
        self.catastrophe_history = []
        self.last_catastrophe = None


def catastrophe_chance(streak: int) -> float:
    chance = config.CATASTROPHE_BASE_CHANCE + (streak // 100) * config.CATASTROPHE_CHANCE_STEP
    return min(config.CATASTROPHE_MAX_CHANCE, chance)


class World:
    def __init__(self, cfg: Optional[WorldConfig] = None, rng=None):
        self.rng = rng or random.Random()
        self.state = WorldState.create(cfg or WorldConfig())

    @staticmethod
    def create(
        width: int,
        height: int,
        initial_density: float = config.INITIAL_DENSITY,
        tick_rate: float = config.TICK_RATE,
        habitat_style: str = "zones",
        rng=None,
    ) -> "World":
        cfg = WorldConfig(
            width=width,
            height=height,
            initial_density=initial_density,
            tick_rate=tick_rate,
            habitat_style=habitat_style,
        )
        return World(cfg, rng=rng)

    # ---- read accessors -------------------------------------------------

    @property
    def config(self) -> WorldConfig:
        return self.state.config

    @property
    def width(self) -> int:
        return self.state.config.width

    @property
    def height(self) -> int:
        return self.state.config.height

    @property
    def generation(self) -> int:
        return self.state.generation

    @property
    def stats(self) -> WorldStats:
        return self.state.stats.copy()

    @property
    def dominance_streak(self) -> int:
        return self.state.dominance_streak

    @property
    def last_catastrophe(self) -> Optional[CatastropheEvent]:
        return self.state.last_catastrophe

    @property
    def catastrophe_history(self) -> List[CatastropheEvent]:
        return list(self.state.catastrophe_history)

    @property
    def habitat_map(self) -> HabitatMap:
        return self.state.habitat_map

    @property
    def ready(self) -> bool:
        return self.state.ready

    def habitat_at(self, x: int, y: int) -> Habitat:
        return get_habitat_at(self.state.habitat_map, x, y)

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        if not in_bounds(x, y, self.width, self.height):
            return None
        return self.state.grid[y][x]

    def get_grid(self) -> Grid:
        """Live reference, valid until the next tick()/set_cell()/clear()."""
        return self.state.grid

    # ---- commands -------------------------------------------------------

    def initialize(self, preset: Union[Preset, str, None] = None) -> WorldStats:
        """
        Fresh start. A preset that yields cells places exactly those cells;
        no preset (or the "random" sentinel) falls back to clustered seeding.
        """
        s = self.state
        s.generation = 0
        s.reset_history()

        if isinstance(preset, str):
            preset = get_preset(preset)

        cells: List[PresetCell] = []
        if preset is not None:
            cells = preset(self.width, self.height, s.config.initial_density, self.rng)

        if cells:
            s.grid = self._place_cells(cells)
            mode = preset.id
        else:
            s.grid = self._seed_clusters()
            mode = "clusters"

        s.stats = compute_stats(s.grid, s.generation)
        s.last_dominant_color = s.stats.dominant_color
        s.ready = True
        logger.info(
            "World %dx%d initialized (%s): population=%d",
            self.width, self.height, mode, s.stats.population,
        )
        return s.stats.copy()

    def tick(self) -> WorldStats:
        s = self.state
        result = next_generation(s.grid, s.habitat_map, s.generation, self.rng)

        # publish the finished grid before touching stats/catastrophe state
        s.grid = result.grid
        s.generation += 1
        s.stats = compute_stats(s.grid, s.generation, result.births, result.deaths, s.stats)

        self._check_catastrophe()
        return s.stats.copy()

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        if not in_bounds(x, y, self.width, self.height):
            return
        if alive:
            self.state.grid[y][x] = self._spawn(x, y, create_random_genome(self.rng))
        else:
            self.state.grid[y][x] = Cell.dead()

    def clear(self) -> None:
        s = self.state
        s.grid = create_empty_grid(self.width, self.height)
        s.generation = 0
        s.stats = WorldStats()
        s.reset_history()
        logger.info("World cleared")

    def resize(self, width: int, height: int) -> None:
        s = self.state
        s.config = replace(s.config, width=width, height=height)  # re-validates
        s.habitat_map = generate_habitat_map(width, height, s.config.habitat_style)
        self.clear()
        logger.info("World resized to %dx%d", width, height)

    def trigger_catastrophe(self, catastrophe: Union[Catastrophe, str]) -> CatastropheEvent:
        """Apply a catastrophe now, ignoring streak and probability gating."""
        if isinstance(catastrophe, str):
            catastrophe = get_catastrophe(catastrophe)
        return self._apply_catastrophe(catastrophe, manual=True)

    # ---- internals ------------------------------------------------------

    def _spawn(self, x: int, y: int, genome: Genome) -> Cell:
        habitat = self.habitat_at(x, y)
        return Cell.spawn(genome, self.state.generation, habitat.energy_multiplier)

    def _place_cells(self, cells: List[PresetCell]) -> Grid:
        grid = create_empty_grid(self.width, self.height)
        for pc in cells:
            if not in_bounds(pc.x, pc.y, self.width, self.height):
                continue
            grid[pc.y][pc.x] = self._spawn(pc.x, pc.y, pc.genome.clone())
        return grid

    def _seed_clusters(self) -> Grid:
        """
        Clustered random seeding: cells near a cluster center tend to inherit
        its genome (with a little color jitter), producing coherent species
        patches instead of salt-and-pepper noise.
        """
        rng = self.rng
        w, h = self.width, self.height
        density = self.state.config.initial_density

        n_clusters = rng.randint(*config.CLUSTER_COUNT_RANGE)
        centers = [
            (rng.randrange(w), rng.randrange(h), create_random_genome(rng))
            for _ in range(n_clusters)
        ]
        radius = rng.randint(*config.CLUSTER_RADIUS_RANGE)

        grid = create_empty_grid(w, h)
        for y in range(h):
            for x in range(w):
                if rng.random() >= density:
                    continue

                genome = None
                nearest = None
                nearest_dist = float("inf")
                for cx, cy, cg in centers:
                    d = toroidal_distance(x, y, cx, cy, w, h)
                    if d < nearest_dist:
                        nearest, nearest_dist = cg, d

                if nearest is not None and nearest_dist < radius:
                    affinity = (1 - nearest_dist / radius) ** 2 * config.CLUSTER_AFFINITY
                    if rng.random() < affinity:
                        genome = nearest.clone()
                        jitter = config.CLUSTER_COLOR_JITTER
                        genome.color = clamp_color(c + rng.randint(-jitter, jitter) for c in genome.color)

                if genome is None:
                    genome = create_random_genome(rng)
                grid[y][x] = self._spawn(x, y, genome)
        return grid

    def _check_catastrophe(self) -> None:
        s = self.state
        current = s.stats.dominant_color

        if s.last_dominant_color is not None and color_distance(current, s.last_dominant_color) < config.DOMINANCE_THRESHOLD:
            s.dominance_streak += 1
        else:
            if s.dominance_streak:
                logger.debug("Dominance streak reset at %d (generation %d)", s.dominance_streak, s.generation)
            s.dominance_streak = 0
            s.last_dominant_color = current

        if s.dominance_streak < config.DOMINANCE_STREAK_MIN:
            return
        if s.stats.population <= config.CATASTROPHE_MIN_POPULATION:
            return
        if self.rng.random() < catastrophe_chance(s.dominance_streak):
            self._apply_catastrophe(select_catastrophe(self.rng), manual=False)

    def _apply_catastrophe(self, catastrophe: Catastrophe, manual: bool) -> CatastropheEvent:
        s = self.state
        dominant = s.stats.dominant_color
        affected = catastrophe(s.grid, dominant, self.rng)

        event = CatastropheEvent(
            generation=s.generation,
            catastrophe=catastrophe,
            affected=affected,
            dominant_color=dominant,
            manual=manual,
        )
        s.catastrophe_history.append(event)
        s.last_catastrophe = event

        s.dominance_streak = 0
        s.stats = compute_stats(s.grid, s.generation, s.stats.births, s.stats.deaths, s.stats)
        s.last_dominant_color = s.stats.dominant_color

        logger.warning(
            "%s %s at generation %d: %d cells affected (dominant rgb%s)",
            "Manual" if manual else "Random", catastrophe.name, s.generation, affected, dominant,
        )
        return event
