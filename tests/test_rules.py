import pytest

from conftest import ScriptedRandom, classic_genome, grid_with
from organism.cell import Cell
from world.grid import neighbors, toroidal_distance
from world.habitat import HABITATS
from world.rules import advance_alive, birth_eligible, next_generation

TEMPERATE = HABITATS["temperate"]


def _alive(genome=None, energy=None):
    cell = Cell.spawn(genome or classic_genome(), 0)
    if energy is not None:
        cell.current_energy = energy
    return cell


def test_neighbors_wrap_around():
    grid = grid_with(6, 5, [(5, 4, classic_genome())])
    assert sum(c.alive for c in neighbors(grid, 0, 0)) == 1
    grid = grid_with(6, 5, [(0, 0, classic_genome())])
    assert sum(c.alive for c in neighbors(grid, 5, 4)) == 1


def test_toroidal_distance():
    assert toroidal_distance(0, 0, 9, 0, 10, 10) == 1
    assert toroidal_distance(0, 0, 9, 9, 10, 10) == pytest.approx(2 ** 0.5)


def test_survival_range_is_per_genome():
    rng = ScriptedRandom(fallback=0.99)
    fits = _alive(classic_genome(survival_min=2, survival_max=3, energy=500, resilience=0.0))
    misses = _alive(classic_genome(survival_min=4, survival_max=5, energy=500, resilience=0.0))
    assert advance_alive(fits, 2, TEMPERATE, rng) is not None
    assert advance_alive(misses, 2, TEMPERATE, rng) is None


def test_habitat_shifts_survival_bounds():
    rng = ScriptedRandom(fallback=0.99)
    cell = _alive(classic_genome(resilience=0.0))
    # desert: [2, 3] -> [1, 2]
    assert advance_alive(cell, 1, HABITATS["desert"], rng) is not None
    assert advance_alive(cell, 3, HABITATS["desert"], rng) is None
    # volcanic: [2, 3] -> [3, 4]
    assert advance_alive(cell, 4, HABITATS["volcanic"], rng) is not None


def test_survivor_ages_and_pays_energy():
    cell = _alive(classic_genome(aggressiveness=0.0), energy=50)
    nxt = advance_alive(cell, 2, TEMPERATE, ScriptedRandom())
    assert nxt.age == 1
    assert nxt.current_energy == pytest.approx(49)
    assert cell.age == 0


def test_aggressive_cells_feed():
    cell = _alive(classic_genome(aggressiveness=0.5), energy=50)
    nxt = advance_alive(cell, 3, TEMPERATE, ScriptedRandom())
    assert nxt.current_energy == pytest.approx(50 - 1 + 0.5 * 3 * 0.5)


def test_feeding_is_capped_at_reserve():
    cell = _alive(classic_genome(aggressiveness=1.0, energy=100))
    nxt = advance_alive(cell, 3, TEMPERATE, ScriptedRandom())
    assert nxt.current_energy == pytest.approx(100)


def test_exhausted_cell_always_dies():
    cell = _alive(classic_genome(resilience=1.0), energy=0)
    assert advance_alive(cell, 2, TEMPERATE, ScriptedRandom(fallback=0.0)) is None


def test_resilience_escape():
    cell = _alive(classic_genome(resilience=1.0), energy=30)
    # 0.05 < 1.0 * 0.1
    nxt = advance_alive(cell, 0, TEMPERATE, ScriptedRandom([0.05]))
    assert nxt is not None
    assert nxt.current_energy == pytest.approx(28)
    assert nxt.age == 1
    assert advance_alive(cell, 0, TEMPERATE, ScriptedRandom([0.1])) is None


def test_literal_three_always_allows_birth():
    three = [_alive(classic_genome(birth_count=6)) for _ in range(3)]
    assert birth_eligible(three, TEMPERATE)


def test_birth_uses_rounded_mean():
    assert birth_eligible([_alive(classic_genome(birth_count=2)) for _ in range(2)], TEMPERATE)
    assert not birth_eligible([_alive(classic_genome(birth_count=5)) for _ in range(2)], TEMPERATE)
    assert not birth_eligible([], TEMPERATE)
    # 3.75 -> 4
    mixed = [_alive(classic_genome(birth_count=b)) for b in (3, 4, 4, 4)]
    assert birth_eligible(mixed, TEMPERATE)


def test_birth_mean_rounds_half_up():
    # 4.5 -> 5, so four neighbors are not enough
    mixed = [_alive(classic_genome(birth_count=b)) for b in (4, 4, 5, 5)]
    assert not birth_eligible(mixed, TEMPERATE)


def test_habitat_shifts_birth_target():
    two = [_alive(classic_genome(birth_count=3)) for _ in range(2)]
    assert birth_eligible(two, HABITATS["frozen"])
    assert not birth_eligible(two, TEMPERATE)


def test_next_generation_births_and_deaths():
    g = classic_genome(mutation_rate=0.0)
    # blinker: horizontal -> vertical
    grid = grid_with(5, 5, [(1, 2, g), (2, 2, g), (3, 2, g)])
    result = next_generation(grid, [["temperate"] * 5 for _ in range(5)], generation=7, rng=ScriptedRandom())
    alive = {(x, y) for y, row in enumerate(result.grid) for x, c in enumerate(row) if c.alive}
    assert alive == {(2, 1), (2, 2), (2, 3)}
    assert (result.births, result.deaths) == (2, 2)
    assert result.grid[1][2].generation == 7
    assert result.grid[1][2].age == 0
    assert result.grid[2][2].age == 1
    # source grid untouched
    assert grid[2][1].alive and not grid[1][2].alive


def test_newborn_energy_scaled_by_habitat():
    g = classic_genome(mutation_rate=0.0, energy=100)
    grid = grid_with(5, 5, [(1, 2, g), (2, 2, g), (3, 2, g)])
    habitat = [["oasis"] * 5 for _ in range(5)]
    result = next_generation(grid, habitat, generation=0, rng=ScriptedRandom())
    assert result.grid[1][2].current_energy == pytest.approx(150)


def test_newborn_genomes_are_not_shared():
    g = classic_genome(mutation_rate=0.0)
    grid = grid_with(5, 5, [(1, 2, g), (2, 2, g), (3, 2, g)])
    result = next_generation(grid, [["temperate"] * 5 for _ in range(5)], 0, ScriptedRandom())
    a = result.grid[1][2].genome
    b = result.grid[3][2].genome
    assert a is not b
    assert a is not grid[2][1].genome
