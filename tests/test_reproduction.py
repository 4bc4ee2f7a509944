import pytest

from conftest import ScriptedRandom, classic_genome
from evolution.reproduction import breed, crossover, inherit_color, purify_color
from evolution.selection import pick_parents
from organism.cell import Cell
from organism.genome import Genome, create_default_genome

SIMILAR_A = (200, 100, 50)
SIMILAR_B = (220, 120, 60)   # distance 50 -> similarity ~0.93
FAR_A = (255, 0, 0)
FAR_B = (0, 0, 255)          # similarity ~0.33


def _is_speciated(color):
    strong = [c for c in color if 200 <= c <= 254]
    weak = [c for c in color if 0 <= c <= 99]
    return len(strong) == 1 and len(weak) == 2


def test_purify_boosts_max_and_cuts_min():
    assert purify_color((100, 150, 200)) == (60, 150, 240)
    assert purify_color((250, 10, 100)) == (255, 0, 100)


def test_purify_equal_channels_all_count_as_max():
    assert purify_color((100, 100, 100)) == (140, 140, 140)


def test_dominant_takes_one_parent_wholesale():
    assert inherit_color(SIMILAR_A, SIMILAR_B, ScriptedRandom([0.1, 0.9])) == SIMILAR_A
    assert inherit_color(SIMILAR_A, SIMILAR_B, ScriptedRandom([0.1, 0.2])) == SIMILAR_B


def test_purify_branch_for_similar_parents():
    # average (210, 110, 55) -> purified
    assert inherit_color(SIMILAR_A, SIMILAR_B, ScriptedRandom([0.4])) == (250, 110, 15)


def test_dissimilar_parents_skip_purify():
    color = inherit_color(FAR_A, FAR_B, ScriptedRandom([0.4]))
    assert _is_speciated(color)


def test_speciate_branch():
    color = inherit_color(SIMILAR_A, SIMILAR_B, ScriptedRandom([0.52]))
    assert _is_speciated(color)


def test_blend_uses_random_bias():
    # uniform(0.3, 0.7) with 0.5 -> bias 0.5
    a = (200, 100, 51)
    b = (100, 0, 0)
    assert inherit_color(a, b, ScriptedRandom([0.8, 0.5])) == (150, 50, 25)


@pytest.mark.parametrize(
    "roll, expected",
    [
        (0.0, "dominant"),
        (0.29, "dominant"),
        (0.3, "purify"),
        (0.49, "purify"),
        (0.5, "speciate"),
        (0.549, "speciate"),
        (0.55, "blend"),
        (0.99, "blend"),
    ],
)
def test_color_bands_are_exclusive(roll, expected):
    color = inherit_color(SIMILAR_A, SIMILAR_B, ScriptedRandom([roll, 0.9, 0.5]))
    outcomes = {
        "dominant": color == SIMILAR_A,
        "purify": color == (250, 110, 15),
        "speciate": _is_speciated(color),
        # bias 0.3 + 0.4 * 0.9 = 0.66
        "blend": color == tuple(int(SIMILAR_A[i] * 0.66 + SIMILAR_B[i] * 0.34) for i in range(3)),
    }
    assert outcomes[expected]
    assert sum(outcomes.values()) == 1


def test_crossover_genes():
    a = Genome(survival_min=1, survival_max=4, birth_count=2, mutation_rate=0.1,
               color=SIMILAR_A, energy=101, aggressiveness=0.2, resilience=0.4)
    b = Genome(survival_min=3, survival_max=6, birth_count=5, mutation_rate=0.3,
               color=SIMILAR_B, energy=50, aggressiveness=0.0, resilience=0.8)
    # color: dominant -> a; then coin flips a, b, a
    child = crossover(a, b, ScriptedRandom([0.1, 0.9, 0.9, 0.1, 0.9]))
    assert child.color == SIMILAR_A
    assert (child.survival_min, child.survival_max, child.birth_count) == (1, 6, 2)
    assert child.mutation_rate == pytest.approx(0.2)
    assert child.energy == 75
    assert child.aggressiveness == pytest.approx(0.1)
    assert child.resilience == pytest.approx(0.6)


def test_crossover_does_not_touch_parents(rng):
    a = classic_genome(color=FAR_A)
    b = classic_genome(color=FAR_B)
    for _ in range(200):
        crossover(a, b, rng)
    assert a.color == FAR_A
    assert b.color == FAR_B


def test_breed_single_parent_copies():
    parent = classic_genome(mutation_rate=0.0, color=(10, 20, 30))
    child = breed([parent])
    assert child == parent
    assert child is not parent


def test_breed_needs_a_parent():
    with pytest.raises(ValueError):
        breed([])


def test_pick_parents_takes_two_alive(rng):
    alive = [Cell.spawn(classic_genome(energy=10 + i), 0) for i in range(5)]
    pool = alive + [Cell.dead(), Cell.dead()]
    for _ in range(50):
        picked = pick_parents(pool, rng=rng)
        assert len(picked) == 2
        assert picked[0] is not picked[1]
        assert all(c.alive for c in picked)


def test_pick_parents_single_neighbor(rng):
    only = Cell.spawn(create_default_genome(), 0)
    assert pick_parents([only, Cell.dead()], rng=rng) == [only]
