import random

import pytest

from world.presets import PALETTE, PRESETS, get_preset, preset_ids


def test_random_is_the_empty_sentinel():
    assert get_preset("random")(50, 40, 1.0, random.Random(0)) == []


def test_unknown_preset():
    with pytest.raises(KeyError):
        get_preset("spiral")


def test_all_presets_listed():
    assert preset_ids()[0] == "random"
    assert len(PRESETS) == 14
    assert len(set(preset_ids())) == 14


@pytest.mark.parametrize("preset", [p for p in PRESETS if p.id != "random"], ids=lambda p: p.id)
def test_full_density_stays_in_bounds(preset):
    cells = preset(60, 40, 1.0, random.Random(1))
    assert cells
    for c in cells:
        assert 0 <= c.x < 60 and 0 <= c.y < 40
        assert all(0 <= ch <= 255 for ch in c.genome.color)


@pytest.mark.parametrize("preset", PRESETS, ids=lambda p: p.id)
def test_zero_density_places_nothing(preset):
    assert preset(60, 40, 0.0, random.Random(1)) == []


def test_stripes_cover_the_grid_at_full_density():
    cells = get_preset("stripes")(50, 20, 1.0, random.Random(2))
    assert len(cells) == 50 * 20
    by_pos = {(c.x, c.y): c.genome.color for c in cells}
    assert by_pos[(0, 0)] == PALETTE[0]
    assert by_pos[(49, 19)] == PALETTE[4]


def test_checkerboard_two_colors():
    cells = get_preset("checkerboard")(60, 60, 1.0, random.Random(3))
    by_pos = {(c.x, c.y): c.genome.color for c in cells}
    assert by_pos[(0, 0)] == PALETTE[0]
    assert by_pos[(15, 0)] == PALETTE[2]
    assert by_pos[(15, 15)] == PALETTE[0]
    assert {c.genome.color for c in cells} == {PALETTE[0], PALETTE[2]}


def test_bernoulli_thinning():
    cells = get_preset("vertical")(100, 100, 0.5, random.Random(4))
    assert 4000 < len(cells) < 6000


def test_cross_arms_have_four_colors():
    cells = get_preset("cross")(80, 60, 1.0, random.Random(5))
    assert {c.genome.color for c in cells} == set(PALETTE[:4])


def test_genomes_are_independent():
    cells = get_preset("corners")(40, 40, 1.0, random.Random(6))
    cells[0].genome.energy = 999
    assert all(c.genome.energy != 999 for c in cells[1:])
