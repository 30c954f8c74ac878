import pytest

from soullink_app.services.trainer_presets import TRAINER_PRESETS, get_preset, preset_names


def test_preset_names_follow_table_order():
    names = preset_names()
    assert names[0] == "Rival Battle 1 (Accumula)"
    assert len(names) == len(TRAINER_PRESETS)


def test_get_preset_ignores_case_and_spaces():
    preset = get_preset("  gym 2 (LENORA) ")
    assert [p.species for p in preset.pokemon] == ["herdier", "watchog"]
    assert preset.pokemon[1].level == 20


def test_get_unknown_preset():
    with pytest.raises(KeyError):
        get_preset("Gym 42")


def test_presets_are_playable():
    for preset in TRAINER_PRESETS:
        assert preset.pokemon
        for mon in preset.pokemon:
            assert mon.level > 0
            assert len(mon.moves) <= 4
