import pytest

from soullink_app.models.combatant import Move
from soullink_app.services.battle_calc import (
    NO_DAMAGE, base_damage, estimate_damage, ko_turns, stab_multiplier, weather_move_multiplier,
)


def test_base_damage_formula():
    # floor(2*50/5 + 2) = 22; 22*90*112/112/50 = 39.6 -> 39 + 2
    assert base_damage(50, 90, 112, 112) == 41


def test_neutral_stab_range(make_mon, moves):
    att = make_mon(types=["Water"])
    dfn = make_mon(types=["Normal"])
    rng = estimate_damage(att, dfn, moves["surf"])
    assert rng == (52, 61, 1.0)


def test_super_effective_doubles(make_mon, moves):
    att = make_mon(types=["Water"])
    neutral = estimate_damage(att, make_mon(types=["Normal"]), moves["surf"])
    fire = estimate_damage(att, make_mon(types=["Fire"]), moves["surf"])
    assert fire.effectiveness == 2.0
    assert fire.max == 123
    assert abs(fire.max / neutral.max - 2.0) < 0.05


def test_min_never_exceeds_max(make_mon, moves):
    att = make_mon(types=["Fire"], level=7)
    for defender_types in (["Water"], ["Grass"], ["Ghost"], ["Fire", "Rock"]):
        for move in (moves["surf"], moves["flamethrower"], moves["tackle"], moves["waterfall"]):
            rng = estimate_damage(att, make_mon(types=defender_types), move)
            assert 0 <= rng.min <= rng.max


def test_status_moves_deal_nothing(make_mon, moves):
    att, dfn = make_mon(), make_mon()
    assert estimate_damage(att, dfn, moves["growl"]) == NO_DAMAGE
    assert estimate_damage(att, dfn, moves["spore"]).max == 0


def test_unknown_power_is_excluded(make_mon, moves):
    assert estimate_damage(make_mon(), make_mon(), moves["seismic_toss"]) is None


def test_immunity_is_zero(make_mon, moves):
    rng = estimate_damage(make_mon(types=["Electric"]), make_mon(types=["Ground", "Flying"]), moves["thunderbolt"])
    assert rng == (0, 0, 0.0)


def test_weather_modifiers(make_mon, moves):
    att = make_mon(types=["Water"])
    dfn = make_mon(types=["Normal"])
    assert estimate_damage(att, dfn, moves["surf"], "rain").max == 92
    assert estimate_damage(att, dfn, moves["surf"], "sun").max == 30
    assert estimate_damage(att, dfn, moves["surf"], "hail").max == 61
    assert weather_move_multiplier("Fire", "sun") == 1.5
    assert weather_move_multiplier("Fire", "rain") == 0.5
    assert weather_move_multiplier("Grass", "sun") == 1.0


def test_sand_boosts_rock_special_defense_only(make_mon, moves):
    att = make_mon(types=["Water"])
    rock = make_mon(types=["Rock"])
    special_clear = estimate_damage(att, rock, moves["surf"])
    special_sand = estimate_damage(att, rock, moves["surf"], "sand")
    assert special_sand.max < special_clear.max

    physical_clear = estimate_damage(att, rock, moves["waterfall"])
    physical_sand = estimate_damage(att, rock, moves["waterfall"], "sand")
    assert physical_sand == physical_clear


def test_burn_halves_physical_only(make_mon, moves):
    att = make_mon(types=["Water"])
    dfn = make_mon(types=["Normal"])
    healthy = estimate_damage(att, dfn, moves["waterfall"])
    att.set_condition("burn")
    burned = estimate_damage(att, dfn, moves["waterfall"])
    assert burned.max < healthy.max
    assert abs(burned.max - healthy.max / 2) <= 2
    assert estimate_damage(att, dfn, moves["surf"]).max == 61


def test_stages_scale_stats(make_mon, moves):
    att = make_mon(types=["Water"])
    dfn = make_mon(types=["Normal"])
    att.set_stage("SpA", 2)
    boosted = estimate_damage(att, dfn, moves["surf"])
    assert boosted.max > 61
    dfn.set_stage("SpD", 2)
    assert estimate_damage(att, dfn, moves["surf"]).max == 61


def test_stab_and_missing_types(make_mon):
    assert stab_multiplier("Water", ["Water", "Ground"]) == 1.5
    assert stab_multiplier("Fire", ["Water"]) == 1.0
    assert stab_multiplier(None, []) == 1.0
    att, dfn = make_mon(types=[]), make_mon(types=[])
    rng = estimate_damage(att, dfn, Move("Mystery", None, 80, "special"))
    assert rng.effectiveness == 1.0


def test_ko_turns_sentinel():
    assert ko_turns(100, 0) == 999
    assert ko_turns(100, 200) == 1
    assert ko_turns(100, 34) == 3


def test_weather_aliases_and_unknown_weather(make_mon, moves):
    att = make_mon(types=["Water"])
    rock = make_mon(types=["Rock"])
    assert estimate_damage(att, rock, moves["surf"], "Sandstorm") == estimate_damage(att, rock, moves["surf"], "sand")
    with pytest.raises(ValueError):
        estimate_damage(att, rock, moves["surf"], "fog")
