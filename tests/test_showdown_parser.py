import pytest

from soullink_app.parsing.showdown_parser import parse_showdown_team, parse_showdown_text

SET_WITH_NICK = """Sparky (Emolga) (F) @ Oran Berry
Ability: Static
Level: 25
EVs: 252 SpA / 4 SpD / 252 Spe
Timid Nature
- Volt Switch
- Aerial Ace
- Quick Attack
- Pursuit
"""


def test_parse_nickname_species_gender_item():
    p = parse_showdown_text(SET_WITH_NICK)
    assert p.species == "Emolga"
    assert p.nickname == "Sparky"
    assert p.gender == "F"
    assert p.item == "Oran Berry"
    assert p.ability == "Static"
    assert p.level == 25
    assert p.nature == "Timid"
    assert p.moves == ["Volt Switch", "Aerial Ace", "Quick Attack", "Pursuit"]


def test_parse_species_only():
    p = parse_showdown_text("Excadrill (M)\n- Bulldoze\n- Rock Slide")
    assert p.species == "Excadrill"
    assert p.nickname is None
    assert p.gender == "M"
    assert p.level == 50
    assert p.moves == ["Bulldoze", "Rock Slide"]


def test_parse_caps_moves_at_four():
    text = "Pidove\n" + "\n".join(f"- Move {i}" for i in range(6))
    assert len(parse_showdown_text(text).moves) == 4


def test_empty_input_raises():
    with pytest.raises(ValueError):
        parse_showdown_text("   \n  ")


def test_parse_team_blocks():
    team = parse_showdown_team(SET_WITH_NICK + "\n\nZebstrika @ Cheri Berry\nLevel: 27\n- Spark\n")
    assert [p.species for p in team] == ["Emolga", "Zebstrika"]
    assert team[1].level == 27
