import pytest

from soullink_app.app import main
from soullink_app.controllers.matchup_controller import MatchupController

from helpers import SPECIES, fake_move

TEAM = """Splash (Panpour)
Level: 14
- water-gun

Lillipup
Level: 12
- tackle
"""


@pytest.fixture
def controller():
    return MatchupController(
        species_lookup=lambda name: SPECIES[name.lower()],
        move_lookup=fake_move,
        capture_rate_lookup=lambda name: 190,
    )


@pytest.fixture
def team_file(tmp_path):
    path = tmp_path / "team.txt"
    path.write_text(TEAM, encoding="utf-8")
    return str(path)


def test_presets(controller, capsys):
    assert main(["presets"], controller) == 0
    assert "Gym 2 (Lenora)" in capsys.readouterr().out


def test_plan_against_opponent_file(controller, team_file, tmp_path, capsys):
    rival = tmp_path / "rival.txt"
    rival.write_text("Pansear\nLevel: 14\n- incinerate\n", encoding="utf-8")
    assert main(["plan", team_file, "--opponent", str(rival)], controller) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "== vs Pansear (Nv 14) =="
    assert out[1].startswith("1. Splash")
    assert "Safe" in out[1]


def test_team_report(controller, team_file, capsys):
    assert main(["team", team_file, "--badges", "0", "--threshold", "1"], controller) == 0
    out = capsys.readouterr().out
    assert "Fighting: 1" in out
    assert "Cap de nivel: 14" in out


def test_catch(controller, capsys):
    assert main(["catch", "Panpour", "--ball", "Net Ball"], controller) == 0
    assert "~86.9%" in capsys.readouterr().out


def test_unknown_trainer_exits_with_error(controller, team_file, caplog):
    assert main(["plan", team_file, "--trainer", "Gym 42"], controller) == 1
    assert "Gym 42" in caplog.text


def test_rejects_unknown_weather(controller, team_file):
    with pytest.raises(SystemExit):
        main(["plan", team_file, "--trainer", "Gym 2 (Lenora)", "--weather", "fog"], controller)
