import pytest

from soullink_app.models.combatant import Combatant, Move, AnalysisResult, SAFE, SLOWER
from soullink_app.services.ranking import RankedEntry

from helpers import stats


@pytest.fixture
def make_mon():
    def _make(species="Testmon", types=("Normal",), level=50, moves=(), **kw):
        base = kw.pop("base_stats", None) or stats()
        return Combatant(species=species, types=list(types), base_stats=base, level=level,
                         moves=list(moves), **kw)
    return _make


@pytest.fixture
def moves():
    return {
        "surf": Move("Surf", "Water", 90, "special", 100),
        "flamethrower": Move("Flamethrower", "Fire", 90, "special", 100),
        "thunderbolt": Move("Thunderbolt", "Electric", 90, "special", 100),
        "waterfall": Move("Waterfall", "Water", 80, "physical", 100),
        "tackle": Move("Tackle", "Normal", 50, "physical", 100),
        "growl": Move("Growl", "Normal", None, "status", 100),
        "spore": Move("Spore", "Grass", None, "status", 100, ailment="sleep", ailment_chance=0),
        "hypnosis": Move("Hypnosis", "Psychic", None, "status", 60, ailment="sleep"),
        "thunder_wave": Move("Thunder Wave", "Electric", None, "status", 100, ailment="paralysis"),
        "seismic_toss": Move("Seismic Toss", "Fighting", None, "physical", 100),
    }


@pytest.fixture
def make_entry():
    def _make(name, moves=(), **overrides):
        mon = Combatant(species=name, types=["Normal"], base_stats=stats(), moves=list(moves))
        fields = dict(
            score=0.0, speed=SLOWER, my_speed=50.0, their_speed=60.0,
            worst_incoming="Tackle", worst_incoming_eff=1.0, worst_incoming_damage=10,
            worst_incoming_pct=10.0, best_outgoing="Tackle", best_outgoing_eff=1.0,
            best_outgoing_damage=10, best_outgoing_pct=15.0, turns_to_win=5, turns_to_die=5,
            safety=SAFE, control_risk=False, best_move=None, has_status_move=mon.has_status_move,
        )
        fields.update(overrides)
        return RankedEntry(mon, AnalysisResult(**fields))
    return _make
