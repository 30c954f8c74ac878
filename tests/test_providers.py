import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from soullink_app.services import move_provider, species_provider
from soullink_app.services.move_provider import (
    ensure_move_in_json, move_from_dict, parse_move_payload, showdown_move_to_slug,
)
from soullink_app.services.species_provider import (
    ensure_capture_rate, ensure_species_in_json, parse_species_payload, showdown_to_pokeapi_slug,
)

GLIGAR = {
    "name": "gligar",
    "stats": [
        {"base_stat": 65, "stat": {"name": "hp"}},
        {"base_stat": 75, "stat": {"name": "attack"}},
        {"base_stat": 105, "stat": {"name": "defense"}},
        {"base_stat": 35, "stat": {"name": "special-attack"}},
        {"base_stat": 65, "stat": {"name": "special-defense"}},
        {"base_stat": 85, "stat": {"name": "speed"}},
    ],
    "types": [{"slot": 1, "type": {"name": "ground"}}, {"slot": 2, "type": {"name": "flying"}}],
}

SPORE = {
    "name": "spore",
    "type": {"name": "grass"},
    "power": None,
    "damage_class": {"name": "status"},
    "accuracy": 100,
    "priority": 0,
    "meta": {"ailment": {"name": "sleep"}, "ailment_chance": 0, "flinch_chance": 0},
}


def _response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


def test_species_slugs():
    assert showdown_to_pokeapi_slug("Mr. Mime") == "mr-mime"
    assert showdown_to_pokeapi_slug("Darmanitan") == "darmanitan-standard"
    assert showdown_to_pokeapi_slug("Nidoran", "F") == "nidoran-f"
    assert showdown_to_pokeapi_slug("Farfetch'd") == "farfetchd"


def test_move_slugs():
    assert showdown_move_to_slug("Thunder Wave") == "thunder-wave"
    assert showdown_move_to_slug("Faint Attack") == "feint-attack"
    assert showdown_move_to_slug("Hidden Power [Fire]") == "hidden-power"
    assert showdown_move_to_slug("King's Shield") == "kings-shield"


def test_parse_species_payload():
    info = parse_species_payload(GLIGAR)
    assert info["types"] == ["Ground", "Flying"]
    assert info["stats"] == {"HP": 65, "Atk": 75, "Def": 105, "SpA": 35, "SpD": 65, "Spe": 85}


def test_parse_species_payload_rejects_missing_types():
    with pytest.raises(RuntimeError):
        parse_species_payload({**GLIGAR, "types": []})


def test_species_cache_hits_network_once(tmp_path):
    path = str(tmp_path / "data" / "species_cache.json")
    with patch.object(species_provider.requests, "get", return_value=_response(GLIGAR)) as get:
        first = ensure_species_in_json("Gligar", path)
        second = ensure_species_in_json("gligar", path)
    assert first == second
    get.assert_called_once()
    assert get.call_args[0][0].endswith("/pokemon/gligar")
    with open(path, encoding="utf-8") as f:
        assert "gligar" in json.load(f)


def test_species_http_error_propagates(tmp_path):
    resp = MagicMock()
    resp.raise_for_status.side_effect = requests.HTTPError("404")
    with patch.object(species_provider.requests, "get", return_value=resp):
        with pytest.raises(requests.HTTPError):
            ensure_species_in_json("Missingno", str(tmp_path / "species.json"))


def test_parse_move_payload_with_meta():
    info = parse_move_payload("Spore", SPORE)
    assert info == {
        "name": "Spore", "type": "Grass", "power": None, "damage_class": "status",
        "accuracy": 100, "priority": 0, "ailment": "sleep", "ailment_chance": 0, "flinch_chance": 0,
    }
    move = move_from_dict(info)
    assert move.is_control


def test_parse_move_payload_without_meta():
    info = parse_move_payload("Surf", {
        "type": {"name": "water"}, "power": 95, "damage_class": {"name": "special"},
        "accuracy": 100, "priority": 0, "meta": None,
    })
    assert info["ailment"] is None
    assert info["power"] == 95
    assert not move_from_dict(info).is_status


def test_move_cache_hits_network_once(tmp_path):
    path = str(tmp_path / "moves_cache.json")
    with patch.object(move_provider.requests, "get", return_value=_response(SPORE)) as get:
        ensure_move_in_json("Spore", path)
        info = ensure_move_in_json("Spore", path)
    get.assert_called_once()
    assert info["ailment"] == "sleep"


def test_capture_rate_shares_species_cache(tmp_path):
    path = str(tmp_path / "species_cache.json")
    with patch.object(species_provider.requests, "get", return_value=_response(GLIGAR)):
        ensure_species_in_json("Gligar", path)
    with patch.object(species_provider.requests, "get", return_value=_response({"capture_rate": 60})) as get:
        assert ensure_capture_rate("Gligar", path) == 60
        assert ensure_capture_rate("gligar", path) == 60
    get.assert_called_once()
    assert get.call_args[0][0].endswith("/pokemon-species/gligar")
    with open(path, encoding="utf-8") as f:
        entry = json.load(f)["gligar"]
    assert entry["capture_rate"] == 60
    assert entry["types"] == ["Ground", "Flying"]


def test_capture_rate_uses_base_species_slug(tmp_path):
    with patch.object(species_provider.requests, "get", return_value=_response({"capture_rate": 60})) as get:
        ensure_capture_rate("Darmanitan", str(tmp_path / "c.json"))
    assert get.call_args[0][0].endswith("/pokemon-species/darmanitan")
