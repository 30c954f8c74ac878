import json, logging, os, re
import requests
from typing import Dict

from ..models.combatant import Move

log = logging.getLogger(__name__)

POKEAPI_ROOT_MOVE = "https://pokeapi.co/api/v2/move/"

# Nombres que PokéAPI escribe distinto
MOVE_SPECIAL_CASES = {
    "faint attack": "feint-attack",
    "faint-attack": "feint-attack",
    "vicegrip": "vice-grip",
    "hi jump kick": "high-jump-kick",
    "solarbeam": "solar-beam",
    "thunderpunch": "thunder-punch",
    "dynamicpunch": "dynamic-punch",
    "smellingsalt": "smelling-salts",
    "softboiled": "soft-boiled",
    "selfdestruct": "self-destruct",
}

def showdown_move_to_slug(name: str) -> str:
    s = (name or "").strip().lower()
    s = s.replace("’", "'")
    if s in MOVE_SPECIAL_CASES:
        return MOVE_SPECIAL_CASES[s]
    # “Hidden Power [Type]” (por ahora tratamos como hidden-power)
    if s.startswith("hidden power"):
        return "hidden-power"
    # genérico: quitar apóstrofes y puntos, espacios→guiones
    s = re.sub(r"[\'\.]", "", s)
    s = re.sub(r"\s+", "-", s)
    return s

def parse_move_payload(move_name: str, data: Dict) -> Dict:
    meta = data.get("meta") or {}
    ailment = ((meta.get("ailment") or {}).get("name") or "none").lower()
    return {
        "name": move_name,
        "type": ((data.get("type") or {}).get("name") or "normal").capitalize(),
        "power": data.get("power"),        # puede ser null
        "damage_class": ((data.get("damage_class") or {}).get("name") or "status").lower(),
        "accuracy": data.get("accuracy"),  # null = no falla
        "priority": int(data.get("priority") or 0),
        "ailment": None if ailment == "none" else ailment,
        "ailment_chance": int(meta.get("ailment_chance") or 0),
        "flinch_chance": int(meta.get("flinch_chance") or 0),
    }

def move_from_dict(info: Dict) -> Move:
    return Move(
        name=info["name"],
        type=info.get("type"),
        power=info.get("power"),
        damage_class=info.get("damage_class") or "status",
        accuracy=info.get("accuracy"),
        priority=int(info.get("priority") or 0),
        ailment=info.get("ailment"),
        ailment_chance=int(info.get("ailment_chance") or 0),
        flinch_chance=int(info.get("flinch_chance") or 0),
    )

def ensure_move_in_json(move_name: str, cache_path: str) -> Dict:
    """
    Devuelve dict con:
      { "name": str, "type": "Fire", "power": int|None, "damage_class": "physical|special|status",
        "accuracy": int|None, "priority": int, "ailment": str|None, "ailment_chance": int,
        "flinch_chance": int }
    Cachea en JSON local para no golpear PokéAPI siempre.
    """
    if os.path.exists(cache_path):
        with open(cache_path, "r", encoding="utf-8") as f:
            cache = json.load(f)
    else:
        cache = {}

    key = move_name
    if key in cache and isinstance(cache[key], dict) and "priority" in cache[key]:
        return cache[key]

    slug = showdown_move_to_slug(move_name)
    url = POKEAPI_ROOT_MOVE + slug
    log.info("GET %s", url)
    r = requests.get(url, timeout=15)
    r.raise_for_status()
    info = parse_move_payload(move_name, r.json())

    os.makedirs(os.path.dirname(cache_path) or ".", exist_ok=True)
    cache[key] = info
    with open(cache_path, "w", encoding="utf-8") as f:
        json.dump(cache, f, ensure_ascii=False, indent=2)
    return info
