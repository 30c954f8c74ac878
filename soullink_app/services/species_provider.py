import json, logging, os, re
from typing import Dict, Optional
import requests

from ..utils.species_normalize import normalize_species_name

log = logging.getLogger(__name__)

POKEAPI_ROOT = "https://pokeapi.co/api/v2/pokemon/"
POKEAPI_SPECIES_ROOT = "https://pokeapi.co/api/v2/pokemon-species/"

STATS_MAP = {"hp":"HP","attack":"Atk","defense":"Def","special-attack":"SpA","special-defense":"SpD","speed":"Spe"}

def _ascii_slug(s: str) -> str:
    s = s.strip().lower()
    s = s.replace("♀", "-f").replace("♂", "-m")
    s = s.replace(".", "").replace("'", "").replace("’", "").replace(":", "").replace(" ", "-")
    s = (s.replace("é", "e").replace("É", "e")
           .replace("á","a").replace("í","i").replace("ó","o").replace("ú","u"))
    s = re.sub(r"[^a-z0-9\-]", "", s)
    s = re.sub(r"-+", "-", s)
    return s

def showdown_to_pokeapi_slug(name: str, gender: Optional[str] = None) -> str:
    return normalize_species_name(_ascii_slug(name), gender)

def parse_species_payload(data: Dict) -> Dict:
    stats = {}
    for stat_obj in data.get("stats", []):
        k = STATS_MAP.get(stat_obj["stat"]["name"])
        if k:
            stats[k] = int(stat_obj["base_stat"])
    types = [t["type"]["name"].capitalize() for t in data.get("types", [])]  # ej ['Water','Ground']
    if len(stats) != len(STATS_MAP) or not types:
        raise RuntimeError(f"Respuesta incompleta de PokéAPI para '{data.get('name')}'.")
    return {"stats": stats, "types": types}

def fetch_species_from_api(slug: str) -> Dict:
    url = POKEAPI_ROOT + slug
    log.info("GET %s", url)
    r = requests.get(url, timeout=15)
    r.raise_for_status()
    return parse_species_payload(r.json())

def _load_cache(path: str) -> Dict:
    if not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f) or {}

def _is_complete(entry) -> bool:
    return (
        isinstance(entry, dict)
        and isinstance(entry.get("types"), list) and entry["types"]
        and all(k in entry.get("stats", {}) for k in STATS_MAP.values())
    )

def ensure_species_in_json(name: str, json_path: str, gender: Optional[str] = None) -> Dict:
    """
    Devuelve {"stats": {"HP":..,"Atk":..,...}, "types": ["Water","Ground"]}.
    Cachea en JSON para no golpear PokéAPI cada vez.
    """
    registry = _load_cache(json_path)
    key = name.strip().lower()
    if _is_complete(registry.get(key)):
        return registry[key]

    info = fetch_species_from_api(showdown_to_pokeapi_slug(name, gender))
    # conserva capture_rate si ya estaba
    registry[key] = {**(registry.get(key) or {}), **info}
    _write_cache(json_path, registry)
    return info

def _write_cache(path: str, registry: Dict) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(registry, f, ensure_ascii=False, indent=2)

def fetch_capture_rate(name: str, gender: Optional[str] = None) -> int:
    # /pokemon-species va sin forma (darmanitan, no darmanitan-standard)
    slug = _ascii_slug(name)
    if slug == "nidoran":
        slug = normalize_species_name(slug, gender)
    url = POKEAPI_SPECIES_ROOT + slug
    log.info("GET %s", url)
    r = requests.get(url, timeout=15)
    r.raise_for_status()
    rate = r.json().get("capture_rate")
    if rate is None:
        raise RuntimeError(f"PokéAPI no trae capture_rate para '{slug}'.")
    return int(rate)

def ensure_capture_rate(name: str, json_path: str, gender: Optional[str] = None) -> int:
    """Ratio de captura (1-255), guardado junto a stats/tipos en la misma caché."""
    registry = _load_cache(json_path)
    key = name.strip().lower()
    entry = registry.get(key) if isinstance(registry.get(key), dict) else {}
    if "capture_rate" in entry:
        return int(entry["capture_rate"])
    entry["capture_rate"] = fetch_capture_rate(name, gender)
    registry[key] = entry
    _write_cache(json_path, registry)
    return entry["capture_rate"]
