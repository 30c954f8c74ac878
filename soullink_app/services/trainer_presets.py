# soullink_app/services/trainer_presets.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

@dataclass(frozen=True)
class PresetPokemon:
    species: str
    level: int
    moves: List[str] = field(default_factory=list)
    item: Optional[str] = None

@dataclass(frozen=True)
class TrainerPreset:
    name: str
    description: str
    pokemon: List[PresetPokemon]

# Combates habituales de Negro/Blanco para cargar rivales rápido
TRAINER_PRESETS: List[TrainerPreset] = [
    TrainerPreset("Rival Battle 1 (Accumula)", "Initial battle vs N", [
        PresetPokemon("purrloin", 7, ["scratch", "growl"]),
    ]),
    TrainerPreset("Gym 1 (Cilan/Chili/Cress)", "Striaton City Gym", [
        PresetPokemon("lillipup", 12, ["bite", "work-up"]),
        PresetPokemon("pansage", 14, ["vine-whip", "work-up"]),
    ]),
    TrainerPreset("Gym 2 (Lenora)", "Nacrene City Gym", [
        PresetPokemon("herdier", 18, ["take-down", "leer", "bite", "retaliate"]),
        PresetPokemon("watchog", 20, ["retaliate", "crunch", "hypnosis", "leer"]),
    ]),
    TrainerPreset("Gym 3 (Burgh)", "Castelia City Gym", [
        PresetPokemon("whirlipede", 21, ["poison-tail", "screech", "pursuit", "iron-defense"]),
        PresetPokemon("dwebble", 21, ["smack-down", "struggle-bug", "faint-attack"]),
        PresetPokemon("leavanny", 23, ["razor-leaf", "struggle-bug", "string-shot"]),
    ]),
    TrainerPreset("Gym 4 (Elesa)", "Nimbasa City Gym", [
        PresetPokemon("emolga", 25, ["volt-switch", "aerial-ace", "quick-attack", "pursuit"]),
        PresetPokemon("emolga", 25, ["volt-switch", "aerial-ace", "quick-attack", "pursuit"]),
        PresetPokemon("zebstrika", 27, ["volt-switch", "spark", "flame-charge", "quick-attack"]),
    ]),
    TrainerPreset("Gym 5 (Clay)", "Driftveil City Gym", [
        PresetPokemon("krokorok", 29, ["crunch", "bulldoze", "torment"]),
        PresetPokemon("palpitoad", 29, ["muddy-water", "bubble-beam", "bulldoze"]),
        PresetPokemon("excadrill", 31, ["bulldoze", "rock-slide", "slash", "hone-claws"]),
    ]),
    TrainerPreset("Ghetsis (Final)", "Endgame Boss", [
        PresetPokemon("cofagrigus", 52),
        PresetPokemon("bouffalant", 52),
        PresetPokemon("seismitoad", 52),
        PresetPokemon("bisharp", 52),
        PresetPokemon("eelektross", 52),
        PresetPokemon("hydreigon", 54, ["dragon-pulse", "fire-blast", "surf", "focus-blast"]),
    ]),
]

def preset_names() -> List[str]:
    return [p.name for p in TRAINER_PRESETS]

def get_preset(name: str) -> TrainerPreset:
    key = (name or "").strip().lower()
    for preset in TRAINER_PRESETS:
        if preset.name.lower() == key:
            return preset
    raise KeyError(f"No hay preset de entrenador '{name}'. Disponibles: {', '.join(preset_names())}")
