from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from ..services.calculations import STAT_KEYS, clamp_stage, project_stat

STAGE_KEYS = ["Atk", "Def", "SpA", "SpD", "Spe", "Acc", "Eva"]
CONDITIONS = ("none", "paralysis", "burn", "poison", "sleep", "freeze")
WEATHERS = ("none", "sun", "rain", "sand", "hail")
WEATHER_ALIASES = {"sandstorm": "sand", "sunny": "sun", "harsh sunlight": "sun"}
DAMAGE_CLASSES = ("physical", "special", "status")
CONTROL_AILMENTS = ("sleep", "freeze")

SAFE, TRADE, RISKY, DEAD = "Safe", "Trade", "Risky", "Dead"
FASTER, SLOWER, TIE = "faster", "slower", "tie"

# turnos "nunca"
NEVER = 999


@dataclass(frozen=True)
class Move:
    name: str
    type: Optional[str]
    power: Optional[int]
    damage_class: str
    accuracy: Optional[int] = None  # None = nunca falla
    priority: int = 0
    ailment: Optional[str] = None
    ailment_chance: int = 0
    flinch_chance: int = 0

    def __post_init__(self):
        cat = (self.damage_class or "").lower()
        if cat not in DAMAGE_CLASSES:
            raise ValueError(f"Clase de daño desconocida para {self.name}: {self.damage_class}")
        object.__setattr__(self, "damage_class", cat)

    @property
    def is_status(self) -> bool:
        return self.damage_class == "status"

    @property
    def is_control(self) -> bool:
        return self.is_status and (self.ailment or "") in CONTROL_AILMENTS


@dataclass(frozen=True)
class DerivedStat:
    base: int
    level: int
    is_hp: bool = False

    @property
    def value(self) -> int:
        return project_stat(self.base, self.level, self.is_hp)


@dataclass(frozen=True)
class OverriddenStat:
    value: int


StatValue = Union[DerivedStat, OverriddenStat]


def normalize_weather(weather: Optional[str]) -> str:
    w = (weather or "none").strip().lower()
    w = WEATHER_ALIASES.get(w, w)
    if w not in WEATHERS:
        raise ValueError(f"Clima desconocido: {weather}")
    return w


def derived_stats(base_stats: Dict[str, int], level: int) -> Dict[str, StatValue]:
    return {k: DerivedStat(int(base_stats.get(k, 0)), level, k == "HP") for k in STAT_KEYS}


@dataclass
class Combatant:
    """A roster member or opponent as the matchup engine sees it.

    ``stats`` holds tagged values: a level change swaps every entry for a
    fresh DerivedStat, dropping manual overrides.
    """
    species: str
    types: List[str] = field(default_factory=list)
    base_stats: Dict[str, int] = field(default_factory=lambda: {k: 0 for k in STAT_KEYS})
    level: int = 50
    nickname: str = ""
    moves: List[Optional[Move]] = field(default_factory=list)
    condition: str = "none"
    stages: Dict[str, int] = field(default_factory=lambda: {k: 0 for k in STAGE_KEYS})
    current_hp: Optional[int] = None
    max_hp_override: Optional[int] = None
    owner: Optional[str] = None
    member_id: Optional[int] = None
    stats: Dict[str, StatValue] = field(default_factory=dict)

    def __post_init__(self):
        if self.level is None:
            self.level = 50
        if int(self.level) <= 0:
            raise ValueError(f"Nivel inválido para {self.species}: {self.level}")
        self.level = int(self.level)
        if len(self.types) > 2:
            raise ValueError(f"{self.species} tiene más de dos tipos: {self.types}")
        self.types = [t.capitalize() for t in self.types if t]
        if len(self.moves) > 4:
            raise ValueError(f"{self.species} conoce más de cuatro movimientos.")
        if self.condition not in CONDITIONS:
            raise ValueError(f"Estado desconocido: {self.condition}")
        # copias propias: dos combatientes nunca comparten dicts ni listas
        self.base_stats = dict(self.base_stats)
        self.moves = list(self.moves)
        self.stages = {k: clamp_stage(self.stages.get(k, 0)) for k in STAGE_KEYS}
        self.stats = {**derived_stats(self.base_stats, self.level), **self.stats}
        if self.current_hp is None:
            self.current_hp = self.max_hp
        else:
            self.current_hp = max(0, min(int(self.current_hp), self.max_hp))

    @property
    def display_name(self) -> str:
        return self.nickname or self.species

    @property
    def real_stats(self) -> Dict[str, int]:
        return {k: self.stats[k].value for k in STAT_KEYS}

    def stat(self, key: str) -> int:
        return self.stats[key].value

    @property
    def max_hp(self) -> int:
        if self.max_hp_override is not None:
            return self.max_hp_override
        return self.stat("HP")

    @property
    def known_moves(self) -> List[Move]:
        return [m for m in self.moves if m is not None]

    @property
    def has_status_move(self) -> bool:
        return any(m.is_status for m in self.known_moves)

    def set_level(self, level: int) -> None:
        if int(level) <= 0:
            raise ValueError(f"Nivel inválido: {level}")
        was_full = self.current_hp >= self.max_hp
        self.level = int(level)
        self.stats = derived_stats(self.base_stats, self.level)
        self.max_hp_override = None
        if was_full:
            self.current_hp = self.max_hp
        else:
            self.current_hp = min(self.current_hp, self.max_hp)

    def override_stat(self, key: str, value: int) -> None:
        if key not in STAT_KEYS:
            raise KeyError(key)
        self.stats[key] = OverriddenStat(max(0, int(value)))
        if key == "HP":
            self.current_hp = min(self.current_hp, self.max_hp)

    def set_hp(self, current: int, maximum: Optional[int] = None) -> None:
        if maximum is not None:
            self.max_hp_override = max(1, int(maximum))
        self.current_hp = max(0, min(int(current), self.max_hp))

    def set_stage(self, key: str, stage: int) -> None:
        if key not in STAGE_KEYS:
            raise KeyError(key)
        self.stages[key] = clamp_stage(stage)

    def set_condition(self, condition: str) -> None:
        if condition not in CONDITIONS:
            raise ValueError(f"Estado desconocido: {condition}")
        self.condition = condition


@dataclass(frozen=True)
class AnalysisResult:
    score: float
    speed: str
    my_speed: float
    their_speed: float
    worst_incoming: str
    worst_incoming_eff: float
    worst_incoming_damage: int
    worst_incoming_pct: float
    best_outgoing: str
    best_outgoing_eff: float
    best_outgoing_damage: int
    best_outgoing_pct: float
    turns_to_win: int
    turns_to_die: int
    safety: str
    control_risk: bool = False
    best_move: Optional[Move] = None
    has_status_move: bool = False

    @property
    def is_faster(self) -> bool:
        return self.speed == FASTER
