# soullink_app/services/battle_calc.py
import math
from typing import NamedTuple, Optional

from .calculations import stage_multiplier
from .types import type_effectiveness
from ..models.combatant import Combatant, Move, normalize_weather

class DamageRange(NamedTuple):
    min: int
    max: int
    effectiveness: float

NO_DAMAGE = DamageRange(0, 0, 1.0)

# ---------- Clima ----------
def weather_move_multiplier(move_type: str, weather: str) -> float:
    mt = (move_type or "").capitalize()
    w  = (weather or "none").lower()
    if w == "rain" and mt in ("Water","Fire"):
        return 1.5 if mt == "Water" else 0.5
    if w == "sun" and mt in ("Water","Fire"):
        return 0.5 if mt == "Water" else 1.5
    return 1.0

def defender_stat_weather_boost(def_types: list[str], category: str, weather: str) -> float:
    def_types_uc = [(t or "").capitalize() for t in (def_types or [])]
    if category == "special" and (weather or "").lower() == "sand" and "Rock" in def_types_uc:
        return 1.5
    return 1.0

# ---------- STAB / estado ----------
def stab_multiplier(move_type: str, attacker_types: list[str]) -> float:
    mt = (move_type or "").capitalize()
    atts = [(t or "").capitalize() for t in (attacker_types or [])]
    return 1.5 if mt and mt in atts else 1.0

def burn_multiplier(condition: str, category: str) -> float:
    # Guts y similares no se modelan
    return 0.5 if condition == "burn" and category == "physical" else 1.0

# ---------- Stats efectivos ----------
def attack_stat(attacker: Combatant, category: str) -> float:
    key = "Atk" if category == "physical" else "SpA"
    return attacker.stat(key) * stage_multiplier(attacker.stages.get(key, 0))

def defense_stat(defender: Combatant, category: str, weather: str) -> float:
    key = "Def" if category == "physical" else "SpD"
    value = defender.stat(key) * defender_stat_weather_boost(defender.types, category, weather)
    return value * stage_multiplier(defender.stages.get(key, 0))

def base_damage(level: int, power: int, atk: float, dfn: float) -> int:
    return math.floor(math.floor(2 * level / 5 + 2) * power * atk / max(1.0, dfn) / 50) + 2

# ---------- Rango de daño ----------
def estimate_damage(
    attacker: Combatant,
    defender: Combatant,
    move: Move,
    weather: str = "none",
) -> Optional[DamageRange]:
    """Rango min/max (tiradas 85%-100%) de un golpe de ``move``.

    Los movimientos de estado devuelven NO_DAMAGE. Un movimiento ofensivo sin
    potencia conocida devuelve None: se descarta, no se trata como 0.
    """
    weather = normalize_weather(weather)
    if move.is_status:
        return NO_DAMAGE
    if not move.power:
        return None
    cat = move.damage_class
    atk = attack_stat(attacker, cat)
    dfn = defense_stat(defender, cat, weather)

    base = base_damage(attacker.level, move.power, atk, dfn)
    base *= weather_move_multiplier(move.type, weather)
    base *= burn_multiplier(attacker.condition, cat)

    stab = stab_multiplier(move.type, attacker.types)
    eff = type_effectiveness(move.type, defender.types)

    dmin = math.floor(base * stab * eff * 0.85)
    dmax = math.floor(base * stab * eff * 1.00)
    return DamageRange(dmin, dmax, eff)

def ko_turns(hp: int, damage: int, never: int = 999) -> int:
    if damage <= 0:
        return never
    return max(1, math.ceil(hp / damage))
