# soullink_app/services/ranking.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .matchup import analyze_matchup
from .types import type_effectiveness
from ..models.combatant import AnalysisResult, Combatant


@dataclass(frozen=True)
class RankedEntry:
    combatant: Combatant
    result: AnalysisResult


def rank_roster(roster: Iterable[Combatant], opponent: Combatant, weather: str = "none") -> List[RankedEntry]:
    """Analiza cada miembro vivo contra el mismo rival y ordena por score.

    ``sorted`` es estable: a igual score se respeta el orden del roster.
    """
    entries = [
        RankedEntry(mon, analyze_matchup(mon, opponent, weather))
        for mon in roster
        if (mon.current_hp or 0) > 0
    ]
    return sorted(entries, key=lambda e: e.result.score, reverse=True)


# ---------- Solo por tipos (sin datos de movimientos) ----------
def incoming_type_multiplier(mon: Combatant, opponent: Combatant) -> float:
    if opponent.known_moves:
        attack_types = [m.type for m in opponent.known_moves if not m.is_status]
        if not attack_types:
            return 0.0  # solo movimientos de estado
    else:
        attack_types = list(opponent.types)
    if not attack_types:
        return 1.0
    return max(type_effectiveness(t, mon.types) for t in attack_types)

def outgoing_type_multiplier(mon: Combatant, opponent: Combatant) -> float:
    if not mon.types:
        return 1.0
    return max(type_effectiveness(t, opponent.types) for t in mon.types)

def best_type_tank(roster: Iterable[Combatant], opponent: Combatant) -> Optional[Tuple[Combatant, float]]:
    best: Optional[Tuple[Combatant, float]] = None
    for mon in roster:
        if (mon.current_hp or 0) <= 0:
            continue
        taken = incoming_type_multiplier(mon, opponent)
        if best is None or taken < best[1]:
            best = (mon, taken)
    return best

def best_type_threat(roster: Iterable[Combatant], opponent: Combatant) -> Optional[Tuple[Combatant, float]]:
    best: Optional[Tuple[Combatant, float]] = None
    for mon in roster:
        if (mon.current_hp or 0) <= 0:
            continue
        dealt = outgoing_type_multiplier(mon, opponent)
        if best is None or dealt > best[1]:
            best = (mon, dealt)
    return best
