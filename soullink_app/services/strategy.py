# soullink_app/services/strategy.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .ranking import RankedEntry
from ..models.combatant import Combatant, Move, RISKY, DEAD

SACRIFICE_MIN_PCT = 10.0
CLEANER_MAX_TURNS = 2


@dataclass(frozen=True)
class StrategyPlan:
    opponent: str
    sacrifice: RankedEntry
    sacrifice_move: str
    cleaner: RankedEntry
    cleaner_move: str

    def steps(self) -> List[str]:
        lead = self.sacrifice.combatant.display_name
        finisher = self.cleaner.combatant.display_name
        return [
            f"Lead with {lead} and use {self.sacrifice_move}.",
            f"When {lead} faints, switch to {finisher} and use {self.cleaner_move} to finish {self.opponent}.",
        ]


def _status_moves(mon: Combatant) -> List[Move]:
    return [m for m in mon.known_moves if m.is_status]

def sacrifice_move(entry: RankedEntry) -> str:
    # primero control (dormir/congelar), luego cualquier otro de estado
    status = _status_moves(entry.combatant)
    status.sort(key=lambda m: (not m.is_control, not m.ailment))
    if status:
        return status[0].name
    return entry.result.best_outgoing

def is_cleaner(entry: RankedEntry) -> bool:
    return entry.result.turns_to_win <= CLEANER_MAX_TURNS

def is_sacrifice(entry: RankedEntry) -> bool:
    r = entry.result
    acts_first = r.is_faster or r.safety != DEAD
    useful = r.best_outgoing_pct >= SACRIFICE_MIN_PCT or r.has_status_move
    return acts_first and useful

def suggest_plan(ranked: Sequence[RankedEntry], opponent: Combatant) -> Optional[StrategyPlan]:
    """Plan sacrificio + remate cuando el mejor matchup no es seguro.

    Devuelve None si no aplica o no hay pareja válida.
    """
    if not ranked or ranked[0].result.safety not in (RISKY, DEAD):
        return None

    cleaners = [e for e in ranked if is_cleaner(e)]
    sacrifices = [e for e in ranked if is_sacrifice(e)]
    if not cleaners or not sacrifices:
        return None

    cleaner_ids = {id(e.combatant) for e in cleaners}
    preferred = [e for e in sacrifices if id(e.combatant) not in cleaner_ids]
    sacrifice = (preferred or sacrifices)[0]

    cleaner = next((e for e in cleaners if e.combatant is not sacrifice.combatant), None)
    if cleaner is None:
        return None

    return StrategyPlan(
        opponent=opponent.display_name,
        sacrifice=sacrifice,
        sacrifice_move=sacrifice_move(sacrifice),
        cleaner=cleaner,
        cleaner_move=cleaner.result.best_outgoing,
    )
