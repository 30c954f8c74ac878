# soullink_app/services/matchup.py
"""Single matchup verdict: one combatant against one opponent.

Both sides are assumed to repeat their single best move every turn. The
result is a snapshot prediction, nothing is executed or rolled.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from .battle_calc import estimate_damage, ko_turns
from .calculations import stage_multiplier
from ..models.combatant import (
    AnalysisResult, Combatant, Move, normalize_weather,
    SAFE, TRADE, RISKY, DEAD, FASTER, SLOWER, TIE, NEVER,
)

FALLBACK_POWER = 60
CONTROL_MIN_ACCURACY = 60

TIER_SCORE = {SAFE: 3000, TRADE: 2000, RISKY: 1000, DEAD: -1000}


def effective_speed(mon: Combatant) -> float:
    spe = mon.stat("Spe") * stage_multiplier(mon.stages.get("Spe", 0))
    if mon.condition == "paralysis":
        spe *= 0.5
    return spe

def compare_speed(mine: Combatant, theirs: Combatant) -> Tuple[str, float, float]:
    mine_spe, theirs_spe = effective_speed(mine), effective_speed(theirs)
    if mine_spe > theirs_spe:
        return FASTER, mine_spe, theirs_spe
    if mine_spe < theirs_spe:
        return SLOWER, mine_spe, theirs_spe
    return TIE, mine_spe, theirs_spe

def _preferred_class(mon: Combatant) -> str:
    return "physical" if mon.stat("Atk") >= mon.stat("SpA") else "special"

def stab_fallback_moves(mon: Combatant) -> List[Move]:
    """Un movimiento implícito de potencia 60 por cada tipo propio."""
    cat = _preferred_class(mon)
    return [Move(name=f"{t} (STAB)", type=t, power=FALLBACK_POWER, damage_class=cat) for t in mon.types]

def unknown_move(mon: Combatant) -> Move:
    primary = mon.types[0] if mon.types else None
    label = f"{primary} Move" if primary else "Unknown Move"
    return Move(name=label, type=primary, power=FALLBACK_POWER, damage_class=_preferred_class(mon))

def _moves_first(move: Move, speed: str) -> bool:
    # empate = pesimista, el rival actúa antes
    return move.priority > 0 or speed != FASTER

def _lands(move: Move) -> bool:
    return move.accuracy is None or move.accuracy > CONTROL_MIN_ACCURACY

def _pct(damage: int, hp: int) -> float:
    return round(damage * 100.0 / max(1, hp), 1)

def _worst_incoming(mine: Combatant, theirs: Combatant, weather: str, speed: str):
    control_risk = False
    worst: Optional[Move] = None
    worst_dmg, worst_eff = -1, 1.0

    moves = theirs.known_moves or stab_fallback_moves(theirs)
    for move in moves:
        if move.is_status:
            if move.is_control and _moves_first(move, speed) and _lands(move):
                control_risk = True
            continue
        rng = estimate_damage(theirs, mine, move, weather)
        if rng is None:
            continue
        if rng.max > worst_dmg:
            worst, worst_dmg, worst_eff = move, rng.max, rng.effectiveness
    return worst, max(0, worst_dmg), worst_eff, control_risk

def _best_outgoing(mine: Combatant, theirs: Combatant, weather: str):
    best: Optional[Move] = None
    best_dmg, best_eff = -1, 1.0
    moves = mine.known_moves or [unknown_move(mine)]
    for move in moves:
        if move.is_status:
            continue
        rng = estimate_damage(mine, theirs, move, weather)
        if rng is None:
            continue
        if rng.min > best_dmg:
            best, best_dmg, best_eff = move, rng.min, rng.effectiveness
    return best, max(0, best_dmg), best_eff

def classify(turns_to_win: int, turns_to_die: int, worst_dmg: int, current_hp: int,
             is_faster: bool, control_risk: bool) -> Tuple[str, int, float]:
    """Devuelve (rating, golpes recibidos, fracción de PS perdida)."""
    if turns_to_win >= NEVER:
        if control_risk or turns_to_die < NEVER:
            return DEAD, NEVER, 1.0
        # ninguno daña al otro: ambos quedan en NEVER y la regla de golpes
        # daría Dead o Safe según la velocidad, se fija en Risky
        return RISKY, 0, 0.0
    hits_taken = turns_to_win - 1 if is_faster else turns_to_win
    if control_risk or hits_taken >= turns_to_die:
        return DEAD, hits_taken, 1.0
    frac = hits_taken * worst_dmg / max(1, current_hp)
    if frac < 0.5:
        return SAFE, hits_taken, frac
    if frac < 0.8:
        return TRADE, hits_taken, frac
    return RISKY, hits_taken, frac

def score_matchup(safety: str, frac: float, outgoing_eff: float, is_faster: bool,
                  turns_to_win: int, turns_to_die: int) -> float:
    # los ajustes quedan dentro de +-300, los tiers están a 1000
    score = TIER_SCORE[safety] - min(frac, 1.0) * 100
    if outgoing_eff >= 4:
        score += 40
    elif outgoing_eff >= 2:
        score += 20
    if is_faster:
        score += 10
    score -= min(turns_to_win, 10) * 5
    if safety == DEAD:
        score += min(turns_to_die, 10) * 5
    return round(score, 2)

def analyze_matchup(mine: Combatant, theirs: Combatant, weather: str = "none") -> AnalysisResult:
    weather = normalize_weather(weather)
    speed, mine_spe, theirs_spe = compare_speed(mine, theirs)
    is_faster = speed == FASTER

    worst, worst_dmg, worst_eff, control_risk = _worst_incoming(mine, theirs, weather, speed)
    best, best_dmg, best_eff = _best_outgoing(mine, theirs, weather)

    turns_to_die = 1 if control_risk else ko_turns(mine.current_hp, worst_dmg, NEVER)
    turns_to_win = ko_turns(theirs.current_hp, best_dmg, NEVER)

    safety, _hits, frac = classify(turns_to_win, turns_to_die, worst_dmg, mine.current_hp,
                                   is_faster, control_risk)

    return AnalysisResult(
        score=score_matchup(safety, frac, best_eff, is_faster, turns_to_win, turns_to_die),
        speed=speed,
        my_speed=mine_spe,
        their_speed=theirs_spe,
        worst_incoming=worst.name if worst else "-",
        worst_incoming_eff=worst_eff,
        worst_incoming_damage=worst_dmg,
        worst_incoming_pct=_pct(worst_dmg, mine.max_hp),
        best_outgoing=best.name if best else "-",
        best_outgoing_eff=best_eff,
        best_outgoing_damage=best_dmg,
        best_outgoing_pct=_pct(best_dmg, theirs.max_hp),
        turns_to_win=turns_to_win,
        turns_to_die=turns_to_die,
        safety=safety,
        control_risk=control_risk,
        best_move=best,
        has_status_move=mine.has_status_move,
    )
