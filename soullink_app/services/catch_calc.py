# soullink_app/services/catch_calc.py
"""Valor de captura de Gen 5 (Negro/Blanco).

    B = Rate * Ball * (3*MaxHP - 2*HP) / (3*MaxHP) * Estado

Con B >= 255 la captura es segura. Por debajo se muestra B/255 como
probabilidad aproximada, sin simular las comprobaciones de sacudida.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

MAX_CATCH_VALUE = 255

# bolas con multiplicador fijo; las condicionales van en ball_modifier
BALL_MODIFIERS: Dict[str, float] = {
    "poke ball": 1.0,
    "great ball": 1.5,
    "ultra ball": 2.0,
    "master ball": 255.0,
    "premier ball": 1.0,
    "luxury ball": 1.0,
    "heal ball": 1.0,
    "net ball": 1.0,
    "nest ball": 1.0,
    "dive ball": 1.0,
    "dusk ball": 1.0,
    "timer ball": 1.0,
    "quick ball": 1.0,
    "repeat ball": 1.0,
}

STATUS_MODIFIERS: Dict[str, float] = {
    "none": 1.0,
    "sleep": 2.5,
    "freeze": 2.5,
    "paralysis": 1.5,
    "poison": 1.5,
    "burn": 1.5,
}


@dataclass(frozen=True)
class CatchContext:
    """Circunstancias del encuentro que cambian el multiplicador de algunas bolas."""
    level: int = 20
    turn: int = 1
    water_or_bug: bool = False
    dark_or_cave: bool = False
    fishing_or_surfing: bool = False
    already_caught: bool = False


def ball_modifier(ball: str, ctx: CatchContext = CatchContext()) -> float:
    key = (ball or "").strip().lower()
    if key not in BALL_MODIFIERS:
        raise KeyError(f"Bola desconocida: {ball}")
    if key == "net ball":
        return 3.5 if ctx.water_or_bug else 1.0
    if key == "nest ball":
        return max(1.0, (41 - ctx.level) / 10)
    if key == "dive ball":
        return 3.5 if ctx.fishing_or_surfing else 1.0
    if key == "dusk ball":
        return 3.5 if ctx.dark_or_cave else 1.0
    if key == "timer ball":
        return min(4.0, 1 + ctx.turn * 0.3)
    if key == "quick ball":
        return 5.0 if ctx.turn == 1 else 1.0
    if key == "repeat ball":
        return 3.5 if ctx.already_caught else 1.0
    return BALL_MODIFIERS[key]


def hp_factor(hp_pct: float) -> float:
    if not 0 < hp_pct <= 100:
        raise ValueError(f"Porcentaje de PS fuera de rango: {hp_pct}")
    return (300 - 2 * hp_pct) / 300


def catch_value(catch_rate: int, ball: str, hp_pct: float = 100, condition: str = "none",
                ctx: CatchContext = CatchContext()) -> float:
    if not 0 < catch_rate <= 255:
        raise ValueError(f"Ratio de captura inválido: {catch_rate}")
    if condition not in STATUS_MODIFIERS:
        raise ValueError(f"Estado desconocido: {condition}")
    b = catch_rate * ball_modifier(ball, ctx) * hp_factor(hp_pct) * STATUS_MODIFIERS[condition]
    return min(float(MAX_CATCH_VALUE), b)


def catch_chance(catch_rate: int, ball: str, hp_pct: float = 100, condition: str = "none",
                 ctx: CatchContext = CatchContext()) -> float:
    """Probabilidad aproximada en %, redondeada a un decimal."""
    b = catch_value(catch_rate, ball, hp_pct, condition, ctx)
    return round(b * 100.0 / MAX_CATCH_VALUE, 1)
