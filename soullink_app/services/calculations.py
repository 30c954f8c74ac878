from math import floor
from typing import Dict

STAT_KEYS = ["HP", "Atk", "Def", "SpA", "SpD", "Spe"]

# Partidas en curso: naturaleza neutra, IV 15, sin EVs
DEFAULT_IV = 15
DEFAULT_EV = 0

def _calc_hp(base: int, iv: int, ev: int, level: int) -> int:
    return floor(((2 * base + iv + floor(ev / 4)) * level) / 100) + level + 10

def _calc_other(base: int, iv: int, ev: int, level: int) -> int:
    return floor(((2 * base + iv + floor(ev / 4)) * level) / 100) + 5

def project_stat(base: int, level: int, is_hp: bool) -> int:
    if is_hp:
        return _calc_hp(base, DEFAULT_IV, DEFAULT_EV, level)
    return _calc_other(base, DEFAULT_IV, DEFAULT_EV, level)

def compute_stats(base_stats: Dict[str, int], level: int) -> Dict[str, int]:
    stats: Dict[str, int] = {}
    for key in STAT_KEYS:
        stats[key] = project_stat(int(base_stats.get(key, 0)), level, key == "HP")
    return stats

def clamp_stage(stage: int) -> int:
    return max(-6, min(6, int(stage)))

def stage_multiplier(stage: int) -> float:
    s = clamp_stage(stage)
    if s >= 0:
        return (2 + s) / 2.0
    return 2.0 / (2 - s)
