from dataclasses import dataclass
from typing import Iterable, List, Protocol


@dataclass(frozen=True)
class Badge:
    name: str
    level_cap: int
    obedience: int


# El cap es el nivel del as del siguiente líder (Negro/Blanco)
BADGES: List[Badge] = [
    Badge("Trio Badge", 14, 20),
    Badge("Basic Badge", 20, 30),
    Badge("Insect Badge", 23, 40),
    Badge("Bolt Badge", 27, 50),
    Badge("Quake Badge", 31, 60),
    Badge("Jet Badge", 35, 70),
    Badge("Freeze Badge", 39, 80),
    Badge("Legend Badge", 43, 100),
]

ELITE_FOUR_CAP = 50
GHETSIS_CAP = 54
MAX_PROGRESS = len(BADGES) + 1  # 8 medallas + Alto Mando superado


class HasLevel(Protocol):
    level: int


def level_cap(badges: int) -> int:
    """Nivel máximo permitido con ``badges`` medallas.

    0-7 medallas: as del siguiente gimnasio. 8: Alto Mando. 9 (Alto Mando
    superado): Ghetsis.
    """
    if not 0 <= badges <= MAX_PROGRESS:
        raise ValueError(f"Progreso de medallas fuera de rango: {badges}")
    if badges < len(BADGES):
        return BADGES[badges].level_cap
    return ELITE_FOUR_CAP if badges == len(BADGES) else GHETSIS_CAP


def over_cap(members: Iterable[HasLevel], badges: int) -> list:
    cap = level_cap(badges)
    return [m for m in members if m.level > cap]
