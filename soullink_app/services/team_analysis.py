from typing import Iterable, List, Tuple

from .types import TYPE_CHART, defensive_profile
from ..models.combatant import Combatant

def team_weaknesses(party: Iterable[Combatant]) -> List[Tuple[str, int]]:
    """Cuántos miembros (con tipos conocidos) reciben más de x1 de cada tipo atacante.

    Orden: más miembros primero; en empate, orden del type chart.
    """
    counts = {t: 0 for t in TYPE_CHART}
    for mon in party:
        if not mon.types:
            continue
        for atk, mult in defensive_profile(mon.types).items():
            if mult > 1:
                counts[atk] += 1
    rows = [(t, n) for t, n in counts.items() if n > 0]
    return sorted(rows, key=lambda r: r[1], reverse=True)

def shared_weaknesses(party: Iterable[Combatant], threshold: int = 2) -> List[str]:
    return [t for t, n in team_weaknesses(party) if n >= threshold]
