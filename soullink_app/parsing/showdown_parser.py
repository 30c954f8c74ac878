import re
from typing import List, Optional
from ..models.pokemon import PokemonData

# Regex tolerantes (ignoran espacios extra antes/después de ':')
RE_KV = {
    "ability": re.compile(r"^\s*ability\s*\:\s*(.+)\s*$", re.I),
    "item":    re.compile(r"^\s*item\s*\:\s*(.+)\s*$", re.I),
    "level":   re.compile(r"^\s*level\s*\:\s*(\d+)\s*$", re.I),
    # EVs/IVs no se usan: stats con IV 15 / EV 0
    "spread":  re.compile(r"^\s*[ei]vs\s*\:\s*(.+)\s*$", re.I),
}
RE_NATURE = re.compile(r"^\s*([A-Za-z]+)\s+Nature\s*$", re.I)

# Acepta guiones ascii y bullets comunes como inicio de movimiento
RE_MOVE = re.compile(r"^\s*[\-\–\—\•\·]\s*(.+?)\s*$")

# 'Apodo (Especie) (M) @ Item' | 'Especie (F) @ Item' | 'Especie'
RE_HEADER = re.compile(
    r"^(?P<first>[^@\(]+?)"
    r"(?:\s*\((?P<second>[^\)]{2,})\))?"
    r"(?:\s*\((?P<gender>[MF])\))?"
    r"(?:\s*@\s*(?P<item>.+))?$"
)

def _parse_header(line: str):
    m1 = RE_HEADER.match(line.strip())
    if not m1:
        raise ValueError(f"No se pudo interpretar la primera línea: '{line}'")
    first = m1.group("first").strip()
    second = (m1.group("second") or "").strip()
    if second:
        species, nickname = second, first
    else:
        species, nickname = first, None
    item = (m1.group("item") or "").strip() or None
    return species, nickname, m1.group("gender"), item

def parse_showdown_text(data_str: str) -> PokemonData:
    lines = [l.rstrip() for l in (data_str or "").splitlines() if l.strip()]
    if not lines:
        raise ValueError("Entrada vacía.")

    species, nickname, gender, item = _parse_header(lines[0])

    ability: Optional[str] = None
    level: int = 50
    nature: Optional[str] = None
    moves: List[str] = []

    for raw in lines[1:]:
        # Campos clave:valor
        for key, rx in RE_KV.items():
            m = rx.match(raw)
            if m:
                val = m.group(1).strip()
                if key == "ability":
                    ability = val or ability
                elif key == "item":
                    item = val or item
                elif key == "level":
                    level = int(val) or level
                break
        else:
            # Nature
            mnat = RE_NATURE.match(raw)
            if mnat:
                nature = mnat.group(1).capitalize()
                continue

            # Movimiento
            mm = RE_MOVE.match(raw)
            if mm:
                move = mm.group(1).strip()
                if move and len(moves) < 4:
                    moves.append(move)
                continue
            # otras líneas (Shiny, Happiness, etc.) se ignoran

    return PokemonData(
        species=species, nickname=nickname, gender=gender, item=item,
        ability=ability, level=level, nature=nature, moves=moves,
    )

def parse_showdown_team(data_str: str) -> List[PokemonData]:
    """Varios sets separados por líneas en blanco."""
    blocks = re.split(r"\n\s*\n", (data_str or "").strip())
    return [parse_showdown_text(b) for b in blocks if b.strip()]
