from dataclasses import dataclass, field
from typing import List, Optional

@dataclass
class PokemonData:
    species: str
    nickname: Optional[str] = None
    gender: Optional[str] = None
    item: Optional[str] = None
    ability: Optional[str] = None
    level: int = 50
    nature: Optional[str] = None
    moves: List[str] = field(default_factory=list)
