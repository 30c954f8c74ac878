# soullink_app/utils/species_normalize.py
from __future__ import annotations

# Especies que PokéAPI solo sirve con la forma explícita
DEFAULT_FORMS = {
    "basculin": "basculin-red-striped",
    "darmanitan": "darmanitan-standard",
    "deoxys": "deoxys-normal",
    "giratina": "giratina-altered",
    "keldeo": "keldeo-ordinary",
    "landorus": "landorus-incarnate",
    "meloetta": "meloetta-aria",
    "shaymin": "shaymin-land",
    "thundurus": "thundurus-incarnate",
    "tornadus": "tornadus-incarnate",
    "wormadam": "wormadam-plant",
}

def normalize_species_name(slug: str, gender: str | None = None) -> str:
    """
    Normaliza cuando el set no trae la forma explícita.
    - Formas por defecto (Darmanitan → Standard, Giratina → Altered, ...)
    - Nidoran por género (♀ → nidoran-f, default → nidoran-m)
    """
    if not slug:
        return slug
    s = slug.strip().lower()
    if s == "nidoran":
        g = (gender or "").strip().lower()
        return "nidoran-f" if g in ("f", "female", "♀") else "nidoran-m"
    return DEFAULT_FORMS.get(s, s)
