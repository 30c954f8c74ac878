import requests


def stats(hp=100, atk=100, dfn=100, spa=100, spd=100, spe=100):
    return {"HP": hp, "Atk": atk, "Def": dfn, "SpA": spa, "SpD": spd, "Spe": spe}


# datos mínimos para los lookups falsos del controlador
SPECIES = {
    "panpour": {"stats": {"HP": 50, "Atk": 53, "Def": 48, "SpA": 53, "SpD": 48, "Spe": 64}, "types": ["Water"]},
    "pansear": {"stats": {"HP": 50, "Atk": 53, "Def": 48, "SpA": 53, "SpD": 48, "Spe": 64}, "types": ["Fire"]},
    "lillipup": {"stats": {"HP": 45, "Atk": 60, "Def": 45, "SpA": 25, "SpD": 45, "Spe": 55}, "types": ["Normal"]},
    "purrloin": {"stats": {"HP": 41, "Atk": 50, "Def": 37, "SpA": 50, "SpD": 37, "Spe": 66}, "types": ["Dark"]},
    "typeless": {"stats": {"HP": 50, "Atk": 50, "Def": 50, "SpA": 50, "SpD": 50, "Spe": 50}, "types": []},
}

MOVES = {
    "water-gun": {"name": "Water Gun", "type": "Water", "power": 40, "damage_class": "special",
                  "accuracy": 100, "priority": 0, "ailment": None, "ailment_chance": 0, "flinch_chance": 0},
    "incinerate": {"name": "Incinerate", "type": "Fire", "power": 30, "damage_class": "special",
                   "accuracy": 100, "priority": 0, "ailment": None, "ailment_chance": 0, "flinch_chance": 0},
    "tackle": {"name": "Tackle", "type": "Normal", "power": 50, "damage_class": "physical",
               "accuracy": 100, "priority": 0, "ailment": None, "ailment_chance": 0, "flinch_chance": 0},
    "scratch": {"name": "Scratch", "type": "Normal", "power": 40, "damage_class": "physical",
                "accuracy": 100, "priority": 0, "ailment": None, "ailment_chance": 0, "flinch_chance": 0},
    "growl": {"name": "Growl", "type": "Normal", "power": None, "damage_class": "status",
              "accuracy": 100, "priority": 0, "ailment": None, "ailment_chance": 0, "flinch_chance": 0},
}


def fake_move(name):
    if name not in MOVES:
        raise requests.HTTPError(f"404 {name}")
    return MOVES[name]
