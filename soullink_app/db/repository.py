from __future__ import annotations

import json
import re
from typing import Dict, List, Optional
from sqlalchemy import select, asc, desc, delete, func, update
from sqlalchemy.orm import Session
from .base import Base, engine
from .models import Species, RosterMember, Route, PLAYERS, LOCATIONS, ROUTE_STATUSES

def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)

def upsert_species(session: Session, name: str, base_stats: Dict[str, int], types: List[str]) -> Species:
    sp = session.scalar(select(Species).where(Species.name == name))
    if not sp:
        sp = Species(name=name)
        session.add(sp)
    sp.base_hp = base_stats["HP"]
    sp.base_atk = base_stats["Atk"]
    sp.base_def = base_stats["Def"]
    sp.base_spa = base_stats["SpA"]
    sp.base_spd = base_stats["SpD"]
    sp.base_spe = base_stats["Spe"]
    sp.type1 = types[0] if types else None
    sp.type2 = types[1] if len(types) > 1 else None
    session.flush()
    return sp

def species_base_stats(sp: Species) -> Dict[str, int]:
    return {"HP": sp.base_hp, "Atk": sp.base_atk, "Def": sp.base_def,
            "SpA": sp.base_spa, "SpD": sp.base_spd, "Spe": sp.base_spe}

def species_types(sp: Species) -> List[str]:
    return [t for t in (sp.type1, sp.type2) if t]

def add_member(
    session: Session,
    species: Species,
    *,
    nickname: str | None = None,
    owner: str = "player1",
    location: str = "party",
    level: int = 50,
    moves: list[str] | None = None,
    pair_id: str | None = None,
    route: str | None = None,
) -> RosterMember:
    if owner not in PLAYERS:
        raise ValueError(f"Jugador desconocido: {owner}")
    if location not in LOCATIONS:
        raise ValueError(f"Ubicación desconocida: {location}")
    member = RosterMember(
        species_id=species.id,
        nickname=nickname,
        owner=owner,
        location=location,
        level=level,
        moves_json=json.dumps((moves or [])[:4], ensure_ascii=False),
        pair_id=pair_id,
        route=route,
    )
    session.add(member)
    session.flush()
    return member

def member_moves(member: RosterMember) -> list[str]:
    return json.loads(member.moves_json or "[]")

def list_members(
    session: Session,
    owner: Optional[str] = None,
    location: Optional[str] = None,
    only_species: Optional[str] = None,
    order_by: Optional[str] = None,
    order_dir: str = "asc",
) -> list[RosterMember]:
    stmt = select(RosterMember).join(Species, RosterMember.species_id == Species.id)
    if owner:
        stmt = stmt.where(RosterMember.owner == owner)
    if location:
        stmt = stmt.where(RosterMember.location == location)
    if only_species:
        stmt = stmt.where(Species.name.ilike(only_species))
    ob = (order_by or "id").lower()
    use_dir = desc if (order_dir or "asc").lower() == "desc" else asc
    if ob == "species":
        stmt = stmt.order_by(use_dir(Species.name), RosterMember.id)
    elif ob == "level":
        stmt = stmt.order_by(use_dir(RosterMember.level), RosterMember.id)
    elif ob == "created":
        stmt = stmt.order_by(use_dir(RosterMember.created_at), RosterMember.id)
    else:
        stmt = stmt.order_by(use_dir(RosterMember.id))
    return list(session.scalars(stmt).all())

def get_member(session: Session, member_id: int) -> RosterMember | None:
    return session.get(RosterMember, member_id)

def update_member(session: Session, member_id: int, *, level: int | None = None, nickname: str | None = None,
                  location: str | None = None, moves: list[str] | None = None, route: str | None = None) -> int:
    m = session.get(RosterMember, member_id)
    if not m:
        return 0
    if level is not None:
        m.level = level
    if nickname is not None:
        m.nickname = nickname
    if location is not None:
        if location not in LOCATIONS:
            raise ValueError(f"Ubicación desconocida: {location}")
        m.location = location
    if moves is not None:
        m.moves_json = json.dumps(moves[:4], ensure_ascii=False)
    if route is not None:
        m.route = route
    session.commit()
    return 1

def send_pair_to_graveyard(session: Session, member_id: int, *, killed_by: str | None = None,
                           incident: str | None = None) -> int:
    """Un debilitado arrastra a sus compañeros enlazados al cementerio.

    ``killed_by`` y ``incident`` quedan registrados en todo el grupo.
    """
    if killed_by is not None and killed_by not in PLAYERS:
        raise ValueError(f"Jugador desconocido: {killed_by}")
    m = session.get(RosterMember, member_id)
    if not m:
        return 0
    values = {"location": "graveyard", "killed_by": killed_by, "incident": incident}
    if not m.pair_id:
        for k, v in values.items():
            setattr(m, k, v)
        session.commit()
        return 1
    res = session.execute(
        update(RosterMember).where(RosterMember.pair_id == m.pair_id).values(**values)
    )
    session.commit()
    return int(res.rowcount or 0)

def delete_members(session: Session, ids: list[int]) -> int:
    if not ids:
        return 0
    res = session.execute(delete(RosterMember).where(RosterMember.id.in_(ids)))
    session.commit()
    return int(res.rowcount or 0)

def death_counts(session: Session) -> Dict[str, int]:
    """Muertes en el cementerio atribuidas a cada jugador."""
    rows = session.execute(
        select(RosterMember.killed_by, func.count(RosterMember.id))
        .where(RosterMember.location == "graveyard", RosterMember.killed_by.is_not(None))
        .group_by(RosterMember.killed_by)
    ).all()
    counts = {p: 0 for p in PLAYERS}
    counts.update({player: int(n) for player, n in rows})
    return counts

# ---------- Rutas ----------
DEFAULT_ROUTES = [
    ("start", "Nuvema Town (Starter)"), ("r1", "Route 1"), ("accumula", "Accumula Town"),
    ("r2", "Route 2"), ("striaton", "Striaton City"), ("dream-gift", "Dreamyard (Gift Monkey)"),
    ("dream-grass", "Dreamyard (Grass)"), ("r3", "Route 3"), ("wellspring", "Wellspring Cave"),
    ("nacrene", "Nacrene City (Fossil/Event)"), ("pinwheel-out", "Pinwheel Forest (Outer)"),
    ("pinwheel-in", "Pinwheel Forest (Inner)"), ("castelia", "Castelia City"), ("r4", "Route 4"),
    ("desert", "Desert Resort"), ("relic", "Relic Castle"), ("nimbasa", "Nimbasa City"),
    ("r16", "Route 16"), ("lostlorn", "Lostlorn Forest"), ("r5", "Route 5"),
    ("driftveil", "Driftveil Drawbridge"), ("driftveil-city", "Driftveil City"),
    ("cold", "Cold Storage"), ("r6", "Route 6"), ("chargestone", "Chargestone Cave"),
    ("mistralton", "Mistralton Cave"), ("guidance", "Guidance Chamber"), ("r7", "Route 7"),
    ("celestial", "Celestial Tower"), ("twist", "Twist Mountain"), ("icirrus", "Icirrus City"),
    ("dragonspiral-out", "Dragonspiral Tower (Outside)"), ("dragonspiral-in", "Dragonspiral Tower (Inside)"),
    ("r8", "Route 8"), ("moor", "Moor of Icirrus"), ("r9", "Route 9"), ("r10", "Route 10"),
    ("victory-out", "Victory Road (Outside)"), ("victory-in", "Victory Road (Inside)"),
    ("r17", "Route 17 (Surf)"), ("r18", "Route 18"), ("p2", "P2 Laboratory"), ("egg", "Larvesta Egg"),
]

def seed_routes(session: Session) -> int:
    """Crea las rutas de Teselia que falten. Devuelve cuántas se añadieron."""
    existing = set(session.scalars(select(Route.slug)).all())
    added = 0
    for slug, name in DEFAULT_ROUTES:
        if slug not in existing:
            session.add(Route(slug=slug, name=name, status="empty", failed_by_json="[]", is_custom=False))
            added += 1
    session.commit()
    return added

def add_route(session: Session, name: str, slug: str | None = None) -> Route:
    slug = slug or re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    if session.scalar(select(Route).where(Route.slug == slug)):
        raise ValueError(f"Ya existe la ruta '{slug}'.")
    route = Route(slug=slug, name=name, status="empty", failed_by_json="[]", is_custom=True)
    session.add(route)
    session.flush()
    return route

def get_route(session: Session, slug: str) -> Route | None:
    return session.scalar(select(Route).where(Route.slug == slug))

def list_routes(session: Session, status: str | None = None) -> list[Route]:
    stmt = select(Route).order_by(Route.id)
    if status:
        stmt = stmt.where(Route.status == status)
    return list(session.scalars(stmt).all())

def route_failed_by(route: Route) -> list[str]:
    return json.loads(route.failed_by_json or "[]")

def _route_or_error(session: Session, slug: str) -> Route:
    route = get_route(session, slug)
    if not route:
        raise KeyError(f"Ruta desconocida: {slug}")
    return route

def record_encounters(session: Session, slug: str, encounters: Dict[str, str | None]) -> Route:
    """Apunta la captura de cada jugador. La ruta queda 'caught' solo con las tres."""
    unknown = set(encounters) - set(PLAYERS)
    if unknown:
        raise ValueError(f"Jugadores desconocidos: {sorted(unknown)}")
    route = _route_or_error(session, slug)
    for player in PLAYERS:
        if player in encounters:
            setattr(route, "encounter_p" + player[-1], encounters[player] or None)
    caught = [route.encounter_p1, route.encounter_p2, route.encounter_p3]
    route.status = "caught" if all(caught) else "empty"
    route.failed_by_json = "[]"
    session.commit()
    return route

def mark_route_failed(session: Session, slug: str, failed_by: list[str], skipped: bool = False) -> Route:
    bad = [p for p in failed_by if p not in PLAYERS]
    if bad:
        raise ValueError(f"Jugadores desconocidos: {bad}")
    route = _route_or_error(session, slug)
    route.status = "skipped" if skipped else "failed"
    route.failed_by_json = json.dumps(list(dict.fromkeys(failed_by)))
    session.commit()
    return route

def set_route_status(session: Session, slug: str, status: str) -> Route:
    if status not in ROUTE_STATUSES:
        raise ValueError(f"Estado de ruta desconocido: {status}")
    route = _route_or_error(session, slug)
    route.status = status
    session.commit()
    return route
