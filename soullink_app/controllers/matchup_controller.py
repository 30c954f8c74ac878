import logging
import os
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import requests

from ..db.models import RosterMember
from ..db.repository import member_moves, species_base_stats, species_types
from ..models.combatant import AnalysisResult, Combatant, Move
from ..models.pokemon import PokemonData
from ..parsing.showdown_parser import parse_showdown_team, parse_showdown_text
from ..services.catch_calc import CatchContext, catch_chance
from ..services.level_caps import level_cap, over_cap
from ..services.matchup import analyze_matchup
from ..services.move_provider import ensure_move_in_json, move_from_dict
from ..services.ranking import RankedEntry, best_type_tank, best_type_threat, rank_roster
from ..services.species_provider import ensure_capture_rate, ensure_species_in_json
from ..services.strategy import StrategyPlan, suggest_plan
from ..services.team_analysis import shared_weaknesses, team_weaknesses
from ..services.trainer_presets import get_preset

log = logging.getLogger(__name__)

DEFAULT_DATA_DIR = os.environ.get(
    "SOULLINK_DATA_DIR",
    os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "data")),
)

SpeciesLookup = Callable[[str], Dict]
MoveLookup = Callable[[str], Dict]
RateLookup = Callable[[str], int]


@dataclass
class BattlePlan:
    ranked: List[RankedEntry]
    plan: Optional[StrategyPlan]
    tank: Optional[Tuple[Combatant, float]]
    threat: Optional[Tuple[Combatant, float]]

    @property
    def best(self) -> Optional[RankedEntry]:
        return self.ranked[0] if self.ranked else None


@dataclass
class TeamReport:
    weaknesses: List[Tuple[str, int]]
    shared: List[str]
    level_cap: Optional[int] = None
    over_cap: List[Combatant] = field(default_factory=list)


class MatchupController:
    """Resuelve nombres a datos (providers con caché) y delega en el motor."""

    def __init__(self, species_lookup: SpeciesLookup | None = None, move_lookup: MoveLookup | None = None,
                 data_dir: str | None = None, capture_rate_lookup: RateLookup | None = None):
        data_dir = data_dir or DEFAULT_DATA_DIR
        species_path = os.path.join(data_dir, "species_cache.json")
        moves_path = os.path.join(data_dir, "moves_cache.json")
        self.species_lookup = species_lookup or (lambda name: ensure_species_in_json(name, species_path))
        self.move_lookup = move_lookup or (lambda name: ensure_move_in_json(name, moves_path))
        self.capture_rate_lookup = capture_rate_lookup or (lambda name: ensure_capture_rate(name, species_path))

    def resolve_moves(self, names: Iterable[str]) -> List[Optional[Move]]:
        moves: List[Optional[Move]] = []
        for name in list(names)[:4]:
            if not name:
                moves.append(None)
                continue
            try:
                moves.append(move_from_dict(self.move_lookup(name)))
            except (requests.RequestException, KeyError, ValueError) as e:
                # hueco desconocido: se excluye del análisis, no cuenta como 0
                log.warning("No se pudo cargar el movimiento '%s': %s", name, e)
                moves.append(None)
        return moves

    def build_combatant(self, species: str, level: int = 50, moves: Sequence[str] = (), nickname: str = "",
                        condition: str = "none", owner: str | None = None) -> Combatant:
        info = self.species_lookup(species)
        types = list(info.get("types") or [])
        if not types:
            raise ValueError(f"No hay tipos para '{species}'.")
        return Combatant(
            species=species,
            types=types,
            base_stats=dict(info["stats"]),
            level=level or 50,
            nickname=nickname or "",
            moves=self.resolve_moves(moves),
            condition=condition,
            owner=owner,
        )

    def combatant_from_set(self, pdata: PokemonData, owner: str | None = None) -> Combatant:
        return self.build_combatant(pdata.species, pdata.level, pdata.moves, pdata.nickname or "", owner=owner)

    def combatant_from_text(self, text: str, owner: str | None = None) -> Combatant:
        return self.combatant_from_set(parse_showdown_text(text), owner=owner)

    def combatants_from_team_text(self, text: str, owner: str | None = None) -> List[Combatant]:
        return [self.combatant_from_set(p, owner=owner) for p in parse_showdown_team(text)]

    def combatant_from_member(self, member: RosterMember) -> Combatant:
        sp = member.species
        types = species_types(sp)
        if not types:
            raise ValueError(f"No hay tipos para '{sp.name}'.")
        mon = Combatant(
            species=sp.name,
            types=types,
            base_stats=species_base_stats(sp),
            level=member.level,
            nickname=member.nickname or "",
            moves=self.resolve_moves(member_moves(member)),
            owner=member.owner,
            member_id=member.id,
        )
        return mon

    def load_trainer(self, preset_name: str) -> List[Combatant]:
        preset = get_preset(preset_name)
        log.info("Cargando %s (%d Pokémon)", preset.name, len(preset.pokemon))
        return [self.build_combatant(p.species, p.level, p.moves) for p in preset.pokemon]

    def analyze(self, mine: Combatant, theirs: Combatant, weather: str = "none") -> AnalysisResult:
        result = analyze_matchup(mine, theirs, weather)
        log.debug("%s vs %s: %s (score %.1f)", mine.display_name, theirs.display_name, result.safety, result.score)
        return result

    def plan_battle(self, roster: Sequence[Combatant], opponent: Combatant, weather: str = "none") -> BattlePlan:
        ranked = rank_roster(roster, opponent, weather)
        plan = suggest_plan(ranked, opponent)
        if ranked:
            top = ranked[0]
            log.info("Mejor opción vs %s: %s (%s)", opponent.display_name, top.combatant.display_name, top.result.safety)
        if plan:
            for step in plan.steps():
                log.info(step)
        return BattlePlan(
            ranked=ranked,
            plan=plan,
            tank=best_type_tank(roster, opponent),
            threat=best_type_threat(roster, opponent),
        )

    def team_report(self, party: Sequence[Combatant], badges: int | None = None,
                    threshold: int = 2) -> TeamReport:
        """Debilidades compartidas y, si se da el progreso, quién supera el cap."""
        report = TeamReport(weaknesses=team_weaknesses(party), shared=shared_weaknesses(party, threshold))
        if badges is not None:
            report.level_cap = level_cap(badges)
            report.over_cap = over_cap(party, badges)
            for mon in report.over_cap:
                log.warning("%s (Nv %d) supera el cap de %d", mon.display_name, mon.level, report.level_cap)
        return report

    def catch_odds(self, species: str, ball: str, hp_pct: float = 100, condition: str = "none",
                   ctx: CatchContext = CatchContext()) -> float:
        rate = self.capture_rate_lookup(species)
        # la Net Ball se decide por los tipos de la especie
        types = set(self.species_lookup(species).get("types") or [])
        if types & {"Water", "Bug"}:
            ctx = replace(ctx, water_or_bug=True)
        return catch_chance(rate, ball, hp_pct, condition, ctx)
