# soullink_app/app.py
"""Línea de comandos: planes de combate, informe de equipo, capturas y presets.

    soullink plan equipo.txt --trainer "Gym 3 (Burgh)"
    soullink team equipo.txt --badges 2
    soullink catch Zorua --ball "Dusk Ball" --hp 20 --status sleep --dark
"""
from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

import requests

from soullink_app.controllers.matchup_controller import BattlePlan, MatchupController, TeamReport
from soullink_app.models.combatant import WEATHERS, Combatant
from soullink_app.services.catch_calc import BALL_MODIFIERS, STATUS_MODIFIERS, CatchContext
from soullink_app.services.trainer_presets import TRAINER_PRESETS
from soullink_app.utils.logging_setup import setup_logging

log = logging.getLogger("soullink_app")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="soullink", description="Análisis de combates para Soul Link.")
    parser.add_argument("-v", "--verbose", action="store_true", help="logs en DEBUG")
    parser.add_argument("--log-file", action="store_true", help="además escribe logs/soullink.log")
    parser.add_argument("--data-dir", help="carpeta de las cachés JSON de PokéAPI")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("plan", help="ranking del equipo contra un rival")
    p.add_argument("team", help="fichero con sets en formato Showdown")
    rival = p.add_mutually_exclusive_group(required=True)
    rival.add_argument("--trainer", help="nombre de un preset (ver 'presets')")
    rival.add_argument("--opponent", help="fichero con el set del rival")
    p.add_argument("--weather", default="none", choices=WEATHERS)

    t = sub.add_parser("team", help="debilidades compartidas y cap de nivel")
    t.add_argument("team")
    t.add_argument("--badges", type=int, help="medallas (0-8), 9 tras el Alto Mando")
    t.add_argument("--threshold", type=int, default=2)

    c = sub.add_parser("catch", help="probabilidad de captura aproximada (Gen 5)")
    c.add_argument("species")
    c.add_argument("--ball", default="Poke Ball", type=str.lower, choices=sorted(BALL_MODIFIERS))
    c.add_argument("--hp", type=float, default=100, help="PS restantes en %%")
    c.add_argument("--status", default="none", choices=list(STATUS_MODIFIERS))
    c.add_argument("--level", type=int, default=20)
    c.add_argument("--turn", type=int, default=1)
    c.add_argument("--dark", action="store_true", help="de noche o en cueva (Dusk Ball)")
    c.add_argument("--surfing", action="store_true", help="pescando o surfeando (Dive Ball)")
    c.add_argument("--caught", action="store_true", help="ya registrado en la Pokédex (Repeat Ball)")

    sub.add_parser("presets", help="lista los entrenadores disponibles")
    return parser


def _read(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def format_plan(opponent: Combatant, result: BattlePlan) -> List[str]:
    lines = [f"== vs {opponent.display_name} (Nv {opponent.level}) =="]
    for i, entry in enumerate(result.ranked, 1):
        r = entry.result
        lines.append(
            f"{i}. {entry.combatant.display_name:<12} {r.safety:<5} score {r.score:>8.1f} | "
            f"{r.best_outgoing} {r.best_outgoing_pct}% / recibe {r.worst_incoming} {r.worst_incoming_pct}%"
            + (" | riesgo de control" if r.control_risk else "")
        )
    if result.tank:
        lines.append(f"Mejor muro por tipos: {result.tank[0].display_name} (x{result.tank[1]:g})")
    if result.threat:
        lines.append(f"Mayor amenaza por tipos: {result.threat[0].display_name} (x{result.threat[1]:g})")
    if result.plan:
        lines.extend(f"- {step}" for step in result.plan.steps())
    return lines


def format_team(report: TeamReport) -> List[str]:
    lines = [f"{t}: {n}" for t, n in report.weaknesses] or ["Sin debilidades."]
    if report.shared:
        lines.append("Compartidas: " + ", ".join(report.shared))
    if report.level_cap is not None:
        lines.append(f"Cap de nivel: {report.level_cap}")
        lines.extend(f"  {m.display_name} está en Nv {m.level}" for m in report.over_cap)
    return lines


def run(args: argparse.Namespace, controller: MatchupController) -> List[str]:
    if args.command == "presets":
        return [f"{p.name}: {p.description}" for p in TRAINER_PRESETS]
    if args.command == "catch":
        ctx = CatchContext(level=args.level, turn=args.turn, dark_or_cave=args.dark,
                           fishing_or_surfing=args.surfing, already_caught=args.caught)
        pct = controller.catch_odds(args.species, args.ball, args.hp, args.status, ctx)
        return [f"{args.species} con {args.ball}: ~{pct}%"]

    team = controller.combatants_from_team_text(_read(args.team))
    if args.command == "team":
        return format_team(controller.team_report(team, args.badges, args.threshold))

    if args.trainer:
        opponents = controller.load_trainer(args.trainer)
    else:
        opponents = [controller.combatant_from_text(_read(args.opponent))]
    lines: List[str] = []
    for opp in opponents:
        lines.extend(format_plan(opp, controller.plan_battle(team, opp, args.weather)))
    return lines


def main(argv: Optional[Sequence[str]] = None, controller: Optional[MatchupController] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, log_to_file=args.log_file)
    controller = controller or MatchupController(data_dir=args.data_dir)
    try:
        lines = run(args, controller)
    except (requests.RequestException, KeyError, ValueError, OSError) as e:
        log.error("%s", e)
        return 1
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
