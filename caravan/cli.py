"""Headless runner for caravan levels.

Run:
    caravan run
    caravan run --seconds 900 --seed 7 --plan c_mason_pyr:CARRIER:3
    caravan run --oracle --log-level DEBUG
    caravan show --json
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence

from caravan.advisor import AdvisorConfig, Oracle
from caravan.engine import Simulation
from caravan.inventory import InventoryHelper
from caravan.levels import nile_delta
from caravan.model import Session
from caravan.types import UnitKind
from caravan.views import construction_site, is_complete, snapshot_to_dict

logger = logging.getLogger(__name__)

DEFAULT_PLAN = (
    "c_q_dock:DONKEY_CART:2",
    "c_ferry:BARGE:1",
    "c_dock_mason:DONKEY_CART:2",
    "c_mason_pyr:CARRIER:4",
)


def parse_plan_entry(text: str) -> tuple[str, UnitKind, int]:
    """Parse ``ROUTE:KIND[:COUNT]``."""
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"expected ROUTE:KIND[:COUNT], got {text!r}")
    route_id, kind_name = parts[0], parts[1].upper()
    try:
        kind = UnitKind(kind_name)
    except ValueError:
        names = ", ".join(k.value for k in UnitKind)
        raise argparse.ArgumentTypeError(
            f"unknown unit kind {kind_name!r} (choose from {names})"
        ) from None
    count = 1
    if len(parts) == 3:
        try:
            count = int(parts[2])
        except ValueError:
            raise argparse.ArgumentTypeError(f"bad count in {text!r}") from None
        if count < 1:
            raise argparse.ArgumentTypeError(f"count must be >= 1 in {text!r}")
    return route_id, kind, count


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="caravan", description="Logistics tick simulation")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Simulate the Nile Delta headlessly")
    run.add_argument("--seconds", type=float, default=600.0,
                     help="Game seconds to simulate (default: 600)")
    run.add_argument("--frame-ms", type=float, default=16.0,
                     help="Milliseconds per tick (default: 16)")
    run.add_argument("--seed", type=int, default=None, help="Random seed")
    run.add_argument("--plan", type=parse_plan_entry, action="append", default=None,
                     metavar="ROUTE:KIND[:COUNT]",
                     help="Units to spawn before starting (repeatable)")
    run.add_argument("--oracle", action="store_true",
                     help="Ask the Oracle for advice at the end")
    run.add_argument("--json", action="store_true",
                     help="Print the final snapshot as JSON")

    show = sub.add_parser("show", help="Describe the level")
    show.add_argument("--seed", type=int, default=None, help="Tile seed")
    show.add_argument("--json", action="store_true", help="Print as JSON")
    return p


def format_report(session: Session) -> str:
    lines = [f"=== {session.level.name} ==="]
    lines.append(f"Time: {session.game_time / 1000:.1f}s  Ticks: {session.tick_number}")
    lines.append(f"Units: {len(session.units)} / {session.level.max_units}")
    site = construction_site(session)
    if site is not None:
        lines.append(
            f"{site.name}: {site.construction_progress} / {site.construction_target}"
        )
    lines.append("Buildings:")
    for b in session.buildings.values():
        inp = InventoryHelper.as_dict(b.input) or "-"
        out = InventoryHelper.as_dict(b.output) or "-"
        lines.append(f"  {b.name:<16} {b.kind.value:<18} in={inp} out={out}")
    return "\n".join(lines)


def _cmd_run(args: argparse.Namespace) -> int:
    sim = Simulation(nile_delta(args.seed), seed=args.seed)
    plan = args.plan if args.plan is not None else [parse_plan_entry(e) for e in DEFAULT_PLAN]
    for route_id, kind, count in plan:
        if sim.snapshot.connection(route_id) is None:
            print(f"unknown route: {route_id}", file=sys.stderr)
            return 2
        for _ in range(count):
            if not sim.spawn_unit(kind, route_id):
                logger.warning("unit cap reached, %s on %s not spawned", kind.value, route_id)
                break

    sim.toggle_run()
    remaining = args.seconds * 1000.0
    while remaining > 0 and not is_complete(sim.snapshot):
        dt = min(args.frame_ms, remaining)
        sim.step(dt)
        remaining -= dt

    session = sim.snapshot
    if args.json:
        print(json.dumps(snapshot_to_dict(session), indent=2))
    else:
        print(format_report(session))
        if is_complete(session):
            print("PYRAMID COMPLETE")

    if args.oracle:
        oracle = Oracle.from_config(AdvisorConfig.from_env())
        print(f"Oracle: {oracle.consult(session)}")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    session = Session.new(nile_delta(args.seed))
    if args.json:
        print(json.dumps(snapshot_to_dict(session), indent=2))
        return 0
    level = session.level
    print(f"{level.name} ({level.width}x{level.height}), unit cap {level.max_units}")
    for c in level.connections:
        kinds = ", ".join(sorted(k.value for k in c.allowed_units))
        print(f"  {c.id:<13} {c.source} -> {c.destination}  distance={c.distance}  [{kinds}]")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.command == "run":
        return _cmd_run(args)
    return _cmd_show(args)


if __name__ == "__main__":
    sys.exit(main())
