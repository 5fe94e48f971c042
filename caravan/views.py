"""Read-only queries over a session for UI and render collaborators."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from caravan.inventory import InventoryHelper
from caravan.model import Building, Connection, Session, Unit
from caravan.types import BuildingKind, UnitKind


@dataclass(frozen=True)
class RouteView:
    """What the route inspector shows for one route."""

    route: Connection
    source: Building
    destination: Building
    units: tuple[Unit, ...]

    @property
    def source_stock(self) -> int:
        return InventoryHelper.total(self.source.output)

    @property
    def destination_stock(self) -> int:
        return InventoryHelper.total(self.destination.input)


def construction_site(session: Session) -> Building | None:
    for building in session.buildings.values():
        if building.kind == BuildingKind.CONSTRUCTION_SITE:
            return building
    return None


def is_complete(session: Session) -> bool:
    site = construction_site(session)
    return site is not None and site.construction_progress >= site.construction_target


def unit_count(session: Session) -> int:
    return len(session.units)


def at_cap(session: Session) -> bool:
    return len(session.units) >= session.level.max_units


def can_travel(route: Connection, kind: UnitKind) -> bool:
    """True if *kind* is among the route's permitted unit kinds."""
    return kind in route.allowed_units


def units_on(session: Session, route_id: str) -> tuple[Unit, ...]:
    return tuple(u for u in session.units if u.route_id == route_id)


def inspect_route(session: Session, route_id: str | None = None) -> RouteView | None:
    """View of *route_id*, or of the selected route when omitted.

    Returns None when no route is selected or an endpoint is missing.
    """
    route = session.connection(route_id if route_id is not None else session.selected_route)
    if route is None:
        return None
    source = session.building(route.source)
    destination = session.building(route.destination)
    if source is None or destination is None:
        return None
    return RouteView(
        route=route,
        source=source,
        destination=destination,
        units=units_on(session, route.id),
    )


def _building_dict(b: Building) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": b.id,
        "kind": b.kind.value,
        "name": b.name,
        "x": b.placement.x,
        "y": b.placement.y,
        "width": b.placement.width,
        "height": b.placement.height,
        "input": InventoryHelper.as_dict(b.input),
        "output": InventoryHelper.as_dict(b.output),
        "max_storage": b.max_storage,
        "production_progress": b.production_progress,
    }
    if b.kind == BuildingKind.CONSTRUCTION_SITE:
        data["construction_progress"] = b.construction_progress
        data["construction_target"] = b.construction_target
        data["required_resource"] = b.consumes.value
    return data


def snapshot_to_dict(session: Session) -> dict[str, Any]:
    """JSON-ready view of everything a renderer needs."""
    level = session.level
    return {
        "level": {
            "id": level.id,
            "name": level.name,
            "width": level.width,
            "height": level.height,
            "max_units": level.max_units,
            "tiles": [[t.value for t in row] for row in level.tiles],
        },
        "buildings": [_building_dict(b) for b in session.buildings.values()],
        "connections": [
            {
                "id": c.id,
                "source": c.source,
                "destination": c.destination,
                "path": [list(p) for p in c.path],
                "distance": c.distance,
                "terrain": [t.value for t in c.terrain],
                "allowed_units": sorted(u.value for u in c.allowed_units),
            }
            for c in level.connections
        ],
        "units": [
            {
                "id": u.id,
                "kind": u.kind.value,
                "route": u.route_id,
                "position": u.position,
                "state": u.state.value,
                "cargo": InventoryHelper.as_dict(u.cargo),
            }
            for u in session.units
        ],
        "running": session.running,
        "game_time": session.game_time,
        "selected_route": session.selected_route,
        "tick_number": session.tick_number,
    }
