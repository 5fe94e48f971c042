"""Build a Level from plain (JSON-compatible) data."""
from __future__ import annotations

from typing import Any

from caravan.inventory import Inventory
from caravan.model import Building, Connection, Level, Placement
from caravan.types import (
    BuildingKind,
    LevelError,
    ResourceKind,
    TerrainKind,
    UnitKind,
)


def _inventory(data: dict[str, int] | None) -> Inventory:
    slots = {ResourceKind(name): amount for name, amount in (data or {}).items() if amount}
    return Inventory(slots=slots)


def _building(data: dict[str, Any]) -> Building:
    required = data.get("required_resource")
    return Building(
        id=data["id"],
        kind=BuildingKind(data["kind"]),
        name=data.get("name", data["id"]),
        placement=Placement(
            data["x"], data["y"], data.get("width", 1), data.get("height", 1),
        ),
        input=_inventory(data.get("input")),
        output=_inventory(data.get("output")),
        max_storage=data.get("max_storage", 50),
        construction_target=data.get("construction_target", 0),
        required_resource=ResourceKind(required) if required else None,
    )


def _connection(data: dict[str, Any]) -> Connection:
    return Connection(
        id=data["id"],
        source=data["source"],
        destination=data["destination"],
        path=tuple((int(p[0]), int(p[1])) for p in data["path"]),
        distance=data["distance"],
        terrain=tuple(TerrainKind(t) for t in data.get("terrain", ())),
        allowed_units=frozenset(UnitKind(u) for u in data.get("allowed_units", ())),
    )


def load_level(data: dict[str, Any]) -> Level:
    """Convert a level dict into a Level.

    Raises LevelError on missing keys, unknown enum names or broken routes.
    Cross-references (route endpoints, tile sizes) are not checked.
    """
    try:
        return Level(
            id=data["id"],
            name=data.get("name", data["id"]),
            width=data["width"],
            height=data["height"],
            tiles=tuple(tuple(TerrainKind(t) for t in row) for row in data["tiles"]),
            buildings=tuple(_building(b) for b in data["buildings"]),
            connections=tuple(_connection(c) for c in data["connections"]),
            max_units=data["max_units"],
        )
    except KeyError as exc:
        raise LevelError(f"Level data is missing key {exc.args[0]!r}") from exc
    except ValueError as exc:
        raise LevelError(str(exc)) from exc
