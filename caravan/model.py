"""World model: buildings, routes, units, the static level and the session snapshot."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field

from caravan.grid import Coord, expand_footprint
from caravan.inventory import Inventory
from caravan.types import (
    BuildingKind,
    LevelError,
    ResourceKind,
    TerrainKind,
    UnitKind,
    UnitState,
)

HUB_KINDS = frozenset({BuildingKind.WAREHOUSE})
CONSUMER_KINDS = frozenset({BuildingKind.CONSTRUCTION_SITE})


@dataclass(frozen=True)
class Placement:
    """Grid position and size of a building. Never changes after creation."""

    x: int
    y: int
    width: int = 1
    height: int = 1

    def cells(self) -> list[Coord]:
        return expand_footprint((self.x, self.y), self.width, self.height)


@dataclass
class Building:
    """A building and its live state.

    ``max_storage`` bounds the output inventory of producers and hubs. The
    construction fields are only meaningful for consumption targets.
    """

    id: str
    kind: BuildingKind
    name: str
    placement: Placement
    input: Inventory = field(default_factory=Inventory)
    output: Inventory = field(default_factory=Inventory)
    max_storage: int = 50
    production_progress: float = 0.0
    construction_progress: int = 0
    construction_target: int = 0
    required_resource: ResourceKind | None = None

    @property
    def is_hub(self) -> bool:
        return self.kind in HUB_KINDS

    @property
    def is_consumer(self) -> bool:
        return self.kind in CONSUMER_KINDS

    @property
    def consumes(self) -> ResourceKind:
        """Resource a consumption target builds with."""
        return self.required_resource or ResourceKind.STONE_BLOCK


@dataclass(frozen=True)
class Connection:
    """A static route between two buildings."""

    id: str
    source: str
    destination: str
    path: tuple[Coord, ...]
    distance: float
    terrain: tuple[TerrainKind, ...] = ()
    allowed_units: frozenset[UnitKind] = frozenset()

    def __post_init__(self) -> None:
        if len(self.path) < 2:
            raise LevelError(f"Route {self.id!r} needs at least 2 waypoints")
        if self.distance <= 0:
            raise LevelError(f"Route {self.id!r} distance must be > 0, got {self.distance}")


@dataclass
class Unit:
    id: str
    kind: UnitKind
    route_id: str
    position: float = 0.0
    state: UnitState = UnitState.IDLE_AT_START
    cargo: Inventory = field(default_factory=Inventory)
    timer: float = 0.0


@dataclass(frozen=True)
class Level:
    """Static level fixture. Buildings hold their initial state."""

    id: str
    name: str
    width: int
    height: int
    tiles: tuple[tuple[TerrainKind, ...], ...]
    buildings: tuple[Building, ...]
    connections: tuple[Connection, ...]
    max_units: int
    _routes: dict[str, Connection] = field(
        init=False, repr=False, compare=False, default_factory=dict,
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_routes", {c.id: c for c in self.connections})

    def connection(self, route_id: str | None) -> Connection | None:
        if route_id is None:
            return None
        return self._routes.get(route_id)

    def terrain_at(self, x: int, y: int) -> TerrainKind:
        return self.tiles[y][x]


@dataclass(frozen=True)
class Session:
    """Complete, consistent world state at a tick boundary.

    Published sessions are never mutated: each tick and each command builds
    a new one. ``level`` is shared between snapshots.
    """

    level: Level
    buildings: dict[str, Building]
    units: tuple[Unit, ...] = ()
    running: bool = False
    game_time: float = 0.0
    selected_route: str | None = None
    next_unit: int = 1
    tick_number: int = 0

    @classmethod
    def new(cls, level: Level) -> Session:
        """Start a session with fresh copies of the level's buildings."""
        buildings = {b.id: copy.deepcopy(b) for b in level.buildings}
        return cls(level=level, buildings=buildings)

    def building(self, building_id: str) -> Building | None:
        return self.buildings.get(building_id)

    def connection(self, route_id: str | None) -> Connection | None:
        return self.level.connection(route_id)
