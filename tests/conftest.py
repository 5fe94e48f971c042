"""Shared fixtures: a small three-building level and tick contexts."""
from __future__ import annotations

import random
from typing import Callable

import pytest

from caravan import (
    Building,
    BuildingKind,
    Connection,
    Level,
    Placement,
    ResourceKind,
    Session,
    TerrainKind,
    TickContext,
    UnitKind,
)


def _tiles(width: int, height: int) -> tuple[tuple[TerrainKind, ...], ...]:
    return tuple(tuple(TerrainKind.SAND for _ in range(width)) for _ in range(height))


@pytest.fixture
def make_level() -> Callable[..., Level]:
    """Quarry -> depot (warehouse) -> site, one route per hop."""

    def _make(
        max_units: int = 5,
        depot_storage: int = 10,
        site_target: int = 3,
        distance: float = 5,
        terrain: tuple[TerrainKind, ...] = (TerrainKind.ROAD_DIRT,),
    ) -> Level:
        buildings = (
            Building("quarry", BuildingKind.QUARRY, "Quarry", Placement(0, 0, 2, 2)),
            Building("depot", BuildingKind.WAREHOUSE, "Depot", Placement(5, 0),
                     max_storage=depot_storage),
            Building("site", BuildingKind.CONSTRUCTION_SITE, "Site", Placement(9, 0, 2, 2),
                     max_storage=200, construction_target=site_target,
                     required_resource=ResourceKind.STONE_RAW),
        )
        connections = (
            Connection("r1", "quarry", "depot", ((2, 0), (5, 0)), distance,
                       terrain, frozenset({UnitKind.DONKEY_CART})),
            Connection("r2", "depot", "site", ((6, 0), (9, 0)), distance,
                       terrain, frozenset({UnitKind.CARRIER})),
        )
        return Level("test", "Test", 12, 3, _tiles(12, 3), buildings, connections, max_units)

    return _make


@pytest.fixture
def level(make_level: Callable[..., Level]) -> Level:
    return make_level()


@pytest.fixture
def session(level: Level) -> Session:
    return Session.new(level)


@pytest.fixture
def make_ctx() -> Callable[..., TickContext]:
    def _make(dt: float = 16.0, seed: int = 0, tick_number: int = 1) -> TickContext:
        return TickContext(
            tick_number=tick_number, dt=dt, elapsed=dt * tick_number,
            random=random.Random(seed),
        )

    return _make
