"""The Nile Delta: quarry in the south-west, pyramid in the north-east, a river between."""
from __future__ import annotations

import random

from caravan.model import Building, Connection, Level, Placement
from caravan.types import BuildingKind, ResourceKind, TerrainKind, UnitKind

WIDTH = 25
HEIGHT = 18
MAX_UNITS = 15


def _tile(x: int, y: int, rng: random.Random) -> TerrainKind:
    main_river = x <= 8 and 8 <= y <= 10
    north_branch = x > 8 and 8 - (x - 8) / 2 <= y <= 10 - (x - 8) / 2
    south_branch = x > 8 and 8 + (x - 8) / 2 <= y <= 10 + (x - 8) / 2
    river = main_river or north_branch or south_branch

    terrain = TerrainKind.WATER if river else TerrainKind.SAND
    if x < 5 and y > 13:
        terrain = TerrainKind.MOUNTAIN
    if x > 20 and y > 14:
        terrain = TerrainKind.MOUNTAIN

    # Grass only grows near the river banks.
    if not river and ((abs(y - 9) < 4 and x < 8) or (x > 8 and 7 < y < 13)):
        if rng.random() > 0.7:
            terrain = TerrainKind.GRASS

    if terrain == TerrainKind.SAND and y == 15 and 4 < x < 15:
        terrain = TerrainKind.ROAD_DIRT
    return terrain


def generate_tiles(rng: random.Random) -> tuple[tuple[TerrainKind, ...], ...]:
    return tuple(
        tuple(_tile(x, y, rng) for x in range(WIDTH)) for y in range(HEIGHT)
    )


def buildings() -> tuple[Building, ...]:
    return (
        Building("b_quarry_sw", BuildingKind.QUARRY, "South Quarry",
                 Placement(2, 14, 2, 2), max_storage=50),
        # On the southern shore; the river is at y=10 here.
        Building("b_dock_south", BuildingKind.WAREHOUSE, "South Port",
                 Placement(8, 11, 2, 1), max_storage=100),
        # The island between the two branches.
        Building("b_hub_central", BuildingKind.WAREHOUSE, "Desert Outpost",
                 Placement(14, 11, 1, 1), max_storage=30),
        Building("b_dock_north", BuildingKind.WAREHOUSE, "North Port",
                 Placement(10, 5, 2, 1), max_storage=100),
        Building("b_mason_village", BuildingKind.STONEMASON, "Mason Village",
                 Placement(14, 2, 2, 2), max_storage=50),
        Building("b_pyramid", BuildingKind.CONSTRUCTION_SITE, "Great Pyramid",
                 Placement(20, 2, 3, 3), max_storage=200,
                 construction_target=100,
                 required_resource=ResourceKind.STONE_BLOCK),
    )


def connections() -> tuple[Connection, ...]:
    return (
        # River crossing: quarry -> south port -> ferry -> north port -> masons.
        Connection(
            id="c_q_dock",
            source="b_quarry_sw",
            destination="b_dock_south",
            path=((4, 15), (6, 15), (8, 15), (8, 12)),
            distance=6,
            terrain=(TerrainKind.SAND,),
            allowed_units=frozenset({UnitKind.DONKEY_CART}),
        ),
        Connection(
            id="c_ferry",
            source="b_dock_south",
            destination="b_dock_north",
            path=((9, 11), (9, 10), (9, 8), (10, 7), (10, 6), (11, 6)),
            distance=8,
            terrain=(TerrainKind.WATER,),
            allowed_units=frozenset({UnitKind.BARGE}),
        ),
        Connection(
            id="c_dock_mason",
            source="b_dock_north",
            destination="b_mason_village",
            path=((11, 5), (11, 4), (14, 4)),
            distance=5,
            terrain=(TerrainKind.GRASS,),
            allowed_units=frozenset({UnitKind.DONKEY_CART, UnitKind.CARRIER}),
        ),
        # Desert route: the long way round the southern branch, fording at x=18.
        Connection(
            id="c_q_hub",
            source="b_quarry_sw",
            destination="b_hub_central",
            path=((4, 15), (10, 15), (14, 15), (14, 12)),
            distance=14,
            terrain=(TerrainKind.SAND,),
            allowed_units=frozenset({UnitKind.DONKEY_CART}),
        ),
        Connection(
            id="c_hub_mason",
            source="b_hub_central",
            destination="b_mason_village",
            path=((15, 11), (18, 11), (18, 8), (18, 4), (16, 4)),
            distance=10,
            terrain=(TerrainKind.SAND,),
            allowed_units=frozenset({UnitKind.DONKEY_CART}),
        ),
        Connection(
            id="c_mason_pyr",
            source="b_mason_village",
            destination="b_pyramid",
            path=((16, 3), (20, 3)),
            distance=4,
            terrain=(TerrainKind.ROAD_PAVED,),
            allowed_units=frozenset({UnitKind.CARRIER}),
        ),
    )


def nile_delta(seed: int | None = None) -> Level:
    """Build the level. *seed* fixes the grass pattern."""
    return Level(
        id="egypt_delta",
        name="The Nile Delta",
        width=WIDTH,
        height=HEIGHT,
        tiles=generate_tiles(random.Random(seed)),
        buildings=buildings(),
        connections=connections(),
        max_units=MAX_UNITS,
    )
