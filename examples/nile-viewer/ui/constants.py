"""Layout and palette for the Nile viewer."""
from __future__ import annotations

from caravan import BuildingKind, TerrainKind, UnitKind

TILE_SIZE = 32
MAP_W = 25
MAP_H = 18
GRID_W = MAP_W * TILE_SIZE
GRID_H = MAP_H * TILE_SIZE
SIDEBAR_W = 320
STATUS_H = 32
SCREEN_W = GRID_W + SIDEBAR_W
SCREEN_H = GRID_H + STATUS_H
FPS = 60

# Clicks closer than this (pixels) to a route select it.
PICK_RADIUS = 10

TERRAIN_COLORS: dict[TerrainKind, tuple[int, int, int]] = {
    TerrainKind.SAND: (230, 194, 136),
    TerrainKind.WATER: (79, 164, 184),
    TerrainKind.GRASS: (138, 176, 96),
    TerrainKind.MOUNTAIN: (150, 142, 133),
    TerrainKind.ROAD_DIRT: (194, 178, 128),
    TerrainKind.ROAD_PAVED: (160, 160, 160),
}

BUILDING_COLORS: dict[BuildingKind, tuple[int, int, int]] = {
    BuildingKind.QUARRY: (120, 110, 100),
    BuildingKind.STONEMASON: (170, 120, 80),
    BuildingKind.WAREHOUSE: (110, 80, 50),
    BuildingKind.CONSTRUCTION_SITE: (220, 180, 60),
}

UNIT_COLORS: dict[UnitKind, tuple[int, int, int]] = {
    UnitKind.CARRIER: (240, 240, 240),
    UnitKind.DONKEY_CART: (140, 90, 60),
    UnitKind.BARGE: (250, 250, 200),
}

# Number keys 1-3 recruit these onto the selected route.
RECRUIT_KEYS = (UnitKind.CARRIER, UnitKind.DONKEY_CART, UnitKind.BARGE)
