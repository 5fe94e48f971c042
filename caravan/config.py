"""Simulation configuration dataclasses and the default game tables."""
from __future__ import annotations

from dataclasses import dataclass, field

from caravan.recipe import Recipe
from caravan.types import BuildingKind, ResourceKind, TerrainKind, UnitKind


@dataclass(frozen=True)
class UnitSpec:
    """Static properties of a unit kind.

    Attributes:
        speed: Route progress per reference frame on a distance-1 route.
        capacity: Maximum cargo carried at once.
        load_time: Milliseconds spent loading, and again unloading.
        allowed_terrain: Terrain kinds this unit kind can cross.
    """

    speed: float
    capacity: int
    load_time: float
    allowed_terrain: frozenset[TerrainKind] = frozenset()

    def __post_init__(self) -> None:
        if self.speed <= 0:
            raise ValueError(f"speed must be > 0, got {self.speed}")
        if self.capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {self.capacity}")
        if self.load_time < 0:
            raise ValueError(f"load_time must be >= 0, got {self.load_time}")


_ALL_LAND = frozenset({
    TerrainKind.SAND, TerrainKind.GRASS, TerrainKind.ROAD_DIRT,
    TerrainKind.ROAD_PAVED, TerrainKind.MOUNTAIN,
})

DEFAULT_UNITS: dict[UnitKind, UnitSpec] = {
    UnitKind.CARRIER: UnitSpec(
        speed=0.08, capacity=1, load_time=500, allowed_terrain=_ALL_LAND,
    ),
    UnitKind.DONKEY_CART: UnitSpec(
        speed=0.15, capacity=4, load_time=1500,
        allowed_terrain=_ALL_LAND - {TerrainKind.MOUNTAIN},
    ),
    UnitKind.BARGE: UnitSpec(
        speed=0.12, capacity=15, load_time=3000,
        allowed_terrain=frozenset({TerrainKind.WATER}),
    ),
}

DEFAULT_RECIPES: dict[BuildingKind, Recipe] = {
    BuildingKind.QUARRY: Recipe(
        name="quarry", outputs={ResourceKind.STONE_RAW: 1}, duration=2000,
    ),
    BuildingKind.STONEMASON: Recipe(
        name="stonemason",
        inputs={ResourceKind.STONE_RAW: 1},
        outputs={ResourceKind.STONE_BLOCK: 1},
        duration=1500,
    ),
    BuildingKind.WAREHOUSE: Recipe(name="warehouse"),
    BuildingKind.CONSTRUCTION_SITE: Recipe(
        name="construction", inputs={ResourceKind.STONE_BLOCK: 1},
    ),
}

DEFAULT_TERRAIN_SPEED: dict[TerrainKind, float] = {
    TerrainKind.SAND: 0.5,
    TerrainKind.WATER: 1.2,
    TerrainKind.GRASS: 0.8,
    TerrainKind.MOUNTAIN: 0.3,
    TerrainKind.ROAD_DIRT: 1.2,
    TerrainKind.ROAD_PAVED: 2.0,
}


@dataclass(frozen=True)
class SimConfig:
    """Immutable tuning for the production and transport systems.

    Attributes:
        reference_frame_ms: Frame length the unit speeds are expressed in.
        construction_chance: Per-tick probability that a supplied construction
            site consumes one unit and advances.
        units: Unit kind -> UnitSpec.
        recipes: Building kind -> Recipe.
        terrain_speed: Terrain kind -> speed multiplier.
    """

    reference_frame_ms: float = 16.0
    construction_chance: float = 0.05
    units: dict[UnitKind, UnitSpec] = field(default_factory=lambda: dict(DEFAULT_UNITS))
    recipes: dict[BuildingKind, Recipe] = field(default_factory=lambda: dict(DEFAULT_RECIPES))
    terrain_speed: dict[TerrainKind, float] = field(
        default_factory=lambda: dict(DEFAULT_TERRAIN_SPEED)
    )

    def __post_init__(self) -> None:
        if self.reference_frame_ms <= 0:
            raise ValueError(
                f"reference_frame_ms must be > 0, got {self.reference_frame_ms}"
            )
        if not 0.0 <= self.construction_chance <= 1.0:
            raise ValueError(
                f"construction_chance must be in [0, 1], got {self.construction_chance}"
            )

    def unit(self, kind: UnitKind) -> UnitSpec:
        return self.units[kind]

    def recipe(self, kind: BuildingKind) -> Recipe:
        return self.recipes[kind]


DEFAULT_CONFIG = SimConfig()
