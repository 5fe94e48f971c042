"""caravan - a real-time logistics tick simulation."""

from caravan.commands import CommandRouter, SelectRoute, SpawnUnit, ToggleRun
from caravan.config import DEFAULT_CONFIG, SimConfig, UnitSpec
from caravan.engine import Simulation
from caravan.inventory import Inventory, InventoryHelper
from caravan.levels import load_level, nile_delta
from caravan.model import Building, Connection, Level, Placement, Session, Unit
from caravan.recipe import Recipe
from caravan.signals import SignalBus
from caravan.types import (
    BuildingKind,
    CaravanError,
    IllegalTransitionError,
    LevelError,
    ResourceKind,
    TerrainKind,
    TickContext,
    UnitKind,
    UnitState,
)

__all__ = [
    "Building",
    "BuildingKind",
    "CaravanError",
    "CommandRouter",
    "Connection",
    "DEFAULT_CONFIG",
    "IllegalTransitionError",
    "Inventory",
    "InventoryHelper",
    "Level",
    "LevelError",
    "Placement",
    "Recipe",
    "ResourceKind",
    "SelectRoute",
    "Session",
    "SignalBus",
    "SimConfig",
    "Simulation",
    "SpawnUnit",
    "TerrainKind",
    "TickContext",
    "ToggleRun",
    "Unit",
    "UnitKind",
    "UnitSpec",
    "UnitState",
    "load_level",
    "nile_delta",
]
