"""Shared enumerations, tick context and exceptions for caravan."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable


class ResourceKind(str, Enum):
    """Resource kinds. Declaration order is the canonical iteration order."""

    STONE_RAW = "STONE_RAW"
    STONE_BLOCK = "STONE_BLOCK"
    WOOD = "WOOD"


class TerrainKind(str, Enum):
    SAND = "SAND"
    WATER = "WATER"
    GRASS = "GRASS"
    MOUNTAIN = "MOUNTAIN"
    ROAD_DIRT = "ROAD_DIRT"
    ROAD_PAVED = "ROAD_PAVED"


class BuildingKind(str, Enum):
    QUARRY = "QUARRY"
    STONEMASON = "STONEMASON"
    WAREHOUSE = "WAREHOUSE"
    CONSTRUCTION_SITE = "CONSTRUCTION_SITE"


class UnitKind(str, Enum):
    CARRIER = "CARRIER"
    DONKEY_CART = "DONKEY_CART"
    BARGE = "BARGE"


class UnitState(str, Enum):
    IDLE_AT_START = "IDLE_AT_START"
    LOADING = "LOADING"
    MOVING_TO_END = "MOVING_TO_END"
    UNLOADING = "UNLOADING"
    MOVING_TO_START = "MOVING_TO_START"


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float
    random: _random.Random


class CaravanError(Exception):
    """Base class for caravan errors."""


class IllegalTransitionError(CaravanError):
    """Raised when a unit is moved along an edge missing from the transition table."""

    def __init__(self, unit_id: str, old: UnitState, new: UnitState) -> None:
        self.unit_id = unit_id
        self.old = old
        self.new = new
        super().__init__(f"Unit {unit_id}: illegal transition {old.value} -> {new.value}")


class LevelError(CaravanError):
    """Raised when level data cannot be turned into a Level."""


if TYPE_CHECKING:
    from caravan.model import Session

System = Callable[["Session", TickContext], None]
