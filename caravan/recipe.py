"""Recipe dataclass and crafting functions."""
from __future__ import annotations

from dataclasses import dataclass, field

from caravan.inventory import Inventory, InventoryHelper
from caravan.types import ResourceKind


@dataclass(frozen=True)
class Recipe:
    """Immutable production recipe.

    Attributes:
        name: Recipe identifier.
        inputs: Resources consumed per cycle (kind -> quantity).
        outputs: Resources produced per cycle (kind -> quantity).
        duration: Milliseconds per cycle (0 means the building never produces).
    """

    name: str
    inputs: dict[ResourceKind, int] = field(default_factory=dict)
    outputs: dict[ResourceKind, int] = field(default_factory=dict)
    duration: float = 0

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Recipe name must be non-empty")
        if self.duration < 0:
            raise ValueError(f"duration must be >= 0, got {self.duration}")


def can_craft(inventory: Inventory, recipe: Recipe) -> bool:
    """Check if inventory has all required inputs."""
    return InventoryHelper.has_all(inventory, recipe.inputs)


def craft(source: Inventory, recipe: Recipe, target: Inventory | None = None) -> bool:
    """Consume inputs from *source* and add outputs to *target*.

    *target* defaults to *source*. Returns False if inputs are insufficient.
    """
    if not can_craft(source, recipe):
        return False
    if target is None:
        target = source
    for kind, amount in recipe.inputs.items():
        InventoryHelper.remove(source, kind, amount)
    for kind, amount in recipe.outputs.items():
        InventoryHelper.add(target, kind, amount)
    return True
