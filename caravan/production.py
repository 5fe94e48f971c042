"""System factory for building production, pass-through and construction."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from caravan import signals
from caravan.config import DEFAULT_CONFIG, SimConfig
from caravan.inventory import InventoryHelper
from caravan.recipe import can_craft, craft

if TYPE_CHECKING:
    from caravan.model import Building, Session
    from caravan.signals import SignalBus
    from caravan.types import TickContext


def make_production_system(
    config: SimConfig = DEFAULT_CONFIG,
    bus: SignalBus | None = None,
) -> Callable[[Session, TickContext], None]:
    """Return a system that advances every building by one tick.

    Buildings are visited in level order. Consumption targets draw from the
    tick RNG, so results depend on ``ctx.random``. Producer cycles do not
    carry leftover time into the next cycle.
    """

    def _construct(building: Building, ctx: TickContext) -> None:
        kind = building.consumes
        if not InventoryHelper.has(building.input, kind):
            return
        if building.construction_progress >= building.construction_target:
            return
        if ctx.random.random() >= config.construction_chance:
            return
        InventoryHelper.remove(building.input, kind, 1)
        building.construction_progress += 1
        if bus is not None:
            bus.publish(
                signals.CONSTRUCTED,
                building=building.id,
                progress=building.construction_progress,
                target=building.construction_target,
                complete=building.construction_progress >= building.construction_target,
            )

    def _pass_through(building: Building) -> None:
        free = building.max_storage - InventoryHelper.total(building.output)
        for kind in InventoryHelper.kinds(building.input):
            if free <= 0:
                break
            amount = min(InventoryHelper.count(building.input, kind), free)
            free -= InventoryHelper.transfer(building.input, building.output, kind, amount)

    def _produce(building: Building, ctx: TickContext) -> None:
        recipe = config.recipes.get(building.kind)
        if recipe is None or recipe.duration <= 0:
            return
        if not can_craft(building.input, recipe):
            return
        if InventoryHelper.total(building.output) >= building.max_storage:
            return
        building.production_progress += ctx.dt
        if building.production_progress < recipe.duration:
            return
        craft(building.input, recipe, building.output)
        building.production_progress = 0.0
        if bus is not None:
            bus.publish(
                signals.PRODUCED,
                building=building.id,
                outputs={k.value: v for k, v in recipe.outputs.items()},
            )

    def production_system(session: Session, ctx: TickContext) -> None:
        for building in session.buildings.values():
            if building.is_consumer:
                _construct(building, ctx)
            elif building.is_hub:
                _pass_through(building)
            else:
                _produce(building, ctx)

    return production_system
