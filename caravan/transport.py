"""System factory for the transport unit state machine.

Each unit shuttles along one route: it waits at the source until something
is available, loads a single resource kind, travels to the destination,
unloads everything into the destination's input and travels back. Motion is
parametric (``position`` in [0.0, 1.0]); the route's waypoints are only used
by renderers.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Mapping

from caravan import signals
from caravan.config import DEFAULT_CONFIG, SimConfig, UnitSpec
from caravan.inventory import InventoryHelper
from caravan.types import IllegalTransitionError, TerrainKind, UnitState

if TYPE_CHECKING:
    from caravan.model import Building, Connection, Session, Unit
    from caravan.signals import SignalBus
    from caravan.types import TickContext

logger = logging.getLogger(__name__)

TRANSITIONS: dict[UnitState, frozenset[UnitState]] = {
    UnitState.IDLE_AT_START: frozenset({UnitState.LOADING}),
    UnitState.LOADING: frozenset({UnitState.MOVING_TO_END, UnitState.IDLE_AT_START}),
    UnitState.MOVING_TO_END: frozenset({UnitState.UNLOADING}),
    UnitState.UNLOADING: frozenset({UnitState.MOVING_TO_START}),
    UnitState.MOVING_TO_START: frozenset({UnitState.IDLE_AT_START}),
}

TransitionFn = Callable[["Unit", UnitState, UnitState], None]


def is_legal(old: UnitState, new: UnitState) -> bool:
    """True if *old* -> *new* is allowed (staying put is always allowed)."""
    return old == new or new in TRANSITIONS[old]


def terrain_modifier(
    route: Connection, table: Mapping[TerrainKind, float],
) -> float:
    """Mean speed multiplier of the terrain kinds a route crosses.

    Routes without terrain data move at the base speed.
    """
    if not route.terrain:
        return 1.0
    return sum(table.get(t, 1.0) for t in route.terrain) / len(route.terrain)


def make_transport_system(
    config: SimConfig = DEFAULT_CONFIG,
    bus: SignalBus | None = None,
    on_transition: TransitionFn | None = None,
) -> Callable[[Session, TickContext], None]:
    """Return a system that advances every unit's state machine by one tick.

    ``on_transition(unit, old, new)`` fires on every state change, after the
    unit has been updated. Units whose route or route endpoints cannot be
    found are left untouched for the tick.
    """
    modifiers: dict[Connection, float] = {}

    def _step(route: Connection, spec: UnitSpec, ctx: TickContext) -> float:
        modifier = modifiers.get(route)
        if modifier is None:
            modifier = terrain_modifier(route, config.terrain_speed)
            modifiers[route] = modifier
        return (spec.speed * modifier / route.distance) * (
            ctx.dt / config.reference_frame_ms
        )

    def _set_state(unit: Unit, new: UnitState) -> None:
        old = unit.state
        if not is_legal(old, new):
            raise IllegalTransitionError(unit.id, old, new)
        unit.state = new
        if old == new:
            return
        if bus is not None:
            bus.publish(
                signals.UNIT_TRANSITION,
                unit=unit.id, route=unit.route_id, old=old, new=new,
            )
        if on_transition is not None:
            on_transition(unit, old, new)

    def _load(unit: Unit, source: Building, spec: UnitSpec) -> None:
        kind = InventoryHelper.first_available(source.output)
        if kind is None:
            _set_state(unit, UnitState.IDLE_AT_START)
            return
        amount = min(spec.capacity, InventoryHelper.count(source.output, kind))
        InventoryHelper.transfer(source.output, unit.cargo, kind, amount)
        _set_state(unit, UnitState.MOVING_TO_END)

    def _unload(unit: Unit, destination: Building) -> None:
        InventoryHelper.transfer_all(unit.cargo, destination.input)
        InventoryHelper.clear(unit.cargo)
        _set_state(unit, UnitState.MOVING_TO_START)

    def _advance(
        unit: Unit,
        route: Connection,
        source: Building,
        destination: Building,
        spec: UnitSpec,
        ctx: TickContext,
    ) -> None:
        state = unit.state
        if state == UnitState.IDLE_AT_START:
            if InventoryHelper.first_available(source.output) is not None:
                unit.timer = 0.0
                _set_state(unit, UnitState.LOADING)
        elif state == UnitState.LOADING:
            unit.timer += ctx.dt
            if unit.timer >= spec.load_time:
                _load(unit, source, spec)
        elif state == UnitState.MOVING_TO_END:
            unit.position += _step(route, spec, ctx)
            if unit.position >= 1.0:
                unit.position = 1.0
                unit.timer = 0.0
                _set_state(unit, UnitState.UNLOADING)
        elif state == UnitState.UNLOADING:
            unit.timer += ctx.dt
            if unit.timer >= spec.load_time:
                _unload(unit, destination)
        elif state == UnitState.MOVING_TO_START:
            unit.position -= _step(route, spec, ctx)
            if unit.position <= 0.0:
                unit.position = 0.0
                _set_state(unit, UnitState.IDLE_AT_START)

    def transport_system(session: Session, ctx: TickContext) -> None:
        for unit in session.units:
            route = session.connection(unit.route_id)
            if route is None:
                logger.debug("unit %s: route %r not found, skipped", unit.id, unit.route_id)
                continue
            source = session.building(route.source)
            destination = session.building(route.destination)
            if source is None or destination is None:
                logger.debug("unit %s: route %s endpoint missing, skipped", unit.id, route.id)
                continue
            _advance(unit, route, source, destination, config.unit(unit.kind), ctx)

    return transport_system
