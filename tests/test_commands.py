"""Tests for commands and the command router."""
from __future__ import annotations

from dataclasses import dataclass

import pytest

from caravan import (
    CommandRouter,
    SelectRoute,
    Session,
    SpawnUnit,
    ToggleRun,
    UnitKind,
    UnitState,
)
from caravan.commands import default_router, make_spawn_handler, select_route, toggle_run


@dataclass(frozen=True)
class Unknown:
    pass


# --- Handlers ---

class TestToggleRun:
    def test_flips_flag(self, session) -> None:
        running = toggle_run(ToggleRun(), session)
        assert running.running is True
        assert toggle_run(ToggleRun(), running).running is False

    def test_input_session_untouched(self, session) -> None:
        toggle_run(ToggleRun(), session)
        assert session.running is False


class TestSelectRoute:
    def test_select_and_clear(self, session) -> None:
        selected = select_route(SelectRoute("r2"), session)
        assert selected.selected_route == "r2"
        assert select_route(SelectRoute(), selected).selected_route is None

    def test_unknown_route_is_stored(self, session) -> None:
        assert select_route(SelectRoute("ghost"), session).selected_route == "ghost"


class TestSpawnUnit:
    def test_appends_idle_unit(self, session) -> None:
        spawned = make_spawn_handler()(SpawnUnit(UnitKind.DONKEY_CART, "r1"), session)
        assert spawned is not None
        (unit,) = spawned.units
        assert unit.id == "u_1"
        assert unit.kind == UnitKind.DONKEY_CART
        assert unit.route_id == "r1"
        assert unit.position == 0.0
        assert unit.state == UnitState.IDLE_AT_START
        assert unit.cargo.slots == {}
        assert unit.cargo.capacity == 4
        assert spawned.next_unit == 2
        assert session.units == ()

    def test_ids_are_unique(self, session) -> None:
        spawn = make_spawn_handler()
        for _ in range(3):
            session = spawn(SpawnUnit(UnitKind.CARRIER, "r2"), session)
        assert [u.id for u in session.units] == ["u_1", "u_2", "u_3"]

    def test_rejected_at_cap(self, make_level) -> None:
        session = Session.new(make_level(max_units=2))
        spawn = make_spawn_handler()
        session = spawn(SpawnUnit(UnitKind.CARRIER, "r2"), session)
        session = spawn(SpawnUnit(UnitKind.CARRIER, "r2"), session)
        assert spawn(SpawnUnit(UnitKind.CARRIER, "r2"), session) is None

    def test_kind_not_checked_against_route(self, session) -> None:
        spawned = make_spawn_handler()(SpawnUnit(UnitKind.BARGE, "r1"), session)
        assert spawned is not None
        assert spawned.units[0].kind == UnitKind.BARGE


# --- Router ---

class TestCommandRouter:
    def test_dispatch_accepted(self, session) -> None:
        result, accepted = default_router().dispatch(ToggleRun(), session)
        assert accepted
        assert result.running

    def test_rejected_returns_same_session(self, make_level) -> None:
        session = Session.new(make_level(max_units=0))
        result, accepted = default_router().dispatch(
            SpawnUnit(UnitKind.CARRIER, "r2"), session,
        )
        assert not accepted
        assert result is session

    def test_unregistered_type(self, session) -> None:
        with pytest.raises(TypeError, match="Unknown"):
            default_router().dispatch(Unknown(), session)

    def test_has_and_overwrite(self, session) -> None:
        router = CommandRouter()
        assert not router.has(ToggleRun)
        router.handle(ToggleRun, toggle_run)
        router.handle(ToggleRun, lambda cmd, s: None)
        assert router.has(ToggleRun)
        _, accepted = router.dispatch(ToggleRun(), session)
        assert not accepted

    def test_commands_are_frozen(self) -> None:
        cmd = SelectRoute("r1")
        with pytest.raises(AttributeError):
            cmd.route_id = "r2"  # type: ignore[misc]
