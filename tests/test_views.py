"""Tests for read-only session views."""
from __future__ import annotations

import json
from dataclasses import replace

from caravan import Inventory, ResourceKind, Session, Unit, UnitKind, nile_delta
from caravan.views import (
    at_cap,
    can_travel,
    construction_site,
    inspect_route,
    is_complete,
    snapshot_to_dict,
    unit_count,
    units_on,
)

RAW = ResourceKind.STONE_RAW


def _units(*routes: str) -> tuple[Unit, ...]:
    return tuple(
        Unit(f"u_{n}", UnitKind.CARRIER, route, cargo=Inventory(capacity=1))
        for n, route in enumerate(routes, start=1)
    )


class TestProgress:
    def test_construction_site(self, session) -> None:
        site = construction_site(session)
        assert site is not None
        assert site.id == "site"

    def test_is_complete(self, session) -> None:
        assert not is_complete(session)
        session.buildings["site"].construction_progress = 3
        assert is_complete(session)

    def test_no_site_never_complete(self, session) -> None:
        del session.buildings["site"]
        assert construction_site(session) is None
        assert not is_complete(session)


class TestUnits:
    def test_counts_and_cap(self, make_level) -> None:
        session = Session.new(make_level(max_units=2))
        assert unit_count(session) == 0
        assert not at_cap(session)
        session = replace(session, units=_units("r1", "r2"))
        assert unit_count(session) == 2
        assert at_cap(session)

    def test_units_on(self, session) -> None:
        session = replace(session, units=_units("r1", "r2", "r1"))
        assert [u.id for u in units_on(session, "r1")] == ["u_1", "u_3"]
        assert units_on(session, "r9") == ()

    def test_can_travel(self, level) -> None:
        route = level.connection("r1")
        assert can_travel(route, UnitKind.DONKEY_CART)
        assert not can_travel(route, UnitKind.BARGE)


class TestInspectRoute:
    def test_nothing_selected(self, session) -> None:
        assert inspect_route(session) is None

    def test_selected_route(self, session) -> None:
        session.buildings["quarry"].output.slots[RAW] = 4
        session.buildings["depot"].input.slots[RAW] = 2
        session = replace(session, selected_route="r1", units=_units("r1", "r2"))
        view = inspect_route(session)
        assert view is not None
        assert view.route.id == "r1"
        assert view.source.id == "quarry"
        assert view.destination.id == "depot"
        assert [u.id for u in view.units] == ["u_1"]
        assert view.source_stock == 4
        assert view.destination_stock == 2

    def test_explicit_route_overrides_selection(self, session) -> None:
        session = replace(session, selected_route="r1")
        view = inspect_route(session, "r2")
        assert view is not None
        assert view.route.id == "r2"

    def test_unknown_or_broken_route(self, session) -> None:
        assert inspect_route(session, "ghost") is None
        del session.buildings["depot"]
        assert inspect_route(session, "r1") is None


def test_snapshot_to_dict_is_json_ready() -> None:
    session = Session.new(nile_delta(seed=2))
    session = replace(session, units=_units("c_mason_pyr"))
    data = snapshot_to_dict(session)
    json.dumps(data)
    assert data["level"]["name"] == "The Nile Delta"
    assert len(data["level"]["tiles"]) == 18
    assert len(data["buildings"]) == 6
    pyramid = data["buildings"][-1]
    assert pyramid["construction_target"] == 100
    assert pyramid["required_resource"] == "STONE_BLOCK"
    assert "construction_target" not in data["buildings"][0]
    assert data["units"][0]["state"] == "IDLE_AT_START"
    assert data["connections"][1]["allowed_units"] == ["BARGE"]
