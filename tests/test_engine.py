"""Tests for Simulation: tick publication, the frame clock and commands."""
from __future__ import annotations

import random
import time

import pytest

from caravan import (
    ResourceKind,
    SelectRoute,
    SignalBus,
    SimConfig,
    Simulation,
    TickContext,
    UnitKind,
    UnitState,
)
from caravan.clock import FrameClock, make_context

RAW = ResourceKind.STONE_RAW


@pytest.fixture
def sim(level) -> Simulation:
    return Simulation(level, seed=42)


# --- FrameClock ---

class TestFrameClock:
    def test_first_call_sets_baseline(self) -> None:
        clock = FrameClock()
        assert not clock.started
        assert clock.delta(1000.0) == 0.0
        assert clock.started
        assert clock.delta(1016.0) == 16.0
        assert clock.last == 1016.0

    def test_never_negative(self) -> None:
        clock = FrameClock()
        clock.delta(500.0)
        assert clock.delta(400.0) == 0.0

    def test_reset(self) -> None:
        clock = FrameClock()
        clock.delta(10.0)
        clock.reset()
        assert clock.delta(99.0) == 0.0

    def test_make_context(self) -> None:
        ctx = make_context(3, 16.0, 48.0, random.Random(1))
        assert isinstance(ctx, TickContext)
        assert (ctx.tick_number, ctx.dt, ctx.elapsed) == (3, 16.0, 48.0)


# --- Ticking ---

class TestTick:
    def test_paused_step_publishes_nothing(self, sim) -> None:
        before = sim.snapshot
        assert sim.step(16) is before
        assert sim.snapshot is before

    def test_zero_dt_publishes_nothing(self, sim) -> None:
        sim.toggle_run()
        before = sim.snapshot
        assert sim.step(0) is before

    def test_step_advances_time_and_ticks(self, sim) -> None:
        sim.toggle_run()
        session = sim.step(16)
        session = sim.step(16)
        assert session.tick_number == 2
        assert session.game_time == 32
        assert sim.snapshot is session

    def test_old_snapshots_never_mutated(self, sim) -> None:
        sim.spawn_unit(UnitKind.DONKEY_CART, "r1")
        sim.toggle_run()
        before = sim.snapshot
        for _ in range(200):
            sim.step(16)
        assert before.game_time == 0
        assert before.buildings["quarry"].output.slots == {}
        assert before.units[0].state == UnitState.IDLE_AT_START
        assert sim.snapshot.buildings["quarry"] is not before.buildings["quarry"]

    def test_production_visible_to_transport_same_tick(self, sim) -> None:
        sim.spawn_unit(UnitKind.DONKEY_CART, "r1")
        sim.toggle_run()
        session = sim.step(2000)
        # the quarry fills during production, the idle cart notices it in transport
        assert session.units[0].state == UnitState.LOADING

    def test_frame_uses_clock(self, sim) -> None:
        sim.toggle_run()
        first = sim.frame(5000.0)
        assert first.tick_number == 0
        second = sim.frame(5016.0)
        assert second.tick_number == 1
        assert second.game_time == 16.0

    def test_paused_frames_do_not_burst(self, sim) -> None:
        sim.frame(0.0)
        sim.frame(10_000.0)
        sim.toggle_run()
        session = sim.frame(10_016.0)
        assert session.game_time == 16.0

    def test_same_seed_same_outcome(self, make_level) -> None:
        def run(seed: int) -> int:
            level = make_level(site_target=1000)
            sim = Simulation(level, SimConfig(construction_chance=0.3), seed=seed)
            sim.spawn_unit(UnitKind.DONKEY_CART, "r1")
            sim.spawn_unit(UnitKind.CARRIER, "r2")
            sim.toggle_run()
            for _ in range(4000):
                sim.step(16)
            return sim.snapshot.buildings["site"].construction_progress

        assert run(7) == run(7)

    def test_extra_system_runs_after_builtins(self, sim) -> None:
        seen = []
        sim.add_system(lambda session, ctx: seen.append(
            session.buildings["quarry"].output.slots.get(RAW, 0)
        ))
        sim.toggle_run()
        sim.step(2000)
        assert seen == [1]


# --- Hooks and signals ---

class TestNotifications:
    def test_hook_receives_published_snapshot(self, sim) -> None:
        seen = []
        sim.on_tick(seen.append)
        sim.toggle_run()
        published = sim.step(16)
        sim.step(0)
        assert seen == [published]

    def test_signals_delivered_after_tick(self, level) -> None:
        bus = SignalBus()
        sim = Simulation(level, seed=1, bus=bus)
        produced = []
        bus.subscribe("produced", lambda name, data: produced.append(data["building"]))
        sim.toggle_run()
        sim.step(2000)
        assert produced == ["quarry"]
        assert bus.pending() == 0

    def test_command_signals(self, make_level) -> None:
        sim = Simulation(make_level(max_units=1), seed=1)
        accepted, rejected = [], []
        sim.bus.subscribe("command_accepted", lambda n, d: accepted.append(d["command"]))
        sim.bus.subscribe("command_rejected", lambda n, d: rejected.append(d["command"]))
        assert sim.spawn_unit(UnitKind.CARRIER, "r2")
        assert not sim.spawn_unit(UnitKind.CARRIER, "r2")
        assert len(accepted) == 1
        assert len(rejected) == 1


# --- Commands ---

class TestCommands:
    def test_toggle_run_returns_flag(self, sim) -> None:
        assert sim.toggle_run() is True
        assert sim.toggle_run() is False

    def test_submit_replaces_snapshot(self, sim) -> None:
        before = sim.snapshot
        assert sim.submit(SelectRoute("r1"))
        assert sim.snapshot is not before
        assert sim.snapshot.selected_route == "r1"
        assert before.selected_route is None

    def test_rejected_command_keeps_snapshot(self, make_level) -> None:
        sim = Simulation(make_level(max_units=0), seed=1)
        before = sim.snapshot
        assert not sim.spawn_unit(UnitKind.CARRIER, "r2")
        assert sim.snapshot is before

    def test_commands_work_while_paused(self, sim) -> None:
        sim.select_route("r2")
        assert sim.snapshot.selected_route == "r2"
        assert not sim.snapshot.running

    def test_unknown_command_type(self, sim) -> None:
        with pytest.raises(TypeError):
            sim.submit(object())


# --- Background loop ---

class TestThread:
    def test_start_and_stop(self, sim) -> None:
        sim.toggle_run()
        sim.start(fps=200)
        assert sim.alive
        deadline = time.monotonic() + 5.0
        while sim.snapshot.tick_number < 3 and time.monotonic() < deadline:
            time.sleep(0.01)
        sim.stop()
        assert not sim.alive
        assert sim.snapshot.tick_number >= 3

    def test_rejects_bad_fps(self, sim) -> None:
        with pytest.raises(ValueError):
            sim.run_forever(fps=0)

    def test_seed_is_recorded(self, level) -> None:
        assert Simulation(level, seed=5).seed == 5
        assert isinstance(Simulation(level).seed, int)
