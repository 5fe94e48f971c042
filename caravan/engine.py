"""Simulation - owns the authoritative snapshot, runs ticks and applies commands."""

import copy
import logging
import os
import random
import threading
import time
from dataclasses import replace
from typing import Any, Callable

from caravan import signals
from caravan.clock import FrameClock, make_context
from caravan.commands import CommandRouter, SelectRoute, SpawnUnit, ToggleRun, default_router
from caravan.config import DEFAULT_CONFIG, SimConfig
from caravan.model import Level, Session
from caravan.production import make_production_system
from caravan.signals import SignalBus
from caravan.transport import make_transport_system
from caravan.types import System, UnitKind

logger = logging.getLogger(__name__)


class Simulation:
    """Single-writer owner of a session.

    Ticks and commands are serialized by one lock. A tick works on a private
    copy of the buildings and units and publishes it by swapping the
    snapshot reference, so ``snapshot`` always returns a fully formed
    session that nobody mutates afterwards.
    """

    def __init__(
        self,
        level: Level,
        config: SimConfig = DEFAULT_CONFIG,
        seed: int | None = None,
        bus: SignalBus | None = None,
        router: CommandRouter | None = None,
    ) -> None:
        self._config = config
        self._bus = bus if bus is not None else SignalBus()
        self._router = router if router is not None else default_router(config)
        self._clock = FrameClock()
        self._lock = threading.Lock()
        self._session = Session.new(level)
        self._systems: list[System] = [
            make_production_system(config, self._bus),
            make_transport_system(config, self._bus),
        ]
        self._tick_hooks: list[Callable[[Session], None]] = []
        self._stop_requested = False
        self._thread: threading.Thread | None = None

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def snapshot(self) -> Session:
        return self._session

    @property
    def config(self) -> SimConfig:
        return self._config

    @property
    def bus(self) -> SignalBus:
        return self._bus

    @property
    def clock(self) -> FrameClock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def add_system(self, system: System) -> None:
        """Append a system. It runs after production and transport."""
        self._systems.append(system)

    def on_tick(self, hook: Callable[[Session], None]) -> None:
        """Register ``hook(session)``, called with each newly published snapshot."""
        self._tick_hooks.append(hook)

    # -- Ticking --

    def frame(self, now: float) -> Session:
        """Host frame callback. *now* is a timestamp in milliseconds."""
        with self._lock:
            dt = self._clock.delta(now)
            published = self._tick(dt)
        return self._after(published)

    def step(self, dt: float) -> Session:
        """Advance by *dt* milliseconds without consulting the frame clock."""
        with self._lock:
            published = self._tick(dt)
        return self._after(published)

    def _tick(self, dt: float) -> Session | None:
        current = self._session
        if not current.running or dt <= 0:
            return None

        work = replace(
            current,
            buildings=copy.deepcopy(current.buildings),
            units=copy.deepcopy(current.units),
        )
        ctx = make_context(
            current.tick_number + 1, dt, current.game_time + dt, self._rng,
        )
        for system in self._systems:
            system(work, ctx)

        published = replace(work, game_time=ctx.elapsed, tick_number=ctx.tick_number)
        self._session = published
        return published

    def _after(self, published: Session | None) -> Session:
        with self._lock:
            queued = self._bus.drain()
        self._bus.deliver(queued)
        if published is None:
            return self._session
        for hook in self._tick_hooks:
            hook(published)
        return published

    # -- Host loop --

    def run_forever(self, fps: int = 60) -> None:
        """Drive ``frame`` at *fps* until ``stop`` is called."""
        if fps <= 0:
            raise ValueError("fps must be positive")
        self._stop_requested = False
        interval = 1.0 / fps
        logger.info("simulation loop started at %d fps (seed=%d)", fps, self._seed)
        while not self._stop_requested:
            start = time.monotonic()
            self.frame(start * 1000.0)
            sleep_time = interval - (time.monotonic() - start)
            if sleep_time > 0:
                time.sleep(sleep_time)
        logger.info("simulation loop stopped at tick %d", self._session.tick_number)

    def start(self, fps: int = 60) -> None:
        """Run ``run_forever`` on a background daemon thread."""
        if self.alive:
            return
        self._stop_requested = False
        self._thread = threading.Thread(
            target=self.run_forever, args=(fps,), name="caravan-sim", daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop_requested = True
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None

    # -- Commands --

    def submit(self, cmd: Any) -> bool:
        """Apply a command atomically between ticks. Returns whether it was accepted."""
        with self._lock:
            session, accepted = self._router.dispatch(cmd, self._session)
            self._session = session
            if accepted:
                self._bus.publish(signals.COMMAND_ACCEPTED, command=cmd)
            else:
                self._bus.publish(signals.COMMAND_REJECTED, command=cmd)
        if accepted:
            logger.debug("command accepted: %r", cmd)
        else:
            logger.info("command rejected: %r", cmd)
        self._after(None)
        return accepted

    def toggle_run(self) -> bool:
        self.submit(ToggleRun())
        return self._session.running

    def select_route(self, route_id: str | None) -> None:
        self.submit(SelectRoute(route_id))

    def spawn_unit(self, kind: UnitKind, route_id: str) -> bool:
        return self.submit(SpawnUnit(kind, route_id))
