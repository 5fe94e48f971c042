"""Command surface: typed commands and their snapshot-replacing handlers."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable

from caravan.config import DEFAULT_CONFIG, SimConfig
from caravan.inventory import Inventory
from caravan.model import Session, Unit
from caravan.types import UnitKind

# handler(cmd, session) -> new session, or None to reject.
Handler = Callable[[Any, Session], "Session | None"]


@dataclass(frozen=True)
class ToggleRun:
    """Flip the run/pause flag."""


@dataclass(frozen=True)
class SelectRoute:
    """Move the UI cursor to a route, or clear it with None."""

    route_id: str | None = None


@dataclass(frozen=True)
class SpawnUnit:
    """Recruit a unit onto a route. Rejected once the level's unit cap is reached."""

    kind: UnitKind
    route_id: str


def toggle_run(cmd: ToggleRun, session: Session) -> Session:
    return replace(session, running=not session.running)


def select_route(cmd: SelectRoute, session: Session) -> Session:
    return replace(session, selected_route=cmd.route_id)


def make_spawn_handler(config: SimConfig = DEFAULT_CONFIG) -> Handler:
    """Return the SpawnUnit handler.

    The unit kind is not checked against the route's permitted kinds.
    """

    def spawn_unit(cmd: SpawnUnit, session: Session) -> Session | None:
        if len(session.units) >= session.level.max_units:
            return None
        spec = config.unit(cmd.kind)
        unit = Unit(
            id=f"u_{session.next_unit}",
            kind=cmd.kind,
            route_id=cmd.route_id,
            cargo=Inventory(capacity=spec.capacity),
        )
        return replace(
            session,
            units=session.units + (unit,),
            next_unit=session.next_unit + 1,
        )

    return spawn_unit


class CommandRouter:
    """Routes commands to handlers by type.

    Commands are frozen dataclasses; one handler per command class.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[Any], Handler] = {}

    def handle(self, cmd_type: type[Any], handler: Handler) -> None:
        """Register a handler for a command type. Later calls overwrite."""
        self._handlers[cmd_type] = handler

    def has(self, cmd_type: type[Any]) -> bool:
        return cmd_type in self._handlers

    def dispatch(self, cmd: Any, session: Session) -> tuple[Session, bool]:
        """Apply *cmd* to *session*. Returns ``(session, accepted)``.

        A rejected command returns the very same session object. Raises
        ``TypeError`` if no handler is registered for the command's type.
        """
        cmd_type = type(cmd)
        handler = self._handlers.get(cmd_type)
        if handler is None:
            raise TypeError(f"No handler registered for {cmd_type.__qualname__}")
        result = handler(cmd, session)
        if result is None:
            return session, False
        return result, True


def default_router(config: SimConfig = DEFAULT_CONFIG) -> CommandRouter:
    router = CommandRouter()
    router.handle(ToggleRun, toggle_run)
    router.handle(SelectRoute, select_route)
    router.handle(SpawnUnit, make_spawn_handler(config))
    return router
