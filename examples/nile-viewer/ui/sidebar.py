"""Sidebar: progress, route inspector and the Oracle's last words."""
from __future__ import annotations

import textwrap

import pygame

from caravan import Session
from caravan.views import construction_site, inspect_route, is_complete

from ui.constants import GRID_W, RECRUIT_KEYS, SCREEN_H, SIDEBAR_W


def draw_sidebar(
    surface: pygame.Surface,
    session: Session,
    oracle_text: str,
    oracle_loading: bool,
    font: pygame.font.Font,
) -> None:
    pygame.draw.rect(surface, (28, 25, 23), (GRID_W, 0, SIDEBAR_W, SCREEN_H))
    lines: list[tuple[str, tuple[int, int, int]]] = [
        ("PHARAOH'S ARCHITECT", (245, 158, 11)),
        (f"{session.level.name}", (160, 160, 160)),
        (f"Time {session.game_time / 1000:.0f}s  {'RUNNING' if session.running else 'PAUSED'}",
         (200, 200, 200)),
        (f"Units {len(session.units)} / {session.level.max_units}", (200, 200, 200)),
    ]
    site = construction_site(session)
    if site is not None:
        lines.append((f"Pyramid {site.construction_progress} / {site.construction_target}",
                      (245, 158, 11)))
    if is_complete(session):
        lines.append(("PYRAMID COMPLETE", (250, 204, 21)))
    lines.append(("", (0, 0, 0)))

    view = inspect_route(session)
    if view is None:
        lines.append(("Click a route to manage it.", (140, 140, 140)))
    else:
        lines.append((f"Route {view.route.id}  ({view.route.distance}km)", (220, 220, 220)))
        lines.append((f"  {view.source.name}: {view.source_stock}", (200, 200, 200)))
        lines.append((f"  -> {view.destination.name}: {view.destination_stock}", (200, 200, 200)))
        lines.append((f"  {len(view.units)} units assigned", (200, 200, 200)))
        for i, kind in enumerate(RECRUIT_KEYS, start=1):
            ok = kind in view.route.allowed_units
            lines.append((f"  [{i}] recruit {kind.value}", (120, 220, 120) if ok else (110, 110, 110)))
    lines.append(("", (0, 0, 0)))

    lines.append(("[O] ask the High Priest", (200, 200, 200)))
    text = "Consulting the stars..." if oracle_loading else oracle_text
    for row in textwrap.wrap(text, 36):
        lines.append((row, (230, 210, 160)))

    y = 12
    for line, color in lines:
        if line:
            surface.blit(font.render(line, True, color), (GRID_W + 12, y))
        y += 18
