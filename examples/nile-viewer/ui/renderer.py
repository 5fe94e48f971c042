"""Map rendering: terrain, routes, buildings and units."""
from __future__ import annotations

import math

import pygame

from caravan import InventoryHelper, Session
from caravan.grid import Coord

from ui.constants import (
    BUILDING_COLORS, GRID_H, GRID_W, MAP_H, MAP_W, PICK_RADIUS,
    TERRAIN_COLORS, TILE_SIZE, UNIT_COLORS,
)


def _center(cell: Coord) -> tuple[float, float]:
    return (cell[0] + 0.5) * TILE_SIZE, (cell[1] + 0.5) * TILE_SIZE


def point_along(path: tuple[Coord, ...], position: float) -> tuple[float, float]:
    """Pixel position at fractional *position* of the polyline through *path*."""
    points = [_center(c) for c in path]
    lengths = [math.dist(a, b) for a, b in zip(points, points[1:])]
    remaining = max(0.0, min(1.0, position)) * sum(lengths)
    for (a, b), seg in zip(zip(points, points[1:]), lengths):
        if remaining <= seg and seg > 0:
            t = remaining / seg
            return a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t
        remaining -= seg
    return points[-1]


def _segment_distance(p: tuple[float, float], a: tuple[float, float], b: tuple[float, float]) -> float:
    ax, ay = a
    bx, by = b
    dx, dy = bx - ax, by - ay
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.dist(p, a)
    t = max(0.0, min(1.0, ((p[0] - ax) * dx + (p[1] - ay) * dy) / length_sq))
    return math.dist(p, (ax + dx * t, ay + dy * t))


def pick_route(session: Session, pixel: tuple[int, int]) -> str | None:
    """Route id under *pixel*, or None."""
    best: tuple[float, str] | None = None
    for route in session.level.connections:
        points = [_center(c) for c in route.path]
        dist = min(_segment_distance(pixel, a, b) for a, b in zip(points, points[1:]))
        if dist <= PICK_RADIUS and (best is None or dist < best[0]):
            best = (dist, route.id)
    return best[1] if best is not None else None


def draw_terrain(surface: pygame.Surface, session: Session) -> None:
    for y in range(MAP_H):
        for x in range(MAP_W):
            color = TERRAIN_COLORS.get(session.level.terrain_at(x, y), (40, 40, 40))
            pygame.draw.rect(surface, color, (x * TILE_SIZE, y * TILE_SIZE, TILE_SIZE, TILE_SIZE))
    for x in range(MAP_W + 1):
        pygame.draw.line(surface, (0, 0, 0), (x * TILE_SIZE, 0), (x * TILE_SIZE, GRID_H))
    for y in range(MAP_H + 1):
        pygame.draw.line(surface, (0, 0, 0), (0, y * TILE_SIZE), (GRID_W, y * TILE_SIZE))


def draw_routes(surface: pygame.Surface, session: Session) -> None:
    for route in session.level.connections:
        selected = route.id == session.selected_route
        color = (255, 215, 0) if selected else (255, 255, 255)
        points = [_center(c) for c in route.path]
        pygame.draw.lines(surface, color, False, points, 4 if selected else 2)


def draw_buildings(surface: pygame.Surface, session: Session, font: pygame.font.Font) -> None:
    for b in session.buildings.values():
        p = b.placement
        rect = pygame.Rect(p.x * TILE_SIZE, p.y * TILE_SIZE, p.width * TILE_SIZE, p.height * TILE_SIZE)
        pygame.draw.rect(surface, BUILDING_COLORS.get(b.kind, (200, 200, 200)), rect)
        pygame.draw.rect(surface, (20, 20, 20), rect, 2)
        if b.is_consumer and b.construction_target > 0:
            filled = rect.width * min(1.0, b.construction_progress / b.construction_target)
            pygame.draw.rect(surface, (80, 200, 80), (rect.x, rect.bottom - 5, filled, 5))
        stock = InventoryHelper.total(b.output) + InventoryHelper.total(b.input)
        label = font.render(str(stock), True, (255, 255, 255))
        surface.blit(label, (rect.x + 3, rect.y + 2))


def draw_units(surface: pygame.Surface, session: Session) -> None:
    for unit in session.units:
        route = session.connection(unit.route_id)
        if route is None:
            continue
        x, y = point_along(route.path, unit.position)
        color = UNIT_COLORS.get(unit.kind, (255, 0, 255))
        pygame.draw.circle(surface, color, (int(x), int(y)), 6)
        if InventoryHelper.total(unit.cargo):
            pygame.draw.circle(surface, (90, 90, 90), (int(x), int(y)), 3)
