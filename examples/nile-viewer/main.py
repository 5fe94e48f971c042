"""Nile Viewer - watch stone flow from quarry to pyramid.

Controls:
  Space       Start / Pause
  Left-click  Select a route (click empty ground to clear)
  1-3         Recruit Carrier / Donkey Cart / Barge onto the selected route
  O           Ask the High Priest for advice
  Escape      Quit

Run:
    pip install -e .[viewer]
    python examples/nile-viewer/main.py --seed 42
"""
from __future__ import annotations

import argparse
import logging

import pygame

from caravan import Simulation, nile_delta
from caravan.advisor import AdvisorConfig, Oracle

from ui.constants import FPS, GRID_H, GRID_W, RECRUIT_KEYS, SCREEN_H, SCREEN_W
from ui.renderer import draw_buildings, draw_routes, draw_terrain, draw_units, pick_route
from ui.sidebar import draw_sidebar


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Nile Viewer - caravan visual demo")
    p.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    p.add_argument("--log-level", default="INFO")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level)

    sim = Simulation(nile_delta(args.seed), seed=args.seed)
    oracle = Oracle.from_config(AdvisorConfig.from_env())

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Pharaoh's Architect - caravan")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 13)
    status = ""

    running = True
    while running:
        clock.tick(FPS)
        # Host frame callback: pygame ticks in ms drive the simulation clock.
        sim.frame(float(pygame.time.get_ticks()))

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    sim.toggle_run()
                elif event.key == pygame.K_o:
                    oracle.request(sim.snapshot)
                elif event.key in (pygame.K_1, pygame.K_2, pygame.K_3):
                    route_id = sim.snapshot.selected_route
                    if route_id is not None:
                        kind = RECRUIT_KEYS[event.key - pygame.K_1]
                        if sim.spawn_unit(kind, route_id):
                            status = f"Recruited {kind.value} on {route_id}"
                        else:
                            status = "Unit cap reached"
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if event.pos[0] < GRID_W and event.pos[1] < GRID_H:
                    sim.select_route(pick_route(sim.snapshot, event.pos))

        oracle.poll()
        session = sim.snapshot

        screen.fill((20, 20, 30))
        draw_terrain(screen, session)
        draw_routes(screen, session)
        draw_buildings(screen, session, font)
        draw_units(screen, session)
        draw_sidebar(screen, session, oracle.message, oracle.loading, font)
        if status:
            screen.blit(font.render(status, True, (220, 220, 220)), (8, GRID_H + 8))
        pygame.display.flip()

    oracle.shutdown()
    pygame.quit()


if __name__ == "__main__":
    main()
