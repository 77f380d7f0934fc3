from __future__ import annotations

import argparse
from typing import Dict, List, Optional

import pygame

from blockfall.game import Action, GameConfig, GameDriver
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CCW,
}


def action_for_key(key: int, mod: int = 0) -> Optional[Action]:
    if key == pygame.K_r:
        return Action.ROTATE_CW if mod & pygame.KMOD_SHIFT else Action.ROTATE_CCW
    return KEY_TO_ACTION.get(key)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Blockfall with the keyboard")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--gravity-ms", type=int, default=1000)
    p.add_argument("--cell-size", type=int, default=32)
    p.add_argument("--fps", type=int, default=60)
    return p


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    pygame.init()
    try:
        clock = pygame.time.Clock()
        config = GameConfig(random_seed=args.seed)
        driver = GameDriver(config=config, gravity_interval_ms=args.gravity_ms)
        renderer = Renderer(cell_size=args.cell_size)

        screen = pygame.display.set_mode(renderer.window_size(config.width, config.height))
        pygame.display.set_caption("Blockfall")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        driver.restart()
                    else:
                        action = action_for_key(event.key, event.mod)
                        if action is not None:
                            driver.push(action)

            elapsed = clock.tick(args.fps)
            renderer.draw(screen, driver.advance(elapsed))
            pygame.display.flip()
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
