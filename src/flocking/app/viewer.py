"""Interactive flocking window.

Controls:
    - Mouse move: set the flock destination
    - R: respawn the flock
    - ESC / window close: quit
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

import pygame

from ..config import AppConfig
from ..flock import Flock
from ..rng import DeterministicRng
from ..spawn import populate_random

logger = logging.getLogger(__name__)


class FlockViewer:
    """Drives a flock once per frame and draws it as filled circles."""

    def __init__(self, config: AppConfig, flock: Optional[Flock] = None, rng: Optional[DeterministicRng] = None):
        self.config = config
        self.rng = rng if rng is not None else DeterministicRng(config.seed)
        self.flock = flock if flock is not None else Flock(config.flock, self.rng)
        self.running = True
        if flock is None:
            self.respawn()

    def respawn(self) -> None:
        population = self.config.population
        self.flock.clear()
        populate_random(
            self.flock,
            population.size,
            self.config.window.width,
            self.config.window.height,
            self.rng,
            min_radius=population.min_radius,
            max_radius=population.max_radius,
        )
        logger.info("Spawned flock of %d boids", len(self.flock))

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the viewer should quit, True otherwise.
        """
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.MOUSEMOTION:
            self.flock.set_destination(event.pos)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key == pygame.K_r:
                self.respawn()
        return True

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(self.config.window.background)
        for boid in self.flock.boids:
            pygame.draw.circle(surface, boid.color, (boid.position.x, boid.position.y), boid.radius)

    def step(self, surface: pygame.Surface) -> None:
        self.flock.update()
        self.draw(surface)

    def run(self) -> None:
        window = self.config.window
        pygame.init()
        screen = pygame.display.set_mode((window.width, window.height))
        pygame.display.set_caption(window.title)
        clock = pygame.time.Clock()
        try:
            while self.running:
                for event in pygame.event.get():
                    if not self.handle_event(event):
                        self.running = False
                self.step(screen)
                pygame.display.flip()
                clock.tick(window.frame_rate)
        finally:
            pygame.quit()


def main() -> None:
    parser = argparse.ArgumentParser(description="Interactive flocking viewer")
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--population", type=int, default=None, help="Override the number of boids")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    config = AppConfig.from_yaml(args.config) if args.config else AppConfig()
    if args.seed is not None:
        config.seed = args.seed
    if args.population is not None:
        config.population.size = args.population
    FlockViewer(config).run()


if __name__ == "__main__":
    main()
