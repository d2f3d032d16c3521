from __future__ import annotations

import logging

from .flock import Flock
from .rng import DeterministicRng

logger = logging.getLogger(__name__)


def random_color(rng: DeterministicRng) -> tuple[int, int, int]:
    return (rng.next_int(0, 255), rng.next_int(0, 255), rng.next_int(0, 255))


def populate_random(
    flock: Flock,
    count: int,
    width: int,
    height: int,
    rng: DeterministicRng,
    min_radius: int = 2,
    max_radius: int = 8,
) -> None:
    """Add ``count`` boids at whole-pixel positions inside a ``width`` x ``height`` area.

    Radii are drawn from ``[min_radius, max_radius)`` and colors per channel
    from ``[0, 255)``.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Spawn area must be non-empty, got {width}x{height}")
    if min_radius <= 0 or max_radius <= min_radius:
        raise ValueError(f"Radius range [{min_radius}, {max_radius}) is invalid")

    for _ in range(count):
        x = rng.next_int(0, width)
        y = rng.next_int(0, height)
        radius = rng.next_int(min_radius, max_radius)
        flock.add_boid(x, y, radius, random_color(rng))
    logger.debug("Spawned %d boids in %dx%d", count, width, height)
